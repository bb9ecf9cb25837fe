#!/usr/bin/env python3
"""
SQLite-backed history of looked-up words, used for highlighting
"""

import logging
import sqlite3
from pathlib import Path
from typing import Set

logger = logging.getLogger(__name__)


class WordHistory:
    """Records every headword the user looked up"""

    def __init__(self, db_file: str):
        self.db_file = str(Path(db_file).expanduser())

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_file)
        conn.execute("""
            CREATE TABLE IF NOT EXISTS dict_words (
                word TEXT PRIMARY KEY,
                created_at TEXT
            )
        """)
        return conn

    def save_word(self, word: str):
        """Store a word; re-saving refreshes its timestamp so it counts as recent again"""
        word = (word or '').strip().lower()
        if not word:
            return

        try:
            conn = self._connect()
            try:
                with conn:
                    conn.execute(
                        "INSERT OR REPLACE INTO dict_words (word, created_at) "
                        "VALUES (?, strftime('%Y-%m-%d %H:%M:%f', 'now'))",
                        (word,),
                    )
            finally:
                conn.close()
        except sqlite3.Error as e:
            logger.warning(f"Could not save '{word}' to history: {e}")

    def load_recent_words(self, n: int) -> Set[str]:
        """The ``n`` most recently looked-up words"""
        if n <= 0:
            return set()
        return self._query(
            "SELECT word FROM dict_words ORDER BY created_at DESC, rowid DESC LIMIT ?",
            (n,),
        )

    def _query(self, sql: str, params: tuple) -> Set[str]:
        try:
            conn = self._connect()
            try:
                rows = conn.execute(sql, params).fetchall()
            finally:
                conn.close()
        except sqlite3.Error as e:
            logger.warning(f"Could not read word history: {e}")
            return set()

        return {row[0].lower() for row in rows if row[0]}
