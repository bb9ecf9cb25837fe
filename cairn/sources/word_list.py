#!/usr/bin/env python3
"""
Reference word list download (one word per line, e.g. dwyl/english-words)
"""

import logging
from typing import List

import requests

logger = logging.getLogger(__name__)


def fetch_vocabulary(url: str, timeout: float = 30.0,
                     user_agent: str = 'cairn/1.0 (CLI dictionary tool)') -> List[str]:
    """Download the word list and return lowercased, non-empty words in file order"""
    logger.info(f"Fetching reference word list from {url}")

    with requests.Session() as session:
        session.headers.update({'User-Agent': user_agent})
        response = session.get(url, timeout=timeout)
        response.raise_for_status()

    words = []
    for line in response.text.splitlines():
        word = line.strip().lower()
        if word:
            words.append(word)

    logger.debug(f"Word list contained {len(words)} entries")
    return words
