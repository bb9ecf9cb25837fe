#!/usr/bin/env python3
"""
Approximate Word Matcher - nearest-word suggestions for unknown lookups

Finds the closest entry in a large reference word list within a bounded
Levenshtein distance. Cheap first-character and length filters run before the
distance computation so a scan over several hundred thousand words stays fast.
"""

import logging
from dataclasses import dataclass
from threading import Lock
from typing import Callable, Optional, Sequence

logger = logging.getLogger(__name__)

DEFAULT_MAX_DISTANCE = 3
MAX_LENGTH_DIFFERENCE = 2


class VocabularyUnavailableError(RuntimeError):
    """Raised when the reference vocabulary could not be loaded"""


@dataclass(frozen=True)
class MatchCandidate:
    """A word considered during the search and its edit distance to the query"""
    word: str
    distance: int


class ReferenceVocabulary:
    """
    Lazily loaded, load-once word list shared by every lookup in the process.

    The loader runs at most once no matter how many threads ask for the words
    at the same time; every caller sees the same word tuple, or the same
    failure, for the rest of the run.
    """

    def __init__(self, loader: Callable[[], Sequence[str]]):
        self._loader = loader
        self._lock = Lock()
        self._loaded = False
        self._words: tuple = ()
        self._error: Optional[BaseException] = None

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    def get_words(self) -> tuple:
        """Return the cached words, loading them on first use"""
        if not self._loaded:
            with self._lock:
                if not self._loaded:
                    self._load()

        if self._error is not None:
            raise VocabularyUnavailableError(str(self._error)) from self._error
        return self._words

    def _load(self):
        try:
            raw_words = self._loader()
            words = []
            for word in raw_words:
                word = word.strip().lower()
                if word:
                    words.append(word)
            self._words = tuple(words)
            logger.info(f"Loaded reference vocabulary: {len(self._words)} words")
        except Exception as e:
            logger.warning(f"Could not load reference vocabulary: {e}")
            self._error = e
        finally:
            self._loaded = True


def levenshtein(a: str, b: str) -> int:
    """Edit distance with unit-cost insertions, deletions and substitutions"""
    if len(a) < len(b):
        a, b = b, a
    if not b:
        return len(a)

    # Rows are sized by the shorter string
    previous = list(range(len(b) + 1))
    current = [0] * (len(b) + 1)

    for i, char_a in enumerate(a, start=1):
        current[0] = i
        for j, char_b in enumerate(b, start=1):
            cost = 0 if char_a == char_b else 1
            current[j] = min(
                current[j - 1] + 1,
                previous[j] + 1,
                previous[j - 1] + cost,
            )
        previous, current = current, previous

    return previous[len(b)]


def find_best_match(query: str, words: Sequence[str],
                    max_distance: int = DEFAULT_MAX_DISTANCE) -> Optional[MatchCandidate]:
    """
    Scan ``words`` in order and return the best candidate within ``max_distance``.

    A candidate replaces the current best when its distance is strictly
    smaller, or when the distances tie and only the candidate has the same
    length as the query. Among equally good same-length candidates the first
    one in ``words`` wins.
    """
    query = query.strip().lower()
    if not query:
        return None

    first_char = query[0]
    query_len = len(query)
    best: Optional[MatchCandidate] = None

    for word in words:
        word = word.lower()
        if word == query:
            return MatchCandidate(word=word, distance=0)

        if not word or word[0] != first_char:
            continue
        if abs(len(word) - query_len) > MAX_LENGTH_DIFFERENCE:
            continue

        distance = levenshtein(query, word)
        if distance > max_distance:
            continue

        if best is None or distance < best.distance:
            best = MatchCandidate(word=word, distance=distance)
        elif (distance == best.distance
              and len(word) == query_len
              and len(best.word) != query_len):
            best = MatchCandidate(word=word, distance=distance)

    return best


class WordMatcher:
    """Suggests corrections for unknown words against a reference vocabulary"""

    def __init__(self, vocabulary: ReferenceVocabulary):
        self.vocabulary = vocabulary

    def suggest(self, query: str, max_distance: int = DEFAULT_MAX_DISTANCE) -> Optional[str]:
        """
        Return the closest vocabulary word, or None.

        A vocabulary that fails to load, or loads empty, means no suggestion
        rather than an error.
        """
        query = (query or '').strip().lower()
        if not query:
            return None

        if not self.vocabulary.is_loaded:
            logger.info("Loading reference vocabulary for the first suggestion")
        try:
            words = self.vocabulary.get_words()
        except VocabularyUnavailableError as e:
            logger.debug(f"No suggestion for '{query}': {e}")
            return None

        if not words:
            return None

        match = find_best_match(query, words, max_distance)
        if match is None:
            logger.debug(f"No vocabulary word within distance {max_distance} of '{query}'")
            return None

        logger.info(f"Suggesting '{match.word}' for '{query}' (distance {match.distance})")
        return match.word


_default_matcher: Optional[WordMatcher] = None
_default_matcher_lock = Lock()


def get_default_matcher() -> WordMatcher:
    """Process-wide matcher backed by the configured word list"""
    global _default_matcher
    if _default_matcher is None:
        with _default_matcher_lock:
            if _default_matcher is None:
                from .config import get_settings
                from .sources.word_list import fetch_vocabulary

                settings = get_settings()
                vocabulary = ReferenceVocabulary(
                    lambda: fetch_vocabulary(
                        settings.word_list_url,
                        timeout=settings.word_list_timeout,
                        user_agent=settings.user_agent,
                    )
                )
                _default_matcher = WordMatcher(vocabulary)
    return _default_matcher


def suggest(query: str, max_distance: int = DEFAULT_MAX_DISTANCE) -> Optional[str]:
    """Convenience function using the process-wide matcher"""
    return get_default_matcher().suggest(query, max_distance)
