"""Tests for the approximate word matcher."""

import threading
import time

import pytest

from cairn.word_matcher import (
    MatchCandidate,
    ReferenceVocabulary,
    VocabularyUnavailableError,
    WordMatcher,
    find_best_match,
    levenshtein,
)


def _matcher(words):
    return WordMatcher(ReferenceVocabulary(lambda: list(words)))


class TestLevenshtein:
    """Edit distance properties"""

    def test_known_distances(self):
        assert levenshtein("kitten", "sitting") == 3
        assert levenshtein("absord", "absorb") == 1
        assert levenshtein("absord", "abhor") == 2
        assert levenshtein("", "abc") == 3
        assert levenshtein("abc", "") == 3

    def test_identity(self):
        for word in ["", "a", "absorb", "etymology"]:
            assert levenshtein(word, word) == 0

    def test_symmetric(self):
        pairs = [("flaw", "lawn"), ("gumbo", "gambol"), ("a", "abc"), ("book", "back")]
        for a, b in pairs:
            assert levenshtein(a, b) == levenshtein(b, a)

    def test_triangle_inequality(self):
        words = ["absorb", "absord", "abhor", "adsorb", "orb"]
        for a in words:
            for b in words:
                for c in words:
                    assert levenshtein(a, c) <= levenshtein(a, b) + levenshtein(b, c)


class TestFindBestMatch:
    """The search over an explicit word list"""

    def test_lower_distance_wins(self):
        match = find_best_match("absord", ["abhor", "absorb"], 3)
        assert match == MatchCandidate(word="absorb", distance=1)

    def test_same_length_breaks_tie(self):
        # "abcdef" and "abxy" are both distance 2 from "abcd"
        assert find_best_match("abcd", ["abcdef", "abxy"], 3).word == "abxy"
        assert find_best_match("abcd", ["abxy", "abcdef"], 3).word == "abxy"

    def test_first_same_length_candidate_kept(self):
        assert find_best_match("abcd", ["abxy", "abyx"], 3).word == "abxy"

    def test_exact_match_is_distance_zero(self):
        assert find_best_match("Absorb", ["absord", "ABSORB"], 3) == MatchCandidate("absorb", 0)

    def test_first_character_filter(self):
        assert find_best_match("bsorb", ["absorb"], 3) is None

    def test_length_filter(self):
        # distance 3 is within bound, but the length differs by 3
        assert find_best_match("ab", ["abcde"], 3) is None

    def test_nothing_within_distance(self):
        assert find_best_match("zzzz", ["zaaaaa", "zebra"], 3) is None

    def test_distance_bound_respected(self):
        assert find_best_match("absxyz", ["absorb"], 2) is None
        assert find_best_match("absxyz", ["absorb"], 3).word == "absorb"

    def test_single_character_queries(self):
        assert find_best_match("a", ["a", "ab"], 3).word == "a"
        assert find_best_match("x", ["xy"], 3).word == "xy"

    def test_empty_query(self):
        assert find_best_match("   ", ["absorb"], 3) is None


class TestWordMatcher:
    """Suggestions through the load-once vocabulary"""

    def test_suggests_correction(self):
        assert _matcher(["abhor", "absorb", "apple"]).suggest("absord", 3) == "absorb"

    def test_exact_match_case_insensitive(self):
        assert _matcher(["Absorb"]).suggest("ABSORB") == "absorb"

    def test_no_candidate(self):
        assert _matcher(["apple", "banana"]).suggest("qwerty") is None

    def test_empty_query(self):
        assert _matcher(["absorb"]).suggest("  ") is None

    def test_empty_vocabulary(self):
        assert _matcher([]).suggest("absorb") is None

    def test_load_failure_means_no_suggestion(self):
        def broken_loader():
            raise ConnectionError("offline")

        matcher = WordMatcher(ReferenceVocabulary(broken_loader))
        assert matcher.suggest("absord") is None


class TestReferenceVocabulary:
    """Load-once semantics"""

    def test_normalizes_words(self):
        vocabulary = ReferenceVocabulary(lambda: [" Apple ", "", "BANANA\n"])
        assert vocabulary.get_words() == ("apple", "banana")

    def test_loader_runs_once(self):
        calls = []

        def loader():
            calls.append(1)
            return ["absorb"]

        vocabulary = ReferenceVocabulary(loader)
        assert not vocabulary.is_loaded
        vocabulary.get_words()
        vocabulary.get_words()
        assert vocabulary.is_loaded
        assert len(calls) == 1

    def test_failure_is_cached(self):
        calls = []

        def loader():
            calls.append(1)
            raise ConnectionError("offline")

        vocabulary = ReferenceVocabulary(loader)
        with pytest.raises(VocabularyUnavailableError, match="offline"):
            vocabulary.get_words()
        with pytest.raises(VocabularyUnavailableError, match="offline"):
            vocabulary.get_words()
        assert len(calls) == 1

    def test_concurrent_first_callers_share_one_load(self):
        calls = []

        def slow_loader():
            calls.append(1)
            time.sleep(0.05)
            return ["absorb", "abhor"]

        matcher = WordMatcher(ReferenceVocabulary(slow_loader))
        results = []
        barrier = threading.Barrier(8)

        def worker():
            barrier.wait()
            results.append(matcher.suggest("absord"))

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(calls) == 1
        assert results == ["absorb"] * 8
