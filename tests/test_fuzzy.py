"""Tests for fuzzy matching."""

import pytest

from locust_tui.config import FuzzyConfig
from locust_tui.fuzzy import FuzzyMatch, FuzzyMatcher


@pytest.fixture
def matcher() -> FuzzyMatcher:
    return FuzzyMatcher()


class TestScore:
    """Tests for FuzzyMatcher.score."""

    def test_empty_query_matches_everything(self, matcher: FuzzyMatcher) -> None:
        """An empty query scores zero with no positions."""
        assert matcher.score("", "anything") == (0.0, [])

    def test_empty_text_never_matches(self, matcher: FuzzyMatcher) -> None:
        """Nothing to match against."""
        assert matcher.score("a", "") is None

    def test_query_longer_than_text(self, matcher: FuzzyMatcher) -> None:
        """A longer query cannot be a subsequence."""
        assert matcher.score("abcd", "abc") is None

    def test_subsequence_required(self, matcher: FuzzyMatcher) -> None:
        """Characters must appear in order."""
        assert matcher.score("te", "best") is None
        assert matcher.score("ts", "best") is None
        assert matcher.score("bt", "best") is not None

    def test_contiguous_prefix_score(self, matcher: FuzzyMatcher) -> None:
        """'te' in 'test': 2 matched + 8 first + 2.5 early + 10 consecutive."""
        score, positions = matcher.score("te", "test")

        assert score == pytest.approx(22.5)
        assert positions == [0, 1]

    def test_gap_penalty(self, matcher: FuzzyMatcher) -> None:
        """'te' in 'the end': the one-cell gap costs 0.1."""
        score, positions = matcher.score("te", "the end")

        assert score == pytest.approx(12.4)
        assert positions == [0, 2]

    def test_consecutive_beats_scattered(self, matcher: FuzzyMatcher) -> None:
        """A contiguous run outranks the same letters spread out."""
        tight, _ = matcher.score("abc", "xxabcxxxxxxx")
        loose, _ = matcher.score("abc", "xxaxxbxxcxxx")

        assert tight > loose

    def test_case_insensitive_by_default(self, matcher: FuzzyMatcher) -> None:
        """Upper and lower case match each other."""
        assert matcher.score("fb", "FooBar") is not None
        assert matcher.score("FB", "foobar") is not None

    def test_case_sensitive(self) -> None:
        """With case_sensitive the case must agree."""
        matcher = FuzzyMatcher(FuzzyConfig(case_sensitive=True))

        assert matcher.score("fb", "FooBar") is None
        assert matcher.score("FB", "FooBar") is not None

    def test_multi_code_point_lowercase_stays_one_character(self, matcher: FuzzyMatcher) -> None:
        """"İ" folds to two code points and only matches itself, not "i"."""
        assert matcher.score("i", "İstanbul") is None
        assert matcher.score("İ", "İstanbul")[1] == [0]
        assert matcher.score("st", "İstanbul")[1] == [2, 3]

    def test_positions_are_byte_offsets(self, matcher: FuzzyMatcher) -> None:
        """Multi-byte characters shift later positions by their UTF-8 length."""
        _, positions = matcher.score("nd", "ñandu")

        assert positions == [3, 4]

    def test_score_never_negative(self) -> None:
        """A huge gap penalty is floored at zero."""
        matcher = FuzzyMatcher(FuzzyConfig(gap_penalty=100.0))
        score, _ = matcher.score("az", "abcdefghijklmnopqrstuvwxyz")

        assert score == 0.0

    def test_custom_weights(self) -> None:
        """Weights come from the config."""
        matcher = FuzzyMatcher(
            FuzzyConfig(first_char_bonus=0.0, consecutive_bonus=0.0, word_boundary_bonus=0.0)
        )
        score, _ = matcher.score("ab", "abcd")

        assert score == pytest.approx(2.0)


class TestFindMatches:
    """Tests for FuzzyMatcher.find_matches."""

    def test_ranked_best_first(self, matcher: FuzzyMatcher) -> None:
        """Non-matches are dropped and the rest sorted by score."""
        matches = matcher.find_matches("te", ["best", "the end", "test"])

        assert [m.text for m in matches] == ["test", "the end"]
        assert [m.index for m in matches] == [2, 1]

    def test_ties_keep_candidate_order(self, matcher: FuzzyMatcher) -> None:
        """Equal scores stay in input order."""
        matches = matcher.find_matches("a", ["ab", "ac", "ad"])

        assert [m.index for m in matches] == [0, 1, 2]

    def test_no_candidates(self, matcher: FuzzyMatcher) -> None:
        """An empty candidate list gives no matches."""
        assert matcher.find_matches("a", []) == []

    def test_every_match_is_a_subsequence(self, matcher: FuzzyMatcher) -> None:
        """Returned positions spell the query in order."""
        candidates = ["open file", "close tab", "save all", "toggle sidebar", "find in files"]

        for match in matcher.find_matches("fi", candidates):
            chars = [match.text[i] for i in match.char_positions()]
            assert "".join(chars).lower() == "fi"
            assert match.char_positions() == sorted(match.char_positions())


class TestFuzzyMatch:
    """Tests for FuzzyMatch."""

    def test_char_positions_from_bytes(self) -> None:
        """Byte offsets convert back to str indices."""
        match = FuzzyMatch(index=0, score=1.0, positions=[3, 4], text="ñandu")

        assert match.char_positions() == [2, 3]
