"""
Fuzzy subsequence matching for command search.

A query matches a text when its characters appear in the text in order,
not necessarily next to each other.  Matches are scored so that tight,
early, contiguous matches rank first, in the spirit of fzf/skim.

Example
-------
>>> matcher = FuzzyMatcher()
>>> [m.text for m in matcher.find_matches("te", ["best", "test", "the end"])]
['test', 'the end']
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from locust_tui.config import FuzzyConfig


@dataclass(frozen=True)
class FuzzyMatch:
    """
    A scored candidate.

    Attributes
    ----------
    index:
        Position of the candidate in the list passed to
        :meth:`FuzzyMatcher.find_matches`.
    score:
        Match quality, higher is better, never negative.
    positions:
        UTF-8 byte offsets of the matched characters in *text*.
    text:
        The candidate text.
    """

    index: int
    score: float
    positions: list[int] = field(default_factory=list)
    text: str = ""

    def char_positions(self) -> list[int]:
        """Matched positions as ``str`` indices into :attr:`text`."""
        offsets = _byte_offsets(self.text)
        lookup = {offset: i for i, offset in enumerate(offsets)}
        return [lookup[p] for p in self.positions if p in lookup]


def _byte_offsets(text: str) -> list[int]:
    """UTF-8 byte offset of every character, plus the total length."""
    offsets = [0]
    for char in text:
        offsets.append(offsets[-1] + len(char.encode("utf-8")))
    return offsets


class FuzzyMatcher:
    """
    Scores queries against candidate strings.

    Parameters
    ----------
    config:
        Scoring weights and case sensitivity.  Defaults to
        :class:`~locust_tui.config.FuzzyConfig`.
    """

    def __init__(self, config: FuzzyConfig | None = None) -> None:
        self.config = config or FuzzyConfig()

    def _fold(self, text: str) -> list[str]:
        # Fold per character so str indices stay aligned with the input text.
        # A character whose lowercase is several code points ("İ" -> "i̇")
        # stays one element and only matches a query character folding the same.
        if self.config.case_sensitive:
            return list(text)
        return [c.lower() for c in text]

    def score(self, query: str, text: str) -> tuple[float, list[int]] | None:
        """
        Score *query* against *text*.

        Returns ``(score, byte_positions)`` when every query character is
        found in order, ``None`` otherwise.  An empty query always matches
        with ``(0.0, [])``.
        """
        if not query:
            return (0.0, [])
        if not text:
            return None

        query_chars = self._fold(query)
        text_chars = self._fold(text)
        if len(query_chars) > len(text_chars):
            return None

        positions: list[int] = []
        cursor = 0
        for qc in query_chars:
            try:
                found = text_chars.index(qc, cursor)
            except ValueError:
                return None
            positions.append(found)
            cursor = found + 1

        score = self._calculate_score(positions, len(text_chars))
        offsets = _byte_offsets(text)
        return (score, [offsets[p] for p in positions])

    def find_matches(self, query: str, candidates: Sequence[str]) -> list[FuzzyMatch]:
        """
        Score every candidate and rank the matches, best first.

        Equal scores keep candidate order.
        """
        matches: list[FuzzyMatch] = []
        for index, text in enumerate(candidates):
            result = self.score(query, text)
            if result is None:
                continue
            score, positions = result
            matches.append(FuzzyMatch(index=index, score=score, positions=positions, text=text))

        matches.sort(key=lambda m: m.score, reverse=True)
        return matches

    def _calculate_score(self, positions: list[int], text_len: int) -> float:
        """
        Scoring factors:

        * one point per matched character
        * first-character bonus when the first match is at index 0
        * consecutive bonus for each match right after the previous one
        * half the word-boundary bonus for each match in the first quarter
          of the text (an early-position stand-in for word boundaries)
        * gap penalty proportional to how far the matched span exceeds a
          contiguous run
        """
        cfg = self.config
        score = float(len(positions))

        if positions[0] == 0:
            score += cfg.first_char_bonus

        early_limit = text_len // 4
        previous: int | None = None
        for pos in positions:
            if previous is not None and pos == previous + 1:
                score += cfg.consecutive_bonus
            if pos < early_limit:
                score += cfg.word_boundary_bonus * 0.5
            previous = pos

        if len(positions) > 1:
            span = positions[-1] - positions[0]
            ideal_span = len(positions) - 1
            score -= (span - ideal_span) * cfg.gap_penalty

        return max(score, 0.0)
