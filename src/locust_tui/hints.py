"""
Vimium-style hint generation and matching.

:class:`HintGenerator` gives every target a short key sequence, shortest
sequences first for the most important targets.  :class:`HintMatcher`
narrows the active hint set as the user types until one target remains.

Example
-------
>>> generator = HintGenerator("as")
>>> targets = [NavTarget(i, Rect(0, i * 2, 10, 1)) for i in (1, 2, 3)]
>>> [h.text for h in generator.generate(targets)]
['a', 's', 'aa']
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from locust_tui.config import NavConfig
from locust_tui.logging import get_logger
from locust_tui.targets import NavTarget

logger = get_logger("hints")


# ---------------------------------------------------------------------------
# Hint model
# ---------------------------------------------------------------------------


@dataclass
class Hint:
    """
    A key sequence bound to one target.

    Attributes
    ----------
    text:
        The full sequence (e.g. ``"as"``).
    target_id:
        Id of the target the hint selects.
    matched_chars:
        Leading characters of *text* confirmed by the current input.
    """

    text: str
    target_id: int
    matched_chars: int = 0

    @property
    def is_complete(self) -> bool:
        """``True`` once every character has been typed."""
        return self.matched_chars == len(self.text)

    @property
    def matched(self) -> str:
        return self.text[: self.matched_chars]

    @property
    def unmatched(self) -> str:
        return self.text[self.matched_chars :]

    def matches_input(self, input: str) -> bool:
        """Whether the hint is still reachable from *input*."""
        return self.text.startswith(input)

    def update_match(self, input: str) -> None:
        """Set :attr:`matched_chars` to the common prefix length with *input*."""
        count = 0
        for typed, expected in zip(input, self.text):
            if typed != expected:
                break
            count += 1
        self.matched_chars = count


# ---------------------------------------------------------------------------
# Generation
# ---------------------------------------------------------------------------


def _hint_order(target: NavTarget) -> tuple[int, int, int]:
    # Priority descending, then top-to-bottom, then left-to-right
    return (-int(target.priority), target.rect.y, target.rect.x)


def hint_string(index: int, charset: str) -> str:
    """
    Encode *index* in bijective base-``len(charset)``.

    Index 0 maps to the first character, index ``K`` (the charset size) to
    the first two-character sequence, and so on: the first ``K`` indices get
    one character, the next ``K**2`` two characters.
    """
    size = len(charset)
    digits: list[str] = []
    n = index
    while True:
        digits.append(charset[n % size])
        n //= size
        if n == 0:
            break
        n -= 1
    return "".join(reversed(digits))


def select_hint_targets(
    targets: Iterable[NavTarget],
    min_area: int = 1,
    max_hints: int = 0,
) -> list[NavTarget]:
    """
    Choose which targets get hints, in assignment order.

    Targets with an area below *min_area* are dropped, the rest are ordered
    by priority, row and column, and only the first *max_hints* are kept
    (``0`` keeps all).
    """
    eligible = [t for t in targets if t.rect.area >= min_area]
    eligible.sort(key=_hint_order)
    if max_hints > 0:
        del eligible[max_hints:]
    return eligible


class HintGenerator:
    """
    Assigns hint strings to targets.

    Parameters
    ----------
    charset:
        Characters hints are built from, in order of preference.  Must be
        non-empty and free of repeats.

    Raises
    ------
    ValueError
        If *charset* is empty or repeats a character.
    """

    def __init__(self, charset: str) -> None:
        if not charset:
            raise ValueError("Charset cannot be empty")
        if len(set(charset)) != len(charset):
            raise ValueError(f"Charset has duplicate characters: {charset!r}")
        self._charset = charset

    @classmethod
    def from_config(cls, config: NavConfig) -> HintGenerator:
        return cls(config.hint_charset)

    @property
    def charset(self) -> str:
        return self._charset

    def generate(self, targets: Iterable[NavTarget]) -> list[Hint]:
        """
        Generate hints for *targets*.

        The highest priority targets, then the topmost, then the leftmost,
        receive the shortest hints.  Hints are returned in that order.
        """
        ordered = sorted(targets, key=_hint_order)
        hints = [
            Hint(hint_string(index, self._charset), target.id)
            for index, target in enumerate(ordered)
        ]
        logger.debug("Generated %d hints from charset %r", len(hints), self._charset)
        return hints

    def generate_for(self, targets: Iterable[NavTarget], config: NavConfig) -> list[Hint]:
        """Apply the config's area and count limits, then :meth:`generate`."""
        chosen = select_hint_targets(targets, config.min_target_area, config.max_hints)
        return self.generate(chosen)


# ---------------------------------------------------------------------------
# Matching
# ---------------------------------------------------------------------------


class HintMatcher:
    """
    Tracks typed input against the active hint set.

    Candidates are the hints whose text still starts with the input.  A
    target is selected once exactly one candidate remains and it has been
    typed in full.  When a fully typed hint is also the prefix of a longer
    one (``"a"`` and ``"aa"``), typing continues to disambiguate and
    :meth:`confirm` picks the exact match.
    """

    def __init__(self) -> None:
        self._input: str = ""
        self._hints: list[Hint] = []
        self._by_target: dict[int, int] = {}

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    def set_hints(self, hints: list[Hint]) -> None:
        """
        Replace the active hint set and reset the input.

        Raises
        ------
        ValueError
            If two hints share the same text.
        """
        seen: set[str] = set()
        for hint in hints:
            if hint.text in seen:
                raise ValueError(f"Duplicate hint text: {hint.text!r}")
            seen.add(hint.text)

        self._hints = list(hints)
        self._by_target = {hint.target_id: idx for idx, hint in enumerate(self._hints)}
        self._input = ""
        self._update_matches()

    def clear(self) -> None:
        """Drop all hints and input."""
        self._hints = []
        self._by_target = {}
        self._input = ""

    @property
    def hints(self) -> list[Hint]:
        return list(self._hints)

    @property
    def input(self) -> str:
        return self._input

    @property
    def is_active(self) -> bool:
        return bool(self._hints)

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def push_char(self, char: str) -> int | None:
        """
        Append *char* to the input.

        Returns the selected target id, or ``None`` while the input is
        still ambiguous or matches nothing.
        """
        if not self._hints:
            return None
        self._input += char
        self._update_matches()
        return self._unique_selection()

    def pop_char(self) -> None:
        """Remove the last typed character. Never selects."""
        if not self._input:
            return
        self._input = self._input[:-1]
        self._update_matches()

    def confirm(self) -> int | None:
        """Select the hint whose text equals the input exactly, if any."""
        if not self._input:
            return None
        for hint in self._hints:
            if hint.text == self._input:
                logger.debug("Confirmed hint %r -> target %d", hint.text, hint.target_id)
                return hint.target_id
        return None

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def matching_hints(self) -> list[Hint]:
        """Hints still reachable from the current input."""
        return [h for h in self._hints if h.matches_input(self._input)]

    def non_matching_hints(self) -> list[Hint]:
        """Hints ruled out by the current input (rendered dimmed)."""
        return [h for h in self._hints if not h.matches_input(self._input)]

    def hint_for_target(self, target_id: int) -> Hint | None:
        idx = self._by_target.get(target_id)
        if idx is None:
            return None
        return self._hints[idx]

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _update_matches(self) -> None:
        for hint in self._hints:
            hint.update_match(self._input)

    def _unique_selection(self) -> int | None:
        candidates = self.matching_hints()
        complete = [h for h in candidates if h.is_complete]

        if len(complete) > 1:
            # Unreachable while hint texts are unique; never guess between them.
            logger.warning(
                "Ambiguous hint input %r completes %d hints", self._input, len(complete)
            )
            return None

        if len(candidates) == 1 and complete:
            hint = complete[0]
            logger.debug("Selected hint %r -> target %d", hint.text, hint.target_id)
            return hint.target_id
        return None
