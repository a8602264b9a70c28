"""
Tooltip content and the per-target tooltip registry.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class TooltipStyle(str, Enum):
    """Semantic style; hosts map it to their own colours."""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    SUCCESS = "success"


@dataclass(frozen=True)
class TooltipContent:
    """
    Text shown in a tooltip.

    Attributes
    ----------
    body:
        Main text; may span several lines.
    title:
        Optional heading rendered above the body.
    style:
        Semantic style used by the renderer.
    """

    body: str
    title: str | None = None
    style: TooltipStyle = TooltipStyle.INFO

    def lines(self) -> list[str]:
        """Title (if any) followed by the body lines."""
        body_lines = self.body.splitlines() or [""]
        if self.title is not None:
            return [self.title, *body_lines]
        return body_lines

    def line_count(self) -> int:
        return len(self.lines())

    def max_line_width(self) -> int:
        return max((len(line) for line in self.lines()), default=0)

    def size(self, max_width: int, max_height: int) -> tuple[int, int]:
        """Content ``(width, height)`` clamped to the given maximums."""
        return (min(self.max_line_width(), max_width), min(self.line_count(), max_height))


class TooltipRegistry:
    """Maps target ids to tooltip content."""

    def __init__(self) -> None:
        self._tooltips: dict[int, TooltipContent] = {}

    def register(self, target_id: int, content: TooltipContent) -> None:
        """Attach *content* to a target, replacing any previous content."""
        self._tooltips[target_id] = content

    def get(self, target_id: int) -> TooltipContent | None:
        return self._tooltips.get(target_id)

    def remove(self, target_id: int) -> bool:
        return self._tooltips.pop(target_id, None) is not None

    def contains(self, target_id: int) -> bool:
        return target_id in self._tooltips

    def clear(self) -> None:
        self._tooltips.clear()

    def target_ids(self) -> list[int]:
        return list(self._tooltips)

    def __len__(self) -> int:
        return len(self._tooltips)
