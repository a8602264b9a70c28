"""Tooltip content, registry and placement."""
from __future__ import annotations

from locust_tui.tooltip.content import TooltipContent, TooltipRegistry, TooltipStyle
from locust_tui.tooltip.positioning import (
    ArrowDirection,
    PositionResult,
    TooltipPositioner,
    TooltipSide,
    side_preference,
)

__all__ = [
    "ArrowDirection",
    "PositionResult",
    "TooltipContent",
    "TooltipPositioner",
    "TooltipRegistry",
    "TooltipSide",
    "TooltipStyle",
    "side_preference",
]
