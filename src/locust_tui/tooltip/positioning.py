"""
Edge-aware tooltip placement.

The positioner tries each side of the anchor in preference order and takes
the first placement that fits on screen.  When nothing fits it still
returns the preferred placement, since a tooltip running past the edge is
better than no tooltip.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from locust_tui.config import TooltipConfig
from locust_tui.geometry import Rect
from locust_tui.logging import get_logger

logger = get_logger("tooltip")


class TooltipSide(str, Enum):
    """Side of the anchor the tooltip is placed on."""

    RIGHT = "right"
    LEFT = "left"
    TOP = "top"
    BOTTOM = "bottom"

    @property
    def arrow(self) -> ArrowDirection:
        """The arrow points back at the anchor, i.e. away from this side."""
        return _ARROWS[self]


class ArrowDirection(str, Enum):
    """Direction of the arrow glyph drawn on the tooltip border."""

    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"

    @property
    def glyph(self) -> str:
        return _GLYPHS[self]


_ARROWS: dict[TooltipSide, ArrowDirection] = {
    TooltipSide.RIGHT: ArrowDirection.LEFT,
    TooltipSide.LEFT: ArrowDirection.RIGHT,
    TooltipSide.BOTTOM: ArrowDirection.UP,
    TooltipSide.TOP: ArrowDirection.DOWN,
}

_GLYPHS: dict[ArrowDirection, str] = {
    ArrowDirection.LEFT: "◂",
    ArrowDirection.RIGHT: "▸",
    ArrowDirection.UP: "▴",
    ArrowDirection.DOWN: "▾",
}


@dataclass(frozen=True)
class PositionResult:
    """
    A resolved tooltip placement.

    Attributes
    ----------
    rect:
        Where to draw the tooltip, border and padding included.
    position:
        Side of the anchor actually used.
    arrow_direction:
        Direction the arrow glyph points (towards the anchor).
    was_flipped:
        ``True`` when the first preferred side did not fit.
    """

    rect: Rect
    position: TooltipSide
    arrow_direction: ArrowDirection
    was_flipped: bool


def side_preference(prefer_right: bool, prefer_bottom: bool) -> list[TooltipSide]:
    """Candidate sides in the order they are tried."""
    if prefer_right:
        return [TooltipSide.RIGHT, TooltipSide.LEFT, TooltipSide.BOTTOM, TooltipSide.TOP]
    if prefer_bottom:
        return [TooltipSide.BOTTOM, TooltipSide.TOP, TooltipSide.RIGHT, TooltipSide.LEFT]
    return [TooltipSide.LEFT, TooltipSide.RIGHT, TooltipSide.TOP, TooltipSide.BOTTOM]


class TooltipPositioner:
    """
    Computes tooltip rectangles relative to an anchor.

    Parameters
    ----------
    config:
        Offsets, padding, border and side preferences.  Only the placement
        fields of :class:`~locust_tui.config.TooltipConfig` are used.
    """

    def __init__(self, config: TooltipConfig | None = None) -> None:
        self.config = config or TooltipConfig()
        self._sides = side_preference(self.config.prefer_right, self.config.prefer_bottom)

    def tooltip_size(self, content_width: int, content_height: int) -> tuple[int, int]:
        """Outer size for the given content: padding on both sides, plus the border."""
        border = 2 if self.config.show_border else 0
        padding = self.config.padding * 2
        return (content_width + padding + border, content_height + padding + border)

    def calculate(
        self,
        anchor: Rect,
        content_width: int,
        content_height: int,
        screen: Rect,
    ) -> PositionResult:
        """
        Place a tooltip of the given content size next to *anchor*.

        Never fails: if no side fits inside *screen*, the first preferred
        side is used unclipped.
        """
        width, height = self.tooltip_size(content_width, content_height)
        preferred = self._sides[0]

        for side in self._sides:
            rect = self._side_rect(side, anchor, width, height)
            if rect is not None and rect.fits_within(screen):
                if side is not preferred:
                    logger.debug("Tooltip flipped from %s to %s", preferred.value, side.value)
                return PositionResult(
                    rect=rect,
                    position=side,
                    arrow_direction=side.arrow,
                    was_flipped=side is not preferred,
                )

        logger.debug("No tooltip side fits %s on %s, using %s", anchor, screen, preferred.value)
        rect = self._side_rect(preferred, anchor, width, height) or Rect(0, 0, width, height)
        return PositionResult(
            rect=rect,
            position=preferred,
            arrow_direction=preferred.arrow,
            was_flipped=False,
        )

    def _side_rect(self, side: TooltipSide, anchor: Rect, width: int, height: int) -> Rect | None:
        """Rectangle for *side*, or ``None`` if its origin falls off the cell grid."""
        offset_x = self.config.offset_x
        offset_y = self.config.offset_y

        if side is TooltipSide.RIGHT:
            x, y = anchor.right + offset_x, anchor.y
        elif side is TooltipSide.LEFT:
            x, y = anchor.x - width, anchor.y
            if x < 0:
                return None
            x += offset_x
        elif side is TooltipSide.BOTTOM:
            x, y = anchor.x, anchor.bottom + offset_y
        else:
            x, y = anchor.x, anchor.y - height
            if y < 0:
                return None
            y += offset_y

        if x < 0 or y < 0:
            return None
        return Rect(x, y, width, height)
