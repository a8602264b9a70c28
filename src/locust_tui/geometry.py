"""
Rectangle geometry in terminal character cells.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Rect:
    """
    An axis-aligned rectangle in character cells.

    Edges follow half-open interval semantics: a rectangle starting at ``x``
    with width ``w`` covers the columns ``[x, x + w)``.

    Attributes
    ----------
    x, y:
        Top-left corner.
    width, height:
        Size in cells.
    """

    x: int
    y: int
    width: int
    height: int

    @property
    def right(self) -> int:
        """First column past the right edge."""
        return self.x + self.width

    @property
    def bottom(self) -> int:
        """First row past the bottom edge."""
        return self.y + self.height

    @property
    def area(self) -> int:
        return self.width * self.height

    @property
    def center(self) -> tuple[int, int]:
        """Center cell, rounded towards the top-left on odd sizes."""
        return (self.x + self.width // 2, self.y + self.height // 2)

    def contains(self, x: int, y: int) -> bool:
        """Whether the point lies inside (top-left inclusive, bottom-right exclusive)."""
        return self.x <= x < self.right and self.y <= y < self.bottom

    def intersects(self, other: Rect) -> bool:
        """Whether the two rectangles share at least one cell; touching edges do not count."""
        return (
            self.x < other.right
            and other.x < self.right
            and self.y < other.bottom
            and other.y < self.bottom
        )

    def fits_within(self, bounds: Rect) -> bool:
        """Whether all four edges lie inside *bounds*."""
        return (
            self.x >= bounds.x
            and self.y >= bounds.y
            and self.right <= bounds.right
            and self.bottom <= bounds.bottom
        )

    @classmethod
    def from_tuple(cls, values: tuple[int, int, int, int] | list[int]) -> Rect:
        """Build a rect from an ``(x, y, width, height)`` sequence."""
        x, y, width, height = values
        return cls(int(x), int(y), int(width), int(height))

    def as_tuple(self) -> tuple[int, int, int, int]:
        return (self.x, self.y, self.width, self.height)
