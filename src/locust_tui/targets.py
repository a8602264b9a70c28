"""
Navigation targets and the per-frame target registry.

A host application declares every interactive region it draws as a
:class:`NavTarget`.  The :class:`TargetRegistry` is cleared at the start of
each frame and refilled while the host renders; hint navigation, tooltips
and spatial lookups all read from it.

Example
-------
>>> registry = TargetRegistry()
>>> registry.clear()
>>> registry.register(NavTarget(1, Rect(0, 0, 10, 1)).with_label("Save"))
>>> [t.id for t in registry.at_point(3, 0)]
[1]
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field, replace
from enum import Enum, IntEnum
from typing import ClassVar

from locust_tui.geometry import Rect

# ---------------------------------------------------------------------------
# Target attributes
# ---------------------------------------------------------------------------


class ActionKind(str, Enum):
    """What activating a target does."""

    SELECT = "select"
    ACTIVATE = "activate"
    SCROLL = "scroll"
    NAVIGATE = "navigate"  # Carries a route
    CUSTOM = "custom"  # Carries a host-defined name


@dataclass(frozen=True)
class TargetAction:
    """
    Action bound to a target.

    ``NAVIGATE`` and ``CUSTOM`` carry an *argument* (the route or the custom
    action name); the other kinds never do.  Use the class constants and
    factory methods rather than constructing instances directly.
    """

    kind: ActionKind = ActionKind.ACTIVATE
    argument: str | None = None

    SELECT: ClassVar[TargetAction]
    ACTIVATE: ClassVar[TargetAction]
    SCROLL: ClassVar[TargetAction]

    @classmethod
    def navigate(cls, route: str) -> TargetAction:
        return cls(ActionKind.NAVIGATE, route)

    @classmethod
    def custom(cls, name: str) -> TargetAction:
        return cls(ActionKind.CUSTOM, name)

    def __str__(self) -> str:
        if self.argument is None:
            return self.kind.value
        return f"{self.kind.value}({self.argument})"


TargetAction.SELECT = TargetAction(ActionKind.SELECT)
TargetAction.ACTIVATE = TargetAction(ActionKind.ACTIVATE)
TargetAction.SCROLL = TargetAction(ActionKind.SCROLL)


class TargetPriority(IntEnum):
    """Hint assignment priority; higher values get shorter hints."""

    LOW = 0
    NORMAL = 1
    HIGH = 2
    CRITICAL = 3


class TargetState(str, Enum):
    """Visual/interaction state of a target for the current frame."""

    NORMAL = "normal"
    HIGHLIGHTED = "highlighted"
    SELECTED = "selected"
    DISABLED = "disabled"


# ---------------------------------------------------------------------------
# NavTarget
# ---------------------------------------------------------------------------


@dataclass
class NavTarget:
    """
    A navigable screen region: a list row, table cell, tab or button.

    Attributes
    ----------
    id:
        Identifier, unique within one frame's registry.
    rect:
        Screen area in character cells.
    label:
        Optional human-readable text (used for search and debugging).
    action:
        What the host should do when the target is chosen.
    priority:
        Hint priority; higher priority targets get shorter hints.
    state:
        Current interaction state.
    group:
        Optional group name (e.g. ``"tabs"``) for filtered queries.
    metadata:
        Free-form string mapping owned by the host.
    """

    id: int
    rect: Rect
    label: str | None = None
    action: TargetAction = field(default_factory=lambda: TargetAction.ACTIVATE)
    priority: TargetPriority = TargetPriority.NORMAL
    state: TargetState = TargetState.NORMAL
    group: str | None = None
    metadata: dict[str, str] = field(default_factory=dict)

    # ------------------------------------------------------------------
    # Chained construction (each returns a modified copy)
    # ------------------------------------------------------------------

    def with_label(self, label: str) -> NavTarget:
        return replace(self, label=label)

    def with_action(self, action: TargetAction) -> NavTarget:
        return replace(self, action=action)

    def with_priority(self, priority: TargetPriority) -> NavTarget:
        return replace(self, priority=priority)

    def with_state(self, state: TargetState) -> NavTarget:
        return replace(self, state=state)

    def with_group(self, group: str) -> NavTarget:
        return replace(self, group=group)

    def with_metadata(self, key: str, value: str) -> NavTarget:
        return replace(self, metadata={**self.metadata, key: value})

    # ------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------

    def contains_point(self, x: int, y: int) -> bool:
        return self.rect.contains(x, y)

    def overlaps_rect(self, other: Rect) -> bool:
        return self.rect.intersects(other)

    def center(self) -> tuple[int, int]:
        return self.rect.center

    def area(self) -> int:
        return self.rect.area


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


class TargetRegistry:
    """
    Targets discovered during one frame.

    The host calls :meth:`clear` before drawing and :meth:`register` for each
    interactive region it draws.  Nothing persists across frames: a host that
    wants to keep a target highlighted re-registers it with that state.

    Not thread-safe; the registry is owned by the host's frame loop and
    passed into each query.
    """

    def __init__(self) -> None:
        self._targets: list[NavTarget] = []
        self._index: dict[int, int] = {}

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def clear(self) -> None:
        """Drop every target; called once per frame before re-registration."""
        self._targets.clear()
        self._index.clear()

    def register(self, target: NavTarget) -> None:
        """
        Add *target*, replacing any existing target with the same id.

        A replacement keeps the original target's position in iteration
        order.
        """
        position = self._index.get(target.id)
        if position is not None:
            self._targets[position] = target
            return
        self._index[target.id] = len(self._targets)
        self._targets.append(target)

    def remove(self, target_id: int) -> bool:
        """Remove a target by id. Returns ``True`` if it was present."""
        position = self._index.get(target_id)
        if position is None:
            return False
        del self._targets[position]
        self._index = {t.id: i for i, t in enumerate(self._targets)}
        return True

    # ------------------------------------------------------------------
    # Access
    # ------------------------------------------------------------------

    def by_id(self, target_id: int) -> NavTarget | None:
        """
        Look up a target by id.

        The returned object is the registered one, so assigning to its
        ``state`` updates the registry for the rest of the frame.
        """
        position = self._index.get(target_id)
        if position is None:
            return None
        return self._targets[position]

    def all(self) -> list[NavTarget]:
        """All targets in registration order."""
        return list(self._targets)

    def is_empty(self) -> bool:
        return not self._targets

    def __len__(self) -> int:
        return len(self._targets)

    def __iter__(self) -> Iterator[NavTarget]:
        return iter(self._targets)

    def __contains__(self, target_id: object) -> bool:
        return target_id in self._index

    # ------------------------------------------------------------------
    # Spatial queries
    # ------------------------------------------------------------------

    def at_point(self, x: int, y: int) -> list[NavTarget]:
        """Targets whose rectangle contains the point."""
        return [t for t in self._targets if t.rect.contains(x, y)]

    def in_area(self, area: Rect) -> list[NavTarget]:
        """Targets that share at least one cell with *area*."""
        return [t for t in self._targets if t.rect.intersects(area)]

    def closest_to(self, x: int, y: int) -> NavTarget | None:
        """
        Target whose center is nearest to the point.

        Distances are compared squared; ties go to the earliest registered
        target.
        """
        best: NavTarget | None = None
        best_distance = 0
        for target in self._targets:
            cx, cy = target.rect.center
            distance = (cx - x) ** 2 + (cy - y) ** 2
            if best is None or distance < best_distance:
                best = target
                best_distance = distance
        return best

    # ------------------------------------------------------------------
    # Filters and orderings
    # ------------------------------------------------------------------

    def by_priority(self, priority: TargetPriority) -> list[NavTarget]:
        return [t for t in self._targets if t.priority == priority]

    def by_group(self, group: str) -> list[NavTarget]:
        return [t for t in self._targets if t.group == group]

    def by_state(self, state: TargetState) -> list[NavTarget]:
        return [t for t in self._targets if t.state == state]

    def sorted_by_priority(self) -> list[NavTarget]:
        """Highest priority first; equal priorities keep registration order."""
        return sorted(self._targets, key=lambda t: t.priority, reverse=True)

    def sorted_by_area(self) -> list[NavTarget]:
        """Largest area first; equal areas keep registration order."""
        return sorted(self._targets, key=lambda t: t.rect.area, reverse=True)


# ---------------------------------------------------------------------------
# Builder
# ---------------------------------------------------------------------------


class TargetBuilder:
    """
    Creates targets for common widget kinds with sequential ids.

    Parameters
    ----------
    start_id:
        Id given to the first target built.
    """

    def __init__(self, start_id: int = 1) -> None:
        self._next_id = start_id

    def _allocate(self) -> int:
        target_id = self._next_id
        self._next_id += 1
        return target_id

    def button(self, rect: Rect, label: str) -> NavTarget:
        return NavTarget(
            self._allocate(),
            rect,
            label=label,
            action=TargetAction.ACTIVATE,
            priority=TargetPriority.HIGH,
        )

    def list_item(self, rect: Rect, label: str) -> NavTarget:
        return NavTarget(self._allocate(), rect, label=label, action=TargetAction.SELECT)

    def tab(self, rect: Rect, label: str) -> NavTarget:
        return NavTarget(
            self._allocate(),
            rect,
            label=label,
            action=TargetAction.ACTIVATE,
            priority=TargetPriority.HIGH,
            group="tabs",
        )

    def tree_node(self, rect: Rect, label: str, expanded: bool) -> NavTarget:
        return NavTarget(
            self._allocate(),
            rect,
            label=label,
            action=TargetAction.SELECT,
            metadata={"expanded": "true" if expanded else "false"},
        )

    def link(self, rect: Rect, label: str, route: str) -> NavTarget:
        return NavTarget(self._allocate(), rect, label=label, action=TargetAction.navigate(route))

    def custom(
        self,
        rect: Rect,
        label: str,
        action: TargetAction,
        priority: TargetPriority,
    ) -> NavTarget:
        return NavTarget(self._allocate(), rect, label=label, action=action, priority=priority)
