"""
Keyboard interaction modes.

The :class:`Navigator` is always in exactly one mode:

* :class:`Idle` - waiting for an activation key
* :class:`HintSelection` - hints are shown, typed characters narrow them
* :class:`CommandSearch` - the command bar is open
* :class:`TooltipVisible` - a tooltip is shown next to a target

The host feeds abstract key events to :meth:`Navigator.handle_key` together
with the current frame's :class:`~locust_tui.targets.TargetRegistry` and
screen rectangle, then renders whatever :attr:`Navigator.mode` describes.

Example
-------
>>> nav = Navigator()
>>> outcome = nav.handle_key(char_key("f"), registry, Rect(0, 0, 80, 24))
>>> isinstance(nav.mode, HintSelection)
True
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Union

from locust_tui.commands import CommandRegistry, CommandSuggestion
from locust_tui.config import EngineConfig
from locust_tui.geometry import Rect
from locust_tui.hints import HintGenerator, HintMatcher
from locust_tui.keybindings import KeybindingsManager
from locust_tui.keys import Key
from locust_tui.logging import get_logger
from locust_tui.omnibar import OmnibarState
from locust_tui.targets import NavTarget, TargetRegistry, TargetState
from locust_tui.tooltip import PositionResult, TooltipContent, TooltipPositioner, TooltipRegistry

logger = get_logger("navigator")


# ---------------------------------------------------------------------------
# Outcomes
# ---------------------------------------------------------------------------


class EventResult(str, Enum):
    """What happened to a key event."""

    NOT_HANDLED = "not_handled"  # Host should process the key itself
    CONSUMED = "consumed"  # Used, nothing visible changed
    REDRAW = "redraw"  # Used, the overlay must be redrawn


@dataclass(frozen=True)
class Outcome:
    """
    Result of :meth:`Navigator.handle_key`.

    Attributes
    ----------
    result:
        Whether the key was used and whether to redraw.
    target_id:
        Target chosen by hint selection, if any.
    command:
        Command name submitted from the command bar, if any.
    placement:
        Placement of a tooltip that was just shown, if any.
    """

    result: EventResult
    target_id: int | None = None
    command: str | None = None
    placement: PositionResult | None = None

    @property
    def handled(self) -> bool:
        return self.result is not EventResult.NOT_HANDLED


_NOT_HANDLED = Outcome(EventResult.NOT_HANDLED)
_CONSUMED = Outcome(EventResult.CONSUMED)
_REDRAW = Outcome(EventResult.REDRAW)


# ---------------------------------------------------------------------------
# Modes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Idle:
    """No interaction in progress."""


@dataclass
class HintSelection:
    """Hints are displayed; :attr:`matcher` holds the active set and input."""

    matcher: HintMatcher


@dataclass
class CommandSearch:
    """
    The command bar is open.

    :attr:`selected` indexes :attr:`suggestions`; it is ``0`` whenever the
    list is empty.
    """

    state: OmnibarState
    suggestions: list[CommandSuggestion] = field(default_factory=list)
    selected: int = 0

    @property
    def selected_suggestion(self) -> CommandSuggestion | None:
        if not self.suggestions:
            return None
        return self.suggestions[self.selected]


@dataclass(frozen=True)
class TooltipVisible:
    """A tooltip is shown for :attr:`target_id` at :attr:`placement`."""

    target_id: int
    placement: PositionResult
    content: TooltipContent


Mode = Union[Idle, HintSelection, CommandSearch, TooltipVisible]

_IDLE_ACTIONS = ["hint_mode", "command_search", "tooltip"]
_HINT_ACTIONS = ["cancel", "confirm", "delete"]
_SEARCH_ACTIONS = [
    "cancel",
    "confirm",
    "delete",
    "next",
    "previous",
    "cursor_left",
    "cursor_right",
    "cursor_home",
    "cursor_end",
]


# ---------------------------------------------------------------------------
# Navigator
# ---------------------------------------------------------------------------


class Navigator:
    """
    Routes key events through the current interaction mode.

    Parameters
    ----------
    config:
        Engine configuration.  Defaults to :class:`EngineConfig`.
    commands:
        Commands offered by the command bar.  An empty registry is created
        when omitted.
    tooltips:
        Tooltip content per target id.  An empty registry is created when
        omitted.
    keybindings:
        Action to key mapping.  Defaults are derived from *config*.
    """

    def __init__(
        self,
        config: EngineConfig | None = None,
        commands: CommandRegistry | None = None,
        tooltips: TooltipRegistry | None = None,
        keybindings: KeybindingsManager | None = None,
    ) -> None:
        self.config = config or EngineConfig()
        self.commands = commands if commands is not None else CommandRegistry(self.config.fuzzy)
        self.tooltips = tooltips if tooltips is not None else TooltipRegistry()
        self.keybindings = keybindings or KeybindingsManager(self.config)

        self._generator = HintGenerator.from_config(self.config.nav)
        self._positioner = TooltipPositioner(self.config.tooltip)
        self._omnibar = OmnibarState(self.config.omnibar.max_history)
        self._mode: Mode = Idle()

    @property
    def mode(self) -> Mode:
        return self._mode

    @property
    def omnibar(self) -> OmnibarState:
        """The command bar state; its history survives across searches."""
        return self._omnibar

    def reset(self) -> None:
        """Abandon any in-progress interaction and return to idle."""
        if not isinstance(self._mode, Idle):
            logger.debug("Reset from %s", type(self._mode).__name__)
        self._omnibar.deactivate()
        self._mode = Idle()

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def handle_key(self, key: Key, registry: TargetRegistry, screen: Rect) -> Outcome:
        """
        Process one key event.

        Parameters
        ----------
        key:
            The key pressed.
        registry:
            Targets registered for the current frame.
        screen:
            Bounds tooltips must stay within.
        """
        mode = self._mode
        if isinstance(mode, HintSelection):
            return self._handle_hints(mode, key, registry)
        if isinstance(mode, CommandSearch):
            return self._handle_search(mode, key)
        if isinstance(mode, TooltipVisible):
            return self._handle_tooltip(key, registry, screen)
        return self._handle_idle(key, registry, screen)

    def _enter(self, mode: Mode) -> None:
        logger.debug("Mode %s -> %s", type(self._mode).__name__, type(mode).__name__)
        self._mode = mode

    # ------------------------------------------------------------------
    # Idle
    # ------------------------------------------------------------------

    def _handle_idle(self, key: Key, registry: TargetRegistry, screen: Rect) -> Outcome:
        action = self.keybindings.find_action(key, _IDLE_ACTIONS)
        if action == "hint_mode":
            return self._start_hints(registry)
        if action == "command_search":
            self._omnibar.activate()
            self._enter(CommandSearch(self._omnibar, self._search("")))
            return _REDRAW
        if action == "tooltip":
            return self._show_tooltip(registry, screen)
        return _NOT_HANDLED

    def _start_hints(self, registry: TargetRegistry) -> Outcome:
        targets = [t for t in registry if t.state is not TargetState.DISABLED]
        hints = self._generator.generate_for(targets, self.config.nav)
        if not hints:
            logger.debug("Hint mode requested with no eligible targets")
            return _NOT_HANDLED

        matcher = HintMatcher()
        matcher.set_hints(hints)
        self._enter(HintSelection(matcher))
        return _REDRAW

    def _show_tooltip(self, registry: TargetRegistry, screen: Rect) -> Outcome:
        target = self._tooltip_target(registry)
        if target is None:
            return _NOT_HANDLED

        content = self.tooltips.get(target.id)
        assert content is not None
        width, height = content.size(self.config.tooltip.max_width, self.config.tooltip.max_height)
        placement = self._positioner.calculate(target.rect, width, height, screen)
        self._enter(TooltipVisible(target.id, placement, content))
        return Outcome(EventResult.REDRAW, target_id=target.id, placement=placement)

    def _tooltip_target(self, registry: TargetRegistry) -> NavTarget | None:
        """First highlighted or selected target that has tooltip content."""
        for target in registry:
            if target.state in (TargetState.HIGHLIGHTED, TargetState.SELECTED) and (
                self.tooltips.contains(target.id)
            ):
                return target
        return None

    # ------------------------------------------------------------------
    # Hint selection
    # ------------------------------------------------------------------

    def _handle_hints(self, mode: HintSelection, key: Key, registry: TargetRegistry) -> Outcome:
        action = self.keybindings.find_action(key, _HINT_ACTIONS)
        if action == "cancel":
            self._enter(Idle())
            return _REDRAW
        if action == "delete":
            mode.matcher.pop_char()
            return _REDRAW
        if action == "confirm":
            target_id = mode.matcher.confirm()
            if target_id is None:
                return _CONSUMED
            return self._finish_hints(target_id, registry)

        if not key.is_printable:
            # Hint mode is modal: stray keys never reach the host
            return _CONSUMED

        target_id = mode.matcher.push_char(key.char)
        if target_id is None:
            return _REDRAW
        return self._finish_hints(target_id, registry)

    def _finish_hints(self, target_id: int, registry: TargetRegistry) -> Outcome:
        self._enter(Idle())
        if target_id not in registry:
            logger.warning("Hinted target %d is no longer registered", target_id)
            return _REDRAW
        return Outcome(EventResult.REDRAW, target_id=target_id)

    # ------------------------------------------------------------------
    # Command search
    # ------------------------------------------------------------------

    def _search(self, query: str) -> list[CommandSuggestion]:
        return self.commands.search(query)[: self.config.omnibar.max_results]

    def _refresh(self, mode: CommandSearch) -> Outcome:
        mode.suggestions = self._search(mode.state.buffer)
        mode.selected = 0
        return _REDRAW

    def _handle_search(self, mode: CommandSearch, key: Key) -> Outcome:
        state = mode.state
        action = self.keybindings.find_action(key, _SEARCH_ACTIONS)

        if action == "cancel":
            state.deactivate()
            self._enter(Idle())
            return _REDRAW
        if action == "confirm":
            suggestion = mode.selected_suggestion
            if suggestion is None:
                return _CONSUMED
            state.set_buffer(suggestion.name)
            state.submit()
            self._enter(Idle())
            logger.debug("Submitted command %s", suggestion.name)
            return Outcome(EventResult.REDRAW, command=suggestion.name)
        if action == "delete":
            state.delete_char()
            return self._refresh(mode)
        if action == "previous":
            if state.is_browsing_history or (not state.buffer and mode.selected == 0):
                state.history_prev()
                return self._refresh(mode)
            mode.selected = max(0, mode.selected - 1)
            return _REDRAW
        if action == "next":
            if state.is_browsing_history:
                state.history_next()
                return self._refresh(mode)
            mode.selected = min(max(len(mode.suggestions) - 1, 0), mode.selected + 1)
            return _REDRAW
        if action == "cursor_left":
            state.move_cursor_left()
            return _REDRAW
        if action == "cursor_right":
            state.move_cursor_right()
            return _REDRAW
        if action == "cursor_home":
            state.move_cursor_home()
            return _REDRAW
        if action == "cursor_end":
            state.move_cursor_end()
            return _REDRAW

        if not key.is_printable:
            return _CONSUMED
        state.insert_char(key.char)
        return self._refresh(mode)

    # ------------------------------------------------------------------
    # Tooltip
    # ------------------------------------------------------------------

    def _handle_tooltip(self, key: Key, registry: TargetRegistry, screen: Rect) -> Outcome:
        self._enter(Idle())
        if self.keybindings.find_action(key, ["cancel", "tooltip"]) is not None:
            return _REDRAW
        # Any other key hides the tooltip and is handled as if idle
        return self._handle_idle(key, registry, screen)
