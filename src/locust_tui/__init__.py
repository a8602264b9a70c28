"""
locust-tui - Keyboard-driven navigation for terminal interfaces.

The host declares the interactive regions it draws each frame; the engine
adds Vimium-style hint selection, fuzzy command search and edge-aware
tooltip placement on top of them.  It never touches the terminal: input is
abstract key events, output is target ids, scores and rectangles.

Example:
    from locust_tui import EngineConfig, Navigator, Rect, TargetBuilder, TargetRegistry
    from locust_tui.keys import char_key

    navigator = Navigator(EngineConfig())
    registry = TargetRegistry()
    screen = Rect(0, 0, 80, 24)

    # Every frame: clear and re-declare targets while drawing
    registry.clear()
    builder = TargetBuilder()
    registry.register(builder.button(Rect(2, 1, 8, 1), "Save"))
    registry.register(builder.button(Rect(12, 1, 8, 1), "Quit"))

    # Every key: hand the event to the navigator
    outcome = navigator.handle_key(char_key("f"), registry, screen)
    outcome = navigator.handle_key(char_key("a"), registry, screen)
    if outcome.target_id is not None:
        activate(outcome.target_id)
"""

from locust_tui.commands import (
    Command,
    CommandNotFoundError,
    CommandRegistry,
    CommandResult,
    CommandSuggestion,
    register_builtin_commands,
)
from locust_tui.config import EngineConfig, FuzzyConfig, NavConfig, OmnibarConfig, TooltipConfig
from locust_tui.fuzzy import FuzzyMatch, FuzzyMatcher
from locust_tui.geometry import Rect
from locust_tui.hints import Hint, HintGenerator, HintMatcher, hint_string
from locust_tui.keybindings import KeybindingsManager
from locust_tui.keys import Key
from locust_tui.logging import get_logger, setup_logging
from locust_tui.navigator import (
    CommandSearch,
    EventResult,
    HintSelection,
    Idle,
    Navigator,
    Outcome,
    TooltipVisible,
)
from locust_tui.omnibar import OmnibarState
from locust_tui.targets import (
    ActionKind,
    NavTarget,
    TargetAction,
    TargetBuilder,
    TargetPriority,
    TargetRegistry,
    TargetState,
)
from locust_tui.tooltip import (
    ArrowDirection,
    PositionResult,
    TooltipContent,
    TooltipPositioner,
    TooltipRegistry,
    TooltipSide,
    TooltipStyle,
)

__version__ = "0.1.0"

__all__ = [
    # Geometry and targets
    "Rect",
    "ActionKind",
    "NavTarget",
    "TargetAction",
    "TargetBuilder",
    "TargetPriority",
    "TargetRegistry",
    "TargetState",
    # Hints
    "Hint",
    "HintGenerator",
    "HintMatcher",
    "hint_string",
    # Fuzzy search and commands
    "FuzzyMatch",
    "FuzzyMatcher",
    "Command",
    "CommandNotFoundError",
    "CommandRegistry",
    "CommandResult",
    "CommandSuggestion",
    "register_builtin_commands",
    "OmnibarState",
    # Tooltips
    "ArrowDirection",
    "PositionResult",
    "TooltipContent",
    "TooltipPositioner",
    "TooltipRegistry",
    "TooltipSide",
    "TooltipStyle",
    # Input and modes
    "Key",
    "KeybindingsManager",
    "Navigator",
    "Outcome",
    "EventResult",
    "Idle",
    "HintSelection",
    "CommandSearch",
    "TooltipVisible",
    # Config and logging
    "EngineConfig",
    "NavConfig",
    "FuzzyConfig",
    "TooltipConfig",
    "OmnibarConfig",
    "setup_logging",
    "get_logger",
]
