"""
Command registry for the command search bar.

Commands are registered once by the host and searched with the fuzzy
matcher as the user types.  Names rank above aliases, aliases above
descriptions.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from locust_tui.config import FuzzyConfig
from locust_tui.fuzzy import FuzzyMatcher
from locust_tui.logging import get_logger
from locust_tui.omnibar import OmnibarState

logger = get_logger("commands")

# Multipliers applied to alias and description scores
ALIAS_WEIGHT = 0.9
DESCRIPTION_WEIGHT = 0.5
# Descriptions are only consulted when the name/alias score is below this
DESCRIPTION_THRESHOLD = 10.0


class CommandNotFoundError(KeyError):
    """Raised when executing a command name or alias that is not registered."""


@dataclass(frozen=True)
class Command:
    """A named, searchable action."""

    name: str
    description: str = ""
    handler: Callable[..., Any] | None = None
    category: str | None = None
    aliases: tuple[str, ...] = ()


@dataclass
class CommandSuggestion:
    """A search hit, ready for rendering."""

    name: str
    description: str = ""
    category: str | None = None
    score: float = 0.0
    match_positions: list[int] = field(default_factory=list)  # Byte offsets into name or alias


@dataclass
class CommandResult:
    """Result of executing a command."""

    name: str
    ok: bool = True
    output: Any = None
    error: str = ""


class CommandRegistry:
    """
    Named commands with alias lookup and fuzzy search.

    Parameters
    ----------
    fuzzy_config:
        Weights for the underlying :class:`~locust_tui.fuzzy.FuzzyMatcher`.
    """

    def __init__(self, fuzzy_config: FuzzyConfig | None = None) -> None:
        self._commands: dict[str, Command] = {}
        self._aliases: dict[str, str] = {}
        self._matcher = FuzzyMatcher(fuzzy_config)

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register(self, command: Command) -> None:
        """Register a command; a later registration with the same name wins."""
        if command.name in self._commands:
            self.unregister(command.name)
        for alias in command.aliases:
            self._aliases[alias] = command.name
        self._commands[command.name] = command

    def unregister(self, name: str) -> bool:
        """Remove a command and its aliases. Returns ``True`` if it existed."""
        command = self._commands.pop(name, None)
        if command is None:
            return False
        for alias in command.aliases:
            if self._aliases.get(alias) == name:
                del self._aliases[alias]
        return True

    def clear(self) -> None:
        self._commands.clear()
        self._aliases.clear()

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def get(self, name: str) -> Command | None:
        """Find a command by name or alias."""
        command = self._commands.get(name)
        if command is not None:
            return command
        real_name = self._aliases.get(name)
        if real_name is not None:
            return self._commands.get(real_name)
        return None

    def contains(self, name: str) -> bool:
        return name in self._commands or name in self._aliases

    def __len__(self) -> int:
        return len(self._commands)

    def is_empty(self) -> bool:
        return not self._commands

    def names(self) -> list[str]:
        return sorted(self._commands)

    def categories(self) -> list[str]:
        return sorted({c.category for c in self._commands.values() if c.category})

    def filter_by_category(self, category: str) -> list[CommandSuggestion]:
        return [
            self._suggest(command)
            for name, command in sorted(self._commands.items())
            if command.category == category
        ]

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------

    def search(self, query: str) -> list[CommandSuggestion]:
        """
        Rank commands against *query*.

        An empty query lists every command alphabetically with score 0.
        Otherwise each command scores the best of its name, its aliases
        (x0.9) and, for weak name/alias matches, its description (x0.5,
        without highlight positions).  Non-matching commands are dropped.
        """
        if not query:
            return [self._suggest(self._commands[name]) for name in sorted(self._commands)]

        suggestions: list[CommandSuggestion] = []
        for name, command in self._commands.items():
            best_score = 0.0
            best_positions: list[int] = []

            result = self._matcher.score(query, name)
            if result is not None and result[0] > best_score:
                best_score, best_positions = result

            for alias in command.aliases:
                result = self._matcher.score(query, alias)
                if result is not None and result[0] * ALIAS_WEIGHT > best_score:
                    best_score = result[0] * ALIAS_WEIGHT
                    best_positions = result[1]

            if best_score < DESCRIPTION_THRESHOLD and command.description:
                result = self._matcher.score(query, command.description)
                if result is not None and result[0] * DESCRIPTION_WEIGHT > best_score:
                    best_score = result[0] * DESCRIPTION_WEIGHT
                    best_positions = []

            if best_score > 0.0:
                suggestions.append(self._suggest(command, best_score, best_positions))

        suggestions.sort(key=lambda s: (-s.score, s.name))
        return suggestions

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    def execute(self, name: str, *args: Any) -> CommandResult:
        """
        Run the handler of a command found by name or alias.

        Raises
        ------
        CommandNotFoundError
            If no command or alias matches *name*.
        """
        command = self.get(name)
        if command is None:
            raise CommandNotFoundError(name)
        if command.handler is None:
            return CommandResult(name=command.name)

        logger.debug("Executing command: %s", command.name)
        try:
            output = command.handler(*args)
        except Exception as exc:
            logger.exception("Command %s failed", command.name)
            return CommandResult(name=command.name, ok=False, error=str(exc))
        return CommandResult(name=command.name, output=output)

    @staticmethod
    def _suggest(
        command: Command,
        score: float = 0.0,
        positions: list[int] | None = None,
    ) -> CommandSuggestion:
        return CommandSuggestion(
            name=command.name,
            description=command.description,
            category=command.category,
            score=score,
            match_positions=list(positions or []),
        )


# ---------------------------------------------------------------------------
# Built-in commands
# ---------------------------------------------------------------------------


def help_command(registry: CommandRegistry) -> Command:
    """``help``: one line per registered command, alphabetically."""

    def handler(*_args: Any) -> list[str]:
        lines = []
        for suggestion in registry.search(""):
            category = f" [{suggestion.category}]" if suggestion.category else ""
            lines.append(f"{suggestion.name:12} - {suggestion.description}{category}")
        return lines

    return Command(
        "help",
        "Show available commands",
        handler=handler,
        category="system",
        aliases=("?", "h"),
    )


def clear_history_command(omnibar: OmnibarState) -> Command:
    """``clear-history``: forget everything submitted to *omnibar*."""

    def handler(*_args: Any) -> None:
        omnibar.clear_history()
        logger.info("Command history cleared")

    return Command(
        "clear-history",
        "Clear command bar history",
        handler=handler,
        category="omnibar",
        aliases=("ch", "clear"),
    )


def version_command() -> Command:
    """``version``: the installed package version."""

    def handler(*_args: Any) -> str:
        from locust_tui import __version__

        return f"locust-tui {__version__}"

    return Command(
        "version",
        "Show version information",
        handler=handler,
        category="system",
        aliases=("v",),
    )


def echo_command() -> Command:
    """``echo``: returns its arguments joined by spaces."""
    return Command(
        "echo",
        "Echo back the arguments",
        handler=lambda *args: " ".join(str(a) for a in args),
        category="utility",
        aliases=("e",),
    )


def quit_command(on_quit: Callable[[], Any]) -> Command:
    """``quit``: calls *on_quit*; the host decides what exiting means."""
    return Command(
        "quit",
        "Exit the application",
        handler=lambda *_args: on_quit(),
        category="system",
        aliases=("q", "exit"),
    )


def register_builtin_commands(
    registry: CommandRegistry,
    omnibar: OmnibarState,
    on_quit: Callable[[], Any] | None = None,
) -> None:
    """
    Register help, clear-history, version and echo on *registry*.

    ``quit`` is only registered when *on_quit* is given.  Host commands
    registered afterwards with the same names replace these.
    """
    registry.register(help_command(registry))
    registry.register(clear_history_command(omnibar))
    registry.register(version_command())
    registry.register(echo_command())
    if on_quit is not None:
        registry.register(quit_command(on_quit))
