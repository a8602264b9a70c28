"""Tests for the command registry."""

import pytest

from locust_tui.commands import (
    ALIAS_WEIGHT,
    Command,
    CommandNotFoundError,
    CommandRegistry,
    clear_history_command,
    echo_command,
    help_command,
    quit_command,
    register_builtin_commands,
    version_command,
)
from locust_tui.omnibar import OmnibarState


class TestRegistration:
    """Tests for registering and looking up commands."""

    def test_lookup_by_name_and_alias(self, commands: CommandRegistry) -> None:
        """get() resolves both names and aliases."""
        assert commands.get("open").name == "open"
        assert commands.get("o").name == "open"
        assert commands.get("missing") is None

    def test_contains_and_len(self, commands: CommandRegistry) -> None:
        """contains() accepts aliases; len() counts commands only."""
        assert commands.contains("q")
        assert not commands.contains("x")
        assert len(commands) == 3
        assert not commands.is_empty()

    def test_reregister_drops_old_aliases(self, commands: CommandRegistry) -> None:
        """A replacement's aliases replace the original's."""
        commands.register(Command("open", "Open anything", aliases=("e",)))

        assert commands.get("e").description == "Open anything"
        assert commands.get("o") is None
        assert len(commands) == 3

    def test_unregister(self, commands: CommandRegistry) -> None:
        """unregister() removes the command and its aliases."""
        assert commands.unregister("quit") is True
        assert commands.unregister("quit") is False

        assert commands.get("q") is None
        assert commands.names() == ["open", "save"]

    def test_categories(self, commands: CommandRegistry) -> None:
        """Uncategorised commands are left out of categories()."""
        assert commands.categories() == ["file"]
        assert [s.name for s in commands.filter_by_category("file")] == ["open", "save"]

    def test_clear(self, commands: CommandRegistry) -> None:
        """clear() removes everything."""
        commands.clear()

        assert commands.is_empty()
        assert commands.get("o") is None


class TestSearch:
    """Tests for CommandRegistry.search."""

    def test_empty_query_lists_alphabetically(self, commands: CommandRegistry) -> None:
        """Every command, score zero, sorted by name."""
        results = commands.search("")

        assert [s.name for s in results] == ["open", "quit", "save"]
        assert all(s.score == 0.0 for s in results)

    def test_name_match(self, commands: CommandRegistry) -> None:
        """Name hits carry highlight positions."""
        results = commands.search("sa")

        assert [s.name for s in results] == ["save"]
        assert results[0].match_positions == [0, 1]
        assert results[0].category == "file"

    def test_alias_match_is_weighted(self) -> None:
        """An alias-only hit scores 0.9 of the alias score."""
        commands = CommandRegistry()
        commands.register(Command("delete-buffer", "Close the buffer", aliases=("rm",)))

        results = commands.search("rm")

        assert len(results) == 1
        assert results[0].score == pytest.approx(20.0 * ALIAS_WEIGHT)
        assert results[0].match_positions == [0, 1]

    def test_name_preferred_over_weaker_alias(self, commands: CommandRegistry) -> None:
        """'q' matches the name 'quit' better than the alias 'q' after weighting."""
        result = commands.search("q")[0]

        assert result.name == "quit"
        assert result.score == pytest.approx(11.5)

    def test_description_fallback(self, commands: CommandRegistry) -> None:
        """Weak name matches fall back to the description at half weight, unhighlighted."""
        results = commands.search("app")

        assert [s.name for s in results] == ["quit"]
        assert results[0].score == pytest.approx(11.5)
        assert results[0].match_positions == []

    def test_no_match(self, commands: CommandRegistry) -> None:
        """Queries matching nothing return nothing."""
        assert commands.search("zzz") == []

    def test_sorted_by_score_then_name(self) -> None:
        """Equal scores are ordered by name."""
        commands = CommandRegistry()
        commands.register(Command("zeta"))
        commands.register(Command("zero"))
        commands.register(Command("alpha-z"))

        results = commands.search("ze")

        assert [s.name for s in results][:2] == ["zero", "zeta"]


class TestExecute:
    """Tests for CommandRegistry.execute."""

    def test_handler_output(self) -> None:
        """The handler's return value is the output."""
        commands = CommandRegistry()
        commands.register(Command("add", handler=lambda a, b: a + b, aliases=("+",)))

        result = commands.execute("+", 2, 3)

        assert result.ok
        assert result.name == "add"
        assert result.output == 5

    def test_no_handler(self, commands: CommandRegistry) -> None:
        """A command without handler succeeds with no output."""
        result = commands.execute("save")

        assert result.ok
        assert result.output is None

    def test_unknown_command(self, commands: CommandRegistry) -> None:
        """Unknown names raise a KeyError subclass."""
        with pytest.raises(CommandNotFoundError):
            commands.execute("nope")
        with pytest.raises(KeyError):
            commands.execute("nope")

    def test_failing_handler(self, caplog: pytest.LogCaptureFixture) -> None:
        """A raising handler is reported and logged."""

        def boom() -> None:
            raise RuntimeError("disk full")

        commands = CommandRegistry()
        commands.register(Command("write", handler=boom))

        result = commands.execute("write")

        assert not result.ok
        assert result.error == "disk full"
        assert "Command write failed" in caplog.text


class TestBuiltinCommands:
    """Tests for the built-in command bar commands."""

    @pytest.fixture
    def omnibar(self) -> OmnibarState:
        omnibar = OmnibarState()
        omnibar.activate()
        omnibar.set_buffer("open")
        omnibar.submit()
        return omnibar

    @pytest.fixture
    def builtins(self, omnibar: OmnibarState) -> CommandRegistry:
        registry = CommandRegistry()
        register_builtin_commands(registry, omnibar)
        return registry

    def test_registered_names(self, builtins: CommandRegistry) -> None:
        """quit is left out without a callback."""
        assert builtins.names() == ["clear-history", "echo", "help", "version"]
        assert builtins.categories() == ["omnibar", "system", "utility"]

    def test_help_lists_registered_commands(self, builtins: CommandRegistry) -> None:
        """help sees commands registered after it, one line each."""
        builtins.register(Command("save", "Save the current file", category="file"))

        lines = builtins.execute("?").output

        assert [line.split()[0] for line in lines] == ["clear-history", "echo", "help", "save", "version"]
        assert lines[3] == "save         - Save the current file [file]"

    def test_clear_history(self, builtins: CommandRegistry, omnibar: OmnibarState) -> None:
        """clear-history empties the bar's history."""
        assert omnibar.history == ["open"]

        result = builtins.execute("clear")

        assert result.ok
        assert omnibar.history == []

    def test_version(self, builtins: CommandRegistry) -> None:
        """version reports the package version."""
        from locust_tui import __version__

        assert builtins.execute("v").output == f"locust-tui {__version__}"

    def test_echo(self, builtins: CommandRegistry) -> None:
        """echo joins its arguments."""
        assert builtins.execute("e", "hello", 42).output == "hello 42"
        assert builtins.execute("echo").output == ""

    def test_quit_calls_back(self, omnibar: OmnibarState) -> None:
        """quit is registered with a callback and runs it."""
        calls = []
        registry = CommandRegistry()
        register_builtin_commands(registry, omnibar, on_quit=lambda: calls.append("quit"))

        assert registry.execute("exit").ok
        assert calls == ["quit"]
        assert registry.get("q").category == "system"

    def test_factories_searchable(self, omnibar: OmnibarState) -> None:
        """Built-ins rank like any other command."""
        registry = CommandRegistry()
        registry.register(help_command(registry))
        registry.register(version_command())
        registry.register(clear_history_command(omnibar))
        registry.register(echo_command())
        registry.register(quit_command(lambda: None))

        assert registry.search("vers")[0].name == "version"
