"""
Command-line interface for trying out the navigation engine.
"""

from __future__ import annotations

import argparse
import sys
from dataclasses import replace
from pathlib import Path
from typing import Any

import yaml
from rich.console import Console
from rich.table import Table
from rich.text import Text

from locust_tui.config import EngineConfig
from locust_tui.fuzzy import FuzzyMatcher
from locust_tui.geometry import Rect
from locust_tui.hints import HintGenerator, HintMatcher
from locust_tui.logging import setup_logging
from locust_tui.targets import NavTarget, TargetPriority, TargetRegistry, TargetState
from locust_tui.tooltip import TooltipPositioner

console = Console()


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Keyboard navigation engine CLI",
        prog="locust-tui",
    )

    # Global options
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose output (debug logging)",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        help="Engine config YAML file",
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Hints command
    hints_parser = subparsers.add_parser("hints", help="Assign hints to targets from a YAML file")
    hints_parser.add_argument("file", type=Path, help="YAML list of targets")
    hints_parser.add_argument("--charset", help="Override the hint charset")
    hints_parser.add_argument(
        "--input",
        dest="typed",
        help="Type these characters and report the selected target",
    )

    # Search command
    search_parser = subparsers.add_parser("search", help="Fuzzy-rank candidates against a query")
    search_parser.add_argument("query", help="Search query")
    search_parser.add_argument("candidates", nargs="+", help="Candidate strings")

    # Place command
    place_parser = subparsers.add_parser("place", help="Place a tooltip next to an anchor")
    place_parser.add_argument("x", type=int, help="Anchor column")
    place_parser.add_argument("y", type=int, help="Anchor row")
    place_parser.add_argument("width", type=int, help="Anchor width")
    place_parser.add_argument("height", type=int, help="Anchor height")
    place_parser.add_argument(
        "--content",
        type=_parse_size,
        required=True,
        help="Content size as WxH",
    )
    place_parser.add_argument(
        "--screen",
        type=_parse_size,
        default=(80, 24),
        help="Screen size as WxH (default: 80x24)",
    )

    # Config command
    subparsers.add_parser("config", help="Show the effective configuration")

    args = parser.parse_args(argv)

    # Setup logging based on verbosity
    if getattr(args, "verbose", False):
        setup_logging("DEBUG")
    else:
        setup_logging("WARNING")

    if args.command is None:
        parser.print_help()
        return

    config = _load_config(args.config)

    if args.command == "hints":
        cmd_hints(args, config)
    elif args.command == "search":
        cmd_search(args, config)
    elif args.command == "place":
        cmd_place(args, config)
    elif args.command == "config":
        cmd_config(args, config)


def _parse_size(value: str) -> tuple[int, int]:
    """Parse ``"WxH"`` into ``(width, height)``."""
    try:
        width, height = (int(part) for part in value.lower().split("x"))
    except ValueError:
        raise argparse.ArgumentTypeError(f"Expected WxH, got {value!r}") from None
    if width < 0 or height < 0:
        raise argparse.ArgumentTypeError(f"Size cannot be negative: {value!r}")
    return (width, height)


def _load_config(path: Path | None) -> EngineConfig:
    if path is None:
        return EngineConfig()
    try:
        return EngineConfig.from_yaml(path)
    except (OSError, yaml.YAMLError, ValueError, TypeError, AttributeError) as e:
        console.print(f"[red]Failed to load config {path}: {e}[/red]")
        sys.exit(1)


def _target_from_dict(index: int, data: dict[str, Any]) -> NavTarget:
    """Build a target from one YAML entry; ids default to list position + 1."""
    rect = Rect.from_tuple(data["rect"])
    return NavTarget(
        id=int(data.get("id", index + 1)),
        rect=rect,
        label=data.get("label"),
        priority=TargetPriority[str(data.get("priority", "normal")).upper()],
        state=TargetState(str(data.get("state", "normal")).lower()),
        group=data.get("group"),
    )


def load_targets(path: Path) -> TargetRegistry:
    """
    Read a YAML list of targets into a registry.

    Each entry needs a ``rect`` (``[x, y, width, height]``) and may set
    ``id``, ``label``, ``priority``, ``state`` and ``group``.
    """
    with open(path) as f:
        data = yaml.safe_load(f) or []
    if not isinstance(data, list):
        raise ValueError("Expected a list of targets")

    registry = TargetRegistry()
    for index, entry in enumerate(data):
        registry.register(_target_from_dict(index, entry))
    return registry


def cmd_hints(args: argparse.Namespace, config: EngineConfig) -> None:
    """Show the hints assigned to a target file."""
    try:
        registry = load_targets(args.file)
    except (OSError, yaml.YAMLError, ValueError, KeyError, TypeError, AttributeError) as e:
        console.print(f"[red]Failed to load targets from {args.file}: {e}[/red]")
        sys.exit(1)

    nav = config.nav
    if args.charset:
        try:
            nav = replace(nav, hint_charset=args.charset)
        except ValueError as e:
            console.print(f"[red]{e}[/red]")
            sys.exit(1)

    hints = HintGenerator.from_config(nav).generate_for(registry, nav)

    table = Table(title="Hints")
    table.add_column("Hint", style="bold yellow")
    table.add_column("Target", justify="right")
    table.add_column("Label", style="cyan")
    table.add_column("Priority", style="dim")
    table.add_column("Rect", style="dim")

    for hint in hints:
        target = registry.by_id(hint.target_id)
        assert target is not None
        table.add_row(
            hint.text,
            str(target.id),
            target.label or "",
            target.priority.name.lower(),
            "{} {} {}x{}".format(*target.rect.as_tuple()),
        )

    console.print(table)
    console.print(f"\n[dim]Total: {len(hints)} hints from {len(registry)} targets[/dim]")

    if args.typed is not None:
        matcher = HintMatcher()
        matcher.set_hints(hints)
        selected = None
        for char in args.typed:
            selected = matcher.push_char(char)
            if selected is not None:
                break
        if selected is None:
            selected = matcher.confirm()

        if selected is None:
            console.print(f"[yellow]No target selected by {args.typed!r}[/yellow]")
            sys.exit(1)
        console.print(f"[green]Selected target {selected}[/green]")


def cmd_search(args: argparse.Namespace, config: EngineConfig) -> None:
    """Rank candidates against a query, highlighting matched characters."""
    matcher = FuzzyMatcher(config.fuzzy)
    matches = matcher.find_matches(args.query, args.candidates)

    table = Table(title=f"Matches for {args.query!r}")
    table.add_column("Score", justify="right")
    table.add_column("Candidate")

    for match in matches:
        text = Text(match.text)
        for pos in match.char_positions():
            text.stylize("bold magenta", pos, pos + 1)
        table.add_row(f"{match.score:.1f}", text)

    console.print(table)
    console.print(f"\n[dim]{len(matches)} of {len(args.candidates)} candidates matched[/dim]")


def cmd_place(args: argparse.Namespace, config: EngineConfig) -> None:
    """Show where a tooltip lands next to the given anchor."""
    anchor = Rect(args.x, args.y, args.width, args.height)
    screen = Rect(0, 0, *args.screen)
    content_width, content_height = args.content

    result = TooltipPositioner(config.tooltip).calculate(
        anchor, content_width, content_height, screen
    )

    table = Table(title="Tooltip placement", show_header=False)
    table.add_column("Field", style="bold")
    table.add_column("Value")
    table.add_row("Side", result.position.value)
    table.add_row("Rect", "{} {} {}x{}".format(*result.rect.as_tuple()))
    table.add_row("Arrow", f"{result.arrow_direction.glyph} {result.arrow_direction.value}")
    table.add_row("Flipped", "yes" if result.was_flipped else "no")
    table.add_row("Fits screen", "yes" if result.rect.fits_within(screen) else "no")

    console.print(table)


def cmd_config(args: argparse.Namespace, config: EngineConfig) -> None:
    """Show the effective configuration."""
    console.print("[bold]Current Configuration:[/bold]\n")
    console.print(yaml.dump(config.to_dict(), default_flow_style=False, sort_keys=False))


if __name__ == "__main__":
    main()
