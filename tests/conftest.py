"""Shared pytest fixtures for locust-tui tests."""

import logging

import pytest

from locust_tui.commands import Command, CommandRegistry
from locust_tui.config import EngineConfig, NavConfig
from locust_tui.geometry import Rect
from locust_tui.targets import NavTarget, TargetRegistry


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Undo any handlers or levels a test installed on the package logger."""
    yield
    logger = logging.getLogger("locust_tui")
    logger.handlers = [logging.NullHandler()]
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def screen() -> Rect:
    """An 80x24 terminal."""
    return Rect(0, 0, 80, 24)


@pytest.fixture
def three_targets() -> list[NavTarget]:
    """Three equal-priority targets stacked top to bottom."""
    return [
        NavTarget(1, Rect(0, 0, 10, 1), label="first"),
        NavTarget(2, Rect(0, 2, 10, 1), label="second"),
        NavTarget(3, Rect(0, 4, 10, 1), label="third"),
    ]


@pytest.fixture
def registry(three_targets: list[NavTarget]) -> TargetRegistry:
    """Registry holding the three stacked targets."""
    registry = TargetRegistry()
    for target in three_targets:
        registry.register(target)
    return registry


@pytest.fixture
def two_key_config() -> EngineConfig:
    """Engine config with a two-character hint charset."""
    return EngineConfig(nav=NavConfig(hint_charset="as"))


@pytest.fixture
def commands() -> CommandRegistry:
    """A small set of editor commands."""
    registry = CommandRegistry()
    registry.register(Command("open", "Open a file", category="file", aliases=("o",)))
    registry.register(Command("quit", "Exit the application", aliases=("q",)))
    registry.register(Command("save", "Save the current file", category="file"))
    return registry
