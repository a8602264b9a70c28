"""
Configuration models for the navigation engine.

Every tunable lives on an immutable dataclass with documented defaults.
Configs are built programmatically or from a dict/YAML document and passed
wholesale to the component that uses them.

Example YAML:
    nav:
      hint_key: f
      hint_charset: asdfghjkl
      min_target_area: 2
      max_hints: 40
    fuzzy:
      case_sensitive: false
      consecutive_bonus: 12.0
    tooltip:
      prefer_right: false
      padding: 0
    omnibar:
      activation_key: ":"
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any

import yaml


def _check_key(name: str, value: str | None) -> None:
    if value is not None and len(value) != 1:
        raise ValueError(f"{name} must be a single character, got {value!r}")


def _known_fields(cls: type, data: dict[str, Any], section: str) -> dict[str, Any]:
    """Reject keys a config section does not define."""
    names = {f.name for f in fields(cls)}
    unknown = sorted(set(data) - names)
    if unknown:
        raise ValueError(f"Unknown {section} option(s): {', '.join(unknown)}")
    return dict(data)


# ---------------------------------------------------------------------------
# Hint navigation
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class NavConfig:
    """Hint navigation settings."""

    hint_key: str = "f"  # Enters hint mode from idle
    hint_charset: str = "asdfghjkl"  # Home-row keys, shortest hints first
    min_target_area: int = 1  # Targets smaller than this get no hint
    max_hints: int = 0  # Cap on hinted targets, 0 = unlimited

    def __post_init__(self) -> None:
        _check_key("hint_key", self.hint_key)
        if not self.hint_charset:
            raise ValueError("Hint charset cannot be empty")
        if len(set(self.hint_charset)) != len(self.hint_charset):
            raise ValueError(f"Hint charset has duplicate characters: {self.hint_charset!r}")
        if self.min_target_area < 0:
            raise ValueError("min_target_area must be >= 0")
        if self.max_hints < 0:
            raise ValueError("max_hints must be >= 0")


# ---------------------------------------------------------------------------
# Fuzzy matching
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class FuzzyConfig:
    """Scoring weights for :class:`~locust_tui.fuzzy.FuzzyMatcher`."""

    consecutive_bonus: float = 10.0  # Per match adjacent to the previous one
    word_boundary_bonus: float = 5.0  # Half of it per match in the first quarter
    first_char_bonus: float = 8.0  # Once, when the first match is at index 0
    gap_penalty: float = 0.1  # Per cell of span beyond a contiguous run
    case_sensitive: bool = False


# ---------------------------------------------------------------------------
# Tooltips
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TooltipConfig:
    """Tooltip activation and placement settings."""

    activation_key: str | None = "h"  # None disables the key
    max_width: int = 50  # Content columns before wrapping/clipping
    max_height: int = 10  # Content rows before clipping
    offset_x: int = 1  # Added to the tooltip column on every side
    offset_y: int = 1  # Added to the tooltip row on every side
    padding: int = 1  # Inner padding on every side
    show_border: bool = True  # Adds one cell per edge
    prefer_right: bool = True
    prefer_bottom: bool = True
    show_arrow: bool = True

    def __post_init__(self) -> None:
        _check_key("activation_key", self.activation_key)
        if self.padding < 0:
            raise ValueError("padding must be >= 0")
        if self.max_width < 1 or self.max_height < 1:
            raise ValueError("max_width and max_height must be >= 1")


# ---------------------------------------------------------------------------
# Command search
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class OmnibarConfig:
    """Command search settings."""

    activation_key: str = "/"
    max_history: int = 10  # Submitted commands kept, most recent first
    max_results: int = 10  # Suggestions kept per search

    def __post_init__(self) -> None:
        _check_key("activation_key", self.activation_key)
        if self.max_history < 0:
            raise ValueError("max_history must be >= 0")
        if self.max_results < 1:
            raise ValueError("max_results must be >= 1")


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class EngineConfig:
    """
    Configuration for every engine component.

    Sections left out of a dict or YAML document keep their defaults.
    """

    nav: NavConfig = field(default_factory=NavConfig)
    fuzzy: FuzzyConfig = field(default_factory=FuzzyConfig)
    tooltip: TooltipConfig = field(default_factory=TooltipConfig)
    omnibar: OmnibarConfig = field(default_factory=OmnibarConfig)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> EngineConfig:
        """Create config from a dictionary."""
        unknown = sorted(set(data) - {"nav", "fuzzy", "tooltip", "omnibar"})
        if unknown:
            raise ValueError(f"Unknown config section(s): {', '.join(unknown)}")

        return cls(
            nav=NavConfig(**_known_fields(NavConfig, data.get("nav") or {}, "nav")),
            fuzzy=FuzzyConfig(**_known_fields(FuzzyConfig, data.get("fuzzy") or {}, "fuzzy")),
            tooltip=TooltipConfig(
                **_known_fields(TooltipConfig, data.get("tooltip") or {}, "tooltip")
            ),
            omnibar=OmnibarConfig(
                **_known_fields(OmnibarConfig, data.get("omnibar") or {}, "omnibar")
            ),
        )

    @classmethod
    def from_yaml(cls, path: Path) -> EngineConfig:
        """Load config from a YAML file."""
        with open(path) as f:
            data = yaml.safe_load(f)
        return cls.from_dict(data or {})

    @classmethod
    def from_yaml_string(cls, content: str) -> EngineConfig:
        """Load config from a YAML string."""
        data = yaml.safe_load(content)
        return cls.from_dict(data or {})

    def to_dict(self) -> dict[str, Any]:
        """Convert config to a dictionary."""
        return {
            "nav": asdict(self.nav),
            "fuzzy": asdict(self.fuzzy),
            "tooltip": asdict(self.tooltip),
            "omnibar": asdict(self.omnibar),
        }
