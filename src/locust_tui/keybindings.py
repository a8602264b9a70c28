"""
Keybinding management.

Maps logical navigator actions to key descriptors.  Activation keys come
from :class:`~locust_tui.config.EngineConfig`; the editing and movement
keys have fixed defaults that callers may override per action.
"""

from __future__ import annotations

from locust_tui.config import EngineConfig
from locust_tui.keys import Key

# ---------------------------------------------------------------------------
# Default keybinding map
# ---------------------------------------------------------------------------

EDITING_KEYBINDINGS: dict[str, list[str]] = {
    "cancel": ["escape"],
    "confirm": ["enter"],
    "delete": ["backspace"],
    "next": ["down", "tab"],
    "previous": ["up", "shift+tab"],
    "cursor_left": ["left"],
    "cursor_right": ["right"],
    "cursor_home": ["home", "ctrl+a"],
    "cursor_end": ["end", "ctrl+e"],
}


def default_keybindings(config: EngineConfig | None = None) -> dict[str, list[str]]:
    """Activation keys from *config* followed by the editing keys."""
    config = config or EngineConfig()
    bindings: dict[str, list[str]] = {
        "hint_mode": [config.nav.hint_key],
        "command_search": [config.omnibar.activation_key],
        "tooltip": [config.tooltip.activation_key] if config.tooltip.activation_key else [],
    }
    bindings.update({action: list(keys) for action, keys in EDITING_KEYBINDINGS.items()})
    return bindings


# ---------------------------------------------------------------------------
# Normalised key descriptor parsing
# ---------------------------------------------------------------------------

_MODIFIERS = ("alt", "ctrl", "shift")


def _split_descriptor(descriptor: str) -> tuple[list[str], str]:
    """Split ``"ctrl+shift+x"`` into modifiers and base, allowing ``"+"`` as the base."""
    if descriptor.endswith("+"):
        head, base = descriptor[:-1], "+"
        head = head[:-1] if head.endswith("+") else head
    else:
        head, _, base = descriptor.rpartition("+")
    modifiers = [p.strip().lower() for p in head.split("+") if p.strip()]
    return modifiers, base


def _canonical(modifiers: list[str], base: str) -> str:
    # Single characters keep their case so "F" and "f" stay distinct
    if len(base) > 1:
        base = base.strip().lower()
    return "+".join(sorted(set(modifiers)) + [base])


def _normalise_key_descriptor(descriptor: str) -> str:
    """
    Normalise a human-readable key descriptor to a canonical form.

    ``"Shift+Ctrl+Tab"`` -> ``"ctrl+shift+tab"``
    """
    modifiers, base = _split_descriptor(descriptor)
    return _canonical(modifiers, base)


def _key_to_descriptor(key: Key) -> str:
    """
    Convert a :class:`Key` into a canonical descriptor string.

    Examples
    --------
    >>> _key_to_descriptor(Key(name="ctrl+a", char="a", ctrl=True))
    'ctrl+a'
    >>> _key_to_descriptor(Key(name="tab", shift=True))
    'shift+tab'
    """
    modifiers = [name for name, held in zip(_MODIFIERS, (key.alt, key.ctrl, key.shift)) if held]
    base = key.name
    if len(base) > 1 and "+" in base:
        # "ctrl+a" style names already carry their modifiers
        extra, base = _split_descriptor(base)
        modifiers.extend(m for m in extra if m in _MODIFIERS)
    return _canonical(modifiers, base)


# ---------------------------------------------------------------------------
# Manager
# ---------------------------------------------------------------------------


class KeybindingsManager:
    """
    Manages the mapping from logical action names to key descriptors.

    Parameters
    ----------
    config:
        Source of the activation keys for hint mode, command search and
        tooltips.
    user_overrides:
        Optional mapping of action names to key descriptor lists that
        replace the defaults for those actions.
    """

    def __init__(
        self,
        config: EngineConfig | None = None,
        user_overrides: dict[str, list[str]] | None = None,
    ) -> None:
        self._bindings: dict[str, list[str]] = default_keybindings(config)
        if user_overrides:
            self._bindings.update(user_overrides)

        # Pre-normalise all descriptors for fast matching
        self._normalised: dict[str, list[str]] = {
            action: [_normalise_key_descriptor(d) for d in descriptors]
            for action, descriptors in self._bindings.items()
        }

    def matches(self, key: Key | str, action: str) -> bool:
        """
        Test whether *key* matches any binding for *action*.

        Parameters
        ----------
        key:
            Either a :class:`Key` instance or a raw key descriptor string
            (e.g. ``"ctrl+a"``).
        action:
            Logical action name (e.g. ``"hint_mode"``).
        """
        descriptors = self._normalised.get(action)
        if not descriptors:
            return False

        if isinstance(key, str):
            normalised = _normalise_key_descriptor(key)
        else:
            normalised = _key_to_descriptor(key)

        return normalised in descriptors

    def get_keys(self, action: str) -> list[str]:
        """Descriptors bound to *action*, in their original form."""
        return list(self._bindings.get(action, []))

    def actions(self) -> list[str]:
        return list(self._bindings.keys())

    def find_action(self, key: Key | str, among: list[str] | None = None) -> str | None:
        """
        Find the first action that matches *key*, or ``None``.

        Actions are checked in insertion order, restricted to *among* when
        given.
        """
        for action in (among if among is not None else self._bindings):
            if self.matches(key, action):
                return action
        return None
