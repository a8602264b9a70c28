"""
Abstract key events.

The engine never reads the terminal.  Hosts translate whatever their
backend produces into :class:`Key` values and feed them to the navigator.
"""

from __future__ import annotations

from dataclasses import dataclass

# ---------------------------------------------------------------------------
# Key data model
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Key:
    """
    A single key press.

    Attributes
    ----------
    name:
        Symbolic name for special keys (e.g. ``'enter'``, ``'up'``).
        For plain printable characters this equals *char*.
    char:
        The literal character, if printable.  Empty string otherwise.
    ctrl:
        ``True`` when Ctrl was held.
    alt:
        ``True`` when Alt (Meta/Option) was held.
    shift:
        ``True`` when Shift was held (only detectable for certain keys).
    """

    name: str
    char: str = ""
    ctrl: bool = False
    alt: bool = False
    shift: bool = False

    @property
    def is_printable(self) -> bool:
        """A plain character with no Ctrl/Alt modifier."""
        return len(self.char) == 1 and self.char.isprintable() and not (self.ctrl or self.alt)


def char_key(char: str) -> Key:
    """Key event for a plain printable character."""
    if char == " ":
        return KEY_SPACE
    return Key(name=char, char=char)


# ---------------------------------------------------------------------------
# Common key constants
# ---------------------------------------------------------------------------

KEY_ENTER = Key(name="enter", char="\r")
KEY_TAB = Key(name="tab", char="\t")
KEY_ESCAPE = Key(name="escape")
KEY_BACKSPACE = Key(name="backspace")

KEY_UP = Key(name="up")
KEY_DOWN = Key(name="down")
KEY_LEFT = Key(name="left")
KEY_RIGHT = Key(name="right")

KEY_HOME = Key(name="home")
KEY_END = Key(name="end")

KEY_SPACE = Key(name="space", char=" ")
