"""
Input buffer and history for the command search bar.
"""

from __future__ import annotations


class OmnibarState:
    """
    Editable single-line buffer with a cursor and submit history.

    The cursor is a character index into :attr:`buffer`.  History holds
    submitted commands, most recent first, without consecutive duplicates.

    Parameters
    ----------
    max_history:
        Number of submitted commands to remember.
    """

    def __init__(self, max_history: int = 10) -> None:
        self._max_history = max_history
        self._active = False
        self._buffer = ""
        self._cursor = 0
        self._history: list[str] = []
        self._history_index: int | None = None
        self._saved_buffer: str | None = None

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def is_active(self) -> bool:
        return self._active

    @property
    def buffer(self) -> str:
        return self._buffer

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def history(self) -> list[str]:
        return list(self._history)

    @property
    def is_browsing_history(self) -> bool:
        return self._history_index is not None

    # ------------------------------------------------------------------
    # Activation
    # ------------------------------------------------------------------

    def activate(self) -> None:
        """Start a fresh search with an empty buffer."""
        self._active = True
        self._reset_buffer()

    def deactivate(self) -> None:
        """Abandon the search; history is kept."""
        self._active = False
        self._reset_buffer()

    def _reset_buffer(self) -> None:
        self._buffer = ""
        self._cursor = 0
        self._history_index = None
        self._saved_buffer = None

    # ------------------------------------------------------------------
    # Editing
    # ------------------------------------------------------------------

    def insert_char(self, char: str) -> None:
        """Insert *char* at the cursor. Editing leaves history browsing."""
        self._leave_history()
        self._buffer = self._buffer[: self._cursor] + char + self._buffer[self._cursor :]
        self._cursor += len(char)

    def delete_char(self) -> None:
        """Delete the character before the cursor (Backspace)."""
        if self._cursor == 0:
            return
        self._leave_history()
        self._buffer = self._buffer[: self._cursor - 1] + self._buffer[self._cursor :]
        self._cursor -= 1

    def move_cursor_left(self) -> None:
        self._cursor = max(0, self._cursor - 1)

    def move_cursor_right(self) -> None:
        self._cursor = min(len(self._buffer), self._cursor + 1)

    def move_cursor_home(self) -> None:
        self._cursor = 0

    def move_cursor_end(self) -> None:
        self._cursor = len(self._buffer)

    def set_buffer(self, text: str) -> None:
        """Replace the whole buffer (e.g. with a chosen suggestion)."""
        self._leave_history()
        self._load(text)

    def submit(self) -> str | None:
        """
        Finish the search, recording the buffer in history.

        Returns the submitted text, or ``None`` for an empty buffer (the
        search stays active in that case).
        """
        if not self._buffer:
            return None
        command = self._buffer
        if not self._history or self._history[0] != command:
            self._history.insert(0, command)
            del self._history[self._max_history :]
        self.deactivate()
        return command

    # ------------------------------------------------------------------
    # History
    # ------------------------------------------------------------------

    def history_prev(self) -> None:
        """Step to an older history entry, saving the in-progress buffer first."""
        if not self._history:
            return
        if self._history_index is None:
            self._saved_buffer = self._buffer
            self._history_index = 0
        elif self._history_index < len(self._history) - 1:
            self._history_index += 1
        self._load(self._history[self._history_index])

    def history_next(self) -> None:
        """Step to a newer entry, or back to the saved buffer past the newest."""
        if self._history_index is None:
            return
        if self._history_index == 0:
            self._load(self._saved_buffer or "")
            self._history_index = None
            self._saved_buffer = None
        else:
            self._history_index -= 1
            self._load(self._history[self._history_index])

    def clear_history(self) -> None:
        self._history.clear()
        self._history_index = None

    def _load(self, text: str) -> None:
        self._buffer = text
        self._cursor = len(text)

    def _leave_history(self) -> None:
        self._history_index = None
        self._saved_buffer = None
