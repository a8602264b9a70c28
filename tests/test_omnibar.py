"""Tests for the command bar input state."""

from locust_tui.omnibar import OmnibarState


def _typed(text: str, max_history: int = 10) -> OmnibarState:
    state = OmnibarState(max_history=max_history)
    state.activate()
    for char in text:
        state.insert_char(char)
    return state


class TestEditing:
    """Tests for buffer editing and cursor movement."""

    def test_activate_starts_empty(self) -> None:
        """activate() opens an empty buffer."""
        state = OmnibarState()
        state.activate()

        assert state.is_active
        assert state.buffer == ""
        assert state.cursor == 0

    def test_insert_at_cursor(self) -> None:
        """Characters go in at the cursor."""
        state = _typed("sve")
        state.move_cursor_left()
        state.move_cursor_left()
        state.insert_char("a")

        assert state.buffer == "save"
        assert state.cursor == 2

    def test_delete_before_cursor(self) -> None:
        """Backspace removes the character left of the cursor."""
        state = _typed("save")
        state.move_cursor_left()
        state.delete_char()

        assert state.buffer == "sae"
        assert state.cursor == 2

    def test_delete_at_start_is_noop(self) -> None:
        """Backspace at column 0 does nothing."""
        state = _typed("ab")
        state.move_cursor_home()
        state.delete_char()

        assert state.buffer == "ab"
        assert state.cursor == 0

    def test_cursor_is_clamped(self) -> None:
        """The cursor stays within the buffer."""
        state = _typed("ab")
        state.move_cursor_right()
        assert state.cursor == 2

        state.move_cursor_home()
        state.move_cursor_left()
        assert state.cursor == 0

        state.move_cursor_end()
        assert state.cursor == 2

    def test_set_buffer(self) -> None:
        """set_buffer replaces the text and moves the cursor to the end."""
        state = _typed("sa")
        state.set_buffer("save-all")

        assert state.buffer == "save-all"
        assert state.cursor == 8

    def test_deactivate_clears_buffer(self) -> None:
        """Cancelling drops the text."""
        state = _typed("abc")
        state.deactivate()

        assert not state.is_active
        assert state.buffer == ""


class TestSubmit:
    """Tests for submitting and history."""

    def test_submit_records_history(self) -> None:
        """Submitted text goes to the front of history and the bar closes."""
        state = _typed("save")

        assert state.submit() == "save"
        assert state.history == ["save"]
        assert not state.is_active

    def test_submit_empty_buffer(self) -> None:
        """An empty buffer is not submitted and the bar stays open."""
        state = _typed("")

        assert state.submit() is None
        assert state.is_active
        assert state.history == []

    def test_consecutive_duplicates_not_recorded(self) -> None:
        """Submitting the same command twice keeps one entry."""
        state = _typed("save")
        state.submit()
        state.activate()
        state.insert_char("save")
        state.submit()

        assert state.history == ["save"]

    def test_history_is_bounded(self) -> None:
        """Only max_history entries are kept, newest first."""
        state = OmnibarState(max_history=2)
        for command in ("one", "two", "three"):
            state.activate()
            state.insert_char(command)
            state.submit()

        assert state.history == ["three", "two"]

    def test_browse_history(self) -> None:
        """Up walks back, Down walks forward and restores the draft."""
        state = OmnibarState()
        for command in ("open", "save"):
            state.activate()
            state.insert_char(command)
            state.submit()

        state.activate()
        state.insert_char("dr")
        state.history_prev()
        assert state.buffer == "save"
        assert state.is_browsing_history

        state.history_prev()
        assert state.buffer == "open"
        state.history_prev()
        assert state.buffer == "open"

        state.history_next()
        assert state.buffer == "save"
        state.history_next()
        assert state.buffer == "dr"
        assert not state.is_browsing_history

    def test_editing_leaves_history(self) -> None:
        """Typing after recalling an entry edits it as a new draft."""
        state = _typed("save")
        state.submit()
        state.activate()
        state.history_prev()
        state.insert_char("!")

        assert state.buffer == "save!"
        assert not state.is_browsing_history

    def test_history_empty(self) -> None:
        """Browsing with no history leaves the buffer alone."""
        state = _typed("x")
        state.history_prev()
        state.history_next()

        assert state.buffer == "x"

    def test_clear_history(self) -> None:
        """clear_history() forgets everything."""
        state = _typed("save")
        state.submit()
        state.clear_history()

        assert state.history == []
