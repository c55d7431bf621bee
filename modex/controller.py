"""Editor controller: cursor, viewport and the modal input state machine.

The controller owns a ``Buffer`` and interprets one ``InputEvent`` at a
time. Key handling is looked up in a ``CommandRegistry``; the movement and
editing primitives the commands call live here, together with the clamping
and scrolling that keep the cursor valid after every event.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .buffer import ENCODING, Buffer
from .commands import CommandRegistry, EditorCommand, Mode
from .constants import EditorConstants
from .graphemes import GraphemeIndex
from .keyboard import EventType, InputEvent

logger = logging.getLogger(__name__)


class EventResult(Enum):
    CONSUMED = "consumed"
    IGNORED = "ignored"


@dataclass
class Cursor:
    row: int = 0
    col: int = 0  # Grapheme cluster index into the current line


@dataclass
class Viewport:
    scroll_index: int = 0
    width: int = 0
    height: int = 0

    @property
    def text_height(self) -> int:
        """Rows available for text; the bottom row is the status bar."""
        return max(0, self.height - EditorConstants.STATUS_BAR_LINES)


class EditorController:
    """Modal editing engine for a single file."""

    def __init__(self, file_path: str, text: str = "", registry: Optional[CommandRegistry] = None):
        self.file_path = file_path
        self.buffer = Buffer.from_text(text)
        self.cursor = Cursor()
        self.viewport = Viewport()
        self.mode = Mode.NORMAL
        self.last_input: Optional[str] = None  # Pending first key of a two-key command
        self.status_message: Optional[str] = None
        # Dirty flags polled by the host; cleared by layout()
        self.data_changed = False
        self.resize_changed = False
        self.quit_requested = False
        self.registry = registry or CommandRegistry()
        self.graphemes = GraphemeIndex(0, self.buffer.line(0))

    @property
    def curr_line(self) -> str:
        return self.buffer.line(self.cursor.row)

    # --- Host contract ---

    def layout(self, width: int, height: int) -> None:
        """Accept the viewport size for this layout pass and clear dirty flags."""
        self.viewport.width = width
        self.viewport.height = height
        self._scroll_to_cursor()
        self.data_changed = False
        self.resize_changed = False

    def needs_relayout(self) -> bool:
        return self.data_changed or self.resize_changed

    def on_event(self, event: InputEvent) -> EventResult:
        """Handle one input event to completion."""
        if event.type is EventType.RESIZE:
            self.resize_changed = True
            return EventResult.CONSUMED
        if event.type is EventType.OTHER:
            return EventResult.IGNORED

        if self.status_message is not None:
            self.status_message = None
            self.data_changed = True

        self._refresh_graphemes()
        consumed = self._dispatch(event)
        self._restore_invariants()
        return EventResult.CONSUMED if consumed else EventResult.IGNORED

    def _dispatch(self, event: InputEvent) -> bool:
        command: Optional[EditorCommand]
        if self.mode is Mode.NORMAL:
            pending, self.last_input = self.last_input, None
            command = self.registry.get_command(Mode.NORMAL, event, pending)
            if command is None:
                if event.type is EventType.CHAR:
                    # Any unbound character counts as the first press of dd
                    self.last_input = EditorConstants.DELETE_LINE_KEY
                return False
        elif self.mode is Mode.INSERT:
            command = self.registry.get_command(Mode.INSERT, event)
            if command is None:
                return False
        else:
            raise AssertionError(f"unhandled mode {self.mode}")
        return command.execute(self, event)

    # --- Invariants ---

    def _refresh_graphemes(self) -> None:
        line = self.curr_line
        if not self.graphemes.matches(self.cursor.row, line):
            self.graphemes = GraphemeIndex(self.cursor.row, line)

    def _clamp_cursor(self) -> None:
        self.cursor.row = min(max(self.cursor.row, 0), len(self.buffer) - 1)
        self._refresh_graphemes()
        self.cursor.col = min(max(self.cursor.col, 0), self.graphemes.count)

    def _scroll_to_cursor(self) -> None:
        """Scroll so the cursor row is among the visible text rows."""
        rows = self.viewport.text_height
        if rows == 0:
            return
        if self.cursor.row < self.viewport.scroll_index:
            self.viewport.scroll_index = self.cursor.row
        elif self.cursor.row >= self.viewport.scroll_index + rows:
            self.viewport.scroll_index = self.cursor.row - rows + 1

    def _restore_invariants(self) -> None:
        self._clamp_cursor()
        self._scroll_to_cursor()

    # --- Mode and system actions ---

    def set_mode(self, mode: Mode) -> None:
        if mode is not self.mode:
            logger.debug("Mode %s -> %s", self.mode.value, mode.value)
            self.mode = mode
            self.data_changed = True

    def save(self) -> bool:
        ok = self.buffer.persist(self.file_path)
        self.status_message = (EditorConstants.SAVE_OK_MESSAGE if ok
                               else EditorConstants.SAVE_FAILED_MESSAGE)
        self.data_changed = True
        return ok

    def request_quit(self) -> None:
        self.quit_requested = True

    # --- Cursor movement ---

    def move_cursor_up(self) -> None:
        if self.cursor.row == 0:
            return
        self.cursor.row -= 1
        if self.cursor.row < self.viewport.scroll_index:
            self.viewport.scroll_index -= 1
        self._refresh_graphemes()
        if self.graphemes.count < self.cursor.col:
            self.cursor.col = self.graphemes.count

    def move_cursor_down(self) -> None:
        if self.cursor.row >= len(self.buffer) - 1:
            return
        self.cursor.row += 1
        # Bottom row of the viewport belongs to the status bar
        if self.viewport.height and self.cursor.row > self.viewport.scroll_index + self.viewport.height - 2:
            self.viewport.scroll_index += 1
        self._refresh_graphemes()
        if self.graphemes.count < self.cursor.col:
            self.cursor.col = self.graphemes.count

    def move_cursor_right(self) -> None:
        if self.cursor.col >= self.graphemes.last_col:
            return
        self.cursor.col += 1

    def move_cursor_left(self) -> None:
        if self.cursor.col == 0:
            return
        self.cursor.col -= 1

    def move_to(self, row: int, col: int) -> None:
        """Place the cursor, clamped to the buffer and scrolled into view."""
        self.cursor.row = row
        self.cursor.col = col
        self._restore_invariants()
        self.data_changed = True

    def move_home(self) -> None:
        self.cursor.col = 0

    def move_end(self) -> None:
        self.cursor.col = self.graphemes.count

    # --- Editing ---

    def insert_at_cursor(self, ch: str) -> None:
        """Insert text at the cursor and step past it.

        A combining mark joins the cluster before it, so the cursor lands
        after whatever cluster now ends at the inserted bytes.
        """
        offset = self.graphemes.byte_offset(self.cursor.col)
        self.buffer.insert_char(self.cursor.row, offset, ch)
        self._refresh_graphemes()
        self.cursor.col = self.graphemes.col_for_byte_offset(offset + len(ch.encode(ENCODING)))

    def insert_tab(self) -> None:
        spaces = " " * EditorConstants.TAB_SIZE
        self.buffer.insert_char(self.cursor.row, self.graphemes.byte_offset(self.cursor.col), spaces)
        self.cursor.col += EditorConstants.TAB_SIZE
        self._refresh_graphemes()

    def backward_delete(self) -> None:
        """Delete the grapheme before the cursor, or join with the line above."""
        row, col = self.cursor.row, self.cursor.col
        if col > 0:
            self.buffer.remove_bytes(row, self.graphemes.byte_offset(col - 1),
                                     self.graphemes.grapheme_byte_len(col - 1))
            self.cursor.col -= 1
            self._refresh_graphemes()
            return

        if row == 0 or len(self.buffer) == 1:
            return
        boundary = self.buffer.merge_with_previous(row)
        self.cursor.row -= 1
        self._refresh_graphemes()
        self.cursor.col = self.graphemes.col_for_byte_offset(boundary)

    def split_line_at_cursor(self) -> None:
        self.buffer.split_line(self.cursor.row, self.graphemes.byte_offset(self.cursor.col))
        self.cursor.row += 1
        self.cursor.col = 0
        self._refresh_graphemes()

    def delete_current_line(self) -> None:
        logger.debug("Deleting line %d of %d", self.cursor.row, len(self.buffer))
        self.buffer.delete_line(self.cursor.row)
        if self.cursor.row >= len(self.buffer):
            self.cursor.row -= 1
        self.data_changed = True
        self._refresh_graphemes()
