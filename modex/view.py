"""Frame rendering: what a host should paint for the current editor state."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, TYPE_CHECKING

from .commands import Mode
from .constants import EditorConstants
from .graphemes import GraphemeIndex

if TYPE_CHECKING:
    from .controller import EditorController


@dataclass
class RenderedLine:
    """One visible text row.

    ``cursor_col`` is set on the row holding the cursor. The grapheme
    cluster at that column is drawn highlighted, or a highlighted blank
    when the cursor sits past the last character.
    """
    text: str
    cursor_col: Optional[int] = None

    @property
    def segments(self) -> tuple[str, str, str]:
        """Split into (before cursor, cursor cell, after cursor)."""
        if self.cursor_col is None:
            return (self.text, "", "")
        index = GraphemeIndex(0, self.text)
        col = self.cursor_col
        before = "".join(index.clusters[:col])
        cell = index.cluster(col) or " "
        after = "".join(index.clusters[col + 1:])
        return (before, cell, after)


@dataclass
class Frame:
    lines: list[RenderedLine] = field(default_factory=list)
    status: str = ""
    cursor_y: int = 0
    cursor_x: int = 0  # Display column, in terminal cells


def status_text(controller: 'EditorController') -> str:
    """Status bar: line count, mode and any transient message."""
    parts = [EditorConstants.LINES_LABEL.format(len(controller.buffer))]
    if controller.mode is Mode.INSERT:
        parts.append(EditorConstants.INSERT_MODE_LABEL)
    if controller.status_message:
        parts.append(controller.status_message)
    return ", ".join(parts)


def render_frame(controller: 'EditorController', height: int) -> Frame:
    """Render the visible part of the buffer for a viewport ``height`` rows tall.

    The last row is the status bar, so at most ``height - 1`` text rows are
    produced, starting at the controller's scroll index.
    """
    text_rows = max(0, height - EditorConstants.STATUS_BAR_LINES)
    scroll = controller.viewport.scroll_index
    visible = controller.buffer.lines[scroll:scroll + text_rows]
    cursor = controller.cursor

    frame = Frame(status=status_text(controller))
    for i, line in enumerate(visible):
        rendered = RenderedLine(line)
        if scroll + i == cursor.row:
            rendered.cursor_col = cursor.col
            frame.cursor_y = i
            frame.cursor_x = GraphemeIndex(cursor.row, line).display_offset(cursor.col)
        frame.lines.append(rendered)
    return frame
