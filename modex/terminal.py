"""Terminal interface using Blessed for display and Curtsies for input."""

import blessed
from typing import Optional
import sys
import select

from .graphemes import split_graphemes, cluster_width
from .view import Frame, RenderedLine


def fit_to_width(text: str, width: int) -> tuple[str, int]:
    """Truncate ``text`` to at most ``width`` terminal cells.

    Returns:
        (truncated text, cells used)
    """
    out = []
    used = 0
    for cluster in split_graphemes(text):
        if cluster == "\t":
            cluster = " "
        elif any(ord(c) < 32 or ord(c) == 127 for c in cluster):
            # Control characters would move the terminal cursor
            cluster = "?"
        w = cluster_width(cluster)
        if used + w > width:
            break
        out.append(cluster)
        used += w
    return (''.join(out), used)


class TerminalInterface:
    """Handles terminal I/O using Blessed."""

    def __init__(self, terminal: Optional[blessed.Terminal] = None):
        """Initialize with a terminal instance (or create one)."""
        self.term = terminal or blessed.Terminal()
        self.is_fullscreen = False
        self._curtsies_input: Optional[object] = None
        self._curtsies_active: bool = False
        # Virtual screen state for minimal updates
        self._last_lines: list[str] | None = None
        self._last_status: str | None = None
        self._last_size: tuple[int, int] | None = None

    def setup(self):
        """Enter fullscreen mode and prepare terminal."""
        print(self.term.enter_fullscreen)
        print(self.term.hide_cursor)
        print(self.term.clear)
        self.is_fullscreen = True
        if self._curtsies_input is None:
            try:
                from curtsies import Input  # type: ignore
                # Enter raw mode immediately so reads work
                self._curtsies_input = Input(keynames='curtsies')  # type: ignore
                self._curtsies_input.__enter__()
                self._curtsies_active = True
            except Exception:
                # No tty (CI, pipes): run without key input
                self._curtsies_input = None
                self._curtsies_active = False

    def cleanup(self):
        """Exit fullscreen mode and restore terminal."""
        if self.is_fullscreen:
            print(self.term.exit_fullscreen)
            print(self.term.normal_cursor)
            self.is_fullscreen = False
        if self._curtsies_input is not None:
            try:
                if self._curtsies_active:
                    # Exit raw mode context
                    self._curtsies_input.__exit__(None, None, None)  # type: ignore
            except Exception:
                # Raw mode may already be gone at teardown
                pass
            finally:
                self._curtsies_input = None
                self._curtsies_active = False

    def invalidate_frame(self) -> None:
        """Invalidate cached frame so next update does a full clear."""
        self._last_lines = None
        self._last_status = None
        self._last_size = None

    def compose_line(self, line: RenderedLine, width: int) -> str:
        """Compose a display line with the cursor cell in reverse video, padded to width."""
        before, cell, after = line.segments
        before, used = fit_to_width(before, width)
        if not cell or used >= width:
            return before + ' ' * (width - used)
        cell, cell_used = fit_to_width(cell, width - used)
        if not cell:
            return before + ' ' * (width - used)
        used += cell_used
        after, after_used = fit_to_width(after, width - used)
        used += after_used
        return (before + self.term.reverse + cell + self.term.normal
                + after + ' ' * (width - used))

    def update_frame(self, frame: Frame) -> None:
        """Diff against last frame and write only changes.

        Falls back to a full clear on first paint or when the size changes.
        """
        width, height = self.term.width, self.term.height
        text_rows = max(0, height - 1)

        if self._last_lines is None or self._last_size != (width, height):
            print(self.term.home + self.term.clear, end='')
            self._last_lines = ["" for _ in range(text_rows)]
            self._last_status = None
            self._last_size = (width, height)

        for y in range(text_rows):
            if y < len(frame.lines):
                new_disp = self.compose_line(frame.lines[y], width)
            else:
                new_disp = ' ' * width
            if new_disp != self._last_lines[y]:
                print(self.term.move(y, 0) + new_disp, end='')
                self._last_lines[y] = new_disp

        status, used = fit_to_width(frame.status, width)
        status_text = status + ' ' * (width - used)
        if status_text != (self._last_status or ""):
            print(self.term.move(height - 1, 0) + status_text, end='', flush=True)
            self._last_status = status_text
        sys.stdout.flush()

    def get_key(self, timeout=None):
        """Get a single keypress from the user.

        Args:
            timeout: Timeout in seconds (None for blocking, 0 for non-blocking)

        Returns:
            The curtsies key name, or None if nothing was read.
        """
        if self._curtsies_input is not None:
            # Use select on stdin to implement timeouts
            if timeout is None:
                evt = next(self._curtsies_input)  # blocks
                return str(evt)
            else:
                t = 0.0 if timeout == 0 else float(timeout)
                r, _, _ = select.select([sys.stdin], [], [], t)
                if not r:
                    return None
                evt = next(self._curtsies_input)
                return str(evt)
        # Curtsies is required; if not initialized, return None
        return None

    @property
    def width(self):
        """Terminal width in columns."""
        return self.term.width

    @property
    def height(self):
        """Terminal height in rows, including the status line."""
        return self.term.height
