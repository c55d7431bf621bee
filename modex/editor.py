"""Terminal host for the editor controller."""

import logging
import os
import select
import signal
from typing import Optional

from .terminal import TerminalInterface
from .controller import EditorController, EventResult
from .keyboard import KeyboardHandler, InputEvent
from .constants import EditorConstants
from .settings_persistence import get_persistence
from .view import render_frame

logger = logging.getLogger(__name__)


class FileLoadError(Exception):
    """Raised when the file to edit is missing or unreadable."""


def read_document(filename: str) -> str:
    """Read the file to edit as UTF-8.

    Raises:
        FileLoadError: with a user-facing message if the file is missing or
            cannot be read.
    """
    if not os.path.exists(filename):
        raise FileLoadError(EditorConstants.FILE_MISSING_MESSAGE.format(filename))
    try:
        # newline='' keeps '\r\n' intact so saving reproduces the file
        with open(filename, 'r', encoding='utf-8', newline='') as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        logger.warning(f"Could not read {filename}: {e}")
        raise FileLoadError(EditorConstants.FILE_UNREADABLE_MESSAGE.format(filename)) from e


def restore_cursor(controller: EditorController) -> None:
    """Move the cursor to where it was when this file was last closed."""
    settings = get_persistence().load_settings(controller.file_path)
    row = settings.get('cursor_row')
    col = settings.get('cursor_col')
    if not isinstance(row, int) or not isinstance(col, int):
        return
    controller.move_to(row, col)


def remember_cursor(controller: EditorController) -> None:
    persistence = get_persistence()
    settings = persistence.load_settings(controller.file_path)
    settings['cursor_row'] = controller.cursor.row
    settings['cursor_col'] = controller.cursor.col
    persistence.save_settings(controller.file_path, settings)


class Editor:
    """Runs an EditorController in the terminal."""

    def __init__(self, controller: Optional[EditorController] = None):
        """Initialize the editor components."""
        self.terminal = TerminalInterface()
        self.keyboard = KeyboardHandler(self.terminal)
        self.controller = controller or EditorController("")
        self.running = False
        # Create pipe for resize signaling
        self._resize_pipe_r, self._resize_pipe_w = os.pipe()

    def load_file(self, filename: str):
        """Load a file into a new controller.

        Raises:
            FileLoadError: if the file is missing or unreadable.
        """
        self.controller = EditorController(filename, read_document(filename))
        restore_cursor(self.controller)

    def _handle_resize(self, signum, frame):
        """Handle terminal resize signal."""
        del signum, frame # Unused
        # Write to pipe to wake up select()
        os.write(self._resize_pipe_w, EditorConstants.RESIZE_PIPE_MARKER)

    def _layout(self):
        """Give the controller the current size and repaint if it asked for it."""
        if self.controller.needs_relayout() or self.controller.viewport.height != self.terminal.height:
            self.controller.layout(self.terminal.width, self.terminal.height)
        self._draw()

    def _draw(self):
        """Draw the current editor state to terminal."""
        self.terminal.update_frame(render_frame(self.controller, self.terminal.height))

    def handle_event(self, event: InputEvent) -> EventResult:
        result = self.controller.on_event(event)
        if self.controller.quit_requested:
            self.running = False
        return result

    def run(self):
        """Run the main editor loop."""
        self.terminal.setup()
        self.running = True

        original_winch_handler = signal.signal(signal.SIGWINCH, self._handle_resize)

        try:
            with self.terminal.term.cbreak():
                need_draw = True

                while self.running:
                    if need_draw:
                        self._layout()
                        need_draw = False

                    # Wait for input on stdin or resize pipe
                    ready, _, _ = select.select([0, self._resize_pipe_r], [], [])

                    if self._resize_pipe_r in ready:
                        os.read(self._resize_pipe_r, 1024)
                        self.handle_event(InputEvent.resize())
                        self.terminal.invalidate_frame()
                        need_draw = True
                    elif 0 in ready:
                        key_event = self.keyboard.get_key_event(timeout=0)
                        if key_event:
                            self.handle_event(key_event)
                            need_draw = True

        except KeyboardInterrupt:
            pass
        finally:
            signal.signal(signal.SIGWINCH, original_winch_handler)
            os.close(self._resize_pipe_r)
            os.close(self._resize_pipe_w)
            self.terminal.cleanup()
            if self.controller.file_path:
                remember_cursor(self.controller)
