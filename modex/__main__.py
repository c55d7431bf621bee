"""Modex CLI entry point.

Allows running via `python -m modex` and provides the console script
defined in `pyproject.toml`.
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

import platformdirs

from .constants import EditorConstants
from .version import get_version_string


def _escape_bytes(s: str) -> str:
    """Return a printable representation of raw key string."""
    return s.encode('unicode_escape').decode('ascii')


def configure_logging() -> None:
    """Send log records to a file; the fullscreen UI owns the terminal."""
    level_name = os.environ.get(EditorConstants.LOG_LEVEL_ENV, "WARNING").upper()
    level = getattr(logging, level_name, None)
    if not isinstance(level, int):
        level = logging.WARNING
    log_dir = Path(platformdirs.user_log_dir("modex"))
    try:
        log_dir.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(log_dir / EditorConstants.LOG_FILE_NAME,
                                                       encoding='utf-8')
    except OSError:
        handler = logging.NullHandler()
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    root = logging.getLogger()
    root.addHandler(handler)
    root.setLevel(level)


def run_keyboard_test() -> None:
    """Run an interactive keyboard test using the editor's input stack.

    Prints the InputEvent parsed from each key press. Quit with ESC.
    """
    from .terminal import TerminalInterface
    from .keyboard import KeyboardHandler, EventType

    print("Keyboard test mode: press keys to see parsed events.")
    print("Quit with ESC.")

    term = TerminalInterface()
    kb = KeyboardHandler(term)
    term.setup()
    try:
        while True:
            ev = kb.get_key_event(timeout=None)
            if not ev:
                continue
            if ev.type is EventType.KEY and ev.value == 'escape':
                print("Exiting keyboard test.")
                break
            print(f"type={ev.type.value} value={_escape_bytes(ev.value)} raw='{_escape_bytes(ev.raw)}'")
    finally:
        term.cleanup()


def main() -> None:
    # Very small arg parsing: version, keyboard test, optional --textual, filename
    args = sys.argv[1:]
    if args and args[0] in ("--version", "-V"):
        print(get_version_string())
        return
    if args and args[0] in ('--keytest', '--keyboard-test'):
        run_keyboard_test()
        return

    use_textual = False
    if args and args[0] == '--textual':
        use_textual = True
        args = args[1:]
    if not args:
        print(EditorConstants.NO_FILENAME_MESSAGE)
        sys.exit(1)

    configure_logging()

    # Lazy import to avoid importing UI deps for --version
    from .editor import Editor, FileLoadError, read_document, restore_cursor, remember_cursor
    from .controller import EditorController

    filename = args[0]
    try:
        if use_textual:
            controller = EditorController(filename, read_document(filename))
        else:
            editor = Editor()
            editor.load_file(filename)
    except FileLoadError as e:
        print(e)
        sys.exit(1)

    if use_textual:
        from .textual_app import ModexApp
        restore_cursor(controller)
        ModexApp(controller).run()
        remember_cursor(controller)
    else:
        editor.run()


if __name__ == "__main__":  # pragma: no cover
    main()
