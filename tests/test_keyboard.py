"""Test keyboard input handling."""

import pytest
from unittest.mock import Mock

from modex.keyboard import KeyboardHandler, InputEvent, EventType


class MockTerminal:
    """Mock terminal interface for testing."""

    def __init__(self):
        self._key_queue = []

    def get_key(self, timeout=None):
        """Mock get_key that returns from queue."""
        if self._key_queue:
            return self._key_queue.pop(0)
        return None

    def add_key(self, key_str):
        """Add a key to the queue."""
        self._key_queue.append(key_str)


@pytest.fixture
def handler():
    return KeyboardHandler(Mock())


def test_get_key_event_reads_from_terminal():
    """Test events are read from the terminal in order."""
    terminal = MockTerminal()
    handler = KeyboardHandler(terminal)

    terminal.add_key('a')
    terminal.add_key('<LEFT>')
    event = handler.get_key_event()
    assert event == InputEvent(EventType.CHAR, 'a', 'a')
    event = handler.get_key_event()
    assert event.type is EventType.KEY
    assert event.value == 'left'
    assert event.raw == '<LEFT>'


def test_get_key_event_without_input_returns_none():
    """Test no input gives no event."""
    handler = KeyboardHandler(MockTerminal())
    assert handler.get_key_event(timeout=0) is None


@pytest.mark.parametrize("token,name", [
    ('<UP>', 'up'),
    ('<DOWN>', 'down'),
    ('<LEFT>', 'left'),
    ('<RIGHT>', 'right'),
    ('<HOME>', 'home'),
    ('<END>', 'end'),
    ('<BACKSPACE>', 'backspace'),
    ('<TAB>', 'tab'),
    ('<ESC>', 'escape'),
    ('<Ctrl-j>', 'enter'),
    ('<Ctrl-m>', 'enter'),
    ('<Ctrl-i>', 'tab'),
    ('<Ctrl-h>', 'backspace'),
])
def test_curtsies_named_keys(handler, token, name):
    """Test curtsies key names map to named keys."""
    event = handler.parse_key(token)
    assert event.type is EventType.KEY
    assert event.value == name


def test_space_is_a_character(handler):
    """Curtsies reports the space bar by name; it is still text."""
    event = handler.parse_key('<SPACE>')
    assert event.type is EventType.CHAR
    assert event.value == ' '


@pytest.mark.parametrize("raw,name", [
    ('\n', 'enter'),
    ('\r', 'enter'),
    ('\t', 'tab'),
    ('\x7f', 'backspace'),
    ('\x08', 'backspace'),
    ('\x1b', 'escape'),
])
def test_raw_control_characters(handler, raw, name):
    """Test raw control bytes map to named keys."""
    event = handler.parse_key(raw)
    assert event.type is EventType.KEY
    assert event.value == name


def test_printable_characters(handler):
    """Test printable characters are character events."""
    for ch in ('a', 'Z', 'd', '1', '~', '\u00e9', '日'):
        event = handler.parse_key(ch)
        assert event.type is EventType.CHAR
        assert event.value == ch


def test_unhandled_input_is_other(handler):
    """Test unsupported input is reported as OTHER."""
    # Control characters with no editor meaning
    assert handler.parse_key('\x11').type is EventType.OTHER
    # Modified keys
    assert handler.parse_key('<Ctrl-q>').type is EventType.OTHER
    assert handler.parse_key('<Esc+LEFT>').type is EventType.OTHER
    assert handler.parse_key('<F1>').type is EventType.OTHER
    # Multi-character paste
    assert handler.parse_key('hello').type is EventType.OTHER


def test_input_event_constructors():
    """Test the InputEvent helper constructors."""
    assert InputEvent.char('x') == InputEvent(EventType.CHAR, 'x', 'x')
    assert InputEvent.key('up') == InputEvent(EventType.KEY, 'up', 'up')
    assert InputEvent.resize().type is EventType.RESIZE
