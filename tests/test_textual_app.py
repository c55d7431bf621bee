"""Tests for the Textual-based host."""

import pytest

from modex.controller import EditorController
from modex.keyboard import EventType
from modex.textual_app import EditorWidget, ModexApp, event_from_textual_key


def test_app_creation():
    """Test that the app can be created."""
    controller = EditorController("test.txt", "hello")
    app = ModexApp(controller)
    assert app.controller is controller


@pytest.mark.parametrize("key", ['up', 'down', 'left', 'right', 'home', 'end',
                                 'backspace', 'enter', 'tab', 'escape'])
def test_named_keys(key):
    """Test Textual named keys map to named keys."""
    event = event_from_textual_key(key, None)
    assert event.type is EventType.KEY
    assert event.value == key


def test_printable_character():
    """Test a printable key is a character event."""
    event = event_from_textual_key('a', 'a')
    assert event.type is EventType.CHAR
    assert event.value == 'a'


def test_space_is_a_character():
    """Test the space key is a character event."""
    event = event_from_textual_key('space', ' ')
    assert event.type is EventType.CHAR
    assert event.value == ' '


def test_unknown_keys_are_other():
    """Test unsupported keys are reported as OTHER."""
    assert event_from_textual_key('ctrl+q', '\x11').type is EventType.OTHER
    assert event_from_textual_key('f1', None).type is EventType.OTHER


@pytest.mark.asyncio
async def test_typing_in_app():
    """Test typing through the Textual app edits the buffer."""
    controller = EditorController("test.txt", "hello")
    app = ModexApp(controller)
    async with app.run_test() as pilot:
        await pilot.press('i', 'z')
        assert controller.buffer.lines == ["zhello"]
        assert app.query_one(EditorWidget).controller is controller


@pytest.mark.asyncio
async def test_quit_key_exits_app():
    """Test x quits the Textual app."""
    controller = EditorController("test.txt", "hello")
    app = ModexApp(controller)
    async with app.run_test() as pilot:
        await pilot.press('x')
    assert controller.quit_requested
