"""Keyboard input handling using curtsies-style tokens."""

from typing import Optional
from dataclasses import dataclass
from enum import Enum


class EventType(Enum):
    """Types of input events delivered to the controller."""
    CHAR = "char"      # Printable character
    KEY = "key"        # Named key ('left', 'backspace', ...)
    RESIZE = "resize"  # Window size changed
    OTHER = "other"    # Anything the editor does not handle


# Named keys the controller understands
NAMED_KEYS = frozenset({
    'up', 'down', 'left', 'right', 'home', 'end',
    'backspace', 'enter', 'tab', 'escape',
})


@dataclass(frozen=True)
class InputEvent:
    """Represents a decoded input event."""
    type: EventType
    value: str = ""  # The character or key name
    raw: str = ""    # The raw token from the terminal

    @classmethod
    def char(cls, ch: str) -> "InputEvent":
        return cls(EventType.CHAR, ch, ch)

    @classmethod
    def key(cls, name: str) -> "InputEvent":
        return cls(EventType.KEY, name, name)

    @classmethod
    def resize(cls) -> "InputEvent":
        return cls(EventType.RESIZE)


class KeyboardHandler:
    """Handles keyboard input using curtsies-style key names."""

    def __init__(self, terminal_interface):
        """Initialize with a terminal interface."""
        self.terminal = terminal_interface

    def get_key_event(self, timeout: Optional[float] = None) -> Optional[InputEvent]:
        """Get next key token and map it to an InputEvent."""
        key = self.terminal.get_key(timeout)
        if not key:
            return None
        return self.parse_key(key)

    def parse_key(self, key) -> InputEvent:
        """Parse a curtsies key token into an InputEvent.

        Args:
            key: curtsies key name such as 'a', '<LEFT>' or '<Ctrl-j>'

        Returns:
            Parsed InputEvent
        """
        key_str = str(key)

        # Curtsies-style key names like '<LEFT>', '<Ctrl-x>', '<BACKSPACE>'
        if key_str.startswith('<') and key_str.endswith('>') and len(key_str) > 2:
            name = key_str[1:-1].lower().replace('+', '-')
            parts = name.split('-')
            base = parts[-1]
            mods = set(parts[:-1])
            if base in ('space', 'spacebar', 'spc') and not mods:
                return InputEvent(EventType.CHAR, ' ', key_str)
            if base == 'esc' and not mods:
                base = 'escape'
            # Ctrl-J / Ctrl-M are Enter, Ctrl-I is Tab, Ctrl-H is Backspace
            if mods == {'ctrl'}:
                base = {'j': 'enter', 'm': 'enter', 'i': 'tab', 'h': 'backspace'}.get(base, base)
                mods = set()
            if not mods and base in NAMED_KEYS:
                return InputEvent(EventType.KEY, base, key_str)
            return InputEvent(EventType.OTHER, name, key_str)

        if len(key_str) == 1:
            o = ord(key_str)
            if key_str in ('\n', '\r'):
                return InputEvent(EventType.KEY, 'enter', key_str)
            if key_str == '\t':
                return InputEvent(EventType.KEY, 'tab', key_str)
            if key_str in ('\x7f', '\x08'):
                return InputEvent(EventType.KEY, 'backspace', key_str)
            if key_str == '\x1b':
                return InputEvent(EventType.KEY, 'escape', key_str)
            if o < 32:
                # Other control characters are not editor input
                return InputEvent(EventType.OTHER, key_str, key_str)
            return InputEvent(EventType.CHAR, key_str, key_str)

        # Multi-character tokens that are not key names (e.g. pasted text)
        return InputEvent(EventType.OTHER, key_str, key_str)
