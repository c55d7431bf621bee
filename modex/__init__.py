"""Modex - A small modal text editor for the terminal."""

from .buffer import Buffer, BufferIndexError
from .commands import Mode
from .controller import EditorController, EventResult, Cursor, Viewport
from .keyboard import InputEvent, EventType
from .view import render_frame, Frame

__all__ = [
    'Buffer',
    'BufferIndexError',
    'Mode',
    'EditorController',
    'EventResult',
    'Cursor',
    'Viewport',
    'InputEvent',
    'EventType',
    'render_frame',
    'Frame',
]
