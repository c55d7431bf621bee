"""Textual host running the editor controller as a widget."""

from typing import Optional

from rich.text import Text
from textual import events
from textual.app import App, ComposeResult
from textual.widget import Widget

from .controller import EditorController, EventResult
from .keyboard import NAMED_KEYS, EventType, InputEvent
from .view import render_frame


def event_from_textual_key(key: str, character: Optional[str]) -> InputEvent:
    """Translate a Textual key press into an InputEvent."""
    if key in NAMED_KEYS:
        return InputEvent(EventType.KEY, key, key)
    if character is not None and len(character) == 1 and character.isprintable():
        return InputEvent(EventType.CHAR, character, key)
    return InputEvent(EventType.OTHER, key, key)


class EditorWidget(Widget, can_focus=True):
    """Widget that displays and edits the controller's buffer."""

    DEFAULT_CSS = """
    EditorWidget {
        width: 100%;
        height: 100%;
    }
    """

    def __init__(self, controller: EditorController):
        super().__init__()
        self.controller = controller

    def render(self) -> Text:
        height = self.size.height
        frame = render_frame(self.controller, height)
        text = Text(no_wrap=True, overflow="crop")
        for line in frame.lines:
            before, cell, after = line.segments
            text.append(before)
            if cell:
                text.append(cell, style="reverse")
            text.append(after)
            text.append("\n")
        # Pad so the status line sits on the bottom row
        text.append("\n" * max(0, height - 1 - len(frame.lines)))
        text.append(frame.status, style="bold")
        return text

    def _relayout(self) -> None:
        if self.controller.needs_relayout():
            self.controller.layout(self.size.width, self.size.height)
            self.refresh()

    def on_resize(self, event: events.Resize) -> None:
        self.controller.on_event(InputEvent.resize())
        self._relayout()

    def on_key(self, event: events.Key) -> None:
        result = self.controller.on_event(event_from_textual_key(event.key, event.character))
        if result is EventResult.CONSUMED:
            event.prevent_default()
            event.stop()
        if self.controller.quit_requested:
            self.app.exit()
            return
        self._relayout()


class ModexApp(App):
    """Textual app hosting a single editor."""

    def __init__(self, controller: EditorController):
        super().__init__()
        self.controller = controller

    def compose(self) -> ComposeResult:
        yield EditorWidget(self.controller)

    def on_mount(self) -> None:
        self.sub_title = self.controller.file_path
        self.query_one(EditorWidget).focus()
