"""Command pattern implementation for editor actions."""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Dict, Tuple, Optional, TYPE_CHECKING

from .constants import EditorConstants
from .keyboard import EventType, InputEvent

if TYPE_CHECKING:
    from .controller import EditorController


class Mode(Enum):
    """Editor modes. Normal interprets characters as commands, Insert as text."""
    NORMAL = "normal"
    INSERT = "insert"


class EditorCommand(ABC):
    """Base class for editor commands."""

    @abstractmethod
    def execute(self, controller: 'EditorController', event: InputEvent) -> bool:
        """Execute the command.

        Args:
            controller: EditorController instance
            event: The input event that triggered this command

        Returns:
            True if the event was consumed
        """
        pass


class MovementCommand(EditorCommand):
    """Base class for cursor movement commands."""

    def execute(self, controller: 'EditorController', event: InputEvent) -> bool:
        self._move(controller)
        controller.data_changed = True
        return True

    @abstractmethod
    def _move(self, controller: 'EditorController'):
        """Perform the movement."""
        pass


class UpCommand(MovementCommand):
    def _move(self, controller):
        controller.move_cursor_up()


class DownCommand(MovementCommand):
    def _move(self, controller):
        controller.move_cursor_down()


class LeftCommand(MovementCommand):
    def _move(self, controller):
        controller.move_cursor_left()


class RightCommand(MovementCommand):
    def _move(self, controller):
        controller.move_cursor_right()


class HomeCommand(MovementCommand):
    def _move(self, controller):
        controller.move_home()


class EndCommand(MovementCommand):
    def _move(self, controller):
        controller.move_end()


class EditCommand(EditorCommand):
    """Base class for commands that change the buffer."""

    def execute(self, controller: 'EditorController', event: InputEvent) -> bool:
        self._edit(controller, event)
        controller.data_changed = True
        return True

    @abstractmethod
    def _edit(self, controller: 'EditorController', event: InputEvent):
        """Perform the edit."""
        pass


class InsertTextCommand(EditCommand):
    def _edit(self, controller, event):
        controller.insert_at_cursor(event.value)


class BackspaceCommand(EditCommand):
    def _edit(self, controller, event):
        controller.backward_delete()


class NewlineCommand(EditCommand):
    def _edit(self, controller, event):
        controller.split_line_at_cursor()


class TabCommand(EditCommand):
    def _edit(self, controller, event):
        controller.insert_tab()


class DeleteLineCommand(EditCommand):
    def _edit(self, controller, event):
        controller.delete_current_line()


class SwitchModeCommand(EditorCommand):
    """Switch the controller into a fixed mode."""

    def __init__(self, mode: Mode):
        self.mode = mode

    def execute(self, controller, event):
        controller.set_mode(self.mode)
        return True


class SaveCommand(EditorCommand):
    def execute(self, controller, event):
        controller.save()
        return True


class QuitCommand(EditorCommand):
    def execute(self, controller, event):
        controller.request_quit()
        return True


class CommandRegistry:
    """Registry for mapping input events to commands, per mode.

    Single events are keyed on ``(mode, event type, value)``. Two-key
    sequences of characters (such as ``dd``) are keyed on ``(mode, keys)``
    and take precedence when the first key is pending.
    """

    def __init__(self):
        self._commands: Dict[Tuple[Mode, EventType, str], EditorCommand] = {}
        self._sequences: Dict[Tuple[Mode, str], EditorCommand] = {}
        self._char_fallbacks: Dict[Mode, EditorCommand] = {}
        self._setup_default_commands()

    def _setup_default_commands(self):
        """Set up the default command mappings."""
        # Movement in both modes
        for mode in Mode:
            self.register(mode, (EventType.KEY, 'up'), UpCommand())
            self.register(mode, (EventType.KEY, 'down'), DownCommand())
            self.register(mode, (EventType.KEY, 'left'), LeftCommand())
            self.register(mode, (EventType.KEY, 'right'), RightCommand())
            self.register(mode, (EventType.KEY, 'home'), HomeCommand())
            self.register(mode, (EventType.KEY, 'end'), EndCommand())

        # Normal-mode commands
        self.register(Mode.NORMAL, (EventType.CHAR, EditorConstants.INSERT_KEY), SwitchModeCommand(Mode.INSERT))
        self.register(Mode.NORMAL, (EventType.CHAR, EditorConstants.SAVE_KEY), SaveCommand())
        self.register(Mode.NORMAL, (EventType.CHAR, EditorConstants.QUIT_KEY), QuitCommand())
        self.register_sequence(Mode.NORMAL, EditorConstants.DELETE_LINE_KEY * 2, DeleteLineCommand())

        # Insert-mode editing
        self.register(Mode.INSERT, (EventType.KEY, 'backspace'), BackspaceCommand())
        self.register(Mode.INSERT, (EventType.KEY, 'enter'), NewlineCommand())
        self.register(Mode.INSERT, (EventType.KEY, 'tab'), TabCommand())
        self.register(Mode.INSERT, (EventType.KEY, 'escape'), SwitchModeCommand(Mode.NORMAL))
        self.register_char_fallback(Mode.INSERT, InsertTextCommand())

    def register(self, mode: Mode, key: Tuple[EventType, str], command: EditorCommand):
        """Register a command for an event in the given mode."""
        self._commands[(mode, key[0], key[1])] = command

    def register_sequence(self, mode: Mode, keys: str, command: EditorCommand):
        """Register a command for two consecutive character presses."""
        if len(keys) != 2:
            raise ValueError(f"sequence must be two keys, got {keys!r}")
        self._sequences[(mode, keys)] = command

    def register_char_fallback(self, mode: Mode, command: EditorCommand):
        """Register the command used for characters with no own binding."""
        self._char_fallbacks[mode] = command

    def get_command(self, mode: Mode, event: InputEvent,
                    pending: Optional[str] = None) -> Optional[EditorCommand]:
        """Get the command for an event, given the pending key if any."""
        if event.type is EventType.CHAR:
            if pending is not None:
                command = self._sequences.get((mode, pending + event.value))
                if command:
                    return command
            return self._commands.get((mode, EventType.CHAR, event.value),
                                      self._char_fallbacks.get(mode))
        return self._commands.get((mode, event.type, event.value))
