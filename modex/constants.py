"""Constants and configuration for the modex editor."""

class EditorConstants:
    """Central configuration constants for the editor."""

    # Editing
    TAB_SIZE = 4  # Spaces inserted by the Tab key

    # Normal-mode command keys
    INSERT_KEY = 'i'
    DELETE_LINE_KEY = 'd'  # Pressed twice to delete the current line
    SAVE_KEY = 's'
    QUIT_KEY = 'x'

    # Layout
    STATUS_BAR_LINES = 1  # Bottom row of the viewport is the status bar

    # Status messages
    SAVE_OK_MESSAGE = "File saved"
    SAVE_FAILED_MESSAGE = "Failed to save file"
    LINES_LABEL = "Lines: {}"
    INSERT_MODE_LABEL = "INSERT MODE"

    # Host start-up errors
    NO_FILENAME_MESSAGE = "Filename not specified"
    FILE_MISSING_MESSAGE = "File {} does not exist"
    FILE_UNREADABLE_MESSAGE = "Failed to read file {}"

    # File operations
    ATOMIC_SAVE_SUFFIX = ".tmp"  # Suffix for temporary save files

    # Resize handling
    RESIZE_PIPE_MARKER = b'R'  # Byte written to pipe to signal resize

    # Logging
    LOG_LEVEL_ENV = "MODEX_LOG_LEVEL"
    LOG_FILE_NAME = "modex.log"
