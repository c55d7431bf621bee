"""Line buffer holding the document being edited.

Lines are stored as ``str``. Mutations are addressed by UTF-8 byte offsets,
which callers derive from grapheme positions (see ``graphemes.GraphemeIndex``).
An offset that does not fall on a code point boundary fails to decode and
raises ``UnicodeDecodeError``; callers are expected to pass grapheme
boundaries only.
"""

from __future__ import annotations

import logging
import os
import tempfile

from .constants import EditorConstants

logger = logging.getLogger(__name__)

ENCODING = 'utf-8'


class BufferIndexError(IndexError):
    """Raised when a row outside the buffer is requested."""


class Buffer:
    """Ordered, never-empty sequence of text lines."""

    lines: list[str]

    def __init__(self, lines: list[str] | None = None):
        self.lines = list(lines) if lines else [""]

    @classmethod
    def from_text(cls, text: str) -> "Buffer":
        """Split file content into lines on ``\\n``.

        Joining the result with ``\\n`` reproduces ``text`` exactly.
        """
        return cls(text.split('\n'))

    def __len__(self) -> int:
        return len(self.lines)

    def line(self, row: int) -> str:
        if not 0 <= row < len(self.lines):
            raise BufferIndexError(f"row {row} out of range (0..{len(self.lines) - 1})")
        return self.lines[row]

    def set_line(self, row: int, text: str) -> None:
        self.line(row)
        self.lines[row] = text

    def _encoded(self, row: int) -> bytes:
        return self.line(row).encode(ENCODING)

    def insert_char(self, row: int, byte_offset: int, ch: str) -> None:
        """Insert ``ch`` (one or more characters) at ``byte_offset``."""
        data = self._encoded(row)
        self.lines[row] = (data[:byte_offset] + ch.encode(ENCODING) + data[byte_offset:]).decode(ENCODING)

    def remove_bytes(self, row: int, byte_offset: int, byte_len: int) -> None:
        """Remove ``byte_len`` bytes starting at ``byte_offset``.

        Used to delete one whole grapheme cluster, which may span several
        code points.
        """
        data = self._encoded(row)
        self.lines[row] = (data[:byte_offset] + data[byte_offset + byte_len:]).decode(ENCODING)

    def split_line(self, row: int, byte_offset: int) -> None:
        """Keep the prefix on ``row`` and insert the suffix as a new line after it."""
        data = self._encoded(row)
        self.lines[row] = data[:byte_offset].decode(ENCODING)
        self.lines.insert(row + 1, data[byte_offset:].decode(ENCODING))

    def merge_with_previous(self, row: int) -> int | None:
        """Append line ``row`` to line ``row - 1`` and remove it.

        Returns:
            Byte length of the destination line before the merge, or None
            if ``row`` is 0 and nothing was merged.
        """
        self.line(row)
        if row == 0:
            return None
        boundary = len(self._encoded(row - 1))
        text = self.lines.pop(row)
        if text:
            self.lines[row - 1] += text
        return boundary

    def delete_line(self, row: int) -> None:
        """Remove line ``row``; the sole remaining line is emptied instead."""
        self.line(row)
        if len(self.lines) == 1:
            self.lines[0] = ""
        else:
            del self.lines[row]

    def serialize(self) -> str:
        return '\n'.join(self.lines)

    def persist(self, path: str) -> bool:
        """Write the buffer to ``path`` atomically.

        Returns:
            True if the file was written, False otherwise. Errors are logged,
            never raised.
        """
        temp_filename = None
        try:
            content = self.serialize().encode(ENCODING)
            # Temp file in the same directory so the rename stays on one filesystem
            dir_name = os.path.dirname(path) or '.'
            with tempfile.NamedTemporaryFile(mode='wb', dir=dir_name,
                                             prefix='.' + os.path.basename(path),
                                             suffix=EditorConstants.ATOMIC_SAVE_SUFFIX,
                                             delete=False) as temp_file:
                temp_filename = temp_file.name
                temp_file.write(content)
                temp_file.flush()
                os.fsync(temp_file.fileno())
            os.replace(temp_filename, path)
            logger.debug("Saved %d lines to %s", len(self.lines), path)
            return True
        except (OSError, UnicodeError) as e:
            logger.warning(f"Could not save {path}: {e}")
            if temp_filename is not None and os.path.exists(temp_filename):
                try:
                    os.remove(temp_filename)
                except OSError:
                    pass
            return False
