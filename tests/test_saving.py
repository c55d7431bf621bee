import os
import tempfile

import pytest

from modex.controller import EditorController
from modex.editor import FileLoadError, read_document
from modex.keyboard import InputEvent


def write_bytes(path, data):
    with open(path, 'wb') as f:
        f.write(data)


def read_bytes(path):
    with open(path, 'rb') as f:
        return f.read()


def test_load_then_save_is_byte_identical():
    """Loading and saving without edits reproduces the file exactly."""
    content = "a\r\nb\n\nend\n".encode('utf-8')
    with tempfile.TemporaryDirectory() as temp_dir:
        path = os.path.join(temp_dir, "doc.txt")
        write_bytes(path, content)

        controller = EditorController(path, read_document(path))
        assert controller.buffer.lines == ["a\r", "b", "", "end", ""]
        assert controller.save() is True
        assert read_bytes(path) == content


def test_load_then_save_unicode_file():
    """Test a Unicode file saves back unchanged."""
    content = "Hello 世界\nété\n\U0001F600".encode('utf-8')
    with tempfile.TemporaryDirectory() as temp_dir:
        path = os.path.join(temp_dir, "doc.txt")
        write_bytes(path, content)

        controller = EditorController(path, read_document(path))
        controller.save()
        assert read_bytes(path) == content


def test_empty_file_round_trip():
    """Test an empty file saves back empty."""
    with tempfile.TemporaryDirectory() as temp_dir:
        path = os.path.join(temp_dir, "empty.txt")
        write_bytes(path, b"")

        controller = EditorController(path, read_document(path))
        assert controller.buffer.lines == [""]
        controller.save()
        assert read_bytes(path) == b""


def test_edit_then_save_via_keys():
    """Test editing and saving through key events."""
    with tempfile.TemporaryDirectory() as temp_dir:
        path = os.path.join(temp_dir, "doc.txt")
        write_bytes(path, b"hello\nworld\n")

        controller = EditorController(path, read_document(path))
        controller.on_event(InputEvent.char('i'))
        controller.on_event(InputEvent.key('end'))
        controller.on_event(InputEvent.char('!'))
        controller.on_event(InputEvent.key('escape'))
        controller.on_event(InputEvent.char('s'))

        assert controller.status_message == "File saved"
        assert read_bytes(path) == b"hello!\nworld\n"
        assert [name for name in os.listdir(temp_dir)] == ["doc.txt"]


def test_read_missing_file_raises():
    """Test reading a missing file."""
    with pytest.raises(FileLoadError) as exc_info:
        read_document("/nonexistent/file.txt")
    assert str(exc_info.value) == "File /nonexistent/file.txt does not exist"


def test_read_invalid_utf8_raises():
    """Test reading a file that is not UTF-8."""
    with tempfile.TemporaryDirectory() as temp_dir:
        path = os.path.join(temp_dir, "binary.dat")
        write_bytes(path, b"\xff\xfe\x00bad")
        with pytest.raises(FileLoadError) as exc_info:
            read_document(path)
        assert str(exc_info.value) == f"Failed to read file {path}"


def test_read_directory_raises():
    """Test reading a directory."""
    with tempfile.TemporaryDirectory() as temp_dir:
        with pytest.raises(FileLoadError):
            read_document(temp_dir)
