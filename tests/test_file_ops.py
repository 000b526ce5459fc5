"""
Unit Tests for File Operations

Tests byte-preserving copies, prepends and utility functions.

Author: git-obsidian-sync Project
License: MIT
"""

import pytest
import tempfile
from pathlib import Path
from unittest.mock import patch

from obsidian_sync.utils.file_ops import (
    copy_file_bytes,
    prepend_bytes,
    is_markdown_file
)

_real_temp_file = tempfile.NamedTemporaryFile


class _FullDiskFile:
    """Temporary file wrapper whose second write fails like a full disk."""

    def __init__(self, handle):
        self._handle = handle
        self.name = handle.name
        self._writes = 0

    def write(self, data):
        self._writes += 1
        if self._writes > 1:
            raise OSError(28, "No space left on device")
        return self._handle.write(data)

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self._handle.close()
        return False


def _failing_temp_file(*args, **kwargs):
    return _FullDiskFile(_real_temp_file(*args, **kwargs))


class TestCopyFileBytes:
    """Test suite for byte-preserving copies."""

    def test_copy_creates_parent_directories(self, tmp_path):
        """Test that missing ancestors are created."""
        source = tmp_path / "source.md"
        source.write_text("hello")
        destination = tmp_path / "vault" / "a" / "b" / "source.md"

        success, error = copy_file_bytes(source, destination)

        assert success is True
        assert error is None
        assert destination.read_text() == "hello"
        assert source.exists()

    def test_copy_preserves_bytes(self, tmp_path):
        """Test that line endings and non-UTF-8 bytes survive."""
        payload = b"line one\r\nline two\n\xff\xfe binary\r"
        source = tmp_path / "source.md"
        source.write_bytes(payload)
        destination = tmp_path / "out" / "source.md"

        copy_file_bytes(source, destination)

        assert destination.read_bytes() == payload

    def test_copy_overwrites_existing(self, tmp_path):
        """Test that an existing destination is replaced."""
        source = tmp_path / "source.md"
        source.write_text("new")
        destination = tmp_path / "dest.md"
        destination.write_text("old content that is longer")

        success, _ = copy_file_bytes(source, destination)

        assert success is True
        assert destination.read_text() == "new"

    def test_copy_missing_source_fails(self, tmp_path):
        """Test copying a non-existent file."""
        success, error = copy_file_bytes(tmp_path / "missing.md", tmp_path / "dest.md")

        assert success is False
        assert "not a file" in error

    def test_copy_blocked_destination_fails(self, tmp_path):
        """Test that an unwritable destination is reported, not raised."""
        source = tmp_path / "source.md"
        source.write_text("content")
        blocker = tmp_path / "blocked"
        blocker.write_text("I am a file, not a directory")

        success, error = copy_file_bytes(source, blocker / "source.md")

        assert success is False
        assert error is not None


class TestPrependBytes:
    """Test suite for in-place prepends."""

    def test_prepend_header(self, tmp_path):
        """Test that the header goes before the original content."""
        target = tmp_path / "note.md"
        target.write_bytes(b"body\n")

        success, error = prepend_bytes(target, b"---\n---\n\n")

        assert success is True
        assert error is None
        assert target.read_bytes() == b"---\n---\n\nbody\n"

    def test_prepend_missing_file_fails(self, tmp_path):
        """Test rewriting a file that doesn't exist."""
        success, error = prepend_bytes(tmp_path / "missing.md", b"x")

        assert success is False
        assert error is not None

    def test_failed_write_keeps_original(self, tmp_path):
        """Test that a write failing midway leaves the file intact."""
        target = tmp_path / "note.md"
        target.write_bytes(b"x" * 100)

        with patch(
            "obsidian_sync.utils.file_ops.tempfile.NamedTemporaryFile",
            side_effect=_failing_temp_file
        ):
            success, error = prepend_bytes(target, b"---\nsync-timestamp: now\n---\n\n")

        assert success is False
        assert "No space left" in error
        assert target.read_bytes() == b"x" * 100
        assert sorted(p.name for p in tmp_path.iterdir()) == ["note.md"]

    def test_failed_replace_removes_temp_file(self, tmp_path):
        """Test cleanup when the final move fails."""
        target = tmp_path / "note.md"
        target.write_bytes(b"body")

        with patch("obsidian_sync.utils.file_ops.os.replace", side_effect=OSError("busy")):
            success, error = prepend_bytes(target, b"header\n")

        assert success is False
        assert target.read_bytes() == b"body"
        assert sorted(p.name for p in tmp_path.iterdir()) == ["note.md"]

    def test_prepend_keeps_file_mode(self, tmp_path):
        """Test that the rewritten file keeps its permissions."""
        target = tmp_path / "note.md"
        target.write_bytes(b"body")
        target.chmod(0o644)

        prepend_bytes(target, b"header\n")

        assert target.stat().st_mode & 0o777 == 0o644


class TestMarkdownDetection:
    """Test suite for the Markdown filter."""

    def test_markdown_names(self):
        """Test names ending in .md."""
        assert is_markdown_file("notes.md") is True
        assert is_markdown_file("/a/b/productContext.md") is True
        assert is_markdown_file(Path("dir.with.dots/readme.md")) is True

    def test_non_markdown_names(self):
        """Test other extensions and case variants."""
        assert is_markdown_file("notes.txt") is False
        assert is_markdown_file("notes.MD") is False
        assert is_markdown_file("notes.markdown") is False
        assert is_markdown_file("md") is False


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
