"""
Unit Tests for File Discovery

Tests Markdown discovery for directory and file mappings, missing
sources and the cross-mapping merge.

Author: git-obsidian-sync Project
License: MIT
"""

import pytest
from pathlib import Path

from obsidian_sync.config.schema import Mapping
from obsidian_sync.core.discovery import discover, discover_all, belongs_to


@pytest.fixture
def repo(tmp_path):
    """Repository tree with Markdown and other files."""
    bank = tmp_path / "memory-bank"
    (bank / "nested" / "deep").mkdir(parents=True)
    (bank / "projectbrief.md").write_text("brief")
    (bank / "activeContext.md").write_text("context")
    (bank / "nested" / "notes.md").write_text("notes")
    (bank / "nested" / "deep" / "log.md").write_text("log")
    (bank / "image.png").write_bytes(b"\x89PNG")
    (bank / "nested" / "script.py").write_text("print()")
    (bank / "README.MD").write_text("upper case")

    docs = tmp_path / "docs"
    docs.mkdir()
    (docs / "readme.md").write_text("readme")
    (docs / "todo.txt").write_text("todo")
    return tmp_path


class TestDiscover:
    """Test suite for single-mapping discovery."""

    def test_directory_counts_only_markdown(self, repo):
        """Test that N .md files among M others yield N entries."""
        mapping = Mapping(source=str(repo / "memory-bank"), target="Proj")

        files = discover(mapping)

        assert len(files) == 4
        assert all(f.name.endswith(".md") for f in files)

    def test_directory_results_sorted(self, repo):
        """Test stable sorted order."""
        mapping = Mapping(source=str(repo / "memory-bank"), target="Proj")

        files = discover(mapping)

        assert files == sorted(files)
        assert all(f.is_absolute() for f in files)

    def test_recursive_discovery(self, repo):
        """Test that nested directories are searched."""
        mapping = Mapping(source=str(repo / "memory-bank"), target="Proj")

        files = discover(mapping)

        assert repo / "memory-bank" / "nested" / "deep" / "log.md" in files

    def test_single_markdown_file(self, repo):
        """Test a file mapping that names a Markdown file."""
        mapping = Mapping(source=str(repo / "docs" / "readme.md"), target="Docs")

        assert discover(mapping) == [repo / "docs" / "readme.md"]

    def test_single_non_markdown_file(self, repo):
        """Test a file mapping that names another file type."""
        mapping = Mapping(source=str(repo / "docs" / "todo.txt"), target="Docs")

        assert discover(mapping) == []

    def test_missing_source_yields_nothing(self, repo):
        """Test that a missing source is not fatal."""
        mapping = Mapping(source=str(repo / "missing"), target="Docs")

        assert discover(mapping) == []

    def test_empty_directory(self, tmp_path):
        """Test a directory without Markdown files."""
        (tmp_path / "empty").mkdir()
        mapping = Mapping(source=str(tmp_path / "empty"), target="Docs")

        assert discover(mapping) == []


class TestDiscoverAll:
    """Test suite for the cross-mapping merge."""

    def test_duplicates_collapse(self, repo):
        """Test that a file reachable from two mappings is counted once."""
        mappings = [
            Mapping(source=str(repo / "memory-bank"), target="A"),
            Mapping(source=str(repo / "memory-bank" / "nested"), target="B"),
            Mapping(source=str(repo / "memory-bank" / "nested" / "notes.md"), target="C"),
        ]

        files, missing = discover_all(mappings)

        assert len(files) == 4
        assert len(files) == len(set(files))
        assert missing == []

    def test_missing_sources_reported(self, repo):
        """Test that missing sources are listed but do not fail."""
        mappings = [
            Mapping(source=str(repo / "docs"), target="Docs"),
            Mapping(source=str(repo / "gone"), target="Gone"),
        ]

        files, missing = discover_all(mappings)

        assert files == [repo / "docs" / "readme.md"]
        assert missing == [str(repo / "gone")]

    def test_no_mappings(self):
        """Test an empty mapping list."""
        files, missing = discover_all([])

        assert files == []
        assert missing == []

    def test_merged_list_sorted(self, repo):
        """Test sorted order across mappings."""
        mappings = [
            Mapping(source=str(repo / "memory-bank"), target="A"),
            Mapping(source=str(repo / "docs"), target="B"),
        ]

        files, _ = discover_all(mappings)

        assert files == sorted(files)
        assert len(files) == 5


class TestBelongsTo:
    """Test suite for mapping membership."""

    def test_file_inside_directory(self, repo):
        """Test directory containment."""
        mapping = Mapping(source=str(repo / "memory-bank"), target="A")

        assert belongs_to(mapping, repo / "memory-bank" / "nested" / "notes.md") is True
        assert belongs_to(mapping, repo / "docs" / "readme.md") is False

    def test_sibling_with_common_prefix(self, repo):
        """Test that memory-bank2 is not inside memory-bank."""
        other = repo / "memory-bank2"
        other.mkdir()
        (other / "x.md").write_text("x")
        mapping = Mapping(source=str(repo / "memory-bank"), target="A")

        assert belongs_to(mapping, other / "x.md") is False

    def test_file_mapping_exact_match(self, repo):
        """Test single-file membership."""
        mapping = Mapping(source=str(repo / "docs" / "readme.md"), target="Docs")

        assert belongs_to(mapping, repo / "docs" / "readme.md") is True
        assert belongs_to(mapping, repo / "memory-bank" / "activeContext.md") is False

    def test_missing_source_owns_nothing(self, repo):
        """Test that a missing source matches no file."""
        mapping = Mapping(source=str(repo / "gone"), target="Gone")

        assert belongs_to(mapping, Path(repo / "docs" / "readme.md")) is False


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
