"""
Tests for the command line entry points.

Author: git-obsidian-sync Project
License: MIT
"""

import json
import pytest

from obsidian_sync.cli import (
    build_sync_parser,
    install_hook_main,
    lint_main,
    sync_main,
)


@pytest.fixture
def repo(tmp_path, monkeypatch):
    root = tmp_path / "repo"
    (root / "memory-bank").mkdir(parents=True)
    (root / "memory-bank" / "x.md").write_text("hello")
    monkeypatch.chdir(root)
    return root


def _config(repo, vault, name=".git-obsidian-sync.json"):
    path = repo / name
    path.write_text(json.dumps({
        "targetVault": str(vault),
        "mappings": [{"source": "memory-bank/", "target": "Proj/"}]
    }))
    return path


class TestSyncParser:
    """Test suite for argument parsing."""

    def test_defaults(self):
        """Test parsing without arguments."""
        args = build_sync_parser().parse_args([])

        assert args.config is None
        assert args.config_path is None
        assert args.verbose is False

    def test_positional_and_flags(self):
        """Test positional path plus short flags."""
        args = build_sync_parser().parse_args(["-v", "-c", "a.json", "b.json"])

        assert args.verbose is True
        assert args.config == "a.json"
        assert args.config_path == "b.json"


class TestSyncMain:
    """Test suite for the sync command."""

    def test_default_config_in_working_directory(self, repo, tmp_path):
        """Test a run using .git-obsidian-sync.json from the cwd."""
        vault = tmp_path / "vault"
        _config(repo, vault)

        assert sync_main([]) == 0
        assert (vault / "Proj" / "memory-bank" / "x.md").read_text() == "hello"

    def test_config_flag(self, repo, tmp_path):
        """Test --config with verbose output."""
        vault = tmp_path / "vault"
        path = _config(repo, vault, name="custom.json")

        assert sync_main(["--verbose", "--config", str(path)]) == 0
        assert (vault / "Proj" / "memory-bank" / "x.md").exists()

    def test_missing_config_exits_1(self, repo, capsys):
        """Test that a missing config is a fatal error on stderr."""
        assert sync_main(["missing.json"]) == 1

        captured = capsys.readouterr()
        assert "Configuration file not found" in captured.err

    def test_invalid_config_exits_1(self, repo):
        """Test that a config without mappings fails."""
        (repo / "bad.json").write_text(json.dumps({"targetVault": "/vault"}))

        assert sync_main(["bad.json"]) == 1

    def test_no_files_found_exits_0(self, repo, tmp_path):
        """Test that missing sources still succeed."""
        (repo / "empty.json").write_text(json.dumps({
            "targetVault": str(tmp_path / "vault"),
            "mappings": [{"source": "does-not-exist", "target": "X"}]
        }))

        assert sync_main(["empty.json"]) == 0

    def test_empty_mapping_list_exits_0(self, repo, tmp_path):
        """Test that a config with an empty mappings list succeeds."""
        (repo / "none.json").write_text(json.dumps({
            "targetVault": str(tmp_path / "vault"),
            "mappings": []
        }))

        assert sync_main(["none.json"]) == 0
        assert not (tmp_path / "vault").exists()

    def test_file_failure_exits_1(self, repo, tmp_path):
        """Test that a per-file copy failure fails the run."""
        vault = tmp_path / "vault"
        vault.mkdir()
        (vault / "Proj").write_text("blocking file")
        _config(repo, vault)

        assert sync_main([]) == 1


class TestInstallHookMain:
    """Test suite for the hook installer command."""

    def test_install(self, repo, tmp_path):
        """Test installing into the current repository."""
        (repo / ".git").mkdir()
        _config(repo, tmp_path / "vault")

        assert install_hook_main([]) == 0
        assert (repo / ".git" / "hooks" / "post-commit").is_file()

    def test_not_a_repository(self, repo, tmp_path):
        """Test that installation fails outside a git repository."""
        _config(repo, tmp_path / "vault")

        assert install_hook_main(["--repo", str(repo)]) == 1


class TestLintMain:
    """Test suite for the lint command."""

    def test_bash_only(self, tmp_path, capsys):
        """Test running the native bash checks on a bad script."""
        script = tmp_path / "bad.sh"
        script.write_text("#!/bin/sh\necho `date`\n")

        assert lint_main(["--bash", str(script)]) == 1
        assert "old-style command substitution" in capsys.readouterr().out

    def test_bash_clean(self, tmp_path):
        """Test a script that passes."""
        script = tmp_path / "good.sh"
        script.write_text("#!/bin/bash\nset -euo pipefail\necho \"$(date)\"\n")

        assert lint_main(["--bash", str(script)]) == 0

    def test_nothing_to_lint(self, tmp_path):
        """Test a directory without sources."""
        assert lint_main(["--bash", str(tmp_path)]) == 0


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
