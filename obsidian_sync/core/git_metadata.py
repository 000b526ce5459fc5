"""
Git Commit Metadata

Reads hash, author, timestamp and subject of the current HEAD commit.
Every field falls back to "unknown" when git is missing or the query
fails, e.g. in a repository without commits.

Author: git-obsidian-sync Project
License: MIT
"""

import shutil
from dataclasses import dataclass
from typing import List, Optional

from ..utils.logger import get_logger
from ..utils.process import run_command

logger = get_logger(__name__)

UNKNOWN = "unknown"


@dataclass(frozen=True)
class CommitMetadata:
    """Provenance of the commit being synchronized."""
    commit_hash: str = UNKNOWN
    author: str = UNKNOWN
    timestamp: str = UNKNOWN
    message: str = UNKNOWN


class GitMetadataReader:
    """Read-only queries against a git repository."""

    def __init__(self, repo_root: Optional[str] = None, git_executable: str = "git"):
        """
        Initialize the reader.

        Args:
            repo_root: Repository working directory (None uses the current one)
            git_executable: Name or path of the git binary
        """
        self.repo_root = repo_root
        self.git_executable = git_executable

    def is_available(self) -> bool:
        return shutil.which(self.git_executable) is not None

    def _query(self, args: List[str]) -> str:
        result = run_command([self.git_executable] + args, cwd=self.repo_root)
        value = result.stdout.strip()
        if not result.success or not value:
            logger.debug(f"git {' '.join(args)} failed: {result.stderr.strip()}")
            return UNKNOWN
        return value

    def read_head(self) -> CommitMetadata:
        """
        Query the HEAD commit.

        Returns:
            CommitMetadata with "unknown" for anything that could not be read
        """
        if not self.is_available():
            logger.warning("Git is not installed or not in PATH, commit metadata will be 'unknown'")
            return CommitMetadata()

        metadata = CommitMetadata(
            commit_hash=self._query(["rev-parse", "HEAD"]),
            author=self._query(["log", "-1", "--pretty=format:%an"]),
            timestamp=self._query(["log", "-1", "--pretty=format:%ad", "--date=iso"]),
            message=self._query(["log", "-1", "--pretty=format:%s"]),
        )
        logger.debug(f"Commit metadata: {metadata}")
        return metadata


def get_commit_metadata(repo_root: Optional[str] = None) -> CommitMetadata:
    """
    Convenience function to read HEAD metadata.

    Args:
        repo_root: Repository working directory

    Returns:
        CommitMetadata
    """
    return GitMetadataReader(repo_root).read_head()
