"""
Sync Engine

Copies resolved (source, target) pairs into the vault and optionally
prepends a metadata block to each copied Markdown file.

Author: git-obsidian-sync Project
License: MIT
"""

from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple
from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from ..utils.logger import get_logger
from ..utils.file_ops import copy_file_bytes, prepend_bytes, is_markdown_file
from ..config.schema import SyncOptions
from .git_metadata import CommitMetadata

logger = get_logger(__name__)

FRONTMATTER_DELIMITER = "---"


class SyncStatus(Enum):
    """Outcome of a single file sync."""
    COMPLETED = "completed"
    COPY_FAILED = "copy_failed"
    METADATA_FAILED = "metadata_failed"


@dataclass
class SyncResult:
    """Result of a file sync operation."""
    source_path: Path
    target_path: Path
    status: SyncStatus
    error_message: Optional[str] = None
    metadata_added: bool = False

    @property
    def success(self) -> bool:
        return self.status == SyncStatus.COMPLETED

    def __repr__(self) -> str:
        return f"SyncResult(source={self.source_path}, status={self.status.value})"


def build_metadata_block(
    options: SyncOptions,
    metadata: CommitMetadata,
    sync_time: Optional[datetime] = None
) -> bytes:
    """
    Build the frontmatter placed before a synchronized document.

    The block opens and closes with ``---`` and is followed by one blank
    line. Git lines come first, then the sync timestamp.

    Args:
        options: Sync options selecting which lines to include
        metadata: Commit metadata for the git lines
        sync_time: Time written as sync-timestamp (defaults to now)

    Returns:
        UTF-8 encoded block
    """
    template = options.metadata_template
    lines = [FRONTMATTER_DELIMITER]

    if template.add_git_metadata:
        lines.extend([
            f"git-commit: {metadata.commit_hash}",
            f"git-author: {metadata.author}",
            f"git-timestamp: {metadata.timestamp}",
            f"git-message: {metadata.message}",
        ])

    if template.add_sync_timestamp:
        sync_time = sync_time or datetime.now().astimezone()
        lines.append(f"sync-timestamp: {sync_time.isoformat(timespec='seconds')}")

    lines.extend([FRONTMATTER_DELIMITER, "", ""])
    return "\n".join(lines).encode("utf-8")


class SyncEngine:
    """
    File copy engine.

    Holds no state between runs. Every call overwrites the destination;
    there is no change detection. Failures are returned per file and never
    stop the remaining files.
    """

    def __init__(self, options: SyncOptions, metadata: Optional[CommitMetadata] = None):
        """
        Initialize sync engine.

        Args:
            options: Formatting options from the configuration
            metadata: Commit metadata reused for every file of the run
        """
        self.options = options
        self.metadata = metadata or CommitMetadata()

        self.stats = {
            "files_copied": 0,
            "metadata_added": 0,
            "errors": 0
        }

    def sync_file(self, source: Path, target: Path) -> SyncResult:
        """
        Copy one file and inject metadata if enabled.

        Args:
            source: Repository file
            target: Vault destination

        Returns:
            SyncResult with operation details
        """
        success, error = copy_file_bytes(source, target)
        if not success:
            logger.error(f"Error copying file: {source} -> {target}: {error}")
            self.stats["errors"] += 1
            return SyncResult(
                source_path=source,
                target_path=target,
                status=SyncStatus.COPY_FAILED,
                error_message=error
            )

        self.stats["files_copied"] += 1
        logger.debug(f"File synchronized: {source} -> {target}")

        if not (self.options.add_metadata and is_markdown_file(target)):
            return SyncResult(source_path=source, target_path=target, status=SyncStatus.COMPLETED)

        block = build_metadata_block(self.options, self.metadata)
        success, error = prepend_bytes(target, block)
        if not success:
            # The copy stays in place
            logger.error(f"Error adding metadata to {target}: {error}")
            self.stats["errors"] += 1
            return SyncResult(
                source_path=source,
                target_path=target,
                status=SyncStatus.METADATA_FAILED,
                error_message=error
            )

        self.stats["metadata_added"] += 1
        logger.debug(f"Metadata added: {target}")
        return SyncResult(
            source_path=source,
            target_path=target,
            status=SyncStatus.COMPLETED,
            metadata_added=True
        )

    def sync(self, pairs: Iterable[Tuple[Path, Path]]) -> List[SyncResult]:
        """
        Sync (source, target) pairs sequentially, in the given order.

        Args:
            pairs: Resolved source and target paths

        Returns:
            One SyncResult per pair
        """
        return [self.sync_file(source, target) for source, target in pairs]

    def get_stats(self) -> Dict:
        """Get sync statistics."""
        return self.stats.copy()
