"""
Orchestrator

Drives one synchronization run: discovery across all mappings, merge,
per-mapping path resolution, collision checks and the file copies.

Author: git-obsidian-sync Project
License: MIT
"""

from collections import defaultdict
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from ..utils.logger import get_logger
from ..config.schema import SyncConfig
from ..config.config_loader import load_config
from ..errors import ConfigInvalidError
from .discovery import discover_all, belongs_to
from .path_resolver import resolve_target_path
from .git_metadata import CommitMetadata, GitMetadataReader
from .sync_engine import SyncEngine, SyncResult

logger = get_logger(__name__)


@dataclass
class SyncReport:
    """Aggregate outcome of a run."""
    files_found: int = 0
    results: List[SyncResult] = field(default_factory=list)
    missing_sources: List[str] = field(default_factory=list)
    collisions: Dict[Path, List[Path]] = field(default_factory=dict)

    @property
    def failed(self) -> int:
        return sum(1 for result in self.results if not result.success)

    @property
    def succeeded(self) -> int:
        return sum(1 for result in self.results if result.success)

    @property
    def success(self) -> bool:
        return self.failed == 0


class SyncOrchestrator:
    """
    Runs the sync workflow for one configuration.

    Mappings are processed one at a time in configuration order and files
    within a mapping in sorted path order. When two mappings send
    different files to the same vault path the later copy wins, unless
    the configuration asks for such collisions to be rejected.
    """

    def __init__(
        self,
        config: SyncConfig,
        repo_root: Optional[Union[str, Path]] = None,
        metadata_reader: Optional[GitMetadataReader] = None
    ):
        """
        Initialize orchestrator.

        Args:
            config: Loaded configuration
            repo_root: Repository queried for commit metadata
            metadata_reader: Reader used for commit metadata (created if None)
        """
        self.config = config
        self.metadata_reader = metadata_reader or GitMetadataReader(
            str(repo_root) if repo_root else None
        )

    def plan(self, files: List[Path]) -> List[Tuple[Path, Path]]:
        """
        Resolve discovered files to vault paths, mapping by mapping.

        A file reachable from two mappings appears once per mapping.

        Args:
            files: Deduplicated discovered files

        Returns:
            Ordered (source, target) pairs
        """
        pairs = []
        for index, mapping in enumerate(self.config.mappings):
            logger.debug(f"Mapping {index}: source='{mapping.source}', target='{mapping.target}'")
            for file_path in files:
                if belongs_to(mapping, file_path):
                    target = resolve_target_path(self.config.target_vault, mapping, file_path)
                    pairs.append((file_path, target))
        return pairs

    @staticmethod
    def find_collisions(pairs: List[Tuple[Path, Path]]) -> Dict[Path, List[Path]]:
        """
        Find vault paths written by more than one distinct source file.

        Args:
            pairs: Planned (source, target) pairs

        Returns:
            Mapping of colliding target to its sources in processing order
        """
        sources_by_target = defaultdict(list)
        for source, target in pairs:
            if source not in sources_by_target[target]:
                sources_by_target[target].append(source)
        return {
            target: sources
            for target, sources in sources_by_target.items()
            if len(sources) > 1
        }

    def _commit_metadata(self) -> CommitMetadata:
        options = self.config.options
        if options.add_metadata and options.metadata_template.add_git_metadata:
            return self.metadata_reader.read_head()
        return CommitMetadata()

    def run(self) -> SyncReport:
        """
        Execute the synchronization.

        Returns:
            SyncReport with per-file results

        Raises:
            ConfigInvalidError: If colliding targets are configured to be rejected
        """
        logger.info("Synchronization started")
        report = SyncReport()

        files, report.missing_sources = discover_all(self.config.mappings)
        report.files_found = len(files)
        logger.info(f"Files found for synchronization: {report.files_found}")

        if not files:
            logger.info("No matching files found, synchronization skipped")
            return report

        pairs = self.plan(files)

        report.collisions = self.find_collisions(pairs)
        for target, sources in report.collisions.items():
            names = ", ".join(str(source) for source in sources)
            if self.config.options.reject_colliding_targets:
                raise ConfigInvalidError(f"Configuration error: {names} all resolve to {target}")
            logger.warning(f"Target collision at {target}: {names} (last one wins)")

        engine = SyncEngine(self.config.options, self._commit_metadata())
        report.results = engine.sync(pairs)

        if report.success:
            logger.info(f"Synchronization completed successfully: {report.succeeded} file(s) copied")
        else:
            logger.error(
                f"Synchronization completed with errors: {report.failed} of "
                f"{len(report.results)} file(s) failed"
            )
        return report


def run_sync(
    config_path: Optional[Union[str, Path]] = None,
    repo_root: Optional[Union[str, Path]] = None
) -> SyncReport:
    """
    Load a configuration file and run the synchronization.

    Args:
        config_path: Path to config file
        repo_root: Repository root for relative sources and git queries

    Returns:
        SyncReport
    """
    config = load_config(config_path, repo_root)
    return SyncOrchestrator(config, repo_root).run()
