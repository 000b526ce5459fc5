"""
File Discovery

Collects the Markdown files reachable from each mapping's source and
merges them into one deduplicated, sorted list.

Author: git-obsidian-sync Project
License: MIT
"""

from pathlib import Path
from typing import Iterable, List, Tuple

from ..config.schema import Mapping
from ..utils.file_ops import is_markdown_file
from ..utils.logger import get_logger

logger = get_logger(__name__)


def discover(mapping: Mapping) -> List[Path]:
    """
    Find the candidate files for one mapping.

    A directory source is searched recursively, a file source yields
    itself. Only ``.md`` files are returned, in sorted path order. A
    source that does not exist yields nothing and logs a warning.

    Args:
        mapping: Mapping to search

    Returns:
        Sorted list of absolute file paths
    """
    source = mapping.source_path.absolute()

    if source.is_dir():
        files = [
            path for path in source.rglob("*")
            if path.is_file() and is_markdown_file(path)
        ]
        logger.debug(f"Found {len(files)} Markdown file(s) in {source}")
        return sorted(files)

    if source.is_file():
        return [source] if is_markdown_file(source) else []

    logger.warning(f"Source not found: {mapping.source}")
    return []


def discover_all(mappings: Iterable[Mapping]) -> Tuple[List[Path], List[str]]:
    """
    Discover files for every mapping and merge the results.

    Args:
        mappings: Mappings in configuration order

    Returns:
        Tuple of (deduplicated sorted file list, sources that were not found)
    """
    found = set()
    missing_sources = []

    for mapping in mappings:
        source = mapping.source_path
        if not (source.is_dir() or source.is_file()):
            missing_sources.append(mapping.source)
        found.update(discover(mapping))

    return sorted(found), missing_sources


def belongs_to(mapping: Mapping, file_path: Path) -> bool:
    """
    Check whether a discovered file falls under a mapping.

    Args:
        mapping: Mapping to test against
        file_path: Absolute path of a discovered file

    Returns:
        True if the file is inside a directory source or equals a file source
    """
    source = mapping.source_path.absolute()
    if source.is_dir():
        return file_path != source and file_path.is_relative_to(source)
    if source.is_file():
        return file_path == source
    return False
