"""
Path Resolver

Maps a discovered repository file to its destination path under the vault.

Author: git-obsidian-sync Project
License: MIT
"""

import os
from pathlib import Path
from typing import Union

from ..config.schema import Mapping

MEMORY_BANK_DIRNAME = "memory-bank"


def target_directory(target_vault: str, mapping: Mapping) -> str:
    """
    Compute the destination directory of a mapping.

    The mapping target is always joined below the vault, even when it
    starts with a separator. A directory source named ``memory-bank`` keeps
    that folder name on the vault side unless the target already ends in it.

    Args:
        target_vault: Absolute vault root
        mapping: Mapping being resolved

    Returns:
        Normalized directory path ending with a separator
    """
    target = mapping.target.replace("\\", "/").lstrip("/")
    target_dir = os.path.normpath(os.path.join(target_vault, target))

    source = mapping.source_path
    if (
        source.is_dir()
        and source.absolute().name == MEMORY_BANK_DIRNAME
        and os.path.basename(target_dir) != MEMORY_BANK_DIRNAME
    ):
        target_dir = os.path.join(target_dir, MEMORY_BANK_DIRNAME)

    return target_dir + os.sep


def resolve_target_path(
    target_vault: str,
    mapping: Mapping,
    source_file: Union[str, Path]
) -> Path:
    """
    Resolve the vault path a source file is copied to.

    Directory mappings keep the file's subdirectories relative to the
    source. File mappings drop the source's directories and keep only the
    base name.

    Args:
        target_vault: Absolute vault root
        mapping: Mapping the file was discovered under
        source_file: Absolute path of the source file

    Returns:
        Absolute destination path

    Raises:
        ValueError: If the mapping source is missing or the file lies outside it
    """
    target_dir = Path(target_directory(target_vault, mapping))
    source = mapping.source_path.absolute()
    source_file = Path(source_file)

    if source.is_dir():
        return target_dir / source_file.relative_to(source)
    if source.is_file():
        return target_dir / source_file.name

    raise ValueError(f"Mapping source is neither a directory nor a file: {mapping.source}")
