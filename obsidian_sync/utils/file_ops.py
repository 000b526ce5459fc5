"""
File Operation Utilities

Byte-preserving copies, in-place prepends and directory helpers used by
the sync engine.

Author: git-obsidian-sync Project
License: MIT
"""

import os
import shutil
import tempfile
from pathlib import Path
from typing import Optional, Tuple, Union

from .logger import get_logger

logger = get_logger(__name__)

PathLike = Union[str, Path]

MARKDOWN_SUFFIX = ".md"


def is_markdown_file(file_path: PathLike) -> bool:
    """
    Check whether a path names a Markdown file.

    The match is case-sensitive: ``notes.MD`` is not picked up.

    Args:
        file_path: Path to check

    Returns:
        True if the file name ends in ``.md``
    """
    return Path(file_path).name.endswith(MARKDOWN_SUFFIX)


def copy_file_bytes(source: PathLike, destination: PathLike) -> Tuple[bool, Optional[str]]:
    """
    Copy a file byte for byte, creating missing parent directories.

    An existing destination is overwritten unconditionally.

    Args:
        source: Source file path
        destination: Destination file path

    Returns:
        Tuple of (success: bool, error_message: str)
    """
    source_path = Path(source)
    dest_path = Path(destination)

    try:
        if not source_path.is_file():
            return False, f"Source is not a file: {source}"

        dest_path.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(source_path, dest_path)
        logger.debug(f"Copied: {source} -> {destination}")
        return True, None

    except PermissionError as e:
        logger.error(f"Permission error copying file: {e}")
        return False, f"Permission denied: {e}"
    except OSError as e:
        logger.error(f"OS error copying file: {e}")
        return False, f"OS error: {e}"


def prepend_bytes(file_path: PathLike, header: bytes) -> Tuple[bool, Optional[str]]:
    """
    Rewrite a file with a header placed before its existing content.

    The new content is written to a temporary file in the same directory
    and then moved over the original, so a failed write leaves the
    original file untouched.

    Args:
        file_path: File to rewrite
        header: Bytes to insert at the start

    Returns:
        Tuple of (success: bool, error_message: str)
    """
    path = Path(file_path)
    temp_name = None
    try:
        content = path.read_bytes()
        with tempfile.NamedTemporaryFile(
            dir=path.parent, prefix=f".{path.name}.", suffix=".tmp", delete=False
        ) as temp_file:
            temp_name = temp_file.name
            temp_file.write(header)
            temp_file.write(content)
        shutil.copymode(path, temp_name)
        os.replace(temp_name, path)
        temp_name = None
        return True, None
    except PermissionError as e:
        logger.error(f"Permission error rewriting file: {e}")
        return False, f"Permission denied: {e}"
    except OSError as e:
        logger.error(f"OS error rewriting file: {e}")
        return False, f"OS error: {e}"
    finally:
        if temp_name is not None:
            Path(temp_name).unlink(missing_ok=True)
