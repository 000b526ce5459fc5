"""
Lint Dispatcher

Collects source files from the given paths, groups them by kind and
runs the linters that apply.

Author: git-obsidian-sync Project
License: MIT
"""

from pathlib import Path
from typing import Dict, Iterable, List, Optional

from ..errors import MissingDependencyError
from ..utils.logger import get_logger
from .linters import (
    BashStyleLinter,
    BlackLinter,
    FileKind,
    Flake8Linter,
    IsortLinter,
    Linter,
    LintResult,
    MypyLinter,
    PylintLinter,
    ShellCheckLinter,
    detect_kind,
)

logger = get_logger(__name__)

SCANNED_SUFFIXES = (".py", ".sh", ".bash")


def default_linters() -> List[Linter]:
    """All linters in the order they run."""
    return [
        IsortLinter(),
        BlackLinter(),
        Flake8Linter(),
        MypyLinter(),
        PylintLinter(),
        ShellCheckLinter(),
        BashStyleLinter(),
    ]


def collect_files(paths: Iterable[str]) -> Dict[FileKind, List[str]]:
    """
    Group lintable files by kind.

    Files named explicitly are classified by extension or shebang.
    Directories are searched recursively for .py, .sh and .bash files.

    Args:
        paths: Files and directories

    Returns:
        Sorted file lists keyed by FileKind
    """
    grouped: Dict[FileKind, set] = {kind: set() for kind in FileKind}

    for raw_path in paths:
        path = Path(raw_path)
        if path.is_dir():
            candidates = [
                p for p in path.rglob("*")
                if p.is_file() and p.suffix in SCANNED_SUFFIXES
            ]
        elif path.is_file():
            candidates = [path]
        else:
            logger.warning(f"Path not found: {raw_path}")
            continue

        for candidate in candidates:
            kind = detect_kind(str(candidate))
            if kind is not None:
                grouped[kind].add(str(candidate))

    return {kind: sorted(files) for kind, files in grouped.items()}


class LintDispatcher:
    """
    Runs linters over a set of paths.

    Without an explicit tool list every linter whose file kind is present
    runs, and linters whose tool is not installed are skipped with a
    warning. Explicitly requested tools must be installed.
    """

    def __init__(self, linters: Optional[List[Linter]] = None):
        self.linters = linters if linters is not None else default_linters()

    def select(self, tools: Optional[Iterable[str]] = None) -> List[Linter]:
        """
        Pick linters by name.

        Args:
            tools: Linter names, or None for all

        Returns:
            Selected linters in run order

        Raises:
            ValueError: If a name matches no linter
        """
        if tools is None:
            return list(self.linters)

        wanted = set(tools)
        known = {linter.name for linter in self.linters}
        unknown = wanted - known
        if unknown:
            raise ValueError(f"Unknown linter(s): {', '.join(sorted(unknown))}")
        return [linter for linter in self.linters if linter.name in wanted]

    def run(
        self,
        paths: Iterable[str],
        tools: Optional[Iterable[str]] = None,
        fix: bool = False
    ) -> List[LintResult]:
        """
        Lint the given paths.

        Args:
            paths: Files and directories to lint
            tools: Linter names to run (None auto-detects)
            fix: Let tools that support it rewrite files

        Returns:
            One LintResult per linter that ran

        Raises:
            MissingDependencyError: If an explicitly requested tool is absent
        """
        explicit = tools is not None
        files_by_kind = collect_files(paths)
        for kind, files in files_by_kind.items():
            if files:
                logger.info(f"{kind.value.capitalize()} files detected: {len(files)}")

        results = []
        for linter in self.select(tools):
            files = files_by_kind.get(linter.kind, [])
            if not files:
                logger.debug(f"No {linter.kind.value} files for {linter.name}")
                continue

            if not linter.is_available():
                if explicit:
                    raise MissingDependencyError(linter.name, "install it or drop it from the tool list")
                logger.warning(f"Skipping {linter.name}: tool not installed")
                continue

            logger.info(f"[{linter.name}] {linter.description}")
            results.append(linter.run(files, fix=fix))

        return results
