"""
git-obsidian-sync Linting Module

Code-quality tool dispatch for the Python and shell sources of a repository.

Author: git-obsidian-sync Project
License: MIT
"""

from .linters import Linter, LintResult, FileKind, detect_kind
from .dispatcher import LintDispatcher, collect_files, default_linters

__all__ = [
    'Linter',
    'LintResult',
    'FileKind',
    'detect_kind',
    'LintDispatcher',
    'collect_files',
    'default_linters',
]
