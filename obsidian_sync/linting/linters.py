"""
Linters

One class per code-quality tool behind a common Linter interface. Python
tools run as ``python -m <tool>``, shellcheck runs as a binary and the
bash style checks run natively.

Author: git-obsidian-sync Project
License: MIT
"""

import importlib.util
import re
import shutil
import sys
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional

from ..errors import MissingDependencyError
from ..utils.logger import get_logger
from ..utils.process import run_command

logger = get_logger(__name__)

BASH_SHEBANG = re.compile(r"^#!.*\bbash\b")
ACCEPTED_SHEBANGS = ("#!/bin/bash", "#!/usr/bin/env bash")
VARIABLE_NAME = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


class FileKind(Enum):
    """Source file categories a linter can handle."""
    PYTHON = "python"
    SHELL = "shell"


def detect_kind(file_path: str) -> Optional[FileKind]:
    """
    Classify a file by extension, falling back to its shebang.

    Args:
        file_path: File to classify

    Returns:
        FileKind, or None for files no linter handles
    """
    path = Path(file_path)
    if path.suffix == ".py":
        return FileKind.PYTHON
    if path.suffix in (".sh", ".bash"):
        return FileKind.SHELL
    try:
        with open(path, 'r', encoding='utf-8', errors='replace') as f:
            first_line = f.readline().strip()
    except OSError:
        return None
    return FileKind.SHELL if BASH_SHEBANG.match(first_line) else None


def find_unquoted_variables(line: str) -> List[str]:
    """
    Find ``$NAME`` expansions outside double quotes.

    Single-quoted text is skipped. Braced ``${NAME}`` and ``$(...)`` forms
    are not reported.

    Args:
        line: One line of shell code

    Returns:
        Variable names in order of appearance
    """
    names = []
    in_single = in_double = False
    index = 0
    while index < len(line):
        char = line[index]
        if char == "\\" and not in_single:
            index += 2
            continue
        if char == "'" and not in_double:
            in_single = not in_single
        elif char == '"' and not in_single:
            in_double = not in_double
        elif char == "$" and not (in_single or in_double):
            match = VARIABLE_NAME.match(line, index + 1)
            if match:
                names.append(match.group(0))
                index = match.end()
                continue
        index += 1
    return names


@dataclass
class LintResult:
    """Outcome of one linter over a set of files."""
    linter: str
    files: List[str]
    success: bool
    output: str = ""
    issues: List[str] = field(default_factory=list)
    exit_code: int = 0


class Linter(ABC):
    """Common interface for all linters."""

    name: str = ""
    description: str = ""
    kind: FileKind = FileKind.PYTHON
    can_fix: bool = False

    @abstractmethod
    def is_available(self) -> bool:
        """Whether the underlying tool can be run."""

    @abstractmethod
    def run(self, files: List[str], fix: bool = False) -> LintResult:
        """Lint files, applying fixes where supported and requested."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name})"


class CommandLinter(Linter):
    """Linter backed by an external command."""

    @abstractmethod
    def build_command(self, files: List[str], fix: bool = False) -> List[str]:
        """Build the command line for the given files."""

    def run(self, files: List[str], fix: bool = False) -> LintResult:
        if not self.is_available():
            raise MissingDependencyError(self.name)

        result = run_command(self.build_command(files, fix))
        output = (result.stdout + result.stderr).strip()

        if result.success:
            logger.info(f"{self.name} completed successfully.")
        elif fix and self.can_fix:
            logger.warning(f"Changes applied by {self.name}.")
        else:
            logger.warning(f"{self.name} found issues.")

        return LintResult(
            linter=self.name,
            files=list(files),
            success=result.success,
            output=output,
            issues=output.splitlines() if not result.success else [],
            exit_code=result.exit_code
        )


class PythonModuleLinter(CommandLinter):
    """Linter run as ``python -m <module>`` with the current interpreter."""

    module: str = ""
    check_args: List[str] = []

    def is_available(self) -> bool:
        return importlib.util.find_spec(self.module) is not None

    def build_command(self, files: List[str], fix: bool = False) -> List[str]:
        command = [sys.executable, "-m", self.module]
        if not (fix and self.can_fix):
            command.extend(self.check_args)
        return command + list(files)


class IsortLinter(PythonModuleLinter):
    name = "isort"
    module = "isort"
    description = "Import sorting"
    can_fix = True
    check_args = ["--check-only", "--diff"]


class BlackLinter(PythonModuleLinter):
    name = "black"
    module = "black"
    description = "Code formatting"
    can_fix = True
    check_args = ["--check", "--diff"]


class Flake8Linter(PythonModuleLinter):
    name = "flake8"
    module = "flake8"
    description = "Style checking"


class MypyLinter(PythonModuleLinter):
    name = "mypy"
    module = "mypy"
    description = "Type checking"


class PylintLinter(PythonModuleLinter):
    name = "pylint"
    module = "pylint"
    description = "Comprehensive code analysis"


class ShellCheckLinter(CommandLinter):
    name = "shellcheck"
    description = "Shell script static analysis"
    kind = FileKind.SHELL

    def is_available(self) -> bool:
        return shutil.which("shellcheck") is not None

    def build_command(self, files: List[str], fix: bool = False) -> List[str]:
        return ["shellcheck"] + list(files)


class BashStyleLinter(Linter):
    """
    Native bash conventions check.

    Flags a missing or unexpected shebang, a missing ``set -e`` (or
    ``set -euo pipefail``), unquoted variable expansions and backtick
    command substitution.
    """

    name = "bash"
    description = "Shell script style checking"
    kind = FileKind.SHELL

    def is_available(self) -> bool:
        return True

    def check_file(self, file_path: str) -> List[str]:
        """
        Check one script.

        Args:
            file_path: Script to check

        Returns:
            Issues as ``path:line: message`` strings
        """
        try:
            lines = Path(file_path).read_text(encoding="utf-8", errors="replace").splitlines()
        except OSError as e:
            return [f"{file_path}:0: cannot read file: {e}"]

        issues = []
        first_line = lines[0].strip() if lines else ""
        if first_line not in ACCEPTED_SHEBANGS:
            issues.append(
                f"{file_path}:1: missing or incorrect shebang, expected "
                f"'#!/bin/bash' or '#!/usr/bin/env bash', found '{first_line}'"
            )

        if not any("set -e" in line for line in lines):
            issues.append(f"{file_path}:0: missing 'set -euo pipefail'")

        for number, line in enumerate(lines, start=1):
            if line.lstrip().startswith("#"):
                continue
            for name in find_unquoted_variables(line):
                issues.append(f'{file_path}:{number}: unquoted variable ${name}, use "${{{name}}}"')
            if re.search(r"`[^`]*`", line):
                issues.append(f"{file_path}:{number}: old-style command substitution, use $(command)")

        return issues

    def run(self, files: List[str], fix: bool = False) -> LintResult:
        issues = []
        for file_path in files:
            logger.debug(f"Linting: {file_path}")
            issues.extend(self.check_file(file_path))

        if issues:
            logger.warning(f"{self.name} found issues.")
        else:
            logger.info(f"{self.name} completed successfully.")

        return LintResult(
            linter=self.name,
            files=list(files),
            success=not issues,
            output="\n".join(issues),
            issues=issues,
            exit_code=1 if issues else 0
        )
