"""
External Command Execution

Runs external programs (git, linters) and captures their outcome as a
CommandResult value instead of a bare exit code.

Author: git-obsidian-sync Project
License: MIT
"""

import subprocess
import time
from dataclasses import dataclass
from typing import List, Optional

from .logger import get_logger

logger = get_logger(__name__)


@dataclass
class CommandResult:
    """Result of command execution."""
    success: bool
    stdout: str
    stderr: str
    exit_code: int
    execution_time: float


def run_command(
    command: List[str],
    cwd: Optional[str] = None,
    timeout: Optional[float] = None
) -> CommandResult:
    """
    Execute a command and capture its output.

    A missing executable is reported as a failed result with exit code
    127 rather than raised.

    Args:
        command: Command arguments
        cwd: Working directory for the command
        timeout: Timeout in seconds (None waits indefinitely)

    Returns:
        CommandResult
    """
    logger.debug(f"Executing: {' '.join(command)}")
    start_time = time.time()

    try:
        result = subprocess.run(
            command,
            cwd=cwd,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            timeout=timeout,
            check=False
        )
    except FileNotFoundError as e:
        return CommandResult(
            success=False,
            stdout="",
            stderr=str(e),
            exit_code=127,
            execution_time=time.time() - start_time
        )
    except subprocess.TimeoutExpired:
        execution_time = time.time() - start_time
        logger.error(f"Command timed out after {timeout}s")
        return CommandResult(
            success=False,
            stdout="",
            stderr=f"Command timed out after {timeout}s",
            exit_code=-1,
            execution_time=execution_time
        )

    execution_time = time.time() - start_time
    success = result.returncode == 0
    if not success:
        logger.debug(f"Command exited with code {result.returncode}: {command[0]}")

    return CommandResult(
        success=success,
        stdout=result.stdout,
        stderr=result.stderr,
        exit_code=result.returncode,
        execution_time=execution_time
    )
