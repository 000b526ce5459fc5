"""
Git Hook Installer

Writes a post-commit hook that runs the synchronization after every
commit. The hook keeps the run's output in an error log inside the
repository and removes that log again when the run succeeds.

Author: git-obsidian-sync Project
License: MIT
"""

import os
import shlex
import stat
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

from ..errors import HookInstallError
from ..utils.logger import get_logger

logger = get_logger(__name__)

ERROR_LOG_FILENAME = ".git-obsidian-sync.error.log"

HOOK_TEMPLATE = """#!/bin/bash
#
# Git Post-Commit Hook for git-obsidian-sync
# Automatically generated on {generated}
#

set -uo pipefail

REPO_PATH={repo_path}
CONFIG_PATH={config_path}
PYTHON={python}
LOG_FILE="${{REPO_PATH}}/{error_log}"

if [[ ! -f "${{CONFIG_PATH}}" ]]; then
    echo "Configuration file not found: ${{CONFIG_PATH}}" >&2
    exit 1
fi

echo "Git-Obsidian-Sync: Starting synchronization..."
echo "Running sync at $(date)" > "${{LOG_FILE}}"
if (cd "${{REPO_PATH}}" && "${{PYTHON}}" -m obsidian_sync --config "${{CONFIG_PATH}}" --verbose) >> "${{LOG_FILE}}" 2>&1; then
    echo "Git-Obsidian-Sync: Synchronization successful"
    rm -f "${{LOG_FILE}}"
else
    echo "Git-Obsidian-Sync: Synchronization failed. See ${{LOG_FILE}} for details." >&2
    exit 1
fi
"""


def render_hook(repo_path: Path, config_path: Path, python_executable: str) -> str:
    """
    Render the post-commit hook script.

    Args:
        repo_path: Absolute repository path
        config_path: Absolute configuration path
        python_executable: Interpreter that has obsidian_sync installed

    Returns:
        Hook script text
    """
    return HOOK_TEMPLATE.format(
        generated=datetime.now().strftime("%Y-%m-%d %H:%M:%S"),
        repo_path=shlex.quote(str(repo_path)),
        config_path=shlex.quote(str(config_path)),
        python=shlex.quote(python_executable),
        error_log=ERROR_LOG_FILENAME
    )


def install_post_commit_hook(
    repo_path: Union[str, Path] = ".",
    config_path: Union[str, Path] = ".git-obsidian-sync.json",
    python_executable: Optional[str] = None
) -> Path:
    """
    Install the post-commit hook into a repository.

    An existing post-commit hook is replaced.

    Args:
        repo_path: Repository path
        config_path: Configuration file, relative paths taken from repo_path
        python_executable: Interpreter for the hook (defaults to the current one)

    Returns:
        Path of the installed hook

    Raises:
        HookInstallError: If the repository or configuration is missing,
            or the hook cannot be written
    """
    repo = Path(repo_path).expanduser().absolute()
    if not repo.is_dir():
        raise HookInstallError(f"Repository directory not found: {repo}")

    config = Path(config_path).expanduser()
    if not config.is_absolute():
        config = repo / config
    config = Path(os.path.normpath(config))

    logger.info(f"Repository path: {repo}")
    logger.info(f"Configuration file: {config}")

    if not config.is_file():
        raise HookInstallError(f"Configuration file not found: {config}")

    git_dir = repo / ".git"
    if not git_dir.is_dir():
        raise HookInstallError(f"Git repository not found: {git_dir}")

    hooks_dir = git_dir / "hooks"
    hook_path = hooks_dir / "post-commit"
    script = render_hook(repo, config, python_executable or sys.executable)

    try:
        hooks_dir.mkdir(parents=True, exist_ok=True)
        hook_path.write_text(script, encoding="utf-8")
        mode = hook_path.stat().st_mode
        hook_path.chmod(mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    except OSError as e:
        raise HookInstallError(f"Cannot write hook {hook_path}: {e}") from e

    logger.info(f"Git hook successfully installed: {hook_path}")
    return hook_path
