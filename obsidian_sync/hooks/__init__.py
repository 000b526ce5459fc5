"""
git-obsidian-sync Hooks Module

Installation of the post-commit hook that triggers synchronization.

Author: git-obsidian-sync Project
License: MIT
"""

from .installer import install_post_commit_hook, render_hook, ERROR_LOG_FILENAME

__all__ = ['install_post_commit_hook', 'render_hook', 'ERROR_LOG_FILENAME']
