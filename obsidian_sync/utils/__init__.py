"""
git-obsidian-sync Utilities

Logging setup, file operations and external command execution helpers.

Author: git-obsidian-sync Project
License: MIT
"""
