"""
git-obsidian-sync

Copies Markdown files from a Git repository into an Obsidian vault after
each commit, following a declarative mapping file.

Author: git-obsidian-sync Project
License: MIT
"""

__version__ = "2.1.0"
