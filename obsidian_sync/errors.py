"""
Exception Hierarchy

Fatal error kinds raised by the configuration, sync, hook and linting layers.
Per-file problems are not exceptions; they are reported as SyncResult values.

Author: git-obsidian-sync Project
License: MIT
"""


class SyncError(Exception):
    """Base class for all git-obsidian-sync errors."""


class ConfigError(SyncError):
    """Configuration could not be loaded."""


class ConfigNotFoundError(ConfigError):
    """Configuration file does not exist."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Configuration file not found: {path}")


class ConfigInvalidError(ConfigError):
    """Configuration is malformed or misses a required field."""


class MissingDependencyError(SyncError):
    """A required external tool is not installed."""

    def __init__(self, tool: str, hint: str = ""):
        self.tool = tool
        message = f"Required tool not found: {tool}"
        if hint:
            message = f"{message} ({hint})"
        super().__init__(message)


class HookInstallError(SyncError):
    """The git hook could not be installed."""
