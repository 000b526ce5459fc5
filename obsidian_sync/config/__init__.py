"""
git-obsidian-sync Configuration Module

This module handles loading and validating the mapping file that describes
the target vault, the source to target mappings and the metadata options.

Author: git-obsidian-sync Project
License: MIT
"""

from .schema import SyncConfig, Mapping, SyncOptions, MetadataTemplate
from .config_loader import ConfigLoader, load_config, DEFAULT_CONFIG_FILENAME

__all__ = [
    'SyncConfig',
    'Mapping',
    'SyncOptions',
    'MetadataTemplate',
    'ConfigLoader',
    'load_config',
    'DEFAULT_CONFIG_FILENAME',
]
