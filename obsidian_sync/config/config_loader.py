"""
Configuration Loader

Handles loading and parsing the sync configuration from JSON or YAML
files, merges environment overrides and resolves repository-relative
mapping sources.

Author: git-obsidian-sync Project
License: MIT
"""

import os
import json
import yaml
from pathlib import Path
from typing import Optional, Dict, Any, Union
from dotenv import load_dotenv, find_dotenv
from pydantic import ValidationError

from .schema import SyncConfig
from ..errors import ConfigInvalidError, ConfigNotFoundError
from ..utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_CONFIG_FILENAME = ".git-obsidian-sync.json"
YAML_SUFFIXES = (".yaml", ".yml")


class ConfigLoader:
    """
    Configuration loader.

    Reads the configuration document, applies environment overrides,
    checks required fields and validates the structure. Loading has no
    side effects beyond reading the file.
    """

    def __init__(
        self,
        config_path: Optional[Union[str, Path]] = None,
        repo_root: Optional[Union[str, Path]] = None
    ):
        """
        Initialize the configuration loader.

        Args:
            config_path: Path to the configuration file. If None, uses
                OBSIDIAN_SYNC_CONFIG or .git-obsidian-sync.json.
            repo_root: Directory relative mapping sources are resolved
                against. Defaults to the current working directory.
        """
        # Load environment variables from .env if present
        load_dotenv(find_dotenv(usecwd=True))

        raw_path = config_path or os.getenv("OBSIDIAN_SYNC_CONFIG", DEFAULT_CONFIG_FILENAME)
        self.config_path = Path(os.path.expanduser(str(raw_path))).absolute()
        self.repo_root = Path(repo_root).absolute() if repo_root else Path.cwd()
        self._config: Optional[SyncConfig] = None

    def load(self) -> SyncConfig:
        """
        Load and validate configuration.

        Returns:
            Validated SyncConfig object

        Raises:
            ConfigNotFoundError: If the config file doesn't exist
            ConfigInvalidError: If parsing or validation fails
        """
        config_data = self._read_document()
        config_data = self._merge_env_vars(config_data)
        self._check_required_fields(config_data)
        config_data = self._resolve_sources(config_data)

        try:
            self._config = SyncConfig.model_validate(config_data)
        except ValidationError as e:
            raise ConfigInvalidError(f"Invalid configuration {self.config_path}: {e}") from e

        logger.debug(f"Configuration loaded successfully: {self.config_path}")
        return self._config

    def _read_document(self) -> Dict[str, Any]:
        """
        Parse the configuration file.

        Returns:
            Dictionary with configuration data
        """
        if not self.config_path.is_file():
            raise ConfigNotFoundError(str(self.config_path))

        is_yaml = self.config_path.suffix.lower() in YAML_SUFFIXES
        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f) if is_yaml else json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigInvalidError(f"Invalid JSON configuration {self.config_path}: {e}") from e
        except yaml.YAMLError as e:
            raise ConfigInvalidError(f"Invalid YAML configuration {self.config_path}: {e}") from e
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigInvalidError(f"Cannot read configuration {self.config_path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigInvalidError(
                f"Configuration root must be an object: {self.config_path}"
            )
        return data

    def _merge_env_vars(self, config_data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Merge environment variables into configuration.

        OBSIDIAN_SYNC_TARGET_VAULT overrides targetVault from the file.

        Args:
            config_data: Configuration dictionary from file

        Returns:
            Merged configuration dictionary
        """
        if os.getenv("OBSIDIAN_SYNC_TARGET_VAULT"):
            config_data["targetVault"] = os.getenv("OBSIDIAN_SYNC_TARGET_VAULT")
            logger.debug(f"targetVault overridden from environment: {config_data['targetVault']}")
        return config_data

    def _check_required_fields(self, config_data: Dict[str, Any]) -> None:
        target_vault = config_data.get("targetVault")
        if not isinstance(target_vault, str) or not target_vault.strip():
            raise ConfigInvalidError("Configuration error: targetVault not defined")

        mappings = config_data.get("mappings")
        if not isinstance(mappings, list):
            raise ConfigInvalidError("Configuration error: No mappings defined")

    def _resolve_sources(self, config_data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Make every mapping source absolute.

        Relative sources are taken relative to the repository root.

        Args:
            config_data: Configuration dictionary

        Returns:
            Configuration with resolved mapping sources
        """
        resolved = []
        for index, mapping in enumerate(config_data["mappings"]):
            if not isinstance(mapping, dict):
                raise ConfigInvalidError(f"Configuration error: mapping {index} must be an object")

            key = "source" if mapping.get("source") else "repoPath"
            source = mapping.get(key)
            if isinstance(source, str) and source.strip():
                mapping = dict(mapping)
                mapping[key] = self._resolve_source(source)
            resolved.append(mapping)

        config_data = dict(config_data)
        config_data["mappings"] = resolved
        return config_data

    def _resolve_source(self, source: str) -> str:
        path = Path(os.path.expanduser(source))
        if not path.is_absolute():
            path = self.repo_root / path
        return os.path.normpath(str(path))

    @property
    def config(self) -> Optional[SyncConfig]:
        """Get the current configuration object."""
        return self._config


def load_config(
    config_path: Optional[Union[str, Path]] = None,
    repo_root: Optional[Union[str, Path]] = None
) -> SyncConfig:
    """
    Convenience function to load configuration.

    Args:
        config_path: Optional path to config file
        repo_root: Optional base directory for relative mapping sources

    Returns:
        Loaded and validated SyncConfig object
    """
    loader = ConfigLoader(config_path, repo_root)
    return loader.load()
