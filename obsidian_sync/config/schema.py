"""
Configuration Schema and Models

Defines Pydantic models for the sync configuration document, providing
validation, default values and the camelCase field names used on disk.

Author: git-obsidian-sync Project
License: MIT
"""

from typing import List
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pathlib import Path
import os


class MetadataTemplate(BaseModel):
    """Which provenance lines go into the injected metadata block."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    add_git_metadata: bool = Field(
        default=False,
        alias="addGitMetadata",
        description="Add git-commit, git-author, git-timestamp and git-message lines"
    )
    add_sync_timestamp: bool = Field(
        default=False,
        alias="addSyncTimestamp",
        description="Add a sync-timestamp line with the current time"
    )


class SyncOptions(BaseModel):
    """Formatting and validation options."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    add_metadata: bool = Field(
        default=False,
        alias="addMetadata",
        description="Prepend a metadata block to synchronized Markdown files"
    )
    metadata_template: MetadataTemplate = Field(
        default_factory=MetadataTemplate,
        alias="metadataTemplate"
    )
    reject_colliding_targets: bool = Field(
        default=False,
        alias="rejectCollidingTargets",
        description="Abort when two source files resolve to the same vault path"
    )


class Mapping(BaseModel):
    """
    One source to destination rule.

    ``source`` is a directory or a single file in the repository. ``target``
    is a directory relative to the vault root, even if it looks like a
    file path. ``repoPath`` and ``vaultPath`` are accepted as older names.
    """

    model_config = ConfigDict(frozen=True)

    source: str = Field(
        validation_alias=AliasChoices("source", "repoPath"),
        description="Directory or file in the repository"
    )
    target: str = Field(
        validation_alias=AliasChoices("target", "vaultPath"),
        description="Directory relative to the vault root"
    )

    @field_validator("source")
    @classmethod
    def validate_source(cls, v):
        """Reject empty sources."""
        if not v or not v.strip():
            raise ValueError("Mapping source must not be empty")
        return v

    @property
    def source_path(self) -> Path:
        return Path(self.source)


class SyncConfig(BaseModel):
    """
    Root configuration model.

    Read once per run from a JSON or YAML document and never written back.
    Mappings are processed independently in list order.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    target_vault: str = Field(
        alias="targetVault",
        description="Absolute path of the vault root"
    )
    mappings: List[Mapping] = Field(
        default_factory=list,
        description="Ordered list of source to target mappings"
    )
    options: SyncOptions = Field(default_factory=SyncOptions)

    @field_validator("target_vault")
    @classmethod
    def validate_target_vault(cls, v):
        """Ensure the vault path is set and absolute."""
        if not v or not v.strip():
            raise ValueError("targetVault must not be empty")
        expanded = os.path.expanduser(v.strip())
        if not Path(expanded).is_absolute():
            raise ValueError(f"targetVault must be absolute: {v}")
        return os.path.normpath(expanded)
