"""
Per-project credential persistence.

The config lives at <workdir>/.arsenal/config.json and is always written in
full. There is no locking: one CLI invocation at a time is assumed.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from loguru import logger
from pydantic import ValidationError

from arsenal.config import get_settings
from arsenal.core.errors import ConfigMissingError
from arsenal.core.models import ProjectConfig, summarize_validation_error

CONFIG_KEYS = frozenset(
    field.alias or name for name, field in ProjectConfig.model_fields.items()
)


class CredentialStore:
    """Reads and writes the project config for one working directory."""

    def __init__(self, workdir: Path):
        settings = get_settings()
        self.workdir = workdir
        self.config_dir = workdir / settings.config_dir_name
        self.config_path = self.config_dir / settings.config_file_name
        self.learnings_dir = self.config_dir / settings.learnings_dir_name

    def exists(self) -> bool:
        return self.config_path.is_file()

    def load(self) -> ProjectConfig:
        """
        Load and validate the project config.

        Raises:
            ConfigMissingError: If the file is absent or not a valid config
        """
        if not self.config_path.is_file():
            raise ConfigMissingError(self.config_path)

        try:
            raw = self.config_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigMissingError(self.config_path, str(e)) from e

        try:
            return ProjectConfig.model_validate_json(raw)
        except ValidationError as e:
            logger.debug(f"Rejected config {self.config_path}: {e}")
            raise ConfigMissingError(
                self.config_path, summarize_validation_error(e)
            ) from e

    def save(self, config: ProjectConfig) -> Path:
        """Write the config, replacing whatever was there."""
        self.config_dir.mkdir(parents=True, exist_ok=True)
        self.config_path.write_text(config.to_json() + "\n", encoding="utf-8")
        logger.debug(f"Saved config for project {config.project_id} to {self.config_path}")
        return self.config_path

    def with_field(self, field: str, value: Any) -> ProjectConfig:
        """
        The stored config with one on-disk key (e.g. "githubRepo") changed.

        Nothing is written.

        Raises:
            ConfigMissingError: If there is no valid config to change
            ValueError: If the key is unknown or the value does not validate
        """
        if field not in CONFIG_KEYS:
            raise ValueError(
                f"Unknown config key {field!r} (expected one of {', '.join(sorted(CONFIG_KEYS))})"
            )

        data = json.loads(self.load().to_json())
        data[field] = value
        try:
            return ProjectConfig.model_validate(data)
        except ValidationError as e:
            raise ValueError(
                f"Invalid value for {field}: {summarize_validation_error(e)}"
            ) from e

    def update(self, field: str, value: Any) -> ProjectConfig:
        """
        Change one on-disk key and save.

        The result is re-validated, so an update can never leave an
        unreadable config behind.
        """
        updated = self.with_field(field, value)
        self.save(updated)
        return updated
