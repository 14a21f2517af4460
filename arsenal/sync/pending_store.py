"""
Pending learnings on disk: one JSON file per record in .arsenal/learnings/.
"""

from __future__ import annotations

from pathlib import Path

from loguru import logger
from pydantic import ValidationError

from arsenal.core.errors import RecordParseFailedError
from arsenal.core.models import LearningRecord, summarize_validation_error


class PendingStore:
    """Enumerates, parses and removes pending learning files."""

    def __init__(self, learnings_dir: Path):
        self.learnings_dir = learnings_dir

    @property
    def exists(self) -> bool:
        return self.learnings_dir.is_dir()

    def list_pending(self) -> list[Path]:
        """Pending record files; empty when the directory is missing."""
        if not self.exists:
            return []
        return sorted(p for p in self.learnings_dir.glob("*.json") if p.is_file())

    def load(self, path: Path) -> LearningRecord:
        """
        Parse one record file.

        Raises:
            RecordParseFailedError: If the file is unreadable, not UTF-8 or not a valid record
        """
        try:
            raw = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise RecordParseFailedError(path, str(e)) from e

        try:
            return LearningRecord.model_validate_json(raw)
        except ValidationError as e:
            raise RecordParseFailedError(path, summarize_validation_error(e)) from e

    def remove(self, path: Path) -> None:
        path.unlink()
        logger.debug(f"Removed synced learning {path.name}")
