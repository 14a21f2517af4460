"""
Sync Service - uploads pending learnings to the Arsenal backend.

Core responsibilities:
- Refuse to run on a missing or stale config
- Submit each pending learning on its own, one at a time
- Delete a learning only after the backend accepted it
- Keep going when a single learning fails, and say why it failed
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any

from loguru import logger

from arsenal.core.credential_store import CredentialStore
from arsenal.core.errors import RecordParseFailedError, SubmissionFailedError
from arsenal.core.platform_client import ArsenalClient
from arsenal.core.validator import validate_config
from arsenal.sync.pending_store import PendingStore


@dataclass
class SyncFailure:
    """A learning that stayed pending, and why."""

    label: str
    path: Path
    reason: str


@dataclass
class SyncResult:
    """Result of a sync run."""

    project_id: str
    github_repo: str | None = None
    succeeded: int = 0
    failed: int = 0
    failures: list[SyncFailure] = field(default_factory=list)
    started_at: datetime = field(default_factory=datetime.now)
    finished_at: datetime | None = None

    @property
    def total(self) -> int:
        return self.succeeded + self.failed

    @property
    def nothing_to_sync(self) -> bool:
        return self.total == 0

    def record_failure(self, label: str, path: Path, reason: str) -> None:
        self.failed += 1
        self.failures.append(SyncFailure(label=label, path=path, reason=reason))

    def finish(self) -> None:
        self.finished_at = datetime.now()

    def duration_seconds(self) -> float:
        end = self.finished_at or datetime.now()
        return (end - self.started_at).total_seconds()

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        return {
            "project_id": self.project_id,
            "succeeded": self.succeeded,
            "failed": self.failed,
            "duration_seconds": round(self.duration_seconds(), 2),
            "failures": [f"{f.label}: {f.reason}" for f in self.failures[:10]],
        }


class SyncService:
    """
    Orchestrates local learnings -> Arsenal backend upload.

    Records are processed sequentially in enumeration order. A failure is
    attributed to one record and never aborts the batch; config and
    authentication problems abort before anything is submitted.
    """

    def __init__(
        self,
        workdir: Path,
        client: ArsenalClient,
        progress_callback: Callable[[str, int, int], None] | None = None,
    ) -> None:
        """
        Initialize sync service.

        Args:
            workdir: Project directory holding .arsenal/
            client: Open backend client
            progress_callback: Optional callback(file_name, current, total)
        """
        self._credentials = CredentialStore(workdir)
        self._pending = PendingStore(self._credentials.learnings_dir)
        self._client = client
        self._progress_callback = progress_callback

    @property
    def pending(self) -> PendingStore:
        return self._pending

    async def run(self) -> SyncResult:
        """
        Upload every pending learning.

        Raises:
            ConfigMissingError: If there is no usable config
            ConfigMismatchError, ValidationFailedError: If the config is stale
        """
        config = self._credentials.load()
        await validate_config(self._client, config)

        result = SyncResult(project_id=config.project_id, github_repo=config.github_repo)

        if not self._pending.exists:
            logger.info(f"No learnings directory at {self._pending.learnings_dir}")
            result.finish()
            return result

        files = self._pending.list_pending()
        if not files:
            logger.info("No learnings to sync")
            result.finish()
            return result

        logger.info(f"Syncing {len(files)} learning(s) to project {config.project_id}")

        for index, path in enumerate(files, start=1):
            if self._progress_callback:
                self._progress_callback(path.name, index, len(files))
            await self._sync_one(path, config.api_key, config.project_id, result)

        result.finish()
        logger.info(f"Sync complete: {result.to_dict()}")
        return result

    async def _sync_one(
        self,
        path: Path,
        api_key: str,
        project_id: str,
        result: SyncResult,
    ) -> None:
        try:
            record = self._pending.load(path)
        except RecordParseFailedError as e:
            logger.warning(str(e))
            result.record_failure(path.name, path, e.reason)
            return

        label = record.title or path.name
        try:
            await self._client.submit_learning(api_key, project_id, record)
        except SubmissionFailedError as e:
            logger.warning(f"Failed to sync {label}: {e}")
            result.record_failure(label, path, str(e))
            return

        try:
            self._pending.remove(path)
        except OSError as e:
            logger.error(f"Synced {label} but could not remove {path}: {e}")
            result.record_failure(label, path, f"submitted but not removed: {e}")
            return

        result.succeeded += 1
