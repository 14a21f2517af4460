"""
Learning Sync Engine.

Components:
- pending_store: pending learning files on disk
- sync_service: validation, per-record upload and cleanup
"""
from .pending_store import PendingStore
from .sync_service import SyncFailure, SyncResult, SyncService

__all__ = ["PendingStore", "SyncFailure", "SyncResult", "SyncService"]
