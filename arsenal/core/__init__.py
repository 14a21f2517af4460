"""
Core building blocks: settings-aware credential store, backend client,
config validation and project initialization.
"""
from .credential_store import CredentialStore
from .errors import ArsenalError
from .models import LearningRecord, ProjectConfig
from .platform_client import ArsenalClient

__all__ = [
    "ArsenalClient",
    "ArsenalError",
    "CredentialStore",
    "LearningRecord",
    "ProjectConfig",
]
