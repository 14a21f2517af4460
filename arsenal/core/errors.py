"""
Exception hierarchy for arsenal workflows.

Every error a command can report derives from ArsenalError, so the CLI layer
can turn any of them into a console message with a single except clause.
"""

from __future__ import annotations

from pathlib import Path


class ArsenalError(Exception):
    """Base class for all reportable arsenal errors."""

    pass


# =============================================================================
# Configuration
# =============================================================================


class ConfigMissingError(ArsenalError):
    """Raised when the project config is absent or cannot be parsed."""

    def __init__(self, path: Path, reason: str | None = None):
        self.path = path
        self.reason = reason
        if reason:
            message = f"Invalid config at {path}: {reason}"
        else:
            message = "No config found. Did you run `arsenal init`?"
        super().__init__(message)


class ConfigMismatchError(ArsenalError):
    """Raised when the API key belongs to a different user or project."""

    def __init__(
        self,
        expected_user_id: int,
        expected_project_id: int,
        actual_user_id: int,
        actual_project_id: int,
    ):
        self.expected_user_id = expected_user_id
        self.expected_project_id = expected_project_id
        self.actual_user_id = actual_user_id
        self.actual_project_id = actual_project_id
        super().__init__(
            "Config mismatch: API key does not match user ID or project ID"
        )


class ValidationFailedError(ArsenalError):
    """Raised when the stored API key could not be checked against the backend."""

    def __init__(self, cause: Exception):
        self.cause = cause
        super().__init__(f"Configuration validation failed: {cause}")


# =============================================================================
# Remote
# =============================================================================


class RemoteUnavailableError(ArsenalError):
    """Raised when the backend cannot be reached at all."""

    pass


class AuthFailedError(ArsenalError):
    """Raised when login is rejected."""

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(f"Login failed: {detail}")


class ProjectNotOwnedError(ArsenalError):
    """Raised when the project does not exist or belongs to someone else."""

    def __init__(self, project_id: str):
        self.project_id = project_id
        super().__init__(f"Project {project_id} not found or not owned by you.")


class KeyIssuanceFailedError(ArsenalError):
    """Raised when the backend refuses to generate an API key."""

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(f"Failed to generate API key: {detail}")


class InvalidApiKeyError(ArsenalError):
    """Raised when the backend does not recognise the API key."""

    def __init__(self, detail: str = "Invalid API key"):
        self.detail = detail
        super().__init__(detail)


class SubmissionFailedError(ArsenalError):
    """Raised when a single learning is not accepted by the backend."""

    def __init__(self, status_code: int | None, detail: str):
        self.status_code = status_code
        self.detail = detail
        if status_code is None:
            message = f"Connection error: {detail}"
        else:
            message = f"Server error: {status_code} ({detail})"
        super().__init__(message)


# =============================================================================
# Local
# =============================================================================


class NotAGitRepoError(ArsenalError):
    """Raised when a git-only command runs outside a working tree."""

    def __init__(self, path: Path):
        self.path = path
        super().__init__(
            "This folder is not a Git repo. Please run `git init` or clone a repo first."
        )


class RecordParseFailedError(ArsenalError):
    """Raised when a pending learning file is not a valid record."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Could not parse {path.name}: {reason}")
