"""
Schemas for local files and backend payloads.

Local files (config.json and pending learnings) are validated strictly: a
missing field or a value of the wrong type is a parse failure, never coerced.
Backend payloads are parsed leniently since the server owns that contract.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, ValidationError


# =============================================================================
# Local Files
# =============================================================================


class ProjectConfig(BaseModel):
    """Contents of .arsenal/config.json."""

    model_config = ConfigDict(
        strict=True,
        populate_by_name=True,
        extra="ignore",
    )

    project_id: str = Field(alias="projectId", pattern=r"^\d+$")
    api_key: str = Field(alias="apiKey", min_length=1)
    user_id: int = Field(alias="userId")
    github_repo: str | None = Field(default=None, alias="githubRepo")

    @property
    def project_id_int(self) -> int:
        return int(self.project_id)

    @property
    def masked_api_key(self) -> str:
        """API key safe for display."""
        return f"{self.api_key[:4]}…"

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, exclude_none=True, indent=2)


class LearningRecord(BaseModel):
    """A single captured learning waiting in .arsenal/learnings/."""

    model_config = ConfigDict(strict=True, extra="ignore")

    file_path: str
    function_name: str
    library_name: str
    description: str
    code_snippet: str
    title: str | None = None

    def to_payload(self) -> dict[str, str]:
        """Body for POST /projects/{id}/learnings (title is local only)."""
        return self.model_dump(exclude={"title"})


# =============================================================================
# Backend Payloads
# =============================================================================


class LoginResult(BaseModel):
    """Response of POST /auth/login."""

    access_token: str
    user_id: int
    token_type: str = "bearer"


class ApiKeyResult(BaseModel):
    """Response of POST /auth/generate-key."""

    api_key: str


class ApiKeyIdentity(BaseModel):
    """The user/project pair an API key belongs to."""

    user_id: int
    project_id: int


class ApiKeyCheck(BaseModel):
    """Response of GET /auth/test-api-key."""

    user: ApiKeyIdentity


def summarize_validation_error(error: ValidationError) -> str:
    """First validation problem as a one-line message."""
    first = error.errors()[0]
    location = ".".join(str(part) for part in first.get("loc", ())) or "document"
    return f"{location}: {first.get('msg', 'invalid')}"
