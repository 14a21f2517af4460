"""
Arsenal Platform Client

HTTP client for the Arsenal backend. Each method is a single request with
no retries; failures surface as typed errors from arsenal.core.errors.

Usage:
    async with ArsenalClient() as client:
        login = await client.login(email, password)
        api_key = await client.issue_api_key(login.access_token, project_id)
        await client.submit_learning(api_key, project_id, record)
"""

from __future__ import annotations

from typing import Any

import httpx
from loguru import logger
from pydantic import ValidationError

from arsenal.config import get_settings
from arsenal.core.errors import (
    AuthFailedError,
    InvalidApiKeyError,
    KeyIssuanceFailedError,
    ProjectNotOwnedError,
    RemoteUnavailableError,
    SubmissionFailedError,
)
from arsenal.core.models import (
    ApiKeyCheck,
    ApiKeyIdentity,
    ApiKeyResult,
    LearningRecord,
    LoginResult,
)


def _bearer(access_token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {access_token}"}


def _api_key(api_key: str) -> dict[str, str]:
    return {"Authorization": f"ApiKey {api_key}"}


def _detail(response: httpx.Response, default: str) -> str:
    """Extract the server's error message from a failed response."""
    try:
        data = response.json()
    except ValueError:
        return response.text.strip() or default
    if isinstance(data, dict) and data.get("detail"):
        return str(data["detail"])
    return response.text.strip() or default


class ArsenalClient:
    """
    HTTP client for the Arsenal backend API.

    Supports:
    - Email/password login (JWT)
    - Project ownership check and API key issuance
    - API key validation
    - Learning submission
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize the client.

        Args:
            base_url: Backend URL (default from settings)
            timeout: Request timeout in seconds (default from settings)
            transport: Custom httpx transport, mainly for tests
        """
        settings = get_settings()
        self.base_url = (base_url or settings.api_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.request_timeout_seconds
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "ArsenalClient":
        self._ensure_client()
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    def _ensure_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                headers={"Content-Type": "application/json"},
                timeout=self.timeout,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        client = self._ensure_client()
        try:
            response = await client.request(method, path, **kwargs)
        except httpx.RequestError as e:
            logger.error(f"Connection error on {method} {path}: {e}")
            raise RemoteUnavailableError(
                f"Could not reach Arsenal at {self.base_url}: {e}"
            ) from e
        logger.debug(f"{method} {path} -> {response.status_code}")
        return response

    # =========================================================================
    # Authentication
    # =========================================================================

    async def login(self, email: str, password: str) -> LoginResult:
        """
        Exchange email and password for an access token.

        Raises:
            AuthFailedError: If the backend rejects the credentials
        """
        response = await self._request(
            "POST",
            "/auth/login",
            json={"email": email, "password": password},
        )
        if not response.is_success:
            detail = _detail(response, "Invalid credentials")
            logger.warning(f"Login rejected: {detail}")
            raise AuthFailedError(detail)

        try:
            result = LoginResult.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise AuthFailedError("Unexpected login response") from e

        logger.info(f"Logged in as user {result.user_id}")
        return result

    async def verify_project_ownership(self, access_token: str, project_id: str) -> bool:
        """
        Check that the logged-in user owns the project.

        Raises:
            ProjectNotOwnedError: If the project is missing or owned by someone else
        """
        response = await self._request(
            "GET",
            f"/projects/{project_id}",
            headers=_bearer(access_token),
        )
        if not response.is_success:
            logger.warning(f"Project {project_id} check failed: {response.status_code}")
            raise ProjectNotOwnedError(project_id)
        return True

    async def issue_api_key(self, access_token: str, project_id: str) -> str:
        """
        Generate a long-lived API key for the project.

        Raises:
            KeyIssuanceFailedError: If the backend refuses
        """
        response = await self._request(
            "POST",
            "/auth/generate-key",
            headers=_bearer(access_token),
            json={"project_id": int(project_id)},
        )
        if not response.is_success:
            raise KeyIssuanceFailedError(_detail(response, "Failed to generate API key"))

        try:
            return ApiKeyResult.model_validate(response.json()).api_key
        except (ValueError, ValidationError) as e:
            raise KeyIssuanceFailedError("Unexpected response from key endpoint") from e

    async def validate_api_key(self, api_key: str) -> ApiKeyIdentity:
        """
        Ask the backend who an API key belongs to.

        Raises:
            InvalidApiKeyError: If the key is unknown or revoked
        """
        response = await self._request(
            "GET",
            "/auth/test-api-key",
            headers=_api_key(api_key),
        )
        if not response.is_success:
            raise InvalidApiKeyError(_detail(response, "Invalid API key"))

        try:
            return ApiKeyCheck.model_validate(response.json()).user
        except (ValueError, ValidationError) as e:
            raise InvalidApiKeyError("Unexpected response from key check") from e

    # =========================================================================
    # Learnings
    # =========================================================================

    async def submit_learning(
        self,
        api_key: str,
        project_id: str,
        record: LearningRecord,
    ) -> None:
        """
        Upload one learning.

        Raises:
            SubmissionFailedError: On a non-2xx status or a transport failure
        """
        try:
            response = await self._request(
                "POST",
                f"/projects/{project_id}/learnings",
                headers=_api_key(api_key),
                json=record.to_payload(),
            )
        except RemoteUnavailableError as e:
            raise SubmissionFailedError(None, str(e.__cause__ or e)) from e

        if not response.is_success:
            raise SubmissionFailedError(
                response.status_code,
                _detail(response, response.reason_phrase or "request rejected"),
            )
