"""
Pytest Configuration and Fixtures.

This file configures pytest and provides shared fixtures for all tests,
including an in-process fake of the Arsenal backend built on
httpx.MockTransport.
"""
import json
import sys
from pathlib import Path

import httpx
import pytest

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from arsenal.config import get_settings  # noqa: E402
from arsenal.core.platform_client import ArsenalClient  # noqa: E402

API_URL = "http://arsenal.test"


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "smoke: Smoke tests for CLI commands")
    config.addinivalue_line("markers", "git: Tests that need a git executable")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "smoke" in str(item.fspath):
            item.add_marker(pytest.mark.smoke)


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch):
    """Point settings at the fake backend and drop the cached instance."""
    monkeypatch.setenv("ARSENAL_API_URL", API_URL)
    monkeypatch.delenv("ARSENAL_LOG_LEVEL", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


# =============================================================================
# Fake Backend
# =============================================================================


class FakeBackend:
    """
    Minimal stand-in for the Arsenal API.

    Every request is recorded in ``requests``. Behaviour is tuned through
    attributes; ``rejected_functions`` maps a learning function_name to the status
    code its submission should get.
    """

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.user_id = 7
        self.project_id = 42
        self.access_token = "jwt-token"
        self.api_key = "ak_live_1234567890"
        self.login_status = 200
        self.project_status = 200
        self.key_status = 200
        self.key_check_status = 200
        self.key_identity: dict | None = None
        self.rejected_functions: dict[str, int] = {}
        self.offline_functions: set[str] = set()

    @property
    def submissions(self) -> list[dict]:
        return [
            json.loads(r.content)
            for r in self.requests
            if r.method == "POST" and r.url.path.endswith("/learnings")
        ]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        if path == "/auth/login":
            if self.login_status != 200:
                return httpx.Response(self.login_status, json={"detail": "Incorrect email or password"})
            return httpx.Response(
                200,
                json={
                    "access_token": self.access_token,
                    "user_id": self.user_id,
                    "token_type": "bearer",
                },
            )

        if path == "/auth/generate-key":
            if self.key_status != 200:
                return httpx.Response(self.key_status, json={"detail": "Key quota exceeded"})
            return httpx.Response(200, json={"api_key": self.api_key})

        if path == "/auth/test-api-key":
            if self.key_check_status != 200:
                return httpx.Response(self.key_check_status, json={"detail": "Invalid API key"})
            identity = self.key_identity or {
                "user_id": self.user_id,
                "project_id": self.project_id,
            }
            return httpx.Response(200, json={"user": identity})

        if path.endswith("/learnings") and request.method == "POST":
            function = json.loads(request.content).get("function_name")
            if function in self.offline_functions:
                raise httpx.ConnectError("connection reset", request=request)
            status = self.rejected_functions.get(function, 201)
            if status >= 400:
                return httpx.Response(status, json={"detail": "rejected"})
            return httpx.Response(status, json={"id": len(self.submissions)})

        if path.startswith("/projects/"):
            if self.project_status != 200:
                return httpx.Response(self.project_status, json={"detail": "Not found"})
            return httpx.Response(200, json={"id": self.project_id, "name": "demo"})

        return httpx.Response(404, json={"detail": "Not Found"})


@pytest.fixture
def backend():
    """Fresh fake backend."""
    return FakeBackend()


@pytest.fixture
def make_client(backend):
    """Factory for ArsenalClient instances wired to the fake backend."""

    def _make() -> ArsenalClient:
        return ArsenalClient(base_url=API_URL, transport=httpx.MockTransport(backend.handler))

    return _make


# =============================================================================
# Project Directory
# =============================================================================


@pytest.fixture
def workdir(tmp_path):
    """An empty project directory."""
    project = tmp_path / "project"
    project.mkdir()
    return project


@pytest.fixture
def sample_config():
    """Config matching the fake backend's default identity."""
    return {
        "projectId": "42",
        "apiKey": "ak_live_1234567890",
        "userId": 7,
    }


@pytest.fixture
def write_config(workdir, sample_config):
    """Write .arsenal/config.json; returns its path."""

    def _write(data: dict | None = None, raw: str | None = None) -> Path:
        path = workdir / ".arsenal" / "config.json"
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(raw if raw is not None else json.dumps(data or sample_config), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def write_learning(workdir):
    """Write one pending learning file; returns its path."""

    def _write(name: str, title: str | None = None, raw: str | None = None, **overrides) -> Path:
        learnings = workdir / ".arsenal" / "learnings"
        learnings.mkdir(parents=True, exist_ok=True)
        path = learnings / f"{name}.json"
        if raw is not None:
            path.write_text(raw, encoding="utf-8")
            return path
        record = {
            "file_path": f"src/{name}.py",
            "function_name": name,
            "library_name": "requests",
            "description": f"How {name} works",
            "code_snippet": f"def {name}(): ...",
        }
        if title is not None:
            record["title"] = title
        record.update(overrides)
        path.write_text(json.dumps(record, indent=2), encoding="utf-8")
        return path

    return _write
