"""
Project initialization: login, ownership check, API key issuance.
"""

from __future__ import annotations

from loguru import logger

from arsenal.core.credential_store import CredentialStore
from arsenal.core.models import ProjectConfig
from arsenal.core.platform_client import ArsenalClient


async def initialize_project(
    client: ArsenalClient,
    store: CredentialStore,
    email: str,
    password: str,
    project_id: str,
) -> ProjectConfig:
    """
    Bind the working directory to an Arsenal project.

    Nothing is written unless login, the ownership check and key issuance
    all succeed.

    Raises:
        ValueError: If project_id is not a decimal number
        AuthFailedError, ProjectNotOwnedError, KeyIssuanceFailedError
    """
    project_id = project_id.strip()
    if not (project_id.isascii() and project_id.isdigit()):
        raise ValueError(f"Project ID must be a number, got {project_id!r}")

    login = await client.login(email.strip(), password)
    await client.verify_project_ownership(login.access_token, project_id)
    api_key = await client.issue_api_key(login.access_token, project_id)

    config = ProjectConfig(project_id=project_id, api_key=api_key, user_id=login.user_id)
    store.save(config)
    logger.info(f"Initialized project {project_id} in {store.workdir}")
    return config
