"""
Stored-config tamper check.

A config copied between projects, or whose API key was reissued elsewhere,
still parses fine locally; only the backend can tell it is stale. Every
command that trusts the stored identifiers calls validate_config first.
"""

from __future__ import annotations

from loguru import logger

from arsenal.core.errors import ConfigMismatchError, ValidationFailedError
from arsenal.core.models import ApiKeyIdentity, ProjectConfig
from arsenal.core.platform_client import ArsenalClient


async def validate_config(client: ArsenalClient, config: ProjectConfig) -> ApiKeyIdentity:
    """
    Confirm the API key belongs to the stored user and project.

    Raises:
        ConfigMismatchError: If the backend reports a different user or project
        ValidationFailedError: If the key could not be checked at all
    """
    try:
        identity = await client.validate_api_key(config.api_key)
    except Exception as e:
        raise ValidationFailedError(e) from e

    if identity.user_id != config.user_id or identity.project_id != config.project_id_int:
        logger.warning(
            f"Config mismatch: stored user={config.user_id} project={config.project_id}, "
            f"key belongs to user={identity.user_id} project={identity.project_id}"
        )
        raise ConfigMismatchError(
            expected_user_id=config.user_id,
            expected_project_id=config.project_id_int,
            actual_user_id=identity.user_id,
            actual_project_id=identity.project_id,
        )

    logger.debug(f"API key {config.masked_api_key} valid for project {config.project_id}")
    return identity
