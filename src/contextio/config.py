"""Client configuration read from ``CONTEXTIO_*`` environment variables.

``Settings`` also reads a local ``.env`` file.  ``get_settings()`` parses the
environment once per process; ``validate_credentials()`` reports which OAuth
settings are still empty.

Nothing in this module imports from the rest of ``contextio``, so any module
can depend on it.
"""

from __future__ import annotations

import sys
from functools import lru_cache
from pathlib import Path

import structlog
from pydantic import SecretStr, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = structlog.get_logger()


class Settings(BaseSettings):
    """Client settings loaded from environment variables and ``.env`` file.

    ``SecretStr`` fields prevent accidental leaks in logs or error output.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # -- General ---------------------------------------------------------------
    production: bool = False
    log_level: str = "INFO"

    # -- API -------------------------------------------------------------------
    contextio_base_url: str = "https://api.context.io/"
    contextio_timeout: float = 60.0

    # -- OAuth (secrets) -------------------------------------------------------
    contextio_consumer_key: str = ""
    contextio_consumer_secret: SecretStr = SecretStr("")
    contextio_token: str = ""
    contextio_token_secret: SecretStr = SecretStr("")
    contextio_account_id: str = ""

    # -- Credential store ------------------------------------------------------
    credentials_path: Path = Path("contextio_credentials.json")


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide ``Settings``.

    Cached with ``lru_cache``; tests call ``get_settings.cache_clear()`` after
    changing the environment.

    Returns:
        The client ``Settings``.
    """
    try:
        return Settings()
    except ValidationError as exc:
        # exc.errors() omits input values, so secrets stay out of the log.
        logger.error("settings_validation_failed", errors=exc.errors())
        sys.exit(1)


def validate_credentials(settings: Settings, require_account: bool = False) -> list[str]:
    """Report credential settings that are missing.

    In **production** mode (``settings.production is True``) any missing
    credential is fatal and the process exits.  Otherwise each one is logged
    as a warning and the list is returned to the caller.

    Args:
        settings: The loaded settings.
        require_account: Also require the token pair and account id.

    Returns:
        Human-readable descriptions of the missing credentials.
    """
    errors: list[str] = []

    if not settings.contextio_consumer_key:
        errors.append("CONTEXTIO_CONSUMER_KEY is empty or not set")
    if not settings.contextio_consumer_secret.get_secret_value():
        errors.append("CONTEXTIO_CONSUMER_SECRET is empty or not set")

    if require_account:
        if not settings.contextio_token:
            errors.append("CONTEXTIO_TOKEN is empty or not set")
        if not settings.contextio_token_secret.get_secret_value():
            errors.append("CONTEXTIO_TOKEN_SECRET is empty or not set")
        if not settings.contextio_account_id:
            errors.append("CONTEXTIO_ACCOUNT_ID is empty or not set")

    if not errors:
        logger.info("credential_validation_passed")
        return errors

    if settings.production:
        for err in errors:
            logger.error("credential_missing", detail=err)
        missing = "\n".join(f"  - {err}" for err in errors)
        print(f"Missing required Context.IO credentials:\n{missing}", file=sys.stderr)
        sys.exit(1)

    for err in errors:
        logger.warning("credential_missing_dev", detail=err)
    return errors
