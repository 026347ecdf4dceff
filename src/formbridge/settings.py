"""Runtime settings loaded from `.env` and environment variables."""

from __future__ import annotations

import logging
import ssl
from functools import lru_cache
from pathlib import Path
from typing import Any
from urllib.parse import urlparse

import certifi
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from formbridge.exceptions import SettingsError
from formbridge.typing.enums import PathScheme

logger = logging.getLogger(__name__)

_LOCAL_HOSTS = frozenset({"localhost", "127.0.0.1", "::1"})


class Settings(BaseSettings):
    """Package settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    project_name: str = "formbridge"
    app_env: str = Field(
        default="dev",
        validation_alias="APP_ENV",
        description="Application environment, e.g. 'dev', 'prod'.",
    )

    log_level: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Logging level, e.g. 'INFO', 'DEBUG'.",
    )
    log_json: bool = Field(
        default=True,
        validation_alias="LOG_JSON",
        description="Enable JSON formatted logs.",
    )
    log_file: str | None = Field(
        default=None,
        validation_alias="LOG_FILE",
        description="File path for log output.",
    )
    http_proxy: str | None = Field(default=None, validation_alias="HTTP_PROXY", description="HTTP proxy URL.")
    https_proxy: str | None = Field(
        default=None,
        validation_alias="HTTPS_PROXY",
        description="HTTPS proxy URL.",
    )

    cert_path: str | None = Field(
        default=None,
        validation_alias="CERT_PATH",
        description="Path to SSL certificate.",
    )
    timeout: float = Field(
        default=30.0,
        validation_alias="TIMEOUT",
        description="Request timeout in seconds.",
    )

    engine_base_url: str = Field(
        default="http://localhost:8080/engine-rest",
        validation_alias="ENGINE_BASE_URL",
        description="Base URL of the workflow engine REST API.",
    )
    engine_max_connections: int = Field(
        default=20,
        validation_alias="ENGINE_MAX_CONNECTIONS",
        description="Maximum number of concurrent connections to the engine.",
    )
    next_task_max_attempts: int = Field(
        default=3,
        ge=1,
        validation_alias="NEXT_TASK_MAX_ATTEMPTS",
        description="Attempts made when polling for the next task.",
    )
    next_task_retry_delay: float = Field(
        default=0.5,
        ge=0,
        validation_alias="NEXT_TASK_RETRY_DELAY",
        description="Fixed delay in seconds between next-task attempts.",
    )

    client_identifier: str = Field(
        default="formbridge",
        validation_alias="CLIENT_IDENTIFIER",
        description="Client identifier merged into every task completion.",
    )
    client_address: str = Field(
        default="127.0.0.1",
        validation_alias="CLIENT_ADDRESS",
        description="Client network address merged into every task completion.",
    )

    token_username: str | None = Field(default=None, validation_alias="TOKEN_USERNAME")
    token_client_id: str | None = Field(default=None, validation_alias="TOKEN_CLIENT_ID")
    token_scope: str | None = Field(default=None, validation_alias="TOKEN_SCOPE")
    token_auth_code: str | None = Field(default=None, validation_alias="TOKEN_AUTH_CODE")
    token_grant_type: str = Field(default="client_credentials", validation_alias="TOKEN_GRANT_TYPE")

    submission_path_scheme: PathScheme = Field(
        default=PathScheme.STRUCTURAL,
        validation_alias="SUBMISSION_PATH_SCHEME",
        description=(
            "How submission keys, which become engine variable names, are derived: "
            "'structural' JSON paths into the form or 'field_name' descriptor names."
        ),
    )
    prefill_component_types: list[str] = Field(
        default_factory=lambda: ["labelDict"],
        validation_alias="PREFILL_COMPONENT_TYPES",
        description="Component types whose required-field values are prefilled from task variables.",
    )

    @field_validator("engine_base_url")
    @classmethod
    def _validate_engine_base_url(cls, value: str) -> str:
        """Require https for remote engines outside local development.

        Args:
            value (str): Raw base URL.

        Raises:
            ValueError: If the URL is not usable.

        Returns:
            str: Base URL without trailing slash.
        """
        parsed = urlparse(value)
        if parsed.scheme not in {"http", "https"} or not parsed.hostname:
            raise ValueError("ENGINE_BASE_URL must be an absolute http(s) URL")  # noqa: TRY003
        if parsed.scheme == "http" and parsed.hostname not in _LOCAL_HOSTS:
            raise ValueError("ENGINE_BASE_URL must use https outside local development")  # noqa: TRY003
        return value.rstrip("/")


def build_ssl_context(settings: Settings) -> ssl.SSLContext:
    """Build a strict SSL context from settings.

    Args:
        settings (Settings): Runtime settings.

    Returns:
        ssl.SSLContext: Configured TLS context.
    """
    ssl_context = ssl.create_default_context(cafile=settings.cert_path or certifi.where())
    ssl_context.verify_mode = ssl.CERT_REQUIRED
    ssl_context.minimum_version = ssl.TLSVersion.TLSv1_2
    return ssl_context


def build_httpx_client_kwargs(settings: Settings) -> dict[str, Any]:
    """Build kwargs used for `httpx.AsyncClient`.

    Args:
        settings (Settings): Runtime settings.

    Returns:
        dict[str, Any]: Arguments for the client constructor.
    """
    kwargs: dict[str, Any] = {
        "base_url": settings.engine_base_url,
        "verify": build_ssl_context(settings),
        "timeout": settings.timeout,
    }

    host = urlparse(settings.engine_base_url).hostname
    proxy_url = settings.https_proxy or settings.http_proxy
    if proxy_url and host not in _LOCAL_HOSTS:
        kwargs["proxy"] = proxy_url

    return kwargs


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance.

    Raises:
        SettingsError: If settings cannot be loaded or validated.

    Returns:
        Settings: The loaded settings instance.
    """
    try:
        return Settings()
    except Exception as exc:
        if _is_missing_settings_error(exc):
            try:
                ensure_env_file_exists()
                return Settings()
            except Exception as retry_exc:
                raise SettingsError(exc=retry_exc) from retry_exc
        raise SettingsError(exc=exc) from exc


def ensure_env_file_exists(
    *,
    env_path: Path = Path(".env"),
    template_path: Path = Path(".env.template"),
) -> None:
    """Create `.env` from template when missing.

    Args:
        env_path (Path): Target environment file path.
        template_path (Path): Template file path.
    """
    if env_path.exists() or not template_path.exists():
        return
    env_path.write_text(template_path.read_text(encoding="utf-8"), encoding="utf-8")
    logger.info(
        "Created environment file from template",
        extra={"env_path": str(env_path), "template_path": str(template_path)},
    )


def _is_missing_settings_error(exc: Exception) -> bool:
    """Return whether the settings failure is due to missing values.

    Args:
        exc (Exception): Caught settings initialization error.

    Returns:
        bool: True when the error represents missing settings values.
    """
    if not isinstance(exc, ValidationError):
        return False
    return any(error.get("type") == "missing" for error in exc.errors())
