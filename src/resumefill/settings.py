"""Runtime settings loaded from `.env` and environment variables."""

from __future__ import annotations

import logging
import ssl
from functools import lru_cache
from pathlib import Path
from typing import Any
from urllib.parse import urlparse

import certifi
import httpx
from pydantic import Field, PrivateAttr, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from resumefill.exceptions import SettingsError
from resumefill.typing.models import RequesterConfig

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

    project_name: str = "resumefill"
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
    all_proxy: str | None = Field(default=None, validation_alias="ALL_PROXY", description="All proxy URL.")

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

    openai_base_url: str | None = Field(
        default="https://openrouter.ai/api/v1",
        validation_alias="OPENAI_BASE_URL",
        description="Base URL of the OpenAI-compatible endpoint.",
    )
    openai_api_key: str | None = Field(
        default=None,
        validation_alias="OPENAI_API_KEY",
        description="API key for the endpoint.",
    )
    openai_model: str = Field(
        default="google/gemini-2.5-flash-lite",
        validation_alias="OPENAI_MODEL",
        description="Model used to answer form questions.",
    )
    temperature: float = Field(
        default=0.0,
        validation_alias="TEMPERATURE",
        description="Sampling temperature for answer generation.",
    )
    max_tokens: int = Field(
        default=500,
        validation_alias="MAX_TOKENS",
        description="Maximum completion tokens per answer request.",
    )
    max_retries: int = Field(
        default=3,
        validation_alias="MAX_RETRIES",
        description="Additional attempts after a failed answer request.",
    )
    retry_base_delay_ms: int = Field(
        default=1000,
        validation_alias="RETRY_BASE_DELAY_MS",
        description="Backoff delay before the first retry, doubled on each retry.",
    )
    settle_delay_ms: int = Field(
        default=100,
        validation_alias="SETTLE_DELAY_MS",
        description="Pause after each applied field before the next one.",
    )
    http_referer: str = Field(
        default="https://github.com/resumefill/resumefill",
        validation_alias="HTTP_REFERER",
        description="Referer header sent to the endpoint.",
    )
    app_title: str = Field(
        default="Smart Resume Form Filler",
        validation_alias="APP_TITLE",
        description="Application title header sent to the endpoint.",
    )
    _httpx_client: httpx.Client | None = PrivateAttr(default=None)

    @field_validator("openai_base_url")
    @classmethod
    def _validate_base_url(cls, value: str | None) -> str | None:
        """Require https for remote endpoints.

        Args:
            value (str | None): Raw base URL.

        Raises:
            ValueError: If a non-local endpoint is not served over https.

        Returns:
            str | None: Validated base URL.
        """
        if not value:
            return None
        parsed = urlparse(value)
        if parsed.scheme == "http" and (parsed.hostname or "") not in _LOCAL_HOSTS:
            raise ValueError("OPENAI_BASE_URL must use https outside local development")  # noqa: TRY003
        return value

    def requester_config(self) -> RequesterConfig:
        """Return answer requester options derived from settings."""
        return RequesterConfig(
            base_url=self.openai_base_url,
            api_key=self.openai_api_key,
            model=self.openai_model,
            temperature=self.temperature,
            max_tokens=self.max_tokens,
            max_retries=self.max_retries,
            retry_base_delay_ms=self.retry_base_delay_ms,
            headers={"HTTP-Referer": self.http_referer, "X-Title": self.app_title},
        )

    def get_httpx_client(self) -> httpx.Client:
        """Return the cached HTTPX client, creating it on first use."""
        if self._httpx_client is None:
            self._httpx_client = httpx.Client(**build_httpx_client_kwargs(self))
        return self._httpx_client

    def close_httpx_client(self) -> None:
        """Close the cached HTTPX client (best effort)."""
        client = self._httpx_client
        self._httpx_client = None
        if client is None:
            return
        try:
            client.close()
        except Exception:
            logger.warning("Failed to close HTTPX client")


def _cert_store_has_ca(context: ssl.SSLContext) -> bool:
    """Return whether the context trusts at least one CA."""
    return context.cert_store_stats().get("x509_ca", 0) > 0


def _get_certifi_cafile() -> str:
    """Return the certifi CA bundle path."""
    return certifi.where()


def build_ssl_context(settings: Settings) -> ssl.SSLContext:
    """Build a strict SSL context from settings.

    Falls back to the certifi bundle when no explicit certificate is configured
    and the host store is empty.

    Args:
        settings (Settings): Runtime settings.

    Returns:
        ssl.SSLContext: Configured TLS context.
    """
    ssl_context = ssl.create_default_context(cafile=settings.cert_path)
    if settings.cert_path is None and not _cert_store_has_ca(ssl_context):
        ssl_context = ssl.create_default_context(cafile=_get_certifi_cafile())
    ssl_context.verify_mode = ssl.CERT_REQUIRED
    ssl_context.minimum_version = ssl.TLSVersion.TLSv1_2
    return ssl_context


def build_httpx_client_kwargs(settings: Settings) -> dict[str, Any]:
    """Build kwargs used for `httpx.Client`.

    Args:
        settings (Settings): Runtime settings.

    Returns:
        dict[str, Any]: Arguments for the client constructor.
    """
    kwargs: dict[str, Any] = {
        "verify": build_ssl_context(settings),
        "timeout": settings.timeout,
    }
    proxy_url = settings.https_proxy or settings.http_proxy or settings.all_proxy
    if proxy_url:
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
