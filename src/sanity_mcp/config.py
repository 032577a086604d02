"""Application settings loaded from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

_DEFAULT_API_HOST = "https://api.sanity.io"
_TRUTHY = {"1", "true", "yes", "on"}


def _env(key: str, default: str = "") -> str:
    return os.environ.get(key, default)


def _env_bool(key: str, *, default: bool) -> bool:
    raw = os.environ.get(key)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in _TRUTHY


def _env_float(key: str, default: float) -> float:
    raw = os.environ.get(key, "")
    try:
        return float(raw) if raw else default
    except ValueError:
        return default


@dataclass(frozen=True)
class SanityConfig:
    project_id: str = field(default_factory=lambda: _env("SANITY_PROJECT_ID"))
    dataset: str = field(default_factory=lambda: _env("SANITY_DATASET"))
    token: str = field(default_factory=lambda: _env("SANITY_API_TOKEN"))
    api_version: str = field(default_factory=lambda: _env("SANITY_API_VERSION", "2025-02-19"))
    api_host: str = field(default_factory=lambda: _env("SANITY_API_HOST", _DEFAULT_API_HOST))
    timeout: float = field(default_factory=lambda: _env_float("SANITY_TIMEOUT", 30.0))

    @property
    def base_url(self) -> str:
        """Project-scoped API root, e.g. ``https://abc123.api.sanity.io/v2025-02-19``."""
        version = self.api_version.lstrip("v")
        host = self.api_host.rstrip("/")
        if host == _DEFAULT_API_HOST:
            return f"https://{self.project_id}.api.sanity.io/v{version}"
        return f"{host}/v{version}"

    @property
    def management_url(self) -> str:
        """Global API root for project management endpoints (datasets)."""
        version = self.api_version.lstrip("v")
        return f"{self.api_host.rstrip('/')}/v{version}/projects/{self.project_id}"

    @property
    def missing(self) -> list[str]:
        """Names of required environment variables that are not set."""
        required = {
            "SANITY_PROJECT_ID": self.project_id,
            "SANITY_DATASET": self.dataset,
            "SANITY_API_TOKEN": self.token,
        }
        return [name for name, value in required.items() if not value]


@dataclass(frozen=True)
class AppConfig:
    env: str = field(default_factory=lambda: _env("APP_ENV", "development"))
    log_level: str = field(default_factory=lambda: _env("LOG_LEVEL", "INFO"))
    log_file: str = field(default_factory=lambda: _env("LOG_FILE"))
    server_name: str = field(default_factory=lambda: _env("MCP_SERVER_NAME", "sanity-mcp"))
    require_initial_context: bool = field(
        default_factory=lambda: _env_bool("MCP_REQUIRE_INITIAL_CONTEXT", default=True)
    )

    @property
    def is_development(self) -> bool:
        return self.env == "development"


@dataclass(frozen=True)
class Settings:
    sanity: SanityConfig = field(default_factory=SanityConfig)
    app: AppConfig = field(default_factory=AppConfig)


def load_settings() -> Settings:
    """Load ``.env`` (if present) and build settings from the environment."""
    load_dotenv()
    return Settings()
