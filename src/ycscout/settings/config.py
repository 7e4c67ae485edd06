"""Configuration loader for YC Scout using Pydantic settings.

Config precedence (highest wins):
  1. CLI flags (where applicable)
  2. Environment variables (YCSCOUT_* with __ for nesting)
  3. settings.local.toml
  4. settings.<env>.toml
  5. settings.default.toml

The model and browser-host API keys additionally fall back to the
conventional ``OPENAI_API_KEY`` / ``KERNEL_API_KEY`` variables.
"""

from __future__ import annotations

import os
import tomllib
from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ycscout.exceptions import ConfigurationError

# ---------------------------------------------------------------------------
# Path helpers
# ---------------------------------------------------------------------------

_THIS_DIR = Path(__file__).resolve().parent
PROJECT_ROOT = Path(os.getenv("YCSCOUT_PROJECT_ROOT", _THIS_DIR.parents[2]))
CONFIG_DIR = PROJECT_ROOT / "config"

ENV_VAR_NAME = "YCSCOUT_ENV"
DEFAULT_ENV = "local"

YC_DIRECTORY_URL = "https://www.ycombinator.com/companies"


def _resolve_env() -> str:
    return (os.getenv(ENV_VAR_NAME) or DEFAULT_ENV).strip()


def _load_toml(path: Path) -> dict[str, Any]:
    if path.is_file():
        with open(path, "rb") as f:
            return tomllib.load(f)
    return {}


def _mask(secret: str) -> str:
    if not secret:
        return ""
    return f"{secret[:4]}…" if len(secret) > 8 else "****"


# ---------------------------------------------------------------------------
# Section models
# ---------------------------------------------------------------------------


class ExtractionSettings(BaseSettings):
    """Stagehand extraction client configuration."""

    model_config = SettingsConfigDict(env_prefix="YCSCOUT_EXTRACTION__")

    model_name: str = "gpt-4o"
    model_api_key: str = ""
    dom_settle_timeout_ms: int = 30_000
    verbose: int = 1


class KernelSettings(BaseSettings):
    """Kernel hosted-browser configuration."""

    model_config = SettingsConfigDict(env_prefix="YCSCOUT_KERNEL__")

    api_key: str = ""
    headless: bool = True
    stealth: bool = False
    timeout_seconds: int = 300


class ScoutSettings(BaseSettings):
    """Scout run parameters."""

    model_config = SettingsConfigDict(env_prefix="YCSCOUT_SCOUT__")

    directory_url: str = YC_DIRECTORY_URL
    settle_ms: int = 2_000
    requested_count: int = Field(default=5, ge=1)
    timeout_sec: float = Field(default=300.0, ge=0)


class APISettings(BaseSettings):
    """API server configuration."""

    model_config = SettingsConfigDict(env_prefix="YCSCOUT_API__")

    host: str = "0.0.0.0"
    port: int = 8200
    cors_origins: list[str] = ["http://localhost:3000"]
    validate_credentials: bool = True


class LoggingSettings(BaseSettings):
    """Logging output configuration."""

    model_config = SettingsConfigDict(env_prefix="YCSCOUT_LOGGING__")

    level: str = "INFO"
    json_format: bool = False
    # Append lifecycle events as JSONL to this file when set.
    events_jsonl_path: Path | None = None


# ---------------------------------------------------------------------------
# Root settings
# ---------------------------------------------------------------------------


class Settings(BaseSettings):
    """Root YC Scout settings with nested sections."""

    model_config = SettingsConfigDict(
        env_prefix="YCSCOUT_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    env: str = Field(default_factory=_resolve_env)

    extraction: ExtractionSettings = Field(default_factory=ExtractionSettings)
    kernel: KernelSettings = Field(default_factory=KernelSettings)
    scout: ScoutSettings = Field(default_factory=ScoutSettings)
    api: APISettings = Field(default_factory=APISettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @model_validator(mode="before")
    @classmethod
    def _merge_toml_files(cls, values: dict[str, Any]) -> dict[str, Any]:
        """Layer TOML config files before env var overrides."""
        defaults = _load_toml(CONFIG_DIR / "settings.default.toml")
        env_name = (values.get("env") or os.getenv(ENV_VAR_NAME) or DEFAULT_ENV).strip()
        env_overrides = _load_toml(CONFIG_DIR / f"settings.{env_name}.toml")
        local_overrides = _load_toml(CONFIG_DIR / "settings.local.toml")

        # Merge: defaults < env-specific < local < explicit values
        merged: dict[str, Any] = {}
        for layer in (defaults, env_overrides, local_overrides, values):
            for key, val in layer.items():
                if isinstance(val, dict) and isinstance(merged.get(key), dict):
                    merged[key] = {**merged[key], **val}
                else:
                    merged[key] = val
        return merged

    @model_validator(mode="after")
    def _fallback_credentials(self) -> "Settings":
        """Fill empty API keys from the provider-conventional env vars."""
        if not self.extraction.model_api_key:
            self.extraction.model_api_key = os.getenv("OPENAI_API_KEY", "")
        if not self.kernel.api_key:
            self.kernel.api_key = os.getenv("KERNEL_API_KEY", "")
        return self

    def missing_credentials(self) -> list[str]:
        """Return the dotted names of required credentials that are empty."""
        missing: list[str] = []
        if not self.extraction.model_api_key:
            missing.append("extraction.model_api_key")
        if not self.kernel.api_key:
            missing.append("kernel.api_key")
        return missing

    def require_credentials(self) -> None:
        """Raise ``ConfigurationError`` if any required credential is missing."""
        missing = self.missing_credentials()
        if missing:
            raise ConfigurationError(missing)

    def redacted_dump(self) -> dict[str, Any]:
        """Return a JSON-safe dump with secrets masked."""
        data = self.model_dump(mode="json")
        data["extraction"]["model_api_key"] = _mask(self.extraction.model_api_key)
        data["kernel"]["api_key"] = _mask(self.kernel.api_key)
        return data


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the singleton settings instance (cached)."""
    return Settings()
