"""Settings for switchyard.

Configuration is read once from ``SWITCHYARD_``-prefixed environment
variables (or a ``.env`` file) and validated at startup.

Manifesto:
    Configuration should be explicit, validated, and environment-driven.
    The dispatch core itself takes every collaborator as an argument; the
    settings only supply defaults for the ambient concerns (logging) and
    for the registry's re-registration policy.

Features:
    - **SwitchyardSettings:** log_level, log_format, service_name, allow_overwrite
    - **get_settings():** Cached accessor, ``reset_settings()`` for tests
    - **Extra ignore:** Unknown env vars don't cause startup failures

Examples:
    >>> from switchyard.core.settings import get_settings
    >>> get_settings().allow_overwrite
    True

Tags:
    settings, configuration, pydantic, environment, switchyard
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


class SwitchyardSettings(BaseSettings):
    """Settings shared by every switchyard component.

    Fields
    ──────
    log_level       : Structlog/stdlib log level
    log_format      : ``console`` for development, ``json`` for aggregation
    service_name    : Value of ``service.name`` on every log line
    allow_overwrite : Default re-registration policy for new registries
    """

    model_config = SettingsConfigDict(
        env_prefix="SWITCHYARD_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Observability ────────────────────────────────────────────
    log_level: str = "INFO"
    log_format: Literal["console", "json"] = "console"
    service_name: str = "switchyard"

    # ── Registry ─────────────────────────────────────────────────
    allow_overwrite: bool = Field(
        default=True,
        description="Last write wins when a key is registered twice",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        level = str(value).upper()
        if level not in _LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LEVELS)}; got {value!r}")
        return level


@lru_cache(maxsize=1)
def get_settings() -> SwitchyardSettings:
    """Return the process-wide settings, reading the environment once."""
    return SwitchyardSettings()


def reset_settings() -> None:
    """Drop cached settings so the next call re-reads the environment (for testing)."""
    get_settings.cache_clear()


__all__ = ["SwitchyardSettings", "get_settings", "reset_settings"]
