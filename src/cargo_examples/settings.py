"""Environment-driven settings for cargo-examples.

Fields
──────
cargo      : cargo executable (``CARGO_EXAMPLES_CARGO``, else ``CARGO``)
log_level  : structlog level (``CARGO_EXAMPLES_LOG_LEVEL``)
log_json   : force JSON (true) or console (false) logs, unset = auto

``CARGO`` is exported by cargo itself to the subcommands it spawns, so
``cargo +nightly examples`` runs the examples with the same toolchain.
"""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class RunnerSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="CARGO_EXAMPLES_",
        extra="ignore",
        populate_by_name=True,
    )

    cargo: str = Field(
        default="cargo",
        validation_alias=AliasChoices("CARGO_EXAMPLES_CARGO", "CARGO", "cargo"),
    )
    log_level: str = "WARNING"
    log_json: bool | None = None

    @field_validator("log_level")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unknown log level: {value!r}")
        return level

    @field_validator("cargo")
    @classmethod
    def _non_empty(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("cargo executable must not be empty")
        return value


def get_settings(**overrides: Any) -> RunnerSettings:
    """Build settings from the current environment (never cached)."""
    return RunnerSettings(**overrides)
