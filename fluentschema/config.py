# fluentschema/config.py
"""
fluentschema Configuration — Single source of truth via Pydantic Settings.

Resolution order: env vars (FLUENTSCHEMA_*) > .env file > defaults.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

from fluentschema.models import JsonType


class FluentSchemaConfig(BaseSettings):
    """Defaults used when a new builder chain is started."""

    model_config = SettingsConfigDict(
        env_prefix="FLUENTSCHEMA_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # --- Document defaults ---
    schema_uri: str = "http://json-schema.org/draft-07/schema#"
    root_type: JsonType = "object"
    # Type given to a declared property that names no type and no combinator.
    default_property_type: JsonType = "string"

    # --- Logging ---
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"
    log_dir: Optional[Path] = None


@lru_cache(maxsize=1)
def get_config() -> FluentSchemaConfig:
    """Return the global config singleton."""
    return FluentSchemaConfig()
