"""Application settings — storage, history, logging, display."""

import os
from pathlib import Path

from pydantic import BaseModel, Field

_ENV_PREFIX = "ROU_LEASE_"


class AppSettings(BaseModel):
    """Settings for the collaborators around the engine.

    The engine itself takes no settings; everything here configures the
    storage, history, logging and presentation layers.
    """

    storage_path: Path = Field(
        default_factory=lambda: Path.home() / ".rou_lease" / "store.json",
        description="JSON file backing the key-value store.",
    )
    history_limit: int = Field(
        default=10, ge=1, le=100,
        description="Maximum number of calculations kept in history (newest first).",
    )
    log_level: str = Field(default="INFO", description="Root level for the rou_lease loggers.")
    currency_label: str = Field(
        default="",
        description="Suffix appended to formatted amounts in summaries (e.g. 'KRW').",
    )

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> "AppSettings":
        """Build settings from ``ROU_LEASE_*`` environment variables."""
        env = os.environ if environ is None else environ
        overrides: dict[str, str] = {}
        for field_name in cls.model_fields:
            key = f"{_ENV_PREFIX}{field_name.upper()}"
            if key in env:
                overrides[field_name] = env[key]
        return cls(**overrides)
