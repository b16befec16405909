"""vibe-generate configuration.

Centralised, typed configuration for a scaffolding run. Settings use a
Pydantic v2 model so they are validated at construction time and can be
populated from environment variables without boiler-plate.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator

PLACEHOLDER = "{{project-name}}"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Config(BaseModel):
    """Global vibe-generate configuration.

    Built once by the CLI entry point (usually through :meth:`from_env`) and
    passed explicitly to template discovery and the scaffolder.
    """

    model_config = {"frozen": True}

    placeholder: str = Field(default=PLACEHOLDER, min_length=1)
    templates_dir_name: str = Field(
        default="templates",
        min_length=1,
        description="Directory name looked for while walking up from the working directory",
    )
    templates_dir: Path | None = Field(
        default=None,
        description="Explicit templates root; skips the upward search when it is a directory",
    )
    max_search_depth: int = Field(
        default=32,
        ge=0,
        description="How many parent directories the upward search may visit",
    )
    log_level: str = Field(default="WARNING")

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return level

    @classmethod
    def from_env(cls, **overrides: Any) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            VIBE_TEMPLATES_DIR, VIBE_MAX_SEARCH_DEPTH, VIBE_LOG_LEVEL.

        Keyword arguments take precedence over the environment.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("VIBE_TEMPLATES_DIR"):
            kwargs["templates_dir"] = Path(os.environ["VIBE_TEMPLATES_DIR"])
        if os.environ.get("VIBE_MAX_SEARCH_DEPTH"):
            kwargs["max_search_depth"] = int(os.environ["VIBE_MAX_SEARCH_DEPTH"])
        if os.environ.get("VIBE_LOG_LEVEL"):
            kwargs["log_level"] = os.environ["VIBE_LOG_LEVEL"]

        kwargs.update(overrides)
        return cls(**kwargs)
