"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, datescopes.toml only contains
overrides. An empty file (or no file) gives Monday week starts in the
system local timezone, filtering on ``created_at``.
"""

from __future__ import annotations

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, Field, field_validator

from datescopes.domain.calendar import DEFAULT_WEEK_START, Weekday


class WindowConfig(BaseModel):
    """[window] section."""

    model_config = {"frozen": True}

    week_start: Weekday = DEFAULT_WEEK_START
    timezone: str | None = None
    default_field: str = Field(default="created_at", min_length=1)

    @field_validator("timezone")
    @classmethod
    def _known_timezone(cls, value: str | None) -> str | None:
        if value is None:
            return None
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            msg = f"Unknown timezone: {value!r}"
            raise ValueError(msg) from exc
        return value


class LoggingConfig(BaseModel):
    """[logging] section."""

    model_config = {"frozen": True}

    verbose: bool = False
    log_json: bool = False
