"""Unified settings — init kwargs, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — explicit overrides from the caller
  2. Env vars     — ``DATESCOPES_*`` prefix, ``__`` for nested fields
  3. TOML file    — ``datescopes.toml`` discovered via walk-up
  4. Code defaults — baked into the section models

Uses Pydantic Settings v2 with a custom :class:`TomlSettingsSource` that
reuses the ``find_config`` walk-up discovery from
:mod:`datescopes.config.discovery`.
"""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from datescopes.config.discovery import find_config, read_toml
from datescopes.config.models import LoggingConfig, WindowConfig


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from a ``datescopes.toml`` file."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            self._data = read_toml(toml_path)

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        """Return the full TOML data dict for Pydantic to merge."""
        return self._data


# Thread-local storage for TOML path during construction.
_tls = threading.local()


class DateScopesSettings(BaseSettings):
    """Unified settings for datescopes.

    Attributes:
        config_path: The TOML file the settings were read from, if any.
        window: Week start, timezone, and default field.
        logging: Verbosity and renderer for :func:`configure_logging`.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "DATESCOPES_",
        "env_nested_delimiter": "__",
    }

    config_path: Path | None = None

    window: WindowConfig = Field(default_factory=WindowConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert TOML source between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    @classmethod
    def from_file(
        cls,
        config_path: str | Path | None = None,
        *,
        start: Path | None = None,
        **overrides: Any,
    ) -> DateScopesSettings:
        """Construct settings from an explicit or discovered TOML file.

        Without *config_path*, ``datescopes.toml`` is looked up by walking
        up from *start* (default: cwd). *overrides* take priority over
        every other source.
        """
        toml_path: Path | None = None
        if config_path:
            p = Path(config_path)
            if p.is_file():
                toml_path = p
        else:
            toml_path = find_config(start)

        _tls.toml_path = toml_path
        try:
            return cls(config_path=toml_path, **overrides)
        finally:
            _tls.toml_path = None
