"""Tests for DateScopesSettings — unified settings with TOML source."""

from datetime import datetime
from pathlib import Path
from zoneinfo import ZoneInfo

import pytest

from tests.conftest import RecordingFilter

from datescopes.config.discovery import CONFIG_ENV_VAR, CONFIG_FILENAME
from datescopes.config.settings import DateScopesSettings
from datescopes.domain.calendar import Weekday
from datescopes.domain.errors import ConfigError
from datescopes.services.calculator import TimeWindowCalculator
from datescopes.services.clock import FixedClock, SystemClock
from datescopes.services.scopes import DateScopes


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    monkeypatch.delenv("DATESCOPES_WINDOW__WEEK_START", raising=False)
    monkeypatch.delenv("DATESCOPES_WINDOW", raising=False)


class TestDefaults:
    def test_all_defaults(self, tmp_path: Path) -> None:
        settings = DateScopesSettings.from_file(start=tmp_path)
        assert settings.config_path is None
        assert settings.window.week_start is Weekday.MONDAY
        assert settings.window.default_field == "created_at"
        assert settings.logging.verbose is False

    def test_frozen(self, tmp_path: Path) -> None:
        settings = DateScopesSettings.from_file(start=tmp_path)
        with pytest.raises(Exception):
            settings.config_path = tmp_path  # type: ignore[misc]


class TestTomlSource:
    def test_loads_from_discovered_toml(self, tmp_path: Path) -> None:
        toml = tmp_path / CONFIG_FILENAME
        toml.write_text('[window]\nweek_start = "sunday"\ndefault_field = "updated_at"\n')
        settings = DateScopesSettings.from_file(start=tmp_path)
        assert settings.config_path == toml
        assert settings.window.week_start is Weekday.SUNDAY
        assert settings.window.default_field == "updated_at"
        assert settings.window.timezone is None  # default preserved

    def test_explicit_config_path(self, tmp_path: Path) -> None:
        custom = tmp_path / "custom" / "my.toml"
        custom.parent.mkdir(parents=True)
        custom.write_text('[window]\ntimezone = "UTC"\n')
        settings = DateScopesSettings.from_file(custom)
        assert settings.window.timezone == "UTC"
        assert settings.config_path == custom

    def test_invalid_toml(self, tmp_path: Path) -> None:
        (tmp_path / CONFIG_FILENAME).write_text("window = [\n")
        with pytest.raises(ConfigError):
            DateScopesSettings.from_file(start=tmp_path)


class TestPriority:
    def test_env_overrides_toml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / CONFIG_FILENAME).write_text('[window]\nweek_start = "sunday"\n')
        monkeypatch.setenv("DATESCOPES_WINDOW__WEEK_START", "saturday")
        settings = DateScopesSettings.from_file(start=tmp_path)
        assert settings.window.week_start is Weekday.SATURDAY

    def test_overrides_win(self, tmp_path: Path) -> None:
        (tmp_path / CONFIG_FILENAME).write_text("[logging]\nverbose = true\n")
        settings = DateScopesSettings.from_file(start=tmp_path, logging={"verbose": False})
        assert settings.logging.verbose is False


class TestWiring:
    def test_calculator_from_settings(self, tmp_path: Path) -> None:
        (tmp_path / CONFIG_FILENAME).write_text('[window]\nweek_start = "sunday"\n')
        settings = DateScopesSettings.from_file(start=tmp_path)
        calc = TimeWindowCalculator.from_settings(settings, FixedClock(datetime(2024, 3, 15)))
        assert calc.current("week").start == datetime(2024, 3, 10)

    def test_system_clock_uses_configured_zone(self, tmp_path: Path) -> None:
        (tmp_path / CONFIG_FILENAME).write_text('[window]\ntimezone = "Asia/Tokyo"\n')
        calc = TimeWindowCalculator.from_settings(DateScopesSettings.from_file(start=tmp_path))
        assert isinstance(calc.clock, SystemClock)
        assert calc.clock.tz == ZoneInfo("Asia/Tokyo")

    def test_scopes_from_settings(self, tmp_path: Path) -> None:
        (tmp_path / CONFIG_FILENAME).write_text('[window]\ndefault_field = "logged_at"\n')
        settings = DateScopesSettings.from_file(start=tmp_path)
        scopes = DateScopes.from_settings(settings, FixedClock(datetime(2024, 3, 15)))
        recorder = RecordingFilter()
        scopes.today(recorder)
        assert recorder.last[0] == "logged_at"
