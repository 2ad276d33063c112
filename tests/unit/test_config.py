"""Test Settings loading from TOML, env vars and overrides."""

import pytest

from nan_no_hi.core.config import Settings, load_settings
from nan_no_hi.core.errors import ConfigError


class TestSettingsDefaults:
    def test_default_settings(self):
        settings = Settings()
        assert settings.store_name is None
        assert settings.holidays.csv_path == "syukujitsu.csv"
        assert settings.holidays.encoding == "utf-8"
        assert settings.observability.log_level == "INFO"

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("NAN_NO_HI_STORE_NAME", "JapaneseHoliday")
        monkeypatch.setenv("NAN_NO_HI_HOLIDAYS__ENCODING", "cp932")
        settings = Settings()
        assert settings.store_name == "JapaneseHoliday"
        assert settings.holidays.encoding == "cp932"


class TestLoadSettings:
    def test_missing_file_is_ignored(self, tmp_path):
        settings = load_settings(tmp_path / "missing.toml")
        assert settings.holidays.csv_path == "syukujitsu.csv"

    def test_toml_file(self, tmp_path):
        path = tmp_path / "calendar.toml"
        path.write_text(
            'store_name = "holidays"\n'
            "[holidays]\n"
            'csv_path = "data/syukujitsu.csv"\n'
            'encoding = "cp932"\n',
            encoding="utf-8",
        )
        settings = load_settings(path)
        assert settings.store_name == "holidays"
        assert settings.holidays.csv_path == "data/syukujitsu.csv"
        assert settings.holidays.encoding == "cp932"

    def test_overrides_merge_into_file_sections(self, tmp_path):
        path = tmp_path / "calendar.toml"
        path.write_text('[holidays]\nencoding = "cp932"\n', encoding="utf-8")
        settings = load_settings(path, overrides={"holidays": {"csv_path": "other.csv"}})
        assert settings.holidays.csv_path == "other.csv"
        assert settings.holidays.encoding == "cp932"

    def test_invalid_toml(self, tmp_path):
        path = tmp_path / "calendar.toml"
        path.write_text("store_name = \n", encoding="utf-8")
        with pytest.raises(ConfigError, match="Invalid TOML"):
            load_settings(path)

    def test_invalid_value(self):
        with pytest.raises(ConfigError):
            load_settings(overrides={"holidays": {"encoding": 42}})
