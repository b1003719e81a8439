"""Tests for YAML configuration loading."""

from zoneinfo import ZoneInfo

import pytest

from fuzzydate import config
from fuzzydate.config import DEFAULT_FORMAT, Config, find_config, get_zone, load_config
from fuzzydate.errors import ConfigError


@pytest.fixture(autouse=True)
def no_user_config(monkeypatch, tmp_path):
    monkeypatch.delenv(config.ENV_VAR, raising=False)
    monkeypatch.setattr(config, "DEFAULT_PATH", tmp_path / "missing.yaml")


class TestLoadConfig:
    def test_defaults_without_file(self):
        assert load_config() == Config()
        assert load_config().format == DEFAULT_FORMAT

    def test_explicit_path(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("format: '%Y-%m-%d'\ninput_timezone: America/New_York\n")

        loaded = load_config(path)
        assert loaded.format == "%Y-%m-%d"
        assert loaded.input_timezone == "America/New_York"
        assert loaded.output_timezone is None

    def test_environment_variable(self, tmp_path, monkeypatch):
        path = tmp_path / "env.yaml"
        path.write_text("output_timezone: UTC\n")
        monkeypatch.setenv(config.ENV_VAR, str(path))

        assert find_config() == path
        assert load_config().output_timezone == "UTC"

    def test_default_location(self, tmp_path, monkeypatch):
        path = tmp_path / "default.yaml"
        path.write_text("input_timezone: Europe/London\n")
        monkeypatch.setattr(config, "DEFAULT_PATH", path)

        assert load_config().input_timezone == "Europe/London"

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_config(path) == Config()

    def test_unknown_key(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("timezone: UTC\n")
        with pytest.raises(ConfigError):
            load_config(path)

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("format: [unclosed\n")
        with pytest.raises(ConfigError, match="invalid YAML"):
            load_config(path)

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("- UTC\n")
        with pytest.raises(ConfigError, match="mapping"):
            load_config(path)

    def test_missing_explicit_file(self, tmp_path):
        with pytest.raises(ConfigError):
            load_config(tmp_path / "nope.yaml")


class TestGetZone:
    def test_named(self):
        assert get_zone("America/New_York") == ZoneInfo("America/New_York")

    def test_system(self):
        assert get_zone(None) is not None

    def test_unknown(self):
        with pytest.raises(ConfigError, match="unknown time zone"):
            get_zone("Not/A_Zone")
