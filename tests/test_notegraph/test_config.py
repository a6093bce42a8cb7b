"""Unit tests for notegraph.config."""

import logging
from pathlib import Path

import pytest

from notegraph.config import Settings, load_settings, settings_for_vault
from notegraph.errors import ConfigError


class TestSettingsFromDict:
    def test_defaults(self):
        settings = Settings.from_dict({})
        assert settings.history_limit == 50
        assert settings.match_any is False
        assert settings.suffixes == [".md"]

    def test_notegraph_table(self):
        settings = Settings.from_dict({"notegraph": {"history_limit": 5, "match_any": True}})
        assert settings.history_limit == 5
        assert settings.match_any is True

    def test_top_level_keys(self):
        assert Settings.from_dict({"suffixes": [".txt"]}).suffixes == [".txt"]

    @pytest.mark.parametrize(
        "data",
        [
            {"history_limit": "ten"},
            {"history_limit": 0},
            {"history_limit": True},
            {"match_any": "yes"},
            {"suffixes": ".md"},
        ],
    )
    def test_wrong_types(self, data):
        with pytest.raises(ConfigError):
            Settings.from_dict(data)

    def test_unknown_keys_warn(self, caplog):
        with caplog.at_level(logging.WARNING, logger="notegraph"):
            Settings.from_dict({"colour": "blue"})
        assert "colour" in caplog.text


class TestLoadSettings:
    def test_missing_file(self, tmp_path: Path):
        assert load_settings(tmp_path / "nope.toml") == Settings()
        assert load_settings(None) == Settings()

    def test_vault_file(self, tmp_path: Path):
        (tmp_path / ".notegraph.toml").write_text("[notegraph]\nhistory_limit = 3\n", encoding="utf-8")
        assert settings_for_vault(tmp_path).history_limit == 3

    def test_invalid_toml(self, tmp_path: Path):
        path = tmp_path / "bad.toml"
        path.write_text("history_limit = = 3", encoding="utf-8")
        with pytest.raises(ConfigError):
            load_settings(path)
