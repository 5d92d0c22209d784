"""Tests for runtime configuration."""

from pathlib import Path

import pytest

from about_time import config
from about_time.config import Settings, get_settings, reload_settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("ABOUT_TIME_LIBRARY", "ABOUT_TIME_BLUR_DELAY_MS", "ABOUT_TIME_MAX_DEPTH"):
        monkeypatch.delenv(name, raising=False)
    yield
    config._settings = None


class TestSettings:
    """Tests for Settings."""

    def test_defaults(self):
        settings = Settings(_env_file=None)
        assert settings.library_path == Path("./templates.json")
        assert settings.blur_delay_ms == 150
        assert settings.max_depth == 3

    def test_environment_overrides(self, monkeypatch, tmp_path):
        monkeypatch.setenv("ABOUT_TIME_LIBRARY", str(tmp_path / "lib.json"))
        monkeypatch.setenv("ABOUT_TIME_BLUR_DELAY_MS", "300")
        settings = Settings(_env_file=None)
        assert settings.library_path == tmp_path / "lib.json"
        assert settings.blur_delay_ms == 300

    def test_output_path(self, tmp_path, monkeypatch):
        monkeypatch.setenv("ABOUT_TIME_LIBRARY", str(tmp_path / "lib.json"))
        settings = Settings(_env_file=None)
        assert settings.get_output_path("lane:1") == tmp_path / "lane_1.html"

    def test_reload(self, monkeypatch):
        monkeypatch.setenv("ABOUT_TIME_MAX_DEPTH", "7")
        assert reload_settings().max_depth == 7
        assert get_settings().max_depth == 7
