"""Tests for persistent settings (redirected to tmp_path by conftest)."""

import json

from curvescope.core import settings


def test_defaults_when_file_missing():
    assert settings.load_settings() == {}
    assert settings.get_setting("show_axis") is True
    assert settings.get_setting("show_regions") is False
    assert settings.get_setting("pick_radius_px") == 5.0


def test_explicit_default_wins_over_builtin():
    assert settings.get_setting("show_axis", default="custom") == "custom"
    assert settings.get_setting("unknown_key") is None


def test_set_setting_persists():
    settings.set_setting("show_regions", True)
    settings.set_setting("last_directory", "/data")
    assert settings.get_setting("show_regions") is True
    on_disk = json.loads(settings.SETTINGS_PATH.read_text(encoding="utf-8"))
    assert on_disk == {"last_directory": "/data", "show_regions": True}


def test_corrupt_file_ignored():
    settings.SETTINGS_PATH.parent.mkdir(parents=True)
    settings.SETTINGS_PATH.write_text("{not json", encoding="utf-8")
    assert settings.load_settings() == {}
    assert settings.get_setting("show_markers") is True


def test_non_dict_json_ignored():
    settings.SETTINGS_PATH.parent.mkdir(parents=True)
    settings.SETTINGS_PATH.write_text("[1, 2]", encoding="utf-8")
    assert settings.load_settings() == {}
