"""Tests for runtime settings."""

import json
from pathlib import Path

from retakes_spawns.config import RetakesSettings, load_settings


class TestSettings:

    def test_derived_paths(self, tmp_path):
        settings = RetakesSettings(data_dir=tmp_path)
        assert settings.map_config_path("de_dust2") == tmp_path / "map_config" / "de_dust2.json"
        assert settings.preferences_path == tmp_path / "player_prefs.json"

    def test_overrides_from_file(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({
            "data_dir": str(tmp_path / "data"),
            "min_spawn_distance": 50.0,
            "enable_spawn_preferences": False,
            "unknown_key": 1,
        }))

        settings = load_settings(path)

        assert settings.data_dir == Path(tmp_path / "data")
        assert settings.min_spawn_distance == 50.0
        assert settings.enable_spawn_preferences is False
        assert settings.nearest_spawn_max_distance == 128.0

    def test_corrupt_file_gives_defaults(self, tmp_path, monkeypatch):
        monkeypatch.setenv("HOME", str(tmp_path))
        path = tmp_path / "settings.json"
        path.write_text("{{{")
        settings = load_settings(path)
        assert settings.min_spawn_distance == 72.0
