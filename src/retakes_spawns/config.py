"""
Runtime settings for the retakes spawn system.

Settings are a plain dataclass with defaults; a JSON file can override any
field. Handles the default location ~/.config/retakes_spawns/.
"""

from __future__ import annotations
import json
import logging
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


def get_config_dir() -> Path:
    """
    Get the default data directory.

    Returns:
        Path to ~/.config/retakes_spawns/
        Creates the directory if it doesn't exist.
    """
    config_dir = Path.home() / ".config" / "retakes_spawns"
    config_dir.mkdir(parents=True, exist_ok=True)
    return config_dir


@dataclass
class RetakesSettings:
    # Storage
    data_dir: Path = field(default_factory=get_config_dir)
    map_config_dirname: str = "map_config"
    preferences_filename: str = "player_prefs.json"

    # Spawn editing
    min_spawn_distance: float = 72.0
    nearest_spawn_max_distance: float = 128.0

    # Round setup
    enable_spawn_preferences: bool = True

    # Misc
    log_level: str = "INFO"

    @property
    def map_config_dir(self) -> Path:
        return Path(self.data_dir) / self.map_config_dirname

    @property
    def preferences_path(self) -> Path:
        return Path(self.data_dir) / self.preferences_filename

    def map_config_path(self, map_name: str) -> Path:
        return self.map_config_dir / f"{map_name}.json"


def _settings_from_dict(data: Dict[str, Any]) -> RetakesSettings:
    known = {f.name for f in fields(RetakesSettings)}
    overrides = {}
    for key, value in data.items():
        if key not in known:
            logger.warning("Ignoring unknown setting '%s'", key)
            continue
        overrides[key] = Path(value).expanduser() if key == "data_dir" else value
    return RetakesSettings(**overrides)


def load_settings(path: Optional[Path] = None) -> RetakesSettings:
    """
    Load settings, applying overrides from a JSON file.

    Args:
        path: Settings file; None means defaults only

    Returns:
        RetakesSettings (defaults if the file is missing or invalid)
    """
    if path is None:
        return RetakesSettings()

    path = Path(path)
    if not path.exists():
        logger.info("No settings file at %s, using defaults", path)
        return RetakesSettings()

    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
        return _settings_from_dict(data)
    except (OSError, json.JSONDecodeError, AttributeError, TypeError) as e:
        logger.error("Failed to load settings %s: %s", path, e)
        return RetakesSettings()
