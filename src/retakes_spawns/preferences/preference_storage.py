"""
Player spawn preference persistence.

Stores one preferred spawn id per (player, map) in a single JSON file:
{"<player id>": {"<map name>": <spawn id>}}. Map names are matched
case-insensitively. Preferences are not checked against the catalog;
a stale id simply never matches a free spawn during allocation.
"""

from __future__ import annotations
import json
import logging
from pathlib import Path
from typing import Dict, Optional

logger = logging.getLogger(__name__)


class PreferenceStore:
    """Per-player, per-map preferred spawn ids, written through on every change."""

    def __init__(self, path: Path):
        self._path = Path(path)
        self._by_player: Dict[int, Dict[str, int]] = {}
        self.load()

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> None:
        """
        Read preferences from disk.

        A missing or undecodable file leaves the store empty.
        """
        self._by_player = {}
        if not self._path.exists():
            return

        try:
            with open(self._path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            self._by_player = {
                int(player_id): {str(map_name): int(spawn_id) for map_name, spawn_id in by_map.items()}
                for player_id, by_map in data.items()
            }
        except (OSError, json.JSONDecodeError, AttributeError, TypeError, ValueError) as e:
            logger.warning("Failed to load player preferences %s: %s", self._path, e)
            self._by_player = {}

    def _save(self) -> None:
        data = {
            str(player_id): dict(by_map)
            for player_id, by_map in self._by_player.items()
            if by_map
        }
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with open(self._path, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=2, sort_keys=True)
        except OSError as e:
            logger.error("Failed to write player preferences %s: %s", self._path, e)

    def get_spawn_id(self, player_id: int, map_name: str) -> Optional[int]:
        by_map = self._by_player.get(player_id)
        if not by_map:
            return None
        key = _find_map_key(by_map, map_name)
        return by_map[key] if key is not None else None

    def set_spawn_id(self, player_id: int, map_name: str, spawn_id: Optional[int]) -> None:
        """
        Set or clear a player's preferred spawn for a map.

        Args:
            player_id: 64-bit player identifier
            map_name: Map the preference applies to
            spawn_id: Preferred spawn id, or None to clear
        """
        by_map = self._by_player.setdefault(player_id, {})
        existing = _find_map_key(by_map, map_name)
        if existing is not None:
            del by_map[existing]
        if spawn_id is not None:
            by_map[map_name] = spawn_id
        self._save()

    def snapshot(self) -> Dict[int, Dict[str, int]]:
        """Independent copy of all stored preferences."""
        return {player_id: dict(by_map) for player_id, by_map in self._by_player.items()}


def _find_map_key(by_map: Dict[str, int], map_name: str) -> Optional[str]:
    if map_name in by_map:
        return map_name
    folded = map_name.casefold()
    return next((key for key in by_map if key.casefold() == folded), None)
