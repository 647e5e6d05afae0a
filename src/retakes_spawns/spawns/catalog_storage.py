"""
Per-map spawn catalog persistence.

Handles load/save of the spawn + group catalog for one map to
<data_dir>/map_config/<map_name>.json.

Every mutation follows the same cycle: change the in-memory catalog,
sanitize it, write it to disk, then reload it from disk so the file is
the durable truth. If the write fails the in-memory catalog stays
authoritative until the next successful save.
"""

from __future__ import annotations
import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Set

from .spawn import Bombsite, Spawn, Team, slugify

logger = logging.getLogger(__name__)


class CatalogNotLoadedError(RuntimeError):
    """Raised when a SpawnStore is used before load() established a catalog."""


@dataclass
class MapCatalog:
    """
    All spawns and groups for one map.

    Attributes:
        spawns: Ordered spawn list (file order is preserved)
        groups: Canonical group display names
    """
    spawns: List[Spawn] = field(default_factory=list)
    groups: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "spawns": [spawn.to_dict() for spawn in self.spawns],
            "groups": list(self.groups),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'MapCatalog':
        return cls(
            spawns=[Spawn.from_dict(entry) for entry in data.get("spawns") or []],
            groups=[name for name in data.get("groups") or [] if isinstance(name, str)],
        )


def next_free_id(used: Iterable[int]) -> int:
    """
    Get the smallest positive identifier not in use.

    Args:
        used: Identifiers already taken

    Returns:
        Smallest positive integer missing from used
    """
    taken = set(used)
    candidate = 1
    while candidate in taken:
        candidate += 1
    return candidate


def repair_spawn_ids(spawns: List[Spawn]) -> bool:
    """
    Give every spawn a unique positive id.

    The first spawn holding a valid id keeps it. Spawns with id <= 0 or a
    repeated id are given the smallest positive id not held by any other
    spawn in the list.

    Args:
        spawns: Spawn list, repaired in place

    Returns:
        True if any id was changed
    """
    used: Set[int] = set()
    broken: List[Spawn] = []
    for spawn in spawns:
        if spawn.id > 0 and spawn.id not in used:
            used.add(spawn.id)
        else:
            broken.append(spawn)

    for spawn in broken:
        spawn.id = next_free_id(used)
        used.add(spawn.id)

    return bool(broken)


def sanitize_catalog(catalog: MapCatalog) -> MapCatalog:
    """
    Normalize a catalog before it is written.

    Collapses spawns sharing (position, bombsite), keeping the first, and
    turns groups into a trimmed, case-insensitively unique, alphabetically
    sorted list. The catalog is modified in place and returned.
    """
    seen = set()
    unique_spawns = []
    for spawn in catalog.spawns:
        if spawn.site_key in seen:
            continue
        seen.add(spawn.site_key)
        unique_spawns.append(spawn)
    catalog.spawns = unique_spawns

    groups: Dict[str, str] = {}
    for name in catalog.groups:
        name = name.strip()
        if name and name.casefold() not in groups:
            groups[name.casefold()] = name
    catalog.groups = sorted(groups.values(), key=str.casefold)

    return catalog


class SpawnStore:
    """
    Owner of one map's spawn catalog.

    Callers only ever get copies of spawns and groups back, never the
    stored objects.
    """

    def __init__(self, map_config_dir: Path, map_name: str):
        """
        Args:
            map_config_dir: Directory holding one JSON file per map
            map_name: Map this store manages
        """
        self._map_name = map_name
        self._map_config_dir = Path(map_config_dir)
        self._path = self._map_config_dir / f"{map_name}.json"
        self._catalog: Optional[MapCatalog] = None

    @property
    def map_name(self) -> str:
        return self._map_name

    @property
    def path(self) -> Path:
        return self._path

    @property
    def is_loaded(self) -> bool:
        return self._catalog is not None

    def is_loaded_for(self, map_name: str) -> bool:
        """Check whether this store already holds the catalog for map_name."""
        return self.is_loaded and self._map_name == map_name

    # ---------------------------------------------------------------
    # Persistence
    # ---------------------------------------------------------------

    def load(self, probe: bool = False) -> bool:
        """
        Load the catalog from disk.

        A missing file creates and persists an empty catalog, unless probe
        is set, in which case absence is only reported. A file that cannot
        be decoded leaves the current in-memory catalog untouched (an
        empty one is used if nothing was loaded before). Identifiers are
        repaired on every load and the repair is persisted.

        Args:
            probe: Only report whether a catalog file exists

        Returns:
            True if a catalog was read or created, False otherwise
        """
        logger.debug("Loading map catalog from %s", self._path)

        if not self._path.exists():
            logger.info("No catalog for map %s", self._map_name)
            if probe:
                return False
            self._catalog = MapCatalog()
            self._save()
            return True

        try:
            with open(self._path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            catalog = MapCatalog.from_dict(data)
        except (OSError, json.JSONDecodeError, AttributeError, KeyError, TypeError, ValueError) as e:
            logger.error("Failed to load map catalog %s: %s", self._path, e)
            if self._catalog is None:
                self._catalog = MapCatalog()
            return False

        self._catalog = catalog
        if repair_spawn_ids(catalog.spawns):
            logger.info("Repaired spawn ids for map %s", self._map_name)
            self._save()

        logger.debug("Loaded %d spawns and %d groups for map %s",
                     len(catalog.spawns), len(catalog.groups), self._map_name)
        return True

    def _save(self) -> bool:
        catalog = sanitize_catalog(self._require_catalog())
        try:
            self._map_config_dir.mkdir(parents=True, exist_ok=True)
            with open(self._path, 'w', encoding='utf-8') as f:
                json.dump(catalog.to_dict(), f, indent=2, sort_keys=True, ensure_ascii=False)
        except OSError as e:
            logger.error("Failed to write map catalog %s: %s", self._path, e)
            return False

        logger.debug("Map catalog written to %s", self._path)
        return True

    def _commit(self) -> None:
        if self._save():
            self.load()

    def _require_catalog(self) -> MapCatalog:
        if self._catalog is None:
            raise CatalogNotLoadedError(f"Map catalog for {self._map_name} has not been loaded")
        return self._catalog

    # ---------------------------------------------------------------
    # Spawns
    # ---------------------------------------------------------------

    def add_spawn(self, spawn: Spawn) -> bool:
        """
        Add a spawn to the catalog.

        The spawn is refused if another spawn already uses the same
        position on the same bombsite, regardless of team. A spawn without
        a usable id gets the smallest free one; the assigned id is written
        back to the given spawn.

        Args:
            spawn: Spawn to add (a copy is stored)

        Returns:
            True if added, False if it duplicates an existing spawn
        """
        catalog = self._require_catalog()

        if any(existing.site_key == spawn.site_key for existing in catalog.spawns):
            return False

        used = {existing.id for existing in catalog.spawns}
        if spawn.id <= 0 or spawn.id in used:
            spawn.id = next_free_id(used)

        catalog.spawns.append(spawn.copy())
        self._commit()
        return True

    def remove_spawn(self, spawn: Spawn) -> bool:
        """
        Remove a spawn by id, falling back to its (position, bombsite).

        Returns:
            True if a spawn was removed
        """
        catalog = self._require_catalog()

        target = None
        if spawn.id > 0:
            target = self._find_by_id(spawn.id)
        if target is None:
            target = next((s for s in catalog.spawns if s.site_key == spawn.site_key), None)
        if target is None:
            return False

        catalog.spawns.remove(target)
        self._commit()
        return True

    def remove_spawn_by_id(self, spawn_id: int) -> bool:
        catalog = self._require_catalog()
        target = self._find_by_id(spawn_id) if spawn_id > 0 else None
        if target is None:
            return False

        catalog.spawns.remove(target)
        self._commit()
        return True

    def set_spawn_group(self, spawn_id: int, group: Optional[str]) -> bool:
        """
        Set or clear the group of a spawn.

        The group is not checked against the catalog's groups; resolve it
        with GroupResolver first.

        Args:
            spawn_id: Spawn to update
            group: Group name, or None/blank to clear

        Returns:
            True if the spawn exists
        """
        spawn = self._find_by_id(spawn_id)
        if spawn is None:
            return False

        spawn.group = group.strip() if group and group.strip() else None
        self._commit()
        return True

    def set_spawn_name(self, spawn_id: int, name: Optional[str]) -> bool:
        spawn = self._find_by_id(spawn_id)
        if spawn is None:
            return False

        spawn.name = name.strip() if name and name.strip() else None
        self._commit()
        return True

    def _find_by_id(self, spawn_id: int) -> Optional[Spawn]:
        catalog = self._require_catalog()
        return next((s for s in catalog.spawns if s.id == spawn_id), None)

    # ---------------------------------------------------------------
    # Groups
    # ---------------------------------------------------------------

    def add_group(self, name: str) -> bool:
        """
        Create a group.

        Returns:
            False if the name is blank or already exists (case-insensitive)
        """
        catalog = self._require_catalog()

        name = name.strip()
        if not name:
            return False
        if any(g.casefold() == name.casefold() for g in catalog.groups):
            return False

        catalog.groups.append(name)
        self._commit()
        return True

    def remove_group(self, name: str) -> bool:
        """
        Delete a group and clear it from every spawn referencing it.

        Spawns naming the group (case-insensitive) are cleared. A spawn
        holding only the group's slug is cleared too, unless its value
        still names or slugs to a remaining group.

        Returns:
            False if the name is blank or no such group exists
        """
        catalog = self._require_catalog()

        name = name.strip()
        if not name:
            return False

        existing = next((g for g in catalog.groups if g.casefold() == name.casefold()), None)
        if existing is None:
            return False

        catalog.groups = [g for g in catalog.groups if g.casefold() != name.casefold()]

        slug = slugify(existing)
        remaining_names = {g.casefold() for g in catalog.groups}
        remaining_slugs = {slugify(g) for g in catalog.groups}
        for spawn in catalog.spawns:
            if not spawn.group:
                continue
            if spawn.group.casefold() == existing.casefold():
                spawn.group = None
            elif (slugify(spawn.group) == slug
                  and spawn.group.casefold() not in remaining_names
                  and slug not in remaining_slugs):
                spawn.group = None

        self._commit()
        return True

    # ---------------------------------------------------------------
    # Read access (always copies)
    # ---------------------------------------------------------------

    def get_spawns_clone(self) -> List[Spawn]:
        return [spawn.copy() for spawn in self._require_catalog().spawns]

    def get_groups_clone(self) -> List[str]:
        return list(self._require_catalog().groups)

    def get_spawn(self, spawn_id: int) -> Optional[Spawn]:
        spawn = self._find_by_id(spawn_id)
        return spawn.copy() if spawn else None

    def filter_spawns(
        self,
        bombsite: Optional[Bombsite] = None,
        team: Optional[Team] = None,
        group: Optional[str] = None,
    ) -> List[Spawn]:
        """
        List spawns matching all given filters, ordered by id.

        Args:
            bombsite: Only spawns on this site
            team: Only spawns for this team
            group: Only spawns in this group (display name or slug)

        Returns:
            Copies of the matching spawns
        """
        group_slug = slugify(group) if group and group.strip() else None
        result = []
        for spawn in self.get_spawns_clone():
            if bombsite is not None and spawn.bombsite != bombsite:
                continue
            if team is not None and spawn.team != team:
                continue
            if group_slug is not None and (not spawn.group or slugify(spawn.group) != group_slug):
                continue
            result.append(spawn)
        return sorted(result, key=lambda s: s.id)
