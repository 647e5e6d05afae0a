"""
Spawn catalog package.

Provides the per-map spawn/group catalog, the bucketed spawn index with
round allocation, and group name resolution.

Usage:
    from retakes_spawns.spawns import SpawnStore, SpawnIndex

    store = SpawnStore(settings.map_config_dir, "de_mirage")
    store.load()
    index = SpawnIndex(store)

    # After every edit, rebuild the index
    store.add_group("Long A")
    index.rebuild()
"""

from .spawn import Team, Bombsite, Vec3, Spawn, slugify, describe_spawn
from .catalog_storage import (
    MapCatalog,
    SpawnStore,
    CatalogNotLoadedError,
    next_free_id,
    repair_spawn_ids,
    sanitize_catalog,
)
from .spawn_index import SpawnIndex, PlacementHooks, SpawnConfigurationError
from .group_resolver import GroupResolver

__all__ = [
    # Value types
    'Team',
    'Bombsite',
    'Vec3',
    'Spawn',
    'slugify',
    'describe_spawn',
    # Storage
    'MapCatalog',
    'SpawnStore',
    'CatalogNotLoadedError',
    'next_free_id',
    'repair_spawn_ids',
    'sanitize_catalog',
    # Index / allocation
    'SpawnIndex',
    'PlacementHooks',
    'SpawnConfigurationError',
    # Groups
    'GroupResolver',
]
