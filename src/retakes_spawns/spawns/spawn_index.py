"""
Read-optimized spawn view and round-start allocation.

SpawnIndex buckets a SpawnStore snapshot by (bombsite, team). It is
rebuilt from scratch after every catalog change, never patched.
"""

from __future__ import annotations
import logging
import random
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Optional, TypeVar

import numpy as np

from .catalog_storage import SpawnStore
from .spawn import Bombsite, Spawn, Team, Vec3

logger = logging.getLogger(__name__)

P = TypeVar("P")


class SpawnConfigurationError(Exception):
    """
    Raised when a bombsite cannot host the current round.

    Either a team has more live players than spawns on the site, or the
    site has no planter-capable Terrorist spawn.

    Attributes:
        bombsite: Site that failed
    """

    def __init__(self, bombsite: Bombsite, message: str):
        self.bombsite = bombsite
        super().__init__(message)


def _default_team_of(player: Any) -> Optional[Team]:
    return getattr(player, "team", None)


@dataclass
class PlacementHooks:
    """
    Host callbacks used during allocation.

    Attributes:
        is_alive: True if the player has a live, valid in-round presence
        teleport: Moves a player to (position, orientation)
        team_of: Returns the player's team (None for spectators)
    """
    is_alive: Callable[[Any], bool]
    teleport: Callable[[Any, Vec3, Vec3], None]
    team_of: Callable[[Any], Optional[Team]] = _default_team_of


class SpawnIndex:
    """Spawns bucketed by bombsite and team."""

    def __init__(self, store: SpawnStore):
        self._store = store
        self._spawns: Dict[Bombsite, Dict[Team, List[Spawn]]] = {}
        self.rebuild()

    def rebuild(self) -> None:
        """Re-partition a fresh snapshot of the store."""
        self._spawns = {
            site: {team: [] for team in Team}
            for site in Bombsite
        }
        for spawn in self._store.get_spawns_clone():
            self._spawns[spawn.bombsite][spawn.team].append(spawn)

    def get_spawns(self, bombsite: Bombsite, team: Optional[Team] = None) -> List[Spawn]:
        """
        Get the spawns of one site.

        Args:
            bombsite: Site to query
            team: Single team, or None for both teams

        Returns:
            Copies of the matching spawns
        """
        buckets = self._spawns[bombsite]
        if not buckets[Team.TERRORIST] and not buckets[Team.COUNTER_TERRORIST]:
            return []

        if team is None:
            return [s.copy() for bucket in buckets.values() for s in bucket]
        return [s.copy() for s in buckets[team]]

    def count(self, bombsite: Bombsite, team: Team) -> int:
        return len(self._spawns[bombsite][team])

    # ---------------------------------------------------------------
    # Spatial queries
    # ---------------------------------------------------------------

    def find_nearest(
        self,
        bombsite: Bombsite,
        position: Vec3,
        max_distance: Optional[float] = None,
    ) -> Optional[Spawn]:
        """
        Find the spawn on a site closest to a world position.

        Args:
            bombsite: Site to search
            position: Reference position
            max_distance: Ignore spawns further away than this

        Returns:
            Copy of the closest spawn, or None if none qualifies
        """
        spawns = self.get_spawns(bombsite)
        if not spawns:
            return None

        distances = _distances(spawns, position)
        nearest = int(np.argmin(distances))
        if max_distance is not None and distances[nearest] > max_distance:
            return None
        return spawns[nearest]

    def has_spawn_within(self, bombsite: Bombsite, position: Vec3, distance: float) -> bool:
        """True if any spawn on the site is at most distance away from position."""
        spawns = self.get_spawns(bombsite)
        if not spawns:
            return False
        return bool(np.any(_distances(spawns, position) <= distance))

    def preference_choices(self, bombsite: Bombsite, team: Team) -> List[Spawn]:
        """Spawns offered in the player spawn menu, sorted by label."""
        return sorted(self.get_spawns(bombsite, team), key=lambda s: s.label.casefold())

    # ---------------------------------------------------------------
    # Round allocation
    # ---------------------------------------------------------------

    def allocate_round(
        self,
        bombsite: Bombsite,
        players: Iterable[P],
        hooks: PlacementHooks,
        preference_lookup: Optional[Callable[[P], Optional[int]]] = None,
        rng: Optional[random.Random] = None,
    ) -> Optional[P]:
        """
        Place every live player on a distinct spawn of the chosen site.

        One planter-capable Terrorist spawn is reserved up front for the
        planter, who is the first live Terrorist in shuffled order. Other
        players get their preferred spawn when it is still free on their
        team, otherwise a random free one.

        Args:
            bombsite: Site being played this round
            players: Round roster (spectators and dead players are skipped)
            hooks: Host callbacks for liveness, team lookup and teleporting
            preference_lookup: Returns a player's preferred spawn id or None
            rng: Source of randomness (randrange/shuffle)

        Returns:
            The planter, or None if no Terrorist qualified

        Raises:
            SpawnConfigurationError: Not enough spawns for a team, or no
                planter spawn on the site. Nobody is moved in that case.
        """
        rng = rng or random.Random()
        logger.debug("Allocating spawns for bombsite %s", bombsite)

        pools = {team: list(bucket) for team, bucket in self._spawns[bombsite].items()}

        roster: List[P] = []
        live_counts = {team: 0 for team in Team}
        for player in players:
            team = hooks.team_of(player)
            if team not in live_counts or not hooks.is_alive(player):
                continue
            live_counts[team] += 1
            roster.append(player)

        for team in Team:
            if live_counts[team] > len(pools[team]):
                raise SpawnConfigurationError(
                    bombsite,
                    f"Not enough {team} spawns for bombsite {bombsite}: "
                    f"{live_counts[team]} players, {len(pools[team])} spawns",
                )

        planter_spawns = [s for s in pools[Team.TERRORIST] if s.can_be_planter]
        if not planter_spawns:
            raise SpawnConfigurationError(bombsite, f"There are no planter spawns for bombsite {bombsite}")

        planter_spawn = planter_spawns[rng.randrange(len(planter_spawns))]
        pools[Team.TERRORIST].remove(planter_spawn)

        rng.shuffle(roster)

        planter: Optional[P] = None
        for player in roster:
            team = hooks.team_of(player)
            if planter is None and team is Team.TERRORIST:
                planter = player
                hooks.teleport(player, planter_spawn.position, planter_spawn.orientation)
                continue

            pool = pools[team]
            if not pool:
                continue

            spawn = None
            if preference_lookup is not None:
                preferred_id = preference_lookup(player)
                if preferred_id is not None:
                    spawn = next((s for s in pool if s.id == preferred_id), None)
            if spawn is None:
                spawn = pool[rng.randrange(len(pool))]

            pool.remove(spawn)
            hooks.teleport(player, spawn.position, spawn.orientation)

        logger.debug("Spawn allocation for bombsite %s complete", bombsite)
        return planter


def _distances(spawns: List[Spawn], position: Vec3) -> np.ndarray:
    points = np.array([s.position for s in spawns], dtype=float)
    return np.linalg.norm(points - np.asarray(position, dtype=float), axis=1)
