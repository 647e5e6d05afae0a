"""
Round setup around spawn allocation.

Round state (current site, planter, forced site) is an explicit value that
goes into start_round and comes back out in the result, so allocation only
depends on the catalog, the roster, preferences and the random source.
"""

from __future__ import annotations
import logging
import random
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Iterable, List, Optional

from ..config import RetakesSettings
from ..preferences.preference_storage import PreferenceStore
from ..spawns.catalog_storage import SpawnStore
from ..spawns.spawn import Bombsite
from ..spawns.spawn_index import PlacementHooks, SpawnConfigurationError, SpawnIndex

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RoundState:
    """
    Per-round state owned by the host.

    Attributes:
        bombsite: Site of the current round (None before the first round)
        planter: Player carrying out the plant this round
        forced_bombsite: Site every round is forced to, if set
    """
    bombsite: Optional[Bombsite] = None
    planter: Optional[Any] = None
    forced_bombsite: Optional[Bombsite] = None

    def with_forced_bombsite(self, bombsite: Optional[Bombsite]) -> 'RoundState':
        return replace(self, forced_bombsite=bombsite)


@dataclass
class RoundSetupResult:
    success: bool
    state: RoundState
    errors: List[str] = field(default_factory=list)

    @property
    def planter(self) -> Optional[Any]:
        return self.state.planter


def _default_player_id(player: Any) -> Optional[int]:
    return getattr(player, "player_id", None)


class RoundOrchestrator:
    """Picks the round's bombsite and runs allocation for one map."""

    def __init__(
        self,
        index: SpawnIndex,
        hooks: PlacementHooks,
        map_name: str,
        preferences: Optional[PreferenceStore] = None,
        player_id_of: Callable[[Any], Optional[int]] = _default_player_id,
        rng: Optional[random.Random] = None,
    ):
        """
        Args:
            index: Spawn index for the current map
            hooks: Host callbacks used when placing players
            map_name: Map whose preferences are looked up
            preferences: Preference store, or None to ignore preferences
            player_id_of: Maps a player to its persistent id
            rng: Source of randomness for site choice and allocation
        """
        self._index = index
        self._hooks = hooks
        self._map_name = map_name
        self._preferences = preferences
        self._player_id_of = player_id_of
        self._rng = rng or random.Random()

    def choose_bombsite(self, state: RoundState) -> Bombsite:
        if state.forced_bombsite is not None:
            return state.forced_bombsite
        return Bombsite.A if self._rng.randrange(2) == 0 else Bombsite.B

    def _preferred_spawn_id(self, player: Any) -> Optional[int]:
        player_id = self._player_id_of(player)
        if player_id is None:
            return None
        return self._preferences.get_spawn_id(player_id, self._map_name)

    def start_round(self, state: RoundState, players: Iterable[Any]) -> RoundSetupResult:
        """
        Set up a new round.

        Args:
            state: State left by the previous round
            players: Active roster

        Returns:
            RoundSetupResult carrying the new state. On a configuration
            failure success is False, nobody was moved and the new state
            has the chosen site but no planter.
        """
        bombsite = self.choose_bombsite(state)
        new_state = replace(state, bombsite=bombsite, planter=None)
        lookup = self._preferred_spawn_id if self._preferences is not None else None

        try:
            planter = self._index.allocate_round(
                bombsite, players, self._hooks, preference_lookup=lookup, rng=self._rng
            )
        except SpawnConfigurationError as e:
            logger.error("Round setup failed on %s: %s", self._map_name, e)
            return RoundSetupResult(success=False, state=new_state, errors=[str(e)])

        return RoundSetupResult(success=True, state=replace(new_state, planter=planter))


def build_round_orchestrator(
    settings: RetakesSettings,
    store: SpawnStore,
    hooks: PlacementHooks,
    rng: Optional[random.Random] = None,
) -> RoundOrchestrator:
    """
    Wire an orchestrator for the store's map from settings.

    The preference store is only opened when spawn preferences are enabled.
    """
    preferences = PreferenceStore(settings.preferences_path) if settings.enable_spawn_preferences else None
    return RoundOrchestrator(SpawnIndex(store), hooks, store.map_name, preferences=preferences, rng=rng)
