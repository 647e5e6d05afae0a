"""
Spawn point value types for retake maps.

A spawn is a stored position + orientation for one team on one bombsite.
Spawns are persisted per map by SpawnStore and bucketed by SpawnIndex.
"""

from __future__ import annotations
import re
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict, Optional, Tuple

Vec3 = Tuple[float, float, float]

_SLUG_SEPARATOR = re.compile(r'[^a-z0-9]+')


class Team(Enum):
    """Playing sides. Spectators and unassigned players never get a spawn."""
    TERRORIST = "Terrorist"
    COUNTER_TERRORIST = "CounterTerrorist"

    @property
    def short_name(self) -> str:
        return "T" if self is Team.TERRORIST else "CT"

    @classmethod
    def parse(cls, text: str) -> Optional['Team']:
        """Parse "T"/"CT" or the full team name (case-insensitive)."""
        key = text.strip().upper()
        if key in ("T", "TERRORIST"):
            return cls.TERRORIST
        if key in ("CT", "COUNTERTERRORIST", "COUNTER_TERRORIST"):
            return cls.COUNTER_TERRORIST
        return None

    def __str__(self) -> str:
        return self.value


class Bombsite(Enum):
    A = "A"
    B = "B"

    @classmethod
    def parse(cls, text: str) -> Optional['Bombsite']:
        key = text.strip().upper()
        if key == "A":
            return cls.A
        if key == "B":
            return cls.B
        return None

    def __str__(self) -> str:
        return self.value


def slugify(text: str) -> str:
    """
    Normalize a group name into its command-line form.

    Lower-cases the text and collapses every run of non-alphanumeric
    characters into a single hyphen ("Long A" -> "long-a").

    Args:
        text: Display name or free-text input

    Returns:
        The slug (may be empty if the text has no alphanumerics)
    """
    return _SLUG_SEPARATOR.sub("-", text.strip().lower()).strip("-")


@dataclass
class Spawn:
    """
    A single retake spawn point.

    Attributes:
        id: Positive identifier, unique within a map (0 = not yet assigned)
        position: World coordinates (x, y, z)
        orientation: View angles (pitch, yaw, roll)
        team: Side that spawns here
        bombsite: Site this spawn belongs to
        can_be_planter: Whether the bomb planter may be placed here
        name: Optional display name shown in the preference menu
        group: Optional canonical group name
    """
    position: Vec3
    orientation: Vec3
    team: Team
    bombsite: Bombsite
    can_be_planter: bool = False
    id: int = 0
    name: Optional[str] = None
    group: Optional[str] = None

    @property
    def site_key(self) -> Tuple[Vec3, Bombsite]:
        """Deduplication key. Team is deliberately not part of it."""
        return (self.position, self.bombsite)

    @property
    def label(self) -> str:
        return self.name if self.name else f"Spawn {self.id}"

    def copy(self) -> 'Spawn':
        return replace(self)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-serializable dictionary."""
        return {
            "id": self.id,
            "position": list(self.position),
            "orientation": list(self.orientation),
            "team": self.team.value,
            "bombsite": self.bombsite.value,
            "can_be_planter": self.can_be_planter,
            "name": self.name,
            "group": self.group,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Spawn':
        """
        Create a Spawn from a dictionary.

        Raises:
            KeyError: If a required field is missing
            ValueError: If team/bombsite/vectors are malformed
        """
        return cls(
            id=int(data.get("id", 0) or 0),
            position=_to_vec3(data["position"]),
            orientation=_to_vec3(data.get("orientation", (0.0, 0.0, 0.0))),
            team=Team(data["team"]),
            bombsite=Bombsite(data["bombsite"]),
            can_be_planter=bool(data.get("can_be_planter", False)),
            name=_clean_text(data.get("name")),
            group=_clean_text(data.get("group")),
        )


def _to_vec3(value: Any) -> Vec3:
    x, y, z = value
    return (float(x), float(y), float(z))


def _clean_text(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def describe_spawn(spawn: Spawn) -> str:
    """One-line listing used by the admin console."""
    x, y, z = spawn.position
    return (
        f"Id={spawn.id} Group={spawn.group or '-'} Team={spawn.team.short_name} "
        f"Site={spawn.bombsite} Planter={'Y' if spawn.can_be_planter else 'N'} "
        f"Vec=({x:.2f},{y:.2f},{z:.2f})"
    )
