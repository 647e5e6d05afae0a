"""Tests for spawn value types."""

import pytest

from retakes_spawns.spawns import Bombsite, Spawn, Team, describe_spawn, slugify

from conftest import make_spawn


class TestSlugify:

    def test_lowercases_and_collapses_separators(self):
        assert slugify("Long A") == "long-a"
        assert slugify("  CT -- Spawn__1 ") == "ct-spawn-1"

    def test_no_alphanumerics_gives_empty_slug(self):
        assert slugify("  ?! ") == ""


class TestParsing:

    def test_team_parse(self):
        assert Team.parse("t") is Team.TERRORIST
        assert Team.parse(" CT ") is Team.COUNTER_TERRORIST
        assert Team.parse("spec") is None

    def test_bombsite_parse(self):
        assert Bombsite.parse("b") is Bombsite.B
        assert Bombsite.parse("C") is None


class TestSpawnDict:

    def test_from_dict_trims_name_and_group(self):
        spawn = Spawn.from_dict({
            "id": 3,
            "position": [1, 2, 3],
            "orientation": [0, 90, 0],
            "team": "Terrorist",
            "bombsite": "B",
            "can_be_planter": True,
            "name": "  Pit  ",
            "group": "   ",
        })
        assert spawn.position == (1.0, 2.0, 3.0)
        assert spawn.team is Team.TERRORIST
        assert spawn.bombsite is Bombsite.B
        assert spawn.name == "Pit"
        assert spawn.group is None

    def test_from_dict_rejects_unknown_team(self):
        data = make_spawn(1).to_dict()
        data["team"] = "Spectator"
        with pytest.raises(ValueError):
            Spawn.from_dict(data)

    def test_copy_is_independent(self):
        spawn = make_spawn(1, group="Long A")
        clone = spawn.copy()
        clone.group = None
        assert spawn.group == "Long A"

    def test_label_and_description(self):
        spawn = make_spawn(5, team=Team.TERRORIST, planter=True, spawn_id=7)
        assert spawn.label == "Spawn 7"
        assert describe_spawn(spawn) == (
            "Id=7 Group=- Team=T Site=A Planter=Y Vec=(5.00,0.00,0.00)"
        )
