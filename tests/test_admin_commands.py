"""Tests for the admin command table."""

import pytest

from retakes_spawns.commands import CommandContext, CommandSpec, CommandTable, build_admin_commands
from retakes_spawns.config import RetakesSettings
from retakes_spawns.spawns import Bombsite, SpawnIndex, Team

from conftest import make_spawn


@pytest.fixture
def console(store, tmp_path):
    replies = []
    context = CommandContext(
        store=store,
        index=SpawnIndex(store),
        settings=RetakesSettings(data_dir=tmp_path),
        reply=replies.append,
    )
    table = build_admin_commands()

    def run(line):
        replies.clear()
        table.dispatch(context, line)
        return list(replies)

    return run


class TestCommandTable:

    def test_unknown_and_empty(self, store, tmp_path):
        replies = []
        context = CommandContext(store, SpawnIndex(store), RetakesSettings(data_dir=tmp_path), replies.append)
        table = CommandTable()
        assert not table.dispatch(context, "   ")
        assert not table.dispatch(context, "bogus 1")
        assert replies == ["Unknown command 'bogus'."]

    def test_too_few_args_prints_usage(self, console):
        assert console("setspawngroup 1") == ["Usage: setspawngroup <id> <group>"]

    def test_aliases_resolve_to_one_spec(self):
        table = CommandTable()
        spec = CommandSpec("removespawn", lambda ctx, args: None, 1, "<id>", aliases=("deletespawn",))
        table.register(spec)
        assert table.get("DELETESPAWN") is spec
        assert table.list_commands() == [spec]


class TestGroupCommands:

    def test_add_list_remove_group(self, console, store):
        assert console("addgroup Long A") == ["Created group 'Long A'."]
        assert console("addgroup long a") == ["Group 'long a' already exists."]
        console("addgroup Short")
        assert console("listgroups") == ["Long A", "Short", "2 groups listed."]

        store.add_spawn(make_spawn(1))
        console("setspawngroup 1 long-a")
        assert console("removegroup long-a") == ["Removed group 'Long A'. Any spawns using it were cleared."]
        assert store.get_spawn(1).group is None
        assert console("removegroup nope") == ["Group 'nope' not found. Use listgroups."]

    def test_set_spawn_group_stores_canonical_name(self, console, store):
        console("addgroup Long A")
        console("addgroup Long B")
        store.add_spawn(make_spawn(1))

        assert console("setspawngroup 1 long   a") == ["Set group 'Long A' on spawn Id=1."]
        assert store.get_spawn(1).group == "Long A"
        assert console("setspawngroup 1 lo") == ["Group 'lo' not found. Use addgroup first or try full name."]
        assert console("setspawngroup x Long A") == ["Invalid id. Usage: setspawngroup <id> <group>"]
        assert console("setspawngroup 9 Long B") == ["Spawn with Id=9 not found."]
        assert console("clearspawngroup 1") == ["Cleared group on spawn Id=1."]
        assert store.get_spawn(1).group is None

    def test_set_spawn_group_with_groups_sharing_a_slug(self, console, store):
        console("addgroup Long A")
        console("addgroup Long-A")
        store.add_spawn(make_spawn(1))

        assert console("setspawngroup 1 Long-A") == ["Set group 'Long-A' on spawn Id=1."]
        assert store.get_spawn(1).group == "Long-A"
        assert console("removegroup Long A") == ["Removed group 'Long A'. Any spawns using it were cleared."]
        assert store.get_spawn(1).group == "Long-A"


class TestSpawnCommands:

    def test_add_list_remove_spawn(self, console, store):
        assert console("addspawn A T 0 0 0 Y") == ["Spawn added (Id=1)."]
        assert console("addspawn A CT 10 0 0") == ["Too close to another spawn, move away and try again."]
        assert console("addspawn A CT 500 0 0") == ["Spawn added (Id=2)."]
        assert console("addspawn C CT 0 0 0") == ["You must specify a bombsite [A / B]."]
        assert console("addspawn A X 0 0 0") == ["You must specify a team [T / CT] - [Value: X]."]

        assert console("listspawns A T") == [
            "Id=1 Group=- Team=T Site=A Planter=Y Vec=(0.00,0.00,0.00)",
            "1 spawns listed.",
        ]
        assert console("listspawns B") == ["No spawns found."]

        assert console("removespawn 2") == ["Spawn Id=2 removed."]
        assert console("deletespawn 2") == ["Spawn with Id=2 not found."]

    def test_add_spawn_with_angles(self, console, store):
        assert console("addspawn A CT 0 0 0 N 5 90 0") == ["Spawn added (Id=1)."]
        assert store.get_spawn(1).orientation == (5.0, 90.0, 0.0)
        assert console("addspawn A CT 500 0 0 N 0 45") == ["Spawn added (Id=2)."]
        assert store.get_spawn(2).orientation == (0.0, 45.0, 0.0)
        assert store.get_spawn(2).can_be_planter is False
        assert console("addspawn A CT 900 0 0 N 0 east") == [
            "Invalid angles. Usage: addspawn <A|B> <T|CT> <x> <y> <z> [Y|N] [pitch] [yaw] [roll]"
        ]

    def test_add_spawn_without_angles_faces_zero(self, console, store):
        console("addspawn B T 0 0 0 Y")
        assert store.get_spawn(1).orientation == (0.0, 0.0, 0.0)

    def test_counter_terrorists_are_never_planters(self, console, store):
        console("addspawn B CT 0 0 0 Y")
        assert store.get_spawn(1).can_be_planter is False
        assert store.get_spawn(1).team is Team.COUNTER_TERRORIST

    def test_set_spawn_name(self, console, store):
        console("addspawn A CT 0 0 0")
        assert console("setspawnname 1 Back Site") == ["Spawn Id=1 renamed to 'Back Site'."]
        assert store.get_spawn(1).name == "Back Site"
        assert console("setspawnname 1") == ["Cleared name on spawn Id=1."]

    def test_nearest_spawn(self, console):
        console("addspawn A CT 0 0 0")
        assert console("nearestspawn A 50 0 0") == ["Id=1 Group=- Team=CT Site=A Planter=N Vec=(0.00,0.00,0.00)"]
        assert console("nearestspawn A 500 0 0") == ["No spawns found within 128 units."]

    def test_index_is_rebuilt_after_edits(self, console, store):
        console("addspawn A T 0 0 0 Y")
        console("addspawn A T 500 0 0")
        console("removespawn 1")
        # Spot freed by the removal is usable again
        assert console("addspawn A T 10 0 0") == ["Spawn added (Id=1)."]
        assert len(store.filter_spawns(bombsite=Bombsite.A)) == 2
