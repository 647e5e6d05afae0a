"""
Admin commands for editing a map's spawns and groups.
"""

from __future__ import annotations
from typing import List, Optional

from ..spawns.group_resolver import GroupResolver
from ..spawns.spawn import Bombsite, Spawn, Team, describe_spawn
from .command_table import CommandContext, CommandSpec, CommandTable

ADD_SPAWN_USAGE = "<A|B> <T|CT> <x> <y> <z> [Y|N] [pitch] [yaw] [roll]"


def _parse_id(text: str) -> Optional[int]:
    try:
        return int(text)
    except ValueError:
        return None


def _parse_float(text: str) -> Optional[float]:
    try:
        return float(text)
    except ValueError:
        return None


def _join(args: List[str]) -> str:
    """Rejoin trailing args so group names may contain spaces."""
    return " ".join(a for a in args if a.strip()).strip()


def _resolver(ctx: CommandContext) -> GroupResolver:
    return GroupResolver(ctx.store.get_groups_clone())


def cmd_add_group(ctx: CommandContext, args: List[str]) -> None:
    group = _join(args)
    if not group:
        ctx.reply("Invalid group. Usage: addgroup <group>")
        return

    if ctx.store.add_group(group):
        ctx.reply(f"Created group '{group}'.")
    else:
        ctx.reply(f"Group '{group}' already exists.")


def cmd_remove_group(ctx: CommandContext, args: List[str]) -> None:
    group = _join(args)
    if not group:
        ctx.reply("Invalid group. Usage: removegroup <group>")
        return

    name = _resolver(ctx).resolve_name(group)
    if name is None:
        ctx.reply(f"Group '{group}' not found. Use listgroups.")
        return

    if ctx.store.remove_group(name):
        ctx.index.rebuild()
        ctx.reply(f"Removed group '{name}'. Any spawns using it were cleared.")
    else:
        ctx.reply(f"Group '{group}' not found.")


def cmd_list_groups(ctx: CommandContext, args: List[str]) -> None:
    groups = ctx.store.get_groups_clone()
    if not groups:
        ctx.reply("No groups exist yet.")
        return

    for group in groups:
        ctx.reply(group)
    ctx.reply(f"{len(groups)} groups listed.")


def cmd_set_spawn_group(ctx: CommandContext, args: List[str]) -> None:
    spawn_id = _parse_id(args[0])
    if spawn_id is None:
        ctx.reply("Invalid id. Usage: setspawngroup <id> <group>")
        return

    group = _join(args[1:])
    if not group:
        ctx.reply("Invalid group. Usage: setspawngroup <id> <group>")
        return

    name = _resolver(ctx).resolve_name(group)
    if name is None:
        ctx.reply(f"Group '{group}' not found. Use addgroup first or try full name.")
        return

    if ctx.store.set_spawn_group(spawn_id, name):
        ctx.index.rebuild()
        ctx.reply(f"Set group '{name}' on spawn Id={spawn_id}.")
    else:
        ctx.reply(f"Spawn with Id={spawn_id} not found.")


def cmd_clear_spawn_group(ctx: CommandContext, args: List[str]) -> None:
    spawn_id = _parse_id(args[0])
    if spawn_id is None:
        ctx.reply("Invalid id. Usage: clearspawngroup <id>")
        return

    if ctx.store.set_spawn_group(spawn_id, None):
        ctx.index.rebuild()
        ctx.reply(f"Cleared group on spawn Id={spawn_id}.")
    else:
        ctx.reply(f"Spawn with Id={spawn_id} not found.")


def cmd_set_spawn_name(ctx: CommandContext, args: List[str]) -> None:
    spawn_id = _parse_id(args[0])
    if spawn_id is None:
        ctx.reply("Invalid id. Usage: setspawnname <id> [name]")
        return

    name = _join(args[1:]) or None
    if ctx.store.set_spawn_name(spawn_id, name):
        ctx.index.rebuild()
        ctx.reply(f"Spawn Id={spawn_id} renamed to '{name}'." if name else f"Cleared name on spawn Id={spawn_id}.")
    else:
        ctx.reply(f"Spawn with Id={spawn_id} not found.")


def cmd_list_spawns(ctx: CommandContext, args: List[str]) -> None:
    bombsite = None
    team = None
    group = None

    if len(args) >= 1:
        bombsite = Bombsite.parse(args[0])
        if bombsite is None:
            ctx.reply("You must specify a bombsite [A / B].")
            return
    if len(args) >= 2:
        team = Team.parse(args[1])
        if team is None:
            ctx.reply("You must specify a team [T / CT].")
            return
    if len(args) >= 3:
        group = _join(args[2:])

    spawns = ctx.store.filter_spawns(bombsite=bombsite, team=team, group=group)
    if not spawns:
        ctx.reply("No spawns found.")
        return

    for spawn in spawns:
        ctx.reply(describe_spawn(spawn))
    ctx.reply(f"{len(spawns)} spawns listed.")


def cmd_remove_spawn(ctx: CommandContext, args: List[str]) -> None:
    spawn_id = _parse_id(args[0])
    if spawn_id is None:
        ctx.reply("Invalid id. Usage: removespawn <id>")
        return

    if ctx.store.remove_spawn_by_id(spawn_id):
        ctx.index.rebuild()
        ctx.reply(f"Spawn Id={spawn_id} removed.")
    else:
        ctx.reply(f"Spawn with Id={spawn_id} not found.")


def cmd_add_spawn(ctx: CommandContext, args: List[str]) -> None:
    bombsite = Bombsite.parse(args[0])
    if bombsite is None:
        ctx.reply("You must specify a bombsite [A / B].")
        return

    team = Team.parse(args[1])
    if team is None:
        ctx.reply(f"You must specify a team [T / CT] - [Value: {args[1]}].")
        return

    coords = [_parse_float(a) for a in args[2:5]]
    if any(c is None for c in coords):
        ctx.reply(f"Invalid position. Usage: addspawn {ADD_SPAWN_USAGE}")
        return

    planter_flag = args[5].upper() if len(args) > 5 else "N"
    if planter_flag not in ("Y", "N"):
        ctx.reply(f"Incorrect value passed for can be a planter [Y / N] - [Value: {args[5]}].")
        return

    # Missing angles default to 0
    raw_angles = args[6:9]
    angles = [_parse_float(a) for a in raw_angles] + [0.0] * (3 - len(raw_angles))
    if any(a is None for a in angles):
        ctx.reply(f"Invalid angles. Usage: addspawn {ADD_SPAWN_USAGE}")
        return

    position = (coords[0], coords[1], coords[2])
    if ctx.index.has_spawn_within(bombsite, position, ctx.settings.min_spawn_distance):
        ctx.reply("Too close to another spawn, move away and try again.")
        return

    spawn = Spawn(
        position=position,
        orientation=(angles[0], angles[1], angles[2]),
        team=team,
        bombsite=bombsite,
        can_be_planter=team is Team.TERRORIST and planter_flag == "Y",
    )
    if ctx.store.add_spawn(spawn):
        ctx.index.rebuild()
        ctx.reply(f"Spawn added (Id={spawn.id}).")
    else:
        ctx.reply("Error adding spawn.")


def cmd_nearest_spawn(ctx: CommandContext, args: List[str]) -> None:
    bombsite = Bombsite.parse(args[0])
    coords = [_parse_float(a) for a in args[1:4]]
    if bombsite is None or any(c is None for c in coords):
        ctx.reply("Usage: nearestspawn <A|B> <x> <y> <z>")
        return

    spawn = ctx.index.find_nearest(
        bombsite, (coords[0], coords[1], coords[2]), ctx.settings.nearest_spawn_max_distance
    )
    if spawn is None:
        ctx.reply(f"No spawns found within {ctx.settings.nearest_spawn_max_distance:g} units.")
        return
    ctx.reply(describe_spawn(spawn))


def build_admin_commands() -> CommandTable:
    """Create the command table with every admin command registered."""
    table = CommandTable()
    for spec in (
        CommandSpec("addgroup", cmd_add_group, 1, "<group>", "Creates a new spawn group for this map."),
        CommandSpec("removegroup", cmd_remove_group, 1, "<group>",
                    "Deletes a spawn group and clears it from any spawns."),
        CommandSpec("listgroups", cmd_list_groups, 0, "", "Lists all spawn groups for this map."),
        CommandSpec("setspawngroup", cmd_set_spawn_group, 2, "<id> <group>", "Sets group for a spawn by Id."),
        CommandSpec("clearspawngroup", cmd_clear_spawn_group, 1, "<id>", "Clears group for a spawn by Id."),
        CommandSpec("setspawnname", cmd_set_spawn_name, 1, "<id> [name]", "Sets or clears a spawn's name."),
        CommandSpec("listspawns", cmd_list_spawns, 0, "[A|B] [T|CT] [group]",
                    "Lists spawns with IDs and groups."),
        CommandSpec("removespawn", cmd_remove_spawn, 1, "<id>", "Deletes a spawn by Id.",
                    aliases=("deletespawn",)),
        CommandSpec("addspawn", cmd_add_spawn, 5, ADD_SPAWN_USAGE,
                    "Creates a new spawn.", aliases=("newspawn",)),
        CommandSpec("nearestspawn", cmd_nearest_spawn, 4, "<A|B> <x> <y> <z>",
                    "Shows the spawn closest to a position."),
    ):
        table.register(spec)
    return table
