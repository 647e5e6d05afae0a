"""
Explicit admin command table.

Each command is registered once with its handler, minimum argument count
and usage string; dispatch is a plain dictionary lookup.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple

from ..config import RetakesSettings
from ..spawns.catalog_storage import SpawnStore
from ..spawns.spawn_index import SpawnIndex

logger = logging.getLogger(__name__)


@dataclass
class CommandContext:
    """
    Everything a command handler may touch.

    Attributes:
        store: Catalog of the current map
        index: Index over the same catalog (rebuilt after edits)
        settings: Runtime settings
        reply: Sends a line of output back to the caller
    """
    store: SpawnStore
    index: SpawnIndex
    settings: RetakesSettings
    reply: Callable[[str], None]


Handler = Callable[[CommandContext, List[str]], None]


@dataclass
class CommandSpec:
    name: str
    handler: Handler
    min_args: int = 0
    usage: str = ""
    description: str = ""
    aliases: Tuple[str, ...] = field(default_factory=tuple)


class CommandTable:
    """Registry mapping command names (and aliases) to CommandSpecs."""

    def __init__(self):
        self._commands: Dict[str, CommandSpec] = {}

    def register(self, spec: CommandSpec) -> None:
        for name in (spec.name,) + tuple(spec.aliases):
            self._commands[name.lower()] = spec

    def get(self, name: str) -> Optional[CommandSpec]:
        return self._commands.get(name.lower())

    def list_commands(self) -> List[CommandSpec]:
        """Registered commands without alias duplicates, sorted by name."""
        unique = {spec.name: spec for spec in self._commands.values()}
        return [unique[name] for name in sorted(unique)]

    def dispatch(self, context: CommandContext, line: str) -> bool:
        """
        Run one command line.

        Args:
            context: Handler context
            line: Raw input, command name first

        Returns:
            False if the line is empty or the command is unknown
        """
        parts = line.split()
        if not parts:
            return False

        spec = self.get(parts[0])
        if spec is None:
            context.reply(f"Unknown command '{parts[0]}'.")
            return False

        args = parts[1:]
        if len(args) < spec.min_args:
            context.reply(f"Usage: {spec.name} {spec.usage}".rstrip())
            return True

        logger.debug("Dispatching %s %s", spec.name, args)
        spec.handler(context, args)
        return True
