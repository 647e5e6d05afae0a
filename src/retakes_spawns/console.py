"""
Interactive admin console for editing one map's spawn catalog.

Reads command lines from stdin and dispatches them through the admin
command table.
"""

from __future__ import annotations
import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .commands import CommandContext, build_admin_commands
from .config import load_settings
from .spawns import SpawnIndex, SpawnStore

logger = logging.getLogger(__name__)


def _parse_args(argv: Optional[List[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Edit retake spawns for a map.")
    parser.add_argument("map_name", help="Map whose catalog to edit (e.g. de_mirage)")
    parser.add_argument("--settings", type=Path, default=None, help="JSON settings file")
    parser.add_argument("--data-dir", type=Path, default=None, help="Override the data directory")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Console entry point."""
    args = _parse_args(argv)
    settings = load_settings(args.settings)
    if args.data_dir is not None:
        settings.data_dir = args.data_dir

    logging.basicConfig(
        level=getattr(logging, str(settings.log_level).upper(), logging.INFO),
        format="%(levelname)s %(name)s: %(message)s",
    )

    store = SpawnStore(settings.map_config_dir, args.map_name)
    store.load()
    index = SpawnIndex(store)
    table = build_admin_commands()
    context = CommandContext(store=store, index=index, settings=settings, reply=print)

    print(f"Editing {args.map_name} ({store.path}). Type 'help' for commands, 'quit' to exit.")
    for line in sys.stdin:
        line = line.strip()
        if not line:
            continue
        if line in ("quit", "exit"):
            break
        if line == "help":
            for spec in table.list_commands():
                print(f"{spec.name} {spec.usage} - {spec.description}")
            continue
        table.dispatch(context, line)

    return 0
