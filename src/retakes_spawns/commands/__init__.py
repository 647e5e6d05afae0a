"""
Admin command dispatch.
"""

from .command_table import CommandContext, CommandSpec, CommandTable
from .admin_commands import build_admin_commands

__all__ = [
    'CommandContext',
    'CommandSpec',
    'CommandTable',
    'build_admin_commands',
]
