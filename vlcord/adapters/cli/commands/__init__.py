"""Sous-package CLI commands - re-exporte les commandes publiques."""

from vlcord.adapters.cli.commands.cache_commands import cache_stats
from vlcord.adapters.cli.commands.lookup_commands import parse, resolve
from vlcord.adapters.cli.commands.overrides_commands import (
    overrides_app,
    overrides_list,
    overrides_remove,
    overrides_set,
)
from vlcord.adapters.cli.commands.watch_commands import StatusPrinter, watch

__all__ = [
    "cache_stats",
    "parse",
    "resolve",
    "overrides_app",
    "overrides_list",
    "overrides_remove",
    "overrides_set",
    "StatusPrinter",
    "watch",
]
