"""Exception types raised by the simulation core.

Nothing here is meant to reach a player. ``ConnectivityError`` and
``TurnOrderError`` signal logic faults in the caller or the core itself;
``ConfigError`` signals a malformed configuration value.
"""

from __future__ import annotations


class DelveError(Exception):
    """Base class for all errors raised by delve."""


class ConnectivityError(DelveError):
    """The repair pass failed to merge every floor region into one."""

    def __init__(self, regions: int):
        super().__init__(f"grid still has {regions} disconnected regions after repair")
        self.regions = regions


class TurnOrderError(DelveError):
    """A turn-phase method was invoked outside of its phase."""


class ConfigError(DelveError, ValueError):
    """A configuration value could not be parsed or is out of range."""


__all__ = ["DelveError", "ConnectivityError", "TurnOrderError", "ConfigError"]
