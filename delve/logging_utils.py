"""Minimal structured logging helper.

Emits key=value pairs (or one JSON object per line) with a timestamp and level.
The simulation core logs generation, repair, turn transitions and deaths
through this module only.

Usage:
    from delve.logging_utils import get_logger
    log = get_logger("delve.dungeon")
    log.info(event="dungeon_generated", rooms=9)

    seeded = log.bind(seed=42)      # every line from `seeded` carries seed=42
    seeded.warn(event="connectivity_repaired", region_count=3)

Environment (read on every call):
    DELVE_LOG_LEVEL   debug | info | warn | error (default: warn)
    DELVE_LOG_JSON    1/true/yes/on to emit JSON lines

Fields whose value is None are dropped. In key=value mode numbers are written
as-is and everything else is str()'d with spaces replaced by underscores.
Reserved keys: level, ts, logger.
"""

from __future__ import annotations

import json
import os
import sys
import time
from typing import Any, Dict

LEVELS = {"debug": 10, "info": 20, "warn": 30, "error": 40}
DEFAULT_LEVEL = "warn"
_TRUTHY = ("1", "true", "yes", "on")


def _threshold() -> int:
    name = os.getenv("DELVE_LOG_LEVEL", DEFAULT_LEVEL).strip().lower()
    return LEVELS.get(name, LEVELS[DEFAULT_LEVEL])


def _json_enabled() -> bool:
    return os.getenv("DELVE_LOG_JSON", "0").strip().lower() in _TRUTHY


def _json_line(record: Dict[str, Any]) -> str:
    return json.dumps(record, separators=(",", ":"), default=str)


def _kv_line(record: Dict[str, Any]) -> str:
    parts = []
    for key, value in record.items():
        if not isinstance(value, (int, float)):
            value = str(value).replace(" ", "_")
        parts.append(f"{key}={value}")
    return " ".join(parts)


class _Logger:
    def __init__(self, name: str, context: Dict[str, Any] | None = None):
        self.name = name
        self.context = dict(context or {})

    def bind(self, **fields) -> "_Logger":
        """Return a logger that adds ``fields`` to every record."""
        merged = dict(self.context)
        merged.update(fields)
        return _Logger(self.name, merged)

    def _emit(self, level: str, fields: Dict[str, Any]) -> None:
        if LEVELS[level] < _threshold():
            return
        record: Dict[str, Any] = {"level": level, "ts": int(time.time()), "logger": self.name}
        for source in (self.context, fields):
            record.update((k, v) for k, v in source.items() if v is not None)
        line = _json_line(record) if _json_enabled() else _kv_line(record)
        print(line, file=sys.stderr if level == "error" else sys.stdout)

    def debug(self, **fields):
        self._emit("debug", fields)

    def info(self, **fields):
        self._emit("info", fields)

    def warn(self, **fields):
        self._emit("warn", fields)

    def error(self, **fields):
        self._emit("error", fields)


_LOGGERS: Dict[str, _Logger] = {}


def get_logger(name: str) -> _Logger:
    if name not in _LOGGERS:
        _LOGGERS[name] = _Logger(name)
    return _LOGGERS[name]


log = get_logger("delve")

__all__ = ["get_logger", "log", "LEVELS"]
