"""Simulation knobs for AI, combat and turn handling.

Values default to the tuned constants of the game. They can be overridden from
a plain mapping (for example a decoded JSON object) or from ``DELVE_*``
environment variables:

    DELVE_SKIRMISH_MIN_RANGE   int   (default 3)
    DELVE_SKIRMISH_MAX_RANGE   int   (default 5)
    DELVE_MAX_STACKS           int   (default 5)
    DELVE_USE_STATUS_MODIFIERS bool  (default off)
    DELVE_STUN_SKIPS_ACTION    bool  (default off)
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields
from typing import Any, Dict, Mapping, Optional

from .exceptions import ConfigError

_TRUE = ("1", "true", "yes", "on")
_FALSE = ("0", "false", "no", "off", "")


@dataclass
class SimulationConfig:
    skirmish_min_range: int = 3
    skirmish_max_range: int = 5
    max_stacks: int = 5
    use_status_modifiers: bool = False
    stun_skips_action: bool = False

    def __post_init__(self):
        if self.skirmish_min_range < 1 or self.skirmish_max_range < self.skirmish_min_range:
            raise ConfigError(
                f"invalid skirmish range [{self.skirmish_min_range}, {self.skirmish_max_range}]"
            )
        if self.max_stacks < 1:
            raise ConfigError("max_stacks must be >= 1")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "SimulationConfig":
        """Build a config from a mapping; unknown keys are ignored."""
        kwargs: Dict[str, Any] = {}
        for f in fields(cls):
            if f.name not in data:
                continue
            raw = data[f.name]
            if f.type in ("bool", bool):
                kwargs[f.name] = _coerce_bool(f.name, raw)
            else:
                try:
                    kwargs[f.name] = int(raw)
                except (TypeError, ValueError) as exc:
                    raise ConfigError(f"{f.name} must be an integer, got {raw!r}") from exc
        return cls(**kwargs)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "SimulationConfig":
        env = os.environ if environ is None else environ
        data = {}
        for f in fields(cls):
            key = "DELVE_" + f.name.upper()
            if key in env:
                data[f.name] = env[key]
        return cls.from_mapping(data)


def _coerce_bool(name: str, raw: Any) -> bool:
    if isinstance(raw, bool):
        return raw
    s = str(raw).strip().lower()
    if s in _TRUE:
        return True
    if s in _FALSE:
        return False
    raise ConfigError(f"{name} must be a boolean flag, got {raw!r}")


DEFAULT_CONFIG = SimulationConfig()

__all__ = ["SimulationConfig", "DEFAULT_CONFIG"]
