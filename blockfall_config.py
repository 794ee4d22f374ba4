"""Session configuration: defaults + validation"""
from dataclasses import dataclass, fields
from typing import Any, Dict, Optional

from blockfall_errors import InvalidConfig, InvalidDimension

CONFIG = {
    "W_ARENA": 8,             # arena width (cells)
    "H_ARENA": 20,            # arena height (cells)
    "GRAVITY_MS": 1000,       # initial gravity interval
    "TICK_COUNTER_MS": 1000,  # play clock resolution
    "SEED": None,             # piece sequence seed, None => unseeded
    "PLAYER": "player1",
}


@dataclass(frozen=True)
class SessionConfig:
    width: int = CONFIG["W_ARENA"]
    height: int = CONFIG["H_ARENA"]
    gravity_interval_ms: int = CONFIG["GRAVITY_MS"]
    tick_counter_interval_ms: int = CONFIG["TICK_COUNTER_MS"]
    seed: Optional[int] = CONFIG["SEED"]
    player: str = CONFIG["PLAYER"]

    def __post_init__(self):
        for name in ("width", "height"):
            v = getattr(self, name)
            if not _positive_int(v):
                raise InvalidDimension(f"{name} must be a positive integer, got {v!r}")
        for name in ("gravity_interval_ms", "tick_counter_interval_ms"):
            v = getattr(self, name)
            if not _positive_int(v):
                raise InvalidConfig(f"{name} must be a positive integer, got {v!r}")

    @classmethod
    def from_dict(cls, config: Dict[str, Any] = None, **overrides) -> "SessionConfig":
        """Build a config from a CONFIG-style dict, then apply keyword overrides."""
        src = dict(CONFIG)
        if config:
            unknown = set(config) - set(CONFIG)
            if unknown:
                raise InvalidConfig(f"unknown config keys: {', '.join(sorted(unknown))}")
            src.update(config)
        values = dict(
            width=src["W_ARENA"],
            height=src["H_ARENA"],
            gravity_interval_ms=src["GRAVITY_MS"],
            tick_counter_interval_ms=src["TICK_COUNTER_MS"],
            seed=src["SEED"],
            player=src["PLAYER"],
        )
        names = {f.name for f in fields(cls)}
        for k in overrides:
            if k not in names:
                raise InvalidConfig(f"unknown config field: {k}")
        values.update(overrides)
        return cls(**values)


def _positive_int(v) -> bool:
    return isinstance(v, int) and not isinstance(v, bool) and v > 0
