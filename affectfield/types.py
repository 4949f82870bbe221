"""
Core data types shared across affectfield subsystems.

This module defines lightweight data containers that cross subsystem boundaries:
the behavior vocabulary the game reports, the samples the field remembers, and
the clock the field reads time from. They live here rather than in a specific
subsystem to avoid circular imports.
"""

from __future__ import annotations

import math
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Mapping, Optional

# A clock returns "now" in monotonic milliseconds.
Clock = Callable[[], float]


def monotonic_ms() -> float:
    """Default clock: the process monotonic clock in milliseconds."""
    return time.monotonic() * 1000.0


class BehaviorKind(str, Enum):
    """Discrete player actions the game reports to the behavior engine."""
    MOVE = "move"
    RAPID_MOVE = "rapid_move"
    IDLE = "idle"
    HAZARD_APPROACH = "hazard_approach"
    HAZARD_ENTER = "hazard_enter"
    HAZARD_AVOID = "hazard_avoid"
    PEACE_COLLECT = "peace_collect"
    REVERSE = "reverse"
    EXPLORATION = "exploration"
    CIRCLING = "circling"


# The game client reports context with camelCase keys.
_CONTEXT_KEY_ALIASES = {
    "intervalMs": "interval_ms",
    "tileType": "tile_type",
    "maxHp": "max_hp",
}

_NUMERIC_CONTEXT_FIELDS = frozenset({"interval_ms", "combo", "hp", "max_hp"})


def _coerce_number(value: Any) -> Optional[float]:
    """A finite float, or None for anything that is not one."""
    if isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


@dataclass(frozen=True)
class BehaviorContext:
    """Optional details attached to a behavior observation."""

    interval_ms: Optional[float] = None
    tile_type: Optional[str] = None
    direction: Optional[str] = None
    combo: Optional[int] = None
    hp: Optional[float] = None
    max_hp: Optional[float] = None

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]]) -> BehaviorContext:
        """Build a context from a plain mapping, ignoring unknown keys.

        Numeric fields accept anything ``float()`` understands; values that
        do not convert to a finite number are dropped.
        """
        if not data:
            return cls()
        known = set(cls.__dataclass_fields__)
        kwargs: dict[str, Any] = {}
        for key, value in data.items():
            name = _CONTEXT_KEY_ALIASES.get(key, key)
            if name not in known or value is None:
                continue
            if name in _NUMERIC_CONTEXT_FIELDS:
                value = _coerce_number(value)
                if value is None:
                    continue
                if name == "combo":
                    value = int(value)
            else:
                value = str(value)
            kwargs[name] = value
        return cls(**kwargs)

    def to_dict(self) -> dict[str, Any]:
        return {
            name: getattr(self, name)
            for name in self.__dataclass_fields__
            if getattr(self, name) is not None
        }


@dataclass(frozen=True)
class BehaviorSample:
    """One timestamped observation held in the behavior window."""

    kind: BehaviorKind
    observed_at_ms: float
    context: BehaviorContext = field(default_factory=BehaviorContext)


class ManualClock:
    """A clock that only moves when told to. Used for replays and tests."""

    def __init__(self, start_ms: float = 0.0) -> None:
        self._now = float(start_ms)

    def __call__(self) -> float:
        return self._now

    def advance(self, ms: float) -> float:
        if ms < 0:
            raise ValueError("clock cannot move backwards")
        self._now += ms
        return self._now

    def set(self, now_ms: float) -> float:
        if now_ms < self._now:
            raise ValueError("clock cannot move backwards")
        self._now = float(now_ms)
        return self._now
