"""
Synergy Engine: when two feelings combine into something new.

A synergy is a named rule over the emotion vector (the ten intensities plus the
derived coherence). Rules are plain data: each carries an ordered set of
threshold conditions, and a single evaluator checks them. Table order is the
tie-break when several rules hold at once, so it must not be reordered.

The one-slot activation state machine (active id + cooldown) lives on the
EmotionalField; this module only knows how to match.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping, Optional, Sequence, Union

from affectfield.affect.catalog import CATALOG
from affectfield.affect.metrics import calc_coherence

# How long an activated synergy stays sticky, in milliseconds.
SYNERGY_DURATION_MS = 3000.0

COHERENCE_SIGNAL = "coherence"

EffectValue = Union[float, int, bool]


class SynergyKind(str, Enum):
    """The seven synergies, in precedence order."""
    FOCUSED_FORCE = "focused_force"
    CHAOS_BURST = "chaos_burst"
    DEEP_INSIGHT = "deep_insight"
    COLLAPSE_EVENT = "collapse_event"
    PROTECTIVE = "protective"
    RESONANCE = "resonance"
    DISSOLUTION = "dissolution"


class Comparison(str, Enum):
    GREATER = ">"
    LESS = "<"


@dataclass(frozen=True)
class Condition:
    """A strict threshold test on one named signal of the vector."""

    signal: str
    comparison: Comparison
    threshold: float

    def holds(self, vector: Mapping[str, float]) -> bool:
        value = vector.get(self.signal, 0.0)
        if self.comparison is Comparison.GREATER:
            return value > self.threshold
        return value < self.threshold

    def describe(self) -> str:
        return f"{self.signal} {self.comparison.value} {self.threshold:g}"


@dataclass(frozen=True)
class SynergySpec:
    """Static definition of one synergy."""

    kind: SynergyKind
    conditions: tuple[Condition, ...]
    effect: Mapping[str, EffectValue] = field(default_factory=dict)
    message: str = ""
    color: str = ""

    @property
    def id(self) -> str:
        return self.kind.value

    def matches(self, vector: Mapping[str, float]) -> bool:
        return all(cond.holds(vector) for cond in self.conditions)

    def describe(self) -> str:
        return " and ".join(cond.describe() for cond in self.conditions)


def _gt(signal: str, threshold: float) -> Condition:
    return Condition(signal, Comparison.GREATER, threshold)


def _lt(signal: str, threshold: float) -> Condition:
    return Condition(signal, Comparison.LESS, threshold)


SYNERGIES: tuple[SynergySpec, ...] = (
    SynergySpec(
        SynergyKind.FOCUSED_FORCE,
        (_gt("anger", 3), _gt(COHERENCE_SIGNAL, 0.7)),
        effect={"damage": 1.5, "precision": True},
        message="Anger + Coherence → Focused Force",
        color="#ff6600",
    ),
    SynergySpec(
        SynergyKind.CHAOS_BURST,
        (_gt("anger", 3), _lt(COHERENCE_SIGNAL, 0.4)),
        effect={"damage": 2.0, "splash": True, "selfDamage": 0.2},
        message="Anger + Chaos → Destructive Burst",
        color="#ff0044",
    ),
    SynergySpec(
        SynergyKind.DEEP_INSIGHT,
        (_gt("grief", 3), _gt("curiosity", 2)),
        effect={"insightGain": 2, "hiddenReveal": True},
        message="Grief + Curiosity → Deep Understanding",
        color="#6688ff",
    ),
    SynergySpec(
        SynergyKind.COLLAPSE_EVENT,
        (_gt("shame", 3), _gt("awe", 2)),
        effect={"stunSelf": 2000, "visionExpand": True},
        message="Shame + Awe → Identity Collapse",
        color="#8844aa",
    ),
    SynergySpec(
        SynergyKind.PROTECTIVE,
        (_gt("tender", 3), _gt("fear", 2)),
        effect={"shieldBonus": 10, "allyHeal": True},
        message="Tenderness + Fear → Protective Instinct",
        color="#ffaacc",
    ),
    SynergySpec(
        SynergyKind.RESONANCE,
        (_gt("joy", 5), _gt("hope", 3)),
        effect={"scoreMultiplier": 2, "energyRegen": True},
        message="Joy + Hope → Resonance Wave",
        color="#ffee44",
    ),
    SynergySpec(
        SynergyKind.DISSOLUTION,
        (_gt("despair", 5),),
        effect={"visionBlur": True, "moveSlow": 1.5},
        message="Despair Overwhelms",
        color="#223355",
    ),
)

_BY_ID: dict[str, SynergySpec] = {spec.id: spec for spec in SYNERGIES}


def build_vector(intensities: Sequence[float]) -> dict[str, float]:
    """Snapshot the intensities plus derived coherence as a named vector."""
    vector = {spec.name: float(value) for spec, value in zip(CATALOG, intensities)}
    vector[COHERENCE_SIGNAL] = calc_coherence(intensities)
    return vector


def find_synergy(vector: Mapping[str, float]) -> Optional[SynergySpec]:
    """First synergy in table order whose conditions all hold, or None."""
    for spec in SYNERGIES:
        if spec.matches(vector):
            return spec
    return None


def get_synergy(synergy_id: Optional[str]) -> Optional[SynergySpec]:
    if synergy_id is None:
        return None
    return _BY_ID.get(synergy_id)
