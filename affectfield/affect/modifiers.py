"""
Modifier Projector: how feeling bends the game.

Turns the field's aggregates into a fixed set of multipliers that rendering
and gameplay read every frame. Distortion degrades (slower movement, more
hazard damage, shakier HUD); coherence sharpens (accuracy, insight gain).

Also infers the realm label: a coarse reading of how deep the player has
sunk into distortion, split by valence at the bottom.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from affectfield.affect.field import EmotionalField


@dataclass(frozen=True)
class GameplayModifiers:
    """Multipliers derived from distortion, coherence and valence."""

    # Visual
    background_hue: str
    particle_intensity: float
    vision_clarity: float

    # Gameplay
    move_speed_mod: float
    accuracy_mod: float
    insight_gain_mod: float
    hazard_damage_mod: float

    # UI
    hud_stability: float
    text_readability: float

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def get_emotional_modifiers(field: EmotionalField) -> GameplayModifiers:
    """Project the field's current aggregates. Never mutates the field."""
    dist = field.calc_distortion()
    coh = field.calc_coherence()
    valence = field.get_valence()

    return GameplayModifiers(
        background_hue="green" if valence > 0 else "red",
        particle_intensity=0.5 + dist * 0.5,
        vision_clarity=1 - dist * 0.3,
        move_speed_mod=1 - dist * 0.2,      # high distortion slows
        accuracy_mod=coh,
        insight_gain_mod=1 + coh * 0.5,
        hazard_damage_mod=1 + dist * 0.3,   # distortion increases damage taken
        hud_stability=1 - dist * 0.4,
        text_readability=coh,
    )


class Realm(str, Enum):
    MIND = "mind"
    PURGATORY = "purgatory"
    IMAGINATION = "imagination"
    HEAVEN = "heaven"
    HELL = "hell"


def infer_realm(field: EmotionalField) -> Realm:
    """Label the player's location from distortion depth and valence."""
    depth = field.calc_distortion()
    if depth < 0.2:
        return Realm.MIND
    if depth < 0.5:
        return Realm.PURGATORY
    if depth < 0.7:
        return Realm.IMAGINATION
    if field.get_valence() > 0.5:
        return Realm.HEAVEN
    return Realm.HELL
