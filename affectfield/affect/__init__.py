"""Affective core: the player's emotional field and everything derived from it."""
from affectfield.affect.catalog import CATALOG, Emotion, EmotionSpec
from affectfield.affect.field import EmotionalField
from affectfield.affect.modifiers import (
    GameplayModifiers,
    Realm,
    get_emotional_modifiers,
    infer_realm,
)
from affectfield.affect.synergy import SYNERGIES, SynergyKind, SynergySpec

__all__ = [
    "CATALOG",
    "Emotion",
    "EmotionSpec",
    "EmotionalField",
    "GameplayModifiers",
    "Realm",
    "get_emotional_modifiers",
    "infer_realm",
    "SYNERGIES",
    "SynergyKind",
    "SynergySpec",
]
