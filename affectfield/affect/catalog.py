"""
Emotion Catalog: the fixed vocabulary of feeling.

Ten emotions, each placed in a three-dimensional space:

    valence  : how pleasant the feeling is (-1.0 to 1.0)
    arousal  : how activating it is (0.0 to 1.0)
    coherence: how integrated/organized it is (0.0 to 1.0)

The catalog is read-only. Its order matters: the field stores intensities in
this order, dominant-emotion ties resolve to the earlier entry, and snapshots
list emotions in this order.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


class Emotion(str, Enum):
    """The ten tracked emotions, in catalog order."""
    AWE = "awe"
    GRIEF = "grief"
    ANGER = "anger"
    CURIOSITY = "curiosity"
    SHAME = "shame"
    TENDER = "tender"
    FEAR = "fear"
    JOY = "joy"
    DESPAIR = "despair"
    HOPE = "hope"


@dataclass(frozen=True)
class EmotionSpec:
    """Static description of one emotion."""

    emotion: Emotion
    valence: float
    arousal: float
    coherence: float
    color: str
    description: str

    @property
    def name(self) -> str:
        return self.emotion.value


CATALOG: tuple[EmotionSpec, ...] = (
    EmotionSpec(Emotion.AWE, valence=0.7, arousal=0.6, coherence=0.8,
                color="#ffcc00", description="expansion"),
    EmotionSpec(Emotion.GRIEF, valence=-0.4, arousal=0.3, coherence=0.7,
                color="#4488cc", description="release"),
    EmotionSpec(Emotion.ANGER, valence=-0.6, arousal=0.9, coherence=0.5,
                color="#ff3344", description="force"),
    EmotionSpec(Emotion.CURIOSITY, valence=0.5, arousal=0.7, coherence=0.9,
                color="#88ffaa", description="exploration"),
    EmotionSpec(Emotion.SHAME, valence=-0.7, arousal=0.6, coherence=0.3,
                color="#664488", description="contraction"),
    EmotionSpec(Emotion.TENDER, valence=0.8, arousal=0.4, coherence=0.95,
                color="#ffaacc", description="care"),
    EmotionSpec(Emotion.FEAR, valence=-0.5, arousal=0.8, coherence=0.4,
                color="#6655aa", description="vigilance"),
    EmotionSpec(Emotion.JOY, valence=0.9, arousal=0.8, coherence=0.85,
                color="#ffee44", description="expansion"),
    EmotionSpec(Emotion.DESPAIR, valence=-0.9, arousal=0.4, coherence=0.2,
                color="#223355", description="collapse"),
    EmotionSpec(Emotion.HOPE, valence=0.6, arousal=0.5, coherence=0.8,
                color="#66ddaa", description="possibility"),
)

EMOTION_NAMES: tuple[str, ...] = tuple(spec.name for spec in CATALOG)

# Position of each emotion in the intensity vector.
EMOTION_INDEX: dict[Emotion, int] = {spec.emotion: i for i, spec in enumerate(CATALOG)}

MIN_INTENSITY = 0.0
MAX_INTENSITY = 10.0


def resolve_emotion(name: Union[Emotion, str]) -> Optional[Emotion]:
    """Return the Emotion for a name, or None if it is not in the catalog."""
    if isinstance(name, Emotion):
        return name
    try:
        return Emotion(name)
    except ValueError:
        return None


def get_spec(emotion: Emotion) -> EmotionSpec:
    return CATALOG[EMOTION_INDEX[emotion]]
