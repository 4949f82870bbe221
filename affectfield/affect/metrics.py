"""
Metric Aggregator: reading the shape of a feeling.

Stateless functions over an intensity vector laid out in catalog order. Each
is O(number of emotions) and safe to call on an all-zero vector: the weighted
averages fall back to neutral constants instead of dividing by zero.
"""

from __future__ import annotations

from typing import Optional, Sequence

from affectfield.affect.catalog import CATALOG, Emotion

# Fallbacks used when no emotion is active.
NEUTRAL_COHERENCE = 0.5
NEUTRAL_VALENCE = 0.0

# Distortion is normalized by this divisor before clamping to [0, 1].
DISTORTION_SCALE = 10.0


def calc_distortion(intensities: Sequence[float]) -> float:
    """How chaotic the emotional state is, 0.0 (calm) to 1.0 (maximal).

    Sum of intensity × arousal × (1 − coherence) across all emotions,
    divided by 10 and clamped.
    """
    total = 0.0
    for spec, value in zip(CATALOG, intensities):
        total += value * spec.arousal * (1.0 - spec.coherence)
    return max(0.0, min(1.0, total / DISTORTION_SCALE))


def calc_coherence(intensities: Sequence[float]) -> float:
    """Intensity-weighted mean coherence of the active emotions."""
    weighted = 0.0
    weight = 0.0
    for spec, value in zip(CATALOG, intensities):
        if value > 0:
            weighted += spec.coherence * value
            weight += value
    return weighted / weight if weight > 0 else NEUTRAL_COHERENCE


def get_valence(intensities: Sequence[float]) -> float:
    """Intensity-weighted mean valence of the active emotions."""
    weighted = 0.0
    weight = 0.0
    for spec, value in zip(CATALOG, intensities):
        if value > 0:
            weighted += spec.valence * value
            weight += value
    return weighted / weight if weight > 0 else NEUTRAL_VALENCE


def get_dominant(intensities: Sequence[float]) -> Optional[Emotion]:
    """The strictly highest-intensity emotion; ties keep the earlier one."""
    best = 0.0
    dominant: Optional[Emotion] = None
    for spec, value in zip(CATALOG, intensities):
        if value > best:
            best = value
            dominant = spec.emotion
    return dominant
