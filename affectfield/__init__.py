"""
affectfield: an affect engine for games.

Keeps a continuous, decaying emotional state for the player, derives
aggregate metrics from it, detects synergy conditions that unlock gameplay
effects, infers emotion from observed behavior, and projects all of it into
gameplay multipliers.

Layers (bottom to top):
    1. Emotion catalog (static data)
    2. Emotional field (live state, decay, behavior window)
    3. Metric aggregator (distortion, coherence, valence, dominant)
    4. Synergy engine (rule table + activation state machine)
    5. Behavior inference (actions → emotion deltas)
    6. Modifier projector (aggregates → multipliers, realm)
    7. Session (decay cadence, checkpoints)
"""

__version__ = "0.1.0"
