"""
Safety Scoring Policy
=====================

Deterministic, additive scoring rules over extracted features.

Rules:
    score = 100
    DARK lighting:            -40
    DIM lighting:             -20
    INDOOR_CORRIDOR:          -15
    CORRIDOR_LIKE structure:  +10
    clamp to [0, 100]

The rules are independent of each other, so their order does not matter;
clamping is always the final step. Only feature classifications are
read, which makes the score identical for identical features regardless
of the strategy that produced them.

Score bands:
    score < 60   → LOW_SAFETY (alert-worthy)
    score < 80   → MODERATE_SAFETY
    otherwise    → SAFE
"""

from safety_scanner.models.features import (
    BrightnessFeature,
    EnvironmentFeature,
    LightingStatus,
    StructureFeature,
)
from safety_scanner.models.result import SafetyStatus


BASE_SCORE = 100
DARK_PENALTY = 40
DIM_PENALTY = 20
INDOOR_CORRIDOR_PENALTY = 15
CORRIDOR_STRUCTURE_BONUS = 10

MIN_SCORE = 0
MAX_SCORE = 100

# Reported whenever a scan cannot produce features
FAILURE_SCORE = 50

LOW_SAFETY_BELOW = 60
MODERATE_SAFETY_BELOW = 80


def compute_safety_score(
    brightness: BrightnessFeature,
    environment: EnvironmentFeature,
    structure: StructureFeature,
) -> int:
    """
    Combine features into a bounded safety score.

    Args:
        brightness: Illumination feature
        environment: Environment feature
        structure: Structure feature

    Returns:
        Score in [0, 100]
    """
    score = BASE_SCORE

    if brightness.status == LightingStatus.DARK:
        score -= DARK_PENALTY
    elif brightness.status == LightingStatus.DIM:
        score -= DIM_PENALTY

    if environment.is_indoor:
        score -= INDOOR_CORRIDOR_PENALTY

    if structure.is_corridor_like:
        score += CORRIDOR_STRUCTURE_BONUS

    return max(MIN_SCORE, min(MAX_SCORE, score))


def classify_safety(score: int) -> SafetyStatus:
    """Map a score onto its safety band."""
    if score < LOW_SAFETY_BELOW:
        return SafetyStatus.LOW_SAFETY
    if score < MODERATE_SAFETY_BELOW:
        return SafetyStatus.MODERATE_SAFETY
    return SafetyStatus.SAFE
