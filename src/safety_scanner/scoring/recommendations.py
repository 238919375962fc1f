"""
Recommendation Generator
========================

Maps features to an ordered list of advisories.

Evaluation order (and therefore output order):
    1. Brightness   DARK → flashlight, companion; DIM → stay alert
    2. Environment  INDOOR_CORRIDOR → emergency exits
    3. Structure    CORRIDOR_LIKE → good visibility
    4. Nothing triggered → a single "appears safe" affirmation

The order reflects evaluation, not severity.
"""

from typing import List

from safety_scanner.models.features import (
    BrightnessFeature,
    EnvironmentFeature,
    LightingStatus,
    StructureFeature,
)


DARK_FLASHLIGHT = "Very dark area detected - consider using a flashlight"
DARK_COMPANION = "Walk with a companion if possible"
DIM_STAY_ALERT = "Dim lighting - stay alert"
INDOOR_EMERGENCY_EXITS = "Indoor corridor detected - check for emergency exits"
CORRIDOR_VISIBILITY = "Structured environment - good visibility"
ENVIRONMENT_SAFE = "Environment appears safe"

# Failure advisories
CAPTURE_UNAVAILABLE_ADVICE = "Unable to analyze environment. Please try again."
ANALYSIS_FAILED_ADVICE = "Unable to analyze environment. Please ensure good lighting."


def generate_recommendations(
    brightness: BrightnessFeature,
    environment: EnvironmentFeature,
    structure: StructureFeature,
) -> List[str]:
    """
    Build the advisory list for a set of features.

    Returns:
        Non-empty list of advisories in evaluation order
    """
    recommendations: List[str] = []

    if brightness.status == LightingStatus.DARK:
        recommendations.append(DARK_FLASHLIGHT)
        recommendations.append(DARK_COMPANION)
    elif brightness.status == LightingStatus.DIM:
        recommendations.append(DIM_STAY_ALERT)

    if environment.is_indoor:
        recommendations.append(INDOOR_EMERGENCY_EXITS)

    if structure.is_corridor_like:
        recommendations.append(CORRIDOR_VISIBILITY)

    if not recommendations:
        recommendations.append(ENVIRONMENT_SAFE)

    return recommendations
