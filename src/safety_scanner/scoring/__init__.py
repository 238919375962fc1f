"""
Scoring Module
==============

Pure functions that turn features into a verdict:
    - compute_safety_score / classify_safety: bounded score and its band
    - generate_recommendations: ordered human-readable advisories
"""

from safety_scanner.scoring.policy import (
    FAILURE_SCORE,
    classify_safety,
    compute_safety_score,
)
from safety_scanner.scoring.recommendations import (
    ANALYSIS_FAILED_ADVICE,
    CAPTURE_UNAVAILABLE_ADVICE,
    generate_recommendations,
)

__all__ = [
    "FAILURE_SCORE",
    "classify_safety",
    "compute_safety_score",
    "ANALYSIS_FAILED_ADVICE",
    "CAPTURE_UNAVAILABLE_ADVICE",
    "generate_recommendations",
]
