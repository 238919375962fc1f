"""
Model Tests
===========

Validation rules of the feature and result models.
"""

import pytest
from pydantic import ValidationError

from safety_scanner.models import (
    AnalysisResult,
    BrightnessFeature,
    EnvironmentClass,
    EnvironmentFeature,
    LightingStatus,
    SafetyStatus,
    ScanMethod,
    StructureClass,
    StructureFeature,
)


@pytest.fixture
def feature_kwargs():
    return {
        "brightness": BrightnessFeature(
            level=90.0, status=LightingStatus.BRIGHT, description="Good lighting"
        ),
        "environment": EnvironmentFeature(classification=EnvironmentClass.OUTDOOR),
        "structure": StructureFeature(classification=StructureClass.OPEN_SPACE),
    }


class TestFeatureModels:

    @pytest.mark.parametrize("level", [-1.0, 100.5])
    def test_brightness_level_bounds(self, level):
        with pytest.raises(ValidationError):
            BrightnessFeature(level=level, status=LightingStatus.DIM, description="x")

    def test_edge_ratio_bounds(self):
        with pytest.raises(ValidationError):
            StructureFeature(classification=StructureClass.OPEN_SPACE, edge_ratio=1.5)

    def test_features_are_frozen(self):
        feature = EnvironmentFeature(classification=EnvironmentClass.OUTDOOR)
        with pytest.raises(ValidationError):
            feature.classification = EnvironmentClass.INDOOR_CORRIDOR

    def test_classification_helpers(self):
        assert EnvironmentFeature(classification=EnvironmentClass.INDOOR_CORRIDOR).is_indoor
        assert StructureFeature(classification=StructureClass.CORRIDOR_LIKE).is_corridor_like


class TestAnalysisResult:

    def test_complete_result(self, feature_kwargs):
        result = AnalysisResult(
            **feature_kwargs,
            safety_score=100,
            safety_status=SafetyStatus.SAFE,
            recommendations=("Environment appears safe",),
            method=ScanMethod.BASIC,
            timestamp=1_700_000_000.0,
        )
        dumped = result.model_dump(mode="json")

        assert dumped["method"] == "basic"
        assert dumped["brightness"]["status"] == "bright"
        assert dumped["recommendations"] == ["Environment appears safe"]
        assert dumped["error"] is None

    @pytest.mark.parametrize("score", [-1, 101])
    def test_score_bounds(self, feature_kwargs, score):
        with pytest.raises(ValidationError):
            AnalysisResult(
                **feature_kwargs,
                safety_score=score,
                safety_status=SafetyStatus.SAFE,
                recommendations=("x",),
                method=ScanMethod.BASIC,
                timestamp=1.0,
            )

    def test_recommendations_required(self, feature_kwargs):
        with pytest.raises(ValidationError):
            AnalysisResult(
                **feature_kwargs,
                safety_score=100,
                safety_status=SafetyStatus.SAFE,
                recommendations=(),
                method=ScanMethod.BASIC,
                timestamp=1.0,
            )

    def test_features_required_unless_error(self):
        with pytest.raises(ValidationError):
            AnalysisResult(
                safety_score=50,
                safety_status=SafetyStatus.LOW_SAFETY,
                recommendations=("x",),
                method=ScanMethod.ACCELERATED,
                timestamp=1.0,
            )

    def test_error_result_without_features(self):
        result = AnalysisResult(
            safety_score=50,
            safety_status=SafetyStatus.LOW_SAFETY,
            recommendations=("Unable to analyze environment. Please try again.",),
            method=ScanMethod.ERROR,
            timestamp=1.0,
            error="Capture unavailable",
        )
        assert result.brightness is None
        assert result.error == "Capture unavailable"
