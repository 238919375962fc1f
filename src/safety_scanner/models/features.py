"""
Feature Models
==============

Structured measurements derived from a Frame by the extractors.

Each feature carries the fields its strategy computes plus a total
classification. Basic-strategy fields are None on accelerated features
and vice versa; the classification is always set.

    BrightnessFeature   level ∈ [0, 100], status, description
    EnvironmentFeature  dominant color + distribution (basic)
                        indoor/outdoor contour indicators (accelerated)
    StructureFeature    vertical/horizontal edge counts (basic)
                        edge ratio + complexity (accelerated)
"""

from enum import Enum
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class LightingStatus(str, Enum):
    """Illumination class derived from brightness level."""

    DARK = "dark"
    DIM = "dim"
    BRIGHT = "bright"


class DominantColor(str, Enum):
    """
    Per-pixel color classes.

    Declaration order is the tie-break order for the dominant color:
    on equal counts the earlier member wins.
    """

    RED = "red"
    GREEN = "green"
    BLUE = "blue"
    GRAY = "gray"
    OTHER = "other"


class EnvironmentClass(str, Enum):
    INDOOR_CORRIDOR = "indoor_corridor"
    OUTDOOR = "outdoor"


class StructureClass(str, Enum):
    CORRIDOR_LIKE = "corridor_like"
    OPEN_SPACE = "open_space"


class Complexity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class BrightnessFeature(BaseModel):
    """
    Scene illumination.

    Attributes:
        level: Mean perceptual luminance scaled to [0, 100]
        status: DARK (< 30), DIM (< 60) or BRIGHT
        description: Human-readable lighting summary
    """

    model_config = ConfigDict(frozen=True)

    level: float = Field(..., ge=0.0, le=100.0, description="Luminance level (0-100)")
    status: LightingStatus = Field(..., description="Lighting class")
    description: str = Field(..., description="Human-readable lighting summary")


class EnvironmentFeature(BaseModel):
    """
    Environment class from color or contour analysis.

    Attributes:
        classification: INDOOR_CORRIDOR or OUTDOOR (always set)
        dominant: Most frequent color class (basic strategy)
        distribution: Sample count per color class (basic strategy)
        indoor_indicators: Elongated large contours (accelerated strategy)
        outdoor_indicators: Compact large contours (accelerated strategy)
    """

    model_config = ConfigDict(frozen=True)

    classification: EnvironmentClass = Field(..., description="Environment class")
    dominant: Optional[DominantColor] = Field(default=None)
    distribution: Optional[Dict[str, int]] = Field(default=None)
    indoor_indicators: Optional[int] = Field(default=None, ge=0)
    outdoor_indicators: Optional[int] = Field(default=None, ge=0)

    @property
    def is_indoor(self) -> bool:
        return self.classification == EnvironmentClass.INDOOR_CORRIDOR


class StructureFeature(BaseModel):
    """
    Structural pattern of the scene.

    Edge naming follows the orientation of the detected edge, not the
    comparison direction: a difference against the right-hand neighbor is
    a vertical edge.

    Attributes:
        classification: CORRIDOR_LIKE or OPEN_SPACE (always set)
        vertical_edges: Grid points differing from right neighbor (basic)
        horizontal_edges: Grid points differing from lower neighbor (basic)
        edge_ratio: Fraction of edge pixels in the edge map (accelerated)
        complexity: Edge-ratio band (accelerated)
    """

    model_config = ConfigDict(frozen=True)

    classification: StructureClass = Field(..., description="Structure class")
    vertical_edges: Optional[int] = Field(default=None, ge=0)
    horizontal_edges: Optional[int] = Field(default=None, ge=0)
    edge_ratio: Optional[float] = Field(default=None, ge=0.0, le=1.0)
    complexity: Optional[Complexity] = Field(default=None)

    @property
    def is_corridor_like(self) -> bool:
        return self.classification == StructureClass.CORRIDOR_LIKE
