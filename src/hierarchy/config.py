"""
Configuration for hierarchy construction.
"""

from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field


class HierarchyConfig(BaseModel):
    """Specificity banding, edge confidences and shape limits."""

    model_config = ConfigDict(frozen=True)

    specificity_base: float = Field(default=0.1, description="Specificity of a frequent single-word concept")
    specificity_bands: Tuple[float, ...] = Field(
        default=(0.3, 0.7),
        description="Ascending band limits; a concept's band is the number of limits its specificity reaches",
    )
    min_parent_score: float = Field(default=0.3, description="Candidate parents must score above this")
    kind_parent_confidence: float = Field(default=0.8, description="Confidence of synthesized kind parents")
    kind_edge_confidence: float = Field(default=0.6, description="Confidence of an edge to a kind parent")
    band_edge_confidence: float = Field(default=0.5, description="Confidence of an edge to a less specific concept")
    linguistic_edge_confidence: float = Field(default=0.4, description="Confidence of an edge to a constituent word")
    confidence_bump: float = Field(default=0.1, description="Share of the edge confidence added to the child")
    low_confidence: float = Field(default=0.5, description="Non-root leaves below this are reported")
    max_depth: int = Field(default=8, description="Deeper hierarchies trigger a warning")
    max_branching: float = Field(default=15.0, description="Higher average branching factor triggers a warning")


DEFAULT_HIERARCHY_CONFIG = HierarchyConfig()
