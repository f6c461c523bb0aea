"""
Configuration for ontology validation.
"""

from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field


CONTRADICTORY_PAIRS = (
    ("is-a", "part-of"),
    ("similar-to", "different-from"),
    ("causes", "caused-by"),
    ("causes", "prevents"),
    ("enables", "disables"),
)


class ValidationConfig(BaseModel):
    """Tables and limits used by the validation rules."""

    model_config = ConfigDict(frozen=True)

    contradictory_pairs: Tuple[Tuple[str, str], ...] = Field(
        default=CONTRADICTORY_PAIRS,
        description="Relationship types that must not link the same (source, target) pair",
    )
    class_name_pattern: str = Field(default=r"^[A-Z][a-zA-Z0-9]*$", description="Expected class naming (PascalCase)")
    property_name_pattern: str = Field(default=r"^[a-z][a-zA-Z0-9]*$", description="Expected property naming (camelCase)")
    max_depth: int = Field(default=8, description="Deeper hierarchies trigger a warning")
    max_branching: float = Field(default=12.0, description="Higher average branching factor triggers a warning")
    max_roots: int = Field(default=5, description="More root classes trigger a restructuring suggestion")
    similarity_threshold: float = Field(default=0.5, description="Class similarity above which classes count as similar")
    max_similar_classes: int = Field(default=3, description="Similar classes considered per class")
    merge_threshold: float = Field(default=0.9, description="Orphans at least this similar to a class get a merge suggestion")
    high_impact_similarity: float = Field(default=0.7, description="Relationship suggestions above this similarity are high impact")


DEFAULT_VALIDATION_CONFIG = ValidationConfig()
