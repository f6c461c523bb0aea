"""
Domain models for ontology validation reports.

Problems found in an ontology are reported as structured entries, never raised.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class ErrorType(str, Enum):
    CIRCULAR_DEPENDENCY = "circular_dependency"
    MISSING_REFERENCE = "missing_reference"
    CONSTRAINT_VIOLATION = "constraint_violation"
    LOGICAL_INCONSISTENCY = "logical_inconsistency"


class WarningType(str, Enum):
    ORPHANED_CLASS = "orphaned_class"
    NAMING_CONVENTION = "naming_convention"
    MISSING_MIRROR = "missing_mirror"
    UNUSED_PROPERTY = "unused_property"
    HIERARCHY_DEPTH = "hierarchy_depth"
    HIERARCHY_BREADTH = "hierarchy_breadth"
    CONSTRAINT_VIOLATION = "constraint_violation"


class Severity(str, Enum):
    CRITICAL = "critical"
    MAJOR = "major"
    MINOR = "minor"


class SuggestionType(str, Enum):
    CONNECT_CLASSES = "connect_classes"
    MERGE_CLASSES = "merge_classes"
    ADD_RELATIONSHIP = "add_relationship"
    ADD_INTERMEDIATE_CLASSES = "add_intermediate_classes"


class Impact(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


@dataclass
class ValidationIssue:
    """An error or warning about part of the ontology."""
    type: str                                   # ErrorType or WarningType value
    severity: Severity
    message: str
    affected_elements: List[str] = field(default_factory=list)
    suggested_fix: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "severity": self.severity.value,
            "message": self.message,
            "affected_elements": list(self.affected_elements),
            "suggested_fix": self.suggested_fix,
        }


@dataclass
class ValidationSuggestion:
    """An optional improvement to the ontology."""
    type: SuggestionType
    description: str
    confidence: float
    impact: Impact
    implementation: str = ""
    affected_elements: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type.value,
            "description": self.description,
            "confidence": self.confidence,
            "impact": self.impact.value,
            "implementation": self.implementation,
            "affected_elements": list(self.affected_elements),
        }


@dataclass
class QualityMetrics:
    """Aggregate quality scores, each in [0, 1]."""
    consistency: float = 1.0
    completeness: float = 0.0
    clarity: float = 0.0
    coverage: float = 0.0

    def as_dict(self) -> Dict[str, float]:
        return {
            "consistency": self.consistency,
            "completeness": self.completeness,
            "clarity": self.clarity,
            "coverage": self.coverage,
        }


@dataclass
class RuleOutcome:
    """What a single validation rule found."""
    errors: List[ValidationIssue] = field(default_factory=list)
    warnings: List[ValidationIssue] = field(default_factory=list)
    suggestions: List[ValidationSuggestion] = field(default_factory=list)


@dataclass
class ValidationResult:
    """Merged report of all validation rules."""
    valid: bool
    errors: List[ValidationIssue]
    warnings: List[ValidationIssue]
    suggestions: List[ValidationSuggestion]
    metrics: QualityMetrics

    @property
    def critical_errors(self) -> List[ValidationIssue]:
        return [e for e in self.errors if e.severity == Severity.CRITICAL]

    def errors_of_type(self, error_type: ErrorType) -> List[ValidationIssue]:
        return [e for e in self.errors if e.type == error_type.value]

    def warnings_of_type(self, warning_type: WarningType) -> List[ValidationIssue]:
        return [w for w in self.warnings if w.type == warning_type.value]

    def summary(self) -> Dict[str, Any]:
        return {
            "valid": self.valid,
            "errors": len(self.errors),
            "critical_errors": len(self.critical_errors),
            "warnings": len(self.warnings),
            "suggestions": len(self.suggestions),
            **self.metrics.as_dict(),
        }

    def to_dict(self) -> Dict[str, Any]:
        return {
            "valid": self.valid,
            "errors": [e.to_dict() for e in self.errors],
            "warnings": [w.to_dict() for w in self.warnings],
            "suggestions": [s.to_dict() for s in self.suggestions],
            "metrics": self.metrics.as_dict(),
        }
