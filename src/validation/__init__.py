"""
Ontology Validation Module

Rule-based consistency and quality checking of an ontology, producing a
structured report of errors, warnings and suggestions plus quality metrics.

Public Interface:
- OntologyValidator: Ordered, extensible list of validation rules
- validate_ontology: One-call validation of classes, properties and relationships
- ValidationResult and report entry types
"""

from .config import ValidationConfig
from .domain import (
    ErrorType,
    Impact,
    QualityMetrics,
    RuleOutcome,
    Severity,
    SuggestionType,
    ValidationIssue,
    ValidationResult,
    ValidationSuggestion,
    WarningType,
)
from .rules import ValidationRule
from .validator import OntologyValidator, validate_ontology

__all__ = [
    "OntologyValidator",
    "validate_ontology",
    "ValidationConfig",
    "ValidationRule",
    "ValidationResult",
    "ValidationIssue",
    "ValidationSuggestion",
    "QualityMetrics",
    "RuleOutcome",
    "ErrorType",
    "WarningType",
    "Severity",
    "SuggestionType",
    "Impact",
]
