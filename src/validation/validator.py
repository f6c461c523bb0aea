"""
Rule-based ontology validator.

Runs an ordered list of independent rules over a read-only snapshot and merges
their findings into one ValidationResult. A rule that raises is isolated: it
becomes a single critical "rule failed" error and the remaining rules still
run.
"""

import logging
from typing import Iterable, List, Optional, Sequence

from ontology.domain import OntologyClass, OntologyProperty, OntologyRelationship

from .config import ValidationConfig, DEFAULT_VALIDATION_CONFIG
from .context import ValidationContext
from .domain import ErrorType, Severity, ValidationIssue, ValidationResult
from .metrics import compute_quality_metrics
from .rules import DEFAULT_RULES, ValidationRule

logger = logging.getLogger(__name__)


class OntologyValidator:
    """Validates ontology contents against a list of rules."""

    def __init__(self, config: Optional[ValidationConfig] = None, rules: Optional[Sequence[ValidationRule]] = None):
        self.config = config or DEFAULT_VALIDATION_CONFIG
        self.rules: List[ValidationRule] = list(DEFAULT_RULES if rules is None else rules)

    def add_rule(self, rule: ValidationRule, position: Optional[int] = None) -> None:
        """Register a rule, replacing any rule of the same name."""
        self.remove_rule(rule.name)
        if position is None:
            self.rules.append(rule)
        else:
            self.rules.insert(position, rule)

    def remove_rule(self, name: str) -> bool:
        for i, rule in enumerate(self.rules):
            if rule.name == name:
                del self.rules[i]
                return True
        return False

    def get_rules(self) -> List[str]:
        return [rule.name for rule in self.rules]

    def validate(self,
                 classes: Iterable[OntologyClass],
                 properties: Iterable[OntologyProperty] = (),
                 relationships: Iterable[OntologyRelationship] = ()) -> ValidationResult:
        context = ValidationContext.build(classes, properties, relationships, self.config)
        errors, warnings, suggestions = [], [], []

        for rule in self.rules:
            try:
                outcome = rule.check(context)
            except Exception as e:
                logger.exception(f"Validation rule '{rule.name}' failed")
                errors.append(ValidationIssue(
                    type=ErrorType.LOGICAL_INCONSISTENCY.value,
                    severity=Severity.CRITICAL,
                    message=f"Validation rule '{rule.name}' failed: {e}",
                    affected_elements=[rule.name],
                ))
                continue
            errors.extend(outcome.errors)
            warnings.extend(outcome.warnings)
            suggestions.extend(outcome.suggestions)

        valid = not any(error.severity == Severity.CRITICAL for error in errors)
        metrics = compute_quality_metrics(context, len(errors), len(warnings))
        logger.info(
            f"Validated {len(context.classes)} classes: valid={valid}, "
            f"{len(errors)} errors, {len(warnings)} warnings, {len(suggestions)} suggestions"
        )
        return ValidationResult(
            valid=valid,
            errors=errors,
            warnings=warnings,
            suggestions=suggestions,
            metrics=metrics,
        )


def validate_ontology(classes: Iterable[OntologyClass],
                      properties: Iterable[OntologyProperty] = (),
                      relationships: Iterable[OntologyRelationship] = (),
                      config: Optional[ValidationConfig] = None) -> ValidationResult:
    return OntologyValidator(config).validate(classes, properties, relationships)
