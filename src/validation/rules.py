"""
Validation rules.

Each rule is an independent function over a read-only ValidationContext that
returns its own errors, warnings and suggestions. DEFAULT_RULES lists them in
the order the validator runs them.
"""

import re
from dataclasses import dataclass
from typing import Callable, Dict, List, Set, Tuple

from ontology.domain import ConstraintSeverity, PropertyType, class_name, property_name

from .constraints import evaluate_constraint
from .context import ValidationContext
from .domain import (
    ErrorType,
    Impact,
    RuleOutcome,
    Severity,
    SuggestionType,
    ValidationIssue,
    ValidationSuggestion,
    WarningType,
)


@dataclass(frozen=True)
class ValidationRule:
    name: str
    description: str
    check: Callable[[ValidationContext], RuleOutcome]


def check_circular_hierarchy(context: ValidationContext) -> RuleOutcome:
    """Depth-first walk of super-class chains; a revisit on the active stack is a cycle."""
    outcome = RuleOutcome()
    done: Set[str] = set()
    reported: Set[tuple] = set()

    def visit(class_id: str, stack: List[str]) -> None:
        if class_id in stack:
            cycle = stack[stack.index(class_id):]
            key = tuple(sorted(cycle))
            if key not in reported:
                reported.add(key)
                outcome.errors.append(_cycle_error(cycle))
            return
        if class_id in done or class_id not in context.classes:
            return
        stack.append(class_id)
        for super_id in sorted(context.classes[class_id].super_classes):
            visit(super_id, stack)
        stack.pop()
        done.add(class_id)

    for cls in context.sorted_classes():
        visit(cls.id, [])
    return outcome


def _cycle_error(cycle: List[str]) -> ValidationIssue:
    path = " -> ".join(cycle + [cycle[0]])
    child, parent = cycle[-1], cycle[0]
    return ValidationIssue(
        type=ErrorType.CIRCULAR_DEPENDENCY.value,
        severity=Severity.CRITICAL,
        message=f"Circular dependency in class hierarchy: {path}",
        affected_elements=list(cycle),
        suggested_fix=f"Remove '{parent}' from the super-classes of '{child}'",
    )


def check_missing_superclasses(context: ValidationContext) -> RuleOutcome:
    outcome = RuleOutcome()
    for cls in context.sorted_classes():
        for super_id in sorted(cls.super_classes):
            if super_id not in context.classes:
                outcome.errors.append(ValidationIssue(
                    type=ErrorType.MISSING_REFERENCE.value,
                    severity=Severity.MAJOR,
                    message=f"Class '{cls.id}' references missing super-class '{super_id}'",
                    affected_elements=[cls.id, super_id],
                    suggested_fix=f"Create class '{super_id}' or remove it from the super-classes of '{cls.id}'",
                ))
    return outcome


def check_property_domain_range(context: ValidationContext) -> RuleOutcome:
    outcome = RuleOutcome()
    used = {prop_id for cls in context.classes.values() for prop_id in cls.properties}

    for prop in context.sorted_properties():
        for class_id in sorted(prop.domain):
            if class_id not in context.classes:
                outcome.errors.append(ValidationIssue(
                    type=ErrorType.MISSING_REFERENCE.value,
                    severity=Severity.MAJOR,
                    message=f"Property '{prop.id}' has missing domain class '{class_id}'",
                    affected_elements=[prop.id, class_id],
                    suggested_fix=f"Create class '{class_id}' or remove it from the domain of '{prop.id}'",
                ))
        if prop.type == PropertyType.OBJECT:
            for class_id in sorted(prop.range):
                if class_id not in context.classes:
                    outcome.errors.append(ValidationIssue(
                        type=ErrorType.MISSING_REFERENCE.value,
                        severity=Severity.MAJOR,
                        message=f"Object property '{prop.id}' has missing range class '{class_id}'",
                        affected_elements=[prop.id, class_id],
                        suggested_fix=f"Create class '{class_id}' or remove it from the range of '{prop.id}'",
                    ))
        if not prop.cardinality.is_valid():
            outcome.errors.append(ValidationIssue(
                type=ErrorType.CONSTRAINT_VIOLATION.value,
                severity=Severity.MAJOR,
                message=f"Property '{prop.id}' has invalid cardinality {prop.cardinality}",
                affected_elements=[prop.id],
                suggested_fix="Use a minimum of at least 0 and a maximum not below the minimum",
            ))
        if not prop.domain and prop.id not in used:
            outcome.warnings.append(ValidationIssue(
                type=WarningType.UNUSED_PROPERTY.value,
                severity=Severity.MINOR,
                message=f"Property '{prop.id}' is not used by any class",
                affected_elements=[prop.id],
                suggested_fix=f"Give '{prop.id}' a domain or remove it",
            ))
    return outcome


def check_relationship_consistency(context: ValidationContext) -> RuleOutcome:
    outcome = RuleOutcome()
    types_by_pair: Dict[tuple, Set[str]] = {}
    triples = set()
    for rel in context.relationships:
        types_by_pair.setdefault((rel.source, rel.target), set()).add(rel.type)
        triples.add((rel.source, rel.type, rel.target))

    for (source, target), types in sorted(types_by_pair.items()):
        for first, second in context.config.contradictory_pairs:
            if first in types and second in types:
                outcome.errors.append(ValidationIssue(
                    type=ErrorType.LOGICAL_INCONSISTENCY.value,
                    severity=Severity.MAJOR,
                    message=f"Contradictory relationships between '{source}' and '{target}': '{first}' and '{second}'",
                    affected_elements=[source, target],
                    suggested_fix=f"Keep only one of '{first}' and '{second}' for this pair",
                ))

    for rel in sorted(context.relationships, key=lambda r: r.id):
        if rel.bidirectional and rel.source != rel.target and (rel.target, rel.type, rel.source) not in triples:
            outcome.warnings.append(ValidationIssue(
                type=WarningType.MISSING_MIRROR.value,
                severity=Severity.MINOR,
                message=f"Bidirectional relationship '{rel.id}' has no mirror",
                affected_elements=[rel.id, rel.source, rel.target],
                suggested_fix=f"Add '{rel.target}-{rel.type}-{rel.source}'",
            ))
    return outcome


def _similar_classes(context: ValidationContext, cls) -> List[Tuple[float, str]]:
    """Best-scoring other classes above the similarity threshold, as (score, id)."""
    config = context.config
    scored = []
    for other in context.sorted_classes():
        if other.id == cls.id:
            continue
        score = context.similarity.class_similarity(cls, other)
        if score > config.similarity_threshold:
            scored.append((score, other.id))
    scored.sort(key=lambda pair: (-pair[0], pair[1]))
    return scored[:config.max_similar_classes]


def check_orphaned_classes(context: ValidationContext) -> RuleOutcome:
    outcome = RuleOutcome()
    related = {r.source for r in context.relationships} | {r.target for r in context.relationships}

    for cls in context.sorted_classes():
        if cls.super_classes or context.children.get(cls.id) or cls.id in related:
            continue
        outcome.warnings.append(ValidationIssue(
            type=WarningType.ORPHANED_CLASS.value,
            severity=Severity.MINOR,
            message=f"Class '{cls.id}' has no hierarchy links and no relationships",
            affected_elements=[cls.id],
            suggested_fix=f"Place '{cls.id}' under a super-class or relate it to another class",
        ))

        similar = _similar_classes(context, cls)
        if not similar:
            continue
        ids = [other_id for _, other_id in similar]
        best_score, best_id = similar[0]
        if best_score >= context.config.merge_threshold:
            outcome.suggestions.append(ValidationSuggestion(
                type=SuggestionType.MERGE_CLASSES,
                description=f"Orphaned class '{cls.id}' duplicates '{best_id}'",
                confidence=best_score,
                impact=Impact.MEDIUM,
                implementation=f"Merge '{cls.id}' into '{best_id}'",
                affected_elements=[cls.id, best_id],
            ))
        else:
            outcome.suggestions.append(ValidationSuggestion(
                type=SuggestionType.CONNECT_CLASSES,
                description=f"Orphaned class '{cls.id}' resembles {', '.join(ids)}",
                confidence=best_score,
                impact=Impact.MEDIUM,
                implementation=f"Relate '{cls.id}' to '{best_id}' or place it under a shared super-class",
                affected_elements=[cls.id] + ids,
            ))
    return outcome


def check_missing_relationships(context: ValidationContext) -> RuleOutcome:
    """Suggest relating similar classes that share no relationship or hierarchy edge."""
    outcome = RuleOutcome()
    linked = {frozenset((r.source, r.target)) for r in context.relationships}
    for cls in context.sorted_classes():
        linked.update(frozenset((cls.id, super_id)) for super_id in cls.super_classes)

    suggested: Set[frozenset] = set()
    for cls in context.sorted_classes():
        for score, other_id in _similar_classes(context, cls):
            pair = frozenset((cls.id, other_id))
            if pair in linked or pair in suggested:
                continue
            suggested.add(pair)
            outcome.suggestions.append(ValidationSuggestion(
                type=SuggestionType.ADD_RELATIONSHIP,
                description=f"Consider a relationship between '{cls.id}' and '{other_id}'",
                confidence=score,
                impact=Impact.HIGH if score > context.config.high_impact_similarity else Impact.MEDIUM,
                implementation=f"Add a relationship such as '{cls.id}' similar-to '{other_id}'",
                affected_elements=[cls.id, other_id],
            ))
    return outcome


def check_naming_conventions(context: ValidationContext) -> RuleOutcome:
    outcome = RuleOutcome()
    class_pattern = re.compile(context.config.class_name_pattern)
    property_pattern = re.compile(context.config.property_name_pattern)

    for cls in context.sorted_classes():
        if not class_pattern.match(cls.name):
            outcome.warnings.append(ValidationIssue(
                type=WarningType.NAMING_CONVENTION.value,
                severity=Severity.MINOR,
                message=f"Class name '{cls.name}' does not follow the class naming convention",
                affected_elements=[cls.id],
                suggested_fix=f"Rename to '{class_name(cls.name)}'",
            ))
    for prop in context.sorted_properties():
        if not property_pattern.match(prop.name):
            outcome.warnings.append(ValidationIssue(
                type=WarningType.NAMING_CONVENTION.value,
                severity=Severity.MINOR,
                message=f"Property name '{prop.name}' does not follow the property naming convention",
                affected_elements=[prop.id],
                suggested_fix=f"Rename to '{property_name(prop.name)}'",
            ))
    return outcome


def check_hierarchy_shape(context: ValidationContext) -> RuleOutcome:
    outcome = RuleOutcome()
    config = context.config
    if not context.classes:
        return outcome

    depth = context.max_depth()
    if depth > config.max_depth:
        outcome.warnings.append(ValidationIssue(
            type=WarningType.HIERARCHY_DEPTH.value,
            severity=Severity.MINOR,
            message=f"Class hierarchy is {depth} levels deep (limit {config.max_depth})",
            suggested_fix="Flatten chains of classes that add little distinction",
        ))

    fan_out = [
        sum(1 for child in children if child in context.classes)
        for parent, children in context.children.items()
        if parent in context.classes
    ]
    fan_out = [n for n in fan_out if n > 0]
    if fan_out:
        branching = sum(fan_out) / len(fan_out)
        if branching > config.max_branching:
            outcome.warnings.append(ValidationIssue(
                type=WarningType.HIERARCHY_BREADTH.value,
                severity=Severity.MINOR,
                message=f"Average branching factor is {branching:.1f} (limit {config.max_branching:g})",
                suggested_fix="Group sibling classes under intermediate categories",
            ))

    roots = context.roots()
    if len(roots) > config.max_roots:
        outcome.suggestions.append(ValidationSuggestion(
            type=SuggestionType.ADD_INTERMEDIATE_CLASSES,
            description=f"{len(roots)} root classes; consider introducing intermediate categories",
            confidence=0.7,
            impact=Impact.MEDIUM,
            implementation="Create broader classes and move related roots under them",
            affected_elements=roots,
        ))
    return outcome


def check_constraints(context: ValidationContext) -> RuleOutcome:
    outcome = RuleOutcome()
    for cls in context.sorted_classes():
        for constraint in cls.constraints:
            passed, detail = evaluate_constraint(cls, constraint, context)
            if passed:
                continue
            message = f"Constraint '{constraint.id}' on class '{cls.id}' failed: {detail}"
            if ConstraintSeverity(constraint.severity) == ConstraintSeverity.ERROR:
                outcome.errors.append(ValidationIssue(
                    type=ErrorType.CONSTRAINT_VIOLATION.value,
                    severity=Severity.MAJOR,
                    message=message,
                    affected_elements=[cls.id, constraint.id],
                    suggested_fix=constraint.description or None,
                ))
            else:
                outcome.warnings.append(ValidationIssue(
                    type=WarningType.CONSTRAINT_VIOLATION.value,
                    severity=Severity.MINOR,
                    message=message,
                    affected_elements=[cls.id, constraint.id],
                    suggested_fix=constraint.description or None,
                ))
    return outcome


DEFAULT_RULES = (
    ValidationRule("circular_hierarchy", "Class hierarchy must be acyclic", check_circular_hierarchy),
    ValidationRule("missing_superclass", "Super-class references must resolve", check_missing_superclasses),
    ValidationRule("property_domain_range", "Property domains, ranges and cardinalities must be valid", check_property_domain_range),
    ValidationRule("relationship_consistency", "Relationships must not contradict each other", check_relationship_consistency),
    ValidationRule("orphaned_classes", "Classes should be connected", check_orphaned_classes),
    ValidationRule("missing_relationships", "Similar classes should be related", check_missing_relationships),
    ValidationRule("naming_conventions", "Names should follow conventions", check_naming_conventions),
    ValidationRule("hierarchy_depth", "Hierarchy should be reasonably shaped", check_hierarchy_shape),
    ValidationRule("constraint_violations", "Class constraints must hold", check_constraints),
)
