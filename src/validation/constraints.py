"""
Evaluation of class-level constraints.

Supported expressions per constraint type:

- cardinality: ``<instances|subclasses|superclasses|properties|relationships> <op> <integer>``
- value:       ``<name|description|confidence|provenance> <op> <literal>``, where op is
               one of ``== != >= <= > <`` or ``matches`` (regular expression)
- logical:     ``subClassOf(X)``, ``disjointWith(X)``, ``requires(X)``
- restriction: ``hasProperty(name)``

An expression that does not parse fails with an explanatory message.
"""

import operator
import re
from typing import Tuple

from ontology.domain import ConstraintType, OntologyClass, OntologyConstraint

from .context import ValidationContext

COMPARISONS = {
    "==": operator.eq,
    "!=": operator.ne,
    ">=": operator.ge,
    "<=": operator.le,
    ">": operator.gt,
    "<": operator.lt,
}

_CARDINALITY = re.compile(r"^\s*(instances|subclasses|superclasses|properties|relationships)\s*(==|!=|>=|<=|>|<)\s*(\d+)\s*$")
_VALUE = re.compile(r"^\s*(name|description|confidence|provenance)\s*(==|!=|>=|<=|>|<|matches)\s*(.+?)\s*$")
_LOGICAL = re.compile(r"^\s*(subClassOf|disjointWith|requires)\s*\(\s*([^)]+?)\s*\)\s*$")
_RESTRICTION = re.compile(r"^\s*hasProperty\s*\(\s*([^)]+?)\s*\)\s*$")

Outcome = Tuple[bool, str]


def _literal(text: str) -> str:
    text = text.strip()
    if len(text) >= 2 and text[0] == text[-1] and text[0] in "'\"":
        return text[1:-1]
    return text


def evaluate_constraint(cls: OntologyClass, constraint: OntologyConstraint, context: ValidationContext) -> Outcome:
    """Check one constraint of a class. Returns (passed, message)."""
    handlers = {
        ConstraintType.CARDINALITY: _cardinality,
        ConstraintType.VALUE: _value,
        ConstraintType.LOGICAL: _logical,
        ConstraintType.RESTRICTION: _restriction,
    }
    try:
        handler = handlers[ConstraintType(constraint.type)]
    except ValueError:
        return False, f"Unknown constraint type '{constraint.type}'"
    return handler(cls, constraint.expression, context)


def _cardinality(cls: OntologyClass, expression: str, context: ValidationContext) -> Outcome:
    match = _CARDINALITY.match(expression)
    if not match:
        return False, f"Unrecognized cardinality expression '{expression}'"
    subject, op, limit = match.group(1), match.group(2), int(match.group(3))
    counts = {
        "instances": len(cls.instances),
        "subclasses": len(context.children.get(cls.id, ())),
        "superclasses": len(cls.super_classes),
        "properties": len(cls.properties),
        "relationships": len(context.relationships_for(cls.id)),
    }
    actual = counts[subject]
    if COMPARISONS[op](actual, limit):
        return True, f"{subject} = {actual}"
    return False, f"expected {subject} {op} {limit}, found {actual}"


def _value(cls: OntologyClass, expression: str, context: ValidationContext) -> Outcome:
    match = _VALUE.match(expression)
    if not match:
        return False, f"Unrecognized value expression '{expression}'"
    field_name, op, raw = match.group(1), match.group(2), _literal(match.group(3))

    if field_name == "confidence":
        actual = cls.metadata.confidence
        if op == "matches":
            return False, "'matches' applies to text fields only"
        try:
            expected = float(raw)
        except ValueError:
            return False, f"'{raw}' is not a number"
    else:
        if field_name == "provenance":
            actual = cls.metadata.provenance.value
        elif field_name == "description":
            actual = cls.description or ""
        else:
            actual = cls.name
        if op == "matches":
            try:
                ok = re.search(raw, actual) is not None
            except re.error as e:
                return False, f"invalid pattern '{raw}': {e}"
            return ok, f"{field_name} {'matches' if ok else 'does not match'} '{raw}'"
        if op not in ("==", "!="):
            return False, f"operator '{op}' applies to confidence only"
        expected = raw

    if COMPARISONS[op](actual, expected):
        return True, f"{field_name} = {actual!r}"
    return False, f"expected {field_name} {op} {expected!r}, found {actual!r}"


def _logical(cls: OntologyClass, expression: str, context: ValidationContext) -> Outcome:
    match = _LOGICAL.match(expression)
    if not match:
        return False, f"Unrecognized logical expression '{expression}'"
    kind, reference = match.group(1), match.group(2)
    other = context.resolve_class(reference)

    if kind == "requires":
        if other is None:
            return False, f"required class '{reference}' does not exist"
        return True, f"required class '{other}' exists"

    if other is None:
        return False, f"class '{reference}' does not exist"

    ancestors = context.ancestors(cls.id)
    if kind == "subClassOf":
        if other in ancestors:
            return True, f"'{cls.id}' is a sub-class of '{other}'"
        return False, f"'{cls.id}' is not a sub-class of '{other}'"

    # disjointWith: no shared ancestry and no shared members
    if other == cls.id or other in ancestors or cls.id in context.ancestors(other):
        return False, f"'{cls.id}' and '{other}' are in the same hierarchy line"
    shared = set(cls.instances) & set(context.classes[other].instances)
    if shared:
        return False, f"'{cls.id}' and '{other}' share instances: {', '.join(sorted(shared))}"
    return True, f"'{cls.id}' is disjoint with '{other}'"


def _restriction(cls: OntologyClass, expression: str, context: ValidationContext) -> Outcome:
    match = _RESTRICTION.match(expression)
    if not match:
        return False, f"Unrecognized restriction expression '{expression}'"
    wanted = _literal(match.group(1))
    for prop in context.properties.values():
        if wanted not in (prop.id, prop.name):
            continue
        if prop.id in cls.properties or cls.id in prop.domain:
            return True, f"'{cls.id}' has property '{wanted}'"
    if wanted in cls.properties:
        return True, f"'{cls.id}' has property '{wanted}'"
    return False, f"'{cls.id}' lacks property '{wanted}'"
