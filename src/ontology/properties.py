"""
Property inference.

Derives formal property definitions from the relationships held by the store
and from the concept kinds of extracted classes.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Set

from .domain import (
    Cardinality,
    OntologyClass,
    OntologyProperty,
    OntologyRelationship,
    PropertyType,
    Provenance,
)

logger = logging.getLogger(__name__)

RELATION_PROPERTY_NAMES = {
    "has-a": "has",
    "part-of": "partOf",
    "composed-of": "composedOf",
    "causes": "causes",
    "caused-by": "causedBy",
    "prevents": "prevents",
    "enables": "enables",
    "disables": "disables",
    "depends-on": "dependsOn",
    "uses": "uses",
    "located-in": "locatedIn",
    "adjacent-to": "adjacentTo",
    "precedes": "precedes",
    "follows": "follows",
    "during": "occurs",
    "similar-to": "similarTo",
    "different-from": "differentFrom",
    "related-to": "relatedTo",
    "corresponds-to": "correspondsTo",
}

ANNOTATION_RELATION_TYPES = frozenset({"different-from", "during"})

# is-a is expressed by the sub-class hierarchy, not by a property
HIERARCHY_RELATION_TYPES = frozenset({"is-a"})

KIND_PROPERTIES = {
    "entity": (("hasName", "xsd:string"), ("hasIdentifier", "xsd:string"),
               ("hasDescription", "xsd:string"), ("hasType", "xsd:string")),
    "process": (("hasInput", "xsd:string"), ("hasOutput", "xsd:string"), ("hasDuration", "xsd:duration"),
                ("hasSteps", "xsd:integer"), ("hasGoal", "xsd:string")),
    "quality": (("hasValue", "xsd:decimal"), ("hasUnit", "xsd:string"),
                ("hasMeasurement", "xsd:decimal"), ("hasScale", "xsd:string")),
    "abstract": (("hasDefinition", "xsd:string"), ("hasContext", "xsd:string"),
                 ("hasApplication", "xsd:string"), ("hasExample", "xsd:string")),
}

KIND_PROPERTY_CONFIDENCE = 0.6


def relation_property_name(rel_type: str) -> str:
    if rel_type in RELATION_PROPERTY_NAMES:
        return RELATION_PROPERTY_NAMES[rel_type]
    parts = [p for p in rel_type.split("-") if p]
    return "".join(parts[:1] + [p.capitalize() for p in parts[1:]])


def relation_property_type(rel_type: str) -> PropertyType:
    if rel_type in ANNOTATION_RELATION_TYPES:
        return PropertyType.ANNOTATION
    if rel_type in RELATION_PROPERTY_NAMES:
        return PropertyType.OBJECT
    return PropertyType.DATATYPE


def default_cardinality(property_type: PropertyType) -> Cardinality:
    if property_type == PropertyType.DATATYPE:
        return Cardinality(min=0, max=1)
    return Cardinality(min=0, max=None)


@dataclass
class _Inference:
    name: str
    type: PropertyType
    confidence: float = 0.0
    domain: Set[str] = field(default_factory=set)
    range: Set[str] = field(default_factory=set)
    evidence: List[str] = field(default_factory=list)


class PropertyInferencer:
    """Infers datatype, object and annotation properties."""

    def __init__(self, min_confidence: float = 0.4):
        self.min_confidence = min_confidence

    def infer(self,
              classes: Iterable[OntologyClass],
              relationships: Iterable[OntologyRelationship]) -> List[OntologyProperty]:
        inferences: Dict[str, _Inference] = {}

        for rel in sorted(relationships, key=lambda r: r.id):
            if rel.type in HIERARCHY_RELATION_TYPES:
                continue
            name = relation_property_name(rel.type)
            inference = inferences.setdefault(name, _Inference(name, relation_property_type(rel.type)))
            inference.domain.add(rel.source)
            inference.range.add(rel.target)
            inference.confidence = max(inference.confidence, rel.confidence)
            inference.evidence.append(f"{rel.source} {rel.type} {rel.target}")

        for cls in sorted(classes, key=lambda c: c.id):
            kind = cls.metadata.kind
            for name, datatype in KIND_PROPERTIES.get(kind, ()):
                inference = inferences.setdefault(name, _Inference(name, PropertyType.DATATYPE))
                inference.domain.add(cls.id)
                inference.range.add(datatype)
                inference.confidence = max(inference.confidence, KIND_PROPERTY_CONFIDENCE)
                inference.evidence.append(f"{cls.id} is a {kind} concept")

        properties = [
            self._to_property(inference)
            for inference in inferences.values()
            if inference.confidence > self.min_confidence
        ]
        properties.sort(key=lambda p: p.name)
        logger.info(f"Inferred {len(properties)} properties from {len(inferences)} candidates")
        return properties

    @staticmethod
    def _to_property(inference: _Inference) -> OntologyProperty:
        return OntologyProperty(
            id=inference.name,
            name=inference.name,
            type=inference.type,
            domain=set(inference.domain),
            range=set(inference.range),
            cardinality=default_cardinality(inference.type),
            description=f"Inferred from {len(inference.evidence)} observation(s), e.g. {inference.evidence[0]}",
            confidence=inference.confidence,
            provenance=Provenance.INFERRED,
        )
