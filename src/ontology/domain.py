"""
Domain models for the ontology module.

These models represent the formal ontology held by the store: classes arranged
in a sub-class hierarchy, properties with domain/range and cardinality,
relationships between classes, and thematic domains.
"""

import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional, Set


class Provenance(str, Enum):
    """Where a model element came from."""
    MANUAL = "manual"
    INFERRED = "inferred"
    EXTRACTED = "extracted"


class PropertyType(str, Enum):
    DATATYPE = "datatype"
    OBJECT = "object"
    ANNOTATION = "annotation"


class ConstraintType(str, Enum):
    RESTRICTION = "restriction"
    CARDINALITY = "cardinality"
    VALUE = "value"
    LOGICAL = "logical"


class ConstraintSeverity(str, Enum):
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


def slugify(name: str) -> str:
    """Class id for a name: camel case split, lower-cased, every character outside [a-z0-9] replaced by '_'.

    'DogBreed' and 'dog breed' share the id 'dog_breed'.
    """
    return re.sub(r"[^a-z0-9]", "_", CAMEL_BOUNDARY.sub("_", name).lower())


def _words(term: str) -> List[str]:
    return [part for part in re.split(r"[^A-Za-z0-9]+", term) if part]


def class_name(term: str) -> str:
    """PascalCase display name for a term, e.g. 'machine learning' -> 'MachineLearning'."""
    return "".join(word[:1].upper() + word[1:] for word in _words(term))


def property_name(term: str) -> str:
    """camelCase name for a term, e.g. 'part of' -> 'partOf'."""
    name = class_name(term)
    return name[:1].lower() + name[1:]


@dataclass
class Cardinality:
    """How many values a property takes; max None means unbounded."""
    min: int = 0
    max: Optional[int] = None

    @property
    def unbounded(self) -> bool:
        return self.max is None

    def is_valid(self) -> bool:
        if self.min < 0:
            return False
        return self.max is None or self.max >= self.min

    def __str__(self) -> str:
        return f"[{self.min}..{'*' if self.max is None else self.max}]"


@dataclass
class OntologyConstraint:
    """A class-level constraint, evaluated by the validator."""
    id: str
    type: ConstraintType
    expression: str                     # e.g. "instances >= 1", "disjointWith(Plant)"
    description: str = ""
    severity: ConstraintSeverity = ConstraintSeverity.ERROR


@dataclass
class ClassMetadata:
    created: datetime = field(default_factory=utc_now)
    modified: datetime = field(default_factory=utc_now)
    confidence: float = 1.0
    provenance: Provenance = Provenance.MANUAL
    kind: Optional[str] = None          # concept kind of extracted classes


@dataclass
class OntologyClass:
    """Represents a class in the ontology with its hierarchy position and members."""

    id: str
    name: str
    description: Optional[str] = None
    super_classes: Set[str] = field(default_factory=set)    # class ids (rdfs:subClassOf)
    sub_classes: Set[str] = field(default_factory=set)      # maintained by the store
    properties: Set[str] = field(default_factory=set)       # property ids
    constraints: List[OntologyConstraint] = field(default_factory=list)
    instances: List[str] = field(default_factory=list)      # member document titles
    metadata: ClassMetadata = field(default_factory=ClassMetadata)

    @classmethod
    def create(cls, name: str, **kwargs) -> "OntologyClass":
        return cls(id=slugify(name), name=name, **kwargs)


@dataclass
class OntologyProperty:
    """Represents a property (datatype, object or annotation) in the ontology."""

    id: str
    name: str
    type: PropertyType
    domain: Set[str] = field(default_factory=set)     # class ids
    range: Set[str] = field(default_factory=set)      # class ids, or XSD datatypes for datatype properties
    cardinality: Cardinality = field(default_factory=Cardinality)
    constraints: List[OntologyConstraint] = field(default_factory=list)
    description: Optional[str] = None
    confidence: float = 1.0
    provenance: Provenance = Provenance.MANUAL


@dataclass
class OntologyRelationship:
    """A typed link between two classes held by the store."""

    id: str
    type: str
    source: str                         # class id
    target: str                         # class id
    confidence: float = 1.0
    bidirectional: bool = False
    properties: Dict[str, Any] = field(default_factory=dict)
    provenance: Provenance = Provenance.MANUAL

    @staticmethod
    def make_id(source: str, rel_type: str, target: str) -> str:
        return f"{source}-{rel_type}-{target}"

    @classmethod
    def create(cls, source: str, rel_type: str, target: str, **kwargs) -> "OntologyRelationship":
        return cls(id=cls.make_id(source, rel_type, target), type=rel_type, source=source, target=target, **kwargs)

    def mirror(self) -> "OntologyRelationship":
        return OntologyRelationship(
            id=self.make_id(self.target, self.type, self.source),
            type=self.type,
            source=self.target,
            target=self.source,
            confidence=self.confidence,
            bidirectional=self.bidirectional,
            properties=dict(self.properties),
            provenance=self.provenance,
        )


@dataclass
class Domain:
    """A thematic group of classes."""

    id: str
    name: str
    scope: str
    concepts: List[str] = field(default_factory=list)    # class ids
    coverage: float = 0.0
    coherence: float = 0.0
    description: str = ""


@dataclass
class ClassNeighborhood:
    """Represents a class with its immediate neighborhood of connected classes."""

    target_class: OntologyClass
    super_classes: List[OntologyClass]
    sub_classes: List[OntologyClass]
    related_classes: Dict[str, OntologyClass]            # id -> class linked by a relationship
    relationships: List[OntologyRelationship]


@dataclass
class SimilarClass:
    """Represents a class similar to a target class with similarity score."""

    class_info: OntologyClass
    similarity_score: float             # 0.0 to 1.0
    similarity_basis: str               # "lexical"


@dataclass
class OntologyStats:
    """Statistics about the ontology content."""

    total_classes: int
    total_properties: int
    total_object_properties: int
    total_datatype_properties: int
    total_annotation_properties: int
    total_relationships: int
    total_domains: int
    root_classes: int
    max_depth: int
    classes_with_descriptions: int
    classes_with_instances: int
    properties_with_domain_range: int
    classes_by_provenance: Dict[str, int] = field(default_factory=dict)


@dataclass
class OntologyExport:
    """Serialized ontology plus export metadata."""

    format: str
    content: str
    metadata: Dict[str, Any]
