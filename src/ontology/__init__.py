"""
Ontology Store, Property Inference & Export Module

This module provides the in-memory ontology store for classes, properties,
relationships and domains, with hierarchy-consistency bookkeeping that keeps
the sub-class graph acyclic and the super/sub-class links symmetric.

Public Interface:
- OntologyStore: Authoritative in-memory repository of the ontology
- PropertyInferencer: Derives properties from relationships and concept kinds
- OntologyExporter: Serializes the ontology to JSON-LD, Turtle, OWL, RDF, N-Triples or SKOS
- Domain models: OntologyClass, OntologyProperty, OntologyRelationship, etc.
"""

from .domain import (
    Cardinality,
    ClassMetadata,
    ClassNeighborhood,
    ConstraintSeverity,
    ConstraintType,
    Domain,
    OntologyClass,
    OntologyConstraint,
    OntologyExport,
    OntologyProperty,
    OntologyRelationship,
    OntologyStats,
    PropertyType,
    Provenance,
    SimilarClass,
    class_name,
    property_name,
    slugify,
)
from .exporter import OntologyExporter
from .properties import PropertyInferencer
from .store import OntologyStore

__all__ = [
    "OntologyStore",
    "PropertyInferencer",
    "OntologyExporter",
    "Cardinality",
    "ClassMetadata",
    "ClassNeighborhood",
    "ConstraintSeverity",
    "ConstraintType",
    "Domain",
    "OntologyClass",
    "OntologyConstraint",
    "OntologyExport",
    "OntologyProperty",
    "OntologyRelationship",
    "OntologyStats",
    "PropertyType",
    "Provenance",
    "SimilarClass",
    "class_name",
    "property_name",
    "slugify",
]
