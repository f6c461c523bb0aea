"""
In-memory store for the formal ontology.

Classes, properties, relationships and domains are kept in id-indexed
dictionaries. The sub-class hierarchy is mirrored in a networkx DiGraph with an
edge from every class to each of its super-classes, which is what the cycle
guard and the depth statistics walk.

Every mutation that would close a cycle in the hierarchy is rejected before
anything is written.
"""

import copy
import logging
from typing import Any, Dict, List, Optional

import networkx as nx

from .domain import (
    ClassNeighborhood,
    Domain,
    OntologyClass,
    OntologyExport,
    OntologyProperty,
    OntologyRelationship,
    OntologyStats,
    PropertyType,
    SimilarClass,
    utc_now,
)
from .similarity import LexicalSimilarity

logger = logging.getLogger(__name__)


class OntologyStore:
    """Authoritative in-memory repository of the ontology."""

    def __init__(self, validator=None, exporter=None):
        self.classes: Dict[str, OntologyClass] = {}
        self.properties: Dict[str, OntologyProperty] = {}
        self.relationships: Dict[str, OntologyRelationship] = {}
        self.domains: Dict[str, Domain] = {}

        # child -> super-class edges; may reference ids not (yet) in the store
        self.hierarchy = nx.DiGraph()

        self.similarity = LexicalSimilarity()
        self._validator = validator
        self._exporter = exporter

    # ------------------------------------------------------------------
    # Classes
    # ------------------------------------------------------------------

    def add_class(self, ontology_class: OntologyClass) -> bool:
        """Insert or overwrite a class by id.

        Super-class back-links (sub_classes) are maintained for every class in
        the store. The insert is rejected, leaving the store unchanged, when a
        declared super-class is the class itself or one of its descendants.

        Returns:
            True if the class was stored
        """
        cls = copy.deepcopy(ontology_class)
        supers = set(cls.super_classes)

        for super_id in sorted(supers):
            if self._closes_cycle(cls.id, super_id):
                logger.warning(f"Rejected class {cls.id!r}: super-class {super_id!r} would create a cycle")
                return False

        old = self.classes.get(cls.id)
        if old is not None:
            for super_id in old.super_classes - supers:
                self._unlink(cls.id, super_id)
            cls.metadata.created = old.metadata.created
        cls.metadata.modified = utc_now()

        self.hierarchy.add_node(cls.id)
        for super_id in supers:
            self._link(cls.id, super_id)

        cls.sub_classes = {sub_id for sub_id in self.hierarchy.predecessors(cls.id) if sub_id in self.classes}
        cls.super_classes = supers
        self.classes[cls.id] = cls
        return True

    def add_super_class(self, class_id: str, super_id: str) -> bool:
        """Add one sub-class edge; rejected if the class is unknown or the edge closes a cycle."""
        cls = self.classes.get(class_id)
        if cls is None:
            logger.warning(f"Cannot add super-class to unknown class {class_id!r}")
            return False
        if super_id in cls.super_classes:
            return True
        if self._closes_cycle(class_id, super_id):
            logger.warning(f"Rejected edge {class_id!r} -> {super_id!r}: would create a cycle")
            return False

        cls.super_classes.add(super_id)
        self._link(class_id, super_id)
        cls.metadata.modified = utc_now()
        return True

    def remove_super_class(self, class_id: str, super_id: str) -> bool:
        cls = self.classes.get(class_id)
        if cls is None or super_id not in cls.super_classes:
            return False
        cls.super_classes.discard(super_id)
        self._unlink(class_id, super_id)
        cls.metadata.modified = utc_now()
        return True

    def delete_class(self, class_id: str) -> bool:
        """Remove a class, its hierarchy links, its relationships and its domain memberships."""
        cls = self.classes.pop(class_id, None)
        if cls is None:
            return False

        for super_id in cls.super_classes:
            if super_id in self.classes:
                self.classes[super_id].sub_classes.discard(class_id)
        for sub_id in cls.sub_classes:
            if sub_id in self.classes:
                self.classes[sub_id].super_classes.discard(class_id)

        neighbours = list(self.hierarchy.successors(class_id)) if class_id in self.hierarchy else []
        if class_id in self.hierarchy:
            self.hierarchy.remove_node(class_id)
        for node in neighbours:
            self._prune(node)

        for rel_id in [r.id for r in self.relationships.values() if class_id in (r.source, r.target)]:
            del self.relationships[rel_id]
        for domain in self.domains.values():
            domain.concepts = [c for c in domain.concepts if c != class_id]
        for prop in self.properties.values():
            prop.domain.discard(class_id)
            prop.range.discard(class_id)
        return True

    def get_class(self, class_id: str) -> Optional[OntologyClass]:
        cls = self.classes.get(class_id)
        return copy.deepcopy(cls) if cls is not None else None

    def list_classes(self) -> List[OntologyClass]:
        return [copy.deepcopy(self.classes[class_id]) for class_id in sorted(self.classes)]

    def root_classes(self) -> List[str]:
        """Ids of classes with no super-class present in the store."""
        return sorted(
            class_id for class_id, cls in self.classes.items()
            if not any(super_id in self.classes for super_id in cls.super_classes)
        )

    def _closes_cycle(self, class_id: str, super_id: str) -> bool:
        if super_id == class_id:
            return True
        if super_id not in self.hierarchy or class_id not in self.hierarchy:
            return False
        return nx.has_path(self.hierarchy, super_id, class_id)

    def _link(self, class_id: str, super_id: str) -> None:
        self.hierarchy.add_edge(class_id, super_id)
        if super_id in self.classes:
            self.classes[super_id].sub_classes.add(class_id)

    def _unlink(self, class_id: str, super_id: str) -> None:
        if self.hierarchy.has_edge(class_id, super_id):
            self.hierarchy.remove_edge(class_id, super_id)
        if super_id in self.classes:
            self.classes[super_id].sub_classes.discard(class_id)
        self._prune(super_id)

    def _prune(self, node: str) -> None:
        """Drop a graph node that is neither a class nor referenced anymore."""
        if node in self.hierarchy and node not in self.classes and self.hierarchy.degree(node) == 0:
            self.hierarchy.remove_node(node)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    def add_property(self, ontology_property: OntologyProperty) -> bool:
        prop = copy.deepcopy(ontology_property)
        old = self.properties.get(prop.id)
        if old is not None:
            for class_id in old.domain - prop.domain:
                if class_id in self.classes:
                    self.classes[class_id].properties.discard(prop.id)
        for class_id in prop.domain:
            if class_id in self.classes:
                self.classes[class_id].properties.add(prop.id)
        self.properties[prop.id] = prop
        return True

    def remove_property(self, property_id: str) -> bool:
        if self.properties.pop(property_id, None) is None:
            return False
        for cls in self.classes.values():
            cls.properties.discard(property_id)
        return True

    def get_property(self, property_id: str) -> Optional[OntologyProperty]:
        prop = self.properties.get(property_id)
        return copy.deepcopy(prop) if prop is not None else None

    def list_properties(self) -> List[OntologyProperty]:
        return [copy.deepcopy(self.properties[prop_id]) for prop_id in sorted(self.properties)]

    # ------------------------------------------------------------------
    # Relationships
    # ------------------------------------------------------------------

    def add_relationship(self, relationship: OntologyRelationship) -> bool:
        """Insert a relationship; a bidirectional one also gets its mirror unless one exists."""
        rel = copy.deepcopy(relationship)
        self.relationships[rel.id] = rel

        if rel.bidirectional and rel.source != rel.target:
            mirror = rel.mirror()
            if mirror.id not in self.relationships and not self.has_relationship(mirror.source, mirror.type, mirror.target):
                self.relationships[mirror.id] = mirror
        return True

    def has_relationship(self, source: str, rel_type: str, target: str) -> bool:
        return any(
            r.source == source and r.type == rel_type and r.target == target
            for r in self.relationships.values()
        )

    def remove_relationship(self, relationship_id: str, include_mirror: bool = True) -> bool:
        rel = self.relationships.pop(relationship_id, None)
        if rel is None:
            return False
        if include_mirror and rel.bidirectional:
            mirror_id = OntologyRelationship.make_id(rel.target, rel.type, rel.source)
            self.relationships.pop(mirror_id, None)
        return True

    def get_relationship(self, relationship_id: str) -> Optional[OntologyRelationship]:
        rel = self.relationships.get(relationship_id)
        return copy.deepcopy(rel) if rel is not None else None

    def list_relationships(self, rel_type: Optional[str] = None) -> List[OntologyRelationship]:
        return [
            copy.deepcopy(self.relationships[rel_id])
            for rel_id in sorted(self.relationships)
            if rel_type is None or self.relationships[rel_id].type == rel_type
        ]

    def get_relationships_for_class(self, class_id: str) -> List[OntologyRelationship]:
        return [r for r in self.list_relationships() if class_id in (r.source, r.target)]

    # ------------------------------------------------------------------
    # Domains
    # ------------------------------------------------------------------

    def add_domain(self, domain: Domain) -> bool:
        self.domains[domain.id] = copy.deepcopy(domain)
        return True

    def get_domain(self, domain_id: str) -> Optional[Domain]:
        domain = self.domains.get(domain_id)
        return copy.deepcopy(domain) if domain is not None else None

    def list_domains(self) -> List[Domain]:
        return [copy.deepcopy(self.domains[domain_id]) for domain_id in sorted(self.domains)]

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_class_hierarchy(self, root_id: Optional[str] = None):
        """Nested tree view of the hierarchy.

        Args:
            root_id: Class to root the tree at; all root classes if omitted

        Returns:
            A tree dict for a root id, None for an unknown root id, or a list of
            tree dicts when no root is given
        """
        if root_id is not None:
            if root_id not in self.classes:
                return None
            return self._tree(root_id)
        return [self._tree(class_id) for class_id in self.root_classes()]

    def _tree_node(self, class_id: str) -> Dict[str, Any]:
        cls = self.classes[class_id]
        return {
            "id": cls.id,
            "name": cls.name,
            "description": cls.description,
            "instances": len(cls.instances),
            "children": [],
        }

    def _tree(self, root_id: str) -> Dict[str, Any]:
        """Tree below a class, built with an explicit stack so deep chains are fine."""
        root = self._tree_node(root_id)
        stack = [(root, frozenset([root_id]))]
        while stack:
            node, path = stack.pop()
            for sub_id in sorted(self.classes[node["id"]].sub_classes):
                if sub_id in self.classes and sub_id not in path:
                    child = self._tree_node(sub_id)
                    node["children"].append(child)
                    stack.append((child, path | {sub_id}))
        return root

    def get_ancestors(self, class_id: str) -> List[str]:
        if class_id not in self.hierarchy:
            return []
        return sorted(node for node in nx.descendants(self.hierarchy, class_id) if node in self.classes)

    def get_descendants(self, class_id: str) -> List[str]:
        if class_id not in self.hierarchy:
            return []
        return sorted(nx.ancestors(self.hierarchy, class_id))

    def get_class_neighborhood(self, class_id: str) -> Optional[ClassNeighborhood]:
        cls = self.get_class(class_id)
        if cls is None:
            return None
        relationships = self.get_relationships_for_class(class_id)
        related = {}
        for rel in relationships:
            other = rel.target if rel.source == class_id else rel.source
            if other in self.classes and other != class_id:
                related[other] = self.get_class(other)
        return ClassNeighborhood(
            target_class=cls,
            super_classes=[self.get_class(i) for i in sorted(cls.super_classes) if i in self.classes],
            sub_classes=[self.get_class(i) for i in sorted(cls.sub_classes) if i in self.classes],
            related_classes=related,
            relationships=relationships,
        )

    def find_similar_classes(self, class_id: str, limit: int = 5, threshold: float = 0.3) -> List[SimilarClass]:
        target = self.classes.get(class_id)
        if target is None:
            return []
        ranked = self.similarity.find_similar(target, list(self.classes.values()), limit, threshold)
        return [SimilarClass(copy.deepcopy(cls), score, "lexical") for cls, score in ranked]

    def max_depth(self) -> int:
        """Number of edges on the longest sub-class chain between stored classes."""
        graph = self.hierarchy.subgraph(self.classes.keys())
        if graph.number_of_edges() == 0:
            return 0
        return nx.dag_longest_path_length(graph)

    def get_statistics(self) -> OntologyStats:
        by_type = {t: 0 for t in PropertyType}
        for prop in self.properties.values():
            by_type[prop.type] += 1
        by_provenance: Dict[str, int] = {}
        for cls in self.classes.values():
            key = cls.metadata.provenance.value
            by_provenance[key] = by_provenance.get(key, 0) + 1

        return OntologyStats(
            total_classes=len(self.classes),
            total_properties=len(self.properties),
            total_object_properties=by_type[PropertyType.OBJECT],
            total_datatype_properties=by_type[PropertyType.DATATYPE],
            total_annotation_properties=by_type[PropertyType.ANNOTATION],
            total_relationships=len(self.relationships),
            total_domains=len(self.domains),
            root_classes=len(self.root_classes()),
            max_depth=self.max_depth(),
            classes_with_descriptions=sum(1 for c in self.classes.values() if c.description),
            classes_with_instances=sum(1 for c in self.classes.values() if c.instances),
            properties_with_domain_range=sum(1 for p in self.properties.values() if p.domain and p.range),
            classes_by_provenance=by_provenance,
        )

    def get_whole_ontology(self) -> Dict[str, Any]:
        """Complete ontology as plain structures."""
        return {
            "classes": [self._class_to_dict(cls) for cls in self.list_classes()],
            "properties": [self._property_to_dict(prop) for prop in self.list_properties()],
            "relationships": [self._relationship_to_dict(rel) for rel in self.list_relationships()],
            "domains": [vars(domain) for domain in self.list_domains()],
            "stats": vars(self.get_statistics()),
        }

    # ------------------------------------------------------------------
    # Validation and export
    # ------------------------------------------------------------------

    def validate_ontology(self):
        """Run the validator over a snapshot of the current contents."""
        validator = self._validator
        if validator is None:
            from validation import OntologyValidator
            validator = self._validator = OntologyValidator()
        return validator.validate(self.list_classes(), self.list_properties(), self.list_relationships())

    def export_to_format(self, format: str, include_validation: bool = True) -> OntologyExport:
        exporter = self._exporter
        if exporter is None:
            from .exporter import OntologyExporter
            exporter = self._exporter = OntologyExporter()
        validation = self.validate_ontology() if include_validation else None
        return exporter.export(
            self.list_classes(), self.list_properties(), self.list_relationships(), format, validation
        )

    def clear(self) -> None:
        self.classes.clear()
        self.properties.clear()
        self.relationships.clear()
        self.domains.clear()
        self.hierarchy.clear()

    # ------------------------------------------------------------------
    # Conversion helpers
    # ------------------------------------------------------------------

    def _class_to_dict(self, cls: OntologyClass) -> Dict[str, Any]:
        return {
            "id": cls.id,
            "name": cls.name,
            "description": cls.description,
            "super_classes": sorted(cls.super_classes),
            "sub_classes": sorted(cls.sub_classes),
            "properties": sorted(cls.properties),
            "constraints": [vars(c) for c in cls.constraints],
            "instances": list(cls.instances),
            "confidence": cls.metadata.confidence,
            "provenance": cls.metadata.provenance.value,
        }

    def _property_to_dict(self, prop: OntologyProperty) -> Dict[str, Any]:
        return {
            "id": prop.id,
            "name": prop.name,
            "type": prop.type.value,
            "domain": sorted(prop.domain),
            "range": sorted(prop.range),
            "cardinality": {"min": prop.cardinality.min, "max": prop.cardinality.max},
            "confidence": prop.confidence,
        }

    def _relationship_to_dict(self, rel: OntologyRelationship) -> Dict[str, Any]:
        return {
            "id": rel.id,
            "type": rel.type,
            "source": rel.source,
            "target": rel.target,
            "confidence": rel.confidence,
            "bidirectional": rel.bidirectional,
        }
