"""
Hierarchy builder.

Places concepts into a forest of taxonomy trees. Each concept gets at most one
parent, chosen by the first of these steps that succeeds:

1. an explicit "is-a" relationship;
2. its kind parent (least specific concepts) or the best-scoring concept of
   the next less specific band placed under the same kind;
3. a concept named by one of its constituent words;
4. its kind parent.

Every edge is checked against the candidate parent's ancestor chain so the
result never contains a cycle.
"""

import logging
from collections import deque
from typing import Any, Dict, Iterable, List, Optional

import networkx as nx
import numpy as np

from analysis.domain import Concept, ConceptKind, RelationshipCandidate
from ontology.domain import ClassMetadata, OntologyClass, Provenance, class_name, slugify
from ontology.properties import KIND_PROPERTIES
from validation.domain import ErrorType, Severity, ValidationIssue, WarningType

from .config import HierarchyConfig, DEFAULT_HIERARCHY_CONFIG
from .domain import HierarchyMetrics, HierarchyNode, HierarchyReport
from .scoring import balance, parent_score, specificity, specificity_band

logger = logging.getLogger(__name__)


def _kind_of(concept: Concept) -> str:
    return ConceptKind(concept.kind).value


class HierarchyBuilder:
    """Builds and navigates a concept hierarchy."""

    def __init__(self, config: Optional[HierarchyConfig] = None):
        self.config = config or DEFAULT_HIERARCHY_CONFIG
        self.nodes: Dict[str, HierarchyNode] = {}

    def build(self, concepts: Iterable[Concept], relationships: Iterable[RelationshipCandidate]) -> List[HierarchyNode]:
        """
        Build the hierarchy from scratch.

        Args:
            concepts: Extracted concepts; later duplicates of a name are ignored
            relationships: Extracted relationships; only "is-a" ones are used

        Returns:
            The root nodes
        """
        concepts = list(concepts)
        self.nodes = {}
        concepts = self._init_nodes(concepts)

        self._attach_is_a(relationships)
        self._attach_by_kind(concepts)
        self._attach_by_constituents(concepts)
        self._attach_remaining(concepts)
        self._compute_levels()

        roots = self.get_roots()
        logger.info(f"Built hierarchy of {len(self.nodes)} nodes with {len(roots)} roots")
        return roots

    def _init_nodes(self, concepts: List[Concept]) -> List[Concept]:
        unique = []
        for concept in concepts:
            node_id = slugify(concept.name)
            if node_id in self.nodes:
                logger.warning(f"Skipping duplicate concept '{concept.name}'")
                continue
            kind = _kind_of(concept)
            self.nodes[node_id] = HierarchyNode(
                id=node_id,
                name=concept.name,
                kind=kind,
                confidence=concept.confidence,
                evidence=list(concept.contexts),
                properties=[name for name, _ in KIND_PROPERTIES.get(kind, ())],
            )
            unique.append(concept)
        return unique

    def _node_for(self, concept: Concept) -> HierarchyNode:
        return self.nodes[slugify(concept.name)]

    def _kind_parent(self, kind: str) -> HierarchyNode:
        """The parent node of a kind, reusing a concept of the same name."""
        node_id = slugify(kind)
        if node_id not in self.nodes:
            self.nodes[node_id] = HierarchyNode(
                id=node_id,
                name=kind.capitalize(),
                confidence=self.config.kind_parent_confidence,
                evidence=["Inferred from concept kinds"],
                synthetic=True,
            )
        return self.nodes[node_id]

    def _attach_is_a(self, relationships: Iterable[RelationshipCandidate]) -> None:
        for rel in relationships:
            if rel.type != "is-a":
                continue
            child = self.nodes.get(slugify(rel.source))
            parent = self.nodes.get(slugify(rel.target))
            if child and parent:
                self.attach(parent, child, rel.confidence)

    def _attach_by_kind(self, concepts: List[Concept]) -> None:
        by_kind: Dict[str, List[Concept]] = {}
        for concept in concepts:
            by_kind.setdefault(_kind_of(concept), []).append(concept)

        for kind, members in by_kind.items():
            kind_parent = self._kind_parent(kind)
            bands: Dict[int, List[Concept]] = {}
            for concept in members:
                value = specificity(concept, self.config.specificity_base)
                bands.setdefault(specificity_band(value, self.config.specificity_bands), []).append(concept)

            # concepts placed by this step, per band; the pool for the next band
            placed: Dict[int, List[Concept]] = {}
            for band in sorted(bands):
                for concept in bands[band]:
                    node = self._node_for(concept)
                    if node.parent is not None or node.id == kind_parent.id:
                        continue
                    if band == 0:
                        attached = self.attach(kind_parent, node, self.config.kind_edge_confidence)
                    else:
                        best = self._best_parent(concept, placed.get(band - 1, []))
                        attached = best is not None and self.attach(
                            self._node_for(best), node, self.config.band_edge_confidence)
                    if attached:
                        placed.setdefault(band, []).append(concept)

    def _best_parent(self, concept: Concept, candidates: List[Concept]) -> Optional[Concept]:
        best, best_score = None, 0.0
        for candidate in candidates:
            if candidate.name == concept.name:
                continue
            score = parent_score(concept, candidate)
            if score > best_score:
                best, best_score = candidate, score
        return best if best_score > self.config.min_parent_score else None

    def _attach_by_constituents(self, concepts: List[Concept]) -> None:
        by_name = {c.name.lower(): slugify(c.name) for c in concepts}
        for concept in concepts:
            node = self._node_for(concept)
            if concept.word_count < 2 or node.parent is not None:
                continue
            for word in concept.name.split():
                parent_id = by_name.get(word.lower())
                if parent_id and parent_id != node.id and \
                        self.attach(self.nodes[parent_id], node, self.config.linguistic_edge_confidence):
                    break

    def _attach_remaining(self, concepts: List[Concept]) -> None:
        for concept in concepts:
            node = self._node_for(concept)
            if node.parent is None:
                kind_parent = self._kind_parent(_kind_of(concept))
                if kind_parent.id != node.id:
                    self.attach(kind_parent, node, self.config.kind_edge_confidence)

    def attach(self, parent: HierarchyNode, child: HierarchyNode, confidence: float) -> bool:
        """Make child a child of parent. Refused when child has a parent or the edge would close a cycle."""
        if child.parent is not None:
            return False
        if self._closes_cycle(parent.id, child.id):
            logger.debug(f"Rejected edge {parent.id} -> {child.id}: would create a cycle")
            return False
        child.parent = parent.id
        parent.children.append(child.id)
        child.confidence = min(child.confidence + confidence * self.config.confidence_bump, 1.0)
        return True

    def _closes_cycle(self, parent_id: str, child_id: str) -> bool:
        seen = set()
        current = parent_id
        while current is not None and current not in seen:
            if current == child_id:
                return True
            seen.add(current)
            node = self.nodes.get(current)
            current = node.parent if node else None
        return False

    def _compute_levels(self) -> None:
        queue = deque((root.id, 0) for root in self.get_roots())
        while queue:
            node_id, level = queue.popleft()
            node = self.nodes[node_id]
            node.level = level
            queue.extend((child_id, level + 1) for child_id in node.children)

    # Navigation

    def get_roots(self) -> List[HierarchyNode]:
        return [node for node in self.nodes.values() if node.parent is None]

    def get_node(self, node_id: str) -> Optional[HierarchyNode]:
        return self.nodes.get(node_id)

    def get_node_by_name(self, name: str) -> Optional[HierarchyNode]:
        return self.nodes.get(slugify(name))

    def get_parent(self, node_id: str) -> Optional[HierarchyNode]:
        node = self.nodes.get(node_id)
        if node is None or node.parent is None:
            return None
        return self.nodes.get(node.parent)

    def get_children(self, node_id: str) -> List[HierarchyNode]:
        node = self.nodes.get(node_id)
        return [self.nodes[child_id] for child_id in node.children] if node else []

    def get_ancestors(self, node_id: str) -> List[HierarchyNode]:
        """Ancestors, nearest first."""
        ancestors = []
        current = self.get_parent(node_id)
        while current is not None:
            ancestors.append(current)
            current = self.get_parent(current.id)
        return ancestors

    def get_descendants(self, node_id: str) -> List[HierarchyNode]:
        """Descendants in depth-first pre-order."""
        descendants = []
        stack = list(reversed(self.get_children(node_id)))
        while stack:
            node = stack.pop()
            descendants.append(node)
            stack.extend(reversed(self.get_children(node.id)))
        return descendants

    def get_siblings(self, node_id: str) -> List[HierarchyNode]:
        parent = self.get_parent(node_id)
        if parent is None:
            return []
        return [child for child in self.get_children(parent.id) if child.id != node_id]

    def tree(self, node_id: Optional[str] = None) -> Any:
        """Nested dict view of one subtree, or a list of all trees when node_id is None."""
        if node_id is None:
            return [self.tree(root.id) for root in self.get_roots()]
        node = self.nodes[node_id]
        return {
            "id": node.id,
            "name": node.name,
            "level": node.level,
            "confidence": node.confidence,
            "children": [self.tree(child_id) for child_id in node.children],
        }

    # Validation

    def validate_hierarchy(self) -> HierarchyReport:
        errors = self._detect_cycles()
        warnings = []

        for node in self.nodes.values():
            if node.is_leaf and not node.is_root and node.confidence < self.config.low_confidence:
                warnings.append(ValidationIssue(
                    type=WarningType.ORPHANED_CLASS.value,
                    severity=Severity.MINOR,
                    message=f"Node '{node.name}' is a leaf with low confidence ({node.confidence:.2f})",
                    affected_elements=[node.id],
                    suggested_fix="Merge with a related concept or add supporting documents",
                ))

        metrics = self.compute_metrics()
        if metrics.depth > self.config.max_depth:
            warnings.append(ValidationIssue(
                type=WarningType.HIERARCHY_DEPTH.value,
                severity=Severity.MINOR,
                message=f"Hierarchy is {metrics.depth} levels deep, which suggests over-specialization",
                suggested_fix="Consolidate intermediate levels",
            ))
        branching = self.average_branching()
        if branching > self.config.max_branching:
            warnings.append(ValidationIssue(
                type=WarningType.HIERARCHY_BREADTH.value,
                severity=Severity.MINOR,
                message=f"Average branching factor {branching:.1f} suggests under-categorization",
                suggested_fix="Add intermediate categories",
            ))

        return HierarchyReport(valid=not errors, errors=errors, warnings=warnings, metrics=metrics)

    def _detect_cycles(self) -> List[ValidationIssue]:
        graph = nx.DiGraph()
        graph.add_nodes_from(self.nodes)
        graph.add_edges_from(
            (node.parent, node.id) for node in self.nodes.values() if node.parent in self.nodes
        )
        errors = []
        for cycle in nx.simple_cycles(graph):
            errors.append(ValidationIssue(
                type=ErrorType.CIRCULAR_DEPENDENCY.value,
                severity=Severity.CRITICAL,
                message=f"Circular dependency in hierarchy: {' -> '.join(cycle + cycle[:1])}",
                affected_elements=list(cycle),
                suggested_fix=f"Remove the edge between {cycle[-1]} and {cycle[0]}",
            ))
        return errors

    def average_branching(self) -> float:
        fan_out = [len(node.children) for node in self.nodes.values() if node.children]
        return float(np.mean(fan_out)) if fan_out else 0.0

    def compute_metrics(self) -> HierarchyMetrics:
        if not self.nodes:
            return HierarchyMetrics()
        nodes = list(self.nodes.values())
        supported = [node for node in nodes if node.confidence > 0.5 and node.evidence]
        return HierarchyMetrics(
            depth=max(node.level for node in nodes) + 1,
            breadth=max(len(node.children) for node in nodes),
            balance=balance([node.level for node in nodes if node.is_leaf]),
            coverage=len(supported) / len(nodes),
        )

    # Conversion

    def to_ontology_classes(self) -> List[OntologyClass]:
        """Ontology classes for all nodes: kind parents as inferred, concepts as extracted."""
        classes = []
        for node in self.nodes.values():
            if node.synthetic:
                description = f"Inferred parent of {node.name.lower()} concepts"
                metadata = ClassMetadata(confidence=node.confidence, provenance=Provenance.INFERRED)
                instances = []
            else:
                description = f"{class_name(node.name)} concept derived from hierarchy analysis"
                metadata = ClassMetadata(confidence=node.confidence, provenance=Provenance.EXTRACTED, kind=node.kind)
                instances = list(node.evidence)
            classes.append(OntologyClass(
                id=node.id,
                name=class_name(node.name),
                description=description,
                super_classes={node.parent} if node.parent else set(),
                sub_classes=set(node.children),
                instances=instances,
                metadata=metadata,
            ))
        return classes


def build_hierarchy(concepts: Iterable[Concept],
                    relationships: Iterable[RelationshipCandidate],
                    config: Optional[HierarchyConfig] = None) -> List[HierarchyNode]:
    return HierarchyBuilder(config).build(concepts, relationships)
