"""
Read-only snapshot of an ontology, shared by all validation rules.
"""

import copy
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Set, Tuple

from ontology.domain import OntologyClass, OntologyProperty, OntologyRelationship, slugify
from ontology.similarity import LexicalSimilarity

from .config import ValidationConfig, DEFAULT_VALIDATION_CONFIG


@dataclass(frozen=True)
class ValidationContext:
    classes: Mapping[str, OntologyClass]
    properties: Mapping[str, OntologyProperty]
    relationships: Tuple[OntologyRelationship, ...]
    children: Mapping[str, Tuple[str, ...]]      # class id -> ids of classes naming it as super-class
    config: ValidationConfig
    similarity: LexicalSimilarity

    @classmethod
    def build(cls,
              classes: Iterable[OntologyClass],
              properties: Iterable[OntologyProperty] = (),
              relationships: Iterable[OntologyRelationship] = (),
              config: Optional[ValidationConfig] = None) -> "ValidationContext":
        class_map = {c.id: c for c in copy.deepcopy(list(classes))}
        property_map = {p.id: p for p in copy.deepcopy(list(properties))}

        children: Dict[str, List[str]] = {}
        for class_id in sorted(class_map):
            for super_id in class_map[class_id].super_classes:
                children.setdefault(super_id, []).append(class_id)

        return cls(
            classes=MappingProxyType(class_map),
            properties=MappingProxyType(property_map),
            relationships=tuple(copy.deepcopy(list(relationships))),
            children=MappingProxyType({k: tuple(v) for k, v in children.items()}),
            config=config or DEFAULT_VALIDATION_CONFIG,
            similarity=LexicalSimilarity(),
        )

    def sorted_classes(self) -> List[OntologyClass]:
        return [self.classes[class_id] for class_id in sorted(self.classes)]

    def sorted_properties(self) -> List[OntologyProperty]:
        return [self.properties[prop_id] for prop_id in sorted(self.properties)]

    def roots(self) -> List[str]:
        return [
            c.id for c in self.sorted_classes()
            if not any(super_id in self.classes for super_id in c.super_classes)
        ]

    def ancestors(self, class_id: str) -> Set[str]:
        """All transitive super-classes present in the snapshot; tolerates cycles."""
        seen: Set[str] = set()
        stack = [class_id]
        while stack:
            current = self.classes.get(stack.pop())
            if current is None:
                continue
            for super_id in current.super_classes:
                if super_id in self.classes and super_id not in seen:
                    seen.add(super_id)
                    stack.append(super_id)
        seen.discard(class_id)
        return seen

    def depth(self, class_id: str, _memo: Optional[Dict[str, int]] = None, _path: Optional[Set[str]] = None) -> int:
        """Edges on the longest super-class chain above a class; a cycle stops the walk."""
        memo = {} if _memo is None else _memo
        path = set() if _path is None else _path
        if class_id in memo:
            return memo[class_id]
        path.add(class_id)
        best = 0
        for super_id in self.classes[class_id].super_classes:
            if super_id in self.classes and super_id not in path:
                best = max(best, 1 + self.depth(super_id, memo, path))
        path.discard(class_id)
        memo[class_id] = best
        return best

    def max_depth(self) -> int:
        memo: Dict[str, int] = {}
        return max((self.depth(class_id, memo) for class_id in self.classes), default=0)

    def relationships_for(self, class_id: str) -> List[OntologyRelationship]:
        return [r for r in self.relationships if class_id in (r.source, r.target)]

    def resolve_class(self, reference: str) -> Optional[str]:
        """Class id for a reference given as id, name or free-text name."""
        reference = reference.strip().strip("'\"")
        if reference in self.classes:
            return reference
        for cls in self.sorted_classes():
            if cls.name == reference:
                return cls.id
        slug = slugify(reference)
        return slug if slug in self.classes else None
