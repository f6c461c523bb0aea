"""
Ontology modeler service.

Orchestrates a full construction run (corpus analysis, hierarchy building,
store population, property inference) and offers manual definitions and
read access on top of the ontology store.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence, Union

from analysis import AnalysisService, ExtractionConfig
from analysis.config import DEFAULT_EXTRACTION_CONFIG
from corpus import Document, DocumentSource, parse_documents
from hierarchy import HierarchyBuilder, HierarchyConfig
from ontology import (
    Cardinality,
    Domain,
    OntologyClass,
    OntologyConstraint,
    OntologyExport,
    OntologyExporter,
    OntologyProperty,
    OntologyRelationship,
    OntologyStats,
    OntologyStore,
    PropertyInferencer,
    PropertyType,
    Provenance,
    SimilarClass,
    property_name,
    slugify,
)
from validation import OntologyValidator, ValidationConfig, ValidationResult

from .domain import IngestReport

logger = logging.getLogger(__name__)


class OntologyModelerService:
    """
    Service for building an ontology from a corpus and refining it by hand.
    """

    def __init__(self,
                 store: Optional[OntologyStore] = None,
                 extraction_config: Optional[ExtractionConfig] = None,
                 hierarchy_config: Optional[HierarchyConfig] = None,
                 validation_config: Optional[ValidationConfig] = None,
                 namespace: Optional[str] = None):
        """
        Initialize the modeler service.

        Args:
            store: Ontology store to populate. If None, creates a new one.
            extraction_config: Lexical tables and thresholds for analysis.
            hierarchy_config: Specificity bands and limits for hierarchy building.
            validation_config: Rule tables and limits for validation.
            namespace: Base IRI for exports; the exporter default if None.
        """
        self.extraction_config = extraction_config or DEFAULT_EXTRACTION_CONFIG
        self.hierarchy_config = hierarchy_config
        if store is None:
            exporter = OntologyExporter(namespace) if namespace else OntologyExporter()
            store = OntologyStore(validator=OntologyValidator(validation_config), exporter=exporter)
        self.store = store

        self.analysis_service = AnalysisService(self.extraction_config)
        self.property_inferencer = PropertyInferencer()

    # ------------------------------------------------------------------
    # Corpus ingestion
    # ------------------------------------------------------------------

    def ingest_corpus(self, documents: Iterable[Union[Document, dict]]) -> IngestReport:
        """
        Build ontology content from a corpus and add it to the store.

        Args:
            documents: Documents or raw dicts; malformed entries are skipped

        Returns:
            IngestReport with the analysis result, hierarchy roots and report,
            and counts of what was added
        """
        docs = parse_documents(documents)
        analysis = self.analysis_service.analyze(docs)

        builder = HierarchyBuilder(self.hierarchy_config)
        roots = builder.build(analysis.concepts, analysis.relationships)
        hierarchy_report = builder.validate_hierarchy()

        report = IngestReport(analysis=analysis, roots=[root.id for root in roots], hierarchy=hierarchy_report)

        for cls in builder.to_ontology_classes():
            existing = self.store.classes.get(cls.id)
            if existing is not None and existing.metadata.provenance == Provenance.MANUAL:
                self._enrich_manual_class(cls)
                report.classes_kept.append(cls.id)
                continue
            if existing is not None:
                cls.properties |= existing.properties
                cls.constraints = existing.constraints + cls.constraints
            if self.store.add_class(cls):
                report.classes_added += 1
            else:
                report.classes_rejected.append(cls.id)

        for candidate in analysis.relationships:
            source, target = slugify(candidate.source), slugify(candidate.target)
            if source not in self.store.classes or target not in self.store.classes:
                continue
            self.store.add_relationship(OntologyRelationship.create(
                source, candidate.type, target,
                confidence=candidate.confidence,
                bidirectional=candidate.bidirectional,
                properties={"strength": candidate.strength, "evidence": list(candidate.evidence)},
                provenance=Provenance.EXTRACTED,
            ))
            report.relationships_added += 1

        for prop in self.property_inferencer.infer(self.store.list_classes(), self.store.list_relationships()):
            existing = self.store.properties.get(prop.id)
            if existing is not None and existing.provenance == Provenance.MANUAL:
                continue
            self.store.add_property(prop)
            report.properties_added += 1

        for extracted in analysis.domains:
            self.store.add_domain(Domain(
                id=slugify(extracted.name),
                name=extracted.name,
                scope=extracted.scope.value,
                concepts=[slugify(name) for name in extracted.concepts if slugify(name) in self.store.classes],
                coverage=extracted.coverage,
                coherence=extracted.coherence,
                description=f"{len(extracted.concepts)} concepts grouped as {extracted.name}",
            ))
            report.domains_added += 1

        logger.info(
            f"Ingested {len(docs)} documents: {report.classes_added} classes, "
            f"{report.relationships_added} relationships, {report.properties_added} properties, "
            f"{report.domains_added} domains"
        )
        return report

    def ingest_source(self, source: DocumentSource) -> IngestReport:
        """Ingest every document a document source lists."""
        return self.ingest_corpus(source.list_documents())

    def _enrich_manual_class(self, extracted: OntologyClass) -> None:
        """Add extracted instances and super-classes to a hand-defined class.

        Name, description, provenance and existing super-classes stay as defined.
        """
        manual = self.store.get_class(extracted.id)
        new_instances = [title for title in extracted.instances if title not in manual.instances]
        if new_instances:
            manual.instances.extend(new_instances)
            self.store.add_class(manual)
        for super_id in sorted(extracted.super_classes):
            self.store.add_super_class(extracted.id, super_id)
        logger.debug(f"Kept manual class {extracted.id}, {len(new_instances)} instances merged")

    # ------------------------------------------------------------------
    # Manual definitions
    # ------------------------------------------------------------------

    def define_class(self,
                     name: str,
                     description: Optional[str] = None,
                     parents: Sequence[str] = (),
                     constraints: Sequence[OntologyConstraint] = (),
                     instances: Sequence[str] = ()) -> Optional[OntologyClass]:
        """
        Define (or redefine) a class by hand.

        Args:
            name: Class name; its slug becomes the class id
            description: Optional description
            parents: Super-class ids or names
            constraints: Constraints checked by the validator
            instances: Member document titles

        Returns:
            The stored class, or None if a parent would create a cycle

        Raises:
            ValueError: If the name is empty
        """
        if not name or not name.strip():
            raise ValueError("Class name must not be empty")
        name = name.strip()
        cls = OntologyClass.create(
            name,
            description=description,
            super_classes={slugify(parent) for parent in parents},
            constraints=list(constraints),
            instances=list(instances),
        )
        if not self.store.add_class(cls):
            return None
        logger.info(f"Defined class {cls.id}")
        return self.store.get_class(cls.id)

    def define_property(self,
                        name: str,
                        property_type: PropertyType = PropertyType.DATATYPE,
                        domain: Sequence[str] = (),
                        range: Sequence[str] = (),
                        cardinality: Optional[Cardinality] = None,
                        description: Optional[str] = None) -> OntologyProperty:
        """
        Define (or redefine) a property by hand.

        Domain entries are class ids or names. Range entries are class ids or
        names for object properties and XSD datatypes (e.g. "xsd:string")
        otherwise.

        Raises:
            ValueError: If the name is empty
        """
        if not name or not name.strip():
            raise ValueError("Property name must not be empty")
        property_type = PropertyType(property_type)
        prop_id = property_name(name)
        prop = OntologyProperty(
            id=prop_id,
            name=prop_id,
            type=property_type,
            domain={slugify(class_ref) for class_ref in domain},
            range={value if value.startswith("xsd:") else slugify(value) for value in range},
            cardinality=cardinality or Cardinality(),
            description=description,
        )
        self.store.add_property(prop)
        logger.info(f"Defined {property_type.value} property {prop_id}")
        return self.store.get_property(prop_id)

    def define_relationship(self,
                            source: str,
                            rel_type: str,
                            target: str,
                            confidence: float = 1.0,
                            bidirectional: Optional[bool] = None) -> OntologyRelationship:
        """
        Relate two existing classes by hand.

        Args:
            source: Source class id or name
            rel_type: Relationship type, e.g. "part-of"
            target: Target class id or name
            confidence: Confidence of the relationship
            bidirectional: Whether to mirror it; by default, mirrored types are mirrored

        Raises:
            ValueError: If either class does not exist
        """
        source_id, target_id = slugify(source), slugify(target)
        for class_id in (source_id, target_id):
            if class_id not in self.store.classes:
                raise ValueError(f"Class not found: {class_id}")
        if bidirectional is None:
            bidirectional = rel_type in self.extraction_config.bidirectional_types

        rel = OntologyRelationship.create(
            source_id, rel_type, target_id, confidence=confidence, bidirectional=bidirectional
        )
        self.store.add_relationship(rel)
        return self.store.get_relationship(rel.id)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_class_hierarchy(self, root_id: Optional[str] = None) -> Union[Dict[str, Any], List[Dict[str, Any]]]:
        """
        Nested tree view of the class hierarchy.

        Raises:
            ValueError: If root_id is given and not found
        """
        if root_id is not None and root_id not in self.store.classes:
            raise ValueError(f"Class not found: {root_id}")
        return self.store.get_class_hierarchy(root_id)

    def get_similar_classes(self, class_id: str, limit: int = 5, threshold: float = 0.3) -> List[SimilarClass]:
        """
        Find classes lexically similar to the specified class.

        Raises:
            ValueError: If class not found
        """
        if class_id not in self.store.classes:
            raise ValueError(f"Class not found: {class_id}")
        return self.store.find_similar_classes(class_id, limit, threshold)

    def validate_ontology(self) -> ValidationResult:
        return self.store.validate_ontology()

    def export_to_format(self, format: str, include_validation: bool = True) -> OntologyExport:
        return self.store.export_to_format(format, include_validation)

    def get_statistics(self) -> OntologyStats:
        return self.store.get_statistics()
