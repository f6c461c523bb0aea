"""
Ontology export to standard knowledge-representation formats.

Classes, properties and relationships are assembled into an rdflib Graph (OWL
vocabulary, or SKOS for a concept-scheme view) and serialized by rdflib.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional

from rdflib import Graph, Literal, Namespace, URIRef, RDF, RDFS, OWL, XSD
from rdflib.namespace import SKOS

from .domain import OntologyClass, OntologyExport, OntologyProperty, OntologyRelationship, PropertyType
from .properties import relation_property_name

logger = logging.getLogger(__name__)

DEFAULT_NAMESPACE = "https://example.org/ontology/"

# export format -> rdflib serializer
SERIALIZERS = {
    "json-ld": "json-ld",
    "turtle": "turtle",
    "owl": "xml",
    "rdf": "xml",
    "nt": "nt",
    "skos": "turtle",
}

_PROPERTY_TYPES = {
    PropertyType.OBJECT: OWL.ObjectProperty,
    PropertyType.DATATYPE: OWL.DatatypeProperty,
    PropertyType.ANNOTATION: OWL.AnnotationProperty,
}


class OntologyExporter:
    """Serializes ontology contents with export metadata."""

    def __init__(self, namespace: str = DEFAULT_NAMESPACE, version: str = "1.0.0", title: str = "Extracted ontology"):
        self.namespace = namespace
        self.version = version
        self.title = title
        self.ns = Namespace(namespace)

    @staticmethod
    def supported_formats() -> List[str]:
        return list(SERIALIZERS)

    def export(self,
               classes: Iterable[OntologyClass],
               properties: Iterable[OntologyProperty],
               relationships: Iterable[OntologyRelationship],
               format: str,
               validation=None) -> OntologyExport:
        """Serialize the ontology.

        Args:
            classes: Classes to export
            properties: Properties to export
            relationships: Relationships to export
            format: One of supported_formats()
            validation: Optional ValidationResult summarized into the metadata

        Returns:
            OntologyExport with content and metadata

        Raises:
            ValueError: For an unsupported format
        """
        fmt = format.lower()
        if fmt not in SERIALIZERS:
            raise ValueError(f"Unsupported export format: {format}. Supported: {', '.join(SERIALIZERS)}")

        classes, properties, relationships = list(classes), list(properties), list(relationships)
        if fmt == "skos":
            graph = self.build_skos_graph(classes, relationships)
        else:
            graph = self.build_graph(classes, properties, relationships)
        content = graph.serialize(format=SERIALIZERS[fmt])

        metadata: Dict[str, Any] = {
            "format": fmt,
            "exported_at": datetime.now(timezone.utc).isoformat(),
            "version": self.version,
            "namespace": self.namespace,
            "classes": len(classes),
            "properties": len(properties),
            "relationships": len(relationships),
            "triples": len(graph),
        }
        if validation is not None:
            metadata["validation"] = validation.summary()

        logger.info(f"Exported {len(classes)} classes as {fmt} ({len(graph)} triples)")
        return OntologyExport(format=fmt, content=content, metadata=metadata)

    def _new_graph(self) -> Graph:
        graph = Graph()
        graph.bind("ex", self.ns)
        graph.bind("owl", OWL)
        graph.bind("rdfs", RDFS)
        graph.bind("xsd", XSD)
        graph.bind("skos", SKOS)
        return graph

    def _range_term(self, value: str) -> URIRef:
        if value.startswith("xsd:"):
            return XSD[value[len("xsd:"):]]
        return self.ns[value]

    def build_graph(self,
                    classes: List[OntologyClass],
                    properties: List[OntologyProperty],
                    relationships: List[OntologyRelationship]) -> Graph:
        graph = self._new_graph()
        ontology = URIRef(self.namespace.rstrip("/#"))
        graph.add((ontology, RDF.type, OWL.Ontology))
        graph.add((ontology, RDFS.label, Literal(self.title)))
        graph.add((ontology, OWL.versionInfo, Literal(self.version)))

        for cls in classes:
            iri = self.ns[cls.id]
            graph.add((iri, RDF.type, OWL.Class))
            graph.add((iri, RDFS.label, Literal(cls.name)))
            if cls.description:
                graph.add((iri, RDFS.comment, Literal(cls.description)))
            for super_id in sorted(cls.super_classes):
                graph.add((iri, RDFS.subClassOf, self.ns[super_id]))
            for instance in cls.instances:
                graph.add((iri, self.ns.sourceDocument, Literal(instance)))
            graph.add((iri, self.ns.confidence, Literal(cls.metadata.confidence)))
            graph.add((iri, self.ns.provenance, Literal(cls.metadata.provenance.value)))

        for prop in properties:
            iri = self.ns[prop.id]
            graph.add((iri, RDF.type, _PROPERTY_TYPES[prop.type]))
            graph.add((iri, RDFS.label, Literal(prop.name)))
            if prop.description:
                graph.add((iri, RDFS.comment, Literal(prop.description)))
            for class_id in sorted(prop.domain):
                graph.add((iri, RDFS.domain, self.ns[class_id]))
            for value in sorted(prop.range):
                graph.add((iri, RDFS.range, self._range_term(value)))
            if prop.cardinality.max == 1:
                graph.add((iri, RDF.type, OWL.FunctionalProperty))

        for rel in relationships:
            graph.add((self.ns[rel.source], self.ns[relation_property_name(rel.type)], self.ns[rel.target]))

        return graph

    def build_skos_graph(self, classes: List[OntologyClass], relationships: List[OntologyRelationship]) -> Graph:
        graph = self._new_graph()
        scheme = self.ns["scheme"]
        graph.add((scheme, RDF.type, SKOS.ConceptScheme))
        graph.add((scheme, SKOS.prefLabel, Literal(self.title)))

        known = {cls.id for cls in classes}
        for cls in classes:
            iri = self.ns[cls.id]
            graph.add((iri, RDF.type, SKOS.Concept))
            graph.add((iri, SKOS.prefLabel, Literal(cls.name)))
            graph.add((iri, SKOS.inScheme, scheme))
            if cls.description:
                graph.add((iri, SKOS.definition, Literal(cls.description)))
            supers = sorted(s for s in cls.super_classes if s in known)
            if not supers:
                graph.add((iri, SKOS.topConceptOf, scheme))
                graph.add((scheme, SKOS.hasTopConcept, iri))
            for super_id in supers:
                graph.add((iri, SKOS.broader, self.ns[super_id]))
                graph.add((self.ns[super_id], SKOS.narrower, iri))

        for rel in relationships:
            if rel.type != "is-a" and rel.source in known and rel.target in known:
                graph.add((self.ns[rel.source], SKOS.related, self.ns[rel.target]))

        return graph
