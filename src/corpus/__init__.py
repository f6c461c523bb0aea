"""
Corpus Module

This module defines the input documents of an ontology construction run and the
read-only interface used to obtain them from an external document store.

Public Interface:
- Document: A single titled text document with optional tags
- DocumentSource: Interface for anything that can list documents
- InMemoryDocumentSource, JsonDocumentSource: Ready-made sources
"""

from .domain import Document, parse_documents
from .datasource import DocumentSource, InMemoryDocumentSource, JsonDocumentSource

__all__ = [
    "Document",
    "parse_documents",
    "DocumentSource",
    "InMemoryDocumentSource",
    "JsonDocumentSource",
]
