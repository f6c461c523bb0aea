"""
Document sources.

The document store is an external collaborator; only its read interface is
modelled here.
"""

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterable, List, Union

from .domain import Document, parse_documents

logger = logging.getLogger(__name__)


class DocumentSource(ABC):
    """
    This class serves as an interface for accessing the documents of a corpus.
    """

    @abstractmethod
    def list_documents(self) -> List[Document]:
        """
        Retrieve all documents of the corpus.

        :return: List of Document objects, malformed records already skipped
        """
        pass


class InMemoryDocumentSource(DocumentSource):
    """Document source over records that are already loaded."""

    def __init__(self, documents: Iterable[Union[Document, dict]] = ()):
        self._documents = parse_documents(documents)

    def add_document(self, document: Union[Document, dict]) -> None:
        self._documents.extend(parse_documents([document]))

    def list_documents(self) -> List[Document]:
        return list(self._documents)


class JsonDocumentSource(DocumentSource):
    """
    Document source reading a JSON file.

    The file holds either a list of document records or an object with a
    "documents" list.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def list_documents(self) -> List[Document]:
        with open(self.path, "r", encoding="utf-8") as f:
            data = json.load(f)

        if isinstance(data, dict):
            data = data.get("documents", [])
        if not isinstance(data, list):
            raise ValueError(f"Unsupported corpus file layout in {self.path}: expected a list of documents")

        documents = parse_documents(data)
        logger.info(f"Loaded {len(documents)} documents from {self.path}")
        return documents
