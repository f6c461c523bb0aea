"""
Domain models for corpus documents.

A document is the unit of evidence for every extracted concept and relationship.
Its title doubles as the document identifier and is what concept contexts refer to.
"""

import logging
from typing import Any, Iterable, List, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

logger = logging.getLogger(__name__)


class Document(BaseModel):
    """A short text document from the corpus."""

    model_config = ConfigDict(extra="ignore")

    title: str = Field(..., min_length=1, description="Document title, also used as the document identifier")
    text: str = Field(..., description="Body text of the document")
    tags: List[str] = Field(default_factory=list, description="Free-form tags attached to the document")

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("title must not be blank")
        return value

    @field_validator("tags", mode="before")
    @classmethod
    def drop_non_string_tags(cls, value: Any) -> List[str]:
        if value is None:
            return []
        if not isinstance(value, (list, tuple)):
            raise ValueError("tags must be a list")
        return [tag for tag in value if isinstance(tag, str) and tag.strip()]

    @property
    def full_text(self) -> str:
        """Title and body as one text, the way extraction sees the document."""
        return f"{self.title}. {self.text}"

    @property
    def word_count(self) -> int:
        return len(self.text.split())


def parse_documents(items: Iterable[Union[Document, dict]]) -> List[Document]:
    """
    Turn raw document records into Document models.

    Records that are missing a text body or a title, or whose fields have the
    wrong type, are skipped with a warning so that one bad record does not
    abort a whole corpus.
    """
    documents = []
    for position, item in enumerate(items):
        if isinstance(item, Document):
            documents.append(item)
            continue
        if not isinstance(item, dict):
            logger.warning(f"Skipping corpus entry #{position}: expected a mapping, got {type(item).__name__}")
            continue
        try:
            documents.append(Document.model_validate(item))
        except ValidationError as e:
            title = item.get("title", f"#{position}")
            logger.warning(f"Skipping malformed document {title!r}: {e.error_count()} validation error(s)")
    return documents
