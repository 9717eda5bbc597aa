# src/docdigest/documents/models.py

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Heading:
    """A heading candidate detected during ingestion."""

    text: str
    level: int
    position: int  # character offset into ParsedDocument.text
    page: int | None = None


@dataclass(frozen=True)
class Page:
    number: int
    text: str
    start_position: int
    end_position: int


@dataclass(frozen=True)
class ParsedDocument:
    """
    Output of the ingestion collaborator.

    Requirements:
    - Pages are contiguous, non-overlapping and span the full text
    - Headings are in document order
    - Offsets are document-global
    """

    text: str
    headings: list[Heading] = field(default_factory=list)
    pages: list[Page] = field(default_factory=list)
    title: str | None = None
    author: str | None = None
    page_count: int | None = None
