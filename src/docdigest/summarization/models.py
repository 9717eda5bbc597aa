# src/docdigest/summarization/models.py

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any

from pydantic import BaseModel

from docdigest.chunking.outline import OutlineNode


class SummaryStyle(str, Enum):
    ONE_PAGE = "one-page"
    FULL_CONTEXT = "full-context"
    ELI5 = "eli5"
    STUDY_NOTES = "study-notes"
    ACTIONABLE_TAKEAWAYS = "actionable-takeaways"
    FLASHCARDS = "flashcards"
    EXECUTIVE_BRIEF = "executive-brief"
    LECTURE_MODE = "lecture-mode"


class OutputLanguage(str, Enum):
    ENGLISH = "english"
    PERSIAN = "persian"


class DetailLevel(str, Enum):
    SHORT = "short"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass(frozen=True)
class SummaryOptions:
    style: SummaryStyle
    language: OutputLanguage = OutputLanguage.ENGLISH
    detail_level: DetailLevel = DetailLevel.MEDIUM
    preserve_structure: bool = True


@dataclass(frozen=True)
class SummaryBlock:
    """Summary of one chunk, or of one whole outline node after merging."""

    id: str
    node_id: str
    title: str
    level: int
    content: str
    key_points: list[str] = field(default_factory=list)
    important_details: list[str] = field(default_factory=list)
    citations: list[str] | None = None


# Extras arrive as model-generated JSON, so they are validated, not trusted.


class GlossaryEntry(BaseModel):
    term: str
    definition: str


class Flashcard(BaseModel):
    question: str
    answer: str


class Takeaway(BaseModel):
    category: str
    items: list[str]


@dataclass(frozen=True)
class SummaryExtras:
    glossary: list[GlossaryEntry] | None = None
    flashcards: list[Flashcard] | None = None
    takeaways: list[Takeaway] | None = None


@dataclass(frozen=True)
class SummaryMetadata:
    title: str | None
    author: str | None
    language: OutputLanguage
    word_count: int
    original_word_count: int
    structure_confidence: float
    generated_at: str  # ISO-8601, UTC
    style: SummaryStyle
    detail_level: DetailLevel


@dataclass(frozen=True)
class SummaryResult:
    metadata: SummaryMetadata
    outline: list[OutlineNode]
    summary: list[SummaryBlock]
    extras: SummaryExtras | None = None

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready representation; unset extras are dropped."""
        metadata = asdict(self.metadata)
        for key in ("language", "style", "detail_level"):
            metadata[key] = metadata[key].value

        result: dict[str, Any] = {
            "metadata": metadata,
            "outline": [asdict(node) for node in self.outline],
            "summary": [asdict(block) for block in self.summary],
        }

        if self.extras is not None:
            extras: dict[str, Any] = {}
            for name in ("glossary", "flashcards", "takeaways"):
                items = getattr(self.extras, name)
                if items is not None:
                    extras[name] = [item.model_dump() for item in items]
            result["extras"] = extras

        return result
