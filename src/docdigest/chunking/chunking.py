import logging
import re
from dataclasses import dataclass
from time import monotonic

from docdigest.documents.models import ParsedDocument
from docdigest.observability import names
from docdigest.observability.base import MetricsHook, NoOpMetricsHook

from .config import ChunkingConfig
from .outline import OutlineNode

logger = logging.getLogger(__name__)

CHUNK_ID_SEPARATOR = "-chunk-"

_PARAGRAPH_BREAK = re.compile(r"\n\s*\n")
_SENTENCE_BREAK = re.compile(r"(?<=[.!?])\s+")


@dataclass(frozen=True)
class TextChunk:
    id: str
    text: str
    section_title: str
    level: int
    position: int  # rank in the global chunk sequence
    page_range: tuple[int, int] | None = None

    @property
    def node_id(self) -> str:
        return self.id.split(CHUNK_ID_SEPARATOR)[0]


def part_title(title: str, part: int, total: int) -> str:
    return f"{title} (Part {part}/{total})"


def chunk_document(
    document: ParsedDocument,
    outline: list[OutlineNode],
    *,
    config: ChunkingConfig = ChunkingConfig(),
    metrics_hook: MetricsHook = NoOpMetricsHook(),
) -> list[TextChunk]:
    """Map every outline node to one or more bounded-size chunks.

    Chunk positions increase strictly across the whole output, following
    outline order and then part order within a node.
    """
    start = monotonic()
    max_chars = config.max_chunk_chars
    chunks: list[TextChunk] = []

    for node in outline:
        section_text = extract_section_text(document, node)
        page_range = (node.start_page, node.end_page)

        if len(section_text) <= max_chars:
            parts = [section_text]
        else:
            parts = split_text(section_text, max_chars) or [""]
            logger.debug(
                "Section %s (%d chars) split into %d parts",
                node.id,
                len(section_text),
                len(parts),
            )

        for i, part in enumerate(parts):
            title = node.title
            if len(parts) > 1:
                title = part_title(node.title, i + 1, len(parts))
            chunks.append(
                TextChunk(
                    id=f"{node.id}{CHUNK_ID_SEPARATOR}{i}",
                    text=part,
                    section_title=title,
                    level=node.level,
                    position=len(chunks),
                    page_range=page_range,
                )
            )

    elapsed_ms = 1000 * (monotonic() - start)
    metrics_hook.record_latency(names.CHUNKING_DURATION, elapsed_ms)
    metrics_hook.increment(names.CHUNKING_CHUNKS_CREATED, len(chunks))
    logger.info("Chunked %d outline nodes into %d chunks", len(outline), len(chunks))
    return chunks


def extract_section_text(document: ParsedDocument, node: OutlineNode) -> str:
    """Recover the raw text span of ``node``.

    Locates the node's heading by exact title and reads up to the next heading
    of the same or shallower level. Falls back to the node's page range when
    the heading cannot be found.
    """
    headings = document.headings
    heading_index = _locate_heading(document, node)

    if heading_index is None:
        pages = [
            page
            for page in document.pages
            if node.start_page <= page.number <= node.end_page
        ]
        return "\n".join(page.text for page in pages)

    heading = headings[heading_index]
    end_position = len(document.text)
    for following in headings[heading_index + 1 :]:
        if following.level <= heading.level:
            end_position = following.position
            break

    return document.text[heading.position : end_position].strip()


def _locate_heading(document: ParsedDocument, node: OutlineNode) -> int | None:
    headings = document.headings
    # Duplicate titles resolve to the node's own heading first
    own = node.index
    if own < len(headings) and headings[own].text == node.title:
        return own
    for i, heading in enumerate(headings):
        if heading.text == node.title:
            return i
    return None


def split_text(text: str, max_chars: int) -> list[str]:
    """Greedy pack ``text`` into pieces of at most ``max_chars`` characters.

    Packs whole paragraphs first, then sentences of any paragraph that is too
    large alone, then hard-splits any sentence that is still too large.
    """
    if max_chars <= 0:
        raise ValueError("max_chars must be > 0")

    pieces: list[str] = []
    current = ""

    for paragraph in _PARAGRAPH_BREAK.split(text):
        paragraph = paragraph.strip()
        if not paragraph:
            continue

        joined = len(paragraph) if not current else len(current) + 2 + len(paragraph)
        if joined <= max_chars:
            current = f"{current}\n\n{paragraph}" if current else paragraph
            continue

        if current:
            pieces.append(current)
            current = ""

        if len(paragraph) <= max_chars:
            current = paragraph
            continue

        sentence_pieces = _split_paragraph(paragraph, max_chars)
        pieces.extend(sentence_pieces[:-1])
        current = sentence_pieces[-1]

    if current:
        pieces.append(current)
    return pieces


def _split_paragraph(paragraph: str, max_chars: int) -> list[str]:
    pieces: list[str] = []
    current = ""

    for sentence in _SENTENCE_BREAK.split(paragraph):
        if not sentence:
            continue

        joined = len(sentence) if not current else len(current) + 1 + len(sentence)
        if joined <= max_chars:
            current = f"{current} {sentence}" if current else sentence
            continue

        if current:
            pieces.append(current)
            current = ""

        if len(sentence) <= max_chars:
            current = sentence
            continue

        hard = [
            sentence[i : i + max_chars] for i in range(0, len(sentence), max_chars)
        ]
        pieces.extend(hard[:-1])
        current = hard[-1]

    if current:
        pieces.append(current)
    return pieces
