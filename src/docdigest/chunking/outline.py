# src/docdigest/chunking/outline.py

"""Outline construction from detected headings.

Pure and deterministic: same document in, same outline out.
"""

import logging
from dataclasses import dataclass

from docdigest.documents.models import ParsedDocument
from docdigest.observability import names
from docdigest.observability.base import MetricsHook, NoOpMetricsHook

logger = logging.getLogger(__name__)

FALLBACK_TITLE = "Document Content"


@dataclass(frozen=True)
class OutlineNode:
    id: str
    title: str
    level: int
    start_page: int
    end_page: int

    @property
    def index(self) -> int:
        return int(self.id.rsplit("-", 1)[1])


def node_id(index: int) -> str:
    return f"section-{index}"


def find_page_for_position(document: ParsedDocument, position: int) -> int:
    """Return the number of the page whose [start, end) span holds ``position``.

    Defaults to page 1 when no page matches.
    """
    for page in document.pages:
        if page.start_position <= position < page.end_position:
            return page.number
    return 1


def build_outline(
    document: ParsedDocument,
    metrics_hook: MetricsHook = NoOpMetricsHook(),
) -> list[OutlineNode]:
    last_page = document.page_count or 1

    if not document.headings:
        logger.info("No headings detected, using a single outline node")
        metrics_hook.increment(names.OUTLINE_NODES_CREATED)
        return [
            OutlineNode(
                id=node_id(0),
                title=document.title or FALLBACK_TITLE,
                level=1,
                start_page=1,
                end_page=last_page,
            )
        ]

    def start_page_of(i: int) -> int:
        heading = document.headings[i]
        return heading.page or find_page_for_position(document, heading.position)

    outline: list[OutlineNode] = []
    for i, heading in enumerate(document.headings):
        start_page = start_page_of(i)
        if i + 1 < len(document.headings):
            end_page = start_page_of(i + 1) - 1
        else:
            end_page = last_page

        outline.append(
            OutlineNode(
                id=node_id(i),
                title=heading.text,
                level=max(1, heading.level),
                start_page=start_page,
                end_page=max(start_page, end_page),
            )
        )

    logger.info("Built outline with %d nodes", len(outline))
    metrics_hook.increment(names.OUTLINE_NODES_CREATED, len(outline))
    return outline
