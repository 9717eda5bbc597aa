# src/docdigest/summarization/summarizer.py

import asyncio
import logging
import re
from dataclasses import dataclass, field

from docdigest.chunking.chunking import TextChunk
from docdigest.exceptions import GenerationTimeoutError
from docdigest.llms.base import LLMClient, Message, Role
from docdigest.prompts import PromptsLibrary

from .models import SummaryBlock, SummaryOptions
from .prompts import build_summarization_prompt, page_label

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "Content"

_BLANK_LINE = re.compile(r"\n\s*\n")
_BULLET = re.compile(r"^\s*(?:[-•]\s*|\*\s+)(.+)$")


@dataclass(frozen=True)
class ParsedSummary:
    summary: str
    key_points: list[str] = field(default_factory=list)
    important_details: list[str] = field(default_factory=list)


async def generate_text(
    client: LLMClient,
    prompt: str,
    *,
    max_tokens: int,
    temperature: float,
    timeout: float | None = None,
) -> str:
    """Send ``prompt`` as a single user message and return the reply text.

    Raises:
        GenerationTimeoutError: If ``timeout`` seconds elapse first.
        GenerationError: If the client fails.
    """
    call = client.generate(
        messages=[Message(role=Role.USER, content=prompt)],
        temperature=temperature,
        max_tokens=max_tokens,
    )
    if timeout is None:
        response = await call
    else:
        try:
            response = await asyncio.wait_for(call, timeout=timeout)
        except asyncio.TimeoutError as exc:
            raise GenerationTimeoutError(
                f"Generation timed out after {timeout}s"
            ) from exc
    return response.text


async def summarize_chunk(
    client: LLMClient,
    chunk: TextChunk,
    options: SummaryOptions,
    *,
    max_tokens: int = 2048,
    temperature: float = 0.7,
    timeout: float | None = None,
    library: PromptsLibrary | None = None,
) -> SummaryBlock:
    """Summarize one chunk into a SummaryBlock.

    Generation errors propagate; a reply missing sections yields empty fields.
    """
    title = chunk.section_title or DEFAULT_TITLE
    prompt = build_summarization_prompt(
        options,
        title,
        chunk.text,
        page_range=chunk.page_range,
        library=library,
    )

    logger.debug("Summarizing chunk %s (%d chars)", chunk.id, len(chunk.text))
    text = await generate_text(
        client,
        prompt,
        max_tokens=max_tokens,
        temperature=temperature,
        timeout=timeout,
    )
    parsed = parse_summary_response(text)

    citations = None
    if chunk.page_range is not None:
        citations = [page_label(chunk.page_range)]

    return SummaryBlock(
        id=chunk.id,
        node_id=chunk.node_id,
        title=title,
        level=chunk.level,
        content=parsed.summary,
        key_points=parsed.key_points,
        important_details=parsed.important_details,
        citations=citations,
    )


def parse_summary_response(text: str) -> ParsedSummary:
    """Tolerant parse of the three-part structured reply.

    Without a Summary heading the first paragraph is taken as the summary.
    Missing sections come back empty.
    """
    summary = _section(text, "Summary")
    if summary is None:
        summary = _BLANK_LINE.split(text.strip(), maxsplit=1)[0].strip()

    key_points: list[str] = []
    points_section = _section(text, "Key Points")
    if points_section:
        for line in points_section.splitlines():
            match = _BULLET.match(line)
            if match and match.group(1).strip():
                key_points.append(match.group(1).strip())

    important_details: list[str] = []
    details_section = _section(text, "Important Details")
    if details_section:
        important_details = [
            part.strip() for part in _BLANK_LINE.split(details_section) if part.strip()
        ]

    return ParsedSummary(
        summary=summary,
        key_points=key_points,
        important_details=important_details,
    )


def _section(text: str, name: str) -> str | None:
    """Body under a markdown heading called ``name``.

    The body runs to the next heading at the same or a shallower depth, so
    nested sub-headings stay part of it.
    """
    heading = re.compile(
        rf"^[ \t]*(#{{1,6}})[ \t]*\**{re.escape(name)}\**[ \t]*:?[ \t]*$",
        re.IGNORECASE | re.MULTILINE,
    )
    match = heading.search(text)
    if match is None:
        return None

    depth = len(match.group(1))
    next_heading = re.compile(rf"^[ \t]*#{{1,{depth}}}[ \t]", re.MULTILINE)
    end = next_heading.search(text, match.end())
    return text[match.end() : end.start() if end else len(text)].strip()
