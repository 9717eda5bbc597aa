# src/docdigest/summarization/extras.py

"""Supplementary content generated from the merged summary.

One independent model call per extra kind. A failed extra is omitted; it
never affects the other extras or the main summary.
"""

import asyncio
import logging
import re
from typing import Any

from pydantic import TypeAdapter, ValidationError

from docdigest.exceptions import GenerationError
from docdigest.llms.base import LLMClient
from docdigest.observability import names
from docdigest.observability.base import MetricsHook, NoOpMetricsHook
from docdigest.prompts import PromptsLibrary

from .models import (
    Flashcard,
    GlossaryEntry,
    SummaryBlock,
    SummaryExtras,
    SummaryOptions,
    SummaryStyle,
    Takeaway,
)
from .prompts import PROMPT_VERSION, default_library
from .summarizer import generate_text

logger = logging.getLogger(__name__)

GLOSSARY = "glossary"
FLASHCARDS = "flashcards"
TAKEAWAYS = "takeaways"

_ADAPTERS: dict[str, TypeAdapter[Any]] = {
    GLOSSARY: TypeAdapter(list[GlossaryEntry]),
    FLASHCARDS: TypeAdapter(list[Flashcard]),
    TAKEAWAYS: TypeAdapter(list[Takeaway]),
}

_CODE_FENCE = re.compile(r"^```[\w-]*\s*\n?(.*?)\n?```$", re.DOTALL)


def extras_for_style(style: SummaryStyle) -> list[str]:
    kinds = []
    if style in (SummaryStyle.STUDY_NOTES, SummaryStyle.FULL_CONTEXT):
        kinds.append(GLOSSARY)
    if style == SummaryStyle.FLASHCARDS:
        kinds.append(FLASHCARDS)
    if style == SummaryStyle.ACTIONABLE_TAKEAWAYS:
        kinds.append(TAKEAWAYS)
    return kinds


def parse_extra(kind: str, text: str) -> list[Any]:
    """Parse a reply as the JSON array expected for ``kind``.

    Raises:
        ValidationError: If the reply is not valid JSON of the right shape.
    """
    payload = text.strip()
    fenced = _CODE_FENCE.match(payload)
    if fenced:
        payload = fenced.group(1).strip()
    return _ADAPTERS[kind].validate_json(payload)


async def generate_extras(
    client: LLMClient,
    blocks: list[SummaryBlock],
    options: SummaryOptions,
    *,
    max_tokens: int = 1024,
    temperature: float = 0.7,
    char_limit: int = 8000,
    timeout: float | None = None,
    library: PromptsLibrary | None = None,
    metrics_hook: MetricsHook = NoOpMetricsHook(),
) -> SummaryExtras:
    kinds = extras_for_style(options.style)
    if not kinds:
        return SummaryExtras()

    library = library or default_library()
    source = "\n\n".join(block.content for block in blocks)[:char_limit]

    async def _generate(kind: str) -> list[Any] | None:
        prompt = library.render(kind, PROMPT_VERSION, text=source)
        try:
            reply = await generate_text(
                client,
                prompt,
                max_tokens=max_tokens,
                temperature=temperature,
                timeout=timeout,
            )
            items = parse_extra(kind, reply)
        except (GenerationError, ValidationError) as exc:
            logger.warning("Failed to generate %s, omitting it: %s", kind, exc)
            metrics_hook.increment(names.EXTRAS_FAILURES_TOTAL, labels={"kind": kind})
            return None
        logger.debug("Generated %d %s entries", len(items), kind)
        return items

    results = await asyncio.gather(*[_generate(kind) for kind in kinds])
    generated = dict(zip(kinds, results))

    return SummaryExtras(
        glossary=generated.get(GLOSSARY),
        flashcards=generated.get(FLASHCARDS),
        takeaways=generated.get(TAKEAWAYS),
    )
