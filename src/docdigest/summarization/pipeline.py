# src/docdigest/summarization/pipeline.py

"""Multi-stage summarization job.

Stages run strictly in order:
    outline -> chunking -> summarizing -> merging -> extras -> finalizing -> complete

Chunk summaries are produced in fixed-size concurrent batches; each batch is a
full join point. Output order is restored by the merger, not by completion
order.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from time import monotonic
from typing import TypeVar

from docdigest.chunking.chunking import TextChunk, chunk_document
from docdigest.chunking.outline import OutlineNode, build_outline
from docdigest.documents.models import ParsedDocument
from docdigest.exceptions import RateLimitExceededError, SummarizationError
from docdigest.llms.base import LLMClient
from docdigest.observability import names
from docdigest.observability.base import MetricsHook, NoOpMetricsHook
from docdigest.prompts import PromptsLibrary
from docdigest.throttling import RateLimiter

from .config import PipelineConfig
from .extras import extras_for_style, generate_extras
from .merger import merge_summaries
from .models import (
    SummaryBlock,
    SummaryExtras,
    SummaryMetadata,
    SummaryOptions,
    SummaryResult,
)
from .summarizer import summarize_chunk

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")


class Stage(str, Enum):
    OUTLINE = "outline"
    CHUNKING = "chunking"
    SUMMARIZING = "summarizing"
    MERGING = "merging"
    EXTRAS = "extras"
    FINALIZING = "finalizing"
    COMPLETE = "complete"


@dataclass(frozen=True)
class ProgressUpdate:
    stage: Stage
    progress: int  # percent, 0-100
    message: str


ProgressCallback = Callable[[ProgressUpdate], None]

# Summarizing progress is spread over this range, one step per batch
_SUMMARIZING_START = 30
_SUMMARIZING_END = 70


def structure_confidence(heading_count: int) -> float:
    """Crude confidence that heading-based sectioning is reliable."""
    if heading_count == 0:
        return 0.3
    return min(0.95, 0.5 + 0.05 * heading_count)


def count_words(text: str) -> int:
    return len(text.split())


async def run_in_batches(
    items: list[T],
    processor: Callable[[T], Awaitable[R]],
    batch_size: int,
    on_batch_done: Callable[[int, int], None] | None = None,
) -> list[R]:
    """Process ``items`` in consecutive concurrent batches, preserving order.

    The next batch starts only once every call in the current one has
    settled. On failure the rest of the failing batch is cancelled and the
    error propagates.
    """
    results: list[R] = []
    total_batches = (len(items) + batch_size - 1) // batch_size

    for batch_number, batch_start in enumerate(
        range(0, len(items), batch_size), start=1
    ):
        batch = items[batch_start : batch_start + batch_size]
        tasks = [asyncio.ensure_future(processor(item)) for item in batch]
        try:
            results.extend(await asyncio.gather(*tasks))
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

        if on_batch_done is not None:
            on_batch_done(batch_number, total_batches)

    return results


class SummarizationPipeline:
    """Turns a ParsedDocument into a SummaryResult.

    Any failure in a stage surfaces as a single SummarizationError naming
    that stage; a partially summarized document is never returned. A failed
    extra is the exception: it is omitted and the job carries on.
    """

    def __init__(
        self,
        client: LLMClient,
        config: PipelineConfig = PipelineConfig(),
        *,
        metrics_hook: MetricsHook = NoOpMetricsHook(),
        rate_limiter: RateLimiter | None = None,
        library: PromptsLibrary | None = None,
    ) -> None:
        self.client = client
        self.config = config
        self.metrics_hook = metrics_hook
        self.rate_limiter = rate_limiter
        self.library = library

    async def run(
        self,
        document: ParsedDocument,
        options: SummaryOptions,
        on_progress: ProgressCallback | None = None,
        *,
        rate_limit_key: str | None = None,
    ) -> SummaryResult:
        if self.rate_limiter is not None and rate_limit_key is not None:
            if not self.rate_limiter.hit(rate_limit_key):
                raise RateLimitExceededError(rate_limit_key)

        start = monotonic()
        notify = self._notifier(on_progress)
        logger.info(
            "Starting summarization: style=%s, language=%s, detail=%s",
            options.style.value,
            options.language.value,
            options.detail_level.value,
        )

        stage = Stage.OUTLINE
        try:
            with self._timed(stage):
                notify(stage, 10, "Building document outline...")
                outline = build_outline(document, self.metrics_hook)

            stage = Stage.CHUNKING
            with self._timed(stage):
                notify(stage, 20, "Chunking document for processing...")
                chunks = chunk_document(
                    document,
                    outline,
                    config=self.config.chunking,
                    metrics_hook=self.metrics_hook,
                )

            stage = Stage.SUMMARIZING
            with self._timed(stage):
                notify(
                    stage,
                    _SUMMARIZING_START,
                    f"Summarizing {len(chunks)} sections in parallel...",
                )
                summaries = await self._summarize(chunks, options, notify)

            stage = Stage.MERGING
            with self._timed(stage):
                notify(stage, 75, "Merging section summaries...")
                merged = merge_summaries(summaries)

            extras: SummaryExtras | None = None
            if extras_for_style(options.style):
                stage = Stage.EXTRAS
                with self._timed(stage):
                    notify(stage, 85, "Generating additional content...")
                    extras = await generate_extras(
                        self.client,
                        merged,
                        options,
                        max_tokens=self.config.extras_max_tokens,
                        temperature=self.config.extras_temperature,
                        char_limit=self.config.extras_char_limit,
                        timeout=self.config.call_timeout,
                        library=self.library,
                        metrics_hook=self.metrics_hook,
                    )

            stage = Stage.FINALIZING
            with self._timed(stage):
                notify(stage, 95, "Finalizing...")
                result = self._finalize(document, outline, merged, options, extras)
        except Exception as exc:
            self.metrics_hook.increment(
                names.PIPELINE_FAILURES_TOTAL, labels={"stage": stage.value}
            )
            logger.error("Summarization failed during %s: %s", stage.value, exc)
            message = str(exc) or type(exc).__name__
            raise SummarizationError(stage.value, message) from exc

        notify(Stage.COMPLETE, 100, "Summary generation complete!")

        elapsed_ms = 1000 * (monotonic() - start)
        self.metrics_hook.record_latency(names.PIPELINE_DURATION, elapsed_ms)
        logger.info(
            "Summarization complete: %d nodes, %d chunks, %d words in %.0fms",
            len(outline),
            len(chunks),
            result.metadata.word_count,
            elapsed_ms,
        )
        return result

    async def _summarize(
        self,
        chunks: list[TextChunk],
        options: SummaryOptions,
        notify: Callable[[Stage, int, str], None],
    ) -> list[SummaryBlock]:
        async def _summarize_one(chunk: TextChunk) -> SummaryBlock:
            return await summarize_chunk(
                self.client,
                chunk,
                options,
                max_tokens=self.config.summary_max_tokens,
                temperature=self.config.summary_temperature,
                timeout=self.config.call_timeout,
                library=self.library,
            )

        def _batch_done(batch_number: int, total_batches: int) -> None:
            self.metrics_hook.increment(names.SUMMARIZATION_BATCHES_TOTAL)
            span = _SUMMARIZING_END - _SUMMARIZING_START
            progress = _SUMMARIZING_START + span * batch_number // total_batches
            notify(
                Stage.SUMMARIZING,
                progress,
                f"Summarized batch {batch_number}/{total_batches}",
            )

        summaries = await run_in_batches(
            chunks, _summarize_one, self.config.batch_size, _batch_done
        )
        self.metrics_hook.increment(names.SUMMARIZATION_CHUNKS_TOTAL, len(summaries))
        return summaries

    def _finalize(
        self,
        document: ParsedDocument,
        outline: list[OutlineNode],
        merged: list[SummaryBlock],
        options: SummaryOptions,
        extras: SummaryExtras | None,
    ) -> SummaryResult:
        confidence = structure_confidence(len(document.headings))
        self.metrics_hook.record_gauge(names.STRUCTURE_CONFIDENCE, confidence)

        metadata = SummaryMetadata(
            title=document.title,
            author=document.author,
            language=options.language,
            word_count=count_words(" ".join(block.content for block in merged)),
            original_word_count=count_words(document.text),
            structure_confidence=confidence,
            generated_at=datetime.now(timezone.utc).isoformat(),
            style=options.style,
            detail_level=options.detail_level,
        )
        return SummaryResult(
            metadata=metadata,
            outline=outline,
            summary=merged,
            extras=extras,
        )

    @contextmanager
    def _timed(self, stage: Stage) -> Iterator[None]:
        start = monotonic()
        logger.debug("Entering stage: %s", stage.value)
        try:
            yield
        finally:
            elapsed_ms = 1000 * (monotonic() - start)
            self.metrics_hook.record_latency(
                names.SUMMARIZATION_STAGE_DURATION,
                elapsed_ms,
                labels={"stage": stage.value},
            )

    def _notifier(
        self, on_progress: ProgressCallback | None
    ) -> Callable[[Stage, int, str], None]:
        def notify(stage: Stage, progress: int, message: str) -> None:
            logger.debug("Progress %s %d%%: %s", stage.value, progress, message)
            if on_progress is None:
                return
            try:
                on_progress(
                    ProgressUpdate(stage=stage, progress=progress, message=message)
                )
            except Exception:
                # Progress is advisory; an observer failure never stops the job
                logger.exception("Progress callback failed at stage %s", stage.value)

        return notify


async def run_summarization_pipeline(
    client: LLMClient,
    document: ParsedDocument,
    options: SummaryOptions,
    on_progress: ProgressCallback | None = None,
) -> SummaryResult:
    """Run the pipeline with default configuration."""
    return await SummarizationPipeline(client).run(document, options, on_progress)
