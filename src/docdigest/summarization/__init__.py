from .config import PipelineConfig
from .extras import extras_for_style, generate_extras
from .merger import merge_summaries
from .models import (
    DetailLevel,
    Flashcard,
    GlossaryEntry,
    OutputLanguage,
    SummaryBlock,
    SummaryExtras,
    SummaryMetadata,
    SummaryOptions,
    SummaryResult,
    SummaryStyle,
    Takeaway,
)
from .pipeline import (
    ProgressCallback,
    ProgressUpdate,
    Stage,
    SummarizationPipeline,
    run_summarization_pipeline,
)
from .prompts import build_summarization_prompt
from .summarizer import parse_summary_response, summarize_chunk

__all__ = [
    # Pipeline
    "PipelineConfig",
    "ProgressCallback",
    "ProgressUpdate",
    "Stage",
    "SummarizationPipeline",
    "run_summarization_pipeline",
    # Stages
    "build_summarization_prompt",
    "extras_for_style",
    "generate_extras",
    "merge_summaries",
    "parse_summary_response",
    "summarize_chunk",
    # Models
    "DetailLevel",
    "Flashcard",
    "GlossaryEntry",
    "OutputLanguage",
    "SummaryBlock",
    "SummaryExtras",
    "SummaryMetadata",
    "SummaryOptions",
    "SummaryResult",
    "SummaryStyle",
    "Takeaway",
]
