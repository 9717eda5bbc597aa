# Chunking
from .chunking import (
    ChunkingConfig,
    OutlineNode,
    TextChunk,
    build_outline,
    chunk_document,
)

# Documents
from .documents import Heading, Page, ParsedDocument

# Errors
from .exceptions import (
    DocdigestError,
    GenerationError,
    GenerationTimeoutError,
    RateLimitExceededError,
    SummarizationError,
)

# LLMs
from .llms import LLMClient, LLMConfig, LLMResponse, Message, Role, create_llm_client

# Observability
from .observability import LoggingMetricsHook, MetricsHook, NoOpMetricsHook

# Prompts
from .prompts import Prompt, PromptsLibrary

# Summarization
from .summarization import (
    DetailLevel,
    OutputLanguage,
    PipelineConfig,
    ProgressUpdate,
    SummarizationPipeline,
    SummaryBlock,
    SummaryExtras,
    SummaryOptions,
    SummaryResult,
    SummaryStyle,
    run_summarization_pipeline,
)

# Throttling
from .throttling import MovingWindowRateLimiter, RateLimiter

__all__ = [
    # Chunking
    "ChunkingConfig",
    "OutlineNode",
    "TextChunk",
    "build_outline",
    "chunk_document",
    # Documents
    "Heading",
    "Page",
    "ParsedDocument",
    # Errors
    "DocdigestError",
    "GenerationError",
    "GenerationTimeoutError",
    "RateLimitExceededError",
    "SummarizationError",
    # LLMs
    "LLMClient",
    "LLMConfig",
    "LLMResponse",
    "Message",
    "Role",
    "create_llm_client",
    # Observability
    "LoggingMetricsHook",
    "MetricsHook",
    "NoOpMetricsHook",
    # Prompts
    "Prompt",
    "PromptsLibrary",
    # Summarization
    "DetailLevel",
    "OutputLanguage",
    "PipelineConfig",
    "ProgressUpdate",
    "SummarizationPipeline",
    "SummaryBlock",
    "SummaryExtras",
    "SummaryOptions",
    "SummaryResult",
    "SummaryStyle",
    "run_summarization_pipeline",
    # Throttling
    "MovingWindowRateLimiter",
    "RateLimiter",
]
