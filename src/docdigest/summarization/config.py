# src/docdigest/summarization/config.py

from dataclasses import dataclass, field

from docdigest.chunking.config import ChunkingConfig


@dataclass(frozen=True)
class PipelineConfig:
    """Configuration for the summarization pipeline.

    Immutable. Explicit. No magic defaults from environment.
    """

    batch_size: int = 3
    call_timeout: float | None = None  # seconds per model call, None = no limit
    summary_max_tokens: int = 2048
    summary_temperature: float = 0.7
    extras_max_tokens: int = 1024
    extras_temperature: float = 0.7
    extras_char_limit: int = 8000
    chunking: ChunkingConfig = field(default_factory=ChunkingConfig)

    def __post_init__(self) -> None:
        if self.batch_size <= 0:
            raise ValueError("batch_size must be > 0")
        if self.call_timeout is not None and self.call_timeout <= 0:
            raise ValueError("call_timeout must be > 0")
        if self.extras_char_limit <= 0:
            raise ValueError("extras_char_limit must be > 0")
