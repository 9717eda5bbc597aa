# src/docdigest/chunking/config.py

from dataclasses import dataclass


@dataclass(frozen=True)
class ChunkingConfig:
    """Chunk size budget.

    The token budget leaves room for prompt overhead on top of the raw
    section text; characters are estimated from tokens.
    """

    max_chunk_tokens: int = 12000
    chars_per_token: int = 4

    def __post_init__(self) -> None:
        if self.max_chunk_tokens <= 0:
            raise ValueError("max_chunk_tokens must be > 0")
        if self.chars_per_token <= 0:
            raise ValueError("chars_per_token must be > 0")

    @property
    def max_chunk_chars(self) -> int:
        return self.max_chunk_tokens * self.chars_per_token
