# src/docdigest/llms/base.py

from dataclasses import dataclass
from enum import Enum
from typing import Literal, Protocol

from docdigest.observability.base import MetricsHook

FinishReason = Literal["stop", "length", "error"]


class Role(str, Enum):
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


@dataclass(frozen=True)
class Message:
    """One turn of a prompt. Provider-agnostic."""

    role: Role
    content: str


@dataclass(frozen=True)
class Usage:
    prompt_tokens: int
    completion_tokens: int
    total_tokens: int


@dataclass(frozen=True)
class LLMResponse:
    """Generated text, normalized across providers.

    ``usage`` is None when the provider did not report token counts.
    """

    text: str
    finish_reason: FinishReason
    usage: Usage | None
    latency_ms: float

    @property
    def truncated(self) -> bool:
        """True when generation stopped at the token limit."""
        return self.finish_reason == "length"


class LLMClient(Protocol):
    """The one capability the summarizer needs: messages in, text out.

    Implementations are stateless and retry transport errors only. Any other
    failure is raised as GenerationError rather than returned as text.
    """

    metrics_hook: MetricsHook

    async def generate(
        self,
        *,
        messages: list[Message],
        temperature: float = 0.7,
        max_tokens: int | None = None,
    ) -> LLMResponse:
        """Generate a reply to ``messages``.

        Args:
            messages: The full prompt; clients keep no conversation state.
            temperature: Sampling temperature.
            max_tokens: Reply length cap, or the provider default.

        Raises:
            GenerationError: After retry exhaustion, or when the provider
                returned no text content.
        """
        ...
