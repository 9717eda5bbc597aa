# src/docdigest/llms/anthropic.py

import logging
from typing import Any

from anthropic import NOT_GIVEN, APIError, AsyncAnthropic

from docdigest.observability.base import MetricsHook, NoOpMetricsHook

from ._instrumented import InstrumentedLLMClient
from .base import FinishReason, LLMResponse, Message, Role, Usage

logger = logging.getLogger(__name__)

# Anthropic requires max_tokens on every request
DEFAULT_MAX_TOKENS = 4096

_FINISH_REASONS: dict[str, FinishReason] = {
    "end_turn": "stop",
    "stop_sequence": "stop",
    "max_tokens": "length",
}


class AnthropicLLMClient(InstrumentedLLMClient):
    """Anthropic Messages API adapter."""

    provider = "anthropic"
    transport_error = APIError

    def __init__(
        self,
        api_key: str | None = None,
        model: str = "claude-haiku-4-5-20251001",
        timeout: float = 30.0,
        max_retries: int = 3,
        metrics_hook: MetricsHook = NoOpMetricsHook(),
    ):
        super().__init__(model, max_retries, metrics_hook)
        self._client = AsyncAnthropic(api_key=api_key, timeout=timeout)
        logger.info(
            "Initialized AnthropicLLMClient with model=%s, timeout=%s",
            model,
            timeout,
        )

    async def _request(
        self,
        *,
        messages: list[Message],
        temperature: float,
        max_tokens: int | None,
    ) -> Any:
        system, conversation = self._extract_system(messages)
        return await self._client.messages.create(
            model=self._model,
            messages=[
                {"role": m.role.value, "content": m.content} for m in conversation
            ],  # type: ignore[misc]
            temperature=temperature,
            max_tokens=max_tokens or DEFAULT_MAX_TOKENS,
            system=system if system else NOT_GIVEN,
        )

    def _extract_system(
        self, messages: list[Message]
    ) -> tuple[str | None, list[Message]]:
        """Split off the system prompt, which Anthropic takes as a parameter."""
        system = [m.content for m in messages if m.role == Role.SYSTEM]
        conversation = [m for m in messages if m.role != Role.SYSTEM]
        return ("\n\n".join(system) or None), conversation

    def _normalize_response(self, raw: Any, latency_ms: float) -> LLMResponse | None:
        # Long replies may arrive as several text blocks
        texts = [block.text for block in raw.content if block.type == "text"]
        if not texts:
            return None

        return LLMResponse(
            text="".join(texts),
            finish_reason=_FINISH_REASONS.get(raw.stop_reason, "error"),
            usage=Usage(
                prompt_tokens=raw.usage.input_tokens,
                completion_tokens=raw.usage.output_tokens,
                total_tokens=raw.usage.input_tokens + raw.usage.output_tokens,
            ),
            latency_ms=latency_ms,
        )
