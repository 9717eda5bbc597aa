# src/docdigest/llms/openai.py

import logging
from typing import Any

from openai import NOT_GIVEN, AsyncOpenAI, OpenAIError

from docdigest.observability.base import MetricsHook, NoOpMetricsHook

from ._instrumented import InstrumentedLLMClient
from .base import FinishReason, LLMResponse, Message, Usage

logger = logging.getLogger(__name__)

_FINISH_REASONS: dict[str, FinishReason] = {
    "stop": "stop",
    "length": "length",
}


class OpenAILLMClient(InstrumentedLLMClient):
    """OpenAI chat completions adapter."""

    provider = "openai"
    transport_error = OpenAIError

    def __init__(
        self,
        api_key: str | None = None,
        model: str = "gpt-4o-mini",
        timeout: float = 30.0,
        max_retries: int = 3,
        metrics_hook: MetricsHook = NoOpMetricsHook(),
    ):
        super().__init__(model, max_retries, metrics_hook)
        self._client = AsyncOpenAI(api_key=api_key, timeout=timeout)
        logger.info(
            "Initialized OpenAILLMClient with model=%s, timeout=%s",
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
        return await self._client.chat.completions.create(
            model=self._model,
            messages=self._convert_messages(messages),  # type: ignore[arg-type]
            temperature=temperature,
            max_tokens=max_tokens if max_tokens else NOT_GIVEN,
        )

    def _convert_messages(self, messages: list[Message]) -> list[dict[str, str]]:
        return [{"role": m.role.value, "content": m.content} for m in messages]

    def _normalize_response(self, raw: Any, latency_ms: float) -> LLMResponse | None:
        if not raw.choices or raw.choices[0].message.content is None:
            return None
        choice = raw.choices[0]

        usage = None
        if raw.usage is not None:
            usage = Usage(
                prompt_tokens=raw.usage.prompt_tokens,
                completion_tokens=raw.usage.completion_tokens,
                total_tokens=raw.usage.total_tokens,
            )

        return LLMResponse(
            text=choice.message.content,
            finish_reason=_FINISH_REASONS.get(choice.finish_reason, "error"),
            usage=usage,
            latency_ms=latency_ms,
        )
