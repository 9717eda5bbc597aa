# src/docdigest/llms/_instrumented.py

"""Request lifecycle shared by the provider adapters.

Subclasses supply the raw request and the response normalization. Timing,
transport retries, error wrapping and metrics are handled here.
"""

import logging
from abc import ABC, abstractmethod
from time import monotonic
from typing import Any

from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from docdigest.exceptions import GenerationError
from docdigest.observability import names
from docdigest.observability.base import MetricsHook, NoOpMetricsHook

from .base import LLMClient, LLMResponse, Message

logger = logging.getLogger(__name__)


class InstrumentedLLMClient(LLMClient, ABC):
    """Base adapter. Stateless. Transport-only retries.

    Subclasses set ``provider`` and ``transport_error`` and implement
    ``_request`` and ``_normalize_response``.
    """

    provider: str
    transport_error: type[Exception]

    def __init__(
        self,
        model: str,
        max_retries: int = 3,
        metrics_hook: MetricsHook = NoOpMetricsHook(),
    ) -> None:
        self._model = model
        self._max_retries = max_retries
        self.metrics_hook = metrics_hook

    @property
    def model(self) -> str:
        return self._model

    async def generate(
        self,
        *,
        messages: list[Message],
        temperature: float = 0.7,
        max_tokens: int | None = None,
    ) -> LLMResponse:
        labels = {"provider": self.provider, "model": self._model}
        start = monotonic()

        logger.debug(
            "Calling %s: model=%s, messages=%d, max_tokens=%s",
            self.provider,
            self._model,
            len(messages),
            max_tokens,
        )

        try:
            raw = await self._with_retries(
                messages=messages, temperature=temperature, max_tokens=max_tokens
            )
        except self.transport_error as exc:
            message = f"{self.provider} request failed: {exc}"
            raise self._failed(labels, message) from exc

        elapsed_ms = 1000 * (monotonic() - start)

        # Provider objects stop here
        response = self._normalize_response(raw, elapsed_ms)
        if response is None:
            raise self._failed(labels, f"No text content in {self.provider} response")

        self._record(response, labels)
        return response

    async def _with_retries(
        self,
        *,
        messages: list[Message],
        temperature: float,
        max_tokens: int | None,
    ) -> Any:
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self._max_retries),
            wait=wait_exponential(multiplier=0.5, min=0.5, max=10),
            retry=retry_if_exception_type(self.transport_error),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        ):
            with attempt:
                return await self._request(
                    messages=messages, temperature=temperature, max_tokens=max_tokens
                )

    @abstractmethod
    async def _request(
        self,
        *,
        messages: list[Message],
        temperature: float,
        max_tokens: int | None,
    ) -> Any:
        raise NotImplementedError

    @abstractmethod
    def _normalize_response(self, raw: Any, latency_ms: float) -> LLMResponse | None:
        """Map a raw provider reply to LLMResponse, or None if it has no text."""
        raise NotImplementedError

    def _failed(self, labels: dict[str, str], message: str) -> GenerationError:
        self.metrics_hook.increment(names.LLM_ERRORS_TOTAL, labels=labels)
        logger.error("%s generation failed: %s", self.provider, message)
        return GenerationError(message)

    def _record(self, response: LLMResponse, labels: dict[str, str]) -> None:
        self.metrics_hook.record_latency(
            names.LLM_GENERATION_DURATION, response.latency_ms, labels=labels
        )
        self.metrics_hook.increment(names.LLM_REQUESTS_TOTAL, labels=labels)
        if response.usage is not None:
            self.metrics_hook.increment(
                names.LLM_TOKENS_PROMPT, response.usage.prompt_tokens, labels=labels
            )
            self.metrics_hook.increment(
                names.LLM_TOKENS_COMPLETION,
                response.usage.completion_tokens,
                labels=labels,
            )
            self.metrics_hook.increment(
                names.LLM_TOKENS_TOTAL, response.usage.total_tokens, labels=labels
            )

        if response.truncated:
            logger.warning(
                "%s reply truncated at max_tokens (model=%s)",
                self.provider,
                self._model,
            )
        logger.info(
            "%s generation: finish=%s, latency=%.0fms",
            self.provider,
            response.finish_reason,
            response.latency_ms,
        )
