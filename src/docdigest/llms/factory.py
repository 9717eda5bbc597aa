# src/docdigest/llms/factory.py

import importlib
import logging

from docdigest.observability.base import MetricsHook, NoOpMetricsHook

from .base import LLMClient
from .config import LLMConfig

logger = logging.getLogger(__name__)

# provider -> (module, class); imported lazily so unused SDKs never load
PROVIDERS: dict[str, tuple[str, str]] = {
    "anthropic": ("docdigest.llms.anthropic", "AnthropicLLMClient"),
    "openai": ("docdigest.llms.openai", "OpenAILLMClient"),
}


def create_llm_client(
    config: LLMConfig,
    metrics_hook: MetricsHook = NoOpMetricsHook(),
) -> LLMClient:
    """Build the text-generation client the summarizer talks to.

    Raises:
        ValueError: If the provider is unknown.

    Example:
        >>> config = LLMConfig(provider="anthropic", model="claude-haiku-4-5-20251001")
        >>> client = create_llm_client(config)
        >>> result = await run_summarization_pipeline(client, document, options)
    """
    try:
        module_name, class_name = PROVIDERS[config.provider]
    except KeyError:
        known = ", ".join(sorted(PROVIDERS))
        raise ValueError(
            f"Unknown LLM provider: {config.provider} (expected one of: {known})"
        ) from None

    client_class = getattr(importlib.import_module(module_name), class_name)
    logger.debug("Creating %s for model=%s", class_name, config.model)
    return client_class(
        api_key=config.api_key,
        model=config.model,
        timeout=config.timeout,
        max_retries=config.max_retries,
        metrics_hook=metrics_hook,
    )
