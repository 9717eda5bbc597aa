# src/docdigest/llms/__init__.py

"""Text generation behind a single protocol.

The summarizer depends only on ``LLMClient.generate``. Provider adapters
retry transport errors, raise GenerationError for everything else, and never
let SDK objects escape.

Example:
    >>> from docdigest.llms import create_llm_client, LLMConfig, Message, Role
    >>>
    >>> config = LLMConfig(provider="anthropic", model="claude-haiku-4-5-20251001")
    >>> client = create_llm_client(config)
    >>> response = await client.generate(
    ...     messages=[Message(role=Role.USER, content="Summarize: ...")]
    ... )
    >>> print(response.text)
"""

from .base import LLMClient, LLMResponse, Message, Role, Usage
from .config import LLMConfig
from .factory import create_llm_client

__all__ = [
    # Factory
    "create_llm_client",
    # Protocol
    "LLMClient",
    # Config
    "LLMConfig",
    # Types
    "Message",
    "Role",
    "LLMResponse",
    "Usage",
]
