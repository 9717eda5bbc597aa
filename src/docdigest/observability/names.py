# src/docdigest/observability/names.py

"""Metric names emitted by docdigest.

Durations are milliseconds. Stage durations and failures carry a ``stage``
label; LLM metrics carry ``provider`` and ``model``; extras failures carry
``kind``.
"""

# ============================================================================
# LLM Metrics
# ============================================================================

# Duration
LLM_GENERATION_DURATION = "llm_generation_duration"

# Counters
LLM_REQUESTS_TOTAL = "llm_requests_total"
LLM_ERRORS_TOTAL = "llm_errors_total"

# Counters (token usage - monotonic over time for cost/rate tracking)
LLM_TOKENS_PROMPT = "llm_tokens_prompt"
LLM_TOKENS_COMPLETION = "llm_tokens_completion"
LLM_TOKENS_TOTAL = "llm_tokens_total"


# ============================================================================
# Chunking Metrics
# ============================================================================

# Duration
CHUNKING_DURATION = "chunking_duration"

# Counters (chunks accumulate over time)
CHUNKING_CHUNKS_CREATED = "chunking_chunks_created"
OUTLINE_NODES_CREATED = "outline_nodes_created"


# ============================================================================
# Summarization Metrics
# ============================================================================

# Duration (labelled by stage)
SUMMARIZATION_STAGE_DURATION = "summarization_stage_duration"
PIPELINE_DURATION = "pipeline_duration"

# Counters
SUMMARIZATION_CHUNKS_TOTAL = "summarization_chunks_total"
SUMMARIZATION_BATCHES_TOTAL = "summarization_batches_total"
EXTRAS_FAILURES_TOTAL = "extras_failures_total"
PIPELINE_FAILURES_TOTAL = "pipeline_failures_total"

# Gauges
STRUCTURE_CONFIDENCE = "structure_confidence"
