import logging

import pytest

from docdigest.observability import LoggingMetricsHook, NoOpMetricsHook, names

LOGGER = "docdigest.observability.base"


class TestLoggingMetricsHook:
    def test_logs_each_metric_kind(self, caplog: pytest.LogCaptureFixture) -> None:
        hook = LoggingMetricsHook()

        with caplog.at_level(logging.DEBUG, logger=LOGGER):
            hook.record_latency(names.PIPELINE_DURATION, 12.5)
            hook.increment(names.EXTRAS_FAILURES_TOTAL, labels={"kind": "glossary"})
            hook.record_gauge(names.STRUCTURE_CONFIDENCE, 0.65)

        messages = [record.getMessage() for record in caplog.records]
        assert messages == [
            "latency pipeline_duration=12.5ms labels=None",
            "counter extras_failures_total+=1 labels={'kind': 'glossary'}",
            "gauge structure_confidence=0.65 labels=None",
        ]

    def test_respects_configured_level(self, caplog: pytest.LogCaptureFixture) -> None:
        hook = LoggingMetricsHook(level=logging.INFO)

        with caplog.at_level(logging.INFO, logger=LOGGER):
            hook.increment(names.LLM_REQUESTS_TOTAL)

        assert [r.levelno for r in caplog.records] == [logging.INFO]

    def test_silent_below_logger_level(self, caplog: pytest.LogCaptureFixture) -> None:
        hook = LoggingMetricsHook()

        with caplog.at_level(logging.INFO, logger=LOGGER):
            hook.increment(names.LLM_REQUESTS_TOTAL)

        assert caplog.records == []


def test_noop_hook_accepts_all_calls() -> None:
    hook = NoOpMetricsHook()

    hook.record_latency(names.CHUNKING_DURATION, 1.0)
    hook.increment(names.CHUNKING_CHUNKS_CREATED, 3)
    hook.record_gauge(names.STRUCTURE_CONFIDENCE, 0.3, labels={"a": "b"})
