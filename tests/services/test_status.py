"""
Tests for `services/status.py` probe reporting and caching.
"""

import asyncio

from config import load_settings
from core.errors import TransportFailureError
from provider_api.mock_client import InMemoryKnowledgeBaseClient
from services.status import StatusReporter


class FakeClock:
    def __init__(self) -> None:
        self.now = 100.0

    def __call__(self) -> float:
        return self.now


def test_probe_cached_within_interval(env):
    settings = load_settings(dict(env, STATUS_PROBE_CACHE_S="5"))
    kb = InMemoryKnowledgeBaseClient()
    clock = FakeClock()
    reporter = StatusReporter(settings, kb, clock=clock)

    assert asyncio.run(reporter.report()).openaiConnection is True
    kb.fail_on["probe"] = TransportFailureError()
    clock.now += 4
    assert asyncio.run(reporter.report()).openaiConnection is True
    assert kb.calls["probe"] == 1

    clock.now += 2
    assert asyncio.run(reporter.report()).openaiConnection is False
    assert kb.calls["probe"] == 2


def test_probe_not_cached_by_default(settings):
    kb = InMemoryKnowledgeBaseClient()
    reporter = StatusReporter(settings, kb)
    asyncio.run(reporter.report())
    asyncio.run(reporter.report())
    assert kb.calls["probe"] == 2


def test_probe_raising_taxonomy_error_reports_false(settings):
    class RaisingClient(InMemoryKnowledgeBaseClient):
        async def probe(self):
            raise TransportFailureError()

    report = asyncio.run(StatusReporter(settings, RaisingClient()).report())
    assert report.openaiConnection is False
    assert report.OPENAI_VECTOR_STORE_ID is True
