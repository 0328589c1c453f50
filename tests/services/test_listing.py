"""
Tests for `services/listing.py`.

Focus:
- Metadata lookups are issued concurrently (all in flight before any completes)
- Failed lookups become explicit `MetadataLookup` errors mapped to the sentinel pair
- A failed id fetch raises `ListUnavailableError`, keeping the upstream status
- Timestamp rendering
"""

import asyncio

import pytest

from core.errors import ListUnavailableError, TransportFailureError, UpstreamRejectedError
from provider_api.base import FileMetadata
from provider_api.mock_client import InMemoryKnowledgeBaseClient
from services.listing import ListingAggregator, MetadataLookup, format_timestamp, to_reference


class BarrierClient(InMemoryKnowledgeBaseClient):
    """Lookups only complete once every expected lookup has started."""

    def __init__(self, expected: int) -> None:
        super().__init__()
        self.expected = expected
        self.started = 0
        self.all_started = asyncio.Event()

    async def retrieve_file(self, file_id):
        self.started += 1
        if self.started == self.expected:
            self.all_started.set()
        await asyncio.wait_for(self.all_started.wait(), timeout=1.0)
        return await super().retrieve_file(file_id)


def test_lookups_run_concurrently():
    async def scenario():
        kb = BarrierClient(expected=3)
        for name in ("a.pdf", "b.pdf", "c.pdf"):
            kb.seed(name)
        return await ListingAggregator(kb).list()

    files = asyncio.run(scenario())
    assert [f.name for f in files] == ["a.pdf", "b.pdf", "c.pdf"]


def test_transport_failure_on_one_lookup_is_recovered():
    kb = InMemoryKnowledgeBaseClient()
    good = kb.seed("good.pdf")
    kb.seed("bad.pdf")

    original = kb.retrieve_file

    async def flaky(file_id):
        if file_id != good:
            raise TransportFailureError()
        return await original(file_id)

    kb.retrieve_file = flaky
    files = asyncio.run(ListingAggregator(kb).list())
    assert len(files) == 2
    assert files[0].name == "good.pdf"
    assert (files[1].name, files[1].created_at) == ("Unknown", "Unknown")


def test_list_unavailable_keeps_upstream_status():
    kb = InMemoryKnowledgeBaseClient()
    kb.fail_on["list_file_ids"] = UpstreamRejectedError("Vector store not found", upstream_status=404)
    with pytest.raises(ListUnavailableError) as excinfo:
        asyncio.run(ListingAggregator(kb).list())
    assert excinfo.value.upstream_status == 404
    assert excinfo.value.status_code == 500
    assert kb.calls["retrieve_file"] == 0


def test_list_unavailable_on_transport_failure():
    kb = InMemoryKnowledgeBaseClient()
    kb.fail_on["list_file_ids"] = TransportFailureError()
    with pytest.raises(ListUnavailableError):
        asyncio.run(ListingAggregator(kb).list())


def test_to_reference_maps_error_to_sentinels():
    lookup = MetadataLookup(file_id="file-1", error=UpstreamRejectedError("gone", upstream_status=404))
    assert not lookup.ok
    ref = to_reference(lookup)
    assert ref.model_dump() == {"id": "file-1", "name": "Unknown", "created_at": "Unknown"}


def test_to_reference_formats_metadata():
    lookup = MetadataLookup(file_id="file-1", metadata=FileMetadata("file-1", "menu.pdf", 0))
    ref = to_reference(lookup)
    assert ref.name == "menu.pdf"
    assert ref.created_at == "1970-01-01 00:00:00 UTC"


def test_format_timestamp():
    assert format_timestamp(1_700_000_000) == "2023-11-14 22:13:20 UTC"
    assert format_timestamp(None) == "Unknown"
