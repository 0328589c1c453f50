"""
Relay services of the knowledge base gateway.

`Gateway` bundles the four components wired to one knowledge base client so
the application factory builds them once and the API layer reaches them
through a single dependency.
"""

from __future__ import annotations

from dataclasses import dataclass

from config import Settings
from provider_api.base import KnowledgeBaseClient
from services.deletion import DeletionRelay
from services.listing import ListingAggregator
from services.status import StatusReporter
from services.uploads import FileRelay


@dataclass(frozen=True)
class Gateway:
    client: KnowledgeBaseClient
    listing: ListingAggregator
    uploads: FileRelay
    deletion: DeletionRelay
    status: StatusReporter


def build_gateway(settings: Settings, client: KnowledgeBaseClient) -> Gateway:
    listing = ListingAggregator(client)
    return Gateway(
        client=client,
        listing=listing,
        uploads=FileRelay(client, listing),
        deletion=DeletionRelay(client, listing),
        status=StatusReporter(settings, client),
    )


__all__ = ["Gateway", "build_gateway"]
