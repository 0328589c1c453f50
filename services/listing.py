"""
Listing aggregator: the current document set of the Collection with metadata.

A listing is recomputed on every call; nothing is cached. It takes one request
to fetch the ids attached to the Collection, then one metadata lookup per id.
The lookups run concurrently and are joined before returning. Each lookup is
captured as an explicit `MetadataLookup` result (metadata or error) and only
mapped to the "Unknown" sentinel pair when the final list is assembled, so a
failed lookup never aborts the listing. Only a failure of the initial id
fetch fails the whole operation, as `ListUnavailableError`.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import List, Optional

from core.errors import GatewayError, ListUnavailableError, TransportFailureError, UpstreamRejectedError
from monitoring import RECOVERED_FAILURE_COUNT
from provider_api.base import FileMetadata, KnowledgeBaseClient
from schemas.files import UNKNOWN, DocumentReference

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S UTC"


@dataclass(frozen=True)
class MetadataLookup:
    """
    Outcome of one per-document metadata lookup: exactly one of `metadata` or `error` is set.
    """

    file_id: str
    metadata: Optional[FileMetadata] = None
    error: Optional[GatewayError] = None

    @property
    def ok(self) -> bool:
        return self.metadata is not None


def format_timestamp(epoch_seconds: Optional[int]) -> str:
    """
    Render platform epoch seconds as a human-readable UTC timestamp.
    """
    if epoch_seconds is None:
        return UNKNOWN
    return datetime.fromtimestamp(epoch_seconds, tz=timezone.utc).strftime(TIMESTAMP_FORMAT)


def to_reference(lookup: MetadataLookup) -> DocumentReference:
    if not lookup.ok:
        return DocumentReference(id=lookup.file_id, name=UNKNOWN, created_at=UNKNOWN)
    return DocumentReference(
        id=lookup.metadata.id,
        name=lookup.metadata.filename or UNKNOWN,
        created_at=format_timestamp(lookup.metadata.created_at),
    )


class ListingAggregator:
    """
    Builds the caller-facing document list for the fixed Collection.

    Args:
        client (KnowledgeBaseClient): Client bound to the Collection.
    """

    def __init__(self, client: KnowledgeBaseClient) -> None:
        self._client = client

    async def _lookup(self, file_id: str) -> MetadataLookup:
        try:
            metadata = await self._client.retrieve_file(file_id)
        except (UpstreamRejectedError, TransportFailureError) as exc:
            return MetadataLookup(file_id=file_id, error=exc)
        return MetadataLookup(file_id=file_id, metadata=metadata)

    async def list(self) -> List[DocumentReference]:
        """
        Return every document attached to the Collection, in upstream order.

        Raises:
            ListUnavailableError: If the initial fetch of the id set fails.
        """
        logger.info("Fetching file list", extra={"operation": "list"})
        try:
            file_ids = await self._client.list_file_ids()
        except (UpstreamRejectedError, TransportFailureError) as exc:
            logger.error("File list unavailable: %s", exc.message, extra={"operation": "list"})
            upstream_status = getattr(exc, "upstream_status", None)
            raise ListUnavailableError(upstream_status=upstream_status) from exc

        lookups = await asyncio.gather(*(self._lookup(file_id) for file_id in file_ids))

        for lookup in lookups:
            if not lookup.ok:
                RECOVERED_FAILURE_COUNT.labels(kind="metadata").inc()
                logger.warning(
                    "Could not retrieve details for file %s: %s",
                    lookup.file_id,
                    lookup.error.message,
                    extra={"operation": "list", "file_id": lookup.file_id},
                )

        return [to_reference(lookup) for lookup in lookups]
