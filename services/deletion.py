"""
Deletion relay: best-effort removal of one document.

Two independent upstream requests are issued: detach the file from the
Collection, then delete it from the file store. A rejected status from either
is logged and swallowed, and the second request is sent regardless of the
first's outcome. Only a transport failure propagates to the caller. The
operation ends by returning the fresh listing.
"""

from __future__ import annotations

import logging
from typing import List

from core.errors import UpstreamRejectedError
from monitoring import RECOVERED_FAILURE_COUNT
from provider_api.base import KnowledgeBaseClient
from schemas.files import DocumentReference
from services.listing import ListingAggregator

logger = logging.getLogger(__name__)


class DeletionRelay:
    def __init__(self, client: KnowledgeBaseClient, listing: ListingAggregator) -> None:
        self._client = client
        self._listing = listing

    async def delete(self, file_id: str) -> List[DocumentReference]:
        """
        Detach and delete `file_id`, then return the fresh listing.

        Raises:
            TransportFailureError: If the platform cannot be reached.
            ListUnavailableError: If the follow-up listing fails.
        """
        log_extra = {"operation": "delete", "file_id": file_id}
        logger.info("Deleting file %s", file_id, extra=log_extra)

        try:
            await self._client.detach_file(file_id)
        except UpstreamRejectedError as exc:
            RECOVERED_FAILURE_COUNT.labels(kind="detach").inc()
            logger.warning(
                "Vector store detach returned HTTP %s: %s", exc.upstream_status, exc.message, extra=log_extra
            )

        try:
            await self._client.delete_file(file_id)
        except UpstreamRejectedError as exc:
            RECOVERED_FAILURE_COUNT.labels(kind="file_delete").inc()
            logger.warning(
                "File store delete returned HTTP %s: %s", exc.upstream_status, exc.message, extra=log_extra
            )

        return await self._listing.list()
