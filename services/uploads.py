"""
File relay: normalize an inbound document and forward it to the Collection.

Uploads arrive in two shapes, a multipart form field named `file` or a raw
`application/octet-stream` body. `normalize_upload` collapses both into one
`UploadPayload` before any relay logic runs, and rejects requests without a
usable payload with `MissingInputError` so that no upstream call is made.

`FileRelay.upload` then performs three steps:
1. Store the bytes and attach the file to the Collection. Failure here is
   fatal to the request.
2. Re-link the Collection to the Assistant. Failure here is logged and counted
   but does not fail the request; the document stays ingested.
3. Return the fresh listing.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import List, Optional

from starlette.datastructures import UploadFile
from starlette.exceptions import HTTPException
from starlette.formparsers import MultiPartException
from starlette.requests import Request

from core.errors import MissingInputError, TransportFailureError, UpstreamRejectedError
from monitoring import RECOVERED_FAILURE_COUNT
from provider_api.base import KnowledgeBaseClient
from schemas.files import DocumentReference
from services.listing import ListingAggregator

logger = logging.getLogger(__name__)

FORM_FIELD = "file"
OCTET_STREAM = "application/octet-stream"
MULTIPART = "multipart/form-data"
FILENAME_HEADER = "x-filename"


@dataclass(frozen=True)
class UploadPayload:
    filename: str
    data: bytes


def default_filename() -> str:
    """Generated name for raw-body uploads that carry none."""
    return f"upload-{int(time.time() * 1000)}.bin"


def _media_type(content_type: Optional[str]) -> str:
    return (content_type or "").split(";", 1)[0].strip().lower()


async def normalize_upload(request: Request) -> UploadPayload:
    """
    Turn a multipart or octet-stream request into a single `UploadPayload`.

    Args:
        request (Request): The inbound upload request.

    Returns:
        UploadPayload: Non-empty bytes plus the filename to store them under.

    Raises:
        MissingInputError: If the content type is neither form nor octet-stream,
            the multipart body cannot be parsed, the `file` field is absent,
            or the payload is empty.
    """
    media_type = _media_type(request.headers.get("content-type"))

    if media_type == MULTIPART:
        try:
            form = await request.form()
        except (HTTPException, MultiPartException) as exc:
            raise MissingInputError() from exc
        part = form.get(FORM_FIELD)
        if not isinstance(part, UploadFile):
            raise MissingInputError()
        data = await part.read()
        filename = part.filename or default_filename()
    elif media_type == OCTET_STREAM:
        data = await request.body()
        filename = (
            request.query_params.get("filename")
            or request.headers.get(FILENAME_HEADER)
            or default_filename()
        )
    else:
        raise MissingInputError()

    if not data:
        raise MissingInputError()
    return UploadPayload(filename=filename, data=data)


class FileRelay:
    """
    Relays a normalized upload to the Collection and links it to the Assistant.

    Args:
        client (KnowledgeBaseClient): Client bound to the Collection and Assistant.
        listing (ListingAggregator): Used to return the post-upload document list.
    """

    def __init__(self, client: KnowledgeBaseClient, listing: ListingAggregator) -> None:
        self._client = client
        self._listing = listing

    async def upload(self, payload: UploadPayload) -> List[DocumentReference]:
        """
        Ingest one document and return the fresh listing.

        Raises:
            UpstreamRejectedError: If storing or attaching the file is rejected.
            TransportFailureError: If the platform cannot be reached for those steps.
            ListUnavailableError: If the follow-up listing fails.
        """
        log_extra = {"operation": "upload", "extra_fields": {"filename": payload.filename}}
        logger.info("Upload started: %s (%d bytes)", payload.filename, len(payload.data), extra=log_extra)

        file_id = await self._client.upload_file(payload.filename, payload.data)
        await self._client.attach_file(file_id)
        logger.info("File %s stored and attached to vector store", file_id, extra=log_extra)

        try:
            await self._client.link_assistant()
        except (UpstreamRejectedError, TransportFailureError) as exc:
            RECOVERED_FAILURE_COUNT.labels(kind="link").inc()
            logger.error("Could not link vector store to assistant: %s", exc.message, extra=log_extra)
        else:
            logger.info("Vector store linked to assistant", extra=log_extra)

        return await self._listing.list()
