"""
OpenAI implementation of the knowledge base client.

All calls go through a single `AsyncOpenAI` instance built with an explicit
timeout and retry budget taken from `Settings`, so no request against the
platform can hang indefinitely. The Collection is an OpenAI vector store and
the Assistant Resource is an OpenAI assistant with the `file_search` tool.

SDK exceptions are translated at this boundary:
- `openai.APIStatusError` (4xx/5xx) -> `UpstreamRejectedError`, keeping the
  upstream status code and message.
- `openai.APIConnectionError` (includes `APITimeoutError`) -> `TransportFailureError`.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator, List, Optional

import openai
from openai import AsyncOpenAI

from config import Settings
from core.errors import TransportFailureError, UpstreamRejectedError
from monitoring import track_upstream
from provider_api.base import FileMetadata, KnowledgeBaseClient

logger = logging.getLogger(__name__)

LIST_PAGE_SIZE = 100
FILE_PURPOSE = "assistants"


@contextmanager
def _upstream_errors(operation: str) -> Iterator[None]:
    """
    Translate OpenAI SDK failures raised inside the block into the gateway taxonomy.
    """
    try:
        yield
    except openai.APIStatusError as exc:
        logger.warning(
            "Upstream %s rejected (HTTP %s): %s",
            operation,
            exc.status_code,
            exc.message,
            extra={"operation": operation},
        )
        raise UpstreamRejectedError(exc.message, upstream_status=exc.status_code) from exc
    except openai.APIConnectionError as exc:
        logger.error("Upstream %s unreachable: %s", operation, exc, extra={"operation": operation})
        raise TransportFailureError() from exc


class OpenAIKnowledgeBaseClient(KnowledgeBaseClient):
    """
    Knowledge base client backed by the OpenAI Files, Vector Store Files and Assistants APIs.

    Args:
        settings (Settings): Provides the API key, vector store id, assistant id,
            timeout and retry budget.
        client (Optional[AsyncOpenAI]): Pre-built SDK client; built from
            `settings` when omitted. Tests inject a mock here.
    """

    def __init__(self, settings: Settings, client: Optional[AsyncOpenAI] = None) -> None:
        self._vector_store_id = settings.openai_vector_store_id
        self._assistant_id = settings.openai_assistant_id
        self._client = client or AsyncOpenAI(
            api_key=settings.openai_api_key,
            timeout=settings.openai_timeout_s,
            max_retries=settings.openai_max_retries,
        )

    @track_upstream("vector_stores.files.list")
    async def list_file_ids(self) -> List[str]:
        # The async paginator follows the cursor across pages in upstream order.
        with _upstream_errors("vector_stores.files.list"):
            file_ids = []
            async for entry in self._client.vector_stores.files.list(
                vector_store_id=self._vector_store_id, limit=LIST_PAGE_SIZE
            ):
                file_ids.append(entry.id)
        logger.info("%d files found in vector store", len(file_ids))
        return file_ids

    @track_upstream("files.retrieve")
    async def retrieve_file(self, file_id: str) -> FileMetadata:
        with _upstream_errors("files.retrieve"):
            stored = await self._client.files.retrieve(file_id)
        return FileMetadata(id=stored.id, filename=stored.filename, created_at=stored.created_at)

    @track_upstream("files.create")
    async def upload_file(self, filename: str, data: bytes) -> str:
        with _upstream_errors("files.create"):
            stored = await self._client.files.create(file=(filename, data), purpose=FILE_PURPOSE)
        return stored.id

    @track_upstream("vector_stores.files.create")
    async def attach_file(self, file_id: str) -> None:
        with _upstream_errors("vector_stores.files.create"):
            await self._client.vector_stores.files.create(
                vector_store_id=self._vector_store_id, file_id=file_id
            )

    @track_upstream("assistants.update")
    async def link_assistant(self) -> None:
        with _upstream_errors("assistants.update"):
            await self._client.beta.assistants.update(
                self._assistant_id,
                tool_resources={"file_search": {"vector_store_ids": [self._vector_store_id]}},
            )

    @track_upstream("vector_stores.files.delete")
    async def detach_file(self, file_id: str) -> None:
        with _upstream_errors("vector_stores.files.delete"):
            await self._client.vector_stores.files.delete(file_id, vector_store_id=self._vector_store_id)

    @track_upstream("files.delete")
    async def delete_file(self, file_id: str) -> None:
        with _upstream_errors("files.delete"):
            await self._client.files.delete(file_id)

    async def probe(self) -> bool:
        try:
            with _upstream_errors("probe"):
                await self._client.vector_stores.files.list(vector_store_id=self._vector_store_id, limit=1)
        except (UpstreamRejectedError, TransportFailureError):
            return False
        return True

    async def close(self) -> None:
        await self._client.close()
