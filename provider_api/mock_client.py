"""
Deterministic in-memory knowledge base client for local runs, demos, and tests.

This module provides a reference implementation of `KnowledgeBaseClient` so the
gateway can run end-to-end without OpenAI credentials or network access
(select it with `KB_PROVIDER=mock`). Files are kept in insertion order, ids
and timestamps are deterministic, and every method counts its calls, which
lets tests assert that an operation did or did not reach the platform.

Failure injection:
- `fail_on[method_name] = error` makes that method raise `error` on every call.
- `failing_metadata_ids` makes `retrieve_file` raise `UpstreamRejectedError`
  for the listed ids only.
"""

from __future__ import annotations

from collections import Counter
from typing import Dict, List, Optional, Set

from core.errors import GatewayError, UpstreamRejectedError
from provider_api.base import FileMetadata, KnowledgeBaseClient

BASE_TIMESTAMP = 1_700_000_000


class InMemoryKnowledgeBaseClient(KnowledgeBaseClient):
    """
    In-memory implementation of `KnowledgeBaseClient` with deterministic behavior.

    Attributes:
        files (Dict[str, FileMetadata]): The file store, keyed by id.
        contents (Dict[str, bytes]): Stored bytes, keyed by file id.
        attached (List[str]): Ids attached to the Collection, in attach order.
        assistant_linked (bool): Whether `link_assistant` has succeeded.
        calls (Counter): Number of calls per method name.
    """

    def __init__(self) -> None:
        self.files: Dict[str, FileMetadata] = {}
        self.contents: Dict[str, bytes] = {}
        self.attached: List[str] = []
        self.assistant_linked = False
        self.calls: Counter = Counter()
        self.fail_on: Dict[str, Exception] = {}
        self.failing_metadata_ids: Set[str] = set()
        self._next_id = 1

    def seed(self, filename: str, data: bytes = b"seed", attach: bool = True) -> str:
        """
        Store a file directly (no call counted), optionally attached to the Collection.
        """
        file_id = f"file-{self._next_id:04d}"
        self.files[file_id] = FileMetadata(
            id=file_id, filename=filename, created_at=BASE_TIMESTAMP + self._next_id
        )
        self.contents[file_id] = data
        self._next_id += 1
        if attach:
            self.attached.append(file_id)
        return file_id

    def _enter(self, method: str) -> None:
        self.calls[method] += 1
        error: Optional[Exception] = self.fail_on.get(method)
        if error is not None:
            raise error

    async def list_file_ids(self) -> List[str]:
        self._enter("list_file_ids")
        return list(self.attached)

    async def retrieve_file(self, file_id: str) -> FileMetadata:
        self._enter("retrieve_file")
        if file_id in self.failing_metadata_ids:
            raise UpstreamRejectedError(f"No such File object: {file_id}", upstream_status=404)
        try:
            return self.files[file_id]
        except KeyError:
            raise UpstreamRejectedError(f"No such File object: {file_id}", upstream_status=404) from None

    async def upload_file(self, filename: str, data: bytes) -> str:
        self._enter("upload_file")
        return self.seed(filename, data, attach=False)

    async def attach_file(self, file_id: str) -> None:
        self._enter("attach_file")
        if file_id not in self.files:
            raise UpstreamRejectedError(f"No such File object: {file_id}", upstream_status=404)
        if file_id not in self.attached:
            self.attached.append(file_id)

    async def link_assistant(self) -> None:
        self._enter("link_assistant")
        self.assistant_linked = True

    async def detach_file(self, file_id: str) -> None:
        self._enter("detach_file")
        if file_id not in self.attached:
            raise UpstreamRejectedError(f"No such vector store file: {file_id}", upstream_status=404)
        self.attached.remove(file_id)

    async def delete_file(self, file_id: str) -> None:
        self._enter("delete_file")
        if file_id not in self.files:
            raise UpstreamRejectedError(f"No such File object: {file_id}", upstream_status=404)
        del self.files[file_id]
        self.contents.pop(file_id, None)
        if file_id in self.attached:
            self.attached.remove(file_id)

    async def probe(self) -> bool:
        try:
            self._enter("probe")
        except GatewayError:
            return False
        return True
