"""
Provider-agnostic client interface for the hosted knowledge base.

This module defines the abstract contract that any concrete knowledge base
client must fulfill in order to be used by the gateway services. The design
uses the adapter pattern to separate the relay logic (listing, upload, delete,
status) from vendor-specific concerns like authentication, HTTP transport,
pagination and error payloads. Every client is bound to one Collection (the
vector store) and one Assistant Resource at construction time; the methods
below therefore take only per-document arguments.

Error contract:
- A non-success HTTP status from the platform raises `UpstreamRejectedError`.
- A network-level failure (connection, DNS, timeout) raises `TransportFailureError`.
No other exception type should escape an implementation for expected upstream
failures, which lets callers recover from exactly these two kinds without
catching broadly.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional


@dataclass(frozen=True)
class FileMetadata:
    """
    Metadata the platform keeps for one stored file.

    Attributes:
        id (str): Platform-assigned file identifier.
        filename (str): Original filename given at upload time.
        created_at (Optional[int]): Creation time as Unix epoch seconds.
    """

    id: str
    filename: str
    created_at: Optional[int] = None


class KnowledgeBaseClient(ABC):
    """
    Abstract client for one Collection/Assistant pair on the hosted platform.

    Implementations must be safe to call concurrently from a single event loop,
    since the listing service fans out `retrieve_file` calls with asyncio.gather.
    """

    @abstractmethod
    async def list_file_ids(self) -> List[str]:
        """
        Return the ids of all files attached to the Collection, in platform order.
        """

    @abstractmethod
    async def retrieve_file(self, file_id: str) -> FileMetadata:
        """
        Look up the stored metadata (filename, creation time) of one file.
        """

    @abstractmethod
    async def upload_file(self, filename: str, data: bytes) -> str:
        """
        Store a new file on the platform and return its id.
        """

    @abstractmethod
    async def attach_file(self, file_id: str) -> None:
        """
        Attach an already stored file to the Collection.
        """

    @abstractmethod
    async def link_assistant(self) -> None:
        """
        Grant the Assistant search access to the Collection.

        Re-issuing the same association is idempotent on the platform side.
        """

    @abstractmethod
    async def detach_file(self, file_id: str) -> None:
        """
        Remove a file from the Collection without deleting the stored file.
        """

    @abstractmethod
    async def delete_file(self, file_id: str) -> None:
        """
        Delete a file from the platform's file store.
        """

    @abstractmethod
    async def probe(self) -> bool:
        """
        Issue a lightweight read against the listing endpoint.

        Returns:
            bool: True if the platform answered successfully, False otherwise.
            Must never raise for upstream failures.
        """

    async def close(self) -> None:
        """
        Release network resources. The default implementation holds none.
        """
        return None
