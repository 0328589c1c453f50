"""
Schemas package for the knowledge base gateway.

Pydantic models that define the public response contracts of the HTTP API.
Keeping them in one place lets the admin panel rely on a stable shape while
the relay internals evolve.
"""

from .files import DocumentReference, ErrorResponse, FileListResponse, StatusResponse

__all__ = ["DocumentReference", "ErrorResponse", "FileListResponse", "StatusResponse"]
