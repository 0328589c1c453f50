"""
Response models for the document and status endpoints.
"""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field

UNKNOWN = "Unknown"


class DocumentReference(BaseModel):
    """
    One document attached to the Collection, as returned to API callers.

    `name` and `created_at` hold the "Unknown" sentinel when the metadata lookup
    for this document failed.
    """

    id: str = Field(..., description="Platform-assigned file identifier")
    name: str = Field(UNKNOWN, description="Original filename")
    created_at: str = Field(UNKNOWN, description="Human-readable creation time")


class FileListResponse(BaseModel):
    """
    Successful listing payload, also returned after every upload and delete.
    """

    success: bool = True
    files: List[DocumentReference]


class ErrorResponse(BaseModel):
    error: str


class StatusResponse(BaseModel):
    """
    Configuration presence and upstream reachability report.
    """

    OPENAI_API_KEY: bool
    OPENAI_ASSISTANT_ID: bool
    OPENAI_VECTOR_STORE_ID: bool
    openaiConnection: bool = False
