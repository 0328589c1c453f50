"""
Document endpoints: list, upload and delete files of the knowledge base.

Every endpoint answers with the same success shape, `{"success": true,
"files": [...]}`, where `files` is a freshly recomputed listing. Mutating
endpoints therefore give the caller the post-operation state rather than a
diff. Failures are raised as `GatewayError` subclasses and rendered as
`{"error": "..."}` by the application-level exception handler:

- 400 when an upload carries no payload (no upstream call is made),
- 500 when ingestion or the initial listing fetch is rejected upstream,
  carrying the upstream message for uploads,
- 500 on transport failures.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from api import get_gateway
from schemas.files import ErrorResponse, FileListResponse
from services import Gateway
from services.uploads import normalize_upload

router = APIRouter()

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "No file received"},
    500: {"model": ErrorResponse, "description": "Upstream failure"},
}


@router.get("/files", response_model=FileListResponse, responses=ERROR_RESPONSES)
async def list_files(gateway: Gateway = Depends(get_gateway)) -> FileListResponse:
    return FileListResponse(files=await gateway.listing.list())


@router.post("/files", response_model=FileListResponse, responses=ERROR_RESPONSES)
async def upload_file(request: Request, gateway: Gateway = Depends(get_gateway)) -> FileListResponse:
    """
    Upload one document, as multipart field `file` or a raw octet-stream body.

    For raw bodies the stored filename comes from the `filename` query parameter
    or the `X-Filename` header, falling back to a generated name.
    """
    payload = await normalize_upload(request)
    return FileListResponse(files=await gateway.uploads.upload(payload))


@router.delete("/files/{file_id}", response_model=FileListResponse, responses=ERROR_RESPONSES)
async def delete_file(file_id: str, gateway: Gateway = Depends(get_gateway)) -> FileListResponse:
    return FileListResponse(files=await gateway.deletion.delete(file_id))
