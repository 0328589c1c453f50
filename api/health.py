"""
Liveness and status endpoints.

`GET /` answers with a static string and touches nothing else, so it stays
reliable as a liveness check. `GET /status` reports which required settings
are present and whether the upstream listing endpoint is currently reachable;
it always answers 200, reporting an unreachable platform as
`openaiConnection: false`.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from api import get_gateway
from services import Gateway
from schemas.files import StatusResponse
from version import __version__

router = APIRouter()

LIVENESS_TEXT = f"Knowledge base gateway {__version__} - OpenAI vector store relay"


@router.get("/", response_class=PlainTextResponse)
def root() -> str:
    return LIVENESS_TEXT


@router.get("/status", response_model=StatusResponse)
async def status(gateway: Gateway = Depends(get_gateway)) -> StatusResponse:
    """
    Return configuration presence flags and the live reachability probe result.
    """
    return await gateway.status.report()
