"""
Knowledge base gateway API package.

Routers exposing the HTTP surface: `health` (liveness string and status
report) and `files` (list, upload, delete). Routers stay thin; they obtain the
wired services through `get_gateway` and let `GatewayError` subclasses
propagate to the exception handler registered in `main.create_app`.
"""

from fastapi import Request

from services import Gateway


def get_gateway(request: Request) -> Gateway:
    """FastAPI dependency returning the services built by the application factory."""
    return request.app.state.gateway
