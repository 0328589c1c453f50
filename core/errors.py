"""
Error taxonomy for the knowledge base gateway.

Every failure that can reach an HTTP caller is expressed as a subclass of
`GatewayError`. Each class carries the HTTP status it maps to and a public
message that is safe to return in the `{"error": ...}` body. The FastAPI
exception handler in `main.py` renders these uniformly, so route handlers only
need to let them propagate.

Two further failure kinds exist but are never raised to the caller: a failed
per-document metadata lookup during listing and a failed Assistant/Collection
link after an upload. Both are recovered locally (see `services.listing` and
`services.uploads`) and only logged and counted.
"""

from __future__ import annotations

from typing import List, Optional


class GatewayError(Exception):
    """
    Base class for every failure surfaced by the gateway.

    Attributes:
        status_code (int): HTTP status the API layer responds with.
        message (str): Public, human-readable error text for the response body.
    """

    status_code: int = 500
    default_message: str = "Server error"

    def __init__(self, message: Optional[str] = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ConfigMissingError(GatewayError):
    """
    One or more required environment values are absent.

    Raised by `config.load_settings`. The process entrypoint logs the missing
    names and exits with a non-zero status before binding a port.
    """

    default_message = "Missing required configuration"

    def __init__(self, missing: List[str]) -> None:
        self.missing = list(missing)
        super().__init__(f"Missing required environment variables: {', '.join(self.missing)}")


class MissingInputError(GatewayError):
    """The upload request carried no usable payload."""

    status_code = 400
    default_message = "No file received"


class UpstreamRejectedError(GatewayError):
    """
    The external platform answered with a non-success HTTP status.

    Attributes:
        upstream_status (Optional[int]): Status code returned by the platform.
    """

    default_message = "Upstream service rejected the request"

    def __init__(self, message: Optional[str] = None, upstream_status: Optional[int] = None) -> None:
        self.upstream_status = upstream_status
        super().__init__(message)


class ListUnavailableError(UpstreamRejectedError):
    """The initial fetch of the Collection's file set failed."""

    default_message = "Unable to list files"


class TransportFailureError(GatewayError):
    """Network-level failure (connection refused, DNS, timeout) talking to the platform."""

    default_message = "Unable to reach the upstream service"
