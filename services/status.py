"""
Status reporter: configuration presence plus a live reachability probe.

The probe is a lightweight read against the Collection's listing endpoint.
It never raises past `report`; any failure is reported as
`openaiConnection: false`. The probe outcome may be reused for
`Settings.status_probe_cache_s` seconds (0 re-probes on every call).
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional, Tuple

from config import Settings, required_presence
from core.errors import GatewayError
from provider_api.base import KnowledgeBaseClient
from schemas.files import StatusResponse

logger = logging.getLogger(__name__)


class StatusReporter:
    """
    Builds the `/status` payload.

    Args:
        settings (Settings): Source of the presence booleans and cache interval.
        client (KnowledgeBaseClient): Used for the reachability probe.
        clock (Callable[[], float]): Monotonic clock, injectable for tests.
    """

    def __init__(
        self,
        settings: Settings,
        client: KnowledgeBaseClient,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._settings = settings
        self._client = client
        self._clock = clock
        self._cached: Optional[Tuple[float, bool]] = None

    async def _probe(self) -> bool:
        ttl = self._settings.status_probe_cache_s
        now = self._clock()
        if ttl > 0 and self._cached is not None and now - self._cached[0] < ttl:
            return self._cached[1]

        try:
            connected = await self._client.probe()
        except GatewayError as exc:
            logger.error("Upstream probe raised: %s", exc.message, extra={"operation": "status"})
            connected = False
        if not connected:
            logger.error("Upstream connection check failed", extra={"operation": "status"})
        if ttl > 0:
            self._cached = (now, connected)
        return connected

    async def report(self) -> StatusResponse:
        return StatusResponse(**required_presence(self._settings), openaiConnection=await self._probe())
