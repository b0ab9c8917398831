# discover/probe.py
"""
Probe executor: one GET per call over a shared aiohttp session.

Redirects are never followed, the body is drained and only counted, and any
transport failure becomes a failed ProbeResult instead of an exception.
There are no retries.
"""
from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Optional

from aiohttp import ClientError, ClientSession, ClientTimeout, TCPConnector

from discover.config import ScanConfig
from discover.errors import ErrorCategory, categorize_exception
from discover.logger import get_logger
from discover.request import ProbeRequest

__all__ = ["ProbeResult", "create_session", "probe"]

logger = get_logger("probe")

CHUNK_SIZE = 64 * 1024


@dataclass(frozen=True, slots=True)
class ProbeResult:
    """Outcome of one probe: status and body size, or an error category."""

    request: ProbeRequest
    status: Optional[int] = None
    size: int = 0
    error: Optional[ErrorCategory] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def create_session(config: ScanConfig) -> ClientSession:
    """Create the client shared by every worker of a run.

    Must be called from inside a running event loop.
    """
    connector = TCPConnector(
        limit=config.concurrency,
        ssl=False if config.insecure else True,
    )
    return ClientSession(
        connector=connector,
        timeout=ClientTimeout(total=config.timeout),
    )


async def probe(session: ClientSession, request: ProbeRequest) -> ProbeResult:
    """Send *request* once and return its status and body size."""
    try:
        async with session.get(
            request.target,
            headers=dict(request.headers),
            allow_redirects=False,
            server_hostname=request.server_hostname,
        ) as resp:
            size = 0
            async for chunk in resp.content.iter_chunked(CHUNK_SIZE):
                size += len(chunk)
            return ProbeResult(request, status=resp.status, size=size)
    except (ClientError, asyncio.TimeoutError, OSError, ValueError) as exc:
        category = categorize_exception(exc)
        logger.debug("Probe %s failed (%s): %r", request.url, category.value, exc)
        return ProbeResult(request, error=category)
