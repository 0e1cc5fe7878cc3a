"""
Rate-limited async HTTP transport.

Wraps an :class:`httpx.AsyncClient` with a concurrency semaphore, a minimum
spacing between request starts and a bounded retry on ``429 Too Many
Requests``. One instance is meant to be shared by every resolution running
in a process, so pacing applies globally rather than per mod.

Adapters only depend on the :class:`Transport` protocol; tests substitute an
in-memory fake.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Optional, Protocol

import httpx

from mod_resolver import __version__
from mod_resolver.config import (
    DEFAULT_CONCURRENCY,
    DEFAULT_MAX_RETRIES,
    DEFAULT_TIMEOUT,
)

logger = logging.getLogger(__name__)

USER_AGENT = f"mod-resolver/{__version__}"


class Transport(Protocol):
    async def fetch(
        self,
        url: str,
        headers: Optional[dict[str, str]] = None,
        params: Optional[dict] = None,
    ) -> httpx.Response: ...


class RateLimitedTransport:
    """
    Paced ``GET`` requests.

    Usage::

        async with RateLimitedTransport(min_interval=0.2) as transport:
            response = await transport.fetch("https://api.modrinth.com/v2/project/sodium")
    """

    def __init__(
        self,
        concurrency: int = DEFAULT_CONCURRENCY,
        min_interval: float = 0.0,
        max_retries: int = DEFAULT_MAX_RETRIES,
        timeout: float = DEFAULT_TIMEOUT,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.min_interval = min_interval
        self.max_retries = max_retries
        self._semaphore = asyncio.Semaphore(concurrency)
        self._pace_lock = asyncio.Lock()
        self._next_slot = 0.0
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=timeout,
            follow_redirects=True,
            headers={"User-Agent": USER_AGENT},
        )

    async def __aenter__(self) -> RateLimitedTransport:
        return self

    async def __aexit__(self, *exc) -> None:
        await self.close()

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def _wait_for_slot(self) -> None:
        if self.min_interval <= 0:
            return
        async with self._pace_lock:
            now = time.monotonic()
            delay = self._next_slot - now
            self._next_slot = max(now, self._next_slot) + self.min_interval
        if delay > 0:
            await asyncio.sleep(delay)

    async def fetch(
        self,
        url: str,
        headers: Optional[dict[str, str]] = None,
        params: Optional[dict] = None,
    ) -> httpx.Response:
        """
        Issue a paced ``GET``.

        Non-2xx responses are returned, not raised; only ``429`` is retried.
        Network failures propagate as :class:`httpx.HTTPError`, unusable URLs
        as :class:`httpx.InvalidURL`.
        """
        attempt = 0
        while True:
            async with self._semaphore:
                await self._wait_for_slot()
                logger.debug("GET %s", url)
                resp = await self._client.get(url, headers=headers, params=params)

            if resp.status_code != 429 or attempt >= self.max_retries:
                return resp

            attempt += 1
            wait = _retry_after(resp)
            if wait is None:
                wait = 2 ** attempt
            logger.warning(
                "Rate limited by %s (attempt %d/%d), retrying in %.1fs",
                resp.url.host, attempt, self.max_retries, wait,
            )
            await asyncio.sleep(wait)


def _retry_after(resp: httpx.Response) -> Optional[float]:
    value = resp.headers.get("Retry-After")
    if value is None:
        return None
    try:
        return max(float(value), 0.0)
    except ValueError:
        return None
