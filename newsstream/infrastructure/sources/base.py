"""Shared plumbing for adapters that talk HTTP."""
from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, Mapping

import httpx

from newsstream.domain import SearchSource

Sleep = Callable[[float], Awaitable[None]]

USER_AGENT = "MusicNewsStream/1.0 (News Aggregator)"


class SourceError(RuntimeError):
    """Failure of one underlying request; never escapes an adapter."""


class HttpSearchSource(SearchSource):
    """Base class handling the lifecycle of the ``httpx.AsyncClient``."""

    def __init__(
        self,
        *,
        client: httpx.AsyncClient | None = None,
        timeout: float = 30.0,
        request_delay: float = 0.5,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        """Configure the HTTP client and the politeness delay.

        Parameters
        ----------
        client:
            Reusable :class:`httpx.AsyncClient`. When omitted the adapter creates
            and owns its own instance.
        timeout:
            Request timeout applied to the internally created client.
        request_delay:
            Seconds to wait between two requests to the same provider.
        sleep:
            Coroutine used to wait; replaced in tests.
        """

        self._client: httpx.AsyncClient = client or httpx.AsyncClient(
            timeout=timeout, follow_redirects=True
        )
        """HTTP client used for every request of the adapter."""

        self._owns_client: bool = client is None
        """Whether :meth:`aclose` must close the client."""

        self._request_delay = request_delay
        self._sleep = sleep

    async def _pause(self) -> None:
        if self._request_delay > 0:
            await self._sleep(self._request_delay)

    async def _get(
        self, url: str, *, params: Mapping[str, str] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> httpx.Response:
        try:
            response = await self._client.get(url, params=params, headers=headers)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise SourceError(f"GET {url} failed: {exc}") from exc
        return response

    async def _post(
        self, url: str, *, json: object, headers: Mapping[str, str] | None = None
    ) -> httpx.Response:
        try:
            response = await self._client.post(url, json=json, headers=headers)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise SourceError(f"POST {url} failed: {exc}") from exc
        return response

    async def aclose(self) -> None:
        """Close the HTTP client when this adapter owns it."""

        if self._owns_client:
            await self._client.aclose()


__all__ = ["HttpSearchSource", "Sleep", "SourceError", "USER_AGENT"]
