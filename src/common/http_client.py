"""Async HTTP helpers used by the registry clients.

Encapsulates the aiohttp session lifecycle and the request/timeout/decode
error handling so callers deal with a plain ``(status, parsed_json)`` tuple.
Network failures and timeouts are reported as status 0; bodies that fail to
decode are reported with the real status and ``None``.
"""
from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Dict, Optional, Tuple

import aiohttp

from constants import Constants
from common.logging_utils import extra_context, is_debug_enabled, safe_url, Timer

logger = logging.getLogger(__name__)


class AsyncHttpClient:
    """Thin aiohttp wrapper exposing ``get_json``."""

    def __init__(
        self,
        timeout: float = Constants.REQUEST_TIMEOUT,
        headers: Optional[Dict[str, str]] = None,
    ):
        """Initialize the client.

        Args:
            timeout: Total per-request timeout in seconds.
            headers: Default headers sent with every request.
        """
        self._timeout = aiohttp.ClientTimeout(total=timeout)
        self._headers = {
            "User-Agent": Constants.USER_AGENT,
            "Accept": "application/json",
        }
        if headers:
            self._headers.update(headers)
        self._session: Optional[aiohttp.ClientSession] = None

    async def start(self) -> None:
        """Start the HTTP session."""
        if self._session is None:
            self._session = aiohttp.ClientSession(
                timeout=self._timeout,
                headers=self._headers,
            )

    async def stop(self) -> None:
        """Stop the HTTP session."""
        if self._session:
            await self._session.close()
            self._session = None

    async def get_json(self, url: str, *, context: str) -> Tuple[int, Optional[Any]]:
        """GET ``url`` and decode the body as JSON.

        Args:
            url: Target URL.
            context: Human-readable source tag for logs (e.g., "npm-meta").

        Returns:
            Tuple of (status_code, parsed_json_or_none). Status is 0 when the
            request never produced a response.
        """
        if self._session is None:
            await self.start()
        assert self._session is not None

        safe_target = safe_url(url)
        with Timer() as t:
            if is_debug_enabled(logger):
                logger.debug(
                    "HTTP request",
                    extra=extra_context(
                        event="http_request",
                        component="http_client",
                        action="GET",
                        target=safe_target,
                        context=context,
                    ),
                )
            try:
                async with self._session.get(url) as response:
                    status = response.status
                    text = await response.text()
            except asyncio.TimeoutError:
                logger.debug(
                    "HTTP timeout",
                    extra=extra_context(
                        event="http_exception",
                        component="http_client",
                        action="GET",
                        outcome="timeout",
                        target=safe_target,
                        context=context,
                    ),
                )
                return 0, None
            except aiohttp.ClientError as exc:
                logger.debug(
                    "HTTP request exception: %s",
                    exc,
                    extra=extra_context(
                        event="http_exception",
                        component="http_client",
                        action="GET",
                        outcome="request_exception",
                        target=safe_target,
                        context=context,
                    ),
                )
                return 0, None

        if is_debug_enabled(logger):
            logger.debug(
                "HTTP response",
                extra=extra_context(
                    event="http_response",
                    component="http_client",
                    action="GET",
                    outcome="success" if 200 <= status < 300 else "non_2xx",
                    status_code=status,
                    duration_ms=t.duration_ms(),
                    target=safe_target,
                    context=context,
                ),
            )

        if not text:
            return status, None
        try:
            return status, json.loads(text)
        except json.JSONDecodeError:
            logger.debug(
                "JSON decode error",
                extra=extra_context(
                    event="parse",
                    component="http_client",
                    action="get_json",
                    outcome="json_decode_error",
                    status_code=status,
                    target=safe_target,
                ),
            )
            return status, None

    async def __aenter__(self) -> "AsyncHttpClient":
        """Async context manager entry."""
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.stop()
