"""HTTP fetching helpers with concurrency, rate limiting and retries.

This module centralises the logic for downloading BOE pages during ingestion
runs. Transient failures (timeouts, dropped connections, 5xx and rate-limit
responses) are retried with exponential backoff; any other 4xx response is
fatal and surfaces immediately. :class:`HttpFetcher` offers synchronous
fetching over a pooled :class:`requests.Session` and asynchronous fetching
over a shared :class:`aiohttp.ClientSession`.
"""

from __future__ import annotations

import asyncio
import threading
import time
from urllib.parse import urlparse

import aiohttp
import requests
from requests.adapters import HTTPAdapter

from boewatch.infrastructure.observability import get_logger

LOGGER = get_logger(__name__)

# 4xx codes that signal "try again later" rather than a bad request.
RETRYABLE_CLIENT_STATUSES = frozenset({408, 425, 429})


class FetchError(Exception):
    """Base class for page download failures."""

    def __init__(self, url: str, message: str, status: int | None = None) -> None:
        super().__init__(f"{message} ({url})")
        self.url = url
        self.status = status


class TransientFetchError(FetchError):
    """Timeout, connection failure, 5xx or rate limiting; worth retrying."""


class FatalFetchError(FetchError):
    """Non-retryable client error such as 404."""


def classify_status(url: str, status: int) -> FetchError | None:
    """Return the error for an HTTP status, or ``None`` when it is a success."""
    if status < 400:
        return None
    if status >= 500 or status in RETRYABLE_CLIENT_STATUSES:
        return TransientFetchError(url, f"HTTP {status}", status)
    return FatalFetchError(url, f"HTTP {status}", status)


class RateLimiter:
    """Simple host-level rate limiter supporting sync and async callers."""

    def __init__(self, min_interval_seconds: float = 0.0) -> None:
        self.min_interval = max(0.0, min_interval_seconds)
        self._last_seen: dict[str, float] = {}
        self._sync_lock = threading.Lock()
        self._async_lock: asyncio.Lock | None = None

    def _next_delay(self, host: str) -> float:
        if self.min_interval <= 0:
            return 0.0
        last = self._last_seen.get(host)
        now = time.monotonic()
        if last is None:
            self._last_seen[host] = now
            return 0.0
        elapsed = now - last
        if elapsed >= self.min_interval:
            self._last_seen[host] = now
            return 0.0
        delay = self.min_interval - elapsed
        self._last_seen[host] = now + delay
        return delay

    def wait_sync(self, host: str) -> None:
        if self.min_interval <= 0:
            return
        with self._sync_lock:
            delay = self._next_delay(host)
        if delay > 0:
            time.sleep(delay)

    async def wait_async(self, host: str) -> None:
        if self.min_interval <= 0:
            return
        if self._async_lock is None:
            self._async_lock = asyncio.Lock()
        async with self._async_lock:
            delay = self._next_delay(host)
        if delay > 0:
            await asyncio.sleep(delay)


class HttpFetcher:
    """HTTP client with retries, backoff and bounded concurrency.

    The async side is used as an async context manager so a whole ingestion
    pass reuses one connection pool::

        async with HttpFetcher() as fetcher:
            html = await fetcher.fetch_text_async(url)

    Outside the context a short-lived session is opened per call.
    """

    def __init__(
        self,
        *,
        max_concurrent_requests: int = 6,
        min_interval_seconds: float = 0.0,
        retry_attempts: int = 5,
        backoff_base_seconds: float = 0.5,
        timeout_seconds: float = 10.0,
        user_agent: str = "",  # Empty string triggers dynamic version lookup
        session: requests.Session | None = None,
    ) -> None:
        from boewatch import __version__

        if not user_agent:
            user_agent = f"boewatch/{__version__}"
        self.max_concurrent_requests = max(1, max_concurrent_requests)
        self.rate_limiter = RateLimiter(min_interval_seconds)
        self.retry_attempts = max(1, retry_attempts)
        self.backoff_base_seconds = max(0.0, backoff_base_seconds)
        self.timeout_seconds = timeout_seconds
        self.headers = {"User-Agent": user_agent}
        self.session = session or self._build_session()
        self._async_session: aiohttp.ClientSession | None = None

    def _build_session(self) -> requests.Session:
        session = requests.Session()
        adapter = HTTPAdapter(
            pool_connections=self.max_concurrent_requests,
            pool_maxsize=self.max_concurrent_requests,
        )
        session.mount("https://", adapter)
        session.mount("http://", adapter)
        session.headers.update(self.headers)
        return session

    def _host_from_url(self, url: str) -> str:
        parsed = urlparse(url)
        return parsed.hostname or ""

    def _backoff_delay(self, attempt: int) -> float:
        return self.backoff_base_seconds * (2**attempt)

    # -- synchronous -----------------------------------------------------

    def _get_once(self, url: str) -> str:
        try:
            response = self.session.get(
                url, headers=self.headers, timeout=self.timeout_seconds
            )
        except (requests.Timeout, requests.ConnectionError) as exc:
            raise TransientFetchError(url, str(exc)) from exc
        except requests.RequestException as exc:
            raise FatalFetchError(url, str(exc)) from exc
        error = classify_status(url, response.status_code)
        if error is not None:
            raise error
        return response.text

    def fetch_text(self, url: str) -> str:
        """Download ``url`` and return its body.

        Raises:
            TransientFetchError: every attempt failed with a transient error.
            FatalFetchError: the server answered with a non-retryable status.
        """
        host = self._host_from_url(url)
        for attempt in range(self.retry_attempts):
            self.rate_limiter.wait_sync(host)
            try:
                return self._get_once(url)
            except TransientFetchError as exc:
                if attempt >= self.retry_attempts - 1:
                    raise
                LOGGER.debug("Retrying %s after %s (attempt %d)", url, exc, attempt + 1)
                time.sleep(self._backoff_delay(attempt))
        raise TransientFetchError(url, "Retry attempts exhausted")

    def close(self) -> None:
        self.session.close()

    # -- asynchronous ----------------------------------------------------

    async def __aenter__(self) -> "HttpFetcher":
        connector = aiohttp.TCPConnector(limit=self.max_concurrent_requests)
        self._async_session = aiohttp.ClientSession(
            connector=connector, headers=self.headers
        )
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        if self._async_session is not None:
            await self._async_session.close()
            self._async_session = None

    async def _get_once_async(self, session: aiohttp.ClientSession, url: str) -> str:
        timeout = aiohttp.ClientTimeout(total=self.timeout_seconds)
        try:
            async with session.get(url, headers=self.headers, timeout=timeout) as resp:
                error = classify_status(url, resp.status)
                if error is not None:
                    raise error
                try:
                    return await resp.text()
                except UnicodeDecodeError as exc:
                    raise FatalFetchError(url, f"Undecodable body: {exc}", resp.status) from exc
        except (asyncio.TimeoutError, aiohttp.ClientConnectionError) as exc:
            raise TransientFetchError(url, str(exc) or type(exc).__name__) from exc
        except aiohttp.ClientError as exc:
            raise FatalFetchError(url, str(exc)) from exc

    async def _fetch_with_retries(self, session: aiohttp.ClientSession, url: str) -> str:
        host = self._host_from_url(url)
        for attempt in range(self.retry_attempts):
            await self.rate_limiter.wait_async(host)
            try:
                return await self._get_once_async(session, url)
            except TransientFetchError as exc:
                if attempt >= self.retry_attempts - 1:
                    raise
                LOGGER.debug("Retrying %s after %s (attempt %d)", url, exc, attempt + 1)
                await asyncio.sleep(self._backoff_delay(attempt))
        raise TransientFetchError(url, "Retry attempts exhausted")

    async def fetch_text_async(self, url: str) -> str:
        """Async counterpart of :meth:`fetch_text`, raising the same errors."""
        if self._async_session is not None:
            return await self._fetch_with_retries(self._async_session, url)
        async with aiohttp.ClientSession(headers=self.headers) as session:
            return await self._fetch_with_retries(session, url)


__all__ = [
    "FatalFetchError",
    "FetchError",
    "HttpFetcher",
    "RateLimiter",
    "TransientFetchError",
    "classify_status",
]
