"""Rate-limited dispatcher on httpx."""

import asyncio
import logging
import time
from dataclasses import dataclass, field
from typing import Any

import httpx

from chatrest.application.dto.request import Request, Response
from chatrest.domain.exceptions import (
    DispatchError,
    HTTPException,
    RateLimited,
    RequestCancelled,
    RequestTimeout,
)

logger = logging.getLogger(__name__)

MAX_SERVER_ERROR_BACKOFF = 5.0


@dataclass
class _Bucket:
    """Rate limit state of one route and major parameter."""

    remaining: int | None = None
    reset_at: float = 0.0  # monotonic
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)

    def delay(self, now: float) -> float:
        if self.remaining == 0 and self.reset_at > now:
            return self.reset_at - now
        return 0.0

    def update(self, headers: httpx.Headers, now: float) -> None:
        remaining = headers.get("X-RateLimit-Remaining")
        reset_after = headers.get("X-RateLimit-Reset-After")
        if remaining is not None:
            self.remaining = int(remaining)
        if reset_after is not None:
            self.reset_at = now + float(reset_after)

    def is_idle(self, now: float) -> bool:
        """No request holds the bucket and its limit has reset."""
        return not self.lock.locked() and self.reset_at <= now

    def block(self, seconds: float, now: float) -> None:
        self.remaining = 0
        self.reset_at = now + seconds


class HttpxDispatcher:
    """Sends requests with ``httpx.AsyncClient``, honouring rate limits.

    Requests sharing a route template and major parameter are sent one at a
    time. 429 responses are retried after ``retry_after``, 5xx responses
    after an exponential back-off, both at most ``max_retries`` times.
    Before every attempt the request's deadline and check are re-evaluated.
    """

    def __init__(
        self,
        base_url: str,
        token: str = "",
        *,
        user_agent: str = "chatrest",
        timeout: float = 30.0,
        max_retries: int = 3,
        server_error_backoff: float = 0.25,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._client = client or httpx.AsyncClient(base_url=base_url, timeout=timeout)
        self._owns_client = client is None
        self._max_retries = max_retries
        self._server_error_backoff = server_error_backoff
        self._headers = {"User-Agent": user_agent}
        if token:
            self._headers["Authorization"] = f"Bot {token}"
        self._buckets: dict[str, _Bucket] = {}
        self._global_reset_at = 0.0

    async def __aenter__(self) -> "HttpxDispatcher":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    @property
    def bucket_count(self) -> int:
        """Rate limit buckets currently tracked."""
        return len(self._buckets)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def execute(self, request: Request) -> Response:
        bucket = self._bucket_for(request)
        attempt = 0
        async with bucket.lock:
            while True:
                await self._wait(bucket, request)
                self._ensure_sendable(request)
                http_response = await self._send(request)
                now = time.monotonic()
                bucket.update(http_response.headers, now)
                body = _parse_body(http_response)
                status = http_response.status_code

                if 200 <= status < 300:
                    return Response(status=status, body=body, headers=dict(http_response.headers))

                if status == 429:
                    retry_after = _retry_after(http_response, body)
                    if attempt >= self._max_retries:
                        raise RateLimited(retry_after, body)
                    if isinstance(body, dict) and body.get("global"):
                        logger.warning("Global rate limit hit, retrying in %.2fs", retry_after)
                        self._global_reset_at = now + retry_after
                    else:
                        logger.warning(
                            "Rate limited on %s %s, retrying in %.2fs",
                            request.method,
                            request.path,
                            retry_after,
                        )
                        bucket.block(retry_after, now)
                    attempt += 1
                    continue

                if status >= 500 and attempt < self._max_retries:
                    attempt += 1
                    backoff = min(self._server_error_backoff * 2**attempt, MAX_SERVER_ERROR_BACKOFF)
                    logger.warning(
                        "%s %s answered %s, retry %s/%s in %.2fs",
                        request.method,
                        request.path,
                        status,
                        attempt,
                        self._max_retries,
                        backoff,
                    )
                    await self._sleep(request, backoff)
                    continue

                raise HTTPException(status, body)

    def _bucket_for(self, request: Request) -> _Bucket:
        route = request.route
        key = f"{route.method} {route.template}:{route.major_parameter}"
        self._prune(key)
        return self._buckets.setdefault(key, _Bucket())

    def _prune(self, keep: str) -> None:
        now = time.monotonic()
        idle = [k for k, b in self._buckets.items() if k != keep and b.is_idle(now)]
        for key in idle:
            del self._buckets[key]

    async def _wait(self, bucket: _Bucket, request: Request) -> None:
        now = time.monotonic()
        delay = max(bucket.delay(now), self._global_reset_at - now, 0.0)
        if delay > 0:
            logger.debug("Waiting %.2fs for rate limit on %s %s", delay, request.method, request.path)
            await self._sleep(request, delay)

    async def _sleep(self, request: Request, seconds: float) -> None:
        if request.deadline is not None and time.time() + seconds > request.deadline:
            raise RequestTimeout(
                f"{request.method} {request.path} cannot be sent before its deadline"
            )
        await asyncio.sleep(seconds)

    def _ensure_sendable(self, request: Request) -> None:
        if request.is_expired(time.time()):
            raise RequestTimeout(f"Deadline passed before sending {request.method} {request.path}")
        if request.check is not None and not request.check():
            raise RequestCancelled(f"Check rejected {request.method} {request.path}")

    async def _send(self, request: Request) -> httpx.Response:
        headers = {**self._headers, **request.headers}
        try:
            return await self._client.request(
                request.method,
                request.path,
                json=request.body,
                headers=headers,
            )
        except httpx.TimeoutException as exc:
            raise DispatchError(f"{request.method} {request.path} transport timeout: {exc}") from exc
        except httpx.HTTPError as exc:
            raise DispatchError(f"{request.method} {request.path} failed: {exc}") from exc


def _parse_body(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


def _retry_after(response: httpx.Response, body: Any) -> float:
    if isinstance(body, dict) and body.get("retry_after") is not None:
        return float(body["retry_after"])
    header = response.headers.get("Retry-After")
    return float(header) if header else 1.0
