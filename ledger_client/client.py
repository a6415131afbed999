"""Async HTTP transport client for the ledger API.

Runs one request/response cycle per call: build the request, send it under a
caller-owned ``CallContext``, read the full body, then interpret it through the
envelope codec. An ``error_message`` envelope always wins over decoding,
whatever the HTTP status line says.

The client never retries; every failure is raised to the caller with the
partial ``Response`` attached when one was received.
"""

from __future__ import annotations

import asyncio
import logging
import time
from datetime import datetime, timezone
from typing import Any, Awaitable, NoReturn, TypeVar

import httpx

from ledger_client.config import ClientOptions
from ledger_client.context import CallContext
from ledger_client.envelope import detect_error, unwrap, wrap
from ledger_client.errors import (
    DecodeError,
    InvalidContextError,
    RemoteError,
    RequestBuildError,
    TransportError,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

# RFC 850 layout, e.g. "Monday, 02-Jan-06 15:04:05 GMT"
DATE_FORMAT = "%A, %d-%b-%y %H:%M:%S GMT"


def format_date(moment: datetime | None = None) -> str:
    """Render *moment* (default: now) for the ``Date`` request header."""
    moment = moment or datetime.now(timezone.utc)
    return moment.astimezone(timezone.utc).strftime(DATE_FORMAT)


def join_url(base: str, path: str) -> str:
    """Join *base* and *path* with exactly one separating slash."""
    return f"{base.rstrip('/')}/{path.lstrip('/')}"


class Response:
    """Response metadata handed back on success and attached to errors."""

    def __init__(self, http_response: httpx.Response) -> None:
        self.http_response = http_response
        self.body: bytes | None = None  # None until fully read

    @property
    def status_code(self) -> int:
        return self.http_response.status_code

    @property
    def headers(self) -> httpx.Headers:
        return self.http_response.headers

    @property
    def request(self) -> httpx.Request:
        return self.http_response.request

    def __repr__(self) -> str:
        return f"<Response [{self.status_code}]>"


class Client:
    """Ledger API transport bound to one base address and timeout.

    Parameters
    ----------
    options:
        Immutable base address and timeout.
    transport:
        Optional httpx transport; tests pass an ``httpx.MockTransport``.
    """

    def __init__(
        self,
        options: ClientOptions,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._options = options
        self._http = httpx.AsyncClient(
            timeout=options.timeout_seconds,
            transport=transport,
        )

    @property
    def options(self) -> ClientOptions:
        return self._options

    @property
    def base_url(self) -> str:
        return self._options.base_endpoint

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> Client:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    # ------------------------------------------------------------------
    # Build
    # ------------------------------------------------------------------

    def get(self, path: str, payload: Any = None) -> httpx.Request:
        return self.build_request("GET", path, payload)

    def post(self, path: str, payload: Any = None) -> httpx.Request:
        return self.build_request("POST", path, payload)

    def delete(self, path: str, payload: Any = None) -> httpx.Request:
        return self.build_request("DELETE", path, payload)

    def build_request(self, method: str, path: str, payload: Any = None) -> httpx.Request:
        """Build a request for *path* relative to the configured base address.

        Raises
        ------
        RequestBuildError
            If the resolved URL is not an absolute http(s) URL, or the payload
            cannot be serialized (``EncodeError``).
        """
        raw_url = join_url(self._options.base_endpoint, path)
        try:
            url = httpx.URL(raw_url)
        except httpx.InvalidURL as exc:
            raise RequestBuildError(f"Invalid request URL {raw_url!r}: {exc}") from exc

        if url.scheme not in ("http", "https") or not url.host:
            raise RequestBuildError(f"Request URL must be absolute http(s): {raw_url!r}")

        content = wrap(payload) if payload is not None else None

        return httpx.Request(
            method,
            url,
            content=content,
            headers={
                "Content-Type": "application/json",
                "Date": format_date(),
            },
        )

    # ------------------------------------------------------------------
    # Send / read / interpret
    # ------------------------------------------------------------------

    async def do(
        self,
        context: CallContext | None,
        request: httpx.Request,
        target: type[T] | None = None,
    ) -> tuple[T | None, Response]:
        """Execute *request* and decode the envelope into *target*.

        Returns
        -------
        tuple
            ``(value, response)``; value is ``None`` when no target is given.

        Raises
        ------
        InvalidContextError
            If *context* is missing. Raised before any network I/O.
        TransportError
            On network failure, timeout, cancellation or a body read failure.
        RemoteError
            If the body carries a non-empty ``error_message``.
        DecodeError
            If the body does not match the envelope or *target*.
        """
        if context is None:
            raise InvalidContextError()

        started = time.perf_counter()
        # The configured timeout bounds the whole send and read cycle.
        deadline = time.monotonic() + self._options.timeout_seconds
        method, url = request.method, str(request.url)

        try:
            http_response = await self._within(
                context, self._http.send(request, stream=True), deadline
            )
        except TransportError as exc:
            self._log_failure(method, url, None, started, exc)
            raise

        response = Response(http_response)
        try:
            response.body = await self._within(context, http_response.aread(), deadline)
        except TransportError as exc:
            exc.response = response
            self._log_failure(method, url, response, started, exc)
            raise
        finally:
            await http_response.aclose()

        logger.debug(
            "%s %s -> %d",
            method,
            url,
            response.status_code,
            extra={
                "method": method,
                "url": url,
                "status_code": response.status_code,
                "duration_ms": round((time.perf_counter() - started) * 1000, 2),
            },
        )

        message = detect_error(response.body)
        if message is not None:
            remote = RemoteError(message, response=response)
            self._log_failure(method, url, response, started, remote)
            raise remote

        if target is None:
            return None, response

        try:
            return unwrap(response.body, target), response
        except DecodeError as exc:
            exc.response = response
            self._log_failure(method, url, response, started, exc)
            raise

    async def _within(
        self, context: CallContext, work: Awaitable[T], deadline: float | None = None
    ) -> T:
        """Await *work* until it finishes, *context* ends or *deadline* passes."""
        if context.cancelled:
            if asyncio.iscoroutine(work):
                work.close()
            self._abort(context)

        timeout = context.remaining()
        if deadline is not None:
            left = max(0.0, deadline - time.monotonic())
            timeout = left if timeout is None else min(timeout, left)

        task = asyncio.ensure_future(work)
        waiter = asyncio.ensure_future(context.wait())
        try:
            done, _ = await asyncio.wait(
                {task, waiter},
                timeout=timeout,
                return_when=asyncio.FIRST_COMPLETED,
            )
        finally:
            waiter.cancel()
            if not task.done():
                task.cancel()
            await asyncio.gather(task, waiter, return_exceptions=True)

        if task not in done:
            if not done and not context.cancelled:
                reason = f"client timeout of {self._options.timeout_ms} ms elapsed"
                raise TransportError(f"Request aborted: {reason}") from TimeoutError(reason)
            self._abort(context, timed_out=not done)

        try:
            return task.result()
        except httpx.TimeoutException as exc:
            raise TransportError(f"Request timed out: {exc}") from exc
        except (httpx.HTTPError, httpx.StreamError) as exc:
            raise TransportError(f"Transport failure: {exc}") from exc

    @staticmethod
    def _abort(context: CallContext, timed_out: bool = False) -> NoReturn:
        if timed_out or context.deadline_exceeded:
            reason = "context deadline exceeded"
            raise TransportError(f"Request aborted: {reason}") from TimeoutError(reason)
        reason = context.reason or "context canceled"
        raise TransportError(f"Request aborted: {reason}") from asyncio.CancelledError(reason)

    @staticmethod
    def _log_failure(
        method: str,
        url: str,
        response: Response | None,
        started: float,
        exc: Exception,
    ) -> None:
        logger.debug(
            "%s %s failed: %s",
            method,
            url,
            exc,
            extra={
                "method": method,
                "url": url,
                "status_code": response.status_code if response is not None else None,
                "duration_ms": round((time.perf_counter() - started) * 1000, 2),
                "error_kind": type(exc).__name__,
            },
        )
