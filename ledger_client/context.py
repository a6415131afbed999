"""Caller-owned cancellation handle for client calls."""

from __future__ import annotations

import asyncio
import time


class CallContext:
    """Cancellation signal and optional deadline for one or more calls.

    Parameters
    ----------
    timeout_ms:
        Optional deadline, in milliseconds from construction. ``None`` means
        the context only ends when ``cancel()`` is called.
    """

    def __init__(self, timeout_ms: int | None = None) -> None:
        self._deadline = (
            time.monotonic() + timeout_ms / 1000.0 if timeout_ms is not None else None
        )
        self._event: asyncio.Event | None = None
        self._reason: str | None = None

    @property
    def deadline_exceeded(self) -> bool:
        return (
            self._reason is None
            and self._deadline is not None
            and time.monotonic() >= self._deadline
        )

    @property
    def cancelled(self) -> bool:
        return self._reason is not None or self.deadline_exceeded

    @property
    def reason(self) -> str | None:
        if self._reason is not None:
            return self._reason
        if self.deadline_exceeded:
            return "context deadline exceeded"
        return None

    def cancel(self, reason: str = "context canceled") -> None:
        """Signal cancellation to every call waiting on this context."""
        if self._reason is None:
            self._reason = reason
        if self._event is not None:
            self._event.set()

    def remaining(self) -> float | None:
        """Seconds left before the deadline, or ``None`` if there is none."""
        if self._deadline is None:
            return None
        return max(0.0, self._deadline - time.monotonic())

    async def wait(self) -> None:
        """Block until ``cancel()`` is called."""
        # Event is created lazily so it binds to the running loop.
        if self._event is None:
            self._event = asyncio.Event()
            if self._reason is not None:
                self._event.set()
        await self._event.wait()
