"""Client error hierarchy.

All client-visible failures extend LedgerClientError. Errors raised after the
remote answered carry the partial ``Response`` in ``exc.response`` so callers
can still inspect status code and headers.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ledger_client.client import Response


class LedgerClientError(Exception):
    """Base error for all ledger client errors."""

    message: str = "Ledger client error"

    def __init__(
        self,
        message: str | None = None,
        response: Response | None = None,
    ) -> None:
        self.message = message or self.__class__.message
        self.response = response
        super().__init__(self.message)

    @property
    def status_code(self) -> int | None:
        """HTTP status of the attached response, if one was received."""
        if self.response is None:
            return None
        return self.response.status_code


class InvalidContextError(LedgerClientError):
    """A call was issued without a cancellable context."""

    message = "A call context is required"


class RequestBuildError(LedgerClientError):
    """Request address or payload is malformed; nothing was sent."""

    message = "Unable to build request"


class EncodeError(RequestBuildError):
    """Payload could not be serialized into the request envelope."""

    message = "Unable to serialize request payload"


class TransportError(LedgerClientError):
    """Network failure, timeout or cancellation.

    The underlying exception is available as ``__cause__``.
    """

    message = "Transport failure"


class RemoteError(LedgerClientError):
    """The remote replied with an ``error_message`` envelope."""

    message = "Remote service error"


class DecodeError(LedgerClientError):
    """Response body does not match the envelope or the requested shape."""

    message = "Unable to decode response body"
