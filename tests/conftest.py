"""Shared test fixtures and hypothesis strategies for the ledger client test suite."""

from __future__ import annotations

from typing import Callable

import httpx
import pytest
from hypothesis import strategies as st

from ledger_client.client import Client
from ledger_client.config import ClientOptions
from ledger_client.context import CallContext

BASE_URL = "http://ledger.test/api-v3/"


# ---------------------------------------------------------------------------
# Keep LEDGER_CLIENT_* variables from the host out of the tests
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def _clear_client_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in (
        "LEDGER_CLIENT_BASE_ENDPOINT",
        "LEDGER_CLIENT_TIMEOUT_MS",
        "LEDGER_CLIENT_LOG_LEVEL",
    ):
        monkeypatch.delenv(key, raising=False)


# ---------------------------------------------------------------------------
# Client helpers
# ---------------------------------------------------------------------------

class RecordingHandler:
    """MockTransport handler that records every request it receives."""

    def __init__(self, respond: Callable[[httpx.Request], httpx.Response]) -> None:
        self._respond = respond
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._respond(request)

    @property
    def call_count(self) -> int:
        return len(self.requests)


def make_client(handler: Callable, base_url: str = BASE_URL, timeout_ms: int = 3000) -> Client:
    """Client bound to an in-memory transport."""
    return Client(
        ClientOptions(base_endpoint=base_url, timeout_ms=timeout_ms),
        transport=httpx.MockTransport(handler),
    )


def json_response(status_code: int, body: str) -> Callable[[httpx.Request], httpx.Response]:
    """Responder that always answers with *status_code* and raw *body*."""

    def respond(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            status_code,
            content=body.encode("utf-8"),
            headers={"Content-Type": "application/json"},
        )

    return respond


@pytest.fixture
def context() -> CallContext:
    return CallContext()


# ---------------------------------------------------------------------------
# Hypothesis strategies (reusable across property tests)
# ---------------------------------------------------------------------------

# Text without lone surrogates, which are not valid in JSON documents
safe_text = st.text(
    alphabet=st.characters(blacklist_categories=("Cs",)),
    max_size=30,
)

json_scalars = (
    st.none()
    | st.booleans()
    | st.integers(min_value=-(2**53), max_value=2**53)
    | st.floats(allow_nan=False, allow_infinity=False)
    | safe_text
)

json_values = st.recursive(
    json_scalars,
    lambda children: st.lists(children, max_size=5)
    | st.dictionaries(safe_text, children, max_size=5),
    max_leaves=20,
)

error_messages = st.text(
    alphabet=st.characters(blacklist_categories=("Cs",)),
    min_size=1,
    max_size=80,
)

status_codes = st.integers(min_value=200, max_value=599)

path_segments = st.from_regex(r"[a-z0-9]{1,10}(/[a-z0-9]{1,10}){0,2}", fullmatch=True)
