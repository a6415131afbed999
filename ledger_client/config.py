"""Client configuration.

``ClientOptions`` is the immutable configuration a ``Client`` is built from.
``ClientSettings`` loads the same values from environment variables with the
LEDGER_CLIENT_ prefix.
Example: LEDGER_CLIENT_BASE_ENDPOINT=http://ledger:8080/v1, LEDGER_CLIENT_TIMEOUT_MS=5000
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings


class ClientOptions(BaseModel):
    """Base address and timeout for one client instance."""

    model_config = ConfigDict(frozen=True)

    base_endpoint: str = Field(..., min_length=1)  # e.g. "http://localhost:8080/v1"
    timeout_ms: int = Field(default=3000, gt=0)

    @property
    def timeout_seconds(self) -> float:
        return self.timeout_ms / 1000.0


DEFAULT_CLIENT_OPTIONS = ClientOptions(
    base_endpoint="http://localhost:8080/v1",
    timeout_ms=3000,
)


class ClientSettings(BaseSettings):
    """Client configuration validated from environment variables."""

    base_endpoint: str = DEFAULT_CLIENT_OPTIONS.base_endpoint
    timeout_ms: int = Field(default=DEFAULT_CLIENT_OPTIONS.timeout_ms, gt=0)
    log_level: str = "INFO"

    model_config = {"env_prefix": "LEDGER_CLIENT_"}

    def to_options(self) -> ClientOptions:
        return ClientOptions(base_endpoint=self.base_endpoint, timeout_ms=self.timeout_ms)
