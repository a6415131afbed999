"""Constructors that wire clients and services from options.

Callers that supply no options get ``DEFAULT_CLIENT_OPTIONS``. Every client
owns its own httpx connection pool.
"""

from __future__ import annotations

import httpx

from ledger_client.accounts import AccountsService
from ledger_client.client import Client
from ledger_client.config import DEFAULT_CLIENT_OPTIONS, ClientOptions, ClientSettings
from ledger_client.logging_config import configure_logging


def create_client(
    options: ClientOptions | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> Client:
    return Client(options or DEFAULT_CLIENT_OPTIONS, transport=transport)


def create_accounts_service(client: Client | None = None) -> AccountsService:
    return AccountsService(client or create_client())


def create_accounts_service_with_options(
    options: ClientOptions | None = None,
) -> AccountsService:
    return AccountsService(create_client(options))


def create_client_from_settings(settings: ClientSettings | None = None) -> Client:
    """Build a client from LEDGER_CLIENT_* environment variables.

    Also configures JSON logging at ``settings.log_level``.
    """
    settings = settings or ClientSettings()
    configure_logging(settings.log_level)
    return Client(settings.to_options())
