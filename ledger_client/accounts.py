"""Accounts resource service.

Thin layer over ``Client`` for /organisation/accounts. Status codes returned
by the remote are passed through as-is; deciding success is left to the
envelope rules of the transport client.
"""

from __future__ import annotations

import logging
from urllib.parse import quote

from ledger_client.client import Client, Response
from ledger_client.context import CallContext
from ledger_client.models import Account, AccountListOptions

logger = logging.getLogger(__name__)

ACCOUNTS_BASE_ENDPOINT = "/organisation/accounts"


def _account_path(account_id: str) -> str:
    # IDs are a single path segment; "/", "?" and "#" must not reshape the URL.
    return f"{ACCOUNTS_BASE_ENDPOINT}/{quote(account_id, safe='')}"


class AccountsService:
    """Create, fetch, list and delete organisation accounts."""

    def __init__(self, client: Client) -> None:
        self._client = client

    @property
    def client(self) -> Client:
        return self._client

    async def create(
        self, context: CallContext | None, account: Account
    ) -> tuple[Account, Response]:
        """Create a new account and return the stored representation."""
        request = self._client.post(ACCOUNTS_BASE_ENDPOINT, account)
        saved, response = await self._client.do(context, request, Account)
        logger.debug("Created account id=%s", account.id)
        return saved, response

    async def by_id(
        self, context: CallContext | None, account_id: str
    ) -> tuple[Account, Response]:
        """Retrieve a single account by ID."""
        request = self._client.get(_account_path(account_id))
        return await self._client.do(context, request, Account)

    async def list(
        self,
        context: CallContext | None,
        options: AccountListOptions | None = None,
    ) -> tuple[list[Account], Response]:
        """List accounts, optionally restricted to one page."""
        path = ACCOUNTS_BASE_ENDPOINT
        if options is not None:
            path = f"{path}?page[number]={options.number}&page[size]={options.size}"

        request = self._client.get(path)
        accounts, response = await self._client.do(
            context, request, list[Account] | None
        )
        return accounts or [], response

    async def delete(
        self, context: CallContext | None, account_id: str, version: int
    ) -> Response:
        """Delete an account at the given version."""
        request = self._client.delete(
            f"{_account_path(account_id)}?version={version}"
        )
        _, response = await self._client.do(context, request)
        logger.debug("Deleted account id=%s version=%d", account_id, version)
        return response
