"""Async client for the ledger accounts API."""

from ledger_client.accounts import ACCOUNTS_BASE_ENDPOINT, AccountsService
from ledger_client.client import Client, Response
from ledger_client.config import DEFAULT_CLIENT_OPTIONS, ClientOptions, ClientSettings
from ledger_client.context import CallContext
from ledger_client.errors import (
    DecodeError,
    EncodeError,
    InvalidContextError,
    LedgerClientError,
    RemoteError,
    RequestBuildError,
    TransportError,
)
from ledger_client.factory import (
    create_accounts_service,
    create_accounts_service_with_options,
    create_client,
    create_client_from_settings,
)
from ledger_client.models import (
    Account,
    AccountAttributes,
    AccountListOptions,
    AccountRelationships,
    ConfirmationOfPayeeAccount,
    ConfirmationOfPayeeAttributes,
    MasterAccountRelation,
    OrganizationActor,
    OrganizationIdentification,
    PrivateIdentification,
    VirtualAccount,
    make_account,
)
from ledger_client.uuids import create_uuid

__all__ = [
    "ACCOUNTS_BASE_ENDPOINT",
    "Account",
    "AccountAttributes",
    "AccountListOptions",
    "AccountRelationships",
    "AccountsService",
    "CallContext",
    "Client",
    "ClientOptions",
    "ClientSettings",
    "ConfirmationOfPayeeAccount",
    "ConfirmationOfPayeeAttributes",
    "DEFAULT_CLIENT_OPTIONS",
    "DecodeError",
    "EncodeError",
    "InvalidContextError",
    "LedgerClientError",
    "MasterAccountRelation",
    "OrganizationActor",
    "OrganizationIdentification",
    "PrivateIdentification",
    "RemoteError",
    "RequestBuildError",
    "Response",
    "TransportError",
    "VirtualAccount",
    "create_accounts_service",
    "create_accounts_service_with_options",
    "create_client",
    "create_client_from_settings",
    "create_uuid",
    "make_account",
]
