"""Account resource schemas.

Optional fields default to None and are left out of request envelopes, so a
minimal account serializes as ``{"id", "organisation_id", "type", "version"}``.
Unknown fields in responses are ignored.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field, SerializerFunctionWrapHandler, model_serializer

ACCOUNT_TYPE = "accounts"


class WireModel(BaseModel):
    """Base for resource schemas whose unset (None) fields stay off the wire."""

    @model_serializer(mode="wrap")
    def _omit_none(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        return {key: value for key, value in handler(self).items() if value is not None}


class PrivateIdentification(WireModel):
    """Identification of an account holder who is a natural person."""

    birth_date: str | None = None
    birth_country: str | None = None
    identification: str | None = None
    address: list[str] | None = None
    country: str | None = None
    city: str | None = None


class OrganizationActor(WireModel):
    name: str | None = None
    birth_date: str | None = None
    residency: str | None = None
    address: str | None = None
    city: str | None = None
    country: str | None = None


class OrganizationIdentification(WireModel):
    """Identification of an account holder that is an organisation."""

    identification: str | None = None
    actors: OrganizationActor | None = None


class AccountAttributes(WireModel):
    country: str | None = None  # ISO 3166-1 alpha-2
    base_currency: str | None = None  # ISO 4217
    bank_id: str | None = None
    bank_id_code: str | None = None
    account_number: str | None = None
    bic: str | None = None
    iban: str | None = None
    customer_id: str | None = None
    name: str | None = None
    private_identification: PrivateIdentification | None = None
    organization_identification: OrganizationIdentification | None = None


class ConfirmationOfPayeeAttributes(AccountAttributes):
    """Extra attributes used by Confirmation of Payee accounts."""

    alternative_names: list[str] | None = None
    account_classification: str | None = None  # "Personal" or "Business"
    join_account: bool | None = None  # wire name used by the ledger API
    account_matching_opt_out: bool | None = None
    secondary_identification: str | None = None
    switched: bool | None = None


class MasterAccountRelation(WireModel):
    id: str
    type: str


class AccountRelationships(WireModel):
    master_account: list[MasterAccountRelation] | None = None


class Account(WireModel):
    """An organisation account as exchanged with the ledger API."""

    id: str
    organisation_id: str
    type: str = ACCOUNT_TYPE
    attributes: AccountAttributes | None = None
    version: int = 0
    relationships: AccountRelationships | None = None
    created_on: datetime | None = None
    modified_on: datetime | None = None


class ConfirmationOfPayeeAccount(Account):
    attributes: ConfirmationOfPayeeAttributes | None = None


class VirtualAccount(Account):
    pass


class AccountListOptions(BaseModel):
    """Pagination options for listing accounts."""

    number: str | int  # page number, or "first" / "last"
    size: int = Field(..., ge=1)


def make_account(id: str, organisation_id: str) -> Account:
    """Build a new account of the default ``accounts`` type."""
    return Account(id=id, organisation_id=organisation_id, type=ACCOUNT_TYPE)
