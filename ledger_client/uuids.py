"""Random identifiers for new ledger resources."""

from __future__ import annotations

import uuid


def create_uuid() -> str:
    """Return a random lowercase UUID in canonical 8-4-4-4-12 form."""
    return str(uuid.uuid4())
