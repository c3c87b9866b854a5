"""Account contracts.

There is no single-account endpoint: detail views pick an account out of
the collection returned by ``GET /v1/accounts``.
"""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import ConfigDict, Field

from mockbank_contracts.common import ApiModel

SUPPORTED_CURRENCY = "PLN"


class Account(ApiModel):
    """Bank account as returned by the server.

    ``balance`` is in minor units (grosze) and is only ever replaced by a
    server response.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    user_id: str | None = None
    name: str
    iban: str
    currency: Literal["PLN"] = SUPPORTED_CURRENCY
    balance: int
    created_at: datetime
    updated_at: datetime


class CreateAccountRequest(ApiModel):
    """Body of ``POST /v1/accounts``."""

    name: str = Field(..., min_length=1, max_length=100)


class CloseAccountRequest(ApiModel):
    """Body of ``POST /v1/accounts/{id}/close``.

    Passed through unmodified; the server checks the password and that
    ``confirm_name`` matches the account name.
    """

    password: str
    confirm_name: str
