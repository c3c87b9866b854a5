"""Transaction and transaction page contracts."""

from __future__ import annotations

import math
from datetime import datetime
from typing import Literal

from pydantic import ConfigDict, Field

from mockbank_contracts.common import ApiModel


class Transaction(ApiModel):
    """Booked transaction. Negative amounts are debits, positive credits."""

    model_config = ConfigDict(frozen=True)

    id: str
    account_id: str
    amount: int
    currency: Literal["PLN"] = "PLN"
    date: datetime
    description: str
    counterparty: str | None = None
    category_hint: str | None = None
    external_txn_id: str | None = None
    created_at: datetime
    updated_at: datetime

    @property
    def is_credit(self) -> bool:
        return self.amount > 0

    @property
    def is_debit(self) -> bool:
        return self.amount < 0


class TransactionPage(ApiModel):
    """One page of an account's transactions, in server order."""

    model_config = ConfigDict(frozen=True)

    items: tuple[Transaction, ...] = ()
    page: int = Field(..., ge=1)
    limit: int = Field(..., ge=1)
    total: int = Field(..., ge=0)
    pages: int | None = None

    @property
    def page_count(self) -> int:
        return math.ceil(self.total / self.limit)

    @property
    def display_page_count(self) -> int:
        """Page count for navigation controls, never below one."""
        return max(1, self.page_count)


class SimulateTransactionRequest(ApiModel):
    """Body of ``POST /v1/accounts/{id}/transactions``."""

    amount: int
    description: str = Field(..., min_length=1)
    counterparty: str | None = None
    category_hint: str | None = None
    date: datetime | None = None
