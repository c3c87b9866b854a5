"""Internal transfer contracts."""

from __future__ import annotations

from pydantic import Field, model_validator

from mockbank_contracts.common import ApiModel
from mockbank_contracts.transactions import Transaction


class TransferRequest(ApiModel):
    """Body of ``POST /v1/transfers``.

    Submitted as one call; the server books both legs.
    """

    from_account_id: str
    to_account_id: str
    amount: int = Field(..., gt=0)
    description: str | None = None

    @model_validator(mode="after")
    def _distinct_accounts(self) -> TransferRequest:
        if self.from_account_id == self.to_account_id:
            raise ValueError("Source and destination accounts must differ")
        return self

    @property
    def account_ids(self) -> tuple[str, str]:
        return (self.from_account_id, self.to_account_id)


class TransferResponse(ApiModel):
    """Both legs booked by the server."""

    debit: Transaction
    credit: Transaction
