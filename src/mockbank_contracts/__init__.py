"""MockBank REST API contracts.

Pydantic models for the request and response bodies the data layer
exchanges with the MockBank server.
"""

from mockbank_contracts.accounts import (
    SUPPORTED_CURRENCY,
    Account,
    CloseAccountRequest,
    CreateAccountRequest,
)
from mockbank_contracts.common import ApiErrorBody, ApiModel
from mockbank_contracts.transactions import (
    SimulateTransactionRequest,
    Transaction,
    TransactionPage,
)
from mockbank_contracts.transfers import TransferRequest, TransferResponse

__all__ = [
    # Common
    "ApiErrorBody",
    "ApiModel",
    # Accounts
    "SUPPORTED_CURRENCY",
    "Account",
    "CloseAccountRequest",
    "CreateAccountRequest",
    # Transactions
    "SimulateTransactionRequest",
    "Transaction",
    "TransactionPage",
    # Transfers
    "TransferRequest",
    "TransferResponse",
]
