"""MockBank REST API integration."""

from mockbank.infrastructure.api.banking_api import BankingApi
from mockbank.infrastructure.api.client import MockBankApiClient

__all__ = [
    "BankingApi",
    "MockBankApiClient",
]
