"""Typed MockBank endpoints on top of the transport port.

Translates wire payloads to contract models and transport failures to
``DomainError`` values.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any
from urllib.parse import quote

from mockbank_contracts import (
    Account,
    CloseAccountRequest,
    CreateAccountRequest,
    SimulateTransactionRequest,
    Transaction,
    TransactionPage,
    TransferRequest,
    TransferResponse,
)
from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from mockbank.application.ports.transport import ApiResponse, TransportError
from mockbank.domain.shared.errors import DomainError, HttpError
from mockbank.infrastructure.api.client import UNEXPECTED_BODY_MESSAGE

if TYPE_CHECKING:
    from mockbank.application.ports.transport import TransportPort

logger = logging.getLogger(__name__)

_ACCOUNT_LIST = TypeAdapter(list[Account])

ACCOUNTS_PATH = "/v1/accounts"
TRANSFERS_PATH = "/v1/transfers"


def _account_path(account_id: str, suffix: str = "") -> str:
    return f"{ACCOUNTS_PATH}/{quote(account_id, safe='')}{suffix}"


class BankingApi:
    """MockBank REST resources as typed coroutine calls."""

    def __init__(self, transport: TransportPort):
        self._transport = transport

    async def list_accounts(self) -> list[Account] | DomainError:
        result = await self._transport.request("GET", ACCOUNTS_PATH)
        return self._decode(result, _ACCOUNT_LIST.validate_python, ACCOUNTS_PATH)

    async def create_account(
        self,
        request: CreateAccountRequest,
    ) -> Account | DomainError:
        result = await self._transport.request(
            "POST",
            ACCOUNTS_PATH,
            body=request.to_body(),
        )
        return self._decode(result, Account.model_validate, ACCOUNTS_PATH)

    async def close_account(
        self,
        account_id: str,
        request: CloseAccountRequest,
    ) -> None | DomainError:
        """Close an account; the server answers 204 on success."""
        result = await self._transport.request(
            "POST",
            _account_path(account_id, "/close"),
            body=request.to_body(),
        )
        if isinstance(result, TransportError):
            return result.to_domain_error()
        return None

    async def list_transactions(
        self,
        account_id: str,
        page: int,
        limit: int,
    ) -> TransactionPage | DomainError:
        path = _account_path(account_id, "/transactions")
        result = await self._transport.request(
            "GET",
            path,
            params={"page": page, "limit": limit},
        )
        return self._decode(result, TransactionPage.model_validate, path)

    async def simulate_transaction(
        self,
        account_id: str,
        request: SimulateTransactionRequest,
    ) -> Transaction | DomainError:
        path = _account_path(account_id, "/transactions")
        result = await self._transport.request("POST", path, body=request.to_body())
        return self._decode(result, Transaction.model_validate, path)

    async def transfer(self, request: TransferRequest) -> TransferResponse | DomainError:
        result = await self._transport.request(
            "POST",
            TRANSFERS_PATH,
            body=request.to_body(),
        )
        return self._decode(result, TransferResponse.model_validate, TRANSFERS_PATH)

    @staticmethod
    def _decode(
        result: ApiResponse | TransportError,
        validate: Any,
        path: str,
    ) -> Any:
        if isinstance(result, TransportError):
            return result.to_domain_error()
        try:
            return validate(result.body)
        except PydanticValidationError as e:
            logger.warning(
                "Malformed response body from %s (%d errors): %s",
                path,
                e.error_count(),
                e,
            )
            return HttpError(result.status_code, UNEXPECTED_BODY_MESSAGE)
