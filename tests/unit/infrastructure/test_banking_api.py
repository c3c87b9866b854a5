"""Tests for BankingApi decoding and error mapping."""

from unittest.mock import AsyncMock

import pytest

from mockbank_contracts import (
    CloseAccountRequest,
    CreateAccountRequest,
    SimulateTransactionRequest,
    TransferRequest,
)

from mockbank.application.ports import ApiResponse, TransportError
from mockbank.domain.shared import HttpError, NetworkError, ValidationError
from mockbank.infrastructure.api import BankingApi
from tests.shared.factories import account_json, transaction_json


@pytest.fixture
def transport() -> AsyncMock:
    transport = AsyncMock()
    transport.request = AsyncMock()
    return transport


@pytest.fixture
def api(transport) -> BankingApi:
    return BankingApi(transport)


class TestAccounts:
    """Tests for account endpoints."""

    @pytest.mark.asyncio
    async def test_list_accounts(self, api, transport):
        transport.request.return_value = ApiResponse(200, [account_json(balance=5000)])

        accounts = await api.list_accounts()

        transport.request.assert_awaited_once_with("GET", "/v1/accounts")
        assert accounts[0].balance == 5000

    @pytest.mark.asyncio
    async def test_malformed_body(self, api, transport):
        """Test that an unexpected shape becomes an HttpError, not an exception."""
        transport.request.return_value = ApiResponse(200, {"accounts": "nope"})

        result = await api.list_accounts()

        assert result == HttpError(200, "Unexpected response body")

    @pytest.mark.asyncio
    async def test_create_account(self, api, transport):
        transport.request.return_value = ApiResponse(201, account_json(name="Savings"))

        account = await api.create_account(CreateAccountRequest(name="Savings"))

        transport.request.assert_awaited_once_with(
            "POST", "/v1/accounts", body={"name": "Savings"}
        )
        assert account.name == "Savings"

    @pytest.mark.asyncio
    async def test_close_account_success(self, api, transport):
        transport.request.return_value = ApiResponse(204)

        result = await api.close_account(
            "acc/1", CloseAccountRequest(password="pw", confirm_name="Main")
        )

        assert result is None
        method, path = transport.request.await_args.args
        assert (method, path) == ("POST", "/v1/accounts/acc%2F1/close")

    @pytest.mark.asyncio
    async def test_close_account_conflict(self, api, transport):
        transport.request.return_value = TransportError(409, "Balance must be zero")

        result = await api.close_account(
            "acc-1", CloseAccountRequest(password="pw", confirm_name="Main")
        )

        assert result == HttpError(409, "Balance must be zero")


class TestTransactions:
    """Tests for transaction endpoints."""

    @pytest.mark.asyncio
    async def test_list_transactions(self, api, transport):
        transport.request.return_value = ApiResponse(
            200,
            {"items": [transaction_json()], "page": 1, "limit": 20, "total": 1},
        )

        page = await api.list_transactions("acc-1", 1, 20)

        transport.request.assert_awaited_once_with(
            "GET", "/v1/accounts/acc-1/transactions", params={"page": 1, "limit": 20}
        )
        assert page.items[0].counterparty == "Biedronka"

    @pytest.mark.asyncio
    async def test_simulate_validation_error(self, api, transport):
        transport.request.return_value = TransportError(400, ["amount must be an integer"])

        result = await api.simulate_transaction(
            "acc-1", SimulateTransactionRequest(amount=1, description="x")
        )

        assert isinstance(result, ValidationError)
        assert result.message == ("amount must be an integer",)

    @pytest.mark.asyncio
    async def test_transfer(self, api, transport):
        transport.request.return_value = ApiResponse(
            201,
            {
                "debit": transaction_json("t-1", "acc-1", -500),
                "credit": transaction_json("t-2", "acc-2", 500),
            },
        )

        result = await api.transfer(
            TransferRequest(from_account_id="acc-1", to_account_id="acc-2", amount=500)
        )

        assert result.debit.is_debit
        assert result.credit.account_id == "acc-2"

    @pytest.mark.asyncio
    async def test_network_failure(self, api, transport):
        transport.request.return_value = TransportError()

        assert await api.list_transactions("acc-1", 1, 20) == NetworkError()
