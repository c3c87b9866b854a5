"""Factories for contract models and cache keys used across tests."""

from datetime import datetime, timezone

from mockbank_contracts import Account, Transaction, TransactionPage

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


def make_account(
    account_id: str = "acc-1",
    name: str = "Main",
    balance: int = 0,
) -> Account:
    return Account(
        id=account_id,
        user_id="user-1",
        name=name,
        iban=f"PL00000000000000000000{account_id[-4:]:0>4}",
        currency="PLN",
        balance=balance,
        created_at=NOW,
        updated_at=NOW,
    )


def make_transaction(
    txn_id: str = "txn-1",
    account_id: str = "acc-1",
    amount: int = -1250,
    description: str = "Groceries",
) -> Transaction:
    return Transaction(
        id=txn_id,
        account_id=account_id,
        amount=amount,
        currency="PLN",
        date=NOW,
        description=description,
        created_at=NOW,
        updated_at=NOW,
    )


def make_page(
    account_id: str = "acc-1",
    page: int = 1,
    limit: int = 20,
    total: int = 1,
    count: int = 1,
) -> TransactionPage:
    items = tuple(
        make_transaction(txn_id=f"txn-{page}-{i}", account_id=account_id)
        for i in range(count)
    )
    return TransactionPage(items=items, page=page, limit=limit, total=total)


def account_json(account_id: str = "acc-1", name: str = "Main", balance: int = 0) -> dict:
    """Server (camelCase) representation of an account."""
    return {
        "id": account_id,
        "userId": "user-1",
        "name": name,
        "iban": "PL61109010140000071219812874",
        "currency": "PLN",
        "balance": balance,
        "createdAt": "2026-03-01T12:00:00Z",
        "updatedAt": "2026-03-01T12:00:00Z",
    }


def transaction_json(
    txn_id: str = "txn-1",
    account_id: str = "acc-1",
    amount: int = -1250,
) -> dict:
    return {
        "id": txn_id,
        "accountId": account_id,
        "amount": amount,
        "currency": "PLN",
        "date": "2026-03-01T12:00:00Z",
        "description": "Groceries",
        "counterparty": "Biedronka",
        "categoryHint": "food",
        "externalTxnId": None,
        "createdAt": "2026-03-01T12:00:00Z",
        "updatedAt": "2026-03-01T12:00:00Z",
    }
