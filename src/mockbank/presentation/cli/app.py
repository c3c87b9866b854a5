"""MockBank CLI application using Typer.

Drives the sync layer from a terminal: list accounts and transactions,
and run the dashboard's write operations.
"""

import asyncio
import logging
import sys
from decimal import Decimal
from functools import lru_cache
from typing import Awaitable, Callable, Optional, TypeVar

import typer
from mockbank_config import get_settings
from mockbank_contracts import Account, SimulateTransactionRequest, TransactionPage
from mockbank_contracts import TransferRequest
from pydantic import ValidationError as PydanticValidationError
from rich.console import Console
from rich.table import Table

from mockbank.application.commands import MutationResult
from mockbank.application.queries import QueryState, total_balance
from mockbank.domain.shared.errors import DomainError
from mockbank.infrastructure.sync_layer import HttpSyncLayer

T = TypeVar("T")

app = typer.Typer(
    name="mockbank",
    help="MockBank - accounts and transactions from the command line",
    no_args_is_help=True,
)
console = Console()


@lru_cache(maxsize=1)
def _configure_logging() -> None:
    """Configure CLI logging.

    - Console output with timestamps and module names
    - Configurable log level for mockbank modules (from settings)
    - WARNING level for noisy third-party libraries
    """
    settings = get_settings()
    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
        force=True,
    )

    logging.getLogger("mockbank").setLevel(log_level)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def _run(action: Callable[[HttpSyncLayer], Awaitable[T]]) -> T:
    _configure_logging()

    async def _main() -> T:
        async with HttpSyncLayer.from_settings(get_settings()) as layer:
            return await action(layer)

    return asyncio.run(_main())


def format_amount(minor_units: int, currency: str = "PLN") -> str:
    return f"{Decimal(minor_units).scaleb(-2):,.2f} {currency}"


def _fail(error: DomainError, fallback: str) -> None:
    """Print an error with status-specific hints and exit."""
    console.print(f"[red]{error.display_message(fallback)}[/red]")
    if error.is_rate_limited:
        console.print("[yellow]Too many requests. Try again in a moment.[/yellow]")
    elif error.is_forbidden:
        console.print("[yellow]You do not have access to this account.[/yellow]")
    elif error.is_unauthorized:
        console.print("[yellow]Session expired or missing. Log in again.[/yellow]")
    elif error.is_conflict:
        console.print("[yellow]The account balance must be zero to close it.[/yellow]")
    raise typer.Exit(code=1)


def _check_query(state: QueryState, fallback: str) -> None:
    if state.is_error and state.error is not None:
        _fail(state.error, fallback)


def _check_mutation(result: MutationResult, fallback: str) -> None:
    if not result.succeeded and result.error is not None:
        _fail(result.error, fallback)


@app.command("accounts")
def list_accounts() -> None:
    """List accounts with their balances."""

    async def _action(layer: HttpSyncLayer) -> QueryState:
        return await layer.accounts_query().execute()

    state = _run(_action)
    _check_query(state, "Could not fetch the account list.")

    accounts: list[Account] = state.data or []
    if not accounts:
        console.print("[dim]No accounts yet. Use create-account to open one.[/dim]")
        return

    table = Table(title="Accounts")
    table.add_column("ID", style="dim")
    table.add_column("Name", style="bold")
    table.add_column("IBAN")
    table.add_column("Balance", justify="right")
    for account in accounts:
        table.add_row(
            account.id,
            account.name,
            account.iban,
            format_amount(account.balance, account.currency),
        )
    console.print(table)
    console.print(f"Total: [bold]{format_amount(total_balance(accounts))}[/bold]")


@app.command("transactions")
def list_transactions(
    account_id: str = typer.Argument(..., help="Account to list"),
    page: Optional[str] = typer.Option(None, help="Page number"),
    limit: Optional[str] = typer.Option(None, help="Page size (1-100)"),
) -> None:
    """List one page of an account's transactions."""
    navigation: dict[str, str] = {}
    if page is not None:
        navigation["page"] = page
    if limit is not None:
        navigation["limit"] = limit

    async def _action(layer: HttpSyncLayer) -> tuple[QueryState, int]:
        query = layer.transactions_query(account_id, navigation)
        state = await query.execute()
        page_count = 1
        if isinstance(state.data, TransactionPage):
            page_count = state.data.display_page_count
        return state, query.pagination.display_page(page_count)

    state, shown_page = _run(_action)
    _check_query(state, "Could not fetch transactions.")

    data: TransactionPage = state.data
    table = Table(title=f"Transactions - page {shown_page}/{data.display_page_count}")
    table.add_column("Date")
    table.add_column("Description")
    table.add_column("Counterparty", style="dim")
    table.add_column("Amount", justify="right")
    for txn in data.items:
        style = "green" if txn.is_credit else "red"
        table.add_row(
            txn.date.strftime("%Y-%m-%d %H:%M"),
            txn.description,
            txn.counterparty or "",
            f"[{style}]{format_amount(txn.amount, txn.currency)}[/{style}]",
        )
    console.print(table)
    console.print(f"Total: {data.total} transactions")


@app.command("create-account")
def create_account(name: str = typer.Argument(..., help="Account name")) -> None:
    """Open a new account."""

    async def _action(layer: HttpSyncLayer) -> MutationResult:
        return await layer.mutations.create_account(name)

    result = _run(_action)
    _check_mutation(result, "Could not create the account.")
    console.print(f"[green]Account created:[/green] {result.data.id}")


@app.command("close-account")
def close_account(
    account_id: str = typer.Argument(..., help="Account to close"),
    confirm_name: str = typer.Option(..., help="Account name, as confirmation"),
    password: str = typer.Option(..., prompt=True, hide_input=True),
) -> None:
    """Close an account (its balance must be zero)."""

    async def _action(layer: HttpSyncLayer) -> MutationResult:
        return await layer.mutations.close_account(account_id, password, confirm_name)

    result = _run(_action)
    _check_mutation(result, "Could not close the account.")
    console.print("[green]Account closed.[/green]")


@app.command("simulate")
def simulate_transaction(
    account_id: str = typer.Argument(..., help="Account to book on"),
    amount: int = typer.Argument(..., help="Minor units, negative for a debit"),
    description: str = typer.Argument(..., help="Transaction description"),
    counterparty: Optional[str] = typer.Option(None, help="Counterparty name"),
    category: Optional[str] = typer.Option(None, help="Category hint"),
) -> None:
    """Book a simulated transaction."""
    try:
        request = SimulateTransactionRequest(
            amount=amount,
            description=description,
            counterparty=counterparty,
            category_hint=category,
        )
    except PydanticValidationError as e:
        console.print(f"[red]Invalid transaction: {e}[/red]")
        raise typer.Exit(code=2) from e

    async def _action(layer: HttpSyncLayer) -> MutationResult:
        return await layer.mutations.simulate_transaction(account_id, request)

    result = _run(_action)
    _check_mutation(result, "Could not add the transaction.")
    console.print(f"[green]Transaction booked:[/green] {result.data.id}")


@app.command("transfer")
def internal_transfer(
    from_account_id: str = typer.Argument(..., help="Source account"),
    to_account_id: str = typer.Argument(..., help="Destination account"),
    amount: int = typer.Argument(..., help="Minor units, positive"),
    description: Optional[str] = typer.Option(None, help="Transfer title"),
) -> None:
    """Move money between two of your accounts."""
    try:
        request = TransferRequest(
            from_account_id=from_account_id,
            to_account_id=to_account_id,
            amount=amount,
            description=description,
        )
    except PydanticValidationError as e:
        console.print(f"[red]Invalid transfer: {e}[/red]")
        raise typer.Exit(code=2) from e

    async def _action(layer: HttpSyncLayer) -> MutationResult:
        return await layer.mutations.internal_transfer(request)

    result = _run(_action)
    _check_mutation(result, "Could not complete the transfer.")
    console.print(
        f"[green]Transfer booked:[/green] debit {result.data.debit.id}, "
        f"credit {result.data.credit.id}"
    )


def cli() -> None:
    """Entry point for the CLI application."""
    app()


if __name__ == "__main__":
    cli()
