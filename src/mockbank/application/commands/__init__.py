"""Commands: mutations against the server."""

from mockbank.application.commands.mutation_coordinator import (
    CloseAccountPayload,
    MutationCoordinator,
    MutationKind,
    MutationResult,
    SimulateTransactionPayload,
    affected_account_ids,
    invalidation_predicate,
)

__all__ = [
    "CloseAccountPayload",
    "MutationCoordinator",
    "MutationKind",
    "MutationResult",
    "SimulateTransactionPayload",
    "affected_account_ids",
    "invalidation_predicate",
]
