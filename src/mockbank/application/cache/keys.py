"""Resource keys identifying cacheable units."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

ParamValue = str | int | bool | None

ACCOUNTS = "accounts"
TRANSACTIONS = "transactions"


@dataclass(frozen=True)
class ResourceKey:
    """Normalized ``(kind, parameters)`` pair.

    Parameters are stored sorted by name, so two keys built from the same
    parameters in a different order are equal and hash the same.
    """

    kind: str
    params: tuple[tuple[str, ParamValue], ...] = ()

    def __post_init__(self) -> None:
        names = [name for name, _ in self.params]
        if len(names) != len(set(names)):
            msg = f"Duplicate parameter names in key {self.kind!r}: {names}"
            raise ValueError(msg)
        object.__setattr__(
            self,
            "params",
            tuple(sorted(self.params, key=lambda item: item[0])),
        )

    @classmethod
    def of(cls, kind: str, **params: ParamValue) -> ResourceKey:
        return cls(kind, tuple(params.items()))

    def param(self, name: str, default: ParamValue = None) -> ParamValue:
        for key, value in self.params:
            if key == name:
                return value
        return default

    def matches(self, kind: str, **params: ParamValue) -> bool:
        """True when the kind matches and every given parameter is equal."""
        if self.kind != kind:
            return False
        return all(self.param(name) == value for name, value in params.items())

    def __str__(self) -> str:
        if not self.params:
            return self.kind
        args = ", ".join(f"{name}={value}" for name, value in self.params)
        return f"{self.kind}({args})"


KeyPredicate = Callable[[ResourceKey], bool]


def key_matches(kind: str, **params: ParamValue) -> KeyPredicate:
    """Predicate selecting keys of ``kind`` with the given parameters."""

    def _predicate(key: ResourceKey) -> bool:
        return key.matches(kind, **params)

    return _predicate


def accounts_key() -> ResourceKey:
    return ResourceKey.of(ACCOUNTS)


def transactions_key(account_id: str | None, page: int, limit: int) -> ResourceKey:
    return ResourceKey.of(TRANSACTIONS, account_id=account_id, page=page, limit=limit)
