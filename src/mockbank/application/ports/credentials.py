"""Bearer credential port.

Token acquisition is handled outside the data layer; this port only
holds the current credential and lets the login flow swap it.
"""

from abc import ABC, abstractmethod


class CredentialProvider(ABC):
    """Supplies the bearer credential attached to every request."""

    @property
    @abstractmethod
    def access_token(self) -> str | None:
        """Current bearer token, ``None`` when logged out."""

    @abstractmethod
    def login(self, access_token: str) -> None:
        """Store a freshly acquired token."""

    @abstractmethod
    def logout(self) -> None:
        """Forget the stored token."""

    @property
    def is_authenticated(self) -> bool:
        return bool(self.access_token)
