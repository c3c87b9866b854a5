"""In-memory bearer credential store."""

import logging

from mockbank.application.ports.credentials import CredentialProvider

logger = logging.getLogger(__name__)


class InMemoryCredentialStore(CredentialProvider):
    """Keeps the current bearer token for the lifetime of the process."""

    def __init__(self, access_token: str | None = None):
        self._access_token = access_token or None

    @property
    def access_token(self) -> str | None:
        return self._access_token

    def login(self, access_token: str) -> None:
        if not access_token:
            msg = "Access token must not be empty"
            raise ValueError(msg)
        self._access_token = access_token
        logger.debug("Bearer credential stored")

    def logout(self) -> None:
        self._access_token = None
        logger.debug("Bearer credential cleared")
