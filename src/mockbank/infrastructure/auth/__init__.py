"""Credential storage."""

from mockbank.infrastructure.auth.credential_store import InMemoryCredentialStore

__all__ = ["InMemoryCredentialStore"]
