"""HTTP client for the MockBank REST API."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Mapping

import httpx
from mockbank_contracts import ApiErrorBody

from mockbank.application.ports.transport import (
    ApiResponse,
    TransportError,
    TransportPort,
)

if TYPE_CHECKING:
    from mockbank.application.ports.credentials import CredentialProvider

logger = logging.getLogger(__name__)

UNEXPECTED_BODY_MESSAGE = "Unexpected response body"


class MockBankApiClient(TransportPort):
    """HTTP client wrapper for the MockBank API.

    Every request carries the current bearer credential, if any. Failures
    come back as ``TransportError`` values; nothing is raised for network
    problems or non-2xx answers.
    """

    def __init__(
        self,
        base_url: str,
        credentials: CredentialProvider | None = None,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._credentials = credentials
        self._timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def base_url(self) -> str:
        return self._base_url

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                timeout=self._timeout,
                headers={"Accept": "application/json"},
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    def _auth_headers(self) -> dict[str, str]:
        token = self._credentials.access_token if self._credentials else None
        if not token:
            return {}
        return {"Authorization": f"Bearer {token}"}

    async def request(
        self,
        method: str,
        path: str,
        params: Mapping[str, Any] | None = None,
        body: Any = None,
    ) -> ApiResponse | TransportError:
        """Perform one request against the API."""
        try:
            client = await self._get_client()
            response = await client.request(
                method,
                path,
                params=params,
                json=body,
                headers=self._auth_headers(),
            )
        except httpx.TimeoutException as e:
            logger.warning("MockBank API timeout on %s %s: %s", method, path, e)
            return TransportError()
        except httpx.TransportError as e:
            logger.warning(
                "MockBank API connection failed on %s %s (%s): %s",
                method,
                path,
                type(e).__name__,
                e,
            )
            return TransportError()

        if response.is_success:
            return self._success(method, path, response)

        message = _error_message(response)
        logger.warning(
            "MockBank API returned error %d on %s %s: %s",
            response.status_code,
            method,
            path,
            message if message is not None else "no message",
        )
        return TransportError(status_code=response.status_code, message=message)

    def _success(
        self,
        method: str,
        path: str,
        response: httpx.Response,
    ) -> ApiResponse | TransportError:
        if response.status_code == httpx.codes.NO_CONTENT or not response.content:
            return ApiResponse(status_code=response.status_code)
        try:
            body = response.json()
        except ValueError:
            logger.warning(
                "MockBank API sent a non-JSON body on %s %s: %s",
                method,
                path,
                response.text[:200],
            )
            return TransportError(
                status_code=response.status_code,
                message=UNEXPECTED_BODY_MESSAGE,
            )
        return ApiResponse(status_code=response.status_code, body=body)


def _error_message(response: httpx.Response) -> str | list[str] | None:
    """Extract ``message`` from an error body, if it has one."""
    if not response.content:
        return None
    try:
        return ApiErrorBody.model_validate(response.json()).message
    except ValueError:
        return None
