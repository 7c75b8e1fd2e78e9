"""
Wallet bridge client.

The Midnight wallet SDK and the Lace connector only exist for
JavaScript, so both are hosted by a local Node.js bridge process and
reached over HTTP.
"""

import asyncio
from typing import Any, Dict, Optional

import aiohttp

from passerelle.domain.exceptions import NetworkError, UserRejectedError

REJECTION_CODES = {"USER_REJECTED", "Refused", -3}


class WalletBridgeClient:
    """
    HTTP client for the local wallet bridge.

    Each call is made once. Connection failures and timeouts surface as
    NetworkError; an explicit user rejection surfaces as UserRejectedError.
    """

    def __init__(self, bridge_url: str, timeout: float = 30.0):
        """
        Initialize wallet bridge client.

        Args:
            bridge_url: Base URL of the wallet bridge
            timeout: Total HTTP timeout in seconds
        """
        self.bridge_url = bridge_url.rstrip("/")
        self.bridge_timeout = timeout
        self._session: Optional[aiohttp.ClientSession] = None

    async def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.bridge_timeout)
            )
        return self._session

    async def close(self) -> None:
        """Close HTTP session."""
        if self._session and not self._session.closed:
            await self._session.close()
        self._session = None

    async def call_bridge(
        self,
        endpoint: str,
        method: str = "POST",
        data: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """
        Call wallet bridge endpoint.

        Args:
            endpoint: Endpoint path (e.g., "/wallet/state")
            method: HTTP method
            data: Optional JSON body

        Returns:
            Decoded JSON response

        Raises:
            UserRejectedError: If the wallet reports a user rejection
            NetworkError: On connection error, timeout or error status
        """
        url = f"{self.bridge_url}{endpoint}"
        session = await self._get_session()

        try:
            async with session.request(method, url, json=data) as response:
                body = await self._read_body(response)

                if response.status >= 400:
                    self._raise_for_error(endpoint, response.status, body)

                return body

        except aiohttp.ClientError as e:
            raise NetworkError(
                f"Wallet bridge connection error: {str(e)}",
                code="BRIDGE_CONNECTION_ERROR",
                details={"endpoint": endpoint, "method": method},
            ) from e
        except asyncio.TimeoutError as e:
            raise NetworkError(
                f"Wallet bridge timeout: {endpoint}",
                code="BRIDGE_TIMEOUT",
                details={"endpoint": endpoint, "timeout": self.bridge_timeout},
            ) from e

    @staticmethod
    async def _read_body(response: aiohttp.ClientResponse) -> Any:
        if response.content_type == "application/json":
            return await response.json()
        return await response.text()

    @staticmethod
    def _raise_for_error(endpoint: str, status: int, body: Any) -> None:
        if isinstance(body, dict):
            message = body.get("error") or body.get("message") or str(body)
            code = body.get("code")
        else:
            message = str(body) or f"HTTP {status}"
            code = None

        if isinstance(code, (str, int)) and code in REJECTION_CODES:
            raise UserRejectedError(message)

        raise NetworkError(
            message,
            code="BRIDGE_ERROR",
            details={"endpoint": endpoint, "status": status, "code": code},
        )
