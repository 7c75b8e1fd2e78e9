"""
Proof server client.

The prover runs as a separate service (locally on port 6300 by default)
and can take minutes per transaction, so it has its own timeout.
"""

import asyncio
from typing import Optional

import aiohttp

from passerelle.domain.exceptions import NetworkError
from passerelle.domain.services.i_proof_service import IProofService
from passerelle.domain.value_objects.privacy import (
    BalancedTransaction,
    ProvedTransaction,
)


class ProofServerClient(IProofService):
    """HTTP client for the zero-knowledge proof server."""

    def __init__(self, proof_server_url: str, timeout: float = 300.0):
        self.proof_server_url = proof_server_url.rstrip("/")
        self.timeout = timeout
        self._session: Optional[aiohttp.ClientSession] = None

    async def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.timeout)
            )
        return self._session

    async def close(self) -> None:
        if self._session and not self._session.closed:
            await self._session.close()
        self._session = None

    async def prove(self, balanced: BalancedTransaction) -> ProvedTransaction:
        """
        Prove a balanced transaction.

        Raises:
            NetworkError: On HTTP error, timeout or malformed reply
        """
        session = await self._get_session()
        url = f"{self.proof_server_url}/prove"

        try:
            async with session.post(
                url, json={"transaction": balanced.payload}
            ) as response:
                response.raise_for_status()
                data = await response.json()
        except aiohttp.ClientError as e:
            raise NetworkError(
                f"Proof server error: {str(e)}",
                code="PROOF_SERVER_ERROR",
                details={"url": url},
            ) from e
        except asyncio.TimeoutError as e:
            raise NetworkError(
                f"Proof server timeout after {self.timeout}s",
                code="PROOF_SERVER_TIMEOUT",
                details={"url": url, "timeout": self.timeout},
            ) from e

        proved = (data or {}).get("transaction")
        if not proved:
            raise NetworkError(
                "Proof server returned no transaction",
                code="PROOF_SERVER_ERROR",
                details={"url": url},
            )

        return ProvedTransaction(payload=proved)
