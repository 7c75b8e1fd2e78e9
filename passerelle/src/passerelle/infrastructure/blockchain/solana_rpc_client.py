"""
Solana RPC client.

Thin async wrapper over solana-py. Calls are made once: there is no
retry or confirmation polling, and the only timeout is the HTTP client's.
"""

from typing import Any, Awaitable, Optional

import httpx
from solana.exceptions import SolanaRpcException
from solana.rpc.async_api import AsyncClient
from solana.rpc.commitment import Commitment
from solana.rpc.core import RPCException
from solana.rpc.types import TxOpts
from solders.rpc.responses import GetLatestBlockhashResp, SendTransactionResp

from passerelle.domain.exceptions import NetworkError, RPCError
from passerelle.domain.services.i_chain_transport import IChainTransport
from passerelle.domain.value_objects.transfer import BlockReference, SubmissionReceipt


def _rpc_error(method: str, error: Any) -> RPCError:
    message = getattr(error, "message", None) or str(error)
    return RPCError(
        f"RPC error: {message}",
        method=method,
        error={"kind": type(error).__name__, "message": message},
    )


class SolanaRPCClient(IChainTransport):
    """Solana RPC transport used by the transfer builder and keypair signer."""

    def __init__(
        self,
        rpc_url: str,
        commitment: str = "confirmed",
        timeout: float = 30.0,
    ):
        """
        Initialize Solana RPC client.

        Args:
            rpc_url: Solana RPC endpoint URL
            commitment: Commitment for reads and preflight
            timeout: HTTP timeout in seconds
        """
        self.rpc_url = rpc_url
        self.commitment = commitment
        self.rpc_timeout = timeout
        self._client: Optional[AsyncClient] = None

    def _get_client(self) -> AsyncClient:
        if self._client is None:
            self._client = AsyncClient(
                self.rpc_url,
                commitment=Commitment(self.commitment),
                timeout=self.rpc_timeout,
            )
        return self._client

    async def close(self) -> None:
        """Close HTTP client."""
        if self._client is not None:
            await self._client.close()
        self._client = None

    async def _request(self, method: str, call: Awaitable[Any]) -> Any:
        """
        Await a solana-py call, mapping its failures to domain errors.

        Raises:
            RPCError: If the node returns an error object
            NetworkError: On connection error, HTTP error status or timeout
        """
        try:
            return await call
        except RPCException as e:
            error = e.args[0] if e.args else e
            raise _rpc_error(method, error) from e
        except (SolanaRpcException, httpx.HTTPError) as e:
            cause = e if isinstance(e, httpx.HTTPError) else (e.__cause__ or e.__context__)
            if isinstance(cause, httpx.TimeoutException):
                raise NetworkError(
                    f"RPC timeout: {method}",
                    code="RPC_TIMEOUT",
                    details={"method": method, "timeout": self.rpc_timeout},
                ) from e
            raise NetworkError(
                f"RPC connection error: {cause or e}",
                code="RPC_CONNECTION_ERROR",
                details={"method": method},
            ) from e

    async def get_latest_block_reference(self) -> BlockReference:
        """Fetch latest blockhash and its last valid block height."""
        method = "getLatestBlockhash"
        resp = await self._request(method, self._get_client().get_latest_blockhash())

        if not isinstance(resp, GetLatestBlockhashResp):
            raise _rpc_error(method, resp)

        return BlockReference(
            hash=str(resp.value.blockhash),
            valid_height=resp.value.last_valid_block_height,
        )

    async def send_raw_transaction(self, serialized_tx: bytes) -> Any:
        """
        Submit signed transaction bytes.

        Returns:
            Transaction signature (base58 string)
        """
        method = "sendTransaction"
        opts = TxOpts(
            skip_confirmation=True,
            preflight_commitment=Commitment(self.commitment),
        )
        resp = await self._request(
            method,
            self._get_client().send_raw_transaction(serialized_tx, opts=opts),
        )

        if not isinstance(resp, SendTransactionResp):
            raise _rpc_error(method, resp)

        return str(resp.value)

    async def submit(self, serialized_tx: bytes) -> SubmissionReceipt:
        """Submit and wrap the signature in a receipt (height pending)."""
        signature = await self.send_raw_transaction(serialized_tx)
        return SubmissionReceipt(tx_id=signature)
