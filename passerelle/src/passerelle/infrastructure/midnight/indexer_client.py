"""
Midnight indexer GraphQL client.
"""

import asyncio
from typing import Optional

import aiohttp

from passerelle.domain.services.i_indexer import IIndexer
from passerelle.domain.value_objects.privacy import IndexedTransaction
from passerelle.infrastructure.monitoring.system_reporter import SystemReporter

RECENT_TXS_QUERY = """
query RecentTxs($addr: String!, $limit: Int!) {
  transactions(address: $addr, limit: $limit, order_by: {blockHeight: desc}) {
    txId
    blockHeight
    amount
    direction
  }
}
"""

DIRECTIONS = {"in", "out"}


class IndexerClient(IIndexer):
    """
    Recent-transaction lookups against the public indexer.

    History is best-effort: any failure is logged and yields an empty list.
    """

    def __init__(
        self,
        indexer_url: str,
        timeout: float = 30.0,
        reporter: Optional[SystemReporter] = None,
    ):
        self.indexer_url = indexer_url
        self.timeout = timeout
        self.reporter = reporter or SystemReporter(name="passerelle")
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

    async def recent_transactions(
        self, address: str, limit: int = 10
    ) -> list[IndexedTransaction]:
        payload = {
            "query": RECENT_TXS_QUERY,
            "variables": {"addr": address, "limit": limit},
        }

        try:
            session = await self._get_session()
            async with session.post(self.indexer_url, json=payload) as response:
                response.raise_for_status()
                data = await response.json()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            self.reporter.warning(
                f"Indexer query failed: {e}", context="Indexer", verbose_level=2
            )
            return []

        if (data or {}).get("errors"):
            self.reporter.warning(
                f"Indexer returned errors: {data['errors']}",
                context="Indexer",
                verbose_level=2,
            )
            return []

        rows = ((data or {}).get("data") or {}).get("transactions") or []
        return [self._to_transaction(row) for row in rows]

    @staticmethod
    def _to_transaction(row: dict) -> IndexedTransaction:
        direction = row.get("direction")
        return IndexedTransaction(
            tx_id=row.get("txId") or "unknown",
            block_height=int(row.get("blockHeight") or 0),
            direction=direction if direction in DIRECTIONS else "unknown",
            amount=int(row.get("amount") or 0),
        )
