"""Kupo data provider.

Kupo is a lightweight chain indexer. It is faster than Blockfrost for pool
queries but has to be self-hosted.

API docs: https://cardanosolutions.github.io/kupo/
"""

import logging
from typing import Optional

import httpx

from vyswap.dex.assets import LOVELACE, Asset
from vyswap.dex.providers.base import AssetBalance, DataProvider, RequestConfig, UTxO

logger = logging.getLogger(__name__)


class KupoProvider(DataProvider):
    """Data provider backed by a Kupo instance."""

    def __init__(
        self,
        url: str,
        request_config: Optional[RequestConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        super().__init__(request_config, transport)
        self.url = url.rstrip("/")

    @property
    def name(self) -> str:
        return "Kupo"

    async def utxos(self, address: str, asset: Optional[Asset] = None) -> list[UTxO]:
        query = "unspent"
        if asset is not None:
            query += f"&policy_id={asset.policy_id}"
            if asset.name_hex:
                query += f"&asset_name={asset.name_hex}"

        url = f"{self.url}/matches/{address}?{query}"
        logger.debug(f"Kupo request: {url}")

        async with self._client() as client:
            response = await client.get(url)
            response.raise_for_status()
            matches = response.json()

        return [self._to_utxo(match) for match in matches]

    @staticmethod
    def _to_utxo(match: dict) -> UTxO:
        value = match.get("value", {})
        balances = [AssetBalance(asset=LOVELACE, quantity=int(value.get("coins", 0)))]

        for unit, quantity in value.get("assets", {}).items():
            policy_id, _, name_hex = unit.partition(".")
            balances.append(AssetBalance(asset=Asset(policy_id, name_hex), quantity=int(quantity)))

        return UTxO(
            tx_hash=match["transaction_id"],
            output_index=int(match["output_index"]),
            address=match["address"],
            asset_balances=balances,
            datum_hash=match.get("datum_hash"),
        )
