"""Blockfrost data provider.

Hosted chain API; needs a project id and is rate limited.

API docs: https://docs.blockfrost.io/
"""

import logging
from typing import Optional

import httpx

from vyswap.dex.assets import LOVELACE, POLICY_ID_LENGTH, Asset
from vyswap.dex.providers.base import AssetBalance, DataProvider, RequestConfig, UTxO

logger = logging.getLogger(__name__)

# Blockfrost pages hold at most 100 items
PAGE_SIZE = 100


class BlockfrostProvider(DataProvider):
    """Data provider backed by the Blockfrost API."""

    def __init__(
        self,
        url: str,
        project_id: str,
        request_config: Optional[RequestConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        super().__init__(request_config, transport)
        self.url = url.rstrip("/")
        self.project_id = project_id

    @property
    def name(self) -> str:
        return "Blockfrost"

    async def utxos(self, address: str, asset: Optional[Asset] = None) -> list[UTxO]:
        path = f"/addresses/{address}/utxos"
        if asset is not None:
            path += f"/{asset.identifier()}"

        results: list[UTxO] = []
        page = 1

        async with self._client(
            base_url=self.url, headers={"project_id": self.project_id}
        ) as client:
            while True:
                response = await client.get(path, params={"page": page, "count": PAGE_SIZE})

                # Blockfrost answers 404 for addresses it has never seen
                if response.status_code == 404:
                    break
                response.raise_for_status()

                items = response.json()
                results.extend(self._to_utxo(item) for item in items)

                if len(items) < PAGE_SIZE:
                    break
                page += 1

        logger.debug(f"Blockfrost returned {len(results)} UTxOs for {address}")
        return results

    @staticmethod
    def _to_utxo(item: dict) -> UTxO:
        balances = []
        for amount in item.get("amount", []):
            unit = amount["unit"]
            quantity = int(amount["quantity"])
            if unit == "lovelace":
                balances.append(AssetBalance(asset=LOVELACE, quantity=quantity))
            else:
                balances.append(
                    AssetBalance(
                        asset=Asset(unit[:POLICY_ID_LENGTH], unit[POLICY_ID_LENGTH:]),
                        quantity=quantity,
                    )
                )

        return UTxO(
            tx_hash=item["tx_hash"],
            output_index=int(item["output_index"]),
            address=item["address"],
            asset_balances=balances,
            datum_hash=item.get("data_hash"),
        )
