"""VyFinance DEX integration for Cardano swaps.

Pools are discovered through VyFinance's public API; live reserves are read
from the UTxO holding each pool's main NFT through the configured data
provider. Pricing uses VyFinance's constant-product formula with the pool's
bar + liquidity fee.

API docs: https://docs.vyfi.io/
"""

import dataclasses
import json
import logging
from fractions import Fraction
from typing import Optional

import httpx

from vyswap.dex.assets import LOVELACE, Asset, Token, token_identifier
from vyswap.dex.base import BaseDex
from vyswap.dex.pools import LiquidityPool, SwapFee
from vyswap.dex.providers.base import DataProvider, RequestConfig

logger = logging.getLogger(__name__)

VYFINANCE = "VyFinance"

# VyFinance API endpoint
VYFI_API = "https://api.vyfi.io"

# Fee percentages are applied against this multiplier (basis points)
POOL_FEE_MULTIPLIER = 10_000


class VyfinanceApi:
    """Client for the VyFinance pool listing endpoint."""

    def __init__(
        self,
        base_url: str = VYFI_API,
        request_config: Optional[RequestConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.request_config = request_config or RequestConfig()
        self._transport = transport

    async def liquidity_pools(self) -> list[LiquidityPool]:
        """Fetch all VyFinance pools (reserves as reported by the API)."""
        transport = self._transport or httpx.AsyncHTTPTransport(
            retries=self.request_config.retries
        )
        async with httpx.AsyncClient(
            transport=transport,
            base_url=self.base_url,
            timeout=self.request_config.timeout_seconds,
        ) as client:
            response = await client.get("/lp", params={"networkId": 1, "v2": "true"})
            response.raise_for_status()
            data = response.json()

        pools = []
        for item in data:
            try:
                pools.append(self._to_pool(item))
            except (KeyError, ValueError, TypeError) as e:
                logger.warning(f"Skipping malformed VyFinance pool entry: {e}")

        logger.debug(f"VyFinance API returned {len(pools)} pools")
        return pools

    @staticmethod
    def _to_token(details: dict) -> Token:
        token_name = details.get("tokenName")
        if not token_name:
            return LOVELACE
        return Asset(details["currencySymbol"], token_name.encode("utf-8").hex())

    @classmethod
    def _to_pool(cls, item: dict) -> LiquidityPool:
        details = json.loads(item["json"])
        fees = details["feesSettings"]

        lp_policy_id, _, lp_name_hex = item["lpPolicyId-assetId"].partition("-")
        lp_token = Asset(lp_policy_id, lp_name_hex)

        return LiquidityPool(
            dex=VYFINANCE,
            asset_a=cls._to_token(details["aAsset"]),
            asset_b=cls._to_token(details["bAsset"]),
            reserve_a=int(item.get("tokenAQuantity") or 0),
            reserve_b=int(item.get("tokenBQuantity") or 0),
            address=item["poolValidatorUtxoAddress"],
            market_order_address=item["orderValidatorUtxoAddress"],
            limit_order_address=item["orderValidatorUtxoAddress"],
            pool_fee_percent=(fees["barFee"] + fees["liqFee"]) / 100,
            identifier=lp_token.identifier(),
            lp_token=lp_token,
            extra={
                "nft": Asset(
                    details["mainNFT"]["currencySymbol"],
                    details["mainNFT"].get("tokenName", ""),
                )
            },
        )


class VyFinance(BaseDex):
    """VyFinance DEX.

    Swap economics are the constant-product formula:

        out = (in * (M - f) * reserve_out) / (in * (M - f) + reserve_in * M)

    where ``M`` is ``POOL_FEE_MULTIPLIER`` and ``f`` the pool fee in the same
    units.
    """

    def __init__(self, api: Optional[VyfinanceApi] = None):
        self.api = api or VyfinanceApi()

    @property
    def name(self) -> str:
        return VYFINANCE

    async def liquidity_pools(self, provider: Optional[DataProvider] = None) -> list[LiquidityPool]:
        return await self.api.liquidity_pools()

    async def liquidity_pool_state(
        self, provider: DataProvider, pool: LiquidityPool
    ) -> LiquidityPool:
        nft = pool.extra.get("nft")
        utxos = await provider.utxos(pool.address, nft)

        if nft is not None:
            utxos = [u for u in utxos if u.quantity_of(nft) > 0]

        if not utxos:
            logger.warning(
                f"No UTxO found for VyFinance pool {pool.identifier} at {pool.address}, "
                "keeping API reserves"
            )
            return pool

        utxo = utxos[0]
        return dataclasses.replace(
            pool,
            reserve_a=utxo.quantity_of(pool.asset_a),
            reserve_b=utxo.quantity_of(pool.asset_b),
        )

    def _fee_modifier(self, pool: LiquidityPool) -> int:
        fee = round(pool.pool_fee_percent / 100 * POOL_FEE_MULTIPLIER)
        return POOL_FEE_MULTIPLIER - fee

    def estimated_receive(self, pool: LiquidityPool, token_in: Token, amount_in: int) -> int:
        reserve_in, reserve_out = pool.corresponding_reserves(token_in)
        amount_with_fee = amount_in * self._fee_modifier(pool)

        numerator = amount_with_fee * reserve_out
        denominator = amount_with_fee + reserve_in * POOL_FEE_MULTIPLIER
        if denominator == 0:
            return 0
        return numerator // denominator

    def price_impact_percent(self, pool: LiquidityPool, token_in: Token, amount_in: int) -> float:
        reserve_in, reserve_out = pool.corresponding_reserves(token_in)
        if amount_in <= 0 or reserve_in == 0 or reserve_out == 0:
            return 0.0

        fee_modifier = self._fee_modifier(pool)
        amount_with_fee = amount_in * fee_modifier
        numerator = amount_with_fee * reserve_out
        denominator = amount_with_fee + reserve_in * POOL_FEE_MULTIPLIER

        impact_numerator = (
            reserve_out * amount_in * denominator * fee_modifier
            - numerator * reserve_in * POOL_FEE_MULTIPLIER
        )
        impact_denominator = reserve_out * amount_in * denominator * POOL_FEE_MULTIPLIER

        return float(Fraction(impact_numerator * 100, impact_denominator))

    def swap_order_fees(self) -> list[SwapFee]:
        return [
            SwapFee(
                id="processFee",
                title="Process Fee",
                description="Fee paid for the service of off-chain batcher to process transactions.",
                value=1_900_000,
                is_returned=False,
            ),
            SwapFee(
                id="minAda",
                title="MinADA",
                description="MinADA will be held in the UTxO and returned when the order is processed.",
                value=2_000_000,
                is_returned=True,
            ),
        ]


def describe_pool(pool: LiquidityPool) -> str:
    """Short label for logs."""
    return f"{pool.dex}:{token_identifier(pool.asset_a)}/{token_identifier(pool.asset_b)}"
