"""Swap service for VyFinance estimates, pool listings and DEX info.

This is a READ-ONLY service: it never builds, signs or submits transactions.
"""

import logging
from typing import Optional, Union

from vyswap.dex.assets import Lovelace, Token, token_identifier, token_name
from vyswap.dex.base import BaseDex
from vyswap.dex.pools import LiquidityPool
from vyswap.dex.vyfinance import VYFINANCE
from vyswap.errors import (
    ConfigurationError,
    NotFoundError,
    SwapBuildNotImplemented,
    ValidationError,
)
from vyswap.services.aggregator_service import AggregatorService
from vyswap.services.assets import parse_asset
from vyswap.services.pool_resolver import find_pool, list_pools
from vyswap.utils.once import OnceCell
from vyswap.utils.serialization import sanitize
from vyswap.web.contracts.swaps import BuildSwapRequest, EstimateSwapRequest

logger = logging.getLogger(__name__)


def parse_amount(raw: Union[int, str]) -> int:
    """Parse a positive integer amount given as a number or decimal string."""
    if isinstance(raw, bool):
        raise ValidationError(f"Invalid swapInAmount: {raw!r}")
    try:
        amount = int(raw) if isinstance(raw, int) else int(raw.strip(), 10)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid swapInAmount: {raw!r} (expected an integer in the smallest unit)") from None
    if amount <= 0:
        raise ValidationError("swapInAmount must be positive")
    return amount


def format_pool_summary(pool: LiquidityPool) -> dict:
    def label(token: Token) -> str:
        return "ADA" if isinstance(token, Lovelace) else token_identifier(token)

    return {
        "address": pool.address,
        "dex": pool.dex,
        "assetA": label(pool.asset_a),
        "assetB": label(pool.asset_b),
    }


def format_pool(pool: LiquidityPool) -> dict:
    return {
        "address": pool.address,
        "dex": pool.dex,
        "identifier": pool.identifier,
        "assetA": {"identifier": token_identifier(pool.asset_a), "name": token_name(pool.asset_a)},
        "assetB": {"identifier": token_identifier(pool.asset_b), "name": token_name(pool.asset_b)},
        "reserveA": pool.reserve_a,
        "reserveB": pool.reserve_b,
        "poolFeePercent": pool.pool_fee_percent,
    }


class SwapService:
    """Service for VyFinance swap estimates.

    The aggregator service is obtained from a ``OnceCell`` owned by the app,
    so configuration runs once per process and a configuration failure is
    reported identically on every request.
    """

    def __init__(self, aggregator_cell: OnceCell[AggregatorService], dex_name: str = VYFINANCE):
        self._cell = aggregator_cell
        self.dex_name = dex_name

    def _dex(self, service: AggregatorService) -> BaseDex:
        dex = service.dex_by_name(self.dex_name)
        if dex is None:
            raise ConfigurationError(f"{self.dex_name} DEX not available in aggregator")
        return dex

    @staticmethod
    def _require(request: EstimateSwapRequest, extra: Optional[dict] = None) -> None:
        fields = {
            "swapInAsset": request.swap_in_asset,
            "swapInAmount": request.swap_in_amount,
            "swapOutAsset": request.swap_out_asset,
            **(extra or {}),
        }
        missing = [name for name, value in fields.items() if value is None or value == ""]
        if missing:
            raise ValidationError(f"Missing required fields: {', '.join(missing)}")

    async def estimate(self, request: EstimateSwapRequest) -> dict:
        """Estimate output, unit price and price impact of a swap.

        Args:
            request: Estimate request

        Returns:
            Response payload with pool summary and swap figures
        """
        self._require(request)
        amount_in = parse_amount(request.swap_in_amount)
        asset_in = parse_asset(request.swap_in_asset, request.decimals_in)
        asset_out = parse_asset(request.swap_out_asset, request.decimals_out)

        service = self._cell.get()
        pool = await find_pool(service, asset_in, asset_out, self.dex_name)
        if pool is None:
            raise NotFoundError(
                f"No {self.dex_name} pool found for {request.swap_in_asset} / {request.swap_out_asset}"
            )

        dex = self._dex(service)
        estimated_receive = dex.estimated_receive(pool, asset_in, amount_in)
        price_impact = dex.price_impact_percent(pool, asset_in, amount_in)
        # How much of asset_out one whole unit of asset_in buys
        price_per_unit = dex.estimated_receive(pool, asset_in, 10 ** request.decimals_in)

        logger.info(
            f"Estimated {amount_in} {token_identifier(asset_in)} -> "
            f"{estimated_receive} {token_identifier(asset_out)} (impact {price_impact:.4f}%)"
        )

        return {
            "success": True,
            "data": sanitize(
                {
                    "pool": format_pool_summary(pool),
                    "swap": {
                        "swapInAsset": request.swap_in_asset,
                        "swapInAmount": amount_in,
                        "swapOutAsset": request.swap_out_asset,
                        "estimatedReceive": estimated_receive,
                        "priceImpactPercent": price_impact,
                        "pricePerUnit": price_per_unit,
                    },
                }
            ),
        }

    async def build(self, request: BuildSwapRequest) -> dict:
        """Building transactions needs a CIP-30 wallet; always answers 501."""
        self._require(request, {"walletAddress": request.wallet_address})
        raise SwapBuildNotImplemented(
            "Building swap transactions requires wallet provider integration. "
            "This would need CIP-30 wallet connection in a frontend application. "
            "For now, use the /estimate endpoint to calculate swap details.",
            extra={
                "suggestion": (
                    "To build transactions: 1) Use estimate endpoint, "
                    "2) Connect wallet via CIP-30, 3) Build the swap order client-side"
                )
            },
        )

    async def list_pools(
        self,
        asset_a: Optional[str] = None,
        asset_b: Optional[str] = None,
        decimals_a: int = 6,
        decimals_b: int = 6,
    ) -> dict:
        """List pools of the DEX, filtered to a pair when both assets are given."""
        pair = None
        if asset_a and asset_b:
            pair = (parse_asset(asset_a, decimals_a), parse_asset(asset_b, decimals_b))

        service = self._cell.get()
        pools = await list_pools(service, self.dex_name, pair)

        return {
            "success": True,
            "data": {
                "count": len(pools),
                "pools": sanitize([format_pool(p) for p in pools]),
            },
        }

    def dex_info(self) -> dict:
        """DEX name, swap fee schedule and active data provider."""
        service = self._cell.get()
        dex = self._dex(service)

        return {
            "success": True,
            "data": {
                "dex": self.dex_name,
                "swapFees": sanitize([fee.to_dict() for fee in dex.swap_order_fees()]),
                "dataProvider": service.provider_name,
                "availableDexs": service.get_available_dex_names(),
            },
        }
