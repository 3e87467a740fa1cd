"""Swap API endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request

from vyswap.web.contracts.swaps import BuildSwapRequest, EstimateSwapRequest
from vyswap.web.services.swap_service import SwapService

router = APIRouter(prefix="/api/swap", tags=["swap"])


def get_swap_service(request: Request) -> SwapService:
    """Build the service around the app-owned aggregator cell."""
    return SwapService(request.app.state.aggregator_cell)


@router.post("/estimate")
async def estimate_swap(
    payload: EstimateSwapRequest,
    swap_service: SwapService = Depends(get_swap_service),
) -> dict:
    """Estimate swap output, price and price impact.

    This is a READ-ONLY operation - no transactions are built.
    """
    return await swap_service.estimate(payload)


@router.post("/build")
async def build_swap(
    payload: BuildSwapRequest,
    swap_service: SwapService = Depends(get_swap_service),
) -> dict:
    """Build a swap transaction (not implemented, answers 501)."""
    return await swap_service.build(payload)


@router.get("/pools")
async def get_pools(
    asset_a: Optional[str] = Query(None, alias="assetA", description='e.g. "lovelace"'),
    asset_b: Optional[str] = Query(None, alias="assetB"),
    decimals_a: int = Query(6, ge=0, le=30, alias="decimalsA"),
    decimals_b: int = Query(6, ge=0, le=30, alias="decimalsB"),
    swap_service: SwapService = Depends(get_swap_service),
) -> dict:
    """Get VyFinance liquidity pools, filtered by pair when both assets are given."""
    return await swap_service.list_pools(asset_a, asset_b, decimals_a, decimals_b)


@router.get("/info")
async def get_dex_info(swap_service: SwapService = Depends(get_swap_service)) -> dict:
    """Get VyFinance DEX information and fees."""
    return swap_service.dex_info()
