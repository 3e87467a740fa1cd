"""Liquidity pool resolution for an asset pair.

Selection rule: the first pool in the provider's ordering wins. Candidates are
not re-ranked by liquidity or fee.
"""

import logging
from typing import Optional

from vyswap.dex.assets import Token, token_identifier
from vyswap.dex.pools import LiquidityPool
from vyswap.dex.vyfinance import VYFINANCE, describe_pool
from vyswap.errors import UpstreamError
from vyswap.services.aggregator_service import AggregatorService

logger = logging.getLogger(__name__)


async def find_pool(
    service: AggregatorService,
    asset_a: Token,
    asset_b: Token,
    dex_name: str = VYFINANCE,
) -> Optional[LiquidityPool]:
    """Find a pool trading {asset_a, asset_b} on ``dex_name``.

    Returns:
        The first matching pool, or None when there is none

    Raises:
        UpstreamError: the pool query itself failed
    """
    pair = f"{token_identifier(asset_a)}/{token_identifier(asset_b)}"
    try:
        pools = await service.get_liquidity_pools_for_token_pairs([[asset_a, asset_b]], dex_name)
    except Exception as e:
        logger.error(f"Error finding {dex_name} pool for {pair}: {e}")
        raise UpstreamError(f"Failed to query {dex_name} pools: {e}") from e

    if not pools:
        logger.info(f"No {dex_name} pool for {pair}")
        return None

    if len(pools) > 1:
        logger.debug(f"{len(pools)} {dex_name} pools for {pair}, using the first")
    pool = pools[0]
    logger.debug(f"Resolved pool {describe_pool(pool)} at {pool.address}")
    return pool


async def list_pools(
    service: AggregatorService,
    dex_name: Optional[str] = None,
    pair: Optional[tuple[Token, Token]] = None,
) -> list[LiquidityPool]:
    """List every pool of ``dex_name``, or of every DEX when no name is given.

    Args:
        service: Configured aggregator service
        dex_name: Restrict to this DEX
        pair: Only pools trading this unordered pair

    Raises:
        UpstreamError: the pool query failed
    """
    try:
        if pair is not None:
            return await service.get_liquidity_pools_for_token_pairs([list(pair)], dex_name)
        if dex_name:
            return await service.get_liquidity_pools_from_dexs(dex_name)
        return await service.get_all_liquidity_pools()
    except Exception as e:
        logger.error(f"Error listing {dex_name or 'all'} pools: {e}")
        raise UpstreamError(f"Failed to list {dex_name or 'DEX'} pools: {e}") from e
