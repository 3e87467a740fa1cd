"""Abstract DEX interface."""

from abc import ABC, abstractmethod
from typing import Optional

from vyswap.dex.assets import Token
from vyswap.dex.pools import LiquidityPool, SwapFee
from vyswap.dex.providers.base import DataProvider


class BaseDex(ABC):
    """Abstract base class for a Cardano DEX.

    Pool discovery and state are async (they hit the network); the swap
    economics are pure functions over a resolved pool.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """DEX name identifier (used in ``on_dexs`` filters)."""
        pass

    @abstractmethod
    async def liquidity_pools(self, provider: Optional[DataProvider] = None) -> list[LiquidityPool]:
        """
        Fetch every pool listed by this DEX.

        Args:
            provider: Configured data provider, if any

        Returns:
            Pools in the DEX's own ordering
        """
        pass

    @abstractmethod
    async def liquidity_pool_state(
        self, provider: DataProvider, pool: LiquidityPool
    ) -> LiquidityPool:
        """Return a copy of ``pool`` with reserves read from the ledger."""
        pass

    @abstractmethod
    def estimated_receive(self, pool: LiquidityPool, token_in: Token, amount_in: int) -> int:
        """
        Estimate the output amount of a swap.

        Args:
            pool: Resolved pool
            token_in: Token paid in
            amount_in: Amount in the token's smallest unit

        Returns:
            Output amount in the counter token's smallest unit
        """
        pass

    @abstractmethod
    def price_impact_percent(self, pool: LiquidityPool, token_in: Token, amount_in: int) -> float:
        """Percentage deviation from the pool's mid price caused by this swap."""
        pass

    @abstractmethod
    def swap_order_fees(self) -> list[SwapFee]:
        """Fees charged for placing a swap order."""
        pass
