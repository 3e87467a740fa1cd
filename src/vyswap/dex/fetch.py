"""Fluent builder for liquidity pool queries."""

import asyncio
import logging
from typing import TYPE_CHECKING, Iterable, Optional, Union

from vyswap.dex.assets import Token
from vyswap.dex.base import BaseDex
from vyswap.dex.pools import LiquidityPool

if TYPE_CHECKING:
    from vyswap.dex.client import Aggregator

logger = logging.getLogger(__name__)


class FetchRequest:
    """Query builder returned by ``Aggregator.new_fetch_request()``.

    Example:
        pools = await (
            aggregator.new_fetch_request()
            .on_dexs("VyFinance")
            .for_token_pairs([(LOVELACE, asset)])
            .get_liquidity_pools()
        )
    """

    def __init__(self, aggregator: "Aggregator"):
        self._aggregator = aggregator
        self._dexs: Optional[list[BaseDex]] = None
        self._tokens: list[Token] = []
        self._token_pairs: list[tuple[Token, Token]] = []

    def on_dexs(self, names: Union[str, Iterable[str]]) -> "FetchRequest":
        """Restrict the query to the named DEXs. Unknown names are skipped."""
        if isinstance(names, str):
            names = [names]

        self._dexs = []
        for name in names:
            dex = self._aggregator.dex_by_name(name)
            if dex is None:
                logger.warning(f"Unknown DEX '{name}', skipping")
                continue
            self._dexs.append(dex)
        return self

    def on_all_dexs(self) -> "FetchRequest":
        self._dexs = list(self._aggregator.available_dexs.values())
        return self

    def for_tokens(self, tokens: Iterable[Token]) -> "FetchRequest":
        """Only keep pools containing any of ``tokens``."""
        self._tokens = list(tokens)
        return self

    def for_token_pairs(self, pairs: Iterable[Iterable[Token]]) -> "FetchRequest":
        """Only keep pools trading one of the (unordered) pairs."""
        self._token_pairs = [tuple(pair) for pair in pairs]
        for pair in self._token_pairs:
            if len(pair) != 2:
                raise ValueError(f"Token pair must have exactly two tokens, got {len(pair)}")
        return self

    def _matches(self, pool: LiquidityPool) -> bool:
        if self._token_pairs and not any(pool.has_pair(a, b) for a, b in self._token_pairs):
            return False
        if self._tokens and not any(pool.has_token(t) for t in self._tokens):
            return False
        return True

    async def get_liquidity_pools(self) -> list[LiquidityPool]:
        """Run the query.

        Pools keep each DEX's ordering, DEXs in the order they were selected.
        Filtered queries refresh every matched pool from the data provider;
        unfiltered listings return the DEX snapshot as is.
        """
        dexs = self._dexs if self._dexs is not None else list(self._aggregator.available_dexs.values())
        provider = self._aggregator.data_provider
        filtered = bool(self._tokens or self._token_pairs)

        results: list[LiquidityPool] = []
        for dex in dexs:
            pools = [p for p in await dex.liquidity_pools(provider) if self._matches(p)]

            if filtered and provider is not None and pools:
                pools = list(
                    await asyncio.gather(
                        *(dex.liquidity_pool_state(provider, p) for p in pools)
                    )
                )

            logger.debug(f"{dex.name}: {len(pools)} pool(s) matched")
            results.extend(pools)

        return results

    async def get_liquidity_pool_state(self, pool: LiquidityPool) -> LiquidityPool:
        """Re-read a single pool's reserves from the data provider."""
        dex: Optional[BaseDex] = self._aggregator.dex_by_name(pool.dex)
        provider = self._aggregator.data_provider

        if dex is None:
            raise ValueError(f"Unknown DEX '{pool.dex}'")
        if provider is None:
            raise ValueError("A data provider is required to fetch pool state")

        return await dex.liquidity_pool_state(provider, pool)
