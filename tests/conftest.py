"""Pytest configuration and fixtures."""

import os
from typing import Callable, Optional

import pytest

# Set test environment (no provider configured unless a test asks for one)
os.environ["ENVIRONMENT"] = "test"
os.environ["DEBUG"] = "true"
for var in ("KUPO_URL", "BLOCKFROST_URL", "BLOCKFROST_PROJECT_ID"):
    os.environ.pop(var, None)

from vyswap.config import Settings
from vyswap.dex.assets import LOVELACE, Asset, Token
from vyswap.dex.base import BaseDex
from vyswap.dex.client import Aggregator
from vyswap.dex.pools import LiquidityPool, SwapFee
from vyswap.dex.providers.base import DataProvider, UTxO
from vyswap.dex.vyfinance import VYFINANCE
from vyswap.services.aggregator_service import AggregatorService

MIN_POLICY = "29d222ce763455e3d7a09a665ce554f00ac89d2e99a1a83d267170c6"
MIN_NAME_HEX = "4d494e"
MIN_ID = f"{MIN_POLICY}.{MIN_NAME_HEX}"

SUNDAE_POLICY = "9a9693a9a37912a5097918f97918d15240c92ab729a0b7c4aa144d77"
SUNDAE_NAME_HEX = "53554e444145"


class FakeDex(BaseDex):
    """In-memory DEX that records how it is used."""

    def __init__(
        self,
        pools: Optional[list[LiquidityPool]] = None,
        receive: int = 0,
        impact: float = 0.0,
        error: Optional[Exception] = None,
        dex_name: str = VYFINANCE,
    ):
        self.pools = pools or []
        self.receive = receive
        self.impact = impact
        self.error = error
        self._name = dex_name
        self.pool_queries = 0
        self.state_queries = 0
        self.receive_calls: list[int] = []

    @property
    def name(self) -> str:
        return self._name

    async def liquidity_pools(self, provider=None) -> list[LiquidityPool]:
        self.pool_queries += 1
        if self.error is not None:
            raise self.error
        return list(self.pools)

    async def liquidity_pool_state(self, provider, pool: LiquidityPool) -> LiquidityPool:
        self.state_queries += 1
        return pool

    def estimated_receive(self, pool, token_in, amount_in: int) -> int:
        self.receive_calls.append(amount_in)
        return self.receive

    def price_impact_percent(self, pool, token_in, amount_in: int) -> float:
        return self.impact

    def swap_order_fees(self) -> list[SwapFee]:
        return [SwapFee("processFee", "Process Fee", "Batcher fee", 1_900_000, False)]


class FakeProvider(DataProvider):
    """Data provider serving canned UTxOs."""

    def __init__(self, utxos: Optional[list[UTxO]] = None):
        super().__init__()
        self._utxos = utxos or []
        self.calls: list[tuple] = []

    @property
    def name(self) -> str:
        return "Fake"

    async def utxos(self, address: str, asset: Optional[Asset] = None) -> list[UTxO]:
        self.calls.append((address, asset))
        return list(self._utxos)


@pytest.fixture
def min_asset() -> Asset:
    return Asset(MIN_POLICY, MIN_NAME_HEX, 6)


@pytest.fixture
def sundae_asset() -> Asset:
    return Asset(SUNDAE_POLICY, SUNDAE_NAME_HEX, 6)


@pytest.fixture
def make_pool() -> Callable[..., LiquidityPool]:
    """Factory for VyFinance-like pools."""

    def _make(
        asset_a: Token = LOVELACE,
        asset_b: Token = Asset(MIN_POLICY, MIN_NAME_HEX),
        reserve_a: int = 1_000_000_000_000,
        reserve_b: int = 500_000_000_000,
        address: str = "addr1_pool",
        fee: float = 0.3,
        **kwargs,
    ) -> LiquidityPool:
        return LiquidityPool(
            dex=VYFINANCE,
            asset_a=asset_a,
            asset_b=asset_b,
            reserve_a=reserve_a,
            reserve_b=reserve_b,
            address=address,
            pool_fee_percent=fee,
            identifier=f"lp_{address}",
            **kwargs,
        )

    return _make


@pytest.fixture
def test_settings() -> Settings:
    """Settings with no data provider configured."""
    return Settings(
        _env_file=None,
        kupo_url=None,
        blockfrost_url=None,
        blockfrost_project_id=None,
        debug=True,
    )


@pytest.fixture
def make_service() -> Callable[..., AggregatorService]:
    """Aggregator service over fake DEXs, optionally with a data provider."""

    def _make(*dexs: BaseDex, provider: Optional[DataProvider] = None) -> AggregatorService:
        aggregator = Aggregator(dexs=list(dexs))
        if provider is not None:
            aggregator.with_data_provider(provider)
        return AggregatorService(aggregator=aggregator)

    return _make
