"""Cardano DEX aggregation layer.

Components:
- assets: native sentinel and native asset model
- pools: liquidity pool and swap fee models
- providers: Kupo indexer and Blockfrost chain API
- vyfinance: VyFinance pool discovery and swap economics
- fetch / client: query builder and the aggregator entry point
"""

from vyswap.dex.assets import LOVELACE, Asset, Lovelace, Token
from vyswap.dex.base import BaseDex
from vyswap.dex.client import Aggregator
from vyswap.dex.fetch import FetchRequest
from vyswap.dex.pools import LiquidityPool, SwapFee
from vyswap.dex.vyfinance import VYFINANCE, VyFinance, VyfinanceApi

__all__ = [
    # Assets
    "LOVELACE",
    "Asset",
    "Lovelace",
    "Token",
    # Pools
    "LiquidityPool",
    "SwapFee",
    # DEXs
    "BaseDex",
    "VYFINANCE",
    "VyFinance",
    "VyfinanceApi",
    # Client
    "Aggregator",
    "FetchRequest",
]
