"""Ledger data providers (Kupo indexer, Blockfrost chain API)."""

from vyswap.dex.providers.base import AssetBalance, DataProvider, RequestConfig, UTxO
from vyswap.dex.providers.blockfrost import BlockfrostProvider
from vyswap.dex.providers.kupo import KupoProvider

__all__ = [
    "AssetBalance",
    "DataProvider",
    "RequestConfig",
    "UTxO",
    "BlockfrostProvider",
    "KupoProvider",
]
