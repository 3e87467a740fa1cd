"""Data provider base interface.

A data provider answers UTxO queries against the Cardano ledger. Two styles
are supported: a self-hosted Kupo indexer and the Blockfrost chain API.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional

import httpx

from vyswap.dex.assets import Asset, Token, tokens_match


@dataclass(frozen=True)
class RequestConfig:
    """Timeout and retry policy shared by all outbound requests."""

    timeout_ms: int = 5000
    retries: int = 3

    @property
    def timeout_seconds(self) -> float:
        return self.timeout_ms / 1000


@dataclass
class AssetBalance:
    """Quantity of one token held in a UTxO."""

    asset: Token
    quantity: int


@dataclass
class UTxO:
    """Unspent transaction output."""

    tx_hash: str
    output_index: int
    address: str
    asset_balances: list[AssetBalance] = field(default_factory=list)
    datum_hash: Optional[str] = None

    def quantity_of(self, token: Token) -> int:
        """Total quantity of ``token`` in this output."""
        return sum(b.quantity for b in self.asset_balances if tokens_match(b.asset, token))


class DataProvider(ABC):
    """Abstract base class for ledger data providers."""

    def __init__(
        self,
        request_config: Optional[RequestConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize provider.

        Args:
            request_config: Timeout/retry policy
            transport: Optional httpx transport (overrides the retrying default)
        """
        self.request_config = request_config or RequestConfig()
        self._transport = transport

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider name."""
        raise NotImplementedError()

    @abstractmethod
    async def utxos(self, address: str, asset: Optional[Asset] = None) -> list[UTxO]:
        """Fetch unspent outputs at an address.

        Args:
            address: Bech32 address
            asset: Only return outputs holding this asset

        Returns:
            List of UTxOs
        """
        raise NotImplementedError()

    def _client(self, **kwargs) -> httpx.AsyncClient:
        """Create an HTTP client bound to the request policy.

        Retries are delegated to the transport; nothing here retries on top.
        """
        transport = self._transport or httpx.AsyncHTTPTransport(
            retries=self.request_config.retries
        )
        return httpx.AsyncClient(
            transport=transport,
            timeout=self.request_config.timeout_seconds,
            **kwargs,
        )
