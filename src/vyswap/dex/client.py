"""Aggregator client: the registry of DEXs plus one data provider binding."""

import logging
from typing import Optional

from vyswap.dex.base import BaseDex
from vyswap.dex.fetch import FetchRequest
from vyswap.dex.providers.base import DataProvider, RequestConfig
from vyswap.dex.vyfinance import VYFI_API, VyFinance, VyfinanceApi
from vyswap.errors import ConfigurationError

logger = logging.getLogger(__name__)


class Aggregator:
    """Entry point for pool queries and swap economics across DEXs."""

    def __init__(
        self,
        request_config: Optional[RequestConfig] = None,
        vyfi_api_url: str = VYFI_API,
        dexs: Optional[list[BaseDex]] = None,
    ):
        self.request_config = request_config or RequestConfig()
        if dexs is None:
            dexs = [VyFinance(VyfinanceApi(vyfi_api_url, self.request_config))]
        self.available_dexs: dict[str, BaseDex] = {dex.name: dex for dex in dexs}
        self._data_provider: Optional[DataProvider] = None

    @property
    def data_provider(self) -> Optional[DataProvider]:
        return self._data_provider

    def with_data_provider(self, provider: DataProvider) -> "Aggregator":
        """Attach the data provider. Only one binding is allowed per instance."""
        if self._data_provider is not None:
            raise ConfigurationError(
                f"Data provider already configured ({self._data_provider.name}); "
                f"refusing to replace it with {provider.name}"
            )
        self._data_provider = provider
        logger.info(f"{provider.name} provider configured")
        return self

    def dex_by_name(self, name: str) -> Optional[BaseDex]:
        return self.available_dexs.get(name)

    def new_fetch_request(self) -> FetchRequest:
        return FetchRequest(self)
