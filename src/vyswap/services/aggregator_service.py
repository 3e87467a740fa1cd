"""Service wrapping the DEX aggregator, plus its provider configuration."""

import logging
from typing import Iterable, Optional, Union

from vyswap.config import Settings
from vyswap.dex.assets import Token
from vyswap.dex.base import BaseDex
from vyswap.dex.client import Aggregator
from vyswap.dex.fetch import FetchRequest
from vyswap.dex.pools import LiquidityPool
from vyswap.dex.providers import BlockfrostProvider, KupoProvider, RequestConfig
from vyswap.errors import NoDataProviderConfigured

logger = logging.getLogger(__name__)


class AggregatorService:
    """High level access to liquidity pools through one aggregator instance."""

    def __init__(
        self,
        request_config: Optional[RequestConfig] = None,
        aggregator: Optional[Aggregator] = None,
    ):
        self.request_config = request_config or RequestConfig()
        self.aggregator = aggregator or Aggregator(self.request_config)

    @property
    def provider_name(self) -> Optional[str]:
        """Name of the attached data provider, if any."""
        provider = self.aggregator.data_provider
        return provider.name if provider else None

    def with_kupo_provider(self, url: str) -> "AggregatorService":
        self.aggregator.with_data_provider(KupoProvider(url, self.request_config))
        return self

    def with_blockfrost_provider(self, url: str, project_id: str) -> "AggregatorService":
        self.aggregator.with_data_provider(
            BlockfrostProvider(url, project_id, self.request_config)
        )
        return self

    def new_fetch_request(self) -> FetchRequest:
        return self.aggregator.new_fetch_request()

    def dex_by_name(self, name: str) -> Optional[BaseDex]:
        return self.aggregator.dex_by_name(name)

    def get_available_dex_names(self) -> list[str]:
        return list(self.aggregator.available_dexs)

    async def get_all_liquidity_pools(self) -> list[LiquidityPool]:
        return await self.new_fetch_request().on_all_dexs().get_liquidity_pools()

    async def get_liquidity_pools_from_dexs(
        self, dex_names: Union[str, Iterable[str]]
    ) -> list[LiquidityPool]:
        return await self.new_fetch_request().on_dexs(dex_names).get_liquidity_pools()

    def _request_on(self, dex_names: Optional[Union[str, Iterable[str]]]) -> FetchRequest:
        request = self.new_fetch_request()
        return request.on_dexs(dex_names) if dex_names else request.on_all_dexs()

    async def get_liquidity_pools_for_tokens(
        self,
        tokens: Iterable[Token],
        dex_names: Optional[Union[str, Iterable[str]]] = None,
    ) -> list[LiquidityPool]:
        return await self._request_on(dex_names).for_tokens(tokens).get_liquidity_pools()

    async def get_liquidity_pools_for_token_pairs(
        self,
        token_pairs: Iterable[Iterable[Token]],
        dex_names: Optional[Union[str, Iterable[str]]] = None,
    ) -> list[LiquidityPool]:
        return await self._request_on(dex_names).for_token_pairs(token_pairs).get_liquidity_pools()

    async def get_liquidity_pool_state(self, pool: LiquidityPool) -> LiquidityPool:
        return await self.new_fetch_request().get_liquidity_pool_state(pool)


def configure_data_provider(service: AggregatorService, settings: Settings) -> str:
    """Attach exactly one data provider to ``service``.

    Kupo wins outright when configured; otherwise Blockfrost is used when both
    its URL and project id are set.

    Returns:
        Name of the configured provider

    Raises:
        NoDataProviderConfigured: neither provider is configured
    """
    if settings.has_kupo:
        logger.info("Configuring Kupo provider...")
        service.with_kupo_provider(settings.kupo_url)
    elif settings.has_blockfrost:
        logger.info("Configuring Blockfrost provider...")
        service.with_blockfrost_provider(settings.blockfrost_url, settings.blockfrost_project_id)
    else:
        raise NoDataProviderConfigured(
            "No data provider configured. Set KUPO_URL or BLOCKFROST credentials in .env"
        )
    return service.provider_name


def build_aggregator_service(settings: Settings) -> AggregatorService:
    """Construct a fully configured service (factory for the app's OnceCell)."""
    request_config = RequestConfig(
        timeout_ms=settings.request_timeout_ms,
        retries=settings.request_retries,
    )
    service = AggregatorService(
        request_config,
        Aggregator(request_config, vyfi_api_url=settings.vyfi_api_url),
    )
    configure_data_provider(service, settings)
    return service
