"""Facade services: asset parsing, aggregator lifecycle, pool resolution."""

from vyswap.services.aggregator_service import (
    AggregatorService,
    build_aggregator_service,
    configure_data_provider,
)
from vyswap.services.assets import parse_asset
from vyswap.services.pool_resolver import find_pool, list_pools

__all__ = [
    "AggregatorService",
    "build_aggregator_service",
    "configure_data_provider",
    "parse_asset",
    "find_pool",
    "list_pools",
]
