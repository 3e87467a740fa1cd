"""Request contracts for the web layer."""

from vyswap.web.contracts.swaps import BuildSwapRequest, EstimateSwapRequest

__all__ = [
    "BuildSwapRequest",
    "EstimateSwapRequest",
]
