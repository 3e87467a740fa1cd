"""Error taxonomy for the swap API.

Every error carries the HTTP status and the short title used in the
``{"error": ..., "message": ...}`` response body. The mapping to responses
happens once, in the app's exception handlers.
"""

from typing import Optional


class VyswapError(Exception):
    """Base class for all errors raised by the service."""

    status_code: int = 500
    title: str = "Internal Server Error"

    def __init__(self, message: str, extra: Optional[dict] = None):
        super().__init__(message)
        self.message = message
        self.extra = extra or {}

    def to_dict(self) -> dict:
        """Response body for this error."""
        return {"error": self.title, "message": self.message, **self.extra}


class ValidationError(VyswapError):
    """Missing or malformed request input (user fixable)."""

    status_code = 400
    title = "Bad Request"


class MalformedAssetIdentifier(ValidationError):
    """Asset identifier is not ``<policyId>[.<nameHex>]``."""

    pass


class NotFoundError(VyswapError):
    """No liquidity pool exists for the requested pair."""

    status_code = 404
    title = "Pool Not Found"


class ConfigurationError(VyswapError):
    """The service cannot be configured (fatal for pool-dependent requests)."""

    status_code = 500
    title = "Configuration Error"


class NoDataProviderConfigured(ConfigurationError):
    """Neither Kupo nor Blockfrost settings are present."""

    pass


class UpstreamError(VyswapError):
    """Data provider or DEX API failure."""

    status_code = 500
    title = "Upstream Error"


class SwapBuildNotImplemented(VyswapError):
    """Building swap transactions needs a wallet integration we don't have."""

    status_code = 501
    title = "Not Implemented"
