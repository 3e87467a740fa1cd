"""Web services for read-only DEX operations.

SECURITY: These services MUST NOT sign or submit transactions. They can
query pool state, estimate swaps and report DEX metadata.
"""

from vyswap.web.services.swap_service import SwapService

__all__ = [
    "SwapService",
]
