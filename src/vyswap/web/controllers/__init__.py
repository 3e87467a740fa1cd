"""HTTP controllers for web API endpoints.

SECURITY: These controllers MUST NOT sign or submit transactions.
"""

from vyswap.web.controllers.swaps import router as swaps_router

__all__ = [
    "swaps_router",
]
