"""Web boundary layer.

All operations here are read-only: quotes and pool listings are computed
from public chain data, nothing is signed or submitted.
"""

__all__ = [
    "contracts",
    "services",
    "controllers",
]
