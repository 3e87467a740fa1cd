"""Utility modules for vyswap."""

from vyswap.utils.once import OnceCell
from vyswap.utils.serialization import sanitize

__all__ = ["OnceCell", "sanitize"]
