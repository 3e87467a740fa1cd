"""JSON-safe conversion of on-chain amounts."""

from typing import Any


def sanitize(value: Any) -> Any:
    """Rewrite every integer in a nested value into its decimal string.

    Walks dicts and lists/tuples depth first (tuples come back as lists).
    ``bool`` is left alone, as are all other leaf types (floats, strings,
    ``None``, arbitrary objects). Running it twice gives the same result as
    running it once.
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return str(value)
    if isinstance(value, dict):
        return {key: sanitize(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [sanitize(item) for item in value]
    return value
