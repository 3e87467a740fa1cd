"""Parsing of user-supplied asset identifiers."""

from vyswap.dex.assets import LOVELACE, Asset, Token
from vyswap.errors import MalformedAssetIdentifier

# Case-insensitive spellings of the native currency
NATIVE_TOKENS = {"lovelace", "ada"}


def parse_asset(raw: str, decimals: int = 6) -> Token:
    """Parse ``"lovelace"``/``"ada"`` or ``<policyId>[.<nameHex>]``.

    Args:
        raw: Identifier from the request
        decimals: Display decimals (ignored for the native currency)

    Raises:
        MalformedAssetIdentifier: identifier cannot be parsed
    """
    if not isinstance(raw, str) or not raw.strip():
        raise MalformedAssetIdentifier(f"Invalid asset identifier: {raw!r}")

    if raw.strip().lower() in NATIVE_TOKENS:
        return LOVELACE

    return Asset.from_identifier(raw, decimals)
