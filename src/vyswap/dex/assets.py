"""Cardano asset model.

A token is either the native currency (``LOVELACE``) or a native asset
identified by its minting policy id and hex-encoded asset name.
"""

import re
from dataclasses import dataclass, field
from typing import ClassVar, Union

from vyswap.errors import MalformedAssetIdentifier

POLICY_ID_LENGTH = 56
MAX_NAME_HEX_LENGTH = 64

_HEX_RE = re.compile(r"^[0-9a-fA-F]*$")


@dataclass(frozen=True)
class Lovelace:
    """The chain's native currency (ADA, counted in lovelace)."""

    decimals: ClassVar[int] = 6

    def __str__(self) -> str:
        return "lovelace"


LOVELACE = Lovelace()


@dataclass(frozen=True)
class Asset:
    """A Cardano native asset.

    Identity is ``policy_id + name_hex``; ``decimals`` is display metadata and
    takes no part in equality or hashing.
    """

    policy_id: str
    name_hex: str = ""
    decimals: int = field(default=0, compare=False)

    @classmethod
    def from_identifier(cls, identifier: str, decimals: int = 0) -> "Asset":
        """Parse ``<policyId>.<nameHex>`` or ``<policyId><nameHex>``.

        Raises:
            MalformedAssetIdentifier: if the policy id or name is not valid hex
                of the expected length, or decimals is negative.
        """
        raw = identifier.strip()
        if raw.count(".") > 1:
            raise MalformedAssetIdentifier(f"Invalid asset identifier: {identifier}")
        raw = raw.replace(".", "")

        policy_id, name_hex = raw[:POLICY_ID_LENGTH], raw[POLICY_ID_LENGTH:]

        if len(policy_id) != POLICY_ID_LENGTH or not _HEX_RE.match(policy_id):
            raise MalformedAssetIdentifier(
                f"Invalid asset identifier: {identifier} "
                f"(policy id must be {POLICY_ID_LENGTH} hex characters)"
            )
        if (
            not _HEX_RE.match(name_hex)
            or len(name_hex) % 2
            or len(name_hex) > MAX_NAME_HEX_LENGTH
        ):
            raise MalformedAssetIdentifier(
                f"Invalid asset identifier: {identifier} (asset name must be hex, max 32 bytes)"
            )
        if decimals < 0:
            raise MalformedAssetIdentifier(f"Invalid decimals for {identifier}: {decimals}")

        return cls(policy_id.lower(), name_hex.lower(), decimals)

    def identifier(self, delimiter: str = "") -> str:
        """Canonical identifier, optionally with a delimiter between policy and name."""
        return f"{self.policy_id}{delimiter}{self.name_hex}"

    @property
    def asset_name(self) -> str:
        """Asset name decoded from hex (falls back to the raw hex)."""
        try:
            return bytes.fromhex(self.name_hex).decode("utf-8")
        except (ValueError, UnicodeDecodeError):
            return self.name_hex

    def __str__(self) -> str:
        return self.identifier(".")


Token = Union[Lovelace, Asset]


def token_identifier(token: Token) -> str:
    """Identifier used in pool filters and responses."""
    if isinstance(token, Lovelace):
        return "lovelace"
    if isinstance(token, Asset):
        return token.identifier()
    raise TypeError(f"Unsupported token: {token!r}")


def token_name(token: Token) -> str:
    """Human readable name."""
    if isinstance(token, Lovelace):
        return "ADA"
    if isinstance(token, Asset):
        return token.asset_name
    raise TypeError(f"Unsupported token: {token!r}")


def token_decimals(token: Token) -> int:
    if isinstance(token, (Lovelace, Asset)):
        return token.decimals
    raise TypeError(f"Unsupported token: {token!r}")


def tokens_match(a: Token, b: Token) -> bool:
    """Check whether two tokens are the same asset (decimals ignored)."""
    return token_identifier(a) == token_identifier(b)
