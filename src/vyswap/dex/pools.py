"""Liquidity pool and fee models."""

from dataclasses import dataclass, field
from typing import Optional

from vyswap.dex.assets import Asset, Token, token_identifier, tokens_match


@dataclass
class SwapFee:
    """A fee charged when placing a swap order on a DEX."""

    id: str
    title: str
    description: str
    value: int  # lovelace
    is_returned: bool

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "value": self.value,
            "isReturned": self.is_returned,
        }


@dataclass
class LiquidityPool:
    """Read-only projection of an on-chain liquidity pool."""

    dex: str
    asset_a: Token
    asset_b: Token
    reserve_a: int
    reserve_b: int
    address: str
    market_order_address: str = ""
    limit_order_address: str = ""
    pool_fee_percent: float = 0.0
    identifier: str = ""
    lp_token: Optional[Asset] = None
    extra: dict = field(default_factory=dict)

    def has_pair(self, token_a: Token, token_b: Token) -> bool:
        """Check whether this pool trades the unordered pair {token_a, token_b}."""
        return (
            tokens_match(self.asset_a, token_a) and tokens_match(self.asset_b, token_b)
        ) or (
            tokens_match(self.asset_a, token_b) and tokens_match(self.asset_b, token_a)
        )

    def has_token(self, token: Token) -> bool:
        return tokens_match(self.asset_a, token) or tokens_match(self.asset_b, token)

    def corresponding_reserves(self, token_in: Token) -> tuple[int, int]:
        """Return ``(reserve_in, reserve_out)`` for a swap paying in ``token_in``."""
        if tokens_match(self.asset_a, token_in):
            return self.reserve_a, self.reserve_b
        if tokens_match(self.asset_b, token_in):
            return self.reserve_b, self.reserve_a
        raise ValueError(
            f"Token {token_identifier(token_in)} is not part of pool {self.identifier or self.address}"
        )
