"""Swap request contracts.

Field names follow the public camelCase API. Required inputs are Optional at
the schema level so that missing fields are answered with 400 by the service
instead of a schema error.
"""

from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class EstimateSwapRequest(BaseModel):
    """Request for a swap estimate."""

    model_config = ConfigDict(populate_by_name=True)

    swap_in_asset: Optional[str] = Field(
        None,
        alias="swapInAsset",
        description='Asset to swap from: "lovelace" for ADA or policyId.assetName',
    )
    swap_in_amount: Optional[Union[int, str]] = Field(
        None,
        alias="swapInAmount",
        description="Amount to swap in the asset's smallest unit (e.g. lovelace)",
    )
    swap_out_asset: Optional[str] = Field(
        None, alias="swapOutAsset", description="Asset to receive"
    )
    decimals_in: int = Field(6, ge=0, le=30, alias="decimalsIn", description="Decimals of swapInAsset")
    decimals_out: int = Field(6, ge=0, le=30, alias="decimalsOut", description="Decimals of swapOutAsset")


class BuildSwapRequest(EstimateSwapRequest):
    """Request to build a swap transaction."""

    wallet_address: Optional[str] = Field(
        None, alias="walletAddress", description="Bech32 address of the swapping wallet"
    )
    slippage_percent: float = Field(
        1.0, ge=0, le=100, alias="slippagePercent", description="Slippage tolerance in percent"
    )
