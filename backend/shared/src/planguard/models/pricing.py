"""Pricing models for sheet-based plan review."""

from pydantic import BaseModel, ConfigDict, Field


class PricingConfig(BaseModel):
    """Tiered per-sheet pricing.

    All amounts are whole US dollars. The first ``threshold`` sheets are
    billed at ``per_sheet_tier1``, every sheet beyond at ``per_sheet_tier2``.
    """

    model_config = ConfigDict(frozen=True)

    base: int = Field(default=249, ge=0, description="Flat fee charged on every order")
    per_sheet_tier1: int = Field(default=25, ge=0, description="Rate for sheets up to the threshold")
    per_sheet_tier2: int = Field(default=20, ge=0, description="Rate for sheets past the threshold")
    threshold: int = Field(default=30, ge=0, description="Last sheet billed at the tier 1 rate")
    calc_addon: int = Field(default=150, ge=0, description="Structural calc review add-on fee")
    currency: str = Field(default="usd", description="ISO currency code sent to Stripe")


class PriceQuote(BaseModel):
    """Price breakdown for one checkout request.

    ``screening_amount`` covers the base fee and the sheets,
    ``addon_amount`` is the calc review fee (0 when not requested).
    """

    model_config = ConfigDict(frozen=True)

    sheet_count: int = Field(..., ge=0)
    include_calc: bool = False
    screening_amount: int = Field(..., ge=0)
    addon_amount: int = Field(default=0, ge=0)
    total: int = Field(..., ge=0)
    currency: str = "usd"
