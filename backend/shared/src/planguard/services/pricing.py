"""Tiered sheet pricing and Stripe line items.

Pricing formula: $249 base + $25/sheet (first 30) + $20/sheet (31+),
structural calc review add-on +$150.
"""

from typing import Any

from planguard.models.pricing import PriceQuote, PricingConfig

DEFAULT_PRICING = PricingConfig()

SCREENING_PRODUCT_NAME = "HCAI Pre-Submission Screening — {sheets} Sheets"
CALC_ADDON_PRODUCT_NAME = "Structural Calc Review Add-On"
CALC_ADDON_DESCRIPTION = "Load path verification, seismic parameter check"


def calculate_price(
    sheets: int,
    include_calc: bool = False,
    config: PricingConfig = DEFAULT_PRICING,
) -> int:
    """Total price in dollars for a sheet count.

    Zero sheets still pays the base fee.
    """
    tier1 = min(sheets, config.threshold)
    tier2 = max(0, sheets - config.threshold)
    addon = config.calc_addon if include_calc else 0
    return config.base + tier1 * config.per_sheet_tier1 + tier2 * config.per_sheet_tier2 + addon


def quote_price(
    sheets: int,
    include_calc: bool = False,
    config: PricingConfig = DEFAULT_PRICING,
) -> PriceQuote:
    """Price a request and split it into screening and add-on amounts.

    Args:
        sheets: Sheet count (already clamped by the caller)
        include_calc: Whether the calc review add-on is requested
        config: Pricing configuration

    Returns:
        PriceQuote whose screening and add-on amounts sum to the total
    """
    total = calculate_price(sheets, include_calc, config)
    addon_amount = config.calc_addon if include_calc else 0
    return PriceQuote(
        sheet_count=sheets,
        include_calc=include_calc,
        screening_amount=total - addon_amount,
        addon_amount=addon_amount,
        total=total,
        currency=config.currency,
    )


def to_minor_units(amount: int) -> int:
    """Convert whole dollars to cents."""
    return amount * 100


def build_line_items(quote: PriceQuote) -> list[dict[str, Any]]:
    """Build ad-hoc Stripe line items for a quote.

    One screening item always, plus the calc review item when requested.
    The unit amounts add up to the quoted total.
    """
    sheets = quote.sheet_count
    line_items: list[dict[str, Any]] = [
        {
            "price_data": {
                "currency": quote.currency,
                "product_data": {
                    "name": SCREENING_PRODUCT_NAME.format(sheets=sheets),
                    "description": f"Base fee + {sheets} sheet{'s' if sheets > 1 else ''} screening",
                },
                "unit_amount": to_minor_units(quote.screening_amount),
            },
            "quantity": 1,
        }
    ]

    if quote.include_calc:
        line_items.append(
            {
                "price_data": {
                    "currency": quote.currency,
                    "product_data": {
                        "name": CALC_ADDON_PRODUCT_NAME,
                        "description": CALC_ADDON_DESCRIPTION,
                    },
                    "unit_amount": to_minor_units(quote.addon_amount),
                },
                "quantity": 1,
            }
        )

    return line_items
