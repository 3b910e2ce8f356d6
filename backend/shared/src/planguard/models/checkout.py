"""Checkout request and response models.

Field names follow Python conventions; the JSON wire format is camelCase
(``includeCalc``, ``facilityName``, ...) to match the intake form.
"""

import math
import re
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

MIN_SHEETS = 1
MAX_SHEETS = 100

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def parse_sheet_count(raw: Any) -> int:
    """Coerce an untrusted sheet count into [MIN_SHEETS, MAX_SHEETS].

    Numbers are truncated, strings are read up to the first non-digit
    (``"12 sheets"`` is 12). Anything else, including booleans, counts as
    zero and ends up at the minimum.

    Args:
        raw: Value taken straight from the request body

    Returns:
        Clamped sheet count
    """
    value = 0
    if isinstance(raw, bool) or raw is None:
        value = 0
    elif isinstance(raw, int):
        value = raw
    elif isinstance(raw, float):
        value = int(raw) if math.isfinite(raw) else 0
    elif isinstance(raw, str):
        match = _LEADING_INT.match(raw)
        value = int(match.group(1)) if match else 0

    return min(max(value, MIN_SHEETS), MAX_SHEETS)


class CheckoutRequest(BaseModel):
    """Body of POST /api/create-checkout-session.

    Malformed sheet counts are coerced, never rejected.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "examples": [
                {
                    "sheets": 31,
                    "includeCalc": True,
                    "facilityName": "Mercy General Hospital",
                    "hcaiAppNumber": "HCAI-2026-0042",
                }
            ]
        },
    )

    sheets: int = Field(
        default=MIN_SHEETS,
        description="Number of drawing sheets to screen (clamped to 1-100)",
        examples=[12],
    )
    include_calc: bool = Field(
        default=False,
        description="Add the structural calc review",
    )
    facility_name: str = Field(
        default="",
        description="Facility name stored as session metadata",
    )
    hcai_app_number: str = Field(
        default="",
        description="HCAI application number stored as session metadata",
    )

    @field_validator("sheets", mode="before")
    @classmethod
    def _coerce_sheets(cls, value: Any) -> int:
        return parse_sheet_count(value)

    @field_validator("include_calc", mode="before")
    @classmethod
    def _default_include_calc(cls, value: Any) -> Any:
        return False if value is None else value

    @field_validator("facility_name", "hcai_app_number", mode="before")
    @classmethod
    def _text_or_empty(cls, value: Any) -> str:
        # Stored verbatim; only empty values (null, false, 0) become ""
        if not value:
            return ""
        return value if isinstance(value, str) else str(value)


class CheckoutSessionResponse(BaseModel):
    """Redirect reference returned after creating a session."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    session_id: str = Field(..., description="Stripe checkout session ID", examples=["cs_test_a1b2c3"])
    url: Optional[str] = Field(default=None, description="Hosted checkout page to redirect to")


class SessionSummary(BaseModel):
    """Projection of a checkout session for the thank-you page.

    Metadata values are echoed exactly as stored on the session.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    customer_email: Optional[str] = None
    sheet_count: Optional[str] = None
    includes_calc: Optional[str] = None
    facility_name: Optional[str] = None
    status: Optional[str] = Field(default=None, description="Stripe payment_status (paid, unpaid, ...)")
