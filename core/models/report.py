# =============================================================================
# core/models/report.py - Report Schemas
# =============================================================================
# - ReportCreate: validated text fields of the multipart POST /api/reports
# - Report: a stored report as returned to clients
#
# Money values are Decimal end to end. They are checked to cents on input,
# written to a numeric(12,2) column as strings, and serialized back as
# strings ("250.50") so no float ever touches them.
# =============================================================================

from datetime import datetime
from decimal import Decimal, ROUND_DOWN, InvalidOperation
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator
from pydantic.alias_generators import to_camel

from .business import Business

CENT = Decimal("0.01")

# Largest value a numeric(12,2) column holds
MAX_MONEY = Decimal("9999999999.99")


def to_money(value: Any) -> Decimal:
    """
    Coerce a form/db value to an exact Decimal with two places.

    Floats go through `str()` first so 250.5 becomes Decimal("250.50")
    rather than its binary expansion. Values with non-zero digits past the
    cents are rejected, never rounded. Negative zero comes back as 0.00.
    """
    if isinstance(value, bool):
        raise ValueError("must be a number")
    if isinstance(value, float):
        value = str(value)
    try:
        amount = Decimal(str(value).strip()) if isinstance(value, str) else Decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        raise ValueError("must be a number")
    if not amount.is_finite():
        raise ValueError("must be a finite number")
    if abs(amount) > MAX_MONEY:
        raise ValueError(f"must be at most {MAX_MONEY}")
    if amount != amount.quantize(CENT, rounding=ROUND_DOWN):
        raise ValueError("must have at most 2 decimal places")
    if amount == 0:
        amount = abs(amount)
    return amount.quantize(CENT)


class ReportCreate(BaseModel):
    """
    Text fields of a report submission, coerced from multipart strings.

    Example:
        {"sales": "250.50", "expenses": "80.25", "customerCount": "34",
         "businessId": "1", "notes": "Busy lunch"}
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    sales: Decimal = Field(..., ge=0, le=MAX_MONEY)
    expenses: Decimal = Field(..., ge=0, le=MAX_MONEY)
    customer_count: int = Field(..., ge=0)
    business_id: int
    notes: str | None = Field(default=None, max_length=5000)

    @field_validator("sales", "expenses", mode="before")
    @classmethod
    def _coerce_money(cls, value: Any) -> Decimal:
        return to_money(value)

    @field_validator("notes", mode="before")
    @classmethod
    def _blank_notes_to_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    def to_row(self, image_url: str, video_url: str | None) -> dict[str, Any]:
        """Column dict for the `reports` table."""
        return {
            "sales": str(self.sales),
            "expenses": str(self.expenses),
            "customer_count": self.customer_count,
            "business_id": self.business_id,
            "notes": self.notes,
            "image_url": image_url,
            "video_url": video_url,
        }


class Report(BaseModel):
    """
    A stored daily report.

    `business` is only populated by the all-reports listing.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    id: int
    sales: Decimal
    expenses: Decimal
    customer_count: int
    notes: str | None = None
    image_url: str
    video_url: str | None = None
    business_id: int
    business: Business | None = None
    created_at: datetime

    @field_validator("sales", "expenses", mode="before")
    @classmethod
    def _coerce_money(cls, value: Any) -> Decimal:
        return to_money(value)

    @field_serializer("sales", "expenses")
    def _money_as_string(self, value: Decimal) -> str:
        return f"{value:.2f}"

    @property
    def profit(self) -> Decimal:
        """Sales minus expenses."""
        return self.sales - self.expenses
