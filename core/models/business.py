# =============================================================================
# core/models/business.py - Business Schemas
# =============================================================================
# - BusinessCreate: validated input for POST /api/businesses
# - Business: a stored business row as returned to clients
#
# Columns are snake_case in Postgres; the wire format is camelCase, handled by
# the alias generator (`owner_name` <-> `ownerName`).
# =============================================================================

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class BusinessCreate(BaseModel):
    """
    Input for creating a business.

    Example:
        {
            "name": "Joe's Deli",
            "ownerName": "Joe Smith",
            "ownerPhone": "5551234567",
            "category": "Restaurant",
            "city": "Boston"
        }
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )

    name: str = Field(..., min_length=1, max_length=255, description="Business name")
    owner_name: str = Field(..., min_length=1, max_length=255, description="Owner's full name")
    owner_phone: str = Field(..., min_length=10, max_length=32, description="Owner's phone number")
    category: str = Field(..., min_length=1, max_length=100)
    city: str = Field(..., min_length=1, max_length=100)

    def to_row(self) -> dict[str, str]:
        """Column dict for the `businesses` table."""
        return self.model_dump(by_alias=False)


class Business(BaseModel):
    """A stored business."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    id: int
    name: str
    owner_name: str
    owner_phone: str
    category: str
    city: str
    created_at: datetime
    updated_at: datetime
