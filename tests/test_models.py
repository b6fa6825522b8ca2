# =============================================================================
# tests/test_models.py - Pydantic Model Tests
# =============================================================================
# Unit tests for the business/report schemas:
# - Valid data is accepted and coerced (multipart strings -> numbers)
# - Invalid data is rejected
# - Wire format is camelCase with money as exact decimal strings
#
# Run with: pytest tests/test_models.py -v
# =============================================================================

from datetime import datetime, timezone
from decimal import Decimal

import pytest
from pydantic import ValidationError

from core.models import Business, BusinessCreate, Report, ReportCreate, to_money


# =============================================================================
# Business Model Tests
# =============================================================================

class TestBusinessCreate:
    """Tests for BusinessCreate."""

    def test_accepts_camel_case_payload(self, business_payload):
        business = BusinessCreate.model_validate(business_payload)

        assert business.name == "Joe's Deli"
        assert business.owner_name == "Joe Smith"
        assert business.owner_phone == "5551234567"

    def test_to_row_uses_column_names(self, business_payload):
        row = BusinessCreate.model_validate(business_payload).to_row()

        assert row == {
            "name": "Joe's Deli",
            "owner_name": "Joe Smith",
            "owner_phone": "5551234567",
            "category": "Restaurant",
            "city": "Boston",
        }

    def test_short_phone_rejected(self, business_payload):
        business_payload["ownerPhone"] = "555123"

        with pytest.raises(ValidationError):
            BusinessCreate.model_validate(business_payload)

    @pytest.mark.parametrize("field", ["name", "ownerName", "category", "city"])
    def test_blank_fields_rejected(self, business_payload, field):
        business_payload[field] = "   "

        with pytest.raises(ValidationError):
            BusinessCreate.model_validate(business_payload)


class TestBusiness:
    """Tests for the stored Business schema."""

    def test_serializes_camel_case(self):
        now = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)
        business = Business(
            id=1,
            name="Joe's Deli",
            owner_name="Joe Smith",
            owner_phone="5551234567",
            category="Restaurant",
            city="Boston",
            created_at=now,
            updated_at=now,
        )

        data = business.model_dump(by_alias=True, mode="json")

        assert data["ownerName"] == "Joe Smith"
        assert data["ownerPhone"] == "5551234567"
        assert "createdAt" in data and "updatedAt" in data


# =============================================================================
# Report Model Tests
# =============================================================================

class TestToMoney:
    """Tests for money coercion."""

    @pytest.mark.parametrize("raw, expected", [
        ("250.50", Decimal("250.50")),
        ("250.5", Decimal("250.50")),
        (250.5, Decimal("250.50")),
        (80, Decimal("80.00")),
        (" 12.34 ", Decimal("12.34")),
        ("250.500", Decimal("250.50")),
        ("9999999999.99", Decimal("9999999999.99")),
    ])
    def test_exact_to_cents(self, raw, expected):
        assert to_money(raw) == expected

    @pytest.mark.parametrize("raw", ["abc", "", "NaN", "Infinity", None, True])
    def test_rejects_non_numbers(self, raw):
        with pytest.raises(ValueError):
            to_money(raw)

    @pytest.mark.parametrize("raw", ["250.555", "0.005", "-0.001", 0.125])
    def test_rejects_sub_cent_digits(self, raw):
        with pytest.raises(ValueError, match="at most 2 decimal places"):
            to_money(raw)

    @pytest.mark.parametrize("raw", ["10000000000.00", "123456789012345.67", "1e40"])
    def test_rejects_amounts_the_column_cannot_hold(self, raw):
        with pytest.raises(ValueError, match="must be at most"):
            to_money(raw)

    @pytest.mark.parametrize("raw", ["-0", "-0.00", -0.0])
    def test_negative_zero_has_no_sign(self, raw):
        amount = to_money(raw)

        assert str(amount) == "0.00"
        assert not amount.is_signed()


class TestReportCreate:
    """Tests for ReportCreate coercion from multipart strings."""

    def test_coerces_form_strings(self):
        report = ReportCreate.model_validate({
            "sales": "250.50",
            "expenses": "80.25",
            "customerCount": "34",
            "businessId": "1",
        })

        assert report.sales == Decimal("250.50")
        assert report.expenses == Decimal("80.25")
        assert report.customer_count == 34
        assert report.business_id == 1
        assert report.notes is None

    def test_negative_sales_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            ReportCreate.model_validate({
                "sales": "-1",
                "expenses": "0",
                "customerCount": "0",
                "businessId": "1",
            })

        assert exc_info.value.errors()[0]["loc"][0] in ("sales",)

    def test_fractional_customer_count_rejected(self):
        with pytest.raises(ValidationError):
            ReportCreate.model_validate({
                "sales": "1",
                "expenses": "0",
                "customerCount": "3.5",
                "businessId": "1",
            })

    def test_blank_notes_become_none(self):
        report = ReportCreate.model_validate({
            "sales": "1",
            "expenses": "0",
            "customerCount": "0",
            "businessId": "1",
            "notes": "  ",
        })

        assert report.notes is None

    def test_over_range_sales_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            ReportCreate.model_validate({
                "sales": "123456789012345.67",
                "expenses": "0",
                "customerCount": "0",
                "businessId": "1",
            })

        assert exc_info.value.errors()[0]["loc"] == ("sales",)

    def test_zero_expenses_serialize_unsigned(self):
        report = ReportCreate.model_validate({
            "sales": "1",
            "expenses": "-0.00",
            "customerCount": "0",
            "businessId": "1",
        })

        assert report.to_row(image_url="x", video_url=None)["expenses"] == "0.00"

    def test_to_row_keeps_exact_decimals(self):
        report = ReportCreate.model_validate({
            "sales": "250.5",
            "expenses": "80.25",
            "customerCount": "34",
            "businessId": "7",
            "notes": "Lunch rush",
        })

        row = report.to_row(image_url="https://cdn/img.jpg", video_url=None)

        assert row["sales"] == "250.50"
        assert row["expenses"] == "80.25"
        assert row["business_id"] == 7
        assert row["image_url"] == "https://cdn/img.jpg"
        assert row["video_url"] is None


class TestReport:
    """Tests for the stored Report schema."""

    def _db_row(self, **overrides):
        row = {
            "id": 1,
            "sales": 250.5,
            "expenses": "80.25",
            "customer_count": 34,
            "notes": None,
            "image_url": "https://cdn/img.jpg",
            "video_url": None,
            "business_id": 1,
            "created_at": "2026-03-01T12:00:00+00:00",
        }
        row.update(overrides)
        return row

    def test_money_serializes_as_two_place_strings(self):
        report = Report.model_validate(self._db_row())

        data = report.model_dump(by_alias=True, mode="json")

        assert data["sales"] == "250.50"
        assert data["expenses"] == "80.25"
        assert data["customerCount"] == 34
        assert data["imageUrl"] == "https://cdn/img.jpg"
        assert data["videoUrl"] is None

    def test_profit(self):
        report = Report.model_validate(self._db_row())

        assert report.profit == Decimal("170.25")

    def test_parses_embedded_business(self):
        report = Report.model_validate(self._db_row(business={
            "id": 1,
            "name": "Joe's Deli",
            "owner_name": "Joe Smith",
            "owner_phone": "5551234567",
            "category": "Restaurant",
            "city": "Boston",
            "created_at": "2026-03-01T10:00:00+00:00",
            "updated_at": "2026-03-01T10:00:00+00:00",
        }))

        assert report.business is not None
        assert report.business.name == "Joe's Deli"

    def test_round_trips_from_wire_format(self):
        wire = Report.model_validate(self._db_row()).model_dump(by_alias=True, mode="json")

        parsed = Report.model_validate(wire)

        assert parsed.sales == Decimal("250.50")
        assert parsed.customer_count == 34
