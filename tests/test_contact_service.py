# =============================================================================
# tests/test_contact_service.py - Lead Capture Tests
# =============================================================================
# Mobile normalization, contact-form validation and the offline fallback.
#
# Run with: pytest tests/test_contact_service.py -v
# =============================================================================

import pytest

from app.exceptions import DuplicateEmailError, RecordValidationError
from core.models.kinds import CONTACTS
from core.services.contact_service import (
    DUPLICATE_SUGGESTION,
    ContactService,
    normalize_mobile,
)


@pytest.fixture
def contacts(records):
    return ContactService(records)


def test_normalize_mobile():
    assert normalize_mobile("(555) 012-3456") == "5550123456"
    assert normalize_mobile("+1 555 012") == "1555012"
    assert normalize_mobile("") == ""


class TestCreateContact:
    """Tests for ContactService.create_contact."""

    def test_mobile_is_normalized(self, contacts):
        record = contacts.create_contact({
            "full_name": "Jane Doe",
            "email": "jane@example.com",
            "mobile_number": "555.012.3456",
            "city": "Austin",
        })

        assert record["mobile_number"] == "5550123456"

    def test_mobile_must_have_ten_digits(self, contacts):
        with pytest.raises(RecordValidationError) as exc_info:
            contacts.create_contact({
                "full_name": "Jane Doe",
                "email": "jane@example.com",
                "mobile_number": "12345",
                "city": "Austin",
            })

        assert exc_info.value.fields == ["mobile_number"]

    def test_missing_mobile_reported_with_other_fields(self, contacts):
        with pytest.raises(RecordValidationError) as exc_info:
            contacts.create_contact({"full_name": "Jane Doe"})

        assert exc_info.value.fields == ["email", "mobile_number", "city"]


class TestSubmitContactForm:
    """Tests for ContactService.submit_contact_form."""

    def test_success_stores_normalized_contact(self, contacts, records):
        result = contacts.submit_contact_form("Jane Doe", "jane@example.com", "(555) 012-3456", "Austin")

        assert result["success"] is True
        assert result["data"]["name"] == "Jane Doe"
        stored = records.get_by_id(CONTACTS, result["data"]["id"])
        assert stored["mobile_number"] == "5550123456"
        assert stored["full_name"] == "Jane Doe"

    @pytest.mark.parametrize("field", ["name", "email", "mobile", "city"])
    def test_all_fields_required(self, contacts, field):
        values = {"name": "Jane", "email": "jane@example.com", "mobile": "5550123456", "city": "Austin"}
        values[field] = "  "

        with pytest.raises(RecordValidationError) as exc_info:
            contacts.submit_contact_form(**values)

        assert exc_info.value.message == "All fields are required"

    @pytest.mark.parametrize("email", ["jane", "jane@example", "ja ne@example.com", "@example.com"])
    def test_invalid_email(self, contacts, email):
        with pytest.raises(RecordValidationError) as exc_info:
            contacts.submit_contact_form("Jane", email, "5550123456", "Austin")

        assert exc_info.value.message == "Please enter a valid email address"

    def test_invalid_mobile(self, contacts):
        with pytest.raises(RecordValidationError) as exc_info:
            contacts.submit_contact_form("Jane", "jane@example.com", "555-0123", "Austin")

        assert exc_info.value.message == "Please enter a valid 10-digit mobile number"

    def test_duplicate_email(self, contacts, store):
        contacts.submit_contact_form("Jane", "jane@example.com", "5550123456", "Austin")

        with pytest.raises(DuplicateEmailError) as exc_info:
            contacts.submit_contact_form("Jane", "jane@example.com", "5550123456", "Austin")

        assert exc_info.value.suggestion == DUPLICATE_SUGGESTION
        assert store.count("contacts") == 1

    def test_disconnected_store_returns_mock_receipt(self, contacts, store):
        store.connected = False

        result = contacts.submit_contact_form(" Jane ", "jane@example.com", "5550123456", "Austin")

        assert result["success"] is True
        assert "Database not connected" in result["message"]
        assert result["data"]["id"].startswith("mock_")
        assert result["data"]["name"] == "Jane"

    def test_receipt_email_matches_stored_form(self, contacts, store):
        stored = contacts.submit_contact_form("Jane", " Jane@Example.COM ", "5550123456", "Austin")
        store.connected = False
        offline = contacts.submit_contact_form("Jim", "Jim@Example.COM", "5550123456", "Austin")

        assert stored["data"]["email"] == "jane@example.com"
        assert offline["data"]["email"] == "jim@example.com"

    def test_validation_still_applies_when_disconnected(self, contacts, store):
        store.connected = False

        with pytest.raises(RecordValidationError):
            contacts.submit_contact_form("Jane", "bad-email", "5550123456", "Austin")
