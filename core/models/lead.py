# =============================================================================
# core/models/lead.py - Contact, Subscriber and Contact-Form Schemas
# =============================================================================
# Leads come in through two doors:
# - POST /contact: admin-style create with stored field names
# - POST /contact-form: the public landing-page form (name/email/mobile/city)
# Both end up as a Contact record. Subscribers are newsletter signups.
# =============================================================================

from datetime import datetime

from pydantic import BaseModel, Field

from .common import RecordModel


class ContactCreate(RecordModel):
    """JSON body for POST /contact."""

    full_name: str | None = None
    email: str | None = None
    mobile_number: str | None = None
    city: str | None = None


class ContactResponse(RecordModel):
    """A stored contact lead."""

    id: str
    full_name: str
    email: str
    mobile_number: str = Field(..., description="Exactly 10 digits")
    city: str
    submitted_at: datetime


class SubscriberCreate(RecordModel):
    """JSON body for POST /subscribers."""

    email: str | None = None


class SubscriberResponse(RecordModel):
    """A newsletter subscriber."""

    id: str
    email: str
    subscribed_at: datetime


class ContactFormRequest(BaseModel):
    """
    Public contact form submission.

    Example:
        {"name": "Jane Doe", "email": "jane@example.com", "mobile": "(555) 012-3456", "city": "Austin"}
    """

    name: str | None = None
    email: str | None = None
    mobile: str | None = None
    city: str | None = None


class ContactFormData(RecordModel):
    id: str
    name: str
    email: str
    submitted_at: datetime


class ContactFormResponse(BaseModel):
    """Response for POST /contact-form."""

    success: bool
    message: str
    data: ContactFormData
