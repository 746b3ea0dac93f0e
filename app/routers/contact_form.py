# =============================================================================
# app/routers/contact_form.py - Public Contact Form
# =============================================================================
# Landing-page lead capture. Validation happens inline (email format,
# 10-digit mobile after stripping punctuation). If the record store is down
# the visitor still gets a success receipt.
# =============================================================================

import logging

from fastapi import APIRouter

from app.dependencies import ContactServiceDep
from core.models.lead import ContactFormRequest, ContactFormResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/contact-form", response_model=ContactFormResponse, status_code=201)
async def submit_contact_form(request: ContactFormRequest, contacts: ContactServiceDep):
    """
    Submit the public contact form.

    Returns {success, message, data: {id, name, email, submittedAt}}.
    """
    logger.info(f"Contact form submission from {request.email}")
    return contacts.submit_contact_form(
        name=request.name,
        email=request.email,
        mobile=request.mobile,
        city=request.city,
    )
