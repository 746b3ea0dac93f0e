# =============================================================================
# app/routers/contacts.py - Contact Lead Endpoints
# =============================================================================

from fastapi import APIRouter

from app.dependencies import ContactServiceDep, RecordServiceDep
from core.models.common import DeleteResponse
from core.models.kinds import CONTACTS
from core.models.lead import ContactCreate, ContactResponse

router = APIRouter()


@router.post("", response_model=ContactResponse, status_code=201)
async def create_contact(request: ContactCreate, contacts: ContactServiceDep):
    """
    Create a contact lead.

    The mobile number is reduced to its digits and must be 10 long.
    One contact per email.
    """
    return contacts.create_contact(request.model_dump())


@router.get("", response_model=list[ContactResponse])
async def list_contacts(records: RecordServiceDep):
    """List all contacts, most recently submitted first."""
    return records.list(CONTACTS)


@router.delete("/{contact_id}", response_model=DeleteResponse)
async def delete_contact(contact_id: str, records: RecordServiceDep):
    records.delete_by_id(CONTACTS, contact_id)
    return DeleteResponse(message="Contact deleted successfully")
