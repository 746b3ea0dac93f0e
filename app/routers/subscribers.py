# =============================================================================
# app/routers/subscribers.py - Newsletter Subscriber Endpoints
# =============================================================================

from fastapi import APIRouter

from app.dependencies import RecordServiceDep
from core.models.common import DeleteResponse
from core.models.kinds import SUBSCRIBERS
from core.models.lead import SubscriberCreate, SubscriberResponse

router = APIRouter()


@router.post("", response_model=SubscriberResponse, status_code=201)
async def subscribe(request: SubscriberCreate, records: RecordServiceDep):
    """Add a newsletter subscriber. Each email can subscribe once."""
    return records.create(SUBSCRIBERS, {"email": request.email})


@router.get("", response_model=list[SubscriberResponse])
async def list_subscribers(records: RecordServiceDep):
    return records.list(SUBSCRIBERS)


@router.delete("/{subscriber_id}", response_model=DeleteResponse)
async def delete_subscriber(subscriber_id: str, records: RecordServiceDep):
    records.delete_by_id(SUBSCRIBERS, subscriber_id)
    return DeleteResponse(message="Subscriber deleted successfully")
