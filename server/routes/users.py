"""Contact identity endpoints."""

from fastapi import APIRouter

from ..models import ContactIdentity, ContactResponse
from ..state import get_state

router = APIRouter()


@router.put("/{user_id}/contact", response_model=ContactResponse)
def put_contact(user_id: str, request: ContactIdentity):
    """Store the details brokers receive when this user likes a boat."""
    state = get_state()
    activity = state.swipe_store.get(user_id)
    activity.contact = request
    state.swipe_store.save(user_id, activity)
    return ContactResponse(user_id=user_id, contact=activity.contact)


@router.get("/{user_id}/contact", response_model=ContactResponse)
def get_contact(user_id: str):
    activity = get_state().swipe_store.get(user_id)
    return ContactResponse(user_id=user_id, contact=activity.contact)
