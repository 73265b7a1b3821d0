"""Boat detail endpoint."""

from fastapi import APIRouter, HTTPException

from ..state import get_state

router = APIRouter()


@router.get("/{boat_id}")
def get_boat(boat_id: str):
    """Full catalog record for one boat. 404 when the catalog cannot provide it."""
    record = get_state().catalog.fetch_detail(boat_id)
    if not record:
        raise HTTPException(status_code=404, detail="Boat not found")
    return record
