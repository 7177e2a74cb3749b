from typing import List
from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel
from ..domain.models import Event, User
from .auth import get_current_user_optional

router = APIRouter(prefix="/events", tags=["events"])


class EventListOut(BaseModel):
    revision: int
    events: List[Event]


@router.get("", response_model=EventListOut, response_model_by_alias=True)
async def list_events(request: Request, current_user: User | None = Depends(get_current_user_optional)):
    host = request.app.state.host
    # shared host, single-user app: concurrent requests would overwrite each other's user
    host.user = current_user
    events = await request.app.state.store.list_all()
    return EventListOut(revision=host.revision, events=events)
