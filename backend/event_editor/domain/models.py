from __future__ import annotations
import datetime as dt
from dataclasses import dataclass
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .enums import DEFAULT_COLOR, DEFAULT_DURATION, OutcomeStatus, WorkflowMode


def _utcnow() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


class User(BaseModel):
    id: str
    name: Optional[str] = None


class EventDraft(BaseModel):
    """Editable fields of an event while the form is open."""
    title: str = ""
    description: str = ""
    date: Optional[dt.date] = None
    time: Optional[dt.time] = None
    duration_minutes: int = Field(default=DEFAULT_DURATION, alias="durationMinutes")
    color: Optional[str] = DEFAULT_COLOR

    model_config = ConfigDict(populate_by_name=True)


class Event(BaseModel):
    id: str
    title: str
    description: str = ""
    date: dt.date
    time: Optional[dt.time] = None
    duration_minutes: int = Field(default=DEFAULT_DURATION, alias="durationMinutes")
    color: str = DEFAULT_COLOR
    user_id: Optional[str] = Field(default=None, alias="userId")
    created_at: dt.datetime = Field(default_factory=_utcnow, alias="createdAt")
    updated_at: dt.datetime = Field(default_factory=_utcnow, alias="updatedAt")

    model_config = ConfigDict(populate_by_name=True)

    def to_draft(self) -> EventDraft:
        return EventDraft(
            title=self.title,
            description=self.description,
            date=self.date,
            time=self.time,
            duration_minutes=self.duration_minutes,
            color=self.color,
        )


@dataclass
class WorkflowState:
    mode: WorkflowMode = WorkflowMode.CLOSED
    is_new: bool = False
    target_event_id: Optional[str] = None
    draft: Optional[EventDraft] = None
    inline_error: Optional[str] = None
    # bumped on every open/cancel so a late store result can tell it was superseded
    generation: int = 0

    def reset(self) -> None:
        self.mode = WorkflowMode.CLOSED
        self.is_new = False
        self.target_event_id = None
        self.draft = None
        self.inline_error = None
        self.generation += 1


@dataclass
class WorkflowResult:
    status: OutcomeStatus
    error: Optional[Exception] = None
    event: Optional[Event] = None

    @property
    def ok(self) -> bool:
        return self.status == OutcomeStatus.OK
