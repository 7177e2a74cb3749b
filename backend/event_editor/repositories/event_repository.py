from __future__ import annotations
import logging
import random
import string
import threading
import time
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional

from fastapi.concurrency import run_in_threadpool
from sqlalchemy.orm import Session, sessionmaker

from ..db import models
from ..db.session import create_tables
from ..domain.enums import DEFAULT_COLOR, DEFAULT_DURATION
from ..domain.models import Event, EventDraft, User
from ..errors import PersistenceError

logger = logging.getLogger(__name__)

UserProvider = Callable[[], Optional[User]]


def generate_event_id() -> str:
    suffix = "".join(random.choices(string.ascii_lowercase + string.digits, k=9))
    return f"evt_{int(time.time() * 1000)}_{suffix}"


class MemoryEventStore:
    """Process-local store, scoped to the current user when one is known."""

    def __init__(self, user_provider: Optional[UserProvider] = None, events: Optional[List[Event]] = None):
        self.user_provider = user_provider or (lambda: None)
        self._events: Dict[str, Event] = {e.id: e for e in events or []}

    def _user_id(self) -> Optional[str]:
        user = self.user_provider()
        return user.id if user else None

    def _owned(self, event_id: str, verb: str) -> Event:
        event = self._events.get(event_id)
        if event is None:
            raise PersistenceError("Event not found", code="EVENT_NOT_FOUND")
        user_id = self._user_id()
        if user_id and event.user_id and event.user_id != user_id:
            raise PersistenceError(f"Not authorized to {verb} this event", code="FORBIDDEN")
        return event

    async def list_all(self) -> List[Event]:
        user_id = self._user_id()
        events = list(self._events.values())
        if user_id:
            events = [e for e in events if e.user_id in (None, user_id)]
        return events

    async def add_event(self, draft: EventDraft) -> Event:
        now = datetime.now(timezone.utc)
        event = Event(
            id=generate_event_id(),
            title=draft.title,
            description=draft.description,
            date=draft.date,
            time=draft.time,
            duration_minutes=draft.duration_minutes or DEFAULT_DURATION,
            color=draft.color or DEFAULT_COLOR,
            user_id=self._user_id(),
            created_at=now,
            updated_at=now,
        )
        self._events[event.id] = event
        logger.debug("added event %s", event.id)
        return event

    async def update_event(self, event_id: str, draft: EventDraft) -> Event:
        current = self._owned(event_id, "update")
        updated = current.model_copy(
            update={
                "title": draft.title,
                "description": draft.description,
                "date": draft.date or current.date,
                "time": draft.time,
                "duration_minutes": draft.duration_minutes,
                "color": draft.color or current.color,
                "updated_at": datetime.now(timezone.utc),
            }
        )
        self._events[event_id] = updated
        return updated

    async def delete_event(self, event_id: str) -> None:
        self._owned(event_id, "delete")
        del self._events[event_id]


def _to_event(row: models.EventRecord) -> Event:
    return Event(
        id=row.id,
        title=row.title,
        description=row.description or "",
        date=row.date,
        time=row.time,
        duration_minutes=row.duration_minutes,
        color=row.color,
        user_id=row.user_id,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


class SqlAlchemyEventStore:
    """SQLAlchemy-backed implementation; blocking session work runs in the threadpool."""

    def __init__(self, session_factory: sessionmaker, user_provider: Optional[UserProvider] = None):
        self.session_factory = session_factory
        self.user_provider = user_provider or (lambda: None)
        self._init_lock = threading.Lock()
        self._tables_created = False

    def _session(self) -> Session:
        db = self.session_factory()
        if not self._tables_created:
            with self._init_lock:
                if not self._tables_created:
                    create_tables(db.get_bind())
                    self._tables_created = True
        return db

    def _user_id(self) -> Optional[str]:
        user = self.user_provider()
        return user.id if user else None

    def _get_owned(self, db: Session, event_id: str, user_id: Optional[str], verb: str) -> models.EventRecord:
        row = db.query(models.EventRecord).filter(models.EventRecord.id == event_id).first()
        if not row:
            raise PersistenceError("Event not found", code="EVENT_NOT_FOUND")
        if user_id and row.user_id and row.user_id != user_id:
            raise PersistenceError(f"Not authorized to {verb} this event", code="FORBIDDEN")
        return row

    def _list(self, user_id: Optional[str]) -> List[Event]:
        db = self._session()
        try:
            q = db.query(models.EventRecord)
            if user_id:
                q = q.filter((models.EventRecord.user_id == user_id) | (models.EventRecord.user_id.is_(None)))
            return [_to_event(r) for r in q.order_by(models.EventRecord.date, models.EventRecord.time).all()]
        finally:
            db.close()

    def _add(self, draft: EventDraft, user_id: Optional[str]) -> Event:
        db = self._session()
        try:
            row = models.EventRecord(
                user_id=user_id,
                title=draft.title,
                description=draft.description,
                date=draft.date,
                time=draft.time,
                duration_minutes=draft.duration_minutes or DEFAULT_DURATION,
                color=draft.color or DEFAULT_COLOR,
            )
            db.add(row)
            db.commit()
            db.refresh(row)
            return _to_event(row)
        finally:
            db.close()

    def _update(self, event_id: str, draft: EventDraft, user_id: Optional[str]) -> Event:
        db = self._session()
        try:
            row = self._get_owned(db, event_id, user_id, "update")
            row.title = draft.title
            row.description = draft.description
            if draft.date is not None:
                row.date = draft.date
            row.time = draft.time
            row.duration_minutes = draft.duration_minutes
            if draft.color:
                row.color = draft.color
            row.updated_at = datetime.now(timezone.utc)
            db.commit()
            db.refresh(row)
            return _to_event(row)
        finally:
            db.close()

    def _delete(self, event_id: str, user_id: Optional[str]) -> None:
        db = self._session()
        try:
            row = self._get_owned(db, event_id, user_id, "delete")
            db.delete(row)
            db.commit()
        finally:
            db.close()

    # user is resolved on the calling task, before hopping to the threadpool
    async def list_all(self) -> List[Event]:
        return await run_in_threadpool(self._list, self._user_id())

    async def add_event(self, draft: EventDraft) -> Event:
        return await run_in_threadpool(self._add, draft, self._user_id())

    async def update_event(self, event_id: str, draft: EventDraft) -> Event:
        return await run_in_threadpool(self._update, event_id, draft, self._user_id())

    async def delete_event(self, event_id: str) -> None:
        await run_in_threadpool(self._delete, event_id, self._user_id())
