from __future__ import annotations
from typing import Protocol, List

from ..domain.models import Event, EventDraft


class EventStore(Protocol):
    """CRUD contract the workflow controller relies on.

    Mutations may raise PersistenceError; the message is shown to the user.
    """

    async def list_all(self) -> List[Event]: ...

    async def add_event(self, draft: EventDraft) -> Event: ...

    async def update_event(self, event_id: str, draft: EventDraft) -> Event: ...

    async def delete_event(self, event_id: str) -> None: ...
