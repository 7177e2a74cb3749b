from __future__ import annotations
from typing import Optional, Protocol

from ..domain.models import User


class CalendarHost(Protocol):
    """The calendar application embedding the editor."""

    @property
    def current_user(self) -> Optional[User]: ...

    def refresh_calendar(self) -> None: ...
