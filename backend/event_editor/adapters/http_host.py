from __future__ import annotations
from typing import Optional

from ..domain.models import User


class HttpCalendarHost:
    """Host for the HTTP app: the user comes from the request, refreshes bump a revision."""

    def __init__(self):
        self.user: Optional[User] = None
        self.revision = 0

    @property
    def current_user(self) -> Optional[User]:
        return self.user

    def refresh_calendar(self) -> None:
        self.revision += 1
