"""Rendering surface for HTTP clients.

The browser owns the real DOM; this adapter keeps what it should currently
display so the client can fetch it after each action.
"""
from __future__ import annotations
from typing import Any, Dict, List, Optional

from ..services.view_renderer import ViewDescription

MAX_NOTIFICATIONS = 20


class HttpRenderingSurface:
    def __init__(self):
        self.visible = False
        self.view: Optional[ViewDescription] = None
        self.error: Optional[str] = None
        self.message: Optional[str] = None
        self.notifications: List[str] = []
        self.focused: Optional[str] = None
        self.redirect_to: Optional[str] = None
        self._confirmation: Optional[bool] = None

    def show(self, view: ViewDescription) -> None:
        self.visible = view.visible
        self.view = view
        self.message = None
        self.redirect_to = None

    def hide(self) -> None:
        self.visible = False
        self.view = None
        self.focused = None

    def focus(self, field: str) -> None:
        self.focused = field

    def show_error(self, message: str) -> None:
        self.error = message

    def clear_error(self) -> None:
        self.error = None

    def show_message(self, message: str) -> None:
        self.message = message

    def notify_success(self, message: str) -> None:
        self.notifications.append(message)
        del self.notifications[:-MAX_NOTIFICATIONS]

    def answer_confirmation(self, confirmed: bool) -> None:
        """Record the client's answer for the next confirm() call."""
        self._confirmation = confirmed

    def confirm(self, message: str) -> bool:
        answer, self._confirmation = self._confirmation, None
        return bool(answer)

    def redirect(self, url: str) -> None:
        self.redirect_to = url

    def drain_notifications(self) -> List[str]:
        notes, self.notifications = self.notifications, []
        return notes

    def snapshot(self) -> Dict[str, Any]:
        return {
            "visible": self.visible,
            "view": self.view.model_dump(mode="json", by_alias=True) if self.view else None,
            "error": self.error,
            "message": self.message,
            "focus": self.focused,
            "redirectTo": self.redirect_to,
            "notifications": self.drain_notifications(),
        }
