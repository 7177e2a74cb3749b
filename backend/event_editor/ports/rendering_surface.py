from __future__ import annotations
from typing import Protocol

from ..services.view_renderer import ViewDescription


class RenderingSurface(Protocol):
    """Abstracts the modal UI so the controller can run without one."""

    def show(self, view: ViewDescription) -> None:
        """Display (or re-display) the modal described by view."""
        ...

    def hide(self) -> None: ...

    def focus(self, field: str) -> None: ...

    def show_error(self, message: str) -> None:
        """Inline error inside the open modal."""
        ...

    def clear_error(self) -> None: ...

    def show_message(self, message: str) -> None:
        """Standalone message shown while no modal is open."""
        ...

    def notify_success(self, message: str) -> None: ...

    def confirm(self, message: str) -> bool:
        """Blocking yes/no question."""
        ...
