"""Workflow controller for the event modal.

Owns the single WorkflowState of an editor and is the only thing that
mutates it. Hosts and rendering surfaces read views and send actions.

Lifecycle:
  * CLOSED -> open() -> EDITING (new or existing) or AUTH_NOTICE
  * EDITING -> submit()/request_delete() success -> CLOSED
  * any -> cancel() -> CLOSED

Store calls are the only suspension points. One submit or delete may be in
flight per controller; a second one is ignored until the first resolves.
open()/cancel() always win, even while a store call is pending.
"""
from __future__ import annotations
import datetime as dt
import logging
from functools import partial
from typing import Any, Awaitable, Callable, Mapping, Optional, Tuple, Union

from ..config import EditorSettings
from ..domain.actions import (
    CancelAction,
    ClearErrorAction,
    ColorSelectAction,
    DeleteAction,
    OpenAction,
    SubmitAction,
)
from ..domain.enums import COLOR_PALETTE, DEFAULT_COLOR, OutcomeStatus, WorkflowMode
from ..domain.models import EventDraft, WorkflowResult, WorkflowState
from ..errors import NotFoundError, PersistenceError, ValidationAppError
from ..metrics import STORE_CALL_DURATION, WORKFLOW_ACTIONS
from ..ports.event_store import EventStore
from ..ports.host import CalendarHost
from ..ports.rendering_surface import RenderingSurface
from .validation_service import ValidationLimits, build_candidate, parse_date, validate_draft
from .view_renderer import ViewDescription, render_view

logger = logging.getLogger(__name__)

DELETE_CONFIRMATION = "Are you sure you want to delete this event?"


class WorkflowController:
    def __init__(
        self,
        host: CalendarHost,
        store: EventStore,
        surface: RenderingSurface,
        settings: Optional[EditorSettings] = None,
        on_auth_required: Optional[Callable[[], None]] = None,
        today: Optional[Callable[[], dt.date]] = None,
    ):
        self.host = host
        self.store = store
        self.surface = surface
        self.settings = settings or EditorSettings()
        self.limits = ValidationLimits.from_settings(self.settings)
        self.on_auth_required = on_auth_required
        self.today = today or dt.date.today
        self._state = WorkflowState()
        self._in_flight = False

    @property
    def state(self) -> WorkflowState:
        return self._state

    @property
    def in_flight(self) -> bool:
        return self._in_flight

    def _auth_present(self) -> bool:
        return not self.settings.use_auth or self.host.current_user is not None

    def view(self) -> ViewDescription:
        return render_view(
            self._state.mode,
            self._state.draft,
            self._auth_present(),
            is_new=self._state.is_new,
            limits=self.limits,
        )

    def _record(self, action: str, outcome: OutcomeStatus) -> None:
        WORKFLOW_ACTIONS.labels(action=action, outcome=outcome.value).inc()

    async def open(self, date: Union[dt.date, str, None] = None, event_id: Optional[str] = None) -> None:
        # last-open-wins: whatever was being edited is dropped
        was_open = self._state.mode != WorkflowMode.CLOSED
        self._state.reset()

        if not self._auth_present():
            if self.on_auth_required:
                logger.debug("auth required, delegating to host")
                if was_open:
                    self.surface.hide()
                self.on_auth_required()
            else:
                self._state.mode = WorkflowMode.AUTH_NOTICE
                self.surface.show(self.view())
            self._record("open", OutcomeStatus.IGNORED)
            return

        if event_id:
            generation = self._state.generation
            try:
                with STORE_CALL_DURATION.labels(operation="list_all").time():
                    events = await self.store.list_all()
            except Exception as e:
                logger.exception("list_all failed while opening %s", event_id)
                self._record("open", OutcomeStatus.FAILED)
                if generation == self._state.generation:
                    if was_open:
                        self.surface.hide()
                    self.surface.show_message(getattr(e, "message", None) or str(e) or "Failed to load events")
                return
            if generation != self._state.generation:
                logger.debug("open(%s) superseded while listing events", event_id)
                return
            event = next((e for e in events if e.id == event_id), None)
            if event is None:
                self._record("open", OutcomeStatus.FAILED)
                error = NotFoundError()
                if was_open:
                    self.surface.hide()
                self.surface.show_message(error.message)
                raise error
            self._state.mode = WorkflowMode.EDITING
            self._state.is_new = False
            self._state.target_event_id = event.id
            self._state.draft = event.to_draft()
        else:
            self._state.mode = WorkflowMode.EDITING
            self._state.is_new = True
            self._state.draft = EventDraft(date=parse_date(date) or self.today())

        logger.debug("workflow opened (new=%s, target=%s)", self._state.is_new, self._state.target_event_id)
        self._record("open", OutcomeStatus.OK)
        self.surface.clear_error()
        self.surface.show(self.view())
        self.surface.focus("title")

    def select_color(self, color: str) -> bool:
        if self._state.mode != WorkflowMode.EDITING or self._state.draft is None:
            logger.warning("color select ignored while %s", self._state.mode.value)
            return False
        if color not in COLOR_PALETTE:
            logger.warning("color %r is not in the palette", color)
            return False
        self._state.draft = self._state.draft.model_copy(update={"color": color})
        self.surface.show(self.view())
        return True

    def clear_error(self) -> None:
        if self._state.inline_error is None:
            return
        self._state.inline_error = None
        self.surface.clear_error()

    def cancel(self) -> None:
        if self._state.mode == WorkflowMode.CLOSED:
            return
        logger.debug("workflow cancelled from %s", self._state.mode.value)
        self._state.reset()
        self.surface.clear_error()
        self.surface.hide()

    def _fail_inline(self, message: str) -> None:
        self._state.inline_error = message
        self.surface.show_error(message)

    def _close_after_success(self, message: str) -> None:
        self._state.reset()
        self.surface.clear_error()
        self.surface.hide()
        self.host.refresh_calendar()
        self.surface.notify_success(message)

    async def _call_store(
        self, operation: str, generation: int, call: Callable[[], Awaitable[Any]]
    ) -> Tuple[Any, Optional[PersistenceError]]:
        """Await a store mutation under the in-flight guard.

        Any failure comes back as a PersistenceError and is shown inline,
        unless the workflow that issued the call has since been replaced.
        """
        self._in_flight = True
        try:
            with STORE_CALL_DURATION.labels(operation=operation).time():
                return await call(), None
        except PersistenceError as e:
            logger.warning("%s rejected: %s", operation, e.message)
            error = e
        except Exception as e:
            logger.exception("%s failed", operation)
            error = PersistenceError(str(e) or f"{operation} failed")
        finally:
            self._in_flight = False

        if generation == self._state.generation:
            self._fail_inline(error.message)
        return None, error

    async def submit(self, raw_fields: Mapping[str, Any]) -> WorkflowResult:
        state = self._state
        if state.mode != WorkflowMode.EDITING or state.draft is None:
            self._record("submit", OutcomeStatus.IGNORED)
            return WorkflowResult(OutcomeStatus.IGNORED)
        if self._in_flight:
            logger.warning("submit ignored: another store call is in flight")
            self._record("submit", OutcomeStatus.IGNORED)
            return WorkflowResult(OutcomeStatus.IGNORED)

        selected = raw_fields.get("color", state.draft.color)
        candidate = build_candidate(raw_fields, selected or DEFAULT_COLOR, base=state.draft)
        try:
            draft = validate_draft(candidate, self.limits, today=self.today())
        except ValidationAppError as e:
            self._fail_inline(e.message)
            self._record("submit", OutcomeStatus.INVALID)
            return WorkflowResult(OutcomeStatus.INVALID, error=e)

        state.draft = draft
        is_new = state.is_new
        target = state.target_event_id
        generation = state.generation
        operation = "add_event" if is_new else "update_event"

        if is_new:
            call = partial(self.store.add_event, draft)
        else:
            call = partial(self.store.update_event, target, draft)
        event, error = await self._call_store(operation, generation, call)
        if error is not None:
            self._record("submit", OutcomeStatus.FAILED)
            return WorkflowResult(OutcomeStatus.FAILED, error=error)

        self._record("submit", OutcomeStatus.OK)
        if generation != self._state.generation:
            logger.debug("%s finished after the workflow was replaced", operation)
            self.host.refresh_calendar()
            return WorkflowResult(OutcomeStatus.OK, event=event)
        self._close_after_success("Event created successfully!" if is_new else "Event updated successfully!")
        return WorkflowResult(OutcomeStatus.OK, event=event)

    async def request_delete(self) -> WorkflowResult:
        state = self._state
        if state.mode != WorkflowMode.EDITING or state.is_new or not state.target_event_id:
            self._record("delete", OutcomeStatus.IGNORED)
            return WorkflowResult(OutcomeStatus.IGNORED)
        if self._in_flight:
            logger.warning("delete ignored: another store call is in flight")
            self._record("delete", OutcomeStatus.IGNORED)
            return WorkflowResult(OutcomeStatus.IGNORED)

        if not self.surface.confirm(DELETE_CONFIRMATION):
            self._record("delete", OutcomeStatus.DECLINED)
            return WorkflowResult(OutcomeStatus.DECLINED)

        target = state.target_event_id
        generation = state.generation
        _, error = await self._call_store("delete_event", generation, partial(self.store.delete_event, target))
        if error is not None:
            self._record("delete", OutcomeStatus.FAILED)
            return WorkflowResult(OutcomeStatus.FAILED, error=error)

        self._record("delete", OutcomeStatus.OK)
        if generation != self._state.generation:
            self.host.refresh_calendar()
            return WorkflowResult(OutcomeStatus.OK)
        self._close_after_success("Event deleted successfully!")
        return WorkflowResult(OutcomeStatus.OK)

    async def dispatch(self, action) -> WorkflowResult:
        """Single entry point for actions coming from a rendering surface."""
        if isinstance(action, OpenAction):
            await self.open(date=action.date, event_id=action.event_id)
            editing = self._state.mode == WorkflowMode.EDITING
            return WorkflowResult(OutcomeStatus.OK if editing else OutcomeStatus.IGNORED)
        if isinstance(action, ColorSelectAction):
            ok = self.select_color(action.color)
            return WorkflowResult(OutcomeStatus.OK if ok else OutcomeStatus.IGNORED)
        if isinstance(action, SubmitAction):
            return await self.submit(action.form)
        if isinstance(action, DeleteAction):
            return await self.request_delete()
        if isinstance(action, CancelAction):
            self.cancel()
            return WorkflowResult(OutcomeStatus.OK)
        if isinstance(action, ClearErrorAction):
            self.clear_error()
            return WorkflowResult(OutcomeStatus.OK)
        raise TypeError(f"unsupported action: {type(action).__name__}")
