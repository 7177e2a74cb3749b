from __future__ import annotations
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..domain.enums import (
    COLOR_PALETTE,
    DEFAULT_COLOR,
    DEFAULT_DURATION,
    DURATION_MINUTES,
    DURATION_OPTIONS,
    WorkflowMode,
)
from ..domain.models import EventDraft
from .validation_service import ValidationLimits

AUTH_NOTICE_HEADING = "Authentication Required"
AUTH_NOTICE_TEXT = (
    "Please log in to manage events. This calendar is configured to require "
    "authentication for event management. Please log in to add, edit, or delete events."
)
AUTH_BANNER_TEXT = "Please log in to manage events."


class DurationOption(BaseModel):
    value: int
    label: str
    selected: bool = False

    model_config = ConfigDict(frozen=True)


class ColorOption(BaseModel):
    color: str
    selected: bool = False

    model_config = ConfigDict(frozen=True)


class FormFields(BaseModel):
    title: str = ""
    description: str = ""
    date: str = ""
    time: str = ""

    model_config = ConfigDict(frozen=True)


class ViewDescription(BaseModel):
    visible: bool = False
    heading: str = ""
    notice: Optional[str] = None
    form: Optional[FormFields] = None
    title_max_length: Optional[int] = Field(default=None, alias="titleMaxLength")
    description_max_length: Optional[int] = Field(default=None, alias="descriptionMaxLength")
    duration_options: List[DurationOption] = Field(default_factory=list, alias="durationOptions")
    color_options: List[ColorOption] = Field(default_factory=list, alias="colorOptions")
    show_delete: bool = Field(default=False, alias="showDelete")
    submit_label: Optional[str] = Field(default=None, alias="submitLabel")

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @property
    def selected_duration(self) -> Optional[int]:
        return next((o.value for o in self.duration_options if o.selected), None)

    @property
    def selected_color(self) -> Optional[str]:
        return next((o.color for o in self.color_options if o.selected), None)


def render_view(
    mode: WorkflowMode,
    draft: Optional[EventDraft],
    auth_present: bool,
    is_new: bool = True,
    limits: Optional[ValidationLimits] = None,
) -> ViewDescription:
    """Describe what the modal should show for the given workflow state."""
    if mode == WorkflowMode.CLOSED:
        return ViewDescription()
    if mode == WorkflowMode.AUTH_NOTICE:
        return ViewDescription(visible=True, heading=AUTH_NOTICE_HEADING, notice=AUTH_NOTICE_TEXT)

    draft = draft or EventDraft()
    limits = limits or ValidationLimits()

    current_duration = draft.duration_minutes if draft.duration_minutes in DURATION_MINUTES else DEFAULT_DURATION
    current_color = draft.color if draft.color in COLOR_PALETTE else DEFAULT_COLOR

    return ViewDescription(
        visible=True,
        heading="Add Event" if is_new else "Edit Event",
        notice=None if auth_present else AUTH_BANNER_TEXT,
        form=FormFields(
            title=draft.title,
            description=draft.description,
            date=draft.date.isoformat() if draft.date else "",
            time=draft.time.strftime("%H:%M") if draft.time else "",
        ),
        title_max_length=limits.max_title_length,
        description_max_length=limits.max_description_length,
        duration_options=[
            DurationOption(value=minutes, label=label, selected=minutes == current_duration)
            for minutes, label in DURATION_OPTIONS
        ],
        color_options=[ColorOption(color=c, selected=c == current_color) for c in COLOR_PALETTE],
        show_delete=not is_new,
        submit_label="Create" if is_new else "Update",
    )
