"""Draft validation and normalization.

Pure functions: nothing here touches the store or the UI.

Failures are reported one at a time, in field order title -> date ->
description. Duration and color never fail; values outside their fixed
sets fall back to the defaults instead.
"""
from __future__ import annotations
import datetime as dt
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from ..config import EditorSettings
from ..domain.enums import (
    COLOR_PALETTE,
    DEFAULT_COLOR,
    DEFAULT_DURATION,
    DURATION_MINUTES,
    ValidationCode,
)
from ..domain.models import EventDraft
from ..errors import ValidationAppError


@dataclass(frozen=True)
class ValidationLimits:
    max_title_length: int = 100
    max_description_length: int = 500
    allow_past_events: bool = True

    @classmethod
    def from_settings(cls, settings: EditorSettings) -> "ValidationLimits":
        return cls(
            max_title_length=settings.max_title_length,
            max_description_length=settings.max_description_length,
            allow_past_events=settings.allow_past_events,
        )


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def parse_date(value: Any) -> Optional[dt.date]:
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    raw = _text(value)
    if not raw:
        return None
    try:
        return dt.date.fromisoformat(raw)
    except ValueError:
        return None


def parse_time(value: Any) -> Optional[dt.time]:
    if isinstance(value, dt.time):
        return value
    raw = _text(value)
    if not raw:
        return None
    try:
        return dt.time.fromisoformat(raw)
    except ValueError:
        return None


def coerce_duration(value: Any) -> int:
    """Integer minutes from a form value; anything non-numeric becomes the default."""
    if isinstance(value, bool):
        return DEFAULT_DURATION
    if isinstance(value, int):
        return value
    raw = _text(value)
    try:
        return int(float(raw))
    except (ValueError, OverflowError):
        return DEFAULT_DURATION


def build_candidate(
    raw_fields: Mapping[str, Any],
    selected_color: Optional[str],
    base: Optional[EventDraft] = None,
) -> EventDraft:
    """Turn submitted form fields into a draft ready for validate_draft.

    Keys missing from raw_fields keep their value from base, so a partial
    submit on an open event only changes what was sent.
    """
    base = base or EventDraft()
    values = {
        "title": base.title,
        "description": base.description,
        "date": base.date,
        "time": base.time,
        "duration_minutes": base.duration_minutes,
    }
    if "title" in raw_fields:
        values["title"] = _text(raw_fields["title"])
    if "description" in raw_fields:
        values["description"] = _text(raw_fields["description"])
    if "date" in raw_fields:
        values["date"] = parse_date(raw_fields["date"])
    if "time" in raw_fields:
        values["time"] = parse_time(raw_fields["time"])
    for key in ("duration", "duration_minutes", "durationMinutes"):
        if key in raw_fields:
            values["duration_minutes"] = coerce_duration(raw_fields[key])
            break
    return EventDraft(color=selected_color or DEFAULT_COLOR, **values)


def normalize_duration(minutes: Any) -> int:
    return minutes if minutes in DURATION_MINUTES else DEFAULT_DURATION


def normalize_color(color: Optional[str]) -> str:
    return color if color in COLOR_PALETTE else DEFAULT_COLOR


def validate_draft(draft: EventDraft, limits: ValidationLimits, today: Optional[dt.date] = None) -> EventDraft:
    """Return a normalized copy of the draft or raise the first ValidationAppError."""
    title = draft.title.strip()
    if not title:
        raise ValidationAppError(ValidationCode.EMPTY_TITLE.value, "Title is required")
    if len(title) > limits.max_title_length:
        raise ValidationAppError(
            ValidationCode.TITLE_TOO_LONG.value,
            f"Title must be less than {limits.max_title_length} characters",
        )

    if draft.date is None:
        raise ValidationAppError(ValidationCode.MISSING_DATE.value, "Date is required")
    if not limits.allow_past_events and draft.date < (today or dt.date.today()):
        raise ValidationAppError(ValidationCode.PAST_DATE.value, "Past events are not allowed")

    description = draft.description.strip()
    if len(description) > limits.max_description_length:
        raise ValidationAppError(
            ValidationCode.DESCRIPTION_TOO_LONG.value,
            f"Description must be less than {limits.max_description_length} characters",
        )

    return draft.model_copy(
        update={
            "title": title,
            "description": description,
            "duration_minutes": normalize_duration(draft.duration_minutes),
            "color": normalize_color(draft.color),
        }
    )
