"""Inbound user actions, as posted by a rendering surface."""
from __future__ import annotations
import datetime as dt
from typing import Annotated, Any, Dict, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class OpenAction(BaseModel):
    type: Literal["open"] = "open"
    date: Optional[dt.date] = None
    event_id: Optional[str] = Field(default=None, alias="eventId")

    model_config = ConfigDict(populate_by_name=True)


class ColorSelectAction(BaseModel):
    type: Literal["color_select"] = "color_select"
    color: str


class SubmitAction(BaseModel):
    type: Literal["submit"] = "submit"
    form: Dict[str, Any] = Field(default_factory=dict)


class CancelAction(BaseModel):
    type: Literal["cancel"] = "cancel"


class DeleteAction(BaseModel):
    type: Literal["delete"] = "delete"
    # answer to the confirmation prompt, for surfaces that cannot block
    confirmed: bool = False


class ClearErrorAction(BaseModel):
    type: Literal["clear_error"] = "clear_error"


Action = Annotated[
    Union[OpenAction, ColorSelectAction, SubmitAction, CancelAction, DeleteAction, ClearErrorAction],
    Field(discriminator="type"),
]

ACTION_ADAPTER = TypeAdapter(Action)


def parse_action(payload: Dict[str, Any]):
    return ACTION_ADAPTER.validate_python(payload)
