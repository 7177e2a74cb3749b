"""Domain enumerations for strong typing & validation."""
from enum import Enum

# (minutes, label) in the order the duration picker lists them
DURATION_OPTIONS = (
    (15, "15 minutes"),
    (30, "30 minutes"),
    (60, "1 hour"),
    (90, "1.5 hours"),
    (120, "2 hours"),
    (180, "3 hours"),
    (240, "4 hours"),
    (480, "8 hours"),
    (1440, "All day"),
)
DURATION_MINUTES = frozenset(minutes for minutes, _ in DURATION_OPTIONS)
DEFAULT_DURATION = 60

COLOR_PALETTE = (
    "#007bff",
    "#28a745",
    "#dc3545",
    "#ffc107",
    "#17a2b8",
    "#6f42c1",
    "#e83e8c",
    "#fd7e14",
    "#20c997",
    "#6c757d",
)
DEFAULT_COLOR = COLOR_PALETTE[0]


class WorkflowMode(str, Enum):
    CLOSED = "closed"
    AUTH_NOTICE = "auth_notice"
    EDITING = "editing"


class ValidationCode(str, Enum):
    EMPTY_TITLE = "EMPTY_TITLE"
    TITLE_TOO_LONG = "TITLE_TOO_LONG"
    DESCRIPTION_TOO_LONG = "DESCRIPTION_TOO_LONG"
    MISSING_DATE = "MISSING_DATE"
    PAST_DATE = "PAST_DATE"


class OutcomeStatus(str, Enum):
    OK = "ok"
    INVALID = "invalid"      # validation failed, store untouched
    FAILED = "failed"        # store rejected the call
    IGNORED = "ignored"      # wrong mode or another call in flight
    DECLINED = "declined"    # user said no to the delete confirmation
