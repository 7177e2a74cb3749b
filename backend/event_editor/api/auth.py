from fastapi import Header, Request
from ..domain.models import User
from ..services.auth_service import decode_access_token


def get_current_user_optional(request: Request, authorization: str | None = Header(None)) -> User | None:
    """Best-effort user retrieval; returns None if no valid bearer token."""
    if not authorization or not authorization.lower().startswith("bearer "):
        return None
    token = authorization.split(None, 1)[1]
    return decode_access_token(request.app.state.settings, token)
