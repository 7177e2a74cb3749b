from datetime import datetime, timedelta, timezone
from typing import Optional
from jose import jwt, JWTError
from ..config import EditorSettings
from ..domain.models import User

# User management lives in the auth subsystem; the editor only issues and reads bearer tokens.

def create_access_token(settings: EditorSettings, sub: str, name: Optional[str] = None,
                        expires_delta: Optional[timedelta] = None) -> str:
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=settings.access_token_expire_minutes))
    to_encode = {"sub": sub, "exp": expire}
    if name:
        to_encode["name"] = name
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.algorithm)

def decode_access_token(settings: EditorSettings, token: str) -> Optional[User]:
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except JWTError:
        return None
    sub = payload.get("sub")
    if not sub:
        return None
    return User(id=sub, name=payload.get("name"))
