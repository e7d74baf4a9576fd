from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, Header
from jose import jwt, JWTError

from consultancy_api.config import JWT_SECRET, JWT_EXP_MINUTES
from consultancy_api.errors import AuthenticationError, PermissionDeniedError

ALG = "HS256"


def make_token(user_id: int, is_admin: bool) -> str:
    payload = {
        "sub": str(user_id),
        "adm": bool(is_admin),
        "exp": datetime.now(timezone.utc) + timedelta(minutes=JWT_EXP_MINUTES),
    }
    return jwt.encode(payload, JWT_SECRET, algorithm=ALG)


def verify_token(raw_token: str) -> Optional[dict]:
    """Return {"user_id", "is_admin"} for a valid token, None otherwise."""
    try:
        data = jwt.decode(raw_token, JWT_SECRET, algorithms=[ALG])
        return {
            "user_id": int(data["sub"]),
            "is_admin": bool(data.get("adm", False)),
        }
    except (JWTError, KeyError, ValueError):
        return None


def auth_user(authorization: Optional[str] = Header(None)):
    """
    Accepts Authorization: Bearer <token>.
    Raises 401 before any row is read or written.
    """
    if not authorization or not authorization.lower().startswith("bearer "):
        raise AuthenticationError("No authorization header")
    token = authorization.split(" ", 1)[1].strip()
    data = verify_token(token)
    if not data:
        raise AuthenticationError("Invalid token")
    return data


def admin_user(me=Depends(auth_user)):
    if not me["is_admin"]:
        raise PermissionDeniedError("Admin only")
    return me
