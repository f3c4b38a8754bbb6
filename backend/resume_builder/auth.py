from datetime import datetime, timedelta, timezone
from typing import Optional
from fastapi import Request, HTTPException, status
from jose import JWTError, jwt
from resume_builder.config import get_settings

settings = get_settings()

ALGORITHM = "HS256"
COOKIE_NAME = "resume_session"


def create_session_token() -> str:
    expire = datetime.now(timezone.utc) + timedelta(days=settings.session_days)
    to_encode = {"exp": expire, "authenticated": True}
    return jwt.encode(to_encode, settings.secret_key, algorithm=ALGORITHM)


def decode_session_token(token: str) -> Optional[dict]:
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[ALGORITHM])
    except JWTError:
        return None
    return payload if payload.get("authenticated", False) else None


def verify_password(password: str) -> bool:
    return password == settings.app_password


async def get_current_user(request: Request) -> bool:
    token = request.cookies.get(COOKIE_NAME)
    if not token or decode_session_token(token) is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
        )
    return True
