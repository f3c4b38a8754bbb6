from datetime import datetime, timezone
from typing import Optional
from fastapi import APIRouter, Request, Response, HTTPException, status
from resume_builder.schemas import LoginRequest, LoginResponse, AuthStatus
from resume_builder.auth import verify_password, create_session_token, decode_session_token, COOKIE_NAME
from resume_builder.config import get_settings

router = APIRouter()
settings = get_settings()


def _session_expiry(token: Optional[str]) -> Optional[datetime]:
    payload = decode_session_token(token) if token else None
    if payload is None:
        return None
    return datetime.fromtimestamp(payload["exp"], tz=timezone.utc)


@router.post("/login", response_model=LoginResponse)
async def login(request: LoginRequest, response: Response):
    if not verify_password(request.password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid password",
        )

    token = create_session_token()
    response.set_cookie(
        key=COOKIE_NAME,
        value=token,
        httponly=True,
        max_age=settings.session_days * 24 * 60 * 60,
        samesite="lax",
    )
    return LoginResponse(success=True, message="Logged in", expires_at=_session_expiry(token))


@router.post("/logout", response_model=LoginResponse)
async def logout(response: Response):
    response.delete_cookie(COOKIE_NAME)
    return LoginResponse(success=True, message="Logged out")


@router.get("/check", response_model=AuthStatus)
async def check_auth(request: Request):
    expires_at = _session_expiry(request.cookies.get(COOKIE_NAME))
    return AuthStatus(authenticated=expires_at is not None, expires_at=expires_at)
