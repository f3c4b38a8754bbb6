from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional


class LoginRequest(BaseModel):
    password: str = Field(..., min_length=1)


class LoginResponse(BaseModel):
    success: bool
    message: str
    expires_at: Optional[datetime] = None


class AuthStatus(BaseModel):
    """Session state reported to the editor on load."""

    authenticated: bool
    expires_at: Optional[datetime] = None
