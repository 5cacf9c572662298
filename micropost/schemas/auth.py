"""Request/response schemas for auth endpoints."""

from pydantic import BaseModel, Field


class RegisterRequest(BaseModel):
    """Credentials for registration. Presence and length are checked by the service."""

    username: str | None = Field(default=None, description="Username (unique)")
    password: str | None = Field(default=None, description="Password (at least 6 characters)")


class LoginRequest(BaseModel):
    """Credentials for login."""

    username: str | None = Field(default=None, description="Username")
    password: str | None = Field(default=None, description="Password")


class UserOut(BaseModel):
    """Public user fields (no password hash)."""

    id: int
    username: str
    role: str

    class Config:
        from_attributes = True


class AuthResponse(BaseModel):
    """Returned by register and login. Send the token as: Authorization: Bearer <token>"""

    message: str
    user: UserOut
    token: str = Field(..., description="JWT access token, valid for 30 days")


class ProfileResponse(BaseModel):
    message: str
    user: UserOut
