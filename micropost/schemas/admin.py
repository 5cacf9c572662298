"""Request/response schemas for administrative endpoints."""

from pydantic import BaseModel, Field

from micropost.schemas.auth import UserOut


class RoleUpdateRequest(BaseModel):
    role: str | None = Field(default=None, description='Either "user" or "admin"')


class UserResponse(BaseModel):
    message: str
    user: UserOut


class UsersListResponse(BaseModel):
    """Response for GET /admin/users."""

    message: str
    count: int
    users: list[UserOut]
