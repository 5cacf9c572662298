"""Pydantic request/response schemas."""

from micropost.schemas.admin import RoleUpdateRequest, UserResponse, UsersListResponse
from micropost.schemas.auth import (
    AuthResponse,
    LoginRequest,
    ProfileResponse,
    RegisterRequest,
    UserOut,
)
from micropost.schemas.health import HealthResponse
from micropost.schemas.post import (
    AuthorOut,
    CommentCreateRequest,
    CommentOut,
    MessageResponse,
    PostCreateRequest,
    PostOut,
    PostResponse,
    PostsListResponse,
    PostUpdateRequest,
)

__all__ = [
    "AuthResponse",
    "AuthorOut",
    "CommentCreateRequest",
    "CommentOut",
    "HealthResponse",
    "LoginRequest",
    "MessageResponse",
    "PostCreateRequest",
    "PostOut",
    "PostResponse",
    "PostsListResponse",
    "PostUpdateRequest",
    "ProfileResponse",
    "RegisterRequest",
    "RoleUpdateRequest",
    "UserOut",
    "UserResponse",
    "UsersListResponse",
]
