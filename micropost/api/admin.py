"""Administrative routes. Every route here requires role "admin"."""

from typing import Annotated

from fastapi import APIRouter, Depends

from micropost.api.auth import get_post_store, get_user_store, require_admin
from micropost.schemas.admin import RoleUpdateRequest, UserResponse, UsersListResponse
from micropost.schemas.auth import ProfileResponse, UserOut
from micropost.schemas.post import MessageResponse
from micropost.services import posts as post_service
from micropost.services import users as user_service
from micropost.services.identity import Identity
from micropost.services.store import PostStore, UserStore
from micropost.services.validation import parse_id

router = APIRouter(dependencies=[Depends(require_admin)])


@router.get("/dashboard", response_model=ProfileResponse)
def dashboard(
    admin: Annotated[Identity, Depends(require_admin)],
) -> ProfileResponse:
    return ProfileResponse(
        message=f"Welcome to the admin dashboard, {admin.username}!",
        user=UserOut(id=admin.id, username=admin.username, role=admin.role),
    )


@router.get("/users", response_model=UsersListResponse)
def list_users(
    users: Annotated[UserStore, Depends(get_user_store)],
) -> UsersListResponse:
    """List all users (admin only)."""
    items = [UserOut.model_validate(u) for u in users.list_all()]
    return UsersListResponse(message="Users retrieved successfully", count=len(items), users=items)


@router.get("/users/{user_id}", response_model=UserResponse)
def get_user(
    user_id: str,
    users: Annotated[UserStore, Depends(get_user_store)],
) -> UserResponse:
    user = user_service.get_user(users, parse_id(user_id, "user"))
    return UserResponse(message="User retrieved successfully", user=UserOut.model_validate(user))


@router.put("/users/{user_id}/role", response_model=UserResponse)
def update_role(
    user_id: str,
    body: RoleUpdateRequest,
    users: Annotated[UserStore, Depends(get_user_store)],
) -> UserResponse:
    """Set a user's role to "user" or "admin"."""
    target_id = parse_id(user_id, "user")
    user = user_service.change_role(users, target_id, body.role)
    return UserResponse(
        message=f"Role of user {user.username} updated to {user.role} successfully.",
        user=UserOut.model_validate(user),
    )


@router.delete("/users/{user_id}", response_model=MessageResponse)
def delete_user(
    user_id: str,
    users: Annotated[UserStore, Depends(get_user_store)],
    admin: Annotated[Identity, Depends(require_admin)],
) -> MessageResponse:
    """Delete a user with their posts and comments. Admins cannot delete themselves."""
    user_service.delete_user(users, admin, parse_id(user_id, "user"))
    return MessageResponse(message="User deleted successfully.")


@router.delete("/posts/{post_id}", response_model=MessageResponse)
def delete_post(
    post_id: str,
    posts: Annotated[PostStore, Depends(get_post_store)],
    admin: Annotated[Identity, Depends(require_admin)],
) -> MessageResponse:
    post_service.delete_post(posts, admin, parse_id(post_id, "post"))
    return MessageResponse(message="Post deleted by administrator successfully.")


@router.delete("/posts/{post_id}/comments/{comment_id}", response_model=MessageResponse)
def delete_comment(
    post_id: str,
    comment_id: str,
    posts: Annotated[PostStore, Depends(get_post_store)],
    admin: Annotated[Identity, Depends(require_admin)],
) -> MessageResponse:
    post_service.delete_comment(
        posts,
        admin,
        parse_id(post_id, "post"),
        parse_id(comment_id, "comment"),
    )
    return MessageResponse(message="Comment deleted by administrator successfully.")
