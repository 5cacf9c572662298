"""Post and comment routes. Reads are public; writes require a bearer token."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from micropost.api.auth import get_current_identity, get_post_store
from micropost.schemas.post import (
    CommentCreateRequest,
    MessageResponse,
    PostCreateRequest,
    PostOut,
    PostResponse,
    PostsListResponse,
    PostUpdateRequest,
)
from micropost.services import posts as post_service
from micropost.services.identity import Identity
from micropost.services.store import PostStore
from micropost.services.validation import parse_id

router = APIRouter()


@router.post("", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
def create_post(
    body: PostCreateRequest,
    posts: Annotated[PostStore, Depends(get_post_store)],
    identity: Annotated[Identity, Depends(get_current_identity)],
) -> PostResponse:
    post = post_service.create_post(posts, identity, body.content)
    return PostResponse(message="Post created successfully", post=PostOut.model_validate(post))


@router.get("", response_model=PostsListResponse)
def list_posts(
    posts: Annotated[PostStore, Depends(get_post_store)],
) -> PostsListResponse:
    """All posts, newest first, with authors and comments."""
    items = [PostOut.model_validate(p) for p in post_service.list_posts(posts)]
    return PostsListResponse(message="Posts retrieved successfully", count=len(items), posts=items)


@router.get("/{post_id}", response_model=PostResponse)
def get_post(
    post_id: str,
    posts: Annotated[PostStore, Depends(get_post_store)],
) -> PostResponse:
    post = post_service.get_post(posts, parse_id(post_id, "post"))
    return PostResponse(message="Post retrieved successfully", post=PostOut.model_validate(post))


@router.put("/{post_id}", response_model=PostResponse)
def edit_post(
    post_id: str,
    body: PostUpdateRequest,
    posts: Annotated[PostStore, Depends(get_post_store)],
    identity: Annotated[Identity, Depends(get_current_identity)],
) -> PostResponse:
    """Replace the content of a post. Only its author may edit it."""
    post = post_service.edit_post(posts, identity, parse_id(post_id, "post"), body.content)
    return PostResponse(message="Post edited successfully", post=PostOut.model_validate(post))


@router.delete("/{post_id}", response_model=MessageResponse)
def delete_post(
    post_id: str,
    posts: Annotated[PostStore, Depends(get_post_store)],
    identity: Annotated[Identity, Depends(get_current_identity)],
) -> MessageResponse:
    """Delete a post. Allowed for its author and for admins."""
    post_service.delete_post(posts, identity, parse_id(post_id, "post"))
    return MessageResponse(message="Post deleted successfully.")


@router.post(
    "/{post_id}/comments",
    response_model=PostResponse,
    status_code=status.HTTP_201_CREATED,
)
def add_comment(
    post_id: str,
    body: CommentCreateRequest,
    posts: Annotated[PostStore, Depends(get_post_store)],
    identity: Annotated[Identity, Depends(get_current_identity)],
) -> PostResponse:
    post = post_service.add_comment(posts, identity, parse_id(post_id, "post"), body.text)
    return PostResponse(message="Comment added successfully", post=PostOut.model_validate(post))


@router.delete("/{post_id}/comments/{comment_id}", response_model=MessageResponse)
def delete_comment(
    post_id: str,
    comment_id: str,
    posts: Annotated[PostStore, Depends(get_post_store)],
    identity: Annotated[Identity, Depends(get_current_identity)],
) -> MessageResponse:
    """Delete a comment. Allowed for the comment's author and for admins."""
    post_service.delete_comment(
        posts,
        identity,
        parse_id(post_id, "post"),
        parse_id(comment_id, "comment"),
    )
    return MessageResponse(message="Comment deleted successfully.")
