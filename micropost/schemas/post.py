"""Request/response schemas for posts and comments."""

from datetime import datetime

from pydantic import BaseModel, Field


class PostCreateRequest(BaseModel):
    content: str | None = Field(default=None, description="Post text, 1-280 characters")


class PostUpdateRequest(BaseModel):
    content: str | None = Field(default=None, description="New post text, 1-280 characters")


class CommentCreateRequest(BaseModel):
    text: str | None = Field(default=None, description="Comment text, non-empty")


class AuthorOut(BaseModel):
    id: int
    username: str

    class Config:
        from_attributes = True


class CommentOut(BaseModel):
    id: int
    text: str
    user: AuthorOut
    created_at: datetime

    class Config:
        from_attributes = True


class PostOut(BaseModel):
    """A post with its author and comments, newest comment first."""

    id: int
    content: str
    user: AuthorOut
    comments: list[CommentOut]
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class PostResponse(BaseModel):
    message: str
    post: PostOut


class PostsListResponse(BaseModel):
    message: str
    count: int
    posts: list[PostOut]


class MessageResponse(BaseModel):
    message: str
