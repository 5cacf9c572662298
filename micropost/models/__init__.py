"""SQLAlchemy ORM models."""

from micropost.models.base import Base
from micropost.models.post import Comment, Post
from micropost.models.user import User

__all__ = ["Base", "Comment", "Post", "User"]
