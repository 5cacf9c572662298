"""ORM model for application users (auth and RBAC)."""

from sqlalchemy import Column, DateTime, Integer, String
from sqlalchemy.orm import relationship

from micropost.models.base import Base, utc_now


class User(Base):
    """
    User account for JWT authentication and role-based access control.

    role: 'admin' or 'user'. Deleting a user removes their posts and comments.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(32), nullable=False, default="user")
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)

    posts = relationship(
        "Post",
        back_populates="user",
        cascade="all, delete-orphan",
    )
    comments = relationship(
        "Comment",
        back_populates="user",
        cascade="all, delete-orphan",
    )
