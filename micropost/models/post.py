"""ORM models for posts and the comments they own."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from micropost.models.base import Base, utc_now

CONTENT_MAX_LEN = 280


class Post(Base):
    """
    A short post written by one user.

    comments is ordered most-recent-first and owned by the post: removing a
    comment from the list deletes it, deleting the post deletes them all.
    """

    __tablename__ = "posts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    content = Column(String(CONTENT_MAX_LEN), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now, index=True)
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
        onupdate=utc_now,
    )

    user = relationship("User", back_populates="posts")
    comments = relationship(
        "Comment",
        back_populates="post",
        cascade="all, delete-orphan",
        order_by=lambda: [Comment.created_at.desc(), Comment.id.desc()],
    )


class Comment(Base):
    """A comment embedded in exactly one post; its id is only resolved through that post."""

    __tablename__ = "comments"

    id = Column(Integer, primary_key=True, autoincrement=True)
    post_id = Column(
        Integer,
        ForeignKey("posts.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    text = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)

    post = relationship("Post", back_populates="comments")
    user = relationship("User", back_populates="comments")
