"""Document-style stores over the SQLAlchemy session.

Each method is one store round-trip; writes commit immediately so every
mutation is a single unit of work. Driver errors are rolled back and
re-raised as InternalError with a generic message.
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from micropost.core.errors import ConflictError, InternalError
from micropost.models import Comment, Post, User

logger = logging.getLogger(__name__)

USERNAME_TAKEN = "Username is already registered."


@contextmanager
def _store_errors(
    session: Session, operation: str, conflict_message: str | None = None
) -> Iterator[None]:
    try:
        yield
    except IntegrityError as e:
        session.rollback()
        if conflict_message is None:
            logger.exception("Integrity error during %s", operation)
            raise InternalError("Internal server error.") from e
        logger.info("Conflict during %s: %s", operation, e.orig)
        raise ConflictError(conflict_message) from e
    except SQLAlchemyError as e:
        session.rollback()
        logger.exception("Store failure during %s", operation)
        raise InternalError("Internal server error.") from e


class UserStore:
    """Credential store: user records by id or username."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def find_by_id(self, user_id: int) -> User | None:
        with _store_errors(self.session, "user lookup"):
            return self.session.get(User, user_id)

    def find_by_username(self, username: str) -> User | None:
        with _store_errors(self.session, "user lookup"):
            return self.session.scalars(
                select(User).where(User.username == username)
            ).first()

    def list_all(self) -> list[User]:
        with _store_errors(self.session, "user listing"):
            return list(self.session.scalars(select(User).order_by(User.id)))

    def create(self, username: str, password_hash: str, role: str = "user") -> User:
        user = User(username=username, password_hash=password_hash, role=role)
        with _store_errors(
            self.session, "user create", conflict_message=USERNAME_TAKEN
        ):
            self.session.add(user)
            self.session.commit()
            self.session.refresh(user)
        return user

    def save(self, user: User) -> User:
        with _store_errors(self.session, "user save"):
            self.session.add(user)
            self.session.commit()
            self.session.refresh(user)
        return user

    def delete(self, user: User) -> None:
        with _store_errors(self.session, "user delete"):
            self.session.delete(user)
            self.session.commit()


def _with_authors(query):
    return query.options(
        selectinload(Post.user),
        selectinload(Post.comments).selectinload(Comment.user),
    )


class PostStore:
    """Posts with their embedded, newest-first comment lists."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_all(self) -> list[Post]:
        with _store_errors(self.session, "post listing"):
            query = _with_authors(select(Post)).order_by(Post.created_at.desc(), Post.id.desc())
            return list(self.session.scalars(query))

    def find_by_id(self, post_id: int) -> Post | None:
        with _store_errors(self.session, "post lookup"):
            return self.session.scalars(
                _with_authors(select(Post)).where(Post.id == post_id)
            ).first()

    def create(self, user_id: int, content: str) -> Post:
        post = Post(user_id=user_id, content=content)
        with _store_errors(self.session, "post create"):
            self.session.add(post)
            self.session.commit()
            self.session.refresh(post)
        return post

    def save(self, post: Post) -> Post:
        with _store_errors(self.session, "post save"):
            self.session.add(post)
            self.session.commit()
            self.session.refresh(post)
        return post

    def delete(self, post: Post) -> None:
        with _store_errors(self.session, "post delete"):
            self.session.delete(post)
            self.session.commit()

    def add_comment(self, post: Post, user_id: int, text: str) -> Comment:
        comment = Comment(post_id=post.id, user_id=user_id, text=text)
        with _store_errors(self.session, "comment create"):
            self.session.add(comment)
            self.session.commit()
        return comment

    def remove_comment(self, post: Post, comment: Comment) -> None:
        with _store_errors(self.session, "comment delete"):
            post.comments.remove(comment)
            self.session.commit()


def find_comment(post: Post, comment_id: int) -> Comment | None:
    """Return the comment with comment_id from post's own list, if present."""
    return next((c for c in post.comments if c.id == comment_id), None)

