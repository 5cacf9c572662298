"""Post and comment operations with ownership enforcement.

Lookups happen first (404 if missing), then the ownership check (401 if the
caller may not mutate), then the single-document write.
"""

import logging

from micropost.core.errors import NotFoundError, OwnershipError
from micropost.models import Post
from micropost.services.authorization import Action, can_mutate
from micropost.services.identity import Identity
from micropost.services.store import PostStore, find_comment
from micropost.services.validation import validate_comment_text, validate_content

logger = logging.getLogger(__name__)


def _get_post(posts: PostStore, post_id: int) -> Post:
    post = posts.find_by_id(post_id)
    if post is None:
        raise NotFoundError("Post not found.")
    return post


def list_posts(posts: PostStore) -> list[Post]:
    return posts.list_all()


def get_post(posts: PostStore, post_id: int) -> Post:
    return _get_post(posts, post_id)


def create_post(posts: PostStore, actor: Identity, content: str | None) -> Post:
    content = validate_content(content)
    post = posts.create(user_id=actor.id, content=content)
    logger.info("Post created", extra={"post_id": post.id, "user_id": actor.id})
    return _get_post(posts, post.id)


def edit_post(posts: PostStore, actor: Identity, post_id: int, content: str | None) -> Post:
    content = validate_content(content)
    post = _get_post(posts, post_id)
    if not can_mutate(actor, post.user_id, Action.EDIT):
        raise OwnershipError("Not authorized to edit this post.")
    post.content = content
    posts.save(post)
    return _get_post(posts, post_id)


def delete_post(posts: PostStore, actor: Identity, post_id: int) -> None:
    post = _get_post(posts, post_id)
    if not can_mutate(actor, post.user_id, Action.DELETE):
        raise OwnershipError("Not authorized to delete this post.")
    posts.delete(post)
    logger.info("Post deleted", extra={"post_id": post_id, "actor_id": actor.id})


def add_comment(posts: PostStore, actor: Identity, post_id: int, text: str | None) -> Post:
    """Prepend a comment to the post and return the refreshed post."""
    text = validate_comment_text(text)
    post = posts.find_by_id(post_id)
    if post is None:
        raise NotFoundError("Post not found for commenting.")
    posts.add_comment(post, user_id=actor.id, text=text)
    return _get_post(posts, post_id)


def delete_comment(posts: PostStore, actor: Identity, post_id: int, comment_id: int) -> None:
    post = _get_post(posts, post_id)
    comment = find_comment(post, comment_id)
    if comment is None:
        raise NotFoundError("Comment not found on this post.")
    if not can_mutate(actor, comment.user_id, Action.DELETE):
        raise OwnershipError("Not authorized to delete this comment.")
    posts.remove_comment(post, comment)
    logger.info(
        "Comment deleted",
        extra={"post_id": post_id, "comment_id": comment_id, "actor_id": actor.id},
    )
