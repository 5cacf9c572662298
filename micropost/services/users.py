"""Registration, login and administrative user management."""

import logging
from dataclasses import dataclass

from micropost.core.errors import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from micropost.core.security import TokenIssuer, hash_password, verify_password
from micropost.models import User
from micropost.services.authorization import Role, can_delete_user
from micropost.services.identity import Identity
from micropost.services.store import USERNAME_TAKEN, UserStore
from micropost.services.validation import (
    validate_login,
    validate_registration,
    validate_role,
)

logger = logging.getLogger(__name__)


@dataclass
class AuthResult:
    user: User
    token: str


def register(
    users: UserStore,
    issuer: TokenIssuer,
    username: str | None,
    password: str | None,
    bcrypt_rounds: int,
) -> AuthResult:
    """Create an ordinary user and return it with a fresh token."""
    username, password = validate_registration(username, password)
    if users.find_by_username(username) is not None:
        raise ConflictError(USERNAME_TAKEN)
    user = users.create(
        username=username,
        password_hash=hash_password(password, rounds=bcrypt_rounds),
        role=Role.USER.value,
    )
    logger.info("User registered", extra={"user_id": user.id})
    return AuthResult(user=user, token=issuer.issue(user.id, user.role))


def login(
    users: UserStore,
    issuer: TokenIssuer,
    username: str | None,
    password: str | None,
) -> AuthResult:
    """
    Check credentials and issue a token.

    Unknown user and wrong password are both 401 but carry different messages.
    """
    username, password = validate_login(username, password)
    user = users.find_by_username(username)
    if user is None:
        raise AuthenticationError("Invalid credentials (user not found).")
    if not verify_password(password, user.password_hash):
        logger.info("Failed login", extra={"user_id": user.id})
        raise AuthenticationError("Invalid credentials (wrong password).")
    return AuthResult(user=user, token=issuer.issue(user.id, user.role))


def get_user(users: UserStore, user_id: int) -> User:
    user = users.find_by_id(user_id)
    if user is None:
        raise NotFoundError("User not found.")
    return user


def change_role(users: UserStore, user_id: int, role: str | None) -> User:
    """Set a user's role. The role is validated before the user is looked up."""
    role = validate_role(role)
    user = users.find_by_id(user_id)
    if user is None:
        raise NotFoundError("User not found for role update.")
    user.role = role
    user = users.save(user)
    logger.info("User role changed", extra={"user_id": user.id, "role": role})
    return user


def delete_user(users: UserStore, actor: Identity, user_id: int) -> None:
    if not can_delete_user(actor, user_id):
        raise ValidationError("An administrator cannot delete themselves.")
    user = users.find_by_id(user_id)
    if user is None:
        raise NotFoundError("User not found for deletion.")
    users.delete(user)
    logger.info("User deleted", extra={"user_id": user_id, "actor_id": actor.id})
