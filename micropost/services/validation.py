"""Input checks performed before any store query."""

from micropost.core.errors import ValidationError
from micropost.core.security import PASSWORD_MAX_LEN, PASSWORD_MIN_LEN, USERNAME_MAX_LEN
from micropost.models.post import CONTENT_MAX_LEN
from micropost.services.authorization import VALID_ROLES

# Upper bound of the Integer primary key columns (signed 32-bit on Postgres).
MAX_ID = 2**31 - 1


def parse_id(raw: str | int, label: str = "resource") -> int:
    """Parse a path identifier. Anything but a positive integer is a ValidationError."""
    if isinstance(raw, int) and not isinstance(raw, bool):
        value = raw
    else:
        text = str(raw).strip()
        if not text.isascii() or not text.isdigit():
            raise ValidationError(f"Invalid {label} ID.")
        value = int(text)
    if value < 1 or value > MAX_ID:
        raise ValidationError(f"Invalid {label} ID.")
    return value


def validate_registration(username: str | None, password: str | None) -> tuple[str, str]:
    if not username or not username.strip() or not password:
        raise ValidationError("Please provide a username and a password.")
    username = username.strip()
    if len(username) > USERNAME_MAX_LEN:
        raise ValidationError(f"Username cannot exceed {USERNAME_MAX_LEN} characters.")
    if len(password) < PASSWORD_MIN_LEN:
        raise ValidationError(f"Password must be at least {PASSWORD_MIN_LEN} characters long.")
    if len(password) > PASSWORD_MAX_LEN:
        raise ValidationError(f"Password cannot exceed {PASSWORD_MAX_LEN} characters.")
    return username, password


def validate_login(username: str | None, password: str | None) -> tuple[str, str]:
    if not username or not username.strip() or not password:
        raise ValidationError("Please enter your username and password.")
    return username.strip(), password


def validate_content(content: str | None) -> str:
    """Post content: non-blank, at most CONTENT_MAX_LEN characters. Returns it trimmed."""
    if not content or not content.strip():
        raise ValidationError("Post content cannot be empty.")
    if len(content) > CONTENT_MAX_LEN:
        raise ValidationError(f"Post content cannot exceed {CONTENT_MAX_LEN} characters.")
    return content.strip()


def validate_comment_text(text: str | None) -> str:
    if not text or not text.strip():
        raise ValidationError("Comment cannot be empty.")
    return text.strip()


def validate_role(role: str | None) -> str:
    if not role or role not in VALID_ROLES:
        raise ValidationError('Invalid role. Allowed roles are "user" or "admin".')
    return role
