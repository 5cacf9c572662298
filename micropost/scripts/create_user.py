"""
Create a user, typically the first admin (registration always yields role "user").
Run from project root:
  python -m micropost.scripts.create_user USERNAME PASSWORD [role]
Example:
  python -m micropost.scripts.create_user admin your-secure-password admin
"""
import argparse
import logging
import sys

from dotenv import load_dotenv

from micropost.core.config import Settings, get_settings
from micropost.core.database import build_engine, build_session_factory, init_db
from micropost.core.errors import AppError
from micropost.core.security import PASSWORD_MAX_LEN, PASSWORD_MIN_LEN, hash_password
from micropost.services.authorization import Role
from micropost.services.store import UserStore
from micropost.services.validation import validate_registration

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)


def create_user(settings: Settings, username: str, password: str, role: str) -> int:
    """Create the user; return a process exit code."""
    try:
        username, password = validate_registration(username, password)
    except AppError as e:
        print(e.message, file=sys.stderr)
        return 1

    engine = build_engine(settings)
    init_db(engine)
    session = build_session_factory(engine)()
    try:
        users = UserStore(session)
        if users.find_by_username(username) is not None:
            print(f"User '{username}' already exists.", file=sys.stderr)
            return 1
        user = users.create(
            username=username,
            password_hash=hash_password(password, rounds=settings.BCRYPT_ROUNDS),
            role=role,
        )
        logger.info("Created user '%s' (id=%s) with role '%s'.", user.username, user.id, user.role)
        return 0
    except AppError as e:
        print(e.message, file=sys.stderr)
        return 1
    finally:
        session.close()
        engine.dispose()


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    parser = argparse.ArgumentParser(description="Create a Micropost user.")
    parser.add_argument("username", help="Username (1-255 chars)")
    parser.add_argument(
        "password", help=f"Password ({PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} chars)"
    )
    parser.add_argument(
        "role",
        nargs="?",
        default=Role.USER.value,
        choices=[r.value for r in Role],
    )
    args = parser.parse_args(argv)
    return create_user(get_settings(), args.username, args.password, args.role)


if __name__ == "__main__":
    sys.exit(main())
