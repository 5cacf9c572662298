"""Register/login/profile routes and the auth dependencies (get_current_identity, RoleGuard)."""

from typing import Annotated

from fastapi import APIRouter, Depends, Header, Request, status
from sqlalchemy.orm import Session

from micropost.core.config import Settings
from micropost.core.database import get_db
from micropost.core.security import TokenIssuer
from micropost.schemas.auth import (
    AuthResponse,
    LoginRequest,
    ProfileResponse,
    RegisterRequest,
    UserOut,
)
from micropost.services import users as user_service
from micropost.services.authorization import (
    ADMIN_ONLY,
    RoleRequirement,
    enforce,
    require_role,
)
from micropost.services.identity import Identity, IdentityResolver
from micropost.services.store import PostStore, UserStore

router = APIRouter()


def get_settings_state(request: Request) -> Settings:
    return request.app.state.settings


def get_token_issuer(request: Request) -> TokenIssuer:
    return request.app.state.token_issuer


def get_user_store(db: Annotated[Session, Depends(get_db)]) -> UserStore:
    return UserStore(db)


def get_post_store(db: Annotated[Session, Depends(get_db)]) -> PostStore:
    return PostStore(db)


def get_current_identity(
    issuer: Annotated[TokenIssuer, Depends(get_token_issuer)],
    users: Annotated[UserStore, Depends(get_user_store)],
    authorization: Annotated[str | None, Header()] = None,
) -> Identity:
    """Dependency: require a valid Bearer JWT and return the caller. Raises 401 otherwise."""
    return IdentityResolver(issuer, users).resolve(authorization)


class RoleGuard:
    """Dependency: resolve the caller, then apply the route's role requirement (401/403)."""

    def __init__(self, requirement: RoleRequirement) -> None:
        self.requirement = requirement

    def __call__(
        self,
        identity: Annotated[Identity, Depends(get_current_identity)],
    ) -> Identity:
        enforce(require_role(identity, self.requirement))
        return identity


require_admin = RoleGuard(ADMIN_ONLY)


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(
    body: RegisterRequest,
    users: Annotated[UserStore, Depends(get_user_store)],
    issuer: Annotated[TokenIssuer, Depends(get_token_issuer)],
    settings: Annotated[Settings, Depends(get_settings_state)],
) -> AuthResponse:
    """Create an account with role "user" and return it with an access token."""
    result = user_service.register(
        users,
        issuer,
        body.username,
        body.password,
        bcrypt_rounds=settings.BCRYPT_ROUNDS,
    )
    return AuthResponse(
        message="User registered successfully",
        user=UserOut.model_validate(result.user),
        token=result.token,
    )


@router.post("/login", response_model=AuthResponse)
def login(
    body: LoginRequest,
    users: Annotated[UserStore, Depends(get_user_store)],
    issuer: Annotated[TokenIssuer, Depends(get_token_issuer)],
) -> AuthResponse:
    """
    Authenticate with username and password; returns a JWT access token.
    Include the token in the Authorization header as: Bearer <token>
    """
    result = user_service.login(users, issuer, body.username, body.password)
    return AuthResponse(
        message="Login successful",
        user=UserOut.model_validate(result.user),
        token=result.token,
    )


@router.get("/profile", response_model=ProfileResponse)
def profile(
    identity: Annotated[Identity, Depends(get_current_identity)],
) -> ProfileResponse:
    return ProfileResponse(
        message="Profile access successful",
        user=UserOut(id=identity.id, username=identity.username, role=identity.role),
    )
