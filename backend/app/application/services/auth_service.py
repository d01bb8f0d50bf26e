"""Authentication use cases: login, self-registration, current user."""

import logging

from app.application.interfaces import PasswordHasher, RoleRepository, TokenService, UserRepository
from app.application.schemas.auth import RegisterRequest
from app.domain.entities import USER_ROLE, User, normalize_email
from app.domain.exceptions import (
    AuthenticationError,
    DuplicateEntityError,
    EntityNotFoundError,
    RegistrationError,
)

logger = logging.getLogger(__name__)


class AuthService:
    """Verifies credentials and issues bearer tokens.

    Login checks run in a fixed order so the web client can tell the
    cases apart: unknown email or wrong password, then a deactivated
    account, then an account still waiting for admin approval.
    """

    def __init__(
        self,
        users: UserRepository,
        roles: RoleRepository,
        hasher: PasswordHasher,
        tokens: TokenService,
        *,
        registration_enabled: bool = True,
    ):
        self._users = users
        self._roles = roles
        self._hasher = hasher
        self._tokens = tokens
        self._registration_enabled = registration_enabled

    async def login(self, email: str, password: str) -> tuple[str, User]:
        user = await self._users.get_by_email(normalize_email(email))
        if user is None or not self._hasher.verify(password, user.password_hash):
            logger.warning("Failed login for %s", normalize_email(email))
            raise AuthenticationError(
                AuthenticationError.INVALID_CREDENTIALS, "Invalid email or password"
            )
        if not user.is_active:
            raise AuthenticationError(AuthenticationError.USER_INACTIVE, "Account is deactivated")
        if not user.is_approved:
            raise AuthenticationError(
                AuthenticationError.PENDING_APPROVAL, "Account is awaiting administrator approval"
            )

        logger.info("User %s logged in", user.id)
        return self._tokens.issue(user), user

    async def register(self, data: RegisterRequest) -> User:
        if not self._registration_enabled:
            raise RegistrationError("Registration is disabled")

        email = normalize_email(data.email)
        if await self._users.get_by_email(email) is not None:
            raise DuplicateEntityError("User", "email", email)

        role = await self._roles.get_by_name(USER_ROLE)
        if role is None:
            raise RegistrationError(f"Default role '{USER_ROLE}' is missing")

        user = User(
            email=email,
            password_hash=self._hasher.hash(data.password),
            full_name=data.full_name.strip(),
            role_id=role.id,
            first_name=data.first_name,
            last_name=data.last_name,
            middle_name=data.middle_name,
            phone_number=data.phone_number,
            is_active=True,
            is_approved=False,
        )
        created = await self._users.create(user)
        logger.info("Registered user %s (%s), awaiting approval", created.id, email)
        return created

    async def current_user(self, user_id: int) -> User:
        user = await self._users.get_by_id(user_id)
        if user is None:
            raise EntityNotFoundError("User", user_id)
        return user
