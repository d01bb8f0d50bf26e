"""Unit tests for login, registration and role permissions."""

import pytest
import pytest_asyncio

from app.application.schemas.auth import RegisterRequest, SectionPermissionSchema
from app.application.services import AuthService, RoleService, UserService
from app.domain.entities import PERMISSION_SECTIONS, User
from app.domain.exceptions import (
    AuthenticationError,
    DuplicateEntityError,
    InvalidReferenceError,
    PermissionDeniedError,
    RegistrationError,
)
from app.infrastructure.security import JoseTokenService, Pbkdf2PasswordHasher

hasher = Pbkdf2PasswordHasher()
tokens = JoseTokenService(secret="unit-test-secret", issuer="PayPlanner", audience="PayPlanner")


@pytest_asyncio.fixture
async def seeded(roles, users):
    await RoleService(roles, users).ensure_default_roles()
    await UserService(users, roles, hasher).ensure_admin("Admin@Example.com", "secret1", "Admin")
    return roles, users


def _auth(roles, users, *, registration_enabled: bool = True) -> AuthService:
    return AuthService(users, roles, hasher, tokens, registration_enabled=registration_enabled)


def _register(email: str = "new@example.com") -> RegisterRequest:
    return RegisterRequest(email=email, password="secret1", full_name=" New User ")


@pytest.mark.asyncio
async def test_admin_login_issues_token_with_claims(roles, users, seeded):
    token, user = await _auth(roles, users).login(" admin@example.com ", "secret1")

    claims = tokens.decode(token)
    assert claims["sub"] == str(user.id)
    assert claims["email"] == "admin@example.com"
    assert claims["role"] == "admin"


@pytest.mark.asyncio
async def test_wrong_password_is_invalid_credentials(roles, users, seeded):
    with pytest.raises(AuthenticationError) as exc_info:
        await _auth(roles, users).login("admin@example.com", "nope")
    assert exc_info.value.code == AuthenticationError.INVALID_CREDENTIALS


@pytest.mark.asyncio
async def test_registered_user_waits_for_approval(roles, users, seeded):
    service = _auth(roles, users)
    registered = await service.register(_register())

    assert registered.role_name == "user"
    assert registered.full_name == "New User"
    assert registered.is_approved is False
    with pytest.raises(AuthenticationError) as exc_info:
        await service.login("new@example.com", "secret1")
    assert exc_info.value.code == AuthenticationError.PENDING_APPROVAL


@pytest.mark.asyncio
async def test_inactive_check_precedes_approval(roles, users, seeded):
    service = _auth(roles, users)
    registered = await service.register(_register())
    registered.is_active = False

    with pytest.raises(AuthenticationError) as exc_info:
        await service.login("new@example.com", "secret1")
    assert exc_info.value.code == AuthenticationError.USER_INACTIVE


@pytest.mark.asyncio
async def test_approved_user_can_log_in(roles, users, seeded):
    service = _auth(roles, users)
    registered = await service.register(_register())
    await UserService(users, roles, hasher).approve_user(registered.id, approver_id=1)

    _, user = await service.login("new@example.com", "secret1")
    assert user.approved_by_user_id == 1


@pytest.mark.asyncio
async def test_duplicate_registration_is_rejected(roles, users, seeded):
    with pytest.raises(DuplicateEntityError):
        await _auth(roles, users).register(_register("ADMIN@example.com"))


@pytest.mark.asyncio
async def test_disabled_registration(roles, users, seeded):
    with pytest.raises(RegistrationError):
        await _auth(roles, users, registration_enabled=False).register(_register())


@pytest.mark.asyncio
async def test_unsaved_sections_default_to_full_access(roles, users, seeded):
    service = RoleService(roles, users)
    admin = await users.get_by_email("admin@example.com")
    manager = await roles.get_by_name("manager")

    _, matrix = await service.get_permissions(manager.id, admin)

    assert [p.section for p in matrix] == list(PERMISSION_SECTIONS)
    assert all(p.can_view and p.can_delete for p in matrix)
    assert matrix[0].can_view_analytics is True
    assert matrix[1].can_view_analytics is None


@pytest.mark.asyncio
async def test_saved_permissions_fill_missing_sections(roles, users, seeded):
    service = RoleService(roles, users)
    manager = await roles.get_by_name("manager")

    _, matrix = await service.save_permissions(
        manager.id, [SectionPermissionSchema(section="acts", can_delete=False)]
    )

    by_section = {p.section: p for p in matrix}
    assert by_section["acts"].can_delete is False
    assert by_section["clients"].can_delete is True
    assert len(matrix) == len(PERMISSION_SECTIONS)


@pytest.mark.asyncio
async def test_unknown_permission_section_is_rejected(roles, users, seeded):
    manager = await roles.get_by_name("manager")
    with pytest.raises(InvalidReferenceError):
        await RoleService(roles, users).save_permissions(
            manager.id, [SectionPermissionSchema(section="warehouse")]
        )


@pytest.mark.asyncio
async def test_other_roles_permissions_are_hidden_from_non_admins(roles, users, seeded):
    user_role = await roles.get_by_name("user")
    manager = await roles.get_by_name("manager")
    caller = User(
        email="u@example.com",
        password_hash="x",
        full_name="U",
        role_id=user_role.id,
        role_name="user",
    )

    with pytest.raises(PermissionDeniedError):
        await RoleService(roles, users).get_permissions(manager.id, caller)


@pytest.mark.asyncio
async def test_role_with_users_cannot_be_deleted(roles, users, seeded):
    admin_role = await roles.get_by_name("admin")
    with pytest.raises(InvalidReferenceError):
        await RoleService(roles, users).delete_role(admin_role.id)
