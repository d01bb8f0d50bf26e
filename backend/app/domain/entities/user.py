"""Domain entities for authentication principals, roles and permissions."""

from dataclasses import dataclass, field
from datetime import date, datetime, timezone

ADMIN_ROLE = "admin"
MANAGER_ROLE = "manager"
USER_ROLE = "user"
DEFAULT_ROLES: dict[str, str] = {
    ADMIN_ROLE: "Administrator with full access",
    MANAGER_ROLE: "Manager",
    USER_ROLE: "Regular user",
}

PERMISSION_SECTIONS: tuple[str, ...] = (
    "calendar",
    "reports",
    "calculator",
    "clients",
    "accounts",
    "acts",
    "contracts",
    "dictionaries",
)


@dataclass
class Role:
    """A named role users are assigned to."""

    name: str
    id: int | None = None
    description: str = ""
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass
class SectionPermission:
    """Permission flags of one role for one UI section."""

    section: str
    can_view: bool = True
    can_create: bool = True
    can_edit: bool = True
    can_delete: bool = True
    can_export: bool = True
    can_view_analytics: bool | None = None

    def __post_init__(self) -> None:
        # Only the calendar section carries the analytics flag.
        if self.section == "calendar" and self.can_view_analytics is None:
            self.can_view_analytics = True
        elif self.section != "calendar":
            self.can_view_analytics = None


@dataclass
class User:
    """An authentication principal."""

    email: str
    password_hash: str
    full_name: str
    role_id: int
    id: int | None = None
    role_name: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    middle_name: str | None = None
    date_of_birth: date | None = None
    photo_url: str | None = None
    phone_number: str | None = None
    is_employee: bool = False
    employment_start_date: date | None = None
    employment_end_date: date | None = None
    is_active: bool = True
    is_approved: bool = False
    approved_at: datetime | None = None
    approved_by_user_id: int | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime | None = None

    @property
    def is_admin(self) -> bool:
        return self.role_name == ADMIN_ROLE

    def approve(self, approver_id: int | None) -> None:
        self.is_approved = True
        self.is_active = True
        self.approved_at = datetime.now(timezone.utc)
        self.approved_by_user_id = approver_id
        self.touch()

    def reject(self) -> None:
        self.is_approved = False
        self.is_active = False
        self.approved_at = None
        self.approved_by_user_id = None
        self.touch()

    def touch(self) -> None:
        self.updated_at = datetime.now(timezone.utc)


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()
