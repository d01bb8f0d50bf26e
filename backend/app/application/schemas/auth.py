"""Pydantic DTOs for authentication, users, roles and permissions."""

from datetime import date, datetime

from pydantic import Field

from app.application.schemas.common import CamelModel


class LoginRequest(CamelModel):
    email: str = Field(..., min_length=3, max_length=200)
    password: str = Field(..., min_length=1)


class RegisterRequest(CamelModel):
    email: str = Field(..., min_length=3, max_length=200)
    password: str = Field(..., min_length=6)
    full_name: str = Field(..., min_length=1, max_length=200)
    first_name: str | None = None
    last_name: str | None = None
    middle_name: str | None = None
    phone_number: str | None = None


class UserResponse(CamelModel):
    id: int
    email: str
    full_name: str
    first_name: str | None
    last_name: str | None
    middle_name: str | None
    date_of_birth: date | None
    photo_url: str | None
    phone_number: str | None
    is_employee: bool
    employment_start_date: date | None
    employment_end_date: date | None
    role_id: int
    role_name: str | None = Field(None, alias="role")
    is_active: bool
    is_approved: bool
    approved_at: datetime | None
    approved_by_user_id: int | None
    created_at: datetime
    updated_at: datetime | None


class LoginResponse(CamelModel):
    token: str
    user: UserResponse


class UserCreate(CamelModel):
    email: str = Field(..., min_length=3, max_length=200)
    password: str = Field(..., min_length=6)
    full_name: str = Field(..., min_length=1, max_length=200)
    role_id: int
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


class UserUpdate(CamelModel):
    """Partial update: only provided fields change."""

    email: str | None = Field(None, min_length=3, max_length=200)
    password: str | None = Field(None, min_length=6)
    full_name: str | None = Field(None, min_length=1, max_length=200)
    role_id: int | None = None
    first_name: str | None = None
    last_name: str | None = None
    middle_name: str | None = None
    date_of_birth: date | None = None
    photo_url: str | None = None
    phone_number: str | None = None
    is_employee: bool | None = None
    employment_start_date: date | None = None
    employment_end_date: date | None = None
    is_active: bool | None = None
    is_approved: bool | None = None


class RoleWrite(CamelModel):
    name: str = Field(..., min_length=1, max_length=50)
    description: str = Field("", max_length=300)


class RoleResponse(CamelModel):
    id: int
    name: str
    description: str
    created_at: datetime


class SectionPermissionSchema(CamelModel):
    section: str
    can_view: bool = True
    can_create: bool = True
    can_edit: bool = True
    can_delete: bool = True
    can_export: bool = True
    can_view_analytics: bool | None = None


class RolePermissionsResponse(CamelModel):
    role_id: int
    role_name: str
    permissions: list[SectionPermissionSchema]


class RolePermissionsUpdate(CamelModel):
    permissions: list[SectionPermissionSchema]
