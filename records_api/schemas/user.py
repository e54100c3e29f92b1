# records_api/schemas/user.py
import uuid
from datetime import datetime

from pydantic import EmailStr, ConfigDict, field_validator
from sqlmodel import SQLModel, Field


def _strip_required(v: str | None) -> str:
    if v is None:
        raise ValueError("field cannot be null")
    v = v.strip()
    if not v:
        raise ValueError("field cannot be empty")
    return v


def _dedupe(values: list) -> list:
    """Drop repeated entries, keeping first occurrence order."""
    return list(dict.fromkeys(values))


class RegisterBody(SQLModel):
    """
    Payload for /auth/register (admin only).

    is_admin defaults to False; permissions default to the configured
    DEFAULT_PERMISSIONS when omitted.
    """

    model_config = ConfigDict(extra="forbid")

    email: EmailStr
    password: str = Field(min_length=8)
    name: str = Field(max_length=200)
    address: str | None = None
    address2: str | None = None
    city: str | None = None
    postal_code: str | None = None
    phone: str | None = None
    is_admin: bool = False
    permissions: list[str] | None = None

    @field_validator("name")
    @classmethod
    def normalize_name(cls, v: str) -> str:
        return _strip_required(v)

    @field_validator("permissions")
    @classmethod
    def unique_permissions(cls, v: list[str] | None) -> list[str] | None:
        return None if v is None else _dedupe(v)


class LoginBody(SQLModel):
    model_config = ConfigDict(extra="forbid")

    email: EmailStr
    password: str = Field(min_length=8)


class UserRead(SQLModel):
    """
    Response schema returned to clients.

    Deliberately has no `password` field.
    """

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    email: str
    name: str
    is_admin: bool
    permissions: list[str]
    address: str | None = None
    address2: str | None = None
    city: str | None = None
    postal_code: str | None = None
    phone: str | None = None
    customers: list[uuid.UUID] = []
    created_at: datetime
    updated_at: datetime
    deleted_at: datetime | None = None


class UserUpdate(SQLModel):
    """
    Partial update payload for /user/{user_id}.

    customers, is_admin and permissions may only be sent by an admin;
    the service rejects the whole request otherwise.
    """

    model_config = ConfigDict(extra="forbid")

    email: EmailStr | None = None
    password: str | None = Field(default=None, min_length=8)
    name: str | None = Field(default=None, max_length=200)
    address: str | None = None
    address2: str | None = None
    city: str | None = None
    postal_code: str | None = None
    phone: str | None = None
    customers: list[uuid.UUID] | None = None
    is_admin: bool | None = None
    permissions: list[str] | None = None

    @field_validator("email", "password", "is_admin", "customers", "permissions")
    @classmethod
    def not_null(cls, v):
        # only runs for explicitly supplied values
        if v is None:
            raise ValueError("field cannot be null")
        return v

    @field_validator("name")
    @classmethod
    def normalize_name(cls, v: str | None) -> str:
        return _strip_required(v)

    @field_validator("customers", "permissions")
    @classmethod
    def unique_values(cls, v: list) -> list:
        return _dedupe(v)


class UserResponse(SQLModel):
    user: UserRead


class UserActionResponse(SQLModel):
    message: str
    user: UserRead


class UserListResponse(SQLModel):
    users: list[UserRead]


class LoginResponse(SQLModel):
    message: str
    user: UserRead
    token: str
