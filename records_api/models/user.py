# records_api/models/user.py
import uuid

from sqlalchemy import JSON
from sqlmodel import Field

from records_api.models.common import Timestamps, unique_while_live


class User(Timestamps, table=True):
    """
    Application user.

    Authority:
      - is_admin: bypasses every permission/ownership check
      - permissions: explicit grants such as "customer:read"

    `password` always holds a bcrypt hash. It is never part of a read
    schema, so it cannot leak through a response.

    `customers` lists ids of Customer rows assigned to the user. It is an
    admin-managed weak reference (no FK, no cascade).
    """

    __tablename__ = "users"
    __table_args__ = (unique_while_live("uq_users_email_live", "email"),)

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    email: str = Field(index=True)
    password: str = Field(description="bcrypt hash")
    name: str

    is_admin: bool = Field(default=False)
    permissions: list[str] = Field(default_factory=list, sa_type=JSON)

    address: str | None = None
    address2: str | None = None
    city: str | None = None
    postal_code: str | None = None
    phone: str | None = None

    customers: list[str] = Field(default_factory=list, sa_type=JSON)
