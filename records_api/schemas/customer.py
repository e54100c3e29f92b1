# records_api/schemas/customer.py
import uuid
from datetime import datetime
from decimal import Decimal

from pydantic import ConfigDict, field_serializer, field_validator
from sqlmodel import SQLModel, Field

from records_api.models.customer import Category, CustomerStatus


class CustomerCreate(SQLModel):
    """
    Payload for creating a customer (admin only).

    name and invoice_amount are required; everything else has a default.
    """

    model_config = ConfigDict(extra="forbid")

    name: str = Field(max_length=255)
    status: CustomerStatus = CustomerStatus.ACTIVE
    category: Category = Category.BUSINESS
    address: str | None = None
    address2: str | None = None
    city: str | None = None
    postal_code: str | None = None
    user_id: uuid.UUID | None = None
    invoices_per_month: int = Field(default=1, ge=0)
    invoice_amount: Decimal = Field(ge=0, max_digits=12, decimal_places=2)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty")
        return v


class CustomerUpdate(SQLModel):
    """
    Partial update payload for customers.
    All fields are optional; explicit nulls are only accepted for the
    nullable columns.
    """

    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(default=None, max_length=255)
    status: CustomerStatus | None = None
    category: Category | None = None
    address: str | None = None
    address2: str | None = None
    city: str | None = None
    postal_code: str | None = None
    user_id: uuid.UUID | None = None
    invoices_per_month: int | None = Field(default=None, ge=0)
    invoice_amount: Decimal | None = Field(
        default=None, ge=0, max_digits=12, decimal_places=2
    )

    @field_validator("status", "category", "invoices_per_month", "invoice_amount")
    @classmethod
    def not_null(cls, v):
        if v is None:
            raise ValueError("field cannot be null")
        return v

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str | None) -> str:
        if v is None:
            raise ValueError("name cannot be null")
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty")
        return v


class CustomerRead(SQLModel):
    """Customer representation for clients."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    status: CustomerStatus
    category: Category
    address: str | None = None
    address2: str | None = None
    city: str | None = None
    postal_code: str | None = None
    invoices_per_month: int
    invoice_amount: Decimal
    user_id: uuid.UUID | None = None
    created_at: datetime
    updated_at: datetime
    deleted_at: datetime | None = None

    @field_serializer("invoice_amount")
    def invoice_amount_as_number(self, v: Decimal) -> float:
        return float(v)


class CustomerResponse(SQLModel):
    customer: CustomerRead


class CustomerActionResponse(SQLModel):
    message: str
    customer: CustomerRead


class CustomerListResponse(SQLModel):
    customers: list[CustomerRead]
