# records_api/schemas/invoice.py
import uuid
from datetime import datetime, timezone
from decimal import Decimal

from pydantic import ConfigDict, field_serializer, field_validator
from sqlmodel import SQLModel, Field

from records_api.models.invoice import Job


def _unique_jobs(jobs: list[Job]) -> list[Job]:
    return list(dict.fromkeys(jobs))


def _as_utc(v: datetime | None) -> datetime | None:
    # dates without an offset are taken as UTC; others are converted to UTC
    if v is None:
        return v
    if v.tzinfo is None:
        return v.replace(tzinfo=timezone.utc)
    return v.astimezone(timezone.utc)


class InvoiceCreate(SQLModel):
    """Payload for creating an invoice (admin only)."""

    model_config = ConfigDict(extra="forbid")

    description: str | None = None
    jobs: list[Job]
    amount: Decimal = Field(ge=0, max_digits=12, decimal_places=2)
    service_date: datetime | None = None
    payment_date: datetime | None = None
    customer_id: uuid.UUID
    user_id: uuid.UUID

    @field_validator("jobs")
    @classmethod
    def unique_jobs(cls, v: list[Job]) -> list[Job]:
        return _unique_jobs(v)

    @field_validator("service_date", "payment_date")
    @classmethod
    def dates_as_utc(cls, v: datetime | None) -> datetime | None:
        return _as_utc(v)


class InvoiceUpdate(SQLModel):
    """
    Partial update payload for invoices.

    customer_id and user_id are not accepted: they are fixed at creation,
    and `extra="forbid"` turns any attempt into a 400.
    """

    model_config = ConfigDict(extra="forbid")

    description: str | None = None
    jobs: list[Job] | None = None
    amount: Decimal | None = Field(default=None, ge=0, max_digits=12, decimal_places=2)
    service_date: datetime | None = None
    payment_date: datetime | None = None

    @field_validator("jobs")
    @classmethod
    def unique_jobs(cls, v: list[Job] | None) -> list[Job]:
        if v is None:
            raise ValueError("jobs cannot be null")
        return _unique_jobs(v)

    @field_validator("amount")
    @classmethod
    def amount_not_null(cls, v: Decimal | None) -> Decimal:
        if v is None:
            raise ValueError("amount cannot be null")
        return v

    @field_validator("service_date", "payment_date")
    @classmethod
    def dates_as_utc(cls, v: datetime | None) -> datetime | None:
        return _as_utc(v)


class InvoiceRead(SQLModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    description: str | None = None
    jobs: list[Job]
    amount: Decimal
    service_date: datetime | None = None
    payment_date: datetime | None = None
    customer_id: uuid.UUID
    user_id: uuid.UUID
    created_at: datetime
    updated_at: datetime
    deleted_at: datetime | None = None

    @field_serializer("amount")
    def amount_as_number(self, v: Decimal) -> float:
        return float(v)


class InvoiceResponse(SQLModel):
    invoice: InvoiceRead


class InvoiceActionResponse(SQLModel):
    message: str
    invoice: InvoiceRead


class InvoiceListResponse(SQLModel):
    invoices: list[InvoiceRead]
