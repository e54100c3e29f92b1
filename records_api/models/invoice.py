# records_api/models/invoice.py
import uuid
from datetime import datetime
from decimal import Decimal
from enum import Enum

from sqlalchemy import JSON
from sqlmodel import Field

from records_api.models.common import Timestamps


class Job(str, Enum):
    ANT = "ANT"
    BEDBUG = "BEDBUG"
    COCKROACH = "COCKROACH"


class Invoice(Timestamps, table=True):
    """
    A billed service visit.

    customer_id and user_id are fixed when the invoice is created; the
    update schema does not accept them.
    """

    __tablename__ = "invoices"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    description: str | None = None

    # Job values, stored as their string names
    jobs: list[str] = Field(default_factory=list, sa_type=JSON)

    amount: Decimal = Field(max_digits=12, decimal_places=2)

    service_date: datetime | None = None
    payment_date: datetime | None = None

    customer_id: uuid.UUID = Field(index=True)
    user_id: uuid.UUID = Field(index=True)
