# records_api/models/customer.py
import uuid
from decimal import Decimal
from enum import Enum

from sqlmodel import Field

from records_api.models.common import Timestamps, unique_while_live


class CustomerStatus(str, Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"


class Category(str, Enum):
    BUSINESS = "BUSINESS"
    HOMECALL = "HOMECALL"


class Customer(Timestamps, table=True):
    """
    A client business or household serviced by a user.

    - name is unique among live customers (partial unique index)
    - user_id is the owning user (weak reference, may be unset)
    """

    __tablename__ = "customers"
    __table_args__ = (unique_while_live("uq_customers_name_live", "name"),)

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    name: str = Field(index=True)

    status: CustomerStatus = Field(default=CustomerStatus.ACTIVE, index=True)
    category: Category = Field(default=Category.BUSINESS, index=True)

    address: str | None = None
    address2: str | None = None
    city: str | None = None
    postal_code: str | None = None

    invoices_per_month: int = Field(default=1)
    invoice_amount: Decimal = Field(max_digits=12, decimal_places=2)

    user_id: uuid.UUID | None = Field(
        default=None,
        index=True,
        description="Owning user id",
    )
