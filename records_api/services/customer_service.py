# records_api/services/customer_service.py
from sqlmodel import Session

from records_api.models.customer import Category, Customer, CustomerStatus
from records_api.models.user import User
from records_api.repositories.customer_repo import CustomerRepository
from records_api.schemas.customer import CustomerCreate, CustomerUpdate
from records_api.services.common import reject_admin_only_fields

CUSTOMER_ADMIN_ONLY_FIELDS = frozenset(
    {"status", "category", "user_id", "invoices_per_month", "invoice_amount"}
)


class CustomerService:
    """
    Business logic for Customer.

    Non-admin callers only ever see customers they own, and may only edit
    the descriptive fields (name, address) of those customers.
    """

    def __init__(self, repo: CustomerRepository):
        self.repo = repo

    def list_customers(
        self,
        session: Session,
        current_user: User,
        name: str | None = None,
        status: CustomerStatus | None = None,
        category: Category | None = None,
        deleted: bool = False,
    ) -> list[Customer]:
        filters = {"status": status, "category": category}
        if not current_user.is_admin:
            filters["user_id"] = current_user.id
        return self.repo.list(session, filters, deleted=deleted, name=name)

    def get_customer(self, session: Session, customer_id: str) -> Customer:
        return self.repo.get_by_id(session, customer_id)

    def create_customer(self, session: Session, payload: CustomerCreate) -> Customer:
        """
        Raises:
            ConflictError(409): a live customer already uses this name.
        """
        return self.repo.create(session, Customer(**payload.model_dump()))

    def update_customer(
        self,
        session: Session,
        current_user: User,
        customer_id: str,
        payload: CustomerUpdate,
    ) -> Customer:
        changes = payload.model_dump(exclude_unset=True)
        reject_admin_only_fields(current_user, changes, CUSTOMER_ADMIN_ONLY_FIELDS)
        return self.repo.update(session, customer_id, changes)

    def delete_customer(self, session: Session, customer_id: str) -> Customer:
        return self.repo.soft_delete(session, customer_id)
