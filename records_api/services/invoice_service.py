# records_api/services/invoice_service.py
import uuid

from sqlmodel import Session

from records_api.models.invoice import Invoice
from records_api.models.user import User
from records_api.repositories.invoice_repo import InvoiceRepository
from records_api.schemas.invoice import InvoiceCreate, InvoiceUpdate


class InvoiceService:
    """
    Business logic for Invoice.

    Writes are admin only (enforced at the router). Reads are scoped to the
    caller's own invoices unless the caller is an admin.
    """

    def __init__(self, repo: InvoiceRepository):
        self.repo = repo

    def list_invoices(
        self,
        session: Session,
        current_user: User,
        customer_id: uuid.UUID | None = None,
        deleted: bool = False,
    ) -> list[Invoice]:
        filters = {"customer_id": customer_id}
        if not current_user.is_admin:
            filters["user_id"] = current_user.id
        return self.repo.list(session, filters, deleted=deleted)

    def get_invoice(self, session: Session, invoice_id: str) -> Invoice:
        return self.repo.get_by_id(session, invoice_id)

    def create_invoice(self, session: Session, payload: InvoiceCreate) -> Invoice:
        data = payload.model_dump()
        data["jobs"] = [job.value for job in payload.jobs]
        return self.repo.create(session, Invoice(**data))

    def update_invoice(
        self,
        session: Session,
        invoice_id: str,
        payload: InvoiceUpdate,
    ) -> Invoice:
        changes = payload.model_dump(exclude_unset=True)
        if "jobs" in changes:
            changes["jobs"] = [job.value for job in payload.jobs]
        return self.repo.update(session, invoice_id, changes)

    def delete_invoice(self, session: Session, invoice_id: str) -> Invoice:
        return self.repo.soft_delete(session, invoice_id)
