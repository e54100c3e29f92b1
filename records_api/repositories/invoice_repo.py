# records_api/repositories/invoice_repo.py
from records_api.models.invoice import Invoice
from records_api.repositories.base import SoftDeleteRepository


class InvoiceRepository(SoftDeleteRepository[Invoice]):
    model = Invoice
    label = "Invoice"
