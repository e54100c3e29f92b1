# records_api/routers/invoices.py
import uuid

from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from records_api.core.auth import scope
from records_api.database import get_session
from records_api.models.user import User
from records_api.repositories.invoice_repo import InvoiceRepository
from records_api.schemas.invoice import (
    InvoiceActionResponse,
    InvoiceCreate,
    InvoiceListResponse,
    InvoiceResponse,
    InvoiceUpdate,
)
from records_api.services.invoice_service import InvoiceService

router = APIRouter(prefix="/invoice", tags=["Invoices"])

repo = InvoiceRepository()
service = InvoiceService(repo)


# -------- Read endpoints (admin or owner) --------


@router.get("", response_model=InvoiceListResponse)
def list_invoices(
    session: Session = Depends(get_session),
    current_user: User = Depends(scope("invoice:read")),
    customer_id: uuid.UUID | None = None,
    deleted: bool = False,
):
    """
    List invoices.

    Admins see every invoice; other users only the ones issued to them.
    """
    invoices = service.list_invoices(
        session, current_user, customer_id=customer_id, deleted=deleted
    )
    return {"invoices": invoices}


@router.get("/{invoice_id}", response_model=InvoiceResponse)
def get_invoice(
    invoice_id: str,
    session: Session = Depends(get_session),
    current_user: User = Depends(scope("invoice:read", repo, "invoice_id")),
):
    return {"invoice": service.get_invoice(session, invoice_id)}


# -------- Write endpoints (admin only) --------


@router.post(
    "",
    response_model=InvoiceActionResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(scope())],
)
def create_invoice(
    payload: InvoiceCreate,
    session: Session = Depends(get_session),
):
    invoice = service.create_invoice(session, payload)
    return {"message": "Invoice created", "invoice": invoice}


@router.patch(
    "/{invoice_id}",
    response_model=InvoiceActionResponse,
    dependencies=[Depends(scope())],
)
def update_invoice(
    invoice_id: str,
    payload: InvoiceUpdate,
    session: Session = Depends(get_session),
):
    """
    Update an invoice. customer_id and user_id cannot be changed (400).
    """
    invoice = service.update_invoice(session, invoice_id, payload)
    return {"message": "Invoice updated", "invoice": invoice}


@router.delete(
    "/{invoice_id}",
    response_model=InvoiceActionResponse,
    dependencies=[Depends(scope())],
)
def delete_invoice(
    invoice_id: str,
    session: Session = Depends(get_session),
):
    invoice = service.delete_invoice(session, invoice_id)
    return {"message": "Invoice deleted", "invoice": invoice}
