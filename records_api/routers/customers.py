# records_api/routers/customers.py
from fastapi import APIRouter, Depends, Query, status
from sqlmodel import Session

from records_api.core.auth import scope
from records_api.database import get_session
from records_api.models.customer import Category, CustomerStatus
from records_api.models.user import User
from records_api.repositories.customer_repo import CustomerRepository
from records_api.schemas.customer import (
    CustomerActionResponse,
    CustomerCreate,
    CustomerListResponse,
    CustomerResponse,
    CustomerUpdate,
)
from records_api.services.customer_service import CustomerService

router = APIRouter(prefix="/customer", tags=["Customers"])

repo = CustomerRepository()
service = CustomerService(repo)


@router.get("", response_model=CustomerListResponse)
def list_customers(
    session: Session = Depends(get_session),
    current_user: User = Depends(scope("customer:read")),
    name: str | None = None,
    customer_status: CustomerStatus | None = Query(default=None, alias="status"),
    category: Category | None = None,
    deleted: bool = False,
):
    """
    List customers.

    Admins see every customer; other users only the ones they own.
    """
    customers = service.list_customers(
        session,
        current_user,
        name=name,
        status=customer_status,
        category=category,
        deleted=deleted,
    )
    return {"customers": customers}


@router.get("/{customer_id}", response_model=CustomerResponse)
def get_customer(
    customer_id: str,
    session: Session = Depends(get_session),
    current_user: User = Depends(scope("customer:read", repo, "customer_id")),
):
    return {"customer": service.get_customer(session, customer_id)}


@router.post(
    "",
    response_model=CustomerActionResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(scope())],
)
def create_customer(
    payload: CustomerCreate,
    session: Session = Depends(get_session),
):
    """
    Create a customer (admin only).
    """
    customer = service.create_customer(session, payload)
    return {"message": "Customer created", "customer": customer}


@router.patch("/{customer_id}", response_model=CustomerActionResponse)
def update_customer(
    customer_id: str,
    payload: CustomerUpdate,
    session: Session = Depends(get_session),
    current_user: User = Depends(scope("customer:update", repo, "customer_id")),
):
    """
    Update a customer (admin, or owner with `customer:update`).

    status, category, user_id, invoices_per_month and invoice_amount are
    admin only.
    """
    customer = service.update_customer(session, current_user, customer_id, payload)
    return {"message": "Customer updated", "customer": customer}


@router.delete("/{customer_id}", response_model=CustomerActionResponse)
def delete_customer(
    customer_id: str,
    session: Session = Depends(get_session),
    current_user: User = Depends(scope("customer:delete", repo, "customer_id")),
):
    customer = service.delete_customer(session, customer_id)
    return {"message": "Customer deleted", "customer": customer}
