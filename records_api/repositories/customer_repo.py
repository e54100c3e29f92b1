# records_api/repositories/customer_repo.py
from records_api.models.customer import Customer
from records_api.repositories.base import SoftDeleteRepository


class CustomerRepository(SoftDeleteRepository[Customer]):
    """Data access layer for Customer."""

    model = Customer
    label = "Customer"
    unique_field = "name"
