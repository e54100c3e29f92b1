import pytest
from starlette.requests import Request

from records_api.core.auth import get_current_user, scope
from records_api.core.errors import ForbiddenError, InvalidInputError
from records_api.repositories.customer_repo import CustomerRepository
from records_api.repositories.user_repo import UserRepository
from tests.fixtures_data import UNKNOWN_ID

customers = CustomerRepository()
users = UserRepository()


def _build_request(path: str = "/customer", method: str = "GET", path_params: dict | None = None) -> Request:
    scope_ = {
        "type": "http",
        "method": method,
        "path": path,
        "query_string": b"",
        "headers": [],
        "path_params": path_params or {},
        "client": ("testclient", 50000),
        "server": ("testserver", 80),
        "scheme": "http",
    }
    return Request(scope_)


def test_admin_is_always_allowed(session, admin):
    dependency = scope()

    assert dependency(request=_build_request(), session=session, user=admin) is admin


def test_admin_bypasses_ownership(session, admin, user, make_customer):
    customer = make_customer(user)
    dependency = scope("customer:read", customers, "customer_id")
    request = _build_request(path_params={"customer_id": str(customer.id)})

    assert dependency(request=request, session=session, user=admin) is admin


def test_no_permission_means_admin_only(session, user):
    dependency = scope()

    with pytest.raises(ForbiddenError) as exc:
        dependency(request=_build_request(), session=session, user=user)

    assert exc.value.message == "Unauthorized"


def test_permission_without_resource_is_enough(session, user):
    dependency = scope("customer:read")

    assert dependency(request=_build_request(), session=session, user=user) is user


def test_missing_permission_is_denied(session, make_user):
    reader = make_user("reader@example.ca", permissions=["invoice:read"])
    dependency = scope("customer:read")

    with pytest.raises(ForbiddenError):
        dependency(request=_build_request(), session=session, user=reader)


def test_owner_with_permission_is_allowed(session, user, make_customer):
    customer = make_customer(user)
    dependency = scope("customer:update", customers, "customer_id")
    request = _build_request(path_params={"customer_id": str(customer.id)})

    assert dependency(request=request, session=session, user=user) is user


def test_permission_holder_not_owning_resource_is_denied(session, user, other_user, make_customer):
    customer = make_customer(other_user)
    dependency = scope("customer:update", customers, "customer_id")
    request = _build_request(path_params={"customer_id": str(customer.id)})

    with pytest.raises(ForbiddenError) as exc:
        dependency(request=request, session=session, user=user)

    assert exc.value.message == "Unauthorized"


def test_owner_without_permission_is_denied(session, make_user, make_customer):
    owner = make_user("owner@example.ca", permissions=["customer:read"])
    customer = make_customer(owner)
    dependency = scope("customer:update", customers, "customer_id")
    request = _build_request(path_params={"customer_id": str(customer.id)})

    with pytest.raises(ForbiddenError):
        dependency(request=request, session=session, user=owner)


def test_resource_that_is_the_user_counts_as_owned(session, user):
    dependency = scope("user:read", users, "user_id")
    request = _build_request(path="/user", path_params={"user_id": str(user.id)})

    assert dependency(request=request, session=session, user=user) is user


def test_missing_resource_is_denied_without_revealing_absence(session, user):
    dependency = scope("customer:read", customers, "customer_id")
    request = _build_request(path_params={"customer_id": UNKNOWN_ID})

    with pytest.raises(ForbiddenError) as exc:
        dependency(request=request, session=session, user=user)

    assert exc.value.message == "Unauthorized"


def test_deleted_resource_is_denied(session, user, make_customer):
    customer = make_customer(user)
    customers.soft_delete(session, customer.id)
    dependency = scope("customer:read", customers, "customer_id")
    request = _build_request(path_params={"customer_id": str(customer.id)})

    with pytest.raises(ForbiddenError):
        dependency(request=request, session=session, user=user)


def test_malformed_resource_id_is_invalid_input(session, user):
    dependency = scope("customer:read", customers, "customer_id")
    request = _build_request(path_params={"customer_id": "not-a-uuid"})

    with pytest.raises(InvalidInputError):
        dependency(request=request, session=session, user=user)


def test_scope_requires_id_param_with_repo():
    with pytest.raises(ValueError):
        scope("customer:read", customers)


def test_current_user_for_deleted_user_is_denied(session, user):
    users.soft_delete(session, user.id)

    with pytest.raises(ForbiddenError) as exc:
        get_current_user(payload={"sub": str(user.id)}, session=session)

    assert exc.value.message == "Unauthorized"


def test_current_user_with_malformed_sub_is_denied(session):
    with pytest.raises(ForbiddenError):
        get_current_user(payload={"sub": "garbage"}, session=session)


def test_current_user_without_sub_is_denied(session):
    with pytest.raises(ForbiddenError):
        get_current_user(payload={}, session=session)
