# records_api/services/common.py
import logging
from collections.abc import Iterable
from typing import Any

from records_api.core.errors import ForbiddenError
from records_api.models.user import User

logger = logging.getLogger(__name__)


def reject_admin_only_fields(
    current_user: User,
    changes: dict[str, Any],
    admin_only: Iterable[str],
) -> None:
    """
    Refuse a non-admin update that touches any admin-only field.

    The whole request is rejected; fields are never silently dropped.
    """
    if current_user.is_admin:
        return
    blocked = sorted(set(admin_only) & changes.keys())
    if blocked:
        logger.warning(
            "Admin-only fields in update by user_id=%s: %s", current_user.id, blocked
        )
        raise ForbiddenError("Only admins may update these fields")
