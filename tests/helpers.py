from records_api.core.security import create_access_token
from records_api.models.user import User


def auth_headers(user: User) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(user.id)}"}
