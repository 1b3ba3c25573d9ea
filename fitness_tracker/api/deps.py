"""Request-scoped dependencies: settings and the authenticated user id."""

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from fitness_tracker.core.config import Settings
from fitness_tracker.core.errors import AuthenticationError
from fitness_tracker.core.security import decode_access_token

bearer_scheme = HTTPBearer(auto_error=False)


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


async def get_current_user_id(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    settings: Settings = Depends(get_app_settings),
) -> int:
    """Resolve ``Authorization: Bearer <token>`` to a user id, or fail with 401."""
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise AuthenticationError("Access denied. No token provided or invalid format.")
    user_id = decode_access_token(credentials.credentials, settings)
    if user_id is None:
        raise AuthenticationError("Invalid token")
    return user_id
