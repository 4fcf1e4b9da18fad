"""Shared authorization helpers for API v1 route modules."""

from __future__ import annotations

from dealerhub.auth.rbac import require_scopes
from dealerhub.core.config import get_config
from dealerhub.core.dependencies import CurrentUser, get_current_user
from dealerhub.core.exceptions import AuthenticationError


def _extract_bearer_token(authorization: str | None) -> str:
    if authorization is None or not authorization.strip():
        raise AuthenticationError("Authorization header is required.")
    parts = authorization.strip().split(" ", 1)
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise AuthenticationError("Authorization header must use Bearer token.")
    return parts[1].strip()


def authorize(authorization: str | None, scopes: list[str]) -> CurrentUser:
    token = _extract_bearer_token(authorization)
    user = get_current_user(token=token, settings=get_config())
    require_scopes(user.role, scopes)
    return user
