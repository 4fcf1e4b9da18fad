"""Dependency providers for API handlers."""

from __future__ import annotations

from collections.abc import Generator
from dataclasses import dataclass
from typing import Any

from sqlalchemy.orm import Session

from dealerhub.auth.jwt import ACCESS_TOKEN, decode_jwt
from dealerhub.auth.rbac import role_for
from dealerhub.auth.tenant_context import TenantContext, from_claims
from dealerhub.core.config import Config, get_config
from dealerhub.core.exceptions import AuthenticationError
from dealerhub.database.db import get_db


@dataclass(frozen=True)
class CurrentUser:
    user_id: int
    company_id: int
    email: str | None
    is_admin: bool
    claims: dict[str, Any]

    @property
    def role(self) -> str:
        return role_for(self.is_admin)

    @property
    def tenant(self) -> TenantContext:
        return TenantContext(
            company_id=self.company_id,
            user_id=self.user_id,
            is_admin=self.is_admin,
            email=self.email,
        )


def get_settings() -> Config:
    """Return validated application configuration."""
    return get_config()


def get_db_session() -> Generator[Session, None, None]:
    """Yield SQLAlchemy session for dependency injection."""
    yield from get_db()


def get_current_user(token: str, settings: Config | None = None) -> CurrentUser:
    """Resolve current user from an access bearer token."""
    cfg = settings or get_settings()
    claims = decode_jwt(token=token, secret=cfg.JWT_SECRET)
    if claims.get("token_use") != ACCESS_TOKEN:
        raise AuthenticationError("Token is not an access token.")
    context = from_claims(claims)
    return CurrentUser(
        user_id=context.user_id,
        company_id=context.company_id,
        email=context.email,
        is_admin=context.is_admin,
        claims=claims,
    )
