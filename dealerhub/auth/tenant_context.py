"""Tenant context extraction and enforcement utilities."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from dealerhub.core.exceptions import AuthenticationError, NotFoundError


@dataclass(frozen=True)
class TenantContext:
    """Authenticated caller identity trusted by every service call."""

    company_id: int
    user_id: int
    is_admin: bool = False
    email: str | None = None


def from_claims(claims: dict[str, Any]) -> TenantContext:
    """Build tenant context from JWT claims."""
    try:
        company_id = int(claims["company_id"])
        user_id = int(claims["sub"])
    except (KeyError, TypeError, ValueError) as exc:
        raise AuthenticationError("Token claims are missing company/user context.") from exc

    return TenantContext(
        company_id=company_id,
        user_id=user_id,
        is_admin=bool(claims.get("is_admin", False)),
        email=claims.get("email"),
    )


def enforce_tenant_match(entity_company_id: int, context: TenantContext, resource: str = "Resource") -> None:
    """Ensure entity access stays inside context tenant.

    Rows owned by another company are reported as missing so their existence
    is never revealed across tenants.
    """
    if int(entity_company_id) != int(context.company_id):
        raise NotFoundError(f"{resource} not found.")
