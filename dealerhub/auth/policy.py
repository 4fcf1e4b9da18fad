"""Capability checks evaluated before a mutation is applied."""

from __future__ import annotations

import enum

from dealerhub.auth.tenant_context import TenantContext
from dealerhub.core.exceptions import ForbiddenError, NotFoundError
from dealerhub.models.contract import Contract


class PolicyDecision(str, enum.Enum):
    ALLOWED = "allowed"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"


def evaluate_contract_modification(actor: TenantContext, contract: Contract | None) -> PolicyDecision:
    """Only the assigned salesperson may modify or delete a contract.

    Tenant admins get no exemption.
    """
    if contract is None or contract.company_id != actor.company_id:
        return PolicyDecision.NOT_FOUND
    if contract.user_id != actor.user_id:
        return PolicyDecision.FORBIDDEN
    return PolicyDecision.ALLOWED


def enforce(decision: PolicyDecision, resource: str = "Contract") -> None:
    """Raise the error mapped to a non-allowed decision."""
    if decision is PolicyDecision.NOT_FOUND:
        raise NotFoundError(f"{resource} not found.")
    if decision is PolicyDecision.FORBIDDEN:
        raise ForbiddenError(f"Only the assigned user may modify this {resource.lower()}.")
