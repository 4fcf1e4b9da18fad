from __future__ import annotations

from datetime import timedelta

import pytest

from dealerhub.auth.jwt import create_token_pair, decode_jwt, encode_jwt
from dealerhub.auth.policy import PolicyDecision, enforce, evaluate_contract_modification
from dealerhub.auth.rbac import require_scopes, role_for
from dealerhub.auth.tenant_context import TenantContext, enforce_tenant_match, from_claims
from dealerhub.core.dependencies import get_current_user
from dealerhub.core.exceptions import AuthenticationError, AuthorizationError, ForbiddenError, NotFoundError
from dealerhub.models import Contract


def test_jwt_roundtrip_contains_required_claims():
    tokens = create_token_pair(user_id=10, company_id=20, email="a@example.com", is_admin=True, secret="test-secret")
    claims = decode_jwt(tokens.access_token, secret="test-secret")
    assert claims["sub"] == "10"
    assert claims["company_id"] == 20
    assert claims["is_admin"] is True
    assert claims["token_use"] == "access"
    assert "exp" in claims
    assert "jti" in claims


def test_jwt_rejects_tampering_and_expiry():
    token = encode_jwt({"sub": "1"}, secret="test-secret", ttl=timedelta(minutes=5))
    with pytest.raises(AuthenticationError):
        decode_jwt(token, secret="other-secret")

    expired = encode_jwt({"sub": "1"}, secret="test-secret", ttl=timedelta(minutes=-5))
    with pytest.raises(AuthenticationError):
        decode_jwt(expired, secret="test-secret")


def test_refresh_token_is_not_accepted_as_access_token():
    tokens = create_token_pair(user_id=1, company_id=2, email=None, is_admin=False, secret="test-secret")

    class _Settings:
        JWT_SECRET = "test-secret"

    user = get_current_user(tokens.access_token, settings=_Settings())
    assert user.tenant == TenantContext(company_id=2, user_id=1, is_admin=False, email=None)
    with pytest.raises(AuthenticationError):
        get_current_user(tokens.refresh_token, settings=_Settings())


def test_claims_without_company_are_rejected():
    with pytest.raises(AuthenticationError):
        from_claims({"sub": "1"})


def test_rbac_blocks_admin_scopes_for_members():
    require_scopes(role_for(False), ["contracts.write"])
    require_scopes(role_for(True), ["companies.manage"])
    with pytest.raises(AuthorizationError):
        require_scopes(role_for(False), ["companies.manage"])


def test_tenant_mismatch_reads_as_missing():
    context = TenantContext(company_id=1, user_id=1)
    enforce_tenant_match(1, context)
    with pytest.raises(NotFoundError):
        enforce_tenant_match(2, context)


def test_contract_policy_decisions():
    contract = Contract(company_id=1, user_id=7)
    owner = TenantContext(company_id=1, user_id=7)
    admin = TenantContext(company_id=1, user_id=8, is_admin=True)
    outsider = TenantContext(company_id=2, user_id=7)

    assert evaluate_contract_modification(owner, contract) is PolicyDecision.ALLOWED
    assert evaluate_contract_modification(admin, contract) is PolicyDecision.FORBIDDEN
    assert evaluate_contract_modification(outsider, contract) is PolicyDecision.NOT_FOUND
    assert evaluate_contract_modification(owner, None) is PolicyDecision.NOT_FOUND

    enforce(PolicyDecision.ALLOWED)
    with pytest.raises(ForbiddenError):
        enforce(PolicyDecision.FORBIDDEN)
    with pytest.raises(NotFoundError):
        enforce(PolicyDecision.NOT_FOUND)
