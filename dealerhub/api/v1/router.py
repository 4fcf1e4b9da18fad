"""Root API router for v1 endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from dealerhub.api.v1 import (
    auth,
    cars,
    companies,
    contract_documents,
    contracts,
    customers,
    dashboard,
    health,
    uploads,
    users,
)
from dealerhub.core.config import get_config


def get_api_router() -> APIRouter:
    api_router = APIRouter(prefix=get_config().API_PREFIX)
    for module in (health, auth, companies, users, cars, customers, contracts, contract_documents, uploads, dashboard):
        api_router.include_router(module.router)
    return api_router
