"""Dashboard response schema."""

from __future__ import annotations

from pydantic import BaseModel


class CarTypeCount(BaseModel):
    car_type: str
    count: int


class CarTypeAmount(BaseModel):
    car_type: str
    amount: int


class DashboardResponse(BaseModel):
    monthly_sales: int
    last_month_sales: int
    growth_rate: float
    proceeding_contracts_count: int
    completed_contracts_count: int
    contracts_by_car_type: list[CarTypeCount]
    sales_by_car_type: list[CarTypeAmount]
