from __future__ import annotations

from pydantic import BaseModel


class PlanPriceResponse(BaseModel):
    plan_id: str
    name: str
    monthly: int | None
    yearly: int | None
    display_price: str
    checkout_price_id: str | None
    per_user: bool
    min_users: int
    trial_days: int | None


class PricingResponse(BaseModel):
    currency: str
    interval: str
    plans: list[PlanPriceResponse]
