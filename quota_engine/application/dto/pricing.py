from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class GetPricingInput:
    locale: str | None
    interval: str = "monthly"
    currency: str | None = None


@dataclass(frozen=True)
class PlanPriceOutput:
    plan_id: str
    name: str
    monthly: int | None
    yearly: int | None
    display_price: str
    checkout_price_id: str | None
    per_user: bool
    min_users: int
    trial_days: int | None


@dataclass(frozen=True)
class GetPricingOutput:
    currency: str
    interval: str
    plans: list[PlanPriceOutput]
