from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class TenantSubscriptionState:
    tenant_id: str
    plan_id: str
    trial_ends_at: datetime | None


@dataclass(frozen=True)
class EffectivePlan:
    tenant_id: str
    plan_id: str
    stored_plan_id: str
    trial_ends_at: datetime | None
    downgraded: bool
