from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal


PlanId = Literal["free", "trial", "pro", "team", "enterprise"]
FeatureKey = Literal[
    "resources",
    "executions",
    "api_calls",
    "api_keys",
    "team_members",
    "pii_scans",
    "compliance_reports",
]
CapabilityKey = Literal[
    "pii_detection",
    "sharing",
    "compliance_reports",
    "api_access",
    "team_features",
    "sso",
    "audit_logs",
    "custom_integrations",
]
Currency = Literal["USD", "CNY", "EUR"]
BillingInterval = Literal["monthly", "yearly"]

UNLIMITED = -1


@dataclass(frozen=True)
class BillingPrice:
    monthly: int | None
    yearly: int | None

    def for_interval(self, interval: BillingInterval) -> int | None:
        return self.monthly if interval == "monthly" else self.yearly


@dataclass(frozen=True)
class Plan:
    id: PlanId
    name: str
    limits: dict[str, int]
    capabilities: dict[str, bool | str]
    price: dict[str, BillingPrice] = field(default_factory=dict)
    team_per_user_price: dict[str, BillingPrice] = field(default_factory=dict)
    team_min_users: int = 1
    trial_days: int | None = None
    self_serve: bool = True
