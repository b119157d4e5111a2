from __future__ import annotations

from dataclasses import dataclass


TENANT_NOT_FOUND_MESSAGE = "Tenant not found"


@dataclass(frozen=True)
class UsageCheckOutput:
    allowed: bool
    remaining: int | None
    limit: int | None
    message: str | None


@dataclass(frozen=True)
class UsageStatsOutput:
    plan: str
    trial_days_left: int | None
    usage: dict[str, int]
    limits: dict[str, int]
    features: dict[str, bool | str]
