from __future__ import annotations

from pydantic import BaseModel


class UsageCheckResponse(BaseModel):
    allowed: bool
    remaining: int | None
    limit: int | None
    message: str | None


class UsageStatsResponse(BaseModel):
    plan: str
    trial_days_left: int | None
    usage: dict[str, int]
    limits: dict[str, int]
    features: dict[str, bool | str]


class FeatureAccessResponse(BaseModel):
    capability: str
    has_access: bool


class RecordUsageResponse(BaseModel):
    feature_key: str
    count: int


class EffectivePlanResponse(BaseModel):
    tenant_id: str
    plan: str
