from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Mapping

from quota_engine.domain.entities.resource import ResourceRef
from quota_engine.domain.entities.subscription import TenantSubscriptionState
from quota_engine.domain.entities.usage import UsageRecord


def _as_str(value: Any) -> str:
    return str(value)


def _as_utc(value: datetime | None) -> datetime | None:
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def map_row_to_subscription_state(row: Mapping[str, Any]) -> TenantSubscriptionState:
    return TenantSubscriptionState(
        tenant_id=_as_str(row["id"]),
        plan_id=row.get("plan") or "",
        trial_ends_at=_as_utc(row.get("trial_ends_at")),
    )


def map_row_to_usage_record(row: Mapping[str, Any]) -> UsageRecord:
    return UsageRecord(
        tenant_id=_as_str(row["tenant_id"]),
        feature_key=row["feature_key"],
        period=row["period"],
        count=int(row["count"]),
    )


def map_row_to_resource_ref(row: Mapping[str, Any]) -> ResourceRef:
    return ResourceRef(
        id=_as_str(row["id"]),
        owner_id=_as_str(row["owner_id"]),
        updated_at=_as_utc(row["updated_at"]),
    )
