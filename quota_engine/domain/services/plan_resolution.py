from __future__ import annotations

import math
from datetime import datetime, timedelta

from quota_engine.domain.entities.subscription import EffectivePlan, TenantSubscriptionState
from quota_engine.domain.services.plan_catalog import DEFAULT_PLAN_ID, normalize_plan_id


_ONE_DAY = timedelta(days=1)


def is_trial_expired(state: TenantSubscriptionState, *, now: datetime) -> bool:
    return (
        state.plan_id == "trial"
        and state.trial_ends_at is not None
        and state.trial_ends_at < now
    )


def resolve_effective_plan(state: TenantSubscriptionState, *, now: datetime) -> EffectivePlan:
    """Apply trial expiry and the unknown-plan fallback to a stored state.

    ``downgraded`` is set only for an expired trial; an unrecognized plan id
    resolves to ``free`` without asking for a write.
    """
    if is_trial_expired(state, now=now):
        return EffectivePlan(
            tenant_id=state.tenant_id,
            plan_id=DEFAULT_PLAN_ID,
            stored_plan_id=state.plan_id,
            trial_ends_at=state.trial_ends_at,
            downgraded=True,
        )
    return EffectivePlan(
        tenant_id=state.tenant_id,
        plan_id=normalize_plan_id(state.plan_id),
        stored_plan_id=state.plan_id,
        trial_ends_at=state.trial_ends_at,
        downgraded=False,
    )


def trial_days_left(effective: EffectivePlan, *, now: datetime) -> int | None:
    if effective.plan_id != "trial" or effective.trial_ends_at is None:
        return None
    remaining = (effective.trial_ends_at - now) / _ONE_DAY
    return max(0, math.ceil(remaining))
