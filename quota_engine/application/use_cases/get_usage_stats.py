from __future__ import annotations

from quota_engine.application.dto.usage import UsageStatsOutput
from quota_engine.application.ports.resource_port import ResourcePort
from quota_engine.application.ports.usage_port import UsagePort
from quota_engine.domain.services.plan_catalog import DEFAULT_PLAN_ID, METERED_FEATURE_KEYS, get_plan
from quota_engine.domain.services.plan_resolution import trial_days_left
from quota_engine.domain.services.usage_period import usage_period

from .resolve_effective_plan import ResolveEffectivePlanUseCase


class GetUsageStatsUseCase:
    def __init__(
        self,
        *,
        plan_resolver: ResolveEffectivePlanUseCase,
        usage_port: UsagePort,
        resource_port: ResourcePort,
    ):
        self._plan_resolver = plan_resolver
        self._usage_port = usage_port
        self._resource_port = resource_port

    def execute(self, *, tenant_id: str) -> UsageStatsOutput:
        effective = self._plan_resolver.resolve(tenant_id=tenant_id)
        usage = {key: 0 for key in METERED_FEATURE_KEYS}
        usage["resources"] = 0

        if effective is None:
            # Unknown tenants get the free plan's view, not an error.
            plan = get_plan(DEFAULT_PLAN_ID)
            return UsageStatsOutput(
                plan=plan.id,
                trial_days_left=None,
                usage=usage,
                limits=dict(plan.limits),
                features=dict(plan.capabilities),
            )

        now = self._plan_resolver.now()
        records = self._usage_port.list_usage_records(tenant_id=tenant_id, period=usage_period(now))
        for record in records:
            if record.feature_key not in METERED_FEATURE_KEYS:
                continue
            usage[record.feature_key] = record.count
        usage["resources"] = self._resource_port.count_resources(owner_id=tenant_id)

        plan = get_plan(effective.plan_id)
        return UsageStatsOutput(
            plan=plan.id,
            trial_days_left=trial_days_left(effective, now=now),
            usage=usage,
            limits=dict(plan.limits),
            features=dict(plan.capabilities),
        )
