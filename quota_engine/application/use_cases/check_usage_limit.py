from __future__ import annotations

from quota_engine.application.dto.usage import TENANT_NOT_FOUND_MESSAGE, UsageCheckOutput
from quota_engine.application.ports.usage_port import UsagePort
from quota_engine.domain.services.plan_catalog import is_unlimited, limit_of
from quota_engine.domain.services.usage_period import usage_period

from .resolve_effective_plan import ResolveEffectivePlanUseCase


def limit_reached_message(*, limit: int, feature_key: str) -> str:
    return f"You've reached your monthly limit of {limit} {feature_key}. Upgrade to unlock more capacity."


class CheckUsageLimitUseCase:
    def __init__(self, *, plan_resolver: ResolveEffectivePlanUseCase, usage_port: UsagePort):
        self._plan_resolver = plan_resolver
        self._usage_port = usage_port

    def execute(self, *, tenant_id: str, feature_key: str) -> UsageCheckOutput:
        effective = self._plan_resolver.resolve(tenant_id=tenant_id)
        if effective is None:
            return UsageCheckOutput(allowed=False, remaining=None, limit=None, message=TENANT_NOT_FOUND_MESSAGE)

        limit = limit_of(effective.plan_id, feature_key)
        if is_unlimited(limit):
            return UsageCheckOutput(allowed=True, remaining=None, limit=limit, message=None)

        count = self._usage_port.get_usage_count(
            tenant_id=tenant_id,
            feature_key=feature_key,
            period=usage_period(self._plan_resolver.now()),
        )
        if count >= limit:
            return UsageCheckOutput(
                allowed=False,
                remaining=0,
                limit=limit,
                message=limit_reached_message(limit=limit, feature_key=feature_key),
            )
        return UsageCheckOutput(allowed=True, remaining=limit - count, limit=limit, message=None)
