from __future__ import annotations

import logging

from quota_engine.application.dto.usage import TENANT_NOT_FOUND_MESSAGE, UsageCheckOutput
from quota_engine.application.ports.usage_port import UsagePort
from quota_engine.domain.exceptions import InvalidUsageAmountError
from quota_engine.domain.services.plan_catalog import is_unlimited, limit_of
from quota_engine.domain.services.usage_period import usage_period

from .check_usage_limit import limit_reached_message
from .resolve_effective_plan import ResolveEffectivePlanUseCase


logger = logging.getLogger(__name__)


class ConsumeUsageUseCase:
    """Check and record in one conditional storage write.

    Closes the window between ``CheckUsageLimitUseCase`` and
    ``RecordUsageUseCase``; callers that use those two directly keep the
    two-step behaviour.
    """

    def __init__(self, *, plan_resolver: ResolveEffectivePlanUseCase, usage_port: UsagePort):
        self._plan_resolver = plan_resolver
        self._usage_port = usage_port

    def execute(self, *, tenant_id: str, feature_key: str, amount: int = 1) -> UsageCheckOutput:
        if amount < 1:
            raise InvalidUsageAmountError("amount must be a positive integer.")

        effective = self._plan_resolver.resolve(tenant_id=tenant_id)
        if effective is None:
            return UsageCheckOutput(allowed=False, remaining=None, limit=None, message=TENANT_NOT_FOUND_MESSAGE)

        period = usage_period(self._plan_resolver.now())
        limit = limit_of(effective.plan_id, feature_key)
        if is_unlimited(limit):
            self._usage_port.increment_usage(
                tenant_id=tenant_id,
                feature_key=feature_key,
                period=period,
                amount=amount,
            )
            return UsageCheckOutput(allowed=True, remaining=None, limit=limit, message=None)

        count = None
        if amount <= limit:
            count = self._usage_port.increment_usage_if_below(
                tenant_id=tenant_id,
                feature_key=feature_key,
                period=period,
                amount=amount,
                limit=limit,
            )
        if count is None:
            logger.info(
                "Usage rejected at limit. tenant_id=%s feature=%s limit=%s",
                tenant_id,
                feature_key,
                limit,
            )
            current = self._usage_port.get_usage_count(
                tenant_id=tenant_id,
                feature_key=feature_key,
                period=period,
            )
            return UsageCheckOutput(
                allowed=False,
                remaining=max(0, limit - current),
                limit=limit,
                message=limit_reached_message(limit=limit, feature_key=feature_key),
            )
        return UsageCheckOutput(allowed=True, remaining=max(0, limit - count), limit=limit, message=None)
