from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime

from quota_engine.application.ports.subscription_port import SubscriptionPort
from quota_engine.domain.entities.subscription import EffectivePlan, TenantSubscriptionState
from quota_engine.domain.exceptions import TenantNotFoundError
from quota_engine.domain.services.plan_resolution import resolve_effective_plan

from .clock import utcnow


logger = logging.getLogger(__name__)


class ResolveEffectivePlanUseCase:
    """Effective plan of a tenant, persisting the downgrade of an expired trial."""

    def __init__(
        self,
        *,
        subscription_port: SubscriptionPort,
        clock: Callable[[], datetime] = utcnow,
    ):
        self._subscription_port = subscription_port
        self._clock = clock

    def execute(self, *, tenant_id: str) -> str:
        effective = self.resolve(tenant_id=tenant_id)
        if effective is None:
            raise TenantNotFoundError(f"Tenant {tenant_id} not found.")
        return effective.plan_id

    def resolve(self, *, tenant_id: str) -> EffectivePlan | None:
        state = self._subscription_port.get_subscription_state(tenant_id=tenant_id)
        if state is None:
            return None
        return self.apply(state)

    def apply(self, state: TenantSubscriptionState) -> EffectivePlan:
        effective = resolve_effective_plan(state, now=self._clock())
        if effective.downgraded:
            # Writing "free" again on a concurrent call is harmless.
            self._subscription_port.update_plan(tenant_id=state.tenant_id, plan_id=effective.plan_id)
            logger.info(
                "Trial expired; tenant downgraded. tenant_id=%s previous_plan=%s plan=%s",
                state.tenant_id,
                state.plan_id,
                effective.plan_id,
            )
        return effective

    def now(self) -> datetime:
        return self._clock()
