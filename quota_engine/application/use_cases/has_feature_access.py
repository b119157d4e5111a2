from __future__ import annotations

from quota_engine.domain.services.plan_catalog import capability_of

from .resolve_effective_plan import ResolveEffectivePlanUseCase


class HasFeatureAccessUseCase:
    def __init__(self, *, plan_resolver: ResolveEffectivePlanUseCase):
        self._plan_resolver = plan_resolver

    def execute(self, *, tenant_id: str, capability_key: str) -> bool:
        effective = self._plan_resolver.resolve(tenant_id=tenant_id)
        if effective is None:
            return False

        return bool(capability_of(effective.plan_id, capability_key))
