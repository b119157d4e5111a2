from __future__ import annotations

from quota_engine.application.ports.resource_port import ResourcePort
from quota_engine.domain.entities.plan import UNLIMITED
from quota_engine.domain.entities.resource import ResourceFreezeInfo
from quota_engine.domain.services.freeze import frozen_count, frozen_reason
from quota_engine.domain.services.plan_catalog import is_unlimited, limit_of

from .resolve_effective_plan import ResolveEffectivePlanUseCase


class IsResourceFrozenUseCase:
    """Single-resource check that avoids listing the owner's resources.

    Under or at the limit a count query is enough; over the limit only the
    ids of the active set are fetched.
    """

    def __init__(self, *, plan_resolver: ResolveEffectivePlanUseCase, resource_port: ResourcePort):
        self._plan_resolver = plan_resolver
        self._resource_port = resource_port

    def execute(self, *, owner_id: str, resource_id: str) -> ResourceFreezeInfo:
        effective = self._plan_resolver.resolve(tenant_id=owner_id)
        if effective is None:
            return ResourceFreezeInfo(
                is_frozen=False,
                reason=None,
                active_limit=0,
                total_resources=0,
                frozen_count=0,
            )

        limit = limit_of(effective.plan_id, "resources")
        if is_unlimited(limit):
            return ResourceFreezeInfo(
                is_frozen=False,
                reason=None,
                active_limit=UNLIMITED,
                total_resources=None,
                frozen_count=0,
            )

        total = self._resource_port.count_resources(owner_id=owner_id)
        frozen = frozen_count(total, limit)
        if total <= limit:
            return ResourceFreezeInfo(
                is_frozen=False,
                reason=None,
                active_limit=limit,
                total_resources=total,
                frozen_count=frozen,
            )

        active = self._resource_port.list_resources(owner_id=owner_id, limit=limit)
        is_frozen = resource_id not in {resource.id for resource in active}
        return ResourceFreezeInfo(
            is_frozen=is_frozen,
            reason=frozen_reason(limit=limit, total=total) if is_frozen else None,
            active_limit=limit,
            total_resources=total,
            frozen_count=frozen,
        )
