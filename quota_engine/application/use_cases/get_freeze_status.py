from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import TypeVar

from quota_engine.application.dto.freeze import AnnotatedResource
from quota_engine.application.ports.resource_port import ResourcePort
from quota_engine.domain.entities.plan import UNLIMITED
from quota_engine.domain.entities.resource import EMPTY_FREEZE_STATUS, FreezeStatus
from quota_engine.domain.services.freeze import build_freeze_status
from quota_engine.domain.services.plan_catalog import is_unlimited, limit_of

from .resolve_effective_plan import ResolveEffectivePlanUseCase


logger = logging.getLogger(__name__)

T = TypeVar("T")


def _resource_id(item) -> str:
    return item.id


class GetFreezeStatusUseCase:
    """Active/frozen split of an owner's resources under the effective plan.

    The ``limit`` most recently updated resources stay active; the rest are
    frozen. Nothing is cached between calls.
    """

    def __init__(self, *, plan_resolver: ResolveEffectivePlanUseCase, resource_port: ResourcePort):
        self._plan_resolver = plan_resolver
        self._resource_port = resource_port

    def execute(self, *, owner_id: str) -> FreezeStatus:
        effective = self._plan_resolver.resolve(tenant_id=owner_id)
        if effective is None:
            return EMPTY_FREEZE_STATUS

        limit = limit_of(effective.plan_id, "resources")
        if is_unlimited(limit):
            total = self._resource_port.count_resources(owner_id=owner_id)
            return FreezeStatus(limit=UNLIMITED, total_resources=total, frozen_count=0)

        resources = self._resource_port.list_resources(owner_id=owner_id)
        status = build_freeze_status([resource.id for resource in resources], limit)
        logger.debug(
            "Freeze status computed. owner_id=%s limit=%s total=%s frozen=%s",
            owner_id,
            status.limit,
            status.total_resources,
            status.frozen_count,
        )
        return status

    def annotate(
        self,
        *,
        owner_id: str,
        items: Iterable[T],
        key: Callable[[T], str] = _resource_id,
    ) -> list[AnnotatedResource[T]]:
        """Pair each item with its frozen flag using a single status computation."""
        frozen = self.execute(owner_id=owner_id).frozen_resource_ids
        return [AnnotatedResource(item=item, is_frozen=key(item) in frozen) for item in items]
