from __future__ import annotations

import logging
from collections.abc import Iterable

from quota_engine.application.ports.resource_port import ResourcePort
from quota_engine.application.ports.subscription_port import SubscriptionPort
from quota_engine.domain.services.freeze import frozen_ids, group_by_owner
from quota_engine.domain.services.plan_catalog import is_unlimited, limit_of

from .resolve_effective_plan import ResolveEffectivePlanUseCase


logger = logging.getLogger(__name__)


class GetBatchFreezeStatusUseCase:
    """Frozen resource ids for many owners with at most two reads.

    One read fetches every owner's subscription state; one more fetches the
    resources of the owners whose plan is limited. Expired trials are
    downgraded per owner, exactly as in the single-owner path.
    """

    def __init__(
        self,
        *,
        plan_resolver: ResolveEffectivePlanUseCase,
        subscription_port: SubscriptionPort,
        resource_port: ResourcePort,
    ):
        self._plan_resolver = plan_resolver
        self._subscription_port = subscription_port
        self._resource_port = resource_port

    def execute(self, *, owner_ids: Iterable[str]) -> dict[str, frozenset[str]]:
        unique_ids = list(dict.fromkeys(owner_ids))
        if not unique_ids:
            return {}

        result: dict[str, frozenset[str]] = {owner_id: frozenset() for owner_id in unique_ids}
        states = self._subscription_port.list_subscription_states(tenant_ids=unique_ids)

        limits: dict[str, int] = {}
        for state in states:
            if state.tenant_id not in result or state.tenant_id in limits:
                continue
            effective = self._plan_resolver.apply(state)
            limit = limit_of(effective.plan_id, "resources")
            if not is_unlimited(limit):
                limits[state.tenant_id] = limit

        logger.debug(
            "Batch freeze status. owners=%s limited_owners=%s",
            len(unique_ids),
            len(limits),
        )
        if not limits:
            return result

        limited_ids = list(limits)
        resources = self._resource_port.list_resources_for_owners(owner_ids=limited_ids)
        grouped = group_by_owner(resources, limited_ids)
        for owner_id, owner_resources in grouped.items():
            result[owner_id] = frozen_ids([resource.id for resource in owner_resources], limits[owner_id])
        return result
