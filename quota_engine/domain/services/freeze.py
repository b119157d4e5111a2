from __future__ import annotations

from collections.abc import Iterable, Sequence

from quota_engine.domain.entities.resource import FreezeStatus, ResourceRef
from quota_engine.domain.services.plan_catalog import is_unlimited


def frozen_ids(ordered_ids: Sequence[str], limit: int) -> frozenset[str]:
    """Ids beyond the ``limit`` most recent; ``ordered_ids`` is newest first."""
    if is_unlimited(limit) or len(ordered_ids) <= limit:
        return frozenset()
    return frozenset(ordered_ids[limit:])


def build_freeze_status(ordered_ids: Sequence[str], limit: int) -> FreezeStatus:
    frozen = frozen_ids(ordered_ids, limit)
    return FreezeStatus(
        limit=limit,
        total_resources=len(ordered_ids),
        frozen_count=len(frozen),
        frozen_resource_ids=frozen,
    )


def frozen_count(total: int, limit: int) -> int:
    if is_unlimited(limit):
        return 0
    return max(0, total - limit)


def frozen_reason(*, limit: int, total: int) -> str:
    return (
        f"Your plan allows {limit} active resources. "
        f"This resource is frozen because you have {total} resources."
    )


def group_by_owner(
    resources: Iterable[ResourceRef],
    owner_ids: Iterable[str],
) -> dict[str, list[ResourceRef]]:
    """Group a batched fetch per owner, newest first within each owner.

    The sort is stable, so ties on ``updated_at`` keep the order the store
    returned them in.
    """
    grouped: dict[str, list[ResourceRef]] = {owner_id: [] for owner_id in owner_ids}
    for resource in resources:
        bucket = grouped.get(resource.owner_id)
        if bucket is not None:
            bucket.append(resource)
    for bucket in grouped.values():
        bucket.sort(key=lambda item: item.updated_at, reverse=True)
    return grouped
