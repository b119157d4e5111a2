from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class ResourceRef:
    id: str
    owner_id: str
    updated_at: datetime


@dataclass(frozen=True)
class FreezeStatus:
    limit: int
    total_resources: int
    frozen_count: int
    frozen_resource_ids: frozenset[str] = field(default_factory=frozenset)


EMPTY_FREEZE_STATUS = FreezeStatus(limit=0, total_resources=0, frozen_count=0)


@dataclass(frozen=True)
class ResourceFreezeInfo:
    is_frozen: bool
    reason: str | None
    active_limit: int
    total_resources: int | None
    frozen_count: int
