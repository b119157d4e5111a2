from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from quota_engine.domain.entities.resource import ResourceRef


class ResourcePort(Protocol):
    def count_resources(self, *, owner_id: str) -> int:
        ...

    def list_resources(self, *, owner_id: str, limit: int | None = None) -> list[ResourceRef]:
        ...

    def list_resources_for_owners(self, *, owner_ids: Sequence[str]) -> list[ResourceRef]:
        ...
