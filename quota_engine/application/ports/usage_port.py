from __future__ import annotations

from typing import Protocol

from quota_engine.domain.entities.usage import UsageRecord


class UsagePort(Protocol):
    def get_usage_count(self, *, tenant_id: str, feature_key: str, period: str) -> int:
        ...

    def list_usage_records(self, *, tenant_id: str, period: str) -> list[UsageRecord]:
        ...

    def increment_usage(self, *, tenant_id: str, feature_key: str, period: str, amount: int) -> int:
        ...

    def increment_usage_if_below(
        self,
        *,
        tenant_id: str,
        feature_key: str,
        period: str,
        amount: int,
        limit: int,
    ) -> int | None:
        ...
