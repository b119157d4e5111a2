from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from quota_engine.domain.entities.subscription import TenantSubscriptionState


class SubscriptionPort(Protocol):
    def get_subscription_state(self, *, tenant_id: str) -> TenantSubscriptionState | None:
        ...

    def list_subscription_states(self, *, tenant_ids: Sequence[str]) -> list[TenantSubscriptionState]:
        ...

    def update_plan(self, *, tenant_id: str, plan_id: str) -> None:
        ...
