from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UsageRecord:
    tenant_id: str
    feature_key: str
    period: str
    count: int
