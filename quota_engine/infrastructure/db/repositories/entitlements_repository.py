from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import bindparam, text

from quota_engine.application.ports.resource_port import ResourcePort
from quota_engine.application.ports.subscription_port import SubscriptionPort
from quota_engine.application.ports.usage_port import UsagePort
from quota_engine.infrastructure.db.mappers.entitlements_mapper import (
    map_row_to_resource_ref,
    map_row_to_subscription_state,
    map_row_to_usage_record,
)


class SqlEntitlementsRepository(SubscriptionPort, UsagePort, ResourcePort):
    def __init__(self, engine):
        self._engine = engine

    def get_subscription_state(self, *, tenant_id: str):
        sql = """
            SELECT id, plan, trial_ends_at
            FROM public.tenants
            WHERE id = :tenant_id
            LIMIT 1
        """
        with self._engine.connect() as conn:
            row = conn.execute(text(sql), {"tenant_id": tenant_id}).mappings().first()
        if row is None:
            return None
        return map_row_to_subscription_state(row)

    def list_subscription_states(self, *, tenant_ids: Sequence[str]):
        if not tenant_ids:
            return []
        sql = text(
            """
            SELECT id, plan, trial_ends_at
            FROM public.tenants
            WHERE id IN :tenant_ids
            """
        ).bindparams(bindparam("tenant_ids", expanding=True))
        with self._engine.connect() as conn:
            rows = conn.execute(sql, {"tenant_ids": list(tenant_ids)}).mappings().all()
        return [map_row_to_subscription_state(row) for row in rows]

    def update_plan(self, *, tenant_id: str, plan_id: str) -> None:
        sql = """
            UPDATE public.tenants
            SET plan = :plan_id,
                updated_at = now()
            WHERE id = :tenant_id
        """
        with self._engine.begin() as conn:
            conn.execute(text(sql), {"tenant_id": tenant_id, "plan_id": plan_id})

    def get_usage_count(self, *, tenant_id: str, feature_key: str, period: str) -> int:
        sql = """
            SELECT count
            FROM public.usage_records
            WHERE tenant_id = :tenant_id
              AND feature_key = :feature_key
              AND period = :period
            LIMIT 1
        """
        with self._engine.connect() as conn:
            value = conn.execute(
                text(sql),
                {
                    "tenant_id": tenant_id,
                    "feature_key": feature_key,
                    "period": period,
                },
            ).scalar_one_or_none()
        return int(value) if value is not None else 0

    def list_usage_records(self, *, tenant_id: str, period: str):
        sql = """
            SELECT tenant_id, feature_key, period, count
            FROM public.usage_records
            WHERE tenant_id = :tenant_id
              AND period = :period
            ORDER BY feature_key
        """
        with self._engine.connect() as conn:
            rows = conn.execute(text(sql), {"tenant_id": tenant_id, "period": period}).mappings().all()
        return [map_row_to_usage_record(row) for row in rows]

    def increment_usage(self, *, tenant_id: str, feature_key: str, period: str, amount: int) -> int:
        sql = """
            INSERT INTO public.usage_records (tenant_id, feature_key, period, count)
            VALUES (:tenant_id, :feature_key, :period, :amount)
            ON CONFLICT (tenant_id, feature_key, period) DO UPDATE
            SET count = public.usage_records.count + EXCLUDED.count
            RETURNING count
        """
        with self._engine.begin() as conn:
            value = conn.execute(
                text(sql),
                {
                    "tenant_id": tenant_id,
                    "feature_key": feature_key,
                    "period": period,
                    "amount": amount,
                },
            ).scalar_one()
        return int(value)

    def increment_usage_if_below(
        self,
        *,
        tenant_id: str,
        feature_key: str,
        period: str,
        amount: int,
        limit: int,
    ) -> int | None:
        sql = """
            INSERT INTO public.usage_records (tenant_id, feature_key, period, count)
            VALUES (:tenant_id, :feature_key, :period, :amount)
            ON CONFLICT (tenant_id, feature_key, period) DO UPDATE
            SET count = public.usage_records.count + EXCLUDED.count
            WHERE public.usage_records.count + EXCLUDED.count <= :limit
            RETURNING count
        """
        with self._engine.begin() as conn:
            value = conn.execute(
                text(sql),
                {
                    "tenant_id": tenant_id,
                    "feature_key": feature_key,
                    "period": period,
                    "amount": amount,
                    "limit": limit,
                },
            ).scalar_one_or_none()
        return int(value) if value is not None else None

    def count_resources(self, *, owner_id: str) -> int:
        sql = """
            SELECT count(*)
            FROM public.resources
            WHERE owner_id = :owner_id
        """
        with self._engine.connect() as conn:
            value = conn.execute(text(sql), {"owner_id": owner_id}).scalar_one()
        return int(value)

    def list_resources(self, *, owner_id: str, limit: int | None = None):
        sql = """
            SELECT id, owner_id, updated_at
            FROM public.resources
            WHERE owner_id = :owner_id
            ORDER BY updated_at DESC, id ASC
        """
        params: dict = {"owner_id": owner_id}
        if limit is not None:
            sql += "\n            LIMIT :limit"
            params["limit"] = limit
        with self._engine.connect() as conn:
            rows = conn.execute(text(sql), params).mappings().all()
        return [map_row_to_resource_ref(row) for row in rows]

    def list_resources_for_owners(self, *, owner_ids: Sequence[str]):
        if not owner_ids:
            return []
        sql = text(
            """
            SELECT id, owner_id, updated_at
            FROM public.resources
            WHERE owner_id IN :owner_ids
            ORDER BY owner_id ASC, updated_at DESC, id ASC
            """
        ).bindparams(bindparam("owner_ids", expanding=True))
        with self._engine.connect() as conn:
            rows = conn.execute(sql, {"owner_ids": list(owner_ids)}).mappings().all()
        return [map_row_to_resource_ref(row) for row in rows]
