from __future__ import annotations

from datetime import timedelta

from fastapi.testclient import TestClient

from quota_engine.api.deps import (
    get_batch_freeze_status_use_case,
    get_check_usage_limit_use_case,
    get_consume_usage_use_case,
    get_current_tenant_id,
    get_freeze_status_use_case,
    get_has_feature_access_use_case,
    get_is_resource_frozen_use_case,
    get_pricing_use_case,
    get_record_usage_use_case,
    get_resolve_effective_plan_use_case,
    get_usage_stats_use_case,
)
from quota_engine.application.use_cases.check_usage_limit import CheckUsageLimitUseCase
from quota_engine.application.use_cases.consume_usage import ConsumeUsageUseCase
from quota_engine.application.use_cases.get_batch_freeze_status import GetBatchFreezeStatusUseCase
from quota_engine.application.use_cases.get_freeze_status import GetFreezeStatusUseCase
from quota_engine.application.use_cases.get_pricing import GetPricingUseCase
from quota_engine.application.use_cases.get_usage_stats import GetUsageStatsUseCase
from quota_engine.application.use_cases.has_feature_access import HasFeatureAccessUseCase
from quota_engine.application.use_cases.is_resource_frozen import IsResourceFrozenUseCase
from quota_engine.application.use_cases.record_usage import RecordUsageUseCase
from quota_engine.application.use_cases.resolve_effective_plan import ResolveEffectivePlanUseCase
from quota_engine.main import app
from tests.fakes import NOW, FakeEntitlementsStore, fixed_clock


def _client(store: FakeEntitlementsStore, tenant_id: str = "t1") -> TestClient:
    def resolver():
        return ResolveEffectivePlanUseCase(subscription_port=store, clock=fixed_clock())

    app.dependency_overrides[get_current_tenant_id] = lambda: tenant_id
    app.dependency_overrides[get_resolve_effective_plan_use_case] = resolver
    app.dependency_overrides[get_check_usage_limit_use_case] = lambda: CheckUsageLimitUseCase(
        plan_resolver=resolver(),
        usage_port=store,
    )
    app.dependency_overrides[get_consume_usage_use_case] = lambda: ConsumeUsageUseCase(
        plan_resolver=resolver(),
        usage_port=store,
    )
    app.dependency_overrides[get_record_usage_use_case] = lambda: RecordUsageUseCase(
        usage_port=store,
        clock=fixed_clock(),
    )
    app.dependency_overrides[get_usage_stats_use_case] = lambda: GetUsageStatsUseCase(
        plan_resolver=resolver(),
        usage_port=store,
        resource_port=store,
    )
    app.dependency_overrides[get_has_feature_access_use_case] = lambda: HasFeatureAccessUseCase(
        plan_resolver=resolver(),
    )
    app.dependency_overrides[get_freeze_status_use_case] = lambda: GetFreezeStatusUseCase(
        plan_resolver=resolver(),
        resource_port=store,
    )
    app.dependency_overrides[get_is_resource_frozen_use_case] = lambda: IsResourceFrozenUseCase(
        plan_resolver=resolver(),
        resource_port=store,
    )
    app.dependency_overrides[get_batch_freeze_status_use_case] = lambda: GetBatchFreezeStatusUseCase(
        plan_resolver=resolver(),
        subscription_port=store,
        resource_port=store,
    )
    app.dependency_overrides[get_pricing_use_case] = lambda: GetPricingUseCase(
        checkout_price_ids={"pro:CNY:monthly": "price_pro_cny_monthly"},
    )
    return TestClient(app)


def test_healthz():
    response = TestClient(app).get("/healthz")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_missing_authorization_is_rejected():
    client = _client(FakeEntitlementsStore())
    del app.dependency_overrides[get_current_tenant_id]

    response = client.get("/v1/usage")

    assert response.status_code == 422

    app.dependency_overrides.clear()


def test_malformed_authorization_is_rejected():
    client = _client(FakeEntitlementsStore())
    del app.dependency_overrides[get_current_tenant_id]

    response = client.get("/v1/usage", headers={"Authorization": "Token abc"})

    assert response.status_code == 401

    app.dependency_overrides.clear()


def test_check_route_reports_limit_reached():
    store = FakeEntitlementsStore()
    store.add_tenant("t1", "free")
    store.usage[("t1", "executions", "2026-03")] = 100

    response = _client(store).get("/v1/usage/executions/check")

    assert response.status_code == 200
    payload = response.json()
    assert payload["allowed"] is False
    assert payload["remaining"] == 0
    assert "limit" in payload["message"]

    app.dependency_overrides.clear()


def test_check_route_rejects_unknown_feature():
    store = FakeEntitlementsStore()
    store.add_tenant("t1", "free")

    response = _client(store).get("/v1/usage/coffee/check")

    assert response.status_code == 404

    app.dependency_overrides.clear()


def test_consume_route_returns_429_at_limit():
    store = FakeEntitlementsStore()
    store.add_tenant("t1", "free")
    store.usage[("t1", "executions", "2026-03")] = 99
    client = _client(store)

    first = client.post("/v1/usage/executions/consume")
    second = client.post("/v1/usage/executions/consume")
    invalid = client.post("/v1/usage/executions/consume", params={"amount": 0})

    assert first.status_code == 200
    assert first.json()["remaining"] == 0
    assert second.status_code == 429
    assert invalid.status_code == 400

    app.dependency_overrides.clear()


def test_record_route_returns_new_count():
    store = FakeEntitlementsStore()

    response = _client(store).post("/v1/usage/api_calls/record", params={"amount": 3})

    assert response.status_code == 200
    assert response.json() == {"feature_key": "api_calls", "count": 3}

    app.dependency_overrides.clear()


def test_usage_stats_route():
    store = FakeEntitlementsStore()
    store.add_tenant("t1", "pro")
    store.add_resources("t1", 2)
    store.usage[("t1", "executions", "2026-03")] = 9

    response = _client(store).get("/v1/usage")

    assert response.status_code == 200
    payload = response.json()
    assert payload["plan"] == "pro"
    assert payload["trial_days_left"] is None
    assert payload["usage"]["executions"] == 9
    assert payload["usage"]["resources"] == 2
    assert payload["features"]["pii_detection"] == "advanced"

    app.dependency_overrides.clear()


def test_plan_route_returns_404_for_missing_tenant():
    store = FakeEntitlementsStore()

    response = _client(store, tenant_id="ghost").get("/v1/plan")

    assert response.status_code == 404

    app.dependency_overrides.clear()


def test_feature_route():
    store = FakeEntitlementsStore()
    store.add_tenant("t1", "free")
    client = _client(store)

    sharing = client.get("/v1/features/sharing")
    unknown = client.get("/v1/features/teleportation")

    assert sharing.status_code == 200
    assert sharing.json() == {"capability": "sharing", "has_access": False}
    assert unknown.status_code == 404

    app.dependency_overrides.clear()


def test_freeze_routes():
    store = FakeEntitlementsStore()
    store.add_tenant("t1", "free")
    store.add_resources("t1", 5)
    client = _client(store)

    status = client.get("/v1/resources/freeze-status")
    single = client.get("/v1/resources/t1-r5/freeze-status")

    assert status.status_code == 200
    assert status.json()["frozen_resource_ids"] == ["t1-r4", "t1-r5"]
    assert single.status_code == 200
    assert single.json()["is_frozen"] is True
    assert "frozen" in single.json()["reason"]

    app.dependency_overrides.clear()


def test_batch_route_requires_team_features():
    store = FakeEntitlementsStore()
    store.add_tenant("t1", "pro")

    response = _client(store).post("/v1/resources/freeze-status/batch", json={"owner_ids": ["t1"]})

    assert response.status_code == 403

    app.dependency_overrides.clear()


def test_batch_route_rejects_other_tenants_owner_ids():
    store = FakeEntitlementsStore()
    store.add_tenant("t1", "team")
    store.add_tenant("other", "trial", trial_ends_at=NOW - timedelta(days=1))
    store.add_resources("other", 5)

    response = _client(store).post(
        "/v1/resources/freeze-status/batch",
        json={"owner_ids": ["t1", "other"]},
    )

    assert response.status_code == 403
    assert store.plan_updates == []
    assert store.count("list_subscription_states") == 0
    assert store.count("list_resources_for_owners") == 0

    app.dependency_overrides.clear()


def test_batch_route_for_own_owner_id():
    store = FakeEntitlementsStore()
    store.add_tenant("t1", "team")
    store.add_resources("t1", 4)

    response = _client(store).post(
        "/v1/resources/freeze-status/batch",
        json={"owner_ids": ["t1", "t1"]},
    )

    assert response.status_code == 200
    assert response.json()["frozen_resource_ids"] == {"t1": []}

    app.dependency_overrides.clear()


def test_pricing_route_uses_locale_currency():
    store = FakeEntitlementsStore()

    response = _client(store).get("/v1/pricing", params={"locale": "zh-CN"})

    assert response.status_code == 200
    payload = response.json()
    assert payload["currency"] == "CNY"
    pro = next(plan for plan in payload["plans"] if plan["plan_id"] == "pro")
    assert pro["display_price"] == "¥199"
    assert pro["checkout_price_id"] == "price_pro_cny_monthly"

    app.dependency_overrides.clear()


def test_pricing_route_rejects_unknown_interval():
    store = FakeEntitlementsStore()

    response = _client(store).get("/v1/pricing", params={"interval": "weekly"})

    assert response.status_code == 400

    app.dependency_overrides.clear()
