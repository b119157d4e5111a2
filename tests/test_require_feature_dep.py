from __future__ import annotations

import pytest
from fastapi import HTTPException

from quota_engine.api.deps import require_feature


class FakeHasFeatureAccessDenied:
    def execute(self, *, tenant_id: str, capability_key: str) -> bool:
        _ = tenant_id, capability_key
        return False


class FakeHasFeatureAccessAllowed:
    def execute(self, *, tenant_id: str, capability_key: str) -> bool:
        _ = tenant_id
        return capability_key == "team_features"


def test_require_feature_blocks_when_capability_missing():
    dependency = require_feature("team_features")

    with pytest.raises(HTTPException) as exc_info:
        dependency(tenant_id="tenant-1", use_case=FakeHasFeatureAccessDenied())

    assert exc_info.value.status_code == 403
    assert "team_features" in exc_info.value.detail


def test_require_feature_returns_tenant_when_granted():
    dependency = require_feature("team_features")

    tenant_id = dependency(tenant_id="tenant-1", use_case=FakeHasFeatureAccessAllowed())

    assert tenant_id == "tenant-1"
