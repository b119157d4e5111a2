from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from quota_engine.api.deps import (
    get_check_usage_limit_use_case,
    get_consume_usage_use_case,
    get_current_tenant_id,
    get_has_feature_access_use_case,
    get_record_usage_use_case,
    get_resolve_effective_plan_use_case,
    get_usage_stats_use_case,
)
from quota_engine.api.schemas.usage import (
    EffectivePlanResponse,
    FeatureAccessResponse,
    RecordUsageResponse,
    UsageCheckResponse,
    UsageStatsResponse,
)
from quota_engine.application.use_cases.check_usage_limit import CheckUsageLimitUseCase
from quota_engine.application.use_cases.consume_usage import ConsumeUsageUseCase
from quota_engine.application.use_cases.get_usage_stats import GetUsageStatsUseCase
from quota_engine.application.use_cases.has_feature_access import HasFeatureAccessUseCase
from quota_engine.application.use_cases.record_usage import RecordUsageUseCase
from quota_engine.application.use_cases.resolve_effective_plan import ResolveEffectivePlanUseCase
from quota_engine.domain.exceptions import InvalidUsageAmountError, TenantNotFoundError
from quota_engine.domain.services.plan_catalog import CAPABILITY_KEYS, FEATURE_KEYS


router = APIRouter()


def _ensure_feature_key(feature_key: str) -> None:
    if feature_key not in FEATURE_KEYS:
        raise HTTPException(status_code=404, detail=f"Unknown feature '{feature_key}'.")


@router.get("/v1/usage", response_model=UsageStatsResponse)
def get_usage_stats(
    tenant_id: str = Depends(get_current_tenant_id),
    use_case: GetUsageStatsUseCase = Depends(get_usage_stats_use_case),
):
    output = use_case.execute(tenant_id=tenant_id)
    return UsageStatsResponse(
        plan=output.plan,
        trial_days_left=output.trial_days_left,
        usage=output.usage,
        limits=output.limits,
        features=output.features,
    )


@router.get("/v1/usage/{feature_key}/check", response_model=UsageCheckResponse)
def check_usage_limit(
    feature_key: str,
    tenant_id: str = Depends(get_current_tenant_id),
    use_case: CheckUsageLimitUseCase = Depends(get_check_usage_limit_use_case),
):
    _ensure_feature_key(feature_key)
    output = use_case.execute(tenant_id=tenant_id, feature_key=feature_key)
    return UsageCheckResponse(
        allowed=output.allowed,
        remaining=output.remaining,
        limit=output.limit,
        message=output.message,
    )


@router.post("/v1/usage/{feature_key}/consume", response_model=UsageCheckResponse)
def consume_usage(
    feature_key: str,
    amount: int = Query(default=1),
    tenant_id: str = Depends(get_current_tenant_id),
    use_case: ConsumeUsageUseCase = Depends(get_consume_usage_use_case),
):
    _ensure_feature_key(feature_key)
    try:
        output = use_case.execute(tenant_id=tenant_id, feature_key=feature_key, amount=amount)
    except InvalidUsageAmountError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    if not output.allowed:
        raise HTTPException(status_code=429, detail=output.message)
    return UsageCheckResponse(
        allowed=output.allowed,
        remaining=output.remaining,
        limit=output.limit,
        message=output.message,
    )


@router.get("/v1/features/{capability}", response_model=FeatureAccessResponse)
def get_feature_access(
    capability: str,
    tenant_id: str = Depends(get_current_tenant_id),
    use_case: HasFeatureAccessUseCase = Depends(get_has_feature_access_use_case),
):
    if capability not in CAPABILITY_KEYS:
        raise HTTPException(status_code=404, detail=f"Unknown capability '{capability}'.")
    return FeatureAccessResponse(
        capability=capability,
        has_access=use_case.execute(tenant_id=tenant_id, capability_key=capability),
    )


@router.get("/v1/plan", response_model=EffectivePlanResponse)
def get_effective_plan(
    tenant_id: str = Depends(get_current_tenant_id),
    use_case: ResolveEffectivePlanUseCase = Depends(get_resolve_effective_plan_use_case),
):
    try:
        plan_id = use_case.execute(tenant_id=tenant_id)
    except TenantNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return EffectivePlanResponse(tenant_id=tenant_id, plan=plan_id)


@router.post("/v1/usage/{feature_key}/record", response_model=RecordUsageResponse)
def record_usage(
    feature_key: str,
    amount: int = Query(default=1),
    tenant_id: str = Depends(get_current_tenant_id),
    use_case: RecordUsageUseCase = Depends(get_record_usage_use_case),
):
    _ensure_feature_key(feature_key)
    try:
        count = use_case.execute(tenant_id=tenant_id, feature_key=feature_key, amount=amount)
    except InvalidUsageAmountError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return RecordUsageResponse(feature_key=feature_key, count=count)
