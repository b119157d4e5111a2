from __future__ import annotations

from functools import lru_cache

from fastapi import Depends, Header, HTTPException

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
from quota_engine.domain.exceptions import FeatureAccessDeniedError
from quota_engine.infrastructure.db.engine import get_engine
from quota_engine.infrastructure.db.repositories.entitlements_repository import SqlEntitlementsRepository
from quota_engine.infrastructure.security.token_service import JwtTokenService
from quota_engine.shared.config import get_settings


def _get_db_engine():
    settings = get_settings()
    if not settings.postgres_dsn:
        raise HTTPException(status_code=500, detail="POSTGRES_DSN is required.")
    return get_engine(settings.postgres_dsn)


def _get_entitlements_repository() -> SqlEntitlementsRepository:
    return SqlEntitlementsRepository(_get_db_engine())


@lru_cache(maxsize=1)
def _get_token_service() -> JwtTokenService:
    settings = get_settings()
    if not settings.jwt_secret:
        raise HTTPException(status_code=500, detail="JWT_SECRET is required.")
    return JwtTokenService(jwt_secret=settings.jwt_secret)


def get_resolve_effective_plan_use_case() -> ResolveEffectivePlanUseCase:
    return ResolveEffectivePlanUseCase(subscription_port=_get_entitlements_repository())


def get_check_usage_limit_use_case() -> CheckUsageLimitUseCase:
    return CheckUsageLimitUseCase(
        plan_resolver=get_resolve_effective_plan_use_case(),
        usage_port=_get_entitlements_repository(),
    )


def get_record_usage_use_case() -> RecordUsageUseCase:
    return RecordUsageUseCase(usage_port=_get_entitlements_repository())


def get_consume_usage_use_case() -> ConsumeUsageUseCase:
    return ConsumeUsageUseCase(
        plan_resolver=get_resolve_effective_plan_use_case(),
        usage_port=_get_entitlements_repository(),
    )


def get_usage_stats_use_case() -> GetUsageStatsUseCase:
    repository = _get_entitlements_repository()
    return GetUsageStatsUseCase(
        plan_resolver=get_resolve_effective_plan_use_case(),
        usage_port=repository,
        resource_port=repository,
    )


def get_has_feature_access_use_case() -> HasFeatureAccessUseCase:
    return HasFeatureAccessUseCase(plan_resolver=get_resolve_effective_plan_use_case())


def get_freeze_status_use_case() -> GetFreezeStatusUseCase:
    return GetFreezeStatusUseCase(
        plan_resolver=get_resolve_effective_plan_use_case(),
        resource_port=_get_entitlements_repository(),
    )


def get_is_resource_frozen_use_case() -> IsResourceFrozenUseCase:
    return IsResourceFrozenUseCase(
        plan_resolver=get_resolve_effective_plan_use_case(),
        resource_port=_get_entitlements_repository(),
    )


def get_batch_freeze_status_use_case() -> GetBatchFreezeStatusUseCase:
    repository = _get_entitlements_repository()
    return GetBatchFreezeStatusUseCase(
        plan_resolver=ResolveEffectivePlanUseCase(subscription_port=repository),
        subscription_port=repository,
        resource_port=repository,
    )


def get_pricing_use_case() -> GetPricingUseCase:
    return GetPricingUseCase(checkout_price_ids=get_settings().checkout_price_ids)


def get_current_tenant_id(
    authorization: str = Header(...),
) -> str:
    if not authorization.startswith("Bearer "):
        raise HTTPException(status_code=401, detail="Invalid authorization header.")
    token = authorization.replace("Bearer ", "", 1).strip()
    if not token:
        raise HTTPException(status_code=401, detail="Missing access token.")

    try:
        payload = _get_token_service().decode_access_token(token=token)
    except ValueError as exc:
        raise HTTPException(status_code=401, detail=str(exc)) from exc
    return payload.tenant_id


def require_feature(capability_key: str):
    def _dependency(
        tenant_id: str = Depends(get_current_tenant_id),
        use_case: HasFeatureAccessUseCase = Depends(get_has_feature_access_use_case),
    ) -> str:
        if not use_case.execute(tenant_id=tenant_id, capability_key=capability_key):
            raise HTTPException(
                status_code=403,
                detail=str(FeatureAccessDeniedError(f"Feature '{capability_key}' is required.")),
            )
        return tenant_id

    return _dependency
