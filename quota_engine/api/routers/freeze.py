from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from quota_engine.api.deps import (
    get_batch_freeze_status_use_case,
    get_current_tenant_id,
    get_freeze_status_use_case,
    get_is_resource_frozen_use_case,
    require_feature,
)
from quota_engine.api.schemas.freeze import (
    BatchFreezeStatusRequest,
    BatchFreezeStatusResponse,
    FreezeStatusResponse,
    ResourceFreezeResponse,
)
from quota_engine.application.use_cases.get_batch_freeze_status import GetBatchFreezeStatusUseCase
from quota_engine.application.use_cases.get_freeze_status import GetFreezeStatusUseCase
from quota_engine.application.use_cases.is_resource_frozen import IsResourceFrozenUseCase


router = APIRouter()


@router.get("/v1/resources/freeze-status", response_model=FreezeStatusResponse)
def get_freeze_status(
    tenant_id: str = Depends(get_current_tenant_id),
    use_case: GetFreezeStatusUseCase = Depends(get_freeze_status_use_case),
):
    status = use_case.execute(owner_id=tenant_id)
    return FreezeStatusResponse(
        limit=status.limit,
        total_resources=status.total_resources,
        frozen_count=status.frozen_count,
        frozen_resource_ids=sorted(status.frozen_resource_ids),
    )


@router.get("/v1/resources/{resource_id}/freeze-status", response_model=ResourceFreezeResponse)
def get_resource_freeze_status(
    resource_id: str,
    tenant_id: str = Depends(get_current_tenant_id),
    use_case: IsResourceFrozenUseCase = Depends(get_is_resource_frozen_use_case),
):
    info = use_case.execute(owner_id=tenant_id, resource_id=resource_id)
    return ResourceFreezeResponse(
        resource_id=resource_id,
        is_frozen=info.is_frozen,
        reason=info.reason,
        active_limit=info.active_limit,
        total_resources=info.total_resources,
        frozen_count=info.frozen_count,
    )


@router.post("/v1/resources/freeze-status/batch", response_model=BatchFreezeStatusResponse)
def get_batch_freeze_status(
    req: BatchFreezeStatusRequest,
    tenant_id: str = Depends(require_feature("team_features")),
    use_case: GetBatchFreezeStatusUseCase = Depends(get_batch_freeze_status_use_case),
):
    if any(owner_id != tenant_id for owner_id in req.owner_ids):
        raise HTTPException(status_code=403, detail="Only the calling tenant's resources can be read.")

    result = use_case.execute(owner_ids=req.owner_ids)
    return BatchFreezeStatusResponse(
        frozen_resource_ids={owner_id: sorted(frozen) for owner_id, frozen in result.items()},
    )
