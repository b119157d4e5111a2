from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from quota_engine.api.deps import get_pricing_use_case
from quota_engine.api.schemas.pricing import PlanPriceResponse, PricingResponse
from quota_engine.application.dto.pricing import GetPricingInput
from quota_engine.application.use_cases.get_pricing import GetPricingUseCase
from quota_engine.domain.exceptions import PricingInputError


router = APIRouter()


@router.get("/v1/pricing", response_model=PricingResponse)
def get_pricing(
    locale: str | None = Query(default=None),
    interval: str = Query(default="monthly"),
    currency: str | None = Query(default=None),
    use_case: GetPricingUseCase = Depends(get_pricing_use_case),
):
    try:
        output = use_case.execute(GetPricingInput(locale=locale, interval=interval, currency=currency))
    except PricingInputError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    return PricingResponse(
        currency=output.currency,
        interval=output.interval,
        plans=[
            PlanPriceResponse(
                plan_id=plan.plan_id,
                name=plan.name,
                monthly=plan.monthly,
                yearly=plan.yearly,
                display_price=plan.display_price,
                checkout_price_id=plan.checkout_price_id,
                per_user=plan.per_user,
                min_users=plan.min_users,
                trial_days=plan.trial_days,
            )
            for plan in output.plans
        ],
    )
