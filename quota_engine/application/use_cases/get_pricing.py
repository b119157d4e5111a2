from __future__ import annotations

from collections.abc import Mapping

from quota_engine.application.dto.pricing import GetPricingInput, GetPricingOutput, PlanPriceOutput
from quota_engine.domain.services.plan_catalog import PLAN_IDS, ensure_currency, ensure_interval, get_plan
from quota_engine.domain.services.pricing import (
    checkout_price_id,
    currency_for_locale,
    format_price,
    plan_price,
)


class GetPricingUseCase:
    def __init__(self, *, checkout_price_ids: Mapping[str, str]):
        self._checkout_price_ids = checkout_price_ids

    def execute(self, command: GetPricingInput) -> GetPricingOutput:
        currency = ensure_currency(command.currency or currency_for_locale(command.locale))
        ensure_interval(command.interval)
        plans: list[PlanPriceOutput] = []
        for plan_id in PLAN_IDS:
            plan = get_plan(plan_id)
            price = plan_price(plan_id, currency)
            amount = price.for_interval(command.interval)
            plans.append(
                PlanPriceOutput(
                    plan_id=plan.id,
                    name=plan.name,
                    monthly=price.monthly,
                    yearly=price.yearly,
                    display_price=format_price(amount, currency),
                    checkout_price_id=checkout_price_id(
                        plan_id,
                        command.interval,
                        currency,
                        price_ids=self._checkout_price_ids,
                    ),
                    per_user=bool(plan.team_per_user_price),
                    min_users=plan.team_min_users,
                    trial_days=plan.trial_days,
                )
            )
        return GetPricingOutput(currency=currency, interval=command.interval, plans=plans)
