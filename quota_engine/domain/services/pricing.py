"""Display prices and checkout price identifiers.

Pure lookups over the plan catalog. Checkout price identifiers are supplied
by configuration as ``{"<plan>:<currency>:<interval>": "<price id>"}``.
"""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from quota_engine.domain.entities.plan import BillingPrice
from quota_engine.domain.exceptions import PricingInputError
from quota_engine.domain.services.plan_catalog import (
    TEAM_MIN_USERS,
    ensure_currency,
    ensure_interval,
    get_plan,
    normalize_plan_id,
)


DEFAULT_CURRENCY = "USD"


@dataclass(frozen=True)
class CurrencyFormat:
    symbol: str
    locale: str
    thousands_separator: str
    symbol_first: bool


CURRENCY_CONFIG: dict[str, CurrencyFormat] = {
    "USD": CurrencyFormat(symbol="$", locale="en-US", thousands_separator=",", symbol_first=True),
    "CNY": CurrencyFormat(symbol="¥", locale="zh-CN", thousands_separator=",", symbol_first=True),
    "EUR": CurrencyFormat(symbol="€", locale="de-DE", thousands_separator=".", symbol_first=False),
}

_LOCALE_PREFIX_CURRENCY = (
    ("zh", "CNY"),
    ("de", "EUR"),
)


def currency_for_locale(locale: str | None) -> str:
    normalized = (locale or "").strip().lower()
    for prefix, currency in _LOCALE_PREFIX_CURRENCY:
        if normalized.startswith(prefix):
            return currency
    return DEFAULT_CURRENCY


def plan_price(plan_id: str | None, currency: str) -> BillingPrice:
    """Displayed price for a plan; the team plan reports its starting price."""
    ensure_currency(currency)
    plan = get_plan(plan_id)
    if plan.id in ("free", "trial"):
        return BillingPrice(monthly=0, yearly=0)
    if plan.id == "enterprise":
        return BillingPrice(monthly=None, yearly=None)
    if plan.id == "team":
        per_user = plan.team_per_user_price[currency]
        return BillingPrice(
            monthly=per_user.monthly * plan.team_min_users,
            yearly=per_user.yearly * plan.team_min_users,
        )
    return plan.price[currency]


def team_per_user_price(currency: str, interval: str) -> int:
    ensure_currency(currency)
    ensure_interval(interval)
    return get_plan("team").team_per_user_price[currency].for_interval(interval)


def team_starting_price(currency: str, interval: str) -> int:
    return team_per_user_price(currency, interval) * TEAM_MIN_USERS


def validate_team_quantity(quantity: int) -> int:
    if quantity < TEAM_MIN_USERS:
        raise PricingInputError(f"Team plan requires at least {TEAM_MIN_USERS} seats.")
    return quantity


def checkout_price_key(plan_id: str, currency: str, interval: str) -> str:
    return f"{plan_id}:{currency}:{interval}"


def checkout_price_id(
    plan_id: str | None,
    interval: str,
    currency: str = DEFAULT_CURRENCY,
    *,
    price_ids: Mapping[str, str],
) -> str | None:
    ensure_currency(currency)
    ensure_interval(interval)
    plan = get_plan(normalize_plan_id(plan_id))
    if not plan.self_serve:
        return None
    return price_ids.get(checkout_price_key(plan.id, currency, interval)) or None


def format_price(amount: int | None, currency: str) -> str:
    config = CURRENCY_CONFIG[ensure_currency(currency)]
    if amount is None:
        return "Contact sales"
    digits = f"{amount:,}".replace(",", config.thousands_separator)
    if config.symbol_first:
        return f"{config.symbol}{digits}"
    return f"{digits} {config.symbol}"
