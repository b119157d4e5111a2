"""Subscription plan catalog.

Single source of truth for plan limits, capabilities and list prices. The
table is validated when the module is imported so that a missing
plan/feature pair fails loudly at startup instead of at request time.
"""
from __future__ import annotations

import logging
from typing import get_args

from quota_engine.domain.entities.plan import (
    UNLIMITED,
    BillingInterval,
    BillingPrice,
    CapabilityKey,
    Currency,
    FeatureKey,
    Plan,
    PlanId,
)
from quota_engine.domain.exceptions import PricingInputError


logger = logging.getLogger(__name__)

PLAN_IDS: tuple[str, ...] = get_args(PlanId)
FEATURE_KEYS: tuple[str, ...] = get_args(FeatureKey)
CAPABILITY_KEYS: tuple[str, ...] = get_args(CapabilityKey)
CURRENCIES: tuple[str, ...] = get_args(Currency)
INTERVALS: tuple[str, ...] = get_args(BillingInterval)
METERED_FEATURE_KEYS: tuple[str, ...] = ("executions", "api_calls", "pii_scans", "compliance_reports")

DEFAULT_PLAN_ID: PlanId = "free"
TEAM_MIN_USERS = 3
TRIAL_DAYS = 14

_ZERO_PRICE = BillingPrice(monthly=0, yearly=0)
_CONTACT_SALES = BillingPrice(monthly=None, yearly=None)


PLANS: dict[str, Plan] = {
    "free": Plan(
        id="free",
        name="Free",
        limits={
            "resources": 3,
            "executions": 100,
            "api_calls": 0,
            "api_keys": 0,
            "team_members": 1,
            "pii_scans": UNLIMITED,
            "compliance_reports": UNLIMITED,
        },
        capabilities={
            "pii_detection": "basic",
            "sharing": False,
            "compliance_reports": False,
            "api_access": False,
            "team_features": False,
            "sso": False,
            "audit_logs": False,
            "custom_integrations": False,
        },
        price={currency: _ZERO_PRICE for currency in CURRENCIES},
        self_serve=False,
    ),
    "trial": Plan(
        id="trial",
        name="Trial",
        limits={
            "resources": 10,
            "executions": 500,
            "api_calls": 1000,
            "api_keys": 1,
            "team_members": 1,
            "pii_scans": UNLIMITED,
            "compliance_reports": UNLIMITED,
        },
        capabilities={
            "pii_detection": "advanced",
            "sharing": True,
            "compliance_reports": True,
            "api_access": True,
            "team_features": False,
            "sso": False,
            "audit_logs": False,
            "custom_integrations": False,
        },
        price={currency: _ZERO_PRICE for currency in CURRENCIES},
        trial_days=TRIAL_DAYS,
        self_serve=False,
    ),
    "pro": Plan(
        id="pro",
        name="Pro",
        limits={
            "resources": 50,
            "executions": 5000,
            "api_calls": 10000,
            "api_keys": 5,
            "team_members": 1,
            "pii_scans": UNLIMITED,
            "compliance_reports": UNLIMITED,
        },
        capabilities={
            "pii_detection": "advanced",
            "sharing": True,
            "compliance_reports": True,
            "api_access": True,
            "team_features": False,
            "sso": False,
            "audit_logs": False,
            "custom_integrations": False,
        },
        price={
            "USD": BillingPrice(monthly=29, yearly=290),
            "CNY": BillingPrice(monthly=199, yearly=1990),
            "EUR": BillingPrice(monthly=27, yearly=270),
        },
    ),
    "team": Plan(
        id="team",
        name="Team",
        limits={
            "resources": UNLIMITED,
            "executions": UNLIMITED,
            "api_calls": UNLIMITED,
            "api_keys": 20,
            "team_members": 10,
            "pii_scans": UNLIMITED,
            "compliance_reports": UNLIMITED,
        },
        capabilities={
            "pii_detection": "advanced",
            "sharing": True,
            "compliance_reports": True,
            "api_access": True,
            "team_features": True,
            "sso": True,
            "audit_logs": True,
            "custom_integrations": False,
        },
        team_per_user_price={
            "USD": BillingPrice(monthly=35, yearly=350),
            "CNY": BillingPrice(monthly=239, yearly=2390),
            "EUR": BillingPrice(monthly=30, yearly=300),
        },
        team_min_users=TEAM_MIN_USERS,
    ),
    "enterprise": Plan(
        id="enterprise",
        name="Enterprise",
        limits={key: UNLIMITED for key in FEATURE_KEYS},
        capabilities={
            "pii_detection": "advanced",
            "sharing": True,
            "compliance_reports": True,
            "api_access": True,
            "team_features": True,
            "sso": True,
            "audit_logs": True,
            "custom_integrations": True,
        },
        price={currency: _CONTACT_SALES for currency in CURRENCIES},
        self_serve=False,
    ),
}


def validate_catalog(plans: dict[str, Plan]) -> None:
    """Raise ``ValueError`` when the catalog is incomplete or malformed."""
    unknown_metered = set(METERED_FEATURE_KEYS) - set(FEATURE_KEYS)
    if unknown_metered:
        raise ValueError(f"Metered features are not feature keys: {sorted(unknown_metered)}")

    missing_plans = set(PLAN_IDS) - set(plans)
    if missing_plans:
        raise ValueError(f"Plan catalog is missing plans: {sorted(missing_plans)}")

    for plan_id, plan in plans.items():
        if plan_id not in PLAN_IDS or plan.id != plan_id:
            raise ValueError(f"Unknown plan id in catalog: {plan_id!r}")

        missing_features = set(FEATURE_KEYS) - set(plan.limits)
        if missing_features:
            raise ValueError(f"Plan {plan_id!r} is missing limits: {sorted(missing_features)}")
        for feature_key, limit in plan.limits.items():
            if not isinstance(limit, int) or (limit < 0 and limit != UNLIMITED):
                raise ValueError(f"Plan {plan_id!r} has invalid limit for {feature_key!r}: {limit!r}")

        missing_capabilities = set(CAPABILITY_KEYS) - set(plan.capabilities)
        if missing_capabilities:
            raise ValueError(
                f"Plan {plan_id!r} is missing capabilities: {sorted(missing_capabilities)}"
            )

        table = plan.team_per_user_price if plan.team_per_user_price else plan.price
        missing_currencies = set(CURRENCIES) - set(table)
        if missing_currencies:
            raise ValueError(f"Plan {plan_id!r} is missing prices: {sorted(missing_currencies)}")


validate_catalog(PLANS)


def is_known_plan(plan_id: str | None) -> bool:
    return plan_id in PLANS


def normalize_plan_id(plan_id: str | None) -> str:
    """Return ``plan_id`` when it is in the closed set, else ``free``."""
    if is_known_plan(plan_id):
        return plan_id
    if plan_id:
        logger.warning("Unrecognized plan id %r treated as %r.", plan_id, DEFAULT_PLAN_ID)
    return DEFAULT_PLAN_ID


def get_plan(plan_id: str | None) -> Plan:
    return PLANS[normalize_plan_id(plan_id)]


def is_unlimited(limit: int) -> bool:
    return limit == UNLIMITED


def limit_of(plan_id: str | None, feature_key: str) -> int:
    """Limit for ``feature_key``; an undeclared feature is treated as disallowed."""
    return get_plan(plan_id).limits.get(feature_key, 0)


def capability_of(plan_id: str | None, capability_key: str) -> bool | str:
    return get_plan(plan_id).capabilities.get(capability_key, False)


def ensure_currency(currency: str) -> str:
    if currency not in CURRENCIES:
        raise PricingInputError(f"Unsupported currency: {currency!r}.")
    return currency


def ensure_interval(interval: str) -> str:
    if interval not in INTERVALS:
        raise PricingInputError(f"Unsupported billing interval: {interval!r}.")
    return interval


def price_of(plan_id: str | None, currency: str, interval: str) -> int | None:
    ensure_currency(currency)
    ensure_interval(interval)
    plan = get_plan(plan_id)
    if plan.team_per_user_price:
        per_user = plan.team_per_user_price[currency].for_interval(interval)
        return None if per_user is None else per_user * plan.team_min_users
    return plan.price[currency].for_interval(interval)


def can_access_api_keys(plan_id: str | None) -> bool:
    return limit_of(plan_id, "api_keys") != 0
