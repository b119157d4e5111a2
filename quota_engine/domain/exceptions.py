from __future__ import annotations


class DomainError(Exception):
    """Base for domain errors."""


class TenantNotFoundError(DomainError):
    """No subscription state exists for the tenant."""


class InvalidUsageAmountError(DomainError):
    """Usage increments must be positive."""


class PricingInputError(DomainError):
    """Unknown currency, interval or seat quantity."""


class FeatureAccessDeniedError(DomainError):
    """The tenant's effective plan does not grant the capability."""
