from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime

from quota_engine.application.ports.usage_port import UsagePort
from quota_engine.domain.exceptions import InvalidUsageAmountError
from quota_engine.domain.services.usage_period import usage_period

from .clock import utcnow


logger = logging.getLogger(__name__)


class RecordUsageUseCase:
    """Add-or-create the current period's counter. No limit check here."""

    def __init__(self, *, usage_port: UsagePort, clock: Callable[[], datetime] = utcnow):
        self._usage_port = usage_port
        self._clock = clock

    def execute(self, *, tenant_id: str, feature_key: str, amount: int = 1) -> int:
        if amount < 1:
            raise InvalidUsageAmountError("amount must be a positive integer.")

        period = usage_period(self._clock())
        count = self._usage_port.increment_usage(
            tenant_id=tenant_id,
            feature_key=feature_key,
            period=period,
            amount=amount,
        )
        logger.info(
            "Usage recorded. tenant_id=%s feature=%s period=%s amount=%s count=%s",
            tenant_id,
            feature_key,
            period,
            amount,
            count,
        )
        return count
