"""
Subscription plans and plan-context resolution.

The generation engine only ever sees a resolved PlanContext. How the caller
authenticated (API key, or nothing at all) is decided here.
"""

import logging
from dataclasses import dataclass
from typing import Mapping, Optional

from luhnlab.errors import InvalidApiKeyError, PlanFeatureError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlanLimits:
    """Ceilings attached to a subscription plan."""

    rate: int  # requests per standard window
    bulk: int  # records per request
    name: str


PLAN_LIMITS = {
    "hobby": PlanLimits(rate=100, bulk=100, name="Hobby"),
    "pro": PlanLimits(rate=2000, bulk=10000, name="Pro"),
    "team": PlanLimits(rate=10000, bulk=10000, name="Team"),
}

FREE_PLAN = "hobby"


@dataclass(frozen=True)
class PlanContext:
    """Resolved plan for one request."""

    plan_type: str
    plan_name: str
    rate_limit: int
    bulk_limit: int
    identifier: str  # API key or caller address; quota counters key on this

    @property
    def is_paid(self) -> bool:
        return self.plan_type != FREE_PLAN

    @classmethod
    def for_plan(cls, plan_type: str, identifier: str) -> "PlanContext":
        limits = PLAN_LIMITS[plan_type]
        return cls(
            plan_type=plan_type,
            plan_name=limits.name,
            rate_limit=limits.rate,
            bulk_limit=limits.bulk,
            identifier=identifier,
        )


class ApiKeyResolver:
    """
    Resolve API keys to plan contexts.

    Keys come from configuration; a production deployment would back this
    with the user store, the contract stays the same.
    """

    def __init__(self, api_keys: Optional[Mapping[str, str]] = None):
        self._api_keys = dict(api_keys or {})

    def resolve(self, api_key: Optional[str], client_address: str) -> PlanContext:
        """
        Resolve a plan context.

        Args:
            api_key: Key from the X-API-Key header or ?key=, if any
            client_address: Caller address used for anonymous callers

        Raises:
            InvalidApiKeyError: Key supplied but unknown
        """
        if not api_key:
            return PlanContext.for_plan(FREE_PLAN, client_address)

        plan_type = self._api_keys.get(api_key)
        if plan_type is None or plan_type not in PLAN_LIMITS:
            logger.warning(f"Rejected unknown API key from {client_address}")
            raise InvalidApiKeyError()

        return PlanContext.for_plan(plan_type, api_key)


def require_paid_plan(plan: PlanContext, message: str) -> None:
    """Raise PlanFeatureError when a hobby caller asks for a paid feature."""
    if not plan.is_paid:
        raise PlanFeatureError(message)
