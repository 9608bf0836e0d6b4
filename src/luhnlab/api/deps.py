"""
FastAPI dependencies for the API.

Provides:
- Plan-context resolution from API key or caller address
- Quota admission (standard and bulk windows)
"""

import logging
from typing import Annotated, Optional

from fastapi import Depends, Header, Query, Request, Response

from luhnlab.config import settings
from luhnlab.options import parse_int
from luhnlab.security.plans import ApiKeyResolver, PlanContext
from luhnlab.security.ratelimit import QuotaDecision, QuotaGate

logger = logging.getLogger(__name__)


def get_api_key_resolver() -> ApiKeyResolver:
    """Resolver over the configured API keys. Overridden in tests."""
    return ApiKeyResolver(settings.api_keys)


def get_client_address(request: Request) -> str:
    """
    Caller address for anonymous quota keys.

    First X-Forwarded-For hop, then X-Real-IP, then the socket peer.
    """
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        first_hop = forwarded.split(",")[0].strip()
        if first_hop:
            return first_hop

    real_ip = request.headers.get("X-Real-IP")
    if real_ip:
        return real_ip.strip()

    return request.client.host if request.client else "unknown"


async def get_plan_context(
    request: Request,
    resolver: Annotated[ApiKeyResolver, Depends(get_api_key_resolver)],
    x_api_key: Annotated[Optional[str], Header()] = None,
    key: Annotated[Optional[str], Query(include_in_schema=False)] = None,
) -> PlanContext:
    """
    Resolve the plan for this request.

    Raises:
        InvalidApiKeyError: 401 if a key was supplied but is unknown
    """
    plan = resolver.resolve(x_api_key or key, get_client_address(request))
    request.state.plan = plan
    return plan


def get_quota_gate(request: Request) -> QuotaGate:
    """Quota gate created at startup."""
    return request.app.state.quota_gate


async def enforce_quota(
    request: Request,
    response: Response,
    plan: Annotated[PlanContext, Depends(get_plan_context)],
    gate: Annotated[QuotaGate, Depends(get_quota_gate)],
    amount: Annotated[Optional[str], Query(include_in_schema=False)] = None,
) -> QuotaDecision:
    """
    Admit the request against the caller's quota windows.

    Raises:
        BulkQuotaExceededError: 429 when the bulk window is full
        StandardQuotaExceededError: 429 when the plan rate is reached
    """
    requested = parse_int(amount, 1) or 1
    decision = await gate.admit(plan, requested)

    for name, value in decision.headers().items():
        response.headers[name] = value
    request.state.quota = decision
    return decision


# Type aliases for dependency injection
Plan = Annotated[PlanContext, Depends(get_plan_context)]
Quota = Annotated[QuotaDecision, Depends(enforce_quota)]
