"""
Data masking API routes.

Replaces personnummer with deterministic, still Luhn-valid stand-ins so test
environments can share realistic data. Pro and Team plans only.
"""

import logging
from typing import Annotated, Any, Optional

from fastapi import APIRouter, Body, Query
from pydantic import BaseModel

from luhnlab.api.deps import Plan
from luhnlab.errors import InvalidInputError
from luhnlab.lifecycle.anonymize import PersonnummerMasker
from luhnlab.security.plans import require_paid_plan

logger = logging.getLogger(__name__)

router = APIRouter(tags=["mask"])


class MaskedItem(BaseModel):
    masked: str
    isValid: bool


class MaskResponse(BaseModel):
    """Response from a masking request."""

    success: bool
    maskedData: list[MaskedItem]


@router.post("/mask", response_model=MaskResponse)
async def mask_data(
    plan: Plan,
    payload: Annotated[Any, Body()] = None,
    seed: Annotated[Optional[str], Query(description="Salt for the masking")] = None,
) -> MaskResponse:
    """
    Mask a list of personnummer sent as ``{"data": [...]}``.

    The same input and ``seed`` always give the same masked value. Values
    that are not Luhn-valid are returned unchanged.
    """
    require_paid_plan(
        plan,
        "Data Maskning kräver Pro- eller Team-plan. Uppgradera på https://luhn.se/profile",
    )

    if payload is None:
        payload = {}
    data = (payload.get("data") or []) if isinstance(payload, dict) else None
    if not isinstance(data, list) or not all(isinstance(item, str) for item in data):
        raise InvalidInputError("Input måste vara en array i 'data'.")

    results = PersonnummerMasker(salt=seed).mask_batch(data)
    logger.info(f"Masked {len(results)} values for {plan.identifier}")

    return MaskResponse(
        success=True,
        maskedData=[MaskedItem(**result.to_dict()) for result in results],
    )
