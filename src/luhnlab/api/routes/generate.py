"""
Test-data generation API routes.

Every resource shares one pipeline:
format gate -> seed -> delay -> simulated status -> generation -> export.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse, Response

from luhnlab.api.deps import Plan, Quota
from luhnlab.config import settings
from luhnlab.errors import SimulatedStatusError
from luhnlab.formats import ExportFormat, RecordExporter
from luhnlab.generators import RESOURCES
from luhnlab.options import ScenarioOptions, parse_int
from luhnlab.prng import get_random_generator
from luhnlab.security.plans import require_paid_plan
from luhnlab.shaping import generate_batch

logger = logging.getLogger(__name__)

router = APIRouter(tags=["generate"])

SIMULATED_STATUS_MIN = 400
SIMULATED_STATUS_MAX = 999

exporter = RecordExporter()


@dataclass
class GenerationQuery:
    """Query parameters shared by all generation routes."""

    seed: Optional[str] = None
    delay: Optional[str] = None
    status: Optional[str] = None
    format: Optional[str] = None
    options: ScenarioOptions = ScenarioOptions()

    @property
    def export_format(self) -> ExportFormat:
        try:
            return ExportFormat((self.format or "json").lower())
        except ValueError:
            return ExportFormat.JSON


def generation_query(
    seed: Annotated[Optional[str], Query(description="Seed for reproducible output")] = None,
    delay: Annotated[Optional[str], Query(description="Artificial delay in ms")] = None,
    status: Annotated[Optional[str], Query(description="Simulated error status (>= 400)")] = None,
    format: Annotated[Optional[str], Query(description="json, xml, csv or sql")] = None,
    invalid_rate: Annotated[Optional[str], Query(alias="invalidRate")] = None,
    city: Annotated[Optional[str], Query()] = None,
    min_age: Annotated[Optional[str], Query(alias="minAge")] = None,
    max_age: Annotated[Optional[str], Query(alias="maxAge")] = None,
    gender: Annotated[Optional[str], Query(description="male or female")] = None,
) -> GenerationQuery:
    return GenerationQuery(
        seed=seed,
        delay=delay,
        status=status,
        format=format,
        options=ScenarioOptions.from_query(invalid_rate, city, min_age, max_age, gender),
    )


GenerationParams = Annotated[GenerationQuery, Depends(generation_query)]


async def respond(
    resource: str,
    query: GenerationQuery,
    plan: Plan,
    quota: Quota,
    record_id: Optional[str] = None,
) -> Response:
    """Run the generation pipeline for one resource."""
    export_format = query.export_format
    if export_format.requires_paid_plan:
        require_paid_plan(
            plan,
            f"Formatet '{export_format.value}' kräver Pro- eller Team-plan. "
            "Uppgradera på https://luhn.se/profile",
        )

    rng = get_random_generator(query.seed, fallback=record_id)

    delay_ms = parse_int(query.delay)
    if delay_ms and delay_ms > 0:
        await asyncio.sleep(min(delay_ms, settings.max_delay_ms) / 1000)

    status_code = parse_int(query.status)
    # HTTP status codes are three digits
    if status_code is not None and SIMULATED_STATUS_MIN <= status_code <= SIMULATED_STATUS_MAX:
        logger.info(f"Simulated status {status_code} for /{resource} ({plan.identifier})")
        raise SimulatedStatusError(status_code)

    data = generate_batch(
        RESOURCES[resource],
        rng,
        query.options,
        quota.amount,
        plan.bulk_limit,
        record_id=record_id,
    )

    headers = quota.headers()
    if export_format == ExportFormat.JSON:
        return JSONResponse(content=data, headers=headers)

    result = exporter.export(data, export_format, resource)
    return Response(content=result.content, media_type=result.media_type, headers=headers)


@router.get("/person")
async def generate_person(query: GenerationParams, plan: Plan, quota: Quota) -> Response:
    """Person with personnummer, address and contact details."""
    return await respond("person", query, plan, quota)


@router.get("/person/{record_id}")
async def generate_person_by_id(
    record_id: str, query: GenerationParams, plan: Plan, quota: Quota
) -> Response:
    """Person seeded by the path id (unless ?seed= is given), carrying that id."""
    return await respond("person", query, plan, quota, record_id)


@router.get("/company")
async def generate_company(query: GenerationParams, plan: Plan, quota: Quota) -> Response:
    return await respond("company", query, plan, quota)


@router.get("/company/{record_id}")
async def generate_company_by_id(
    record_id: str, query: GenerationParams, plan: Plan, quota: Quota
) -> Response:
    return await respond("company", query, plan, quota, record_id)


@router.get("/vehicle")
async def generate_vehicle(query: GenerationParams, plan: Plan, quota: Quota) -> Response:
    return await respond("vehicle", query, plan, quota)


@router.get("/creditcard")
async def generate_creditcard(query: GenerationParams, plan: Plan, quota: Quota) -> Response:
    return await respond("creditcard", query, plan, quota)


@router.get("/imei")
async def generate_imei(query: GenerationParams, plan: Plan, quota: Quota) -> Response:
    return await respond("imei", query, plan, quota)


@router.get("/finance")
async def generate_finance(query: GenerationParams, plan: Plan, quota: Quota) -> Response:
    return await respond("finance", query, plan, quota)


@router.get("/identity")
async def generate_identity(query: GenerationParams, plan: Plan, quota: Quota) -> Response:
    """Person, card, device and vehicle in one record."""
    return await respond("identity", query, plan, quota)


@router.get("/bankid")
async def generate_bankid(query: GenerationParams, plan: Plan, quota: Quota) -> Response:
    """Mock BankID order. Order reference and token are never seeded."""
    return await respond("bankid", query, plan, quota)


@router.get("/bankgiro")
async def generate_bankgiro(query: GenerationParams, plan: Plan, quota: Quota) -> Response:
    return await respond("bankgiro", query, plan, quota)


@router.get("/plusgiro")
async def generate_plusgiro(query: GenerationParams, plan: Plan, quota: Quota) -> Response:
    return await respond("plusgiro", query, plan, quota)


@router.get("/personnummer")
async def generate_personnummer(query: GenerationParams, plan: Plan, quota: Quota) -> Response:
    return await respond("personnummer", query, plan, quota)


@router.get("/orgnummer")
async def generate_orgnummer(query: GenerationParams, plan: Plan, quota: Quota) -> Response:
    return await respond("orgnummer", query, plan, quota)
