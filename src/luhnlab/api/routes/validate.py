"""
Number validation API routes.
"""

from typing import Annotated, Any

from fastapi import APIRouter, Body
from pydantic import BaseModel

from luhnlab.checksum import is_valid_luhn, strip_separators
from luhnlab.errors import InvalidInputError
from luhnlab.swedish.organisationsnummer import validate_organisationsnummer
from luhnlab.swedish.personnummer import validate_personnummer

router = APIRouter(prefix="/validate", tags=["validate"])

ORGANISATION_PREFIXES = ("16", "55", "7", "8", "9")


class ValidationResult(BaseModel):
    """Result for a single number."""

    input: str
    isValid: bool


class BulkValidationItem(BaseModel):
    """Result for one number in a bulk request."""

    number: str
    type: str
    isValid: bool


def detect_number_type(value: str) -> str:
    """
    Guess what kind of number a string holds.

    Numbers that parse as an organisationsnummer (group number 20 or more)
    or a personnummer (a real birth date that is not in the future) are
    named by structure. Anything else is judged by shape: 10 digits with an
    organisation prefix, 10 or 12 digits, then 13-19 digits for cards.
    """
    if validate_organisationsnummer(value).is_valid:
        return "Organisationsnummer"
    if validate_personnummer(value).is_valid:
        return "Personnummer"

    clean = strip_separators(value)
    if len(clean) in (10, 12):
        if len(clean) == 10 and clean.startswith(ORGANISATION_PREFIXES):
            return "Organisationsnummer"
        return "Personnummer"
    if 13 <= len(clean) <= 19:
        return "Kreditkort"
    return "Okänd"


@router.post("/bulk", response_model=list[BulkValidationItem])
async def validate_bulk(
    payload: Annotated[Any, Body()] = None,
) -> list[BulkValidationItem]:
    """Validate a list of numbers sent as ``{"numbers": [...]}``."""
    numbers = payload.get("numbers") if isinstance(payload, dict) else None
    if not isinstance(numbers, list):
        raise InvalidInputError("Input måste vara en JSON array med namnet 'numbers'.")

    results = []
    for number in numbers:
        text = str(number)
        results.append(
            BulkValidationItem(
                number=text,
                type=detect_number_type(text),
                isValid=is_valid_luhn(text),
            )
        )
    return results


@router.get("/{value}", response_model=ValidationResult)
async def validate_number(value: str) -> ValidationResult:
    """Luhn-validate one number (personnummer, orgnummer, card, IMEI...)."""
    return ValidationResult(input=value, isValid=is_valid_luhn(value))
