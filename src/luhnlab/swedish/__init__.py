"""Swedish identifiers: personnummer, organisationsnummer, giro numbers, IBANs and addresses."""

from luhnlab.swedish.personnummer import (
    INVALID_MARKER,
    PersonnummerInfo,
    build_personnummer,
    generate_personnummer,
    is_marked_invalid,
    validate_personnummer,
)
from luhnlab.swedish.organisationsnummer import (
    ORGANIZATION_TYPES,
    OrganisationsnummerInfo,
    generate_organisationsnummer,
    validate_organisationsnummer,
)
from luhnlab.swedish.address import (
    FALLBACK_POSTAL_DATA,
    PostalDataset,
    PostalRecord,
    generate_address,
    get_postal_dataset,
    load_postal_dataset,
)
from luhnlab.swedish.bank import BANKS, Bank, generate_iban
from luhnlab.swedish.giro import generate_bankgiro, generate_plusgiro

__all__ = [
    # Personnummer
    "INVALID_MARKER",
    "PersonnummerInfo",
    "build_personnummer",
    "generate_personnummer",
    "is_marked_invalid",
    "validate_personnummer",
    # Organisationsnummer
    "ORGANIZATION_TYPES",
    "OrganisationsnummerInfo",
    "generate_organisationsnummer",
    "validate_organisationsnummer",
    # Address
    "FALLBACK_POSTAL_DATA",
    "PostalDataset",
    "PostalRecord",
    "generate_address",
    "get_postal_dataset",
    "load_postal_dataset",
    # Bank and giro
    "BANKS",
    "Bank",
    "generate_iban",
    "generate_bankgiro",
    "generate_plusgiro",
]
