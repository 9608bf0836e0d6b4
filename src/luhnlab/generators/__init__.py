"""
Record generators and the resource catalogue served by the API.
"""

from luhnlab.generators import fields
from luhnlab.generators.bankid import BankIDOrder, BankIDStatus, create_bankid_mock
from luhnlab.generators.entities import (
    Composer,
    Record,
    create_bankgiro,
    create_card,
    create_company,
    create_device,
    create_finance,
    create_identity,
    create_orgnummer,
    create_person,
    create_personnummer,
    create_plusgiro,
    create_vehicle,
)

# Resource name (URL segment and SQL table name) -> composer
RESOURCES: dict[str, Composer] = {
    "person": create_person,
    "company": create_company,
    "vehicle": create_vehicle,
    "creditcard": create_card,
    "imei": create_device,
    "finance": create_finance,
    "identity": create_identity,
    "bankid": create_bankid_mock,
    "bankgiro": create_bankgiro,
    "plusgiro": create_plusgiro,
    "personnummer": create_personnummer,
    "orgnummer": create_orgnummer,
}

__all__ = [
    "fields",
    "BankIDOrder",
    "BankIDStatus",
    "Composer",
    "Record",
    "RESOURCES",
    "create_bankid_mock",
    "create_bankgiro",
    "create_card",
    "create_company",
    "create_device",
    "create_finance",
    "create_identity",
    "create_orgnummer",
    "create_person",
    "create_personnummer",
    "create_plusgiro",
    "create_vehicle",
]
