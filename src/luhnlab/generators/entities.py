"""
Entity composers.

A composer takes the request's random source and scenario options and
returns one record. Field order inside each composer is the draw order, so
records are reproducible for a given seed.
"""

from typing import Any, Callable, Optional

from luhnlab.generators import fields
from luhnlab.options import ScenarioOptions
from luhnlab.prng import RandomSource, random_element, random_int
from luhnlab.swedish.address import generate_address
from luhnlab.swedish.bank import generate_iban, random_bank
from luhnlab.swedish.giro import generate_bankgiro, generate_plusgiro
from luhnlab.swedish.organisationsnummer import generate_organisationsnummer
from luhnlab.swedish.personnummer import generate_personnummer

Record = dict[str, Any]
Composer = Callable[[RandomSource, ScenarioOptions], Record]

COMPANY_NAME_PREFIXES = [
    "Nordic", "Svenska", "Global", "Stockholm", "Göteborgs",
    "Malmö", "Digitala", "Kreativa", "Svea", "Modern",
]
COMPANY_NAME_KEYWORDS = [
    "Konsult", "Teknik", "Solutions", "Bygg", "Finans", "Media",
    "Design", "IT", "Partner", "Gruppen", "Invest",
]
LEGAL_FORMS = ["Aktiebolag", "Handelsbolag", "Kommanditbolag", "Enskild Firma"]
LEGAL_FORM_SUFFIXES = {
    "Aktiebolag": "AB",
    "Handelsbolag": "HB",
    "Kommanditbolag": "KB",
}

VEHICLES = [
    ("Personbil", "Volvo V60"),
    ("Personbil", "Volkswagen Golf"),
    ("Personbil", "Tesla Model Y"),
    ("Personbil", "Kia Niro"),
    ("Personbil", "Toyota RAV4"),
    ("Personbil", "BMW 3-serie"),
    ("Personbil", "Audi A4"),
    ("Personbil", "Skoda Octavia"),
    ("Personbil", "Porsche 911"),
    ("Personbil", "Polestar 2"),
    ("Lastbil", "Scania R-serie"),
    ("Lastbil", "Volvo FH16"),
    ("Lastbil", "Mercedes-Benz Actros"),
    ("Lastbil", "MAN TGX"),
    ("MC", "Harley-Davidson Sportster"),
    ("MC", "Honda CBR"),
    ("MC", "BMW R1250GS"),
    ("MC", "Yamaha MT-07"),
    ("Släpvagn", "Brenderup 1205S"),
    ("Släpvagn", "Fogelsta F1425"),
    ("Släpvagn", "Respo 750M"),
    ("Släpvagn", "Tiki C-265"),
]

CARD_BRANDS = ["Visa", "Mastercard"]


def create_person(rng: RandomSource, options: Optional[ScenarioOptions] = None) -> Record:
    options = options or ScenarioOptions()
    first = fields.first_name(rng)
    last = fields.last_name(rng)
    return {
        "id": fields.record_id(rng),
        "namn": f"{first} {last}",
        "personnummer": generate_personnummer(rng, options),
        "adress": generate_address(rng, options),
        "kontakt": {
            "mobil": fields.mobile_number(rng),
            "email": fields.email_address(first, last),
        },
    }


def create_company(rng: RandomSource, options: Optional[ScenarioOptions] = None) -> Record:
    """Company with legal form, name, organisationsnummer and address."""
    options = options or ScenarioOptions()
    legal_form = random_element(LEGAL_FORMS, rng)

    if legal_form == "Enskild Firma":
        first = fields.first_name(rng)
        last = fields.last_name(rng)
        name = f"{last}, {first}"
    else:
        prefix = random_element(COMPANY_NAME_PREFIXES, rng)
        keyword = random_element(COMPANY_NAME_KEYWORDS, rng)
        name = f"{prefix} {keyword} {LEGAL_FORM_SUFFIXES[legal_form]}"

    return {
        "id": fields.record_id(rng),
        "foretag": name,
        "bolagsform": legal_form,
        "orgnummer": generate_organisationsnummer(rng),
        "adress": generate_address(rng, options),
    }


def create_vehicle(rng: RandomSource, options: Optional[ScenarioOptions] = None) -> Record:
    vehicle_type, model = random_element(VEHICLES, rng)
    return {
        "id": fields.record_id(rng),
        "regnummer": fields.registration_plate(rng),
        "typ": vehicle_type,
        "modell": model,
    }


def create_card(rng: RandomSource, options: Optional[ScenarioOptions] = None) -> Record:
    brand = random_element(CARD_BRANDS, rng)
    return {
        "id": fields.record_id(rng),
        "typ": "Kreditkort",
        "brand": brand,
        "nummer": fields.card_number(brand, rng),
        "cvv": str(random_int(100, 999, rng)),
        "exp": fields.card_expiry(rng),
    }


def create_device(rng: RandomSource, options: Optional[ScenarioOptions] = None) -> Record:
    return {
        "id": fields.record_id(rng),
        "typ": "Mobiltelefon",
        "imei": fields.imei(rng),
        "modell": "iPhone 15",
    }


def create_finance(rng: RandomSource, options: Optional[ScenarioOptions] = None) -> Record:
    """
    Salary account; the IBAN uses the clearing range of the named bank.

    Draws: bank, id, a second bank, clearing, account. The second bank is
    discarded so the named bank and the IBAN agree.
    """
    bank = random_bank(rng)
    account_id = fields.record_id(rng)
    random_bank(rng)
    return {
        "id": account_id,
        "bank": bank.name,
        "iban": generate_iban(rng, bank),
        "typ": "Lönekonto",
    }


def create_identity(rng: RandomSource, options: Optional[ScenarioOptions] = None) -> Record:
    """
    Full identity journey: person, card, device and vehicle in one record.

    The nested person drops its own id so the composite carries one id.
    """
    person = create_person(rng, options)
    del person["id"]
    return {
        "id": fields.record_id(rng),
        "person": person,
        "kort": create_card(rng, options),
        "enhet": create_device(rng, options),
        "fordon": create_vehicle(rng, options),
    }


def create_personnummer(rng: RandomSource, options: Optional[ScenarioOptions] = None) -> Record:
    # Identifier first so the number matches generate_personnummer for the same seed
    pnr = generate_personnummer(rng, options)
    return {"id": fields.record_id(rng), "personnummer": pnr}


def create_orgnummer(rng: RandomSource, options: Optional[ScenarioOptions] = None) -> Record:
    orgnr = generate_organisationsnummer(rng)
    return {"id": fields.record_id(rng), "orgnummer": orgnr}


def create_bankgiro(rng: RandomSource, options: Optional[ScenarioOptions] = None) -> Record:
    bankgiro = generate_bankgiro(rng)
    return {"id": fields.record_id(rng), "bankgiro": bankgiro}


def create_plusgiro(rng: RandomSource, options: Optional[ScenarioOptions] = None) -> Record:
    plusgiro = generate_plusgiro(rng)
    return {"id": fields.record_id(rng), "plusgiro": plusgiro}
