"""
Swedish addresses for generated records.

Localities come from a postal code dataset (postnummer -> ort, kommun, län)
read once at startup. Street name and number are always randomized.

Fallbacks are ordered lists tried in turn:
- dataset source: CSV file, then the embedded list of major cities
- locality pool: city-filtered records, then the whole dataset, then a
  single hardcoded address
"""

import csv
import logging
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Callable, Optional, Sequence

from luhnlab.config import settings
from luhnlab.options import ScenarioOptions
from luhnlab.prng import RandomSource, random_element, random_int

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PostalRecord:
    """One postal code and the locality it belongs to."""

    postnummer: str  # 5 digits, no space
    ort: str
    kommun: str
    lan: str

    @property
    def formatted_postnummer(self) -> str:
        """Return postal code formatted with space (XXX XX)."""
        return f"{self.postnummer[:3]} {self.postnummer[3:]}"


@dataclass(frozen=True)
class PostalDataset:
    """Loaded postal records plus where they came from."""

    records: tuple[PostalRecord, ...]
    source: str


STREETS = [
    "Storgatan",
    "Drottninggatan",
    "Kungsgatan",
    "Sveavägen",
    "Vasagatan",
    "Linnégatan",
    "Odengatan",
    "Ringvägen",
    "Skolgatan",
    "Kyrkogatan",
]

DEFAULT_ADDRESS = {
    "gata": "Storgatan 1",
    "postnummer": "111 22",
    "ort": "Stockholm",
    "kommun": "Stockholm",
    "lan": "Stockholms län",
}


def _rec(postnummer: str, ort: str, kommun: str, lan: str) -> PostalRecord:
    return PostalRecord(postnummer.replace(" ", ""), ort, kommun, lan)


FALLBACK_POSTAL_DATA = (
    _rec("111 22", "Stockholm", "Stockholm", "Stockholms län"),
    _rec("111 29", "Stockholm", "Stockholm", "Stockholms län"),
    _rec("113 56", "Stockholm", "Stockholm", "Stockholms län"),
    _rec("115 21", "Stockholm", "Stockholm", "Stockholms län"),
    _rec("118 60", "Stockholm", "Stockholm", "Stockholms län"),
    _rec("121 31", "Bromma", "Stockholm", "Stockholms län"),
    _rec("122 32", "Enskede", "Stockholm", "Stockholms län"),
    _rec("126 30", "Hägersten", "Stockholm", "Stockholms län"),
    _rec("127 40", "Skärholmen", "Stockholm", "Stockholms län"),
    _rec("131 40", "Nacka", "Nacka", "Stockholms län"),
    _rec("141 71", "Huddinge", "Huddinge", "Stockholms län"),
    _rec("151 50", "Södertälje", "Södertälje", "Stockholms län"),
    _rec("181 32", "Lidingö", "Lidingö", "Stockholms län"),
    _rec("191 43", "Sollentuna", "Sollentuna", "Stockholms län"),
    _rec("201 20", "Malmö", "Malmö", "Skåne län"),
    _rec("211 35", "Malmö", "Malmö", "Skåne län"),
    _rec("212 18", "Malmö", "Malmö", "Skåne län"),
    _rec("214 32", "Malmö", "Malmö", "Skåne län"),
    _rec("217 46", "Malmö", "Malmö", "Skåne län"),
    _rec("221 00", "Lund", "Lund", "Skåne län"),
    _rec("252 21", "Helsingborg", "Helsingborg", "Skåne län"),
    _rec("291 33", "Kristianstad", "Kristianstad", "Skåne län"),
    _rec("411 01", "Göteborg", "Göteborg", "Västra Götalands län"),
    _rec("413 04", "Göteborg", "Göteborg", "Västra Götalands län"),
    _rec("415 03", "Göteborg", "Göteborg", "Västra Götalands län"),
    _rec("417 55", "Göteborg", "Göteborg", "Västra Götalands län"),
    _rec("421 30", "Västra Frölunda", "Göteborg", "Västra Götalands län"),
    _rec("431 37", "Mölndal", "Mölndal", "Västra Götalands län"),
    _rec("451 50", "Uddevalla", "Uddevalla", "Västra Götalands län"),
    _rec("461 30", "Trollhättan", "Trollhättan", "Västra Götalands län"),
    _rec("753 10", "Uppsala", "Uppsala", "Uppsala län"),
    _rec("754 40", "Uppsala", "Uppsala", "Uppsala län"),
    _rec("756 51", "Uppsala", "Uppsala", "Uppsala län"),
    _rec("903 26", "Umeå", "Umeå", "Västerbottens län"),
    _rec("981 32", "Kiruna", "Kiruna", "Norrbottens län"),
    _rec("802 55", "Gävle", "Gävle", "Gävleborgs län"),
    _rec("632 20", "Eskilstuna", "Eskilstuna", "Södermanlands län"),
    _rec("582 24", "Linköping", "Linköping", "Östergötlands län"),
    _rec("352 36", "Växjö", "Växjö", "Kronobergs län"),
    _rec("702 10", "Örebro", "Örebro", "Örebro län"),
    _rec("654 60", "Karlstad", "Karlstad", "Värmlands län"),
    _rec("722 10", "Västerås", "Västerås", "Västmanlands län"),
    _rec("371 34", "Karlskrona", "Karlskrona", "Blekinge län"),
    _rec("852 36", "Sundsvall", "Sundsvall", "Västernorrlands län"),
)


def read_postal_csv(path: Path) -> Optional[PostalDataset]:
    """
    Read the postal code CSV.

    Expected columns (header row skipped):
    Postnummer, Ort, Kommun, Kommunkod, Län[, ...]
    Rows with fewer than five columns or a postal code that is not five
    digits are dropped.
    """
    if not path.exists():
        logger.warning(f"Postal dataset {path} missing, using embedded fallback data")
        return None

    try:
        with open(path, encoding="utf-8", newline="") as f:
            reader = csv.reader(f)
            next(reader, None)
            records = []
            for row in reader:
                if len(row) < 5:
                    continue
                postnummer = row[0].strip().replace(" ", "")
                if len(postnummer) != 5 or not postnummer.isdigit():
                    continue
                records.append(
                    PostalRecord(postnummer, row[1].strip(), row[2].strip(), row[4].strip())
                )
    except (OSError, UnicodeDecodeError, csv.Error) as e:
        logger.error(f"Failed to read postal dataset {path}: {e}")
        return None

    if not records:
        logger.warning(f"Postal dataset {path} contained no usable rows")
        return None

    logger.info(f"Postal dataset loaded: {len(records)} localities from {path}")
    return PostalDataset(records=tuple(records), source=str(path))


def embedded_postal_data(path: Path) -> Optional[PostalDataset]:
    return PostalDataset(records=FALLBACK_POSTAL_DATA, source="embedded")


DATASET_SOURCES: Sequence[Callable[[Path], Optional[PostalDataset]]] = (
    read_postal_csv,
    embedded_postal_data,
)


def load_postal_dataset(path: Path) -> PostalDataset:
    """Load the first dataset source that yields records."""
    for source in DATASET_SOURCES:
        dataset = source(path)
        if dataset is not None:
            return dataset
    return PostalDataset(records=(), source="empty")


@lru_cache(maxsize=1)
def get_postal_dataset() -> PostalDataset:
    """Process-wide dataset, loaded on first use and read-only afterwards."""
    return load_postal_dataset(settings.postal_data_path)


def _matching_city(
    records: Sequence[PostalRecord], options: ScenarioOptions
) -> Optional[Sequence[PostalRecord]]:
    if not options.city:
        return None
    wanted = options.city.strip().lower()
    matches = [r for r in records if r.ort.lower() == wanted]
    if not matches:
        sample = ", ".join(f'"{r.ort}"' for r in records[:3])
        logger.warning(
            f'No locality matched city "{options.city}", using all localities '
            f"(first in dataset: {sample})"
        )
        return None
    return matches


def _whole_dataset(
    records: Sequence[PostalRecord], options: ScenarioOptions
) -> Optional[Sequence[PostalRecord]]:
    return records or None


LOCALITY_POOLS = (_matching_city, _whole_dataset)


def generate_address(
    rng: RandomSource,
    options: Optional[ScenarioOptions] = None,
    dataset: Optional[PostalDataset] = None,
) -> dict[str, str]:
    """
    Generate an address mapping (gata, postnummer, ort, kommun, lan).

    Draws: locality, street, house number. An empty dataset yields
    DEFAULT_ADDRESS without drawing.
    """
    options = options or ScenarioOptions()
    records = (dataset or get_postal_dataset()).records

    for pool in LOCALITY_POOLS:
        candidates = pool(records, options)
        if candidates:
            break
    else:
        return dict(DEFAULT_ADDRESS)

    location = random_element(candidates, rng)
    return {
        "gata": f"{random_element(STREETS, rng)} {random_int(1, 150, rng)}",
        "postnummer": location.formatted_postnummer,
        "ort": location.ort,
        "kommun": location.kommun,
        "lan": location.lan,
    }
