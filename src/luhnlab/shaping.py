"""
Batch shaping: run a composer N times and stamp the results.
"""

from datetime import datetime, timezone
from typing import Optional

from luhnlab.formats import Payload
from luhnlab.generators.entities import Composer
from luhnlab.options import ScenarioOptions
from luhnlab.prng import RandomSource


def clamp_amount(amount: Optional[int], bulk_limit: int) -> int:
    """Requested record count limited to 1..bulk_limit."""
    return max(1, min(amount or 1, bulk_limit))


def iso_timestamp(moment: Optional[datetime] = None) -> str:
    """UTC timestamp with millisecond precision and a Z suffix."""
    moment = moment or datetime.now(timezone.utc)
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def generate_batch(
    composer: Composer,
    rng: RandomSource,
    options: ScenarioOptions,
    amount: Optional[int],
    bulk_limit: int,
    record_id: Optional[str] = None,
    now: Optional[datetime] = None,
) -> Payload:
    """
    Generate one record or a list of records.

    A single record (amount clamped to 1) is returned as a mapping, larger
    batches as a list. ``record_id`` from the URL replaces the id of a single
    record. Every record gets the same ``generatedAt`` stamp.
    """
    count = clamp_amount(amount, bulk_limit)
    records = [composer(rng, options) for _ in range(count)]

    if count == 1 and record_id is not None:
        numeric = record_id.isascii() and record_id.isdigit()
        records[0]["id"] = int(record_id) if numeric else record_id

    generated_at = iso_timestamp(now)
    for record in records:
        record["generatedAt"] = generated_at

    return records[0] if count == 1 else records
