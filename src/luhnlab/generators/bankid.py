"""
Mock BankID authentication orders.

Models the response a relying party sees after starting a BankID order.
Order reference and auto-start token come from the platform's secure random
source on every call, whatever the request seed, because they stand in for
a live authentication session. Only the record id follows the seeded stream.
"""

import base64
import secrets
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional

from luhnlab.generators import fields
from luhnlab.options import ScenarioOptions
from luhnlab.prng import RandomSource

PLACEHOLDER_QR_SVG = (
    '<svg width="100" height="100" viewBox="0 0 100 100" '
    'xmlns="http://www.w3.org/2000/svg"><rect width="100" height="100" fill="black"/></svg>'
)


class BankIDStatus(str, Enum):
    """BankID order status."""

    PENDING = "pending"
    FAILED = "failed"
    COMPLETE = "complete"


@dataclass
class BankIDOrder:
    """BankID authentication order."""

    order_ref: str  # Reference for polling
    auto_start_token: str  # Token for starting BankID app
    qr_code: str  # data: URI with the QR image
    status: BankIDStatus = BankIDStatus.PENDING
    message: str = "Starta din BankID-app."
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def start(cls) -> "BankIDOrder":
        return cls(
            order_ref=str(uuid.uuid4()),
            auto_start_token=secrets.token_hex(32),
            qr_code=placeholder_qr_code(),
        )

    def to_record(self) -> dict[str, Any]:
        return {
            "orderRef": self.order_ref,
            "autoStartToken": self.auto_start_token,
            "qrCode": self.qr_code,
            "status": self.status.value,
            "message": self.message,
        }


def placeholder_qr_code() -> str:
    encoded = base64.b64encode(PLACEHOLDER_QR_SVG.encode("utf-8")).decode("ascii")
    return f"data:image/svg+xml;base64,{encoded}"


def create_bankid_mock(
    rng: RandomSource, options: Optional[ScenarioOptions] = None
) -> dict[str, Any]:
    return {"id": fields.record_id(rng), **BankIDOrder.start().to_record()}
