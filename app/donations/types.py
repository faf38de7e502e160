"""
Value types shared by the donation webhook pipeline.

DonationEvent is the normalized record published to the broker.
ParsedDonation is the intermediate shape extracted from a Stripe event
before the customer is resolved.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any


# Currencies Stripe reports in whole units rather than hundredths
# https://docs.stripe.com/currencies#zero-decimal
ZERO_DECIMAL_CURRENCIES = frozenset(
    {
        "bif",
        "clp",
        "djf",
        "gnf",
        "jpy",
        "kmf",
        "krw",
        "mga",
        "pyg",
        "rwf",
        "ugx",
        "vnd",
        "vuv",
        "xaf",
        "xof",
        "xpf",
    }
)


def to_major_units(amount_minor: int, currency: str) -> float:
    """Convert a Stripe amount to major units of its currency."""
    if currency.lower() in ZERO_DECIMAL_CURRENCIES:
        return float(amount_minor)
    return amount_minor / 100


@dataclass(frozen=True)
class ParsedDonation:
    """
    Donation fields pulled out of a Stripe event payload.

    Attributes:
        customer_id: Stripe Customer ID (cus_xxx), if the event carried one
        customer_name: Name given at checkout (may be empty)
        customer_email: Email given at checkout (may be empty)
        amount_minor: Amount in the smallest currency unit (cents)
        currency: ISO 4217 code as reported by Stripe
    """

    customer_id: str | None
    customer_name: str
    customer_email: str
    amount_minor: int
    currency: str


@dataclass(frozen=True)
class DonationEvent:
    """
    Normalized "donation occurred" event.

    Built once per qualifying webhook call and discarded after publish.
    The wire format uses camelCase keys and the amount in major units:

        {
            "customerID": "cus_123",
            "customerName": "Ana",
            "customerEmail": "ana@example.com",
            "amount": 25.0,
            "currency": "eur"
        }
    """

    customer_id: str
    customer_name: str
    customer_email: str
    amount: float
    currency: str

    @classmethod
    def from_parsed(
        cls,
        parsed: ParsedDonation,
        customer_id: str,
        customer_name: str,
        customer_email: str,
    ) -> DonationEvent:
        """Build the event from payload fields and the resolved customer."""
        return cls(
            customer_id=customer_id,
            customer_name=customer_name,
            customer_email=customer_email,
            amount=to_major_units(parsed.amount_minor, parsed.currency),
            currency=parsed.currency,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "customerID": self.customer_id,
            "customerName": self.customer_name,
            "customerEmail": self.customer_email,
            "amount": self.amount,
            "currency": self.currency,
        }

    def to_json(self) -> bytes:
        """Serialize to the UTF-8 JSON payload written to the broker."""
        return json.dumps(self.to_dict()).encode("utf-8")
