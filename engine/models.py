"""
Domain Models for the Platform Fee Engine

These dataclasses provide type-safe representations of the pricing entities.
All monetary values use Decimal for precision.
"""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation


def to_decimal(value) -> Decimal:
    """Convert an int, float, str or Decimal to Decimal without float drift."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise TypeError(f"Expected a number, got: {value!r}")
    try:
        return Decimal(str(value))
    except InvalidOperation:
        raise ValueError(f"Not a valid number: {value!r}") from None


def monthly_volume_from_dict(data: dict):
    """Monthly volume from a request, in snake_case or the web client's camelCase."""
    return data.get("monthly_volume", data.get("contractorMonthlyVolume"))


# =============================================================================
# CONFIGURATION MODELS
# =============================================================================


@dataclass(frozen=True)
class CommissionTier:
    """A monthly-volume band with the platform's fee rate for that band."""

    name: str
    monthly_volume_min: Decimal
    monthly_volume_max: Decimal | None  # None = unbounded
    fee_percentage: Decimal
    description: str = ""

    @property
    def is_unbounded(self) -> bool:
        return self.monthly_volume_max is None

    def contains(self, monthly_volume: Decimal) -> bool:
        if monthly_volume < self.monthly_volume_min:
            return False
        return self.monthly_volume_max is None or monthly_volume <= self.monthly_volume_max

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "monthly_volume_min": float(self.monthly_volume_min),
            "monthly_volume_max": float(self.monthly_volume_max) if self.monthly_volume_max is not None else None,
            "fee_percentage": float(self.fee_percentage),
            "description": self.description,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "CommissionTier":
        upper = data.get("monthly_volume_max")
        return cls(
            name=data["name"],
            monthly_volume_min=to_decimal(data["monthly_volume_min"]),
            monthly_volume_max=to_decimal(upper) if upper is not None else None,
            fee_percentage=to_decimal(data["fee_percentage"]),
            description=data.get("description", ""),
        )


# =============================================================================
# INPUT MODELS
# =============================================================================


@dataclass
class FeeRequest:
    """A single transaction to price."""

    amount: Decimal
    monthly_volume: Decimal
    reference: str | None = None

    @classmethod
    def from_dict(cls, data: dict) -> "FeeRequest":
        if not isinstance(data, dict):
            raise TypeError(f"Fee request must be a JSON object, got: {type(data).__name__}")
        amount = data.get("amount")
        volume = monthly_volume_from_dict(data)
        if amount is None:
            raise KeyError("amount")
        if volume is None:
            raise KeyError("monthly_volume")
        return cls(
            amount=to_decimal(amount),
            monthly_volume=to_decimal(volume),
            reference=data.get("reference"),
        )


# =============================================================================
# OUTPUT / RESULT MODELS
# =============================================================================


@dataclass(frozen=True)
class FeeResult:
    """Platform fee and contractor net for one transaction."""

    amount: Decimal
    fee_amount: Decimal
    fee_percentage: Decimal
    tier_name: str
    net_amount: Decimal
    minimum_fee_applied: bool = False

    @property
    def fee_amount_cents(self) -> int:
        """Fee in integer minor units, as Stripe expects application fees."""
        return int((self.fee_amount * 100).to_integral_value(rounding=ROUND_HALF_UP))

    @property
    def net_amount_cents(self) -> int:
        return int((self.net_amount * 100).to_integral_value(rounding=ROUND_HALF_UP))


@dataclass(frozen=True)
class TierProgress:
    """Where a contractor's monthly volume sits relative to the next tier."""

    monthly_volume: Decimal
    current_tier: CommissionTier
    next_tier: CommissionTier | None = None
    volume_to_next_tier: Decimal | None = None

    @property
    def is_top_tier(self) -> bool:
        return self.next_tier is None


@dataclass
class FeeQuote:
    """Final output of fee processing."""

    transaction: dict
    fee: dict
    tier_progress: dict
