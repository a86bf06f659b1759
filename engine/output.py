"""
Output Builder

Constructs the API response from a fee result.
"""

from decimal import Decimal

from .models import CommissionTier, FeeQuote, FeeRequest, FeeResult, TierProgress


def to_money(value: Decimal) -> float:
    """Convert Decimal to float with 2 decimal places."""
    return round(float(value), 2)


def _fmt(value) -> str:
    """Format a number as currency string for descriptions."""
    if value < 0:
        return f"-${-value:,.2f}"
    return f"${value:,.2f}"


def _pct(rate: Decimal) -> str:
    return f"{float(rate) * 100:g}%"


class OutputBuilder:
    """Builds the final output response."""

    def __init__(self, minimum_fee: Decimal):
        self.minimum_fee = minimum_fee

    def build(self, request: FeeRequest, result: FeeResult, progress: TierProgress) -> FeeQuote:
        """Construct the complete quote from the request and its calculations."""
        return FeeQuote(
            transaction=self._build_transaction(request),
            fee=self._build_fee(result),
            tier_progress=self.build_tier_progress(progress),
        )

    def _build_transaction(self, request: FeeRequest) -> dict:
        return {
            "reference": request.reference,
            "amount": to_money(request.amount),
            "monthly_volume": to_money(request.monthly_volume),
        }

    def _build_fee(self, result: FeeResult) -> dict:
        """Build fee section with value and dynamic description for each field."""
        amount = to_money(result.amount)
        fee = to_money(result.fee_amount)
        net = to_money(result.net_amount)
        rate = _pct(result.fee_percentage)

        if result.minimum_fee_applied:
            fee_desc = (
                f"{rate} × {_fmt(amount)} is below the minimum platform fee, "
                f"charged minimum {_fmt(to_money(self.minimum_fee))}"
            )
        else:
            fee_desc = f"{rate} × {_fmt(amount)} = {_fmt(fee)}"

        return {
            "tier_name": result.tier_name,
            "fee_percentage": float(result.fee_percentage),
            "minimum_fee_applied": result.minimum_fee_applied,
            "fee_amount": {
                "value": fee,
                "cents": result.fee_amount_cents,
                "description": fee_desc,
            },
            "net_amount": {
                "value": net,
                "cents": result.net_amount_cents,
                "description": f"amount ({_fmt(amount)}) - platform fee ({_fmt(fee)}) = {_fmt(net)}",
            },
        }

    def build_tier_progress(self, progress: TierProgress) -> dict:
        """Build the tier progress section."""
        if progress.is_top_tier:
            return {
                "current_tier": progress.current_tier.to_dict(),
                "next_tier": None,
                "volume_to_next_tier": None,
                "description": "Maximum tier reached",
            }

        remaining = to_money(progress.volume_to_next_tier)
        return {
            "current_tier": progress.current_tier.to_dict(),
            "next_tier": progress.next_tier.to_dict(),
            "volume_to_next_tier": remaining,
            "description": (
                f"{_fmt(remaining)} more monthly volume to reach {progress.next_tier.name} "
                f"({_pct(progress.next_tier.fee_percentage)})"
            ),
        }

    def build_schedule(self, tiers: tuple[CommissionTier, ...]) -> dict:
        """Build the published tier schedule."""
        return {
            "minimum_platform_fee": to_money(self.minimum_fee),
            "tiers": [tier.to_dict() for tier in tiers],
        }
