"""
Platform Fee Calculator

Resolves a contractor's commission tier from their monthly volume and
computes the platform fee and contractor net for a single transaction.
All arithmetic uses Decimal with ROUND_HALF_UP rounding applied once, to the fee.
"""

import logging
import threading
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from ..models import CommissionTier, FeeResult, TierProgress, to_decimal
from ..tiers import DEFAULT_COMMISSION_TIERS, MINIMUM_PLATFORM_FEE
from ..validators import InputValidator, TierLookupError, TierTableValidator

logger = logging.getLogger(__name__)


def quantize_money(value: Decimal) -> Decimal:
    """Round to 2 decimal places using ROUND_HALF_UP."""
    return value.quantize(Decimal('0.01'), rounding=ROUND_HALF_UP)


class FeeCalculator:
    """Calculates the platform fee for a transaction from a tier table."""

    def __init__(
        self,
        tiers: Iterable[CommissionTier] = DEFAULT_COMMISSION_TIERS,
        minimum_fee: Decimal = MINIMUM_PLATFORM_FEE,
        fallback_to_first_tier: bool = True,
    ):
        self.input_validator = InputValidator()
        self.table_validator = TierTableValidator()
        self.minimum_fee = to_decimal(minimum_fee)
        self.fallback_to_first_tier = fallback_to_first_tier

        if not self.minimum_fee.is_finite():
            raise ValueError(f"minimum_fee must be a finite number, got: {self.minimum_fee}")
        if self.minimum_fee < 0:
            raise ValueError(f"minimum_fee cannot be negative, got: {self.minimum_fee}")

        self._lock = threading.Lock()
        self._tiers = self.table_validator.validate(tiers)

    @property
    def tiers(self) -> tuple[CommissionTier, ...]:
        return self._tiers

    def reload_tiers(self, tiers: Iterable[CommissionTier]) -> None:
        """
        Replace the tier table.

        The new table is validated first; on failure the current table stays
        in place. The swap replaces the whole tuple, so a concurrent
        calculate_fee sees either the old table or the new one.
        """
        validated = self.table_validator.validate(tiers)
        with self._lock:
            self._tiers = validated
        logger.info(f"Tier table reloaded: {[t.name for t in validated]}")

    def resolve_tier(self, monthly_volume) -> CommissionTier:
        """
        Find the tier whose [min, max] range contains monthly_volume.

        A miss can only happen for a fractional volume between two whole-unit
        bounds (e.g. 1000.50). It falls back to the lowest tier unless
        fallback_to_first_tier is disabled.
        """
        volume = to_decimal(monthly_volume)
        self.input_validator.validate_monthly_volume(volume)
        return self._resolve(volume, self._tiers)

    def calculate_fee(self, amount, monthly_volume) -> FeeResult:
        """
        Calculate the platform fee for one transaction.

        fee = max(amount × tier rate, minimum fee), rounded to cents
        net = amount - fee (may be negative when amount < minimum fee)
        """
        amount = to_decimal(amount)
        volume = to_decimal(monthly_volume)
        self.input_validator.validate_amount(amount)
        self.input_validator.validate_monthly_volume(volume)

        tier = self._resolve(volume, self._tiers)
        raw_fee = amount * tier.fee_percentage
        minimum_applied = raw_fee < self.minimum_fee
        fee_amount = quantize_money(max(raw_fee, self.minimum_fee))

        return FeeResult(
            amount=amount,
            fee_amount=fee_amount,
            fee_percentage=tier.fee_percentage,
            tier_name=tier.name,
            net_amount=amount - fee_amount,
            minimum_fee_applied=minimum_applied,
        )

    def tier_progress(self, monthly_volume) -> TierProgress:
        """
        Report the current tier and how much more volume reaches the next one.

        The next tier is always the one after the current tier in the table.
        A fractional volume in a whole-unit seam that fell back to the lowest
        tier already clears the next tier's minimum, so it reports 0 to go.
        """
        volume = to_decimal(monthly_volume)
        self.input_validator.validate_monthly_volume(volume)

        tiers = self._tiers
        current = self._resolve(volume, tiers)
        position = tiers.index(current)
        if position == len(tiers) - 1:
            return TierProgress(monthly_volume=volume, current_tier=current)

        next_tier = tiers[position + 1]
        return TierProgress(
            monthly_volume=volume,
            current_tier=current,
            next_tier=next_tier,
            volume_to_next_tier=max(Decimal("0"), next_tier.monthly_volume_min - volume),
        )

    def _resolve(self, volume: Decimal, tiers: tuple[CommissionTier, ...]) -> CommissionTier:
        for tier in tiers:
            if tier.contains(volume):
                return tier

        if not self.fallback_to_first_tier:
            raise TierLookupError(f"No tier matches monthly volume {volume}")

        logger.warning(f"No tier matches monthly volume {volume}; defaulting to '{tiers[0].name}'")
        return tiers[0]
