"""
Input Validation for the Platform Fee Engine

Validates transaction inputs and tier tables before any fee is computed.
Raises ValueError subclasses with clear messages for any constraint violation.
"""

import logging
from decimal import Decimal
from typing import Iterable

from .models import CommissionTier, FeeRequest

logger = logging.getLogger(__name__)

# Largest amount or volume accepted; keeps cent rounding inside the default 28-digit context
MAX_MONETARY_VALUE = Decimal("1e15")


class FeeEngineError(ValueError):
    """Base class for all fee engine errors."""


class InvalidInputError(FeeEngineError):
    """A transaction amount or monthly volume the engine cannot price."""


class TierTableError(FeeEngineError):
    """The configured tier table is empty, overlapping, gapped or out of range."""


class TierLookupError(RuntimeError):
    """No tier matched a monthly volume and fallback is disabled."""


class InputValidator:
    """Validates fee requests according to business rules."""

    def validate(self, request: FeeRequest) -> None:
        """
        Run all validations. Raises InvalidInputError if any check fails.
        """
        self.validate_amount(request.amount)
        self.validate_monthly_volume(request.monthly_volume)

    def validate_amount(self, amount: Decimal) -> None:
        if not amount.is_finite():
            raise InvalidInputError(f"amount must be a finite number, got: {amount}")
        if amount < 0:
            raise InvalidInputError(f"amount cannot be negative, got: {amount}")
        if amount > MAX_MONETARY_VALUE:
            raise InvalidInputError(f"amount cannot exceed {MAX_MONETARY_VALUE:,f}, got: {amount}")

    def validate_monthly_volume(self, monthly_volume: Decimal) -> None:
        if not monthly_volume.is_finite():
            raise InvalidInputError(f"monthly_volume must be a finite number, got: {monthly_volume}")
        if monthly_volume < 0:
            raise InvalidInputError(f"monthly_volume cannot be negative, got: {monthly_volume}")
        if monthly_volume > MAX_MONETARY_VALUE:
            raise InvalidInputError(
                f"monthly_volume cannot exceed {MAX_MONETARY_VALUE:,f}, got: {monthly_volume}"
            )


class TierTableValidator:
    """Checks a tier table once, at construction or reload time."""

    def validate(self, tiers: Iterable[CommissionTier]) -> tuple[CommissionTier, ...]:
        """
        Validate and return the table sorted by monthly_volume_min.

        Tiers must be contiguous on whole volume units
        (tier[i].max + 1 == tier[i+1].min), with exactly one unbounded tier
        and that tier last.
        """
        tiers = tuple(tiers)
        if not tiers:
            raise TierTableError("Tier table cannot be empty")

        # NaN bounds cannot be compared, so check before sorting
        for tier in tiers:
            self._validate_finite(tier)
        ordered = tuple(sorted(tiers, key=lambda t: t.monthly_volume_min))

        self._validate_names(ordered)
        for tier in ordered:
            self._validate_tier(tier)
        self._validate_contiguity(ordered)
        self._check_rate_order(ordered)

        return ordered

    def _validate_finite(self, tier: CommissionTier) -> None:
        values = {
            "monthly_volume_min": tier.monthly_volume_min,
            "monthly_volume_max": tier.monthly_volume_max,
            "fee_percentage": tier.fee_percentage,
        }
        for field_name, value in values.items():
            if value is not None and not value.is_finite():
                raise TierTableError(f"Tier '{tier.name}' {field_name} must be a finite number, got: {value}")

    def _validate_names(self, tiers: tuple[CommissionTier, ...]) -> None:
        seen = set()
        for tier in tiers:
            if not tier.name:
                raise TierTableError("Tier name cannot be empty")
            if tier.name in seen:
                raise TierTableError(f"Duplicate tier name: {tier.name}")
            seen.add(tier.name)

    def _validate_tier(self, tier: CommissionTier) -> None:
        if tier.monthly_volume_min < 0:
            raise TierTableError(
                f"Tier '{tier.name}' monthly_volume_min cannot be negative, got: {tier.monthly_volume_min}"
            )
        if tier.monthly_volume_max is not None and tier.monthly_volume_max < tier.monthly_volume_min:
            raise TierTableError(
                f"Tier '{tier.name}' monthly_volume_max ({tier.monthly_volume_max}) "
                f"is below monthly_volume_min ({tier.monthly_volume_min})"
            )
        if not (0 <= tier.fee_percentage <= 1):
            raise TierTableError(
                f"Tier '{tier.name}' fee_percentage must be between 0 and 1, got: {tier.fee_percentage}"
            )

    def _validate_contiguity(self, tiers: tuple[CommissionTier, ...]) -> None:
        unbounded = [t.name for t in tiers if t.is_unbounded]
        if len(unbounded) != 1:
            raise TierTableError(f"Exactly one tier must be unbounded, found: {unbounded or 'none'}")
        if not tiers[-1].is_unbounded:
            raise TierTableError(f"Unbounded tier '{unbounded[0]}' must be the highest tier")

        for current, following in zip(tiers, tiers[1:]):
            expected_min = current.monthly_volume_max + 1
            if following.monthly_volume_min != expected_min:
                kind = "Gap" if following.monthly_volume_min > expected_min else "Overlap"
                raise TierTableError(
                    f"{kind} between tiers '{current.name}' (max {current.monthly_volume_max}) "
                    f"and '{following.name}' (min {following.monthly_volume_min})"
                )

    def _check_rate_order(self, tiers: tuple[CommissionTier, ...]) -> None:
        # Higher volume is meant to earn an equal or lower rate; not enforced.
        for current, following in zip(tiers, tiers[1:]):
            if following.fee_percentage > current.fee_percentage:
                logger.warning(
                    f"Tier '{following.name}' charges {following.fee_percentage} which is above "
                    f"lower-volume tier '{current.name}' ({current.fee_percentage})"
                )
