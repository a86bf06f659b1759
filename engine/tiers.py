"""
Commission Tier Configuration

The default tier schedule by contractor monthly volume, and a loader for
tier tables kept in JSON files.

    Starter       $0 - $1,000          30%
    Growing       $1,001 - $5,000      25%
    Established   $5,001 - $15,000     20%
    Professional  $15,001 - $50,000    15%
    Enterprise    $50,001+             10%

Every transaction is charged at least MINIMUM_PLATFORM_FEE.
"""

import json
from decimal import Decimal
from pathlib import Path

from .models import CommissionTier

MINIMUM_PLATFORM_FEE = Decimal("1.00")

DEFAULT_COMMISSION_TIERS: tuple[CommissionTier, ...] = (
    CommissionTier(
        name="Starter",
        monthly_volume_min=Decimal("0"),
        monthly_volume_max=Decimal("1000"),
        fee_percentage=Decimal("0.30"),
        description="New contractors getting started",
    ),
    CommissionTier(
        name="Growing",
        monthly_volume_min=Decimal("1001"),
        monthly_volume_max=Decimal("5000"),
        fee_percentage=Decimal("0.25"),
        description="Building your client base",
    ),
    CommissionTier(
        name="Established",
        monthly_volume_min=Decimal("5001"),
        monthly_volume_max=Decimal("15000"),
        fee_percentage=Decimal("0.20"),
        description="Steady business growth",
    ),
    CommissionTier(
        name="Professional",
        monthly_volume_min=Decimal("15001"),
        monthly_volume_max=Decimal("50000"),
        fee_percentage=Decimal("0.15"),
        description="High-volume contractor",
    ),
    CommissionTier(
        name="Enterprise",
        monthly_volume_min=Decimal("50001"),
        monthly_volume_max=None,
        fee_percentage=Decimal("0.10"),
        description="Top-tier contractor",
    ),
)


def load_tiers(path: str | Path) -> tuple[CommissionTier, ...]:
    """
    Load a tier table from a JSON file.

    Accepts either a bare list of tier objects or {"tiers": [...]}.
    The table is not validated here; FeeCalculator does that on construction.
    """
    data = json.loads(Path(path).read_text())
    if isinstance(data, dict):
        data = data.get("tiers", [])
    if not isinstance(data, list):
        raise ValueError(f"Tier file {path} must contain a list of tiers")
    return tuple(CommissionTier.from_dict(t) for t in data)
