"""
Runtime settings read from the environment.

    ENVIRONMENT            dev / staging / prod (default: dev)
    PORT                   Flask port (default: 8080)
    COMMISSION_TIERS_FILE  optional JSON tier table replacing the defaults
    MINIMUM_PLATFORM_FEE   optional minimum fee per transaction, e.g. "1.00"
"""

import logging
import os
from dataclasses import dataclass
from decimal import Decimal

from .calculators import FeeCalculator
from .models import to_decimal
from .tiers import DEFAULT_COMMISSION_TIERS, MINIMUM_PLATFORM_FEE, load_tiers

logger = logging.getLogger(__name__)


@dataclass
class Settings:
    environment: str = "dev"
    port: int = 8080
    tiers_file: str | None = None
    minimum_fee: Decimal = MINIMUM_PLATFORM_FEE

    @classmethod
    def from_env(cls, environ=None) -> "Settings":
        env = os.environ if environ is None else environ
        minimum = env.get("MINIMUM_PLATFORM_FEE")
        return cls(
            environment=env.get("ENVIRONMENT", "dev"),
            port=int(env.get("PORT", 8080)),
            tiers_file=env.get("COMMISSION_TIERS_FILE") or None,
            minimum_fee=to_decimal(minimum) if minimum else MINIMUM_PLATFORM_FEE,
        )

    def build_calculator(self) -> FeeCalculator:
        """Create a FeeCalculator from these settings. Fails fast on a bad tier table."""
        tiers = DEFAULT_COMMISSION_TIERS
        if self.tiers_file:
            logger.info(f"Loading commission tiers from {self.tiers_file}")
            tiers = load_tiers(self.tiers_file)
        return FeeCalculator(tiers=tiers, minimum_fee=self.minimum_fee)
