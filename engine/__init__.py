"""
PLATFORM FEE ENGINE
Tiered commission pricing for marketplace transactions
"""

from .calculators import FeeCalculator
from .models import CommissionTier, FeeRequest, FeeResult, TierProgress
from .processor import FeeProcessor
from .tiers import DEFAULT_COMMISSION_TIERS, MINIMUM_PLATFORM_FEE
from .validators import InvalidInputError, TierLookupError, TierTableError

__all__ = [
    'FeeCalculator',
    'FeeProcessor',
    'CommissionTier',
    'FeeRequest',
    'FeeResult',
    'TierProgress',
    'DEFAULT_COMMISSION_TIERS',
    'MINIMUM_PLATFORM_FEE',
    'InvalidInputError',
    'TierLookupError',
    'TierTableError',
]
