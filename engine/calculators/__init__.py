"""
Calculators Package

Provides the fee calculation components.
"""

from .fees import FeeCalculator, quantize_money

__all__ = [
    "FeeCalculator",
    "quantize_money",
]
