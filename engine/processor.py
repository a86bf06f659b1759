"""
Fee Processor - Main Orchestrator

Coordinates fee processing for API callers through discrete, testable steps.
"""

import json
from typing import Any, Dict

from .calculators import FeeCalculator
from .models import FeeQuote, FeeRequest, monthly_volume_from_dict
from .output import OutputBuilder
from .validators import InputValidator


class FeeProcessor:
    """
    Main orchestrator for fee processing.

    Pipeline:
    1. Validate Input
    2. Calculate Fee
    3. Calculate Tier Progress
    4. Build Output
    """

    def __init__(self, calculator: FeeCalculator | None = None):
        self.validator = InputValidator()
        self.calculator = calculator or FeeCalculator()
        self.output_builder = OutputBuilder(self.calculator.minimum_fee)

    def process(self, request: FeeRequest) -> FeeQuote:
        """
        Price a transaction.

        Args:
            request: FeeRequest with amount and monthly volume

        Returns:
            FeeQuote with fee, net and tier progress sections
        """
        # Step 1: Validate
        self.validator.validate(request)

        # Step 2: Fee for this transaction
        result = self.calculator.calculate_fee(request.amount, request.monthly_volume)

        # Step 3: Tier progress for the contractor
        progress = self.calculator.tier_progress(request.monthly_volume)

        # Step 4: Build output
        return self.output_builder.build(request, result, progress)

    def process_from_dict(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Process a fee request from raw dictionary input.

        Convenience method for API usage.
        """
        request = FeeRequest.from_dict(data)
        quote = self.process(request)
        return {
            "transaction": quote.transaction,
            "fee": quote.fee,
            "tier_progress": quote.tier_progress,
        }

    def tier_progress_from_dict(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Tier progress for {"monthly_volume": ...} or {"contractorMonthlyVolume": ...}."""
        if not isinstance(data, dict):
            raise TypeError(f"Tier progress request must be a JSON object, got: {type(data).__name__}")
        volume = monthly_volume_from_dict(data)
        if volume is None:
            raise KeyError("monthly_volume")
        progress = self.calculator.tier_progress(volume)
        return self.output_builder.build_tier_progress(progress)

    def tier_schedule(self) -> Dict[str, Any]:
        """The tier table currently in effect, with the minimum fee."""
        return self.output_builder.build_schedule(self.calculator.tiers)


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================

def process_fee_from_dict(input_data: Dict[str, Any]) -> Dict[str, Any]:
    """Process a fee request from Python dict using the default tiers."""
    processor = FeeProcessor()
    return processor.process_from_dict(input_data)


def process_fee_from_json(json_input: str) -> str:
    """
    Process a fee request from JSON string input and return JSON string output.
    """
    try:
        input_data = json.loads(json_input)
        processor = FeeProcessor()
        result = processor.process_from_dict(input_data)
        return json.dumps(result, indent=2)

    except (ValueError, KeyError, TypeError) as e:
        error_response = {"error": str(e), "status": "validation_failed"}
        return json.dumps(error_response, indent=2)

    except Exception as e:
        error_response = {"error": str(e), "status": "failed"}
        return json.dumps(error_response, indent=2)
