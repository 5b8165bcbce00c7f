from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import List, Optional

from backend.config import Settings
from backend.core.projection import effective_return_rate, interval_multiplier, project
from backend.models import ProjectionInputs, ProjectionResult, WithdrawalType

logger = logging.getLogger(__name__)

DEFAULT_MAX_YEARS = Settings.model_fields["max_projection_years"].default

# stays well inside float range (~1e308) so every row serializes as a number
MAX_MAGNITUDE_DIGITS = 300


class ProjectionValidationError(ValueError):
    def __init__(self, errors: List[str]):
        super().__init__("; ".join(errors))
        self.errors = errors


@dataclass
class PreparationResult:
    inputs: Optional[ProjectionInputs]
    errors: List[str]


def magnitude_digits(inputs: ProjectionInputs) -> float:
    """
    Upper bound on log10 of any value a projection could produce.

    Per year a balance can be scaled by (1 + return), by |1 - share| for
    percentage withdrawals, and by 1 / (1 + inflation) when deflated; growing
    withdrawals scale by (1 + inflation) or (1 + increase).
    """
    span = max(inputs.lifeExpectancy - inputs.currentAge, 0)
    if span == 0:
        return 0.0

    flows = max(
        inputs.initialInvestment,
        inputs.contributionAmount * interval_multiplier(inputs.contributionInterval),
        inputs.withdrawalAmount,
        1.0,
    )
    scale = math.log10(flows) + math.log10(span + 1)

    rate = effective_return_rate(inputs.returnRate, inputs.investmentStrategy)
    per_year = math.log10(max(abs(1 + rate), 1.0))
    if inputs.withdrawalType == WithdrawalType.PERCENTAGE:
        per_year += math.log10(max(abs(1 - inputs.withdrawalAmount), 1.0))

    withdrawal_growth = max(inputs.inflationRate, inputs.withdrawalIncreaseRate or 0.0, 0.0)
    per_year += math.log10(1 + withdrawal_growth)
    # deflating by a shrinking price level inflates real values
    per_year += max(-math.log10(1 + inputs.inflationRate), 0.0)

    return scale + span * per_year


def validate_inputs(inputs: ProjectionInputs, max_years: int = DEFAULT_MAX_YEARS) -> List[str]:
    """Collect every reason this configuration cannot be projected."""
    errors: List[str] = []

    if inputs.currentAge < 0:
        errors.append("currentAge must not be negative")
    if inputs.currentAge > inputs.retirementAge:
        errors.append("currentAge must not be greater than retirementAge")
    if inputs.retirementAge > inputs.lifeExpectancy:
        errors.append("retirementAge must not be greater than lifeExpectancy")

    span = inputs.lifeExpectancy - inputs.currentAge
    if span > max_years:
        errors.append(f"projection spans {span} years, limit is {max_years}")

    if inputs.returnRate <= -1:
        errors.append("returnRate must be greater than -100%")
    if inputs.inflationRate <= -1:
        errors.append("inflationRate must be greater than -100%")
    if inputs.withdrawalIncreaseRate is not None and inputs.withdrawalIncreaseRate <= -1:
        errors.append("withdrawalIncreaseRate must be greater than -100%")

    if inputs.inflationAdjustedWithdrawal and inputs.withdrawalIncreaseRate is not None:
        errors.append("choose either inflationAdjustedWithdrawal or withdrawalIncreaseRate, not both")

    # rates must already be above -100% for the bound to be defined
    if not errors and magnitude_digits(inputs) > MAX_MAGNITUDE_DIGITS:
        errors.append("rates compound beyond a representable amount over this span")

    return errors


def prepare_projection(inputs: ProjectionInputs, max_years: int = DEFAULT_MAX_YEARS) -> PreparationResult:
    errors = validate_inputs(inputs, max_years)
    if errors:
        return PreparationResult(inputs=None, errors=errors)
    return PreparationResult(inputs=inputs, errors=[])


def run_projection(inputs: ProjectionInputs, max_years: int = DEFAULT_MAX_YEARS) -> ProjectionResult:
    """Validate, then project. The engine is never called on a bad range."""
    preparation = prepare_projection(inputs, max_years)
    if preparation.errors or preparation.inputs is None:
        logger.warning("Rejected projection inputs: %s", "; ".join(preparation.errors))
        raise ProjectionValidationError(preparation.errors)

    result = project(preparation.inputs)
    logger.info(
        "Projection ages %d-%d (%s): end-of-life balance %.2f",
        inputs.currentAge,
        inputs.lifeExpectancy,
        inputs.investmentStrategy.value,
        result.endOfLifeSavings.nominal,
    )
    return result
