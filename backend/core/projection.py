from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple

from backend.models import (
    ContributionInterval,
    InvestmentStrategy,
    ProjectionInputs,
    ProjectionResult,
    SavingsSnapshot,
    WithdrawalType,
    YearRecord,
)

logger = logging.getLogger(__name__)

STRATEGY_SPREAD = 0.03
WORST_CASE_FLOOR = 0.02

_INTERVAL_MULTIPLIERS = {
    ContributionInterval.ANNUALLY: 1,
    ContributionInterval.QUARTERLY: 4,
    ContributionInterval.MONTHLY: 12,
}


def interval_multiplier(interval: ContributionInterval) -> int:
    """How many contributions of this interval land in one year."""
    return _INTERVAL_MULTIPLIERS[ContributionInterval(interval)]


def effective_return_rate(return_rate: float, strategy: InvestmentStrategy) -> float:
    """
    Apply the strategy perturbation once; the result holds for every year.

      Worst Case: return - 3%, but never below 2%
      Best Case:  return + 3%
      Balanced:   return unchanged
    """
    strategy = InvestmentStrategy(strategy)
    if strategy == InvestmentStrategy.WORST_CASE:
        return max(return_rate - STRATEGY_SPREAD, WORST_CASE_FLOOR)
    elif strategy == InvestmentStrategy.BEST_CASE:
        return return_rate + STRATEGY_SPREAD
    else:  # BALANCED
        return return_rate


def withdrawal_for_year(inputs: ProjectionInputs, year: int, balance: float) -> float:
    """
    Withdrawal taken at the start of projection year `year` (0 before retirement).

    Inflation growth is measured from year 0 of the whole projection, not from
    the first retirement year. A fixed increase rate compounds from retirement.
    """
    age = inputs.currentAge + year
    if age < inputs.retirementAge:
        return 0.0

    if inputs.withdrawalType == WithdrawalType.PERCENTAGE:
        # nothing left to take a share of
        base = balance * inputs.withdrawalAmount if balance > 0 else 0.0
    else:
        base = inputs.withdrawalAmount

    if inputs.inflationAdjustedWithdrawal:
        return base * (1 + inputs.inflationRate) ** year
    if inputs.withdrawalIncreaseRate is not None:
        return base * (1 + inputs.withdrawalIncreaseRate) ** (age - inputs.retirementAge)
    return base


def summarize(
    records: Sequence[YearRecord], retirement_age: int
) -> Tuple[Optional[SavingsSnapshot], SavingsSnapshot]:
    """Return (retirement snapshot, end-of-life snapshot) from the emitted rows."""
    retirement: Optional[SavingsSnapshot] = None
    for record in records:
        if record.age == retirement_age:
            retirement = SavingsSnapshot(
                nominal=record.balance, adjusted=record.inflationAdjustedBalance
            )
            break

    last = records[-1]
    end_of_life = SavingsSnapshot(nominal=last.balance, adjusted=last.inflationAdjustedBalance)
    return retirement, end_of_life


def project(inputs: ProjectionInputs) -> ProjectionResult:
    """
    Build one row per age from currentAge..lifeExpectancy (inclusive).

    Order of operations (per year after the first):
      1) Add the normalized contribution (working years) and subtract the
         withdrawal (retirement years) at the START of the year.
      2) Apply GROWTH at the strategy-adjusted rate to the net balance.
      3) Deflate by cumulative inflation back to current-age dollars.

    Year 0 is the starting balance as-is: no flows, no growth. Nothing is
    rounded and negative balances are kept.
    """
    annual_contribution = inputs.contributionAmount * interval_multiplier(
        inputs.contributionInterval
    )
    rate = effective_return_rate(inputs.returnRate, inputs.investmentStrategy)

    balance = float(inputs.initialInvestment)
    records: List[YearRecord] = [
        YearRecord(
            age=inputs.currentAge,
            annualContribution=0.0,
            withdrawal=0.0,
            balance=balance,
            inflationAdjustedBalance=balance,
            inflationAdjustedWithdrawal=0.0,
        )
    ]

    for year in range(1, inputs.lifeExpectancy - inputs.currentAge + 1):
        age = inputs.currentAge + year
        is_retired = age >= inputs.retirementAge

        withdrawal = withdrawal_for_year(inputs, year, balance)
        contribution = 0.0 if is_retired else annual_contribution

        balance = (balance + contribution - withdrawal) * (1 + rate)

        price_level = (1 + inputs.inflationRate) ** year
        records.append(
            YearRecord(
                age=age,
                annualContribution=contribution,
                withdrawal=withdrawal,
                balance=balance,
                inflationAdjustedBalance=balance / price_level,
                inflationAdjustedWithdrawal=withdrawal / price_level,
            )
        )

    retirement, end_of_life = summarize(records, inputs.retirementAge)
    logger.debug(
        "Projected %d years at effective rate %.4f", len(records), rate
    )

    return ProjectionResult(
        yearlyResults=records,
        retirementSavings=retirement,
        endOfLifeSavings=end_of_life,
    )


__all__ = [
    "STRATEGY_SPREAD",
    "WORST_CASE_FLOOR",
    "interval_multiplier",
    "effective_return_rate",
    "withdrawal_for_year",
    "summarize",
    "project",
]
