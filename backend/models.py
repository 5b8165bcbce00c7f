from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ContributionInterval(str, Enum):
    ANNUALLY = "annually"
    QUARTERLY = "quarterly"
    MONTHLY = "monthly"


class InvestmentStrategy(str, Enum):
    WORST_CASE = "Worst Case"
    BEST_CASE = "Best Case"
    BALANCED = "Balanced"


class WithdrawalType(str, Enum):
    AMOUNT = "amount"
    PERCENTAGE = "percentage"


class ProjectionInputs(BaseModel):
    """
    Everything one projection run needs. Rates are fractions (0.07 = 7%).

    Age ordering is checked by the validation stage, not here, so the engine
    can still be called directly on any well-shaped value.
    """

    model_config = ConfigDict(extra="forbid", frozen=True, allow_inf_nan=False)

    currentAge: int
    retirementAge: int
    lifeExpectancy: int

    returnRate: float
    inflationRate: float

    initialInvestment: float = Field(ge=0)
    contributionAmount: float = Field(ge=0)
    contributionInterval: ContributionInterval = ContributionInterval.ANNUALLY

    withdrawalAmount: float = Field(ge=0)
    inflationAdjustedWithdrawal: bool = False
    investmentStrategy: InvestmentStrategy = InvestmentStrategy.BALANCED

    # withdrawalAmount is a fraction of the start-of-year balance when PERCENTAGE
    withdrawalType: WithdrawalType = WithdrawalType.AMOUNT
    # fixed yearly raise, compounded from retirement start
    withdrawalIncreaseRate: Optional[float] = None


class YearRecord(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    age: int
    annualContribution: float
    withdrawal: float
    balance: float
    inflationAdjustedBalance: float
    inflationAdjustedWithdrawal: float = 0.0


class SavingsSnapshot(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    nominal: float
    adjusted: float


class ProjectionResult(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    yearlyResults: List[YearRecord]
    retirementSavings: Optional[SavingsSnapshot] = None
    endOfLifeSavings: SavingsSnapshot
