"""Read-only views of a projection for tables and charts."""

from __future__ import annotations

from typing import Dict, List

from pydantic import BaseModel

from backend.models import ProjectionResult


class ChartSeries(BaseModel):
    """Age labels plus the balance and withdrawal lines, nominal and real."""

    labels: List[int]
    balance: List[float]
    inflationAdjustedBalance: List[float]
    withdrawal: List[float]
    inflationAdjustedWithdrawal: List[float]


def format_currency(value: float, abbreviate: bool = False) -> str:
    """
    $1,000.00 style by default. With abbreviate:
      >= 1,000,000 -> $1.0M
      >= 1,000     -> $1.5K
    """
    magnitude = abs(value)

    # thresholds compare the rounded figure, so 999,999 reads $1.0M not $1000.0K
    if abbreviate and round(magnitude / 1_000, 1) >= 1_000:
        text = f"${magnitude / 1_000_000:.1f}M"
    elif abbreviate and round(magnitude, 2) >= 1_000:
        text = f"${magnitude / 1_000:.1f}K"
    else:
        text = f"${magnitude:,.2f}"

    # no sign on amounts that display as zero
    if value < 0 and any(digit in text for digit in "123456789"):
        text = "-" + text
    return text


def chart_series(result: ProjectionResult) -> ChartSeries:
    rows = result.yearlyResults
    return ChartSeries(
        labels=[row.age for row in rows],
        balance=[row.balance for row in rows],
        inflationAdjustedBalance=[row.inflationAdjustedBalance for row in rows],
        withdrawal=[row.withdrawal for row in rows],
        inflationAdjustedWithdrawal=[row.inflationAdjustedWithdrawal for row in rows],
    )


def summary_text(result: ProjectionResult) -> Dict[str, str]:
    summary: Dict[str, str] = {
        "endOfLifeNominal": format_currency(result.endOfLifeSavings.nominal),
        "endOfLifeAdjusted": format_currency(result.endOfLifeSavings.adjusted),
    }
    if result.retirementSavings is not None:
        summary["retirementNominal"] = format_currency(result.retirementSavings.nominal)
        summary["retirementAdjusted"] = format_currency(result.retirementSavings.adjusted)
    return summary
