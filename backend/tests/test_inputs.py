from __future__ import annotations

from math import isclose

import pytest
from pydantic import ValidationError

from backend.core.parsing import InputParseError
from backend.domain.inputs import inputs_from_form
from backend.models import ContributionInterval, InvestmentStrategy, WithdrawalType


def form_payload() -> dict:
    return {
        "currentAge": "30",
        "retirementAge": "65",
        "lifeExpectancy": "90",
        "returnRate": "7",
        "inflationRate": "2",
        "initialInvestment": "$10,000",
        "contributionAmount": "416.67",
        "contributionInterval": "monthly",
        "withdrawalAmount": "$50,000",
        "inflationAdjustedWithdrawal": "yes",
        "investmentStrategy": "Best Case",
    }


def test_form_values_become_typed_inputs():
    inputs = inputs_from_form(form_payload())

    assert inputs.currentAge == 30
    assert inputs.lifeExpectancy == 90
    assert isclose(inputs.returnRate, 0.07)
    assert isclose(inputs.inflationRate, 0.02)
    assert inputs.initialInvestment == 10000.0
    assert inputs.withdrawalAmount == 50000.0
    assert inputs.contributionInterval == ContributionInterval.MONTHLY
    assert inputs.investmentStrategy == InvestmentStrategy.BEST_CASE
    assert inputs.inflationAdjustedWithdrawal is True
    assert inputs.withdrawalIncreaseRate is None


def test_optional_fields_fall_back_to_defaults():
    form = form_payload()
    for key in ("contributionInterval", "investmentStrategy", "inflationAdjustedWithdrawal"):
        form.pop(key)

    inputs = inputs_from_form(form)

    assert inputs.contributionInterval == ContributionInterval.ANNUALLY
    assert inputs.investmentStrategy == InvestmentStrategy.BALANCED
    assert inputs.inflationAdjustedWithdrawal is False
    assert inputs.withdrawalType == WithdrawalType.AMOUNT


def test_percentage_withdrawal_and_increase_are_entered_in_percent():
    form = form_payload()
    form.update(
        withdrawalType="percentage",
        withdrawalAmount="4",
        inflationAdjustedWithdrawal="off",
        withdrawalIncreaseRate="1.5",
    )

    inputs = inputs_from_form(form)

    assert isclose(inputs.withdrawalAmount, 0.04)
    assert isclose(inputs.withdrawalIncreaseRate, 0.015)


def test_non_numeric_text_is_rejected_before_projection():
    form = form_payload()
    form["returnRate"] = "seven"

    with pytest.raises(InputParseError, match="Invalid number input") as exc_info:
        inputs_from_form(form)
    assert exc_info.value.field == "returnRate"


def test_missing_field_is_named():
    form = form_payload()
    form.pop("lifeExpectancy")

    with pytest.raises(InputParseError, match="lifeExpectancy"):
        inputs_from_form(form)


def test_unknown_choice_is_rejected():
    form = form_payload()
    form["contributionInterval"] = "weekly"

    with pytest.raises(InputParseError, match="contributionInterval"):
        inputs_from_form(form)


def test_negative_amount_fails_model_constraints():
    form = form_payload()
    form["initialInvestment"] = "-5"

    with pytest.raises(ValidationError):
        inputs_from_form(form)
