from __future__ import annotations

from math import isclose

from conftest import make_inputs

from backend.core.projection import project, withdrawal_for_year
from backend.models import WithdrawalType


def test_no_withdrawal_before_retirement(scenario_a):
    assert withdrawal_for_year(scenario_a, year=10, balance=1e6) == 0.0
    assert withdrawal_for_year(scenario_a, year=35, balance=1e6) == 50000.0


def test_flat_withdrawal_without_inflation_adjustment(scenario_a):
    rows = project(scenario_a).yearlyResults
    retired = [row.withdrawal for row in rows if row.age >= scenario_a.retirementAge]

    assert set(retired) == {50000.0}


def test_percentage_withdrawal_takes_share_of_balance():
    inputs = make_inputs(
        currentAge=60,
        retirementAge=60,
        lifeExpectancy=62,
        returnRate=0.0,
        inflationRate=0.0,
        initialInvestment=1000.0,
        contributionAmount=0.0,
        withdrawalAmount=0.10,
        withdrawalType=WithdrawalType.PERCENTAGE,
    )
    rows = project(inputs).yearlyResults

    assert isclose(rows[1].withdrawal, 100.0)
    assert isclose(rows[1].balance, 900.0)
    assert isclose(rows[2].withdrawal, 90.0)
    assert isclose(rows[2].balance, 810.0)


def test_percentage_withdrawal_stops_when_depleted():
    inputs = make_inputs(withdrawalAmount=0.5, withdrawalType=WithdrawalType.PERCENTAGE)
    assert withdrawal_for_year(inputs, year=40, balance=-10.0) == 0.0


def test_fixed_increase_compounds_from_retirement():
    inputs = make_inputs(
        currentAge=60,
        retirementAge=61,
        lifeExpectancy=63,
        returnRate=0.0,
        inflationRate=0.0,
        initialInvestment=10000.0,
        contributionAmount=0.0,
        withdrawalAmount=100.0,
        withdrawalIncreaseRate=0.10,
    )
    rows = project(inputs).yearlyResults

    assert [round(row.withdrawal, 6) for row in rows] == [0.0, 100.0, 110.0, 121.0]
    assert isclose(rows[-1].balance, 10000.0 - 100.0 - 110.0 - 121.0)
