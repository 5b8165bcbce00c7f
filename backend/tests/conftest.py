"""Shared fixtures for the projection backend tests."""

from __future__ import annotations

import pytest
from flask.testing import FlaskClient

from backend.app import create_app
from backend.config import Settings
from backend.models import ContributionInterval, InvestmentStrategy, ProjectionInputs


@pytest.fixture()
def settings() -> Settings:
    return Settings(APP_ENV="testing", LOG_LEVEL="DEBUG", _env_file=None)


@pytest.fixture()
def client(settings) -> FlaskClient:
    app = create_app(settings)
    with app.test_client() as test_client:
        yield test_client


def make_inputs(**overrides) -> ProjectionInputs:
    """Scenario A from the calculator's own checks, with optional overrides."""
    values = {
        "currentAge": 30,
        "retirementAge": 65,
        "lifeExpectancy": 90,
        "returnRate": 0.07,
        "inflationRate": 0.02,
        "initialInvestment": 10000.0,
        "contributionAmount": 5000.0,
        "contributionInterval": ContributionInterval.ANNUALLY,
        "withdrawalAmount": 50000.0,
        "inflationAdjustedWithdrawal": False,
        "investmentStrategy": InvestmentStrategy.BALANCED,
    }
    values.update(overrides)
    return ProjectionInputs(**values)


@pytest.fixture()
def scenario_a() -> ProjectionInputs:
    return make_inputs()
