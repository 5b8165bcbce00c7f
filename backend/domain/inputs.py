from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from backend.core.parsing import InputParseError, parse_age, parse_number
from backend.models import (
    ContributionInterval,
    InvestmentStrategy,
    ProjectionInputs,
    WithdrawalType,
)

AGE_FIELDS = ("currentAge", "retirementAge", "lifeExpectancy")
AMOUNT_FIELDS = ("initialInvestment", "contributionAmount")
# typed by the user as percents, e.g. "7" for 7%
PERCENT_FIELDS = ("returnRate", "inflationRate")

_TRUE = {"true", "yes", "on", "1"}
_FALSE = {"false", "no", "off", "0", ""}


def _required(form: Mapping[str, Any], field: str) -> Any:
    if field not in form or form[field] is None:
        raise InputParseError(f"Missing value for {field}", field, None)
    return form[field]


def _parse_flag(raw: Any, field: str) -> bool:
    if isinstance(raw, bool):
        return raw
    text = str(raw).strip().lower() if raw is not None else ""
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise InputParseError(f"Invalid yes/no input for {field}: {raw!r}", field, raw)


def _parse_choice(raw: Any, field: str, enum_cls, default):
    if raw is None or str(raw).strip() == "":
        return default
    try:
        return enum_cls(str(raw).strip())
    except ValueError:
        allowed = ", ".join(member.value for member in enum_cls)
        raise InputParseError(
            f"Invalid choice for {field}: {raw!r} (expected one of {allowed})", field, raw
        ) from None


def inputs_from_form(form: Mapping[str, Any]) -> ProjectionInputs:
    """
    Build ProjectionInputs from a flat mapping of raw form values.

    Numbers may carry '$' and ',' and percent fields are entered in percent.
    Raises InputParseError naming the first field that cannot be read.
    """
    values: Dict[str, Any] = {}

    for field in AGE_FIELDS:
        values[field] = parse_age(_required(form, field), field)
    for field in AMOUNT_FIELDS:
        values[field] = parse_number(_required(form, field), field)
    for field in PERCENT_FIELDS:
        values[field] = parse_number(_required(form, field), field) / 100

    values["contributionInterval"] = _parse_choice(
        form.get("contributionInterval"),
        "contributionInterval",
        ContributionInterval,
        ContributionInterval.ANNUALLY,
    )
    values["investmentStrategy"] = _parse_choice(
        form.get("investmentStrategy"),
        "investmentStrategy",
        InvestmentStrategy,
        InvestmentStrategy.BALANCED,
    )
    withdrawal_type = _parse_choice(
        form.get("withdrawalType"), "withdrawalType", WithdrawalType, WithdrawalType.AMOUNT
    )
    values["withdrawalType"] = withdrawal_type

    withdrawal = parse_number(_required(form, "withdrawalAmount"), "withdrawalAmount")
    if withdrawal_type == WithdrawalType.PERCENTAGE:
        withdrawal /= 100
    values["withdrawalAmount"] = withdrawal

    values["inflationAdjustedWithdrawal"] = _parse_flag(
        form.get("inflationAdjustedWithdrawal"), "inflationAdjustedWithdrawal"
    )

    increase_raw = form.get("withdrawalIncreaseRate")
    increase: Optional[float] = None
    if increase_raw is not None and str(increase_raw).strip() != "":
        increase = parse_number(increase_raw, "withdrawalIncreaseRate") / 100
    values["withdrawalIncreaseRate"] = increase

    return ProjectionInputs.model_validate(values)
