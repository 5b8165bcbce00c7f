"""Turn user-typed text into numbers before anything is projected."""

from __future__ import annotations

import math
from typing import Any, Optional

_STRIP_CHARS = ("$", ",")


class InputParseError(ValueError):
    """Raised when a raw form value cannot be read as a number."""

    def __init__(self, message: str, field: Optional[str] = None, raw: Any = None):
        super().__init__(message)
        self.field = field
        self.raw = raw


def parse_number(raw: Any, field: Optional[str] = None) -> float:
    """Parse text such as '$1,000.50' into 1000.5.

    Currency symbols and thousands separators are dropped; anything else that
    is not a finite number raises InputParseError.
    """
    label = f" for {field}" if field else ""

    if isinstance(raw, bool):
        raise InputParseError(f"Invalid number input{label}: {raw!r}", field, raw)
    if isinstance(raw, (int, float)):
        value = float(raw)
    else:
        text = str(raw).strip() if raw is not None else ""
        for char in _STRIP_CHARS:
            text = text.replace(char, "")
        try:
            value = float(text)
        except ValueError:
            raise InputParseError(f"Invalid number input{label}: {raw!r}", field, raw) from None

    if not math.isfinite(value):
        raise InputParseError(f"Invalid number input{label}: {raw!r}", field, raw)
    return value


def parse_age(raw: Any, field: Optional[str] = None) -> int:
    """Parse a whole number of years."""
    value = parse_number(raw, field)
    if not value.is_integer():
        label = f" for {field}" if field else ""
        raise InputParseError(f"Invalid number input{label}: {raw!r} is not a whole number", field, raw)
    return int(value)
