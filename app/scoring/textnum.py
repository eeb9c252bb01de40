"""Free-form numeric fields ("minutesText", "pagesText", ...).

Daily logs store user-typed numbers as text; blank or missing means
"not entered". Every value goes through parse_numeric before it reaches
scoring, so raw text never flows further than this module.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class Absent:
    """Nothing entered (None, missing key, blank string)."""


@dataclass(frozen=True, slots=True)
class Invalid:
    """Something entered that is not a finite number."""

    raw: Any


@dataclass(frozen=True, slots=True)
class Value:
    number: float


ParsedNumber = Absent | Invalid | Value

ABSENT = Absent()


def parse_numeric(value: Any) -> ParsedNumber:
    """Trim → parse → finite check. Never raises."""
    if value is None:
        return ABSENT
    if isinstance(value, bool):
        return Invalid(value)
    if isinstance(value, (int, float)):
        return Value(float(value)) if math.isfinite(value) else Invalid(value)
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return ABSENT
        try:
            number = float(text)
        except ValueError:
            return Invalid(value)
        return Value(number) if math.isfinite(number) else Invalid(value)
    return Invalid(value)


def num_from_text(value: Any) -> float | None:
    parsed = parse_numeric(value)
    if isinstance(parsed, Value):
        return parsed.number
    return None


def int_from_text(value: Any) -> int | None:
    """Like num_from_text, truncated toward zero."""
    number = num_from_text(value)
    if number is None:
        return None
    return math.trunc(number)


def clamp_int(n: int, lo: int, hi: int) -> int:
    return max(lo, min(hi, n))


def format_score(n: float) -> str:
    """One decimal place, trailing '.0' dropped. Non-finite renders as '0'."""
    if not isinstance(n, (int, float)) or not math.isfinite(n):
        return "0"
    fixed = f"{n:.1f}"
    return fixed[:-2] if fixed.endswith(".0") else fixed
