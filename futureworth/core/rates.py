"""Annual-rate to per-month rate conversion."""

from __future__ import annotations

from enum import Enum

from futureworth.core.errors import InvalidInputError


class Compounding(str, Enum):
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    ANNUAL = "annual"
    DAILY = "daily"

    @property
    def periods_per_year(self) -> int:
        return _PERIODS_PER_YEAR[self]


_PERIODS_PER_YEAR = {
    Compounding.MONTHLY: 12,
    Compounding.QUARTERLY: 4,
    Compounding.ANNUAL: 1,
    Compounding.DAILY: 365,
}


def monthly_effective_rate(annual_rate_pct: float, compounding: Compounding | str = Compounding.MONTHLY) -> float:
    """
    Effective monthly rate equivalent to a nominal annual rate compounded
    ``compounding.periods_per_year`` times a year:

        (1 + f) ** 12 == (1 + r / m) ** m
    """
    try:
        cadence = Compounding(compounding)
    except ValueError as exc:
        raise InvalidInputError([f"unknown compounding cadence: {compounding!r}"]) from exc

    if annual_rate_pct == 0:
        return 0.0
    m = cadence.periods_per_year
    r = annual_rate_pct / 100.0
    return (1.0 + r / m) ** (m / 12.0) - 1.0


def monthly_nominal_rate(apr_pct: float) -> float:
    """Periodic rate used by level-payment amortization (APR / 12)."""
    return apr_pct / 100.0 / 12.0


def monthly_inflation_factor(inflation_pct: float) -> float:
    # exactly 1.0 so zero inflation leaves real == nominal bit-for-bit
    if inflation_pct <= 0:
        return 1.0
    return (1.0 + inflation_pct / 100.0) ** (1.0 / 12.0)
