"""Level-payment formula and the flow-capping primitives shared by all engines."""

from __future__ import annotations

from typing import Tuple

from futureworth.core.rates import monthly_nominal_rate


def level_payment(principal: float, apr_pct: float, term_months: int) -> float:
    """
    Fixed principal & interest payment that repays ``principal`` over
    ``term_months`` at ``apr_pct / 12`` per month.

    Returns ``principal / n`` for a zero rate and ``0`` for a non-positive term.
    """
    if term_months <= 0:
        return 0.0
    r = monthly_nominal_rate(apr_pct)
    if r == 0:
        return principal / term_months
    growth = (1.0 + r) ** term_months
    return principal * (r * growth) / (growth - 1.0)


def cap_principal(balance: float, scheduled: float, extra: float) -> Tuple[float, float]:
    """
    Cap the principal applied in one period to the beginning ``balance``.

    Extra principal is reduced first; the scheduled portion is only cut once
    the extra is already zero. Returns ``(scheduled, extra)``.
    """
    scheduled = max(0.0, scheduled)
    extra = max(0.0, extra)
    if scheduled + extra <= balance:
        return scheduled, extra
    extra = max(0.0, min(extra, balance - scheduled))
    scheduled = max(0.0, balance - extra)
    return scheduled, extra


def cap_withdrawal(balance: float, desired: float) -> float:
    return min(max(desired, 0.0), max(balance, 0.0))


def rate_sensitivity(principal: float, apr_pct: float, term_months: int) -> Tuple[float, float, float]:
    """Level payment one point below, at, and one point above ``apr_pct``."""
    return (
        level_payment(principal, max(apr_pct - 1.0, 0.0), term_months),
        level_payment(principal, apr_pct, term_months),
        level_payment(principal, apr_pct + 1.0, term_months),
    )
