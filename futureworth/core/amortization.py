"""Level-payment amortization stepper shared by the mortgage and loan engines."""

from __future__ import annotations

import datetime as dt
import logging
from dataclasses import dataclass, field
from typing import List, Optional

from futureworth.core.calendar import add_months
from futureworth.core.ledger import BALANCE_EPSILON
from futureworth.core.payments import cap_principal, level_payment
from futureworth.core.rates import monthly_nominal_rate
from futureworth.schemas.common import LedgerEntry, Phase

logger = logging.getLogger(__name__)

# Extra periods allowed past the scheduled term before giving up on payoff.
HORIZON_SLACK = 600


@dataclass(frozen=True)
class AmortizationTerms:
    principal: float
    apr: float
    term_months: int
    start_date: dt.date
    extra_monthly: float = 0.0
    one_time_extra: float = 0.0
    one_time_extra_period: int = 0
    monthly_fees: float = 0.0
    monthly_escrow: float = 0.0
    monthly_pmi: float = 0.0
    pmi_cutoff: Optional[float] = None

    def without_extras(self) -> "AmortizationTerms":
        return AmortizationTerms(
            principal=self.principal,
            apr=self.apr,
            term_months=self.term_months,
            start_date=self.start_date,
            monthly_fees=self.monthly_fees,
            monthly_escrow=self.monthly_escrow,
            monthly_pmi=self.monthly_pmi,
            pmi_cutoff=self.pmi_cutoff,
        )

    @property
    def horizon(self) -> int:
        return self.term_months + HORIZON_SLACK


@dataclass
class AmortizationRun:
    payment: float
    ledger: List[LedgerEntry] = field(default_factory=list)
    pmi_cancellation_period: Optional[int] = None


def _extra_for(terms: AmortizationTerms, period: int) -> float:
    extra = terms.extra_monthly
    if terms.one_time_extra > 0 and terms.one_time_extra_period == period:
        extra += terms.one_time_extra
    return extra


def amortize(terms: AmortizationTerms) -> AmortizationRun:
    """
    Step a level-payment loan month by month until the balance reaches zero
    or ``term_months + 600`` periods have elapsed.

    Per period:
      1) interest accrues on the beginning balance;
      2) scheduled principal is ``payment - interest``, extra is the recurring
         amount plus any one-time amount due this period;
      3) principal applied is capped to the beginning balance, extra first;
      4) escrow, fees and PMI are period costs that leave the balance alone.

    PMI is charged while the beginning balance is above ``pmi_cutoff``. The
    period whose payment brings the balance to or below the cutoff is the
    last one charged and is reported as ``pmi_cancellation_period``.
    """
    payment = level_payment(terms.principal, terms.apr, terms.term_months)
    run = AmortizationRun(payment=payment)
    if terms.principal <= 0 or terms.term_months <= 0:
        return run

    rate = monthly_nominal_rate(terms.apr)
    balance = float(terms.principal)
    period = 0

    while balance > 0 and period < terms.horizon:
        period += 1
        interest = balance * rate
        scheduled, extra = cap_principal(balance, payment - interest, _extra_for(terms, period))

        ending = balance - scheduled - extra
        if ending < BALANCE_EPSILON:
            # fold the sub-cent residual into principal so the balance closes at zero
            scheduled += ending
            ending = 0.0

        insurance = 0.0
        if terms.pmi_cutoff is not None and terms.monthly_pmi > 0 and balance > terms.pmi_cutoff:
            insurance = terms.monthly_pmi
            if run.pmi_cancellation_period is None and ending <= terms.pmi_cutoff:
                run.pmi_cancellation_period = period

        total = scheduled + extra + interest + terms.monthly_fees + terms.monthly_escrow + insurance
        run.ledger.append(
            LedgerEntry(
                period=period,
                date=add_months(terms.start_date, period - 1),
                phase=Phase.REPAYMENT,
                beginning_balance=balance,
                principal=scheduled,
                extra=extra,
                interest=interest,
                fees=terms.monthly_fees,
                escrow=terms.monthly_escrow,
                insurance=insurance,
                ending_balance=ending,
                real_balance=ending,
                total_cash_flow=total,
            )
        )
        balance = ending

    if balance > 0:
        logger.warning(
            "amortization did not pay off within %d periods; %.2f outstanding",
            terms.horizon,
            balance,
        )
    else:
        logger.debug("amortization paid off after %d periods", period)
    return run
