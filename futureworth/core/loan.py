"""Loan payoff projection with savings measured against a no-extras baseline."""

from __future__ import annotations

import logging

from futureworth.core.amortization import AmortizationTerms, amortize
from futureworth.core.ledger import find_milestones, fold_totals
from futureworth.schemas.amortization import LoanInput, LoanResult, LoanSavings

logger = logging.getLogger(__name__)


def loan_terms(request: LoanInput) -> AmortizationTerms:
    return AmortizationTerms(
        principal=request.amount,
        apr=request.apr,
        term_months=request.term_months,
        start_date=request.start_date,
        extra_monthly=request.extra_monthly,
        one_time_extra=request.one_time_extra,
        one_time_extra_period=request.one_time_period,
        monthly_fees=request.monthly_fees,
    )


def simulate_loan(request: LoanInput) -> LoanResult:
    """
    Amortize the loan as configured, then again with every extra payment
    disabled. The two runs are independent; savings are the differences in
    total interest and in schedule length, floored at zero.
    """
    terms = loan_terms(request)
    run = amortize(terms)
    baseline = amortize(terms.without_extras())

    totals = fold_totals(run.ledger, terms.principal)
    baseline_totals = fold_totals(baseline.ledger, terms.principal)
    savings = LoanSavings(
        interest_saved=max(0.0, baseline_totals.total_interest - totals.total_interest),
        periods_saved=max(0, len(baseline.ledger) - len(run.ledger)),
    )
    logger.debug(
        "loan run: %d periods, baseline %d, interest saved %.2f",
        len(run.ledger),
        len(baseline.ledger),
        savings.interest_saved,
    )

    return LoanResult(
        ledger=run.ledger,
        totals=totals,
        milestones=find_milestones(run.ledger, terms.principal),
        loan_amount=terms.principal,
        payment_pi=run.payment,
        savings=savings,
        baseline_totals=baseline_totals,
        baseline_milestones=find_milestones(baseline.ledger, terms.principal),
    )
