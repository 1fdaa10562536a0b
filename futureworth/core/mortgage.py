"""Mortgage projection: amortization plus escrow and PMI overlays."""

from __future__ import annotations

from futureworth.core.amortization import AmortizationTerms, amortize
from futureworth.core.ledger import find_milestones, fold_totals
from futureworth.core.payments import rate_sensitivity
from futureworth.schemas.amortization import EscrowBreakdown, MortgageInput, MortgageResult, RateSensitivity

# PMI is charged while the balance is above this share of the purchase price.
PMI_LTV_CUTOFF = 0.80


def mortgage_terms(request: MortgageInput) -> AmortizationTerms:
    escrow = _escrow(request)
    return AmortizationTerms(
        principal=request.loan_amount,
        apr=request.apr,
        term_months=request.term_months,
        start_date=request.start_date,
        extra_monthly=request.extra_monthly,
        one_time_extra=request.one_time_extra,
        one_time_extra_period=request.one_time_period,
        monthly_escrow=escrow.tax_monthly + escrow.insurance_monthly + escrow.hoa_monthly,
        monthly_pmi=escrow.pmi_monthly,
        pmi_cutoff=PMI_LTV_CUTOFF * request.price,
    )


def _escrow(request: MortgageInput) -> EscrowBreakdown:
    return EscrowBreakdown(
        tax_monthly=request.price * (request.tax_rate / 100.0) / 12.0,
        insurance_monthly=request.insurance_annual / 12.0,
        hoa_monthly=request.hoa_monthly,
        pmi_monthly=request.pmi_rate / 100.0 * request.loan_amount / 12.0,
    )


def simulate_mortgage(request: MortgageInput) -> MortgageResult:
    """Build the monthly amortization schedule for a home purchase."""
    terms = mortgage_terms(request)
    run = amortize(terms)

    lower, base, upper = rate_sensitivity(terms.principal, request.apr, request.term_months)
    first = run.ledger[0] if run.ledger else None

    return MortgageResult(
        ledger=run.ledger,
        totals=fold_totals(run.ledger, terms.principal),
        milestones=find_milestones(run.ledger, terms.principal, run.pmi_cancellation_period),
        loan_amount=terms.principal,
        down_payment_percent=(request.down_payment / request.price * 100.0) if request.price > 0 else 0.0,
        payment_pi=run.payment,
        first_payment_total=first.total_cash_flow if first else 0.0,
        escrow=_escrow(request),
        rate_sensitivity=RateSensitivity(lower=lower, base=base, upper=upper),
    )
