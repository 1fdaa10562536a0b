"""Folds over a finished ledger: totals, milestones, yearly buckets."""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence

from futureworth.schemas.common import LedgerEntry, Milestones, Phase, RunTotals, YearlyBucket

# Residual balances below one cent are treated as paid off / depleted.
BALANCE_EPSILON = 0.01


def fold_totals(ledger: Sequence[LedgerEntry], opening_balance: float = 0.0) -> RunTotals:
    """Recompute every cumulative figure from the ledger alone."""
    totals = {
        "total_interest": 0.0,
        "total_principal": 0.0,
        "total_extra": 0.0,
        "total_contributions": 0.0,
        "total_withdrawals": 0.0,
        "total_fees": 0.0,
        "total_escrow": 0.0,
        "total_insurance": 0.0,
        "total_paid": 0.0,
    }
    for entry in ledger:
        totals["total_interest"] += entry.interest
        totals["total_principal"] += entry.principal + entry.extra
        totals["total_extra"] += entry.extra
        totals["total_contributions"] += entry.contribution
        totals["total_withdrawals"] += entry.withdrawal
        totals["total_fees"] += entry.fees
        totals["total_escrow"] += entry.escrow
        totals["total_insurance"] += entry.insurance
        totals["total_paid"] += entry.total_cash_flow

    final_balance = ledger[-1].ending_balance if ledger else max(opening_balance, 0.0)
    return RunTotals(periods=len(ledger), final_balance=final_balance, **totals)


def find_milestones(
    ledger: Sequence[LedgerEntry],
    opening_balance: float = 0.0,
    pmi_cancellation_period: Optional[int] = None,
) -> Milestones:
    """
    Derive payoff and depletion markers from the ledger.

    ``pmi_cancellation_period`` is the last period insurance was charged; the
    reported date is the first month without it.
    """
    payoff: Optional[LedgerEntry] = None
    depletion: Optional[LedgerEntry] = None
    for entry in ledger:
        if entry.ending_balance > 0:
            continue
        if entry.phase is Phase.REPAYMENT and payoff is None:
            payoff = entry
        elif entry.phase is Phase.DRAWDOWN and depletion is None:
            depletion = entry

    payoff_reached = payoff is not None or (not ledger and opening_balance <= 0)

    pmi_date = None
    if pmi_cancellation_period is not None and ledger:
        # a crossing payment that also pays off reports the payoff month
        pmi_date = ledger[min(pmi_cancellation_period, len(ledger) - 1)].date

    return Milestones(
        payoff_reached=payoff_reached,
        payoff_period=payoff.period if payoff else None,
        payoff_date=payoff.date if payoff else None,
        pmi_cancellation_period=pmi_cancellation_period,
        pmi_cancellation_date=pmi_date,
        depletion_period=depletion.period if depletion else None,
        depletion_date=depletion.date if depletion else None,
    )


_FLOW_FIELDS = (
    "contribution",
    "principal",
    "extra",
    "interest",
    "fees",
    "escrow",
    "insurance",
    "withdrawal",
    "total_cash_flow",
)


def aggregate_yearly(ledger: Sequence[LedgerEntry]) -> List[YearlyBucket]:
    buckets: Dict[int, dict] = {}
    for entry in ledger:
        year = entry.date.year
        bucket = buckets.get(year)
        if bucket is None:
            bucket = {
                "year": year,
                "periods": 0,
                "first_period": entry.period,
                "beginning_balance": entry.beginning_balance,
                **{name: 0.0 for name in _FLOW_FIELDS},
            }
            buckets[year] = bucket
        bucket["periods"] += 1
        bucket["last_period"] = entry.period
        bucket["ending_balance"] = entry.ending_balance
        bucket["real_balance"] = entry.real_balance
        for name in _FLOW_FIELDS:
            bucket[name] += getattr(entry, name)

    return [YearlyBucket(**bucket) for bucket in buckets.values()]
