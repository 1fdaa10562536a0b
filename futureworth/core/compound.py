"""Compound growth projection with start-of-period contributions."""

from __future__ import annotations

import logging
from typing import List

from futureworth.core.calendar import add_months
from futureworth.core.ledger import find_milestones, fold_totals
from futureworth.core.rates import monthly_effective_rate, monthly_inflation_factor
from futureworth.schemas.common import LedgerEntry, Phase
from futureworth.schemas.growth import CompoundInput, CompoundResult, ContributionFrequency

logger = logging.getLogger(__name__)


def stepped_contribution(base: float, increase_pct: float, month_index: int) -> float:
    """
    Contribution for the 0-based ``month_index``: the base amount stepped up by
    ``increase_pct`` once per full year elapsed.
    """
    return base * (1.0 + increase_pct / 100.0) ** (month_index // 12)


def simulate_compound(request: CompoundInput) -> CompoundResult:
    """
    Order of operations (per month):
      1) add the contribution at the START of the month;
      2) apply one month of growth to the post-contribution balance;
      3) record nominal and inflation-discounted balances.

    Annual contributions land on the first month of each 12-month block.
    """
    rate = monthly_effective_rate(request.apr, request.compounding)
    inflation = monthly_inflation_factor(request.inflation)

    balance = float(request.principal)
    ledger: List[LedgerEntry] = []

    for i in range(request.months):
        starting = balance
        contribution = stepped_contribution(request.contribution, request.contribution_increase, i)
        if request.contribution_frequency is ContributionFrequency.ANNUAL and i % 12 != 0:
            contribution = 0.0

        balance += contribution
        interest = balance * rate
        balance += interest

        ledger.append(
            LedgerEntry(
                period=i + 1,
                date=add_months(request.start_date, i),
                phase=Phase.GROWTH,
                beginning_balance=starting,
                contribution=contribution,
                interest=interest,
                ending_balance=balance,
                real_balance=balance / inflation ** (i + 1),
                total_cash_flow=contribution,
            )
        )

    logger.debug("compound run: %d periods, final balance %.2f", len(ledger), balance)
    return CompoundResult(
        ledger=ledger,
        totals=fold_totals(ledger, request.principal),
        milestones=find_milestones(ledger, request.principal),
        effective_monthly_rate=rate,
        final_real_balance=ledger[-1].real_balance,
    )
