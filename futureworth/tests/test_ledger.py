from __future__ import annotations

from datetime import date
from math import isclose

from futureworth.core.calendar import add_months, month_start, months_between
from futureworth.core.compound import simulate_compound
from futureworth.core.ledger import aggregate_yearly, find_milestones, fold_totals
from futureworth.core.loan import simulate_loan
from futureworth.schemas.growth import CompoundInput
from futureworth.schemas.amortization import LoanInput
from futureworth.tests.helpers import START


def test_totals_are_a_fold_over_the_ledger():
    result = simulate_loan(LoanInput(amount=8000, apr=7.5, term_years=3, extra_monthly=40, start_date=START))
    assert fold_totals(result.ledger, 8000) == result.totals
    assert find_milestones(result.ledger, 8000) == result.milestones


def test_empty_ledger_totals_carry_opening_balance():
    totals = fold_totals([], 250.0)
    assert totals.periods == 0
    assert totals.final_balance == 250.0
    assert not find_milestones([], 250.0).payoff_reached
    assert find_milestones([], 0.0).payoff_reached


def test_yearly_buckets_follow_calendar_years():
    result = simulate_compound(
        CompoundInput(principal=1000, contribution=100, apr=5, years=1, start_date=date(2025, 7, 1))
    )
    buckets = aggregate_yearly(result.ledger)

    assert [bucket.year for bucket in buckets] == [2025, 2026]
    first, second = buckets
    assert first.periods == 6 and second.periods == 6
    assert first.first_period == 1 and first.last_period == 6
    assert first.beginning_balance == 1000
    assert first.ending_balance == result.ledger[5].ending_balance
    assert second.beginning_balance == result.ledger[6].beginning_balance
    assert second.ending_balance == result.totals.final_balance
    assert isclose(first.contribution + second.contribution, result.totals.total_contributions)
    assert isclose(first.interest + second.interest, result.totals.total_interest)


def test_yearly_buckets_of_empty_ledger():
    assert aggregate_yearly([]) == []


def test_calendar_helpers():
    assert month_start(date(2025, 5, 31)) == date(2025, 5, 1)
    assert add_months(date(2025, 1, 31), 1) == date(2025, 2, 1)
    assert add_months(START, 12) == date(2026, 1, 1)
    assert months_between(date(2024, 11, 1), date(2025, 2, 1)) == 3
