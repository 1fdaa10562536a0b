from __future__ import annotations

from dataclasses import fields
from datetime import date
from math import isclose

import pytest
from pydantic import ValidationError

from futureworth.core.retirement import RetirementMachine, simulate_retirement
from futureworth.schemas.common import Phase
from futureworth.schemas.growth import RetirementInput
from futureworth.tests.helpers import START, assert_ledger_continuity


def plan(**overrides) -> RetirementInput:
    params = dict(
        current_age=60,
        retire_age=61,
        end_age=90,
        starting_balance=100000,
        monthly_contribution=0,
        apr_pre=0,
        apr_post=0,
        inflation=0,
        income_mode="target",
        target_income_monthly=2000,
        start_date=START,
    )
    params.update(overrides)
    return RetirementInput(**params)


def test_target_income_depletes_before_end_age_and_stops():
    """100k at 0% drawn at 2,000/month runs out 50 months into retirement."""
    request = plan()
    result = simulate_retirement(request)

    assert result.milestones.depletion_period == 12 + 50
    assert result.milestones.depletion_period < request.months_to_end
    assert result.milestones.depletion_date == date(2030, 2, 1)
    assert len(result.ledger) == 62
    assert result.ledger[-1].ending_balance == 0
    assert result.totals.final_balance == 0
    assert isclose(result.totals.total_withdrawals, 100000)
    assert_ledger_continuity(result.ledger)


def test_depletion_with_growth_and_inflation():
    result = simulate_retirement(
        plan(apr_post=3, inflation=3, target_income_monthly=3000, starting_balance=250000)
    )

    assert result.milestones.depletion_period is not None
    assert len(result.ledger) == result.milestones.depletion_period
    assert result.ledger[-1].ending_balance == 0
    assert all(entry.ending_balance > 0 for entry in result.ledger[:-1])
    assert_ledger_continuity(result.ledger)


def test_balance_identity_holds_every_period_through_depletion():
    result = simulate_retirement(
        plan(
            apr_pre=5,
            apr_post=3,
            inflation=3,
            monthly_contribution=500,
            target_income_monthly=3000,
            starting_balance=250000,
        )
    )
    assert result.ledger[-1].ending_balance == 0

    for entry in result.ledger:
        if entry.phase is Phase.ACCUMULATION:
            expected = entry.beginning_balance + entry.contribution + entry.interest
        else:
            expected = entry.beginning_balance - entry.withdrawal + entry.interest
        assert isclose(entry.ending_balance, expected, abs_tol=1e-6)


def test_snapshot_at_retirement():
    result = simulate_retirement(
        plan(current_age=30, retire_age=31, end_age=33, starting_balance=1000, monthly_contribution=100,
             target_income_monthly=0)
    )
    snapshot = result.at_retirement

    assert snapshot.period == 12
    assert snapshot.age == 31
    assert isclose(snapshot.balance, 2200)
    assert isclose(snapshot.total_contributions, 1200)
    assert snapshot.total_earnings == 0
    assert result.ledger[11].phase is Phase.ACCUMULATION
    assert result.ledger[12].phase is Phase.DRAWDOWN
    assert result.ledger[11].ending_balance == snapshot.balance


def test_snapshot_matches_compound_semantics_with_growth():
    result = simulate_retirement(
        plan(current_age=40, retire_age=45, end_age=50, starting_balance=5000, monthly_contribution=400,
             contribution_increase=2, apr_pre=6, target_income_monthly=0)
    )
    snapshot = result.at_retirement
    accumulation = result.ledger[: result.months_to_retirement]

    assert isclose(snapshot.total_contributions, sum(e.contribution for e in accumulation))
    assert isclose(snapshot.total_earnings, sum(e.interest for e in accumulation))
    assert isclose(snapshot.balance, 5000 + snapshot.total_contributions + snapshot.total_earnings, rel_tol=1e-9)


def test_employer_match_is_added_to_each_contribution():
    result = simulate_retirement(
        plan(current_age=30, retire_age=32, end_age=33, monthly_contribution=500, employer_match_monthly=250,
             target_income_monthly=0)
    )
    accumulation = [e for e in result.ledger if e.phase is Phase.ACCUMULATION]

    assert len(accumulation) == 24
    assert all(e.contribution == 750 for e in accumulation)


def test_benefit_offsets_withdrawal_once_started():
    result = simulate_retirement(
        plan(target_income_monthly=3000, benefit_monthly=1000, benefit_start_age=62, starting_balance=1_000_000)
    )
    drawdown = [e for e in result.ledger if e.phase is Phase.DRAWDOWN]

    assert all(e.withdrawal == 3000 for e in drawdown[:12])
    assert all(e.withdrawal == 2000 for e in drawdown[12:])


def test_benefit_start_defaults_to_retirement_age():
    result = simulate_retirement(plan(target_income_monthly=3000, benefit_monthly=1000))
    drawdown = [e for e in result.ledger if e.phase is Phase.DRAWDOWN]
    assert drawdown[0].withdrawal == 2000


def test_machine_derives_rates_from_request():
    machine = RetirementMachine(plan(apr_pre=12, apr_post=6, inflation=0, retire_age=67))

    assert isclose(machine.rate_pre, 0.01)
    assert isclose(machine.rate_post, 0.005)
    assert machine.inflation == 1.0
    assert machine.benefit_start_age == 67
    assert {f.name for f in fields(machine) if not f.init} == {
        "rate_pre",
        "rate_post",
        "inflation",
        "benefit_start_age",
    }


def test_benefit_larger_than_target_withdraws_nothing():
    result = simulate_retirement(plan(target_income_monthly=1000, benefit_monthly=1500))
    assert result.totals.total_withdrawals == 0
    assert result.milestones.depletion_period is None
    assert len(result.ledger) == 360


def test_withdrawal_rate_mode_tracks_current_balance():
    result = simulate_retirement(plan(income_mode="rate", withdrawal_rate=12))
    drawdown = [e for e in result.ledger if e.phase is Phase.DRAWDOWN]

    assert isclose(drawdown[0].withdrawal, 1000.0)
    assert isclose(drawdown[1].withdrawal, 990.0)
    assert result.milestones.depletion_period is None
    assert len(result.ledger) == result.months_to_end


def test_inflation_raises_nominal_target():
    result = simulate_retirement(plan(inflation=3, starting_balance=2_000_000))
    drawdown = [e for e in result.ledger if e.phase is Phase.DRAWDOWN]

    assert isclose(drawdown[0].withdrawal, 2000 * 1.03)
    assert drawdown[-1].withdrawal > drawdown[0].withdrawal


def test_empty_account_depletes_on_first_drawdown_month():
    result = simulate_retirement(plan(starting_balance=0))
    assert result.milestones.depletion_period == 13
    assert len(result.ledger) == 13


def test_machine_switches_phase_exactly_once():
    machine = RetirementMachine(plan(starting_balance=1_000_000)).run()
    phases = [entry.phase for entry in machine.ledger]
    switch = phases.index(Phase.DRAWDOWN)

    assert switch == 12
    assert set(phases[:switch]) == {Phase.ACCUMULATION}
    assert set(phases[switch:]) == {Phase.DRAWDOWN}
    assert not machine.depleted


@pytest.mark.parametrize(
    "ages",
    [
        dict(current_age=65, retire_age=65, end_age=90),
        dict(current_age=40, retire_age=70, end_age=70),
        dict(current_age=70, retire_age=65, end_age=90),
    ],
)
def test_age_ordering_is_enforced(ages):
    with pytest.raises(ValidationError):
        plan(**ages)


def test_retirement_is_idempotent():
    request = plan(apr_pre=5, apr_post=4, inflation=2, monthly_contribution=300, contribution_increase=2)
    assert simulate_retirement(request) == simulate_retirement(request)
