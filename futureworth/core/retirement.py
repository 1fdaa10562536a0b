"""Two-phase retirement projection: accumulation, then drawdown."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from futureworth.core.calendar import add_months
from futureworth.core.compound import stepped_contribution
from futureworth.core.ledger import BALANCE_EPSILON, find_milestones, fold_totals
from futureworth.core.payments import cap_withdrawal
from futureworth.core.rates import Compounding, monthly_effective_rate, monthly_inflation_factor
from futureworth.schemas.common import LedgerEntry, Phase
from futureworth.schemas.growth import IncomeMode, RetirementInput, RetirementResult, RetirementSnapshot

logger = logging.getLogger(__name__)


@dataclass
class RetirementMachine:
    """
    Single running balance carried across both phases.

    The machine starts in ACCUMULATION and switches to DRAWDOWN once the
    0-based month index reaches ``months_to_retirement``; the snapshot is
    taken at that switch. A drawdown month that leaves the balance at or
    below one cent closes the account and halts the machine.
    """

    request: RetirementInput
    phase: Phase = Phase.ACCUMULATION
    balance: float = 0.0
    total_contributions: float = 0.0
    total_earnings: float = 0.0
    snapshot: Optional[RetirementSnapshot] = None
    depleted: bool = False
    ledger: List[LedgerEntry] = field(default_factory=list)
    rate_pre: float = field(init=False, default=0.0)
    rate_post: float = field(init=False, default=0.0)
    inflation: float = field(init=False, default=1.0)
    benefit_start_age: int = field(init=False, default=0)

    def __post_init__(self) -> None:
        self.balance = float(self.request.starting_balance)
        self.rate_pre = monthly_effective_rate(self.request.apr_pre, Compounding.MONTHLY)
        self.rate_post = monthly_effective_rate(self.request.apr_post, Compounding.MONTHLY)
        self.inflation = monthly_inflation_factor(self.request.inflation)
        benefit_age = self.request.benefit_start_age
        self.benefit_start_age = benefit_age if benefit_age is not None else self.request.retire_age

    def run(self) -> "RetirementMachine":
        for i in range(self.request.months_to_end):
            if self.phase is Phase.ACCUMULATION and i >= self.request.months_to_retirement:
                self._retire(i)
            if self.phase is Phase.ACCUMULATION:
                self._accumulate(i)
            else:
                self._draw_down(i)
            if self.depleted:
                break
        return self

    def _retire(self, i: int) -> None:
        self.snapshot = RetirementSnapshot(
            period=i,
            age=self.request.retire_age,
            balance=self.balance,
            total_contributions=self.total_contributions,
            total_earnings=self.total_earnings,
        )
        self.phase = Phase.DRAWDOWN

    def _accumulate(self, i: int) -> None:
        starting = self.balance
        contribution = (
            stepped_contribution(self.request.monthly_contribution, self.request.contribution_increase, i)
            + self.request.employer_match_monthly
        )
        self.balance += contribution
        interest = self.balance * self.rate_pre
        self.balance += interest

        self.total_contributions += contribution
        self.total_earnings += interest
        self._record(i, starting, contribution=contribution, interest=interest, total_cash_flow=contribution)

    def desired_withdrawal(self, i: int) -> float:
        growth = self.inflation ** i
        benefit = 0.0
        if self.request.benefit_monthly > 0 and self.request.current_age * 12 + i >= self.benefit_start_age * 12:
            benefit = self.request.benefit_monthly * growth

        if self.request.income_mode is IncomeMode.TARGET:
            return max(0.0, self.request.target_income_monthly * growth - benefit)
        monthly_rate = self.request.withdrawal_rate / 100.0 / 12.0
        return max(0.0, self.balance * monthly_rate - benefit)

    def _draw_down(self, i: int) -> None:
        starting = self.balance
        withdrawal = cap_withdrawal(self.balance, self.desired_withdrawal(i))
        self.balance -= withdrawal
        interest = self.balance * self.rate_post
        self.balance += interest

        if self.balance <= BALANCE_EPSILON:
            # the sub-cent remainder goes out with the final withdrawal
            withdrawal += self.balance
            self.balance = 0.0
            self.depleted = True

        self.total_earnings += interest
        self._record(i, starting, withdrawal=withdrawal, interest=interest, total_cash_flow=withdrawal)

    def _record(self, i: int, starting: float, **flows: float) -> None:
        self.ledger.append(
            LedgerEntry(
                period=i + 1,
                date=add_months(self.request.start_date, i),
                phase=self.phase,
                beginning_balance=starting,
                ending_balance=self.balance,
                real_balance=self.balance / self.inflation ** (i + 1),
                **flows,
            )
        )


def simulate_retirement(request: RetirementInput) -> RetirementResult:
    machine = RetirementMachine(request).run()
    milestones = find_milestones(machine.ledger, request.starting_balance)
    logger.debug(
        "retirement run: %d periods, depletion period %s",
        len(machine.ledger),
        milestones.depletion_period,
    )

    return RetirementResult(
        ledger=machine.ledger,
        totals=fold_totals(machine.ledger, request.starting_balance),
        milestones=milestones,
        months_to_retirement=request.months_to_retirement,
        months_to_end=request.months_to_end,
        at_retirement=machine.snapshot,
        final_real_balance=machine.ledger[-1].real_balance,
    )
