"""Data contracts shared by every simulation engine."""

from __future__ import annotations

import datetime as dt
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from futureworth.core.calendar import current_month_start, month_start


class Phase(str, Enum):
    REPAYMENT = "repayment"
    GROWTH = "growth"
    ACCUMULATION = "accumulation"
    DRAWDOWN = "drawdown"


class SimulationInput(BaseModel):
    """Base for engine inputs: immutable, strict, anchored to a start month."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    start_date: dt.date = Field(
        default_factory=current_month_start,
        description="Month of the first period; normalized to the 1st.",
    )

    @field_validator("start_date", mode="after")
    @classmethod
    def normalize_start_date(cls, value: dt.date) -> dt.date:
        return month_start(value)


class LedgerEntry(BaseModel):
    """One simulated month. Flow fields an engine does not use stay at 0."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    period: int = Field(..., ge=1)
    date: dt.date
    phase: Phase
    beginning_balance: float = Field(..., ge=0)
    contribution: float = 0.0
    principal: float = 0.0
    extra: float = 0.0
    interest: float = 0.0
    fees: float = 0.0
    escrow: float = 0.0
    insurance: float = 0.0
    withdrawal: float = 0.0
    ending_balance: float = Field(..., ge=0)
    real_balance: float = Field(..., ge=0)
    total_cash_flow: float = 0.0


class RunTotals(BaseModel):
    """Cumulative sums folded from a ledger."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    periods: int = 0
    total_interest: float = 0.0
    total_principal: float = 0.0
    total_extra: float = 0.0
    total_contributions: float = 0.0
    total_withdrawals: float = 0.0
    total_fees: float = 0.0
    total_escrow: float = 0.0
    total_insurance: float = 0.0
    total_paid: float = 0.0
    final_balance: float = 0.0


class Milestones(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    payoff_reached: bool = False
    payoff_period: Optional[int] = None
    payoff_date: Optional[dt.date] = None
    pmi_cancellation_period: Optional[int] = None
    pmi_cancellation_date: Optional[dt.date] = None
    depletion_period: Optional[int] = None
    depletion_date: Optional[dt.date] = None


class YearlyBucket(BaseModel):
    """
    Calendar-year roll-up of monthly entries.

    Balances are end-of-year snapshots (the opening balance is the first
    month's); flow fields are summed within the year.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    year: int
    periods: int
    first_period: int
    last_period: int
    beginning_balance: float
    contribution: float
    principal: float
    extra: float
    interest: float
    fees: float
    escrow: float
    insurance: float
    withdrawal: float
    total_cash_flow: float
    ending_balance: float
    real_balance: float


class SimulationResult(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    ledger: List[LedgerEntry]
    totals: RunTotals
    milestones: Milestones
