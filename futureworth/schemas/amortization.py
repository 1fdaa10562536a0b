"""Data contracts for mortgage and loan amortization."""

from __future__ import annotations

import datetime as dt
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from futureworth.core.calendar import months_between
from futureworth.schemas.common import Milestones, RunTotals, SimulationInput, SimulationResult


class AmortizedInput(SimulationInput):
    """Terms shared by every level-payment loan."""

    apr: float = Field(..., ge=0, le=100, description="Annual percentage rate, e.g. 6.25.")
    term_years: float = Field(..., gt=0, le=50, description="Term in years; rounded to whole months.")
    extra_monthly: float = Field(0.0, ge=0, description="Recurring extra principal every month.")
    one_time_extra: float = Field(0.0, ge=0, description="Lump-sum extra principal.")
    one_time_extra_period: int = Field(
        0,
        ge=0,
        description="1-based period of the lump-sum payment; 0 disables it.",
    )

    @property
    def term_months(self) -> int:
        return int(round(self.term_years * 12))

    @model_validator(mode="after")
    def ensure_term(self) -> "AmortizedInput":
        if self.term_months < 1:
            raise ValueError("term_years must resolve to at least one month")
        return self

    @property
    def one_time_period(self) -> int:
        return self.one_time_extra_period


class MortgageInput(AmortizedInput):
    price: float = Field(..., ge=0, description="Purchase price of the home.")
    down_payment: float = Field(0.0, ge=0)
    tax_rate: float = Field(0.0, ge=0, le=100, description="Property tax, percent of price per year.")
    insurance_annual: float = Field(0.0, ge=0)
    hoa_monthly: float = Field(0.0, ge=0)
    pmi_rate: float = Field(0.0, ge=0, le=100, description="PMI, annual percent of the loan amount.")

    @model_validator(mode="after")
    def ensure_down_payment(self) -> "MortgageInput":
        if self.down_payment > self.price:
            raise ValueError("down_payment cannot exceed price")
        return self

    @property
    def loan_amount(self) -> float:
        return max(self.price - self.down_payment, 0.0)


class LoanInput(AmortizedInput):
    amount: float = Field(..., ge=0, description="Amount borrowed.")
    monthly_fees: float = Field(0.0, ge=0)
    one_time_extra_date: Optional[dt.date] = Field(
        None,
        description="Month of the lump-sum payment, as an alternative to one_time_extra_period.",
    )

    @model_validator(mode="after")
    def ensure_single_one_time_marker(self) -> "LoanInput":
        if self.one_time_extra_date is not None and self.one_time_extra_period:
            raise ValueError("give one_time_extra_period or one_time_extra_date, not both")
        return self

    @property
    def one_time_period(self) -> int:
        if self.one_time_extra_date is None:
            return self.one_time_extra_period
        index = months_between(self.start_date, self.one_time_extra_date) + 1
        # months before the loan starts disable the payment
        return index if index >= 1 else 0


class EscrowBreakdown(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    tax_monthly: float
    insurance_monthly: float
    hoa_monthly: float
    pmi_monthly: float


class RateSensitivity(BaseModel):
    """Level payment one point below / at / above the quoted APR."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    lower: float
    base: float
    upper: float


class MortgageResult(SimulationResult):
    loan_amount: float
    down_payment_percent: float
    payment_pi: float
    first_payment_total: float
    escrow: EscrowBreakdown
    rate_sensitivity: RateSensitivity


class LoanSavings(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    interest_saved: float = Field(..., ge=0)
    periods_saved: int = Field(..., ge=0)


class LoanResult(SimulationResult):
    loan_amount: float
    payment_pi: float
    savings: LoanSavings
    baseline_totals: RunTotals
    baseline_milestones: Milestones
