"""Data contracts for compound growth and retirement projections."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from futureworth.core.rates import Compounding
from futureworth.schemas.common import SimulationInput, SimulationResult


class ContributionFrequency(str, Enum):
    MONTHLY = "monthly"
    ANNUAL = "annual"


class IncomeMode(str, Enum):
    TARGET = "target"
    RATE = "rate"


class CompoundInput(SimulationInput):
    principal: float = Field(0.0, ge=0, description="Balance at period 0.")
    contribution: float = Field(0.0, ge=0, description="Amount added per contribution.")
    contribution_frequency: ContributionFrequency = ContributionFrequency.MONTHLY
    apr: float = Field(..., ge=0, le=100, description="Nominal annual rate, percent.")
    compounding: Compounding = Compounding.MONTHLY
    years: float = Field(..., gt=0, le=100)
    contribution_increase: float = Field(
        0.0,
        ge=0,
        le=100,
        description="Step-up applied to the contribution once per full year, percent.",
    )
    inflation: float = Field(0.0, ge=0, le=100, description="Annual inflation, percent.")

    @property
    def months(self) -> int:
        return int(round(self.years * 12))

    @model_validator(mode="after")
    def ensure_horizon(self) -> "CompoundInput":
        if self.months < 1:
            raise ValueError("years must resolve to at least one month")
        return self


class CompoundResult(SimulationResult):
    effective_monthly_rate: float
    final_real_balance: float


class RetirementInput(SimulationInput):
    current_age: int = Field(..., ge=0, le=120)
    retire_age: int = Field(..., ge=1, le=120)
    end_age: int = Field(..., ge=2, le=130)

    starting_balance: float = Field(0.0, ge=0)
    monthly_contribution: float = Field(0.0, ge=0)
    contribution_increase: float = Field(0.0, ge=0, le=100)
    employer_match_monthly: float = Field(0.0, ge=0)

    apr_pre: float = Field(..., ge=0, le=100, description="Return before retirement, percent.")
    apr_post: float = Field(..., ge=0, le=100, description="Return after retirement, percent.")
    inflation: float = Field(0.0, ge=0, le=100)

    income_mode: IncomeMode = IncomeMode.TARGET
    target_income_monthly: float = Field(0.0, ge=0, description="Monthly income target in today's dollars.")
    withdrawal_rate: float = Field(0.0, ge=0, le=100, description="Annual withdrawal rate, percent of balance.")

    benefit_start_age: Optional[int] = Field(None, ge=0, le=130)
    benefit_monthly: float = Field(0.0, ge=0, description="Pension / social security in today's dollars.")

    @model_validator(mode="after")
    def ensure_age_order(self) -> "RetirementInput":
        if not self.current_age < self.retire_age < self.end_age:
            raise ValueError("ages must satisfy current_age < retire_age < end_age")
        return self

    @property
    def months_to_retirement(self) -> int:
        return (self.retire_age - self.current_age) * 12

    @property
    def months_to_end(self) -> int:
        return (self.end_age - self.current_age) * 12


class RetirementSnapshot(BaseModel):
    """Balance and running totals at the hand-off from saving to spending."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    period: int
    age: int
    balance: float
    total_contributions: float
    total_earnings: float


class RetirementResult(SimulationResult):
    months_to_retirement: int
    months_to_end: int
    at_retirement: RetirementSnapshot
    final_real_balance: float
