"""Pydantic schemas for calculation inputs and results.

All schemas are frozen value objects, created per calculation and
discarded afterwards. They use extra='forbid' so misspelled fields fail
loudly instead of being ignored.

Engine-level inputs carry no range constraints: the engine degrades to
zero for non-positive amounts. Range validation belongs to
esttax.sdk.validation.
"""

from datetime import date
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class CalculationInput(BaseModel):
    """Inputs for a quarterly estimated tax plan."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    annual_income: float = Field(..., description="Expected net self-employment income")
    previous_year_tax: float = Field(..., description="Total tax on last year's return")
    current_year_payments_made: float = Field(default=0, description="Estimated payments already made this year")
    include_qbi: bool = Field(default=False, description="Apply the QBI deduction")
    include_retirement_contributions: bool = Field(default=False)
    retirement_contribution_amount: float = Field(default=0, description="Deductible retirement contributions")


class SelfEmploymentTaxParts(BaseModel):
    """Unrounded components of self-employment tax."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    adjusted_income: float = Field(default=0, description="Net earnings x 92.35%")
    social_security: float = Field(default=0, description="Capped at the wage base")
    medicare: float = Field(default=0, description="Uncapped")
    additional_medicare: float = Field(default=0, description="Surtax above the threshold")

    @property
    def total(self) -> float:
        return self.social_security + self.medicare + self.additional_medicare


class TaxBreakdown(BaseModel):
    """Single-year tax liability.

    qbi_deduction and retirement_contributions are None unless the
    corresponding option was enabled. to_dict() drops them when None, so
    "not requested" stays distinguishable from "requested, came out 0".
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    income_tax: int
    se_tax: int
    total_tax: int
    agi: float = Field(..., ge=0)
    qbi_deduction: Optional[int] = None
    retirement_contributions: Optional[float] = None

    @model_validator(mode="after")
    def check_total(self) -> "TaxBreakdown":
        if self.total_tax != self.income_tax + self.se_tax:
            raise ValueError(
                f"total_tax ({self.total_tax}) != income_tax + se_tax "
                f"({self.income_tax + self.se_tax})"
            )
        return self

    def to_dict(self) -> dict:
        return self.model_dump(exclude_none=True)


class QuarterlyInstallment(BaseModel):
    """One estimated payment."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    quarter_number: int = Field(..., ge=1, le=4)
    amount_due: int
    due_date: date


class PaymentPlan(BaseModel):
    """Quarterly estimated payment schedule for one tax year."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    tax_year: int
    total_annual_tax: int
    required_annual_payment: float
    quarterly_installments: List[QuarterlyInstallment] = Field(..., min_length=4, max_length=4)
    total_due: int
    remaining_balance: float = Field(..., ge=0)
    prior_year_safe_harbor: float = Field(..., description="Prior-year tax x 100% (110% for high AGI)")
    current_year_safe_harbor: float = Field(..., description="Current-year tax x 90%")
    breakdown: TaxBreakdown

    @model_validator(mode="after")
    def check_schedule(self) -> "PaymentPlan":
        quarters = [q.quarter_number for q in self.quarterly_installments]
        if quarters != [1, 2, 3, 4]:
            raise ValueError(f"installments must be quarters 1-4 in order, got {quarters}")
        installment_sum = sum(q.amount_due for q in self.quarterly_installments)
        if installment_sum != self.total_due:
            raise ValueError(f"total_due ({self.total_due}) != sum of installments ({installment_sum})")
        return self

    @property
    def is_payment_required(self) -> bool:
        return self.total_due > 0

    def to_dict(self) -> dict:
        data = self.model_dump(mode="json")
        data["breakdown"] = self.breakdown.to_dict()
        return data
