"""Input validation for estimate requests.

The engine accepts any number; callers validate first. EstimateRequest
enforces the ranges a user-facing form accepts and converts to a
CalculationInput.
"""

import logging
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .schemas import CalculationInput
from .taxes.schemas import TaxYearRules

logger = logging.getLogger(__name__)

MAX_ANNUAL_INCOME = 10_000_000
MAX_PRIOR_YEAR_TAX = 5_000_000
MAX_PAYMENTS_MADE = 5_000_000


class EstimateRequest(BaseModel):
    """User-supplied inputs for an estimated tax plan."""

    model_config = ConfigDict(extra="forbid")

    annual_income: float = Field(
        ..., ge=0, le=MAX_ANNUAL_INCOME,
        description="Expected net self-employment income for the year",
    )
    previous_year_tax: float = Field(
        ..., ge=0, le=MAX_PRIOR_YEAR_TAX,
        description="Total tax from last year's return (Form 1040 line 24)",
    )
    current_year_payments: float = Field(
        default=0, ge=0, le=MAX_PAYMENTS_MADE,
        description="Estimated payments already made this year",
    )
    include_qbi: bool = Field(default=False)
    retirement_contribution_amount: Optional[float] = Field(
        default=None, ge=0,
        description="Deductible retirement contributions; setting it enables the deduction",
    )

    def to_calculation_input(self) -> CalculationInput:
        include_retirement = self.retirement_contribution_amount is not None
        return CalculationInput(
            annual_income=self.annual_income,
            previous_year_tax=self.previous_year_tax,
            current_year_payments_made=self.current_year_payments,
            include_qbi=self.include_qbi,
            include_retirement_contributions=include_retirement,
            retirement_contribution_amount=self.retirement_contribution_amount or 0,
        )


def retirement_limit_warnings(amount: Optional[float], rules: TaxYearRules) -> list[str]:
    """Warn when contributions exceed the year's 401(k) + IRA limits.

    Not an error: catch-up contributions and SEP/solo 401(k) employer
    contributions can legitimately go higher.
    """
    if not amount or rules.retirement is None:
        return []

    limits = rules.retirement
    if amount <= limits.limit_401k + limits.limit_ira:
        return []

    warning = (
        f"Retirement contributions ${amount:,.0f} exceed the {rules.tax_year} "
        f"401(k) + IRA limits (${limits.limit_401k:,.0f} + ${limits.limit_ira:,.0f})"
    )
    logger.warning(warning)
    return [warning]


def format_validation_errors(exc) -> str:
    """Flatten a pydantic ValidationError into one line per field."""
    lines = []
    for err in exc.errors():
        field = ".".join(str(p) for p in err.get("loc", ())) or "input"
        lines.append(f"{field}: {err.get('msg')}")
    return "\n".join(lines)
