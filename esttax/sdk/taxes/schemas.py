"""Pydantic schemas for tax rules validation.

These schemas validate the tax-rules/*.yaml files and the built-in tables,
and provide typed access to tax parameters like the SE wage base, QBI
phase-out range and safe harbor percentages.
"""

from datetime import date
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class TaxBracket(BaseModel):
    """Single tax bracket entry."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    lower_bound: float = Field(..., ge=0, description="Income where this bracket starts")
    upper_bound: Optional[float] = Field(default=None, description="Upper bound (None for the top bracket)")
    rate: float = Field(..., ge=0, le=1, description="Marginal rate as decimal")

    @property
    def span(self) -> Optional[float]:
        """Width of the bracket, or None when unbounded."""
        if self.upper_bound is None:
            return None
        return self.upper_bound - max(self.lower_bound, 0)


class SelfEmploymentRules(BaseModel):
    """Self-employment (SECA) tax rules."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    earnings_factor: float = Field(default=0.9235, gt=0, le=1, description="Share of net earnings subject to SE tax")
    social_security_rate: float = Field(default=0.124, ge=0, le=1, description="Combined SS rate (both halves)")
    wage_base: float = Field(..., gt=0, description="SS wage base (max taxable)")
    medicare_rate: float = Field(default=0.029, ge=0, le=1, description="Combined Medicare rate, uncapped")
    additional_medicare_rate: float = Field(default=0.009, ge=0, le=1)
    additional_medicare_threshold: float = Field(default=200000, ge=0)


class QbiRules(BaseModel):
    """Qualified Business Income deduction rules (Section 199A)."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    rate: float = Field(default=0.20, ge=0, le=1)
    phase_out_start: float = Field(..., ge=0, description="Taxable income where the phase-out begins")
    phase_out_end: float = Field(..., ge=0, description="Taxable income where the deduction is gone")

    @model_validator(mode="after")
    def check_range(self) -> "QbiRules":
        if self.phase_out_end <= self.phase_out_start:
            raise ValueError(
                f"phase_out_end ({self.phase_out_end}) must be greater than "
                f"phase_out_start ({self.phase_out_start})"
            )
        return self


class SafeHarborRules(BaseModel):
    """Estimated tax safe harbor rules (Form 2210)."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    minimum_liability: float = Field(default=1000, ge=0, description="No estimated payments required below this tax")
    current_year_rate: float = Field(default=0.90, ge=0)
    prior_year_rate: float = Field(default=1.00, ge=0)
    high_income_prior_year_rate: float = Field(default=1.10, ge=0)
    high_income_agi_threshold: float = Field(default=150000, ge=0)


class RetirementLimits(BaseModel):
    """Annual retirement contribution limits."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    limit_401k: float = Field(..., ge=0, description="Employee elective deferral limit")
    limit_ira: float = Field(..., ge=0, description="Traditional/Roth IRA limit")


class DueDate(BaseModel):
    """Estimated payment due date for one quarter."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    quarter: int = Field(..., ge=1, le=4)
    due_date: date


class TaxYearRules(BaseModel):
    """Complete published constants for one tax year (single filer)."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    tax_year: int = Field(..., ge=2000, le=2100)
    standard_deduction: float = Field(..., ge=0)
    brackets: List[TaxBracket]
    self_employment: SelfEmploymentRules
    qbi: QbiRules
    safe_harbor: SafeHarborRules = Field(default_factory=SafeHarborRules)
    retirement: Optional[RetirementLimits] = None
    due_dates: List[DueDate]

    @model_validator(mode="after")
    def check_brackets(self) -> "TaxYearRules":
        """Brackets must cover [0, inf) contiguously with rising rates."""
        errors = []
        brackets = self.brackets

        if not brackets:
            raise ValueError("brackets must not be empty")

        if brackets[0].lower_bound != 0:
            errors.append(f"first bracket must start at 0, not {brackets[0].lower_bound}")

        for i, bracket in enumerate(brackets):
            is_last = i == len(brackets) - 1
            if bracket.upper_bound is None and not is_last:
                errors.append(f"bracket {i} is unbounded but is not the last bracket")
            if is_last and bracket.upper_bound is not None:
                errors.append(f"last bracket must be unbounded, got upper_bound {bracket.upper_bound}")
            if bracket.upper_bound is not None and bracket.upper_bound <= bracket.lower_bound:
                errors.append(f"bracket {i}: upper_bound {bracket.upper_bound} <= lower_bound {bracket.lower_bound}")
            if i > 0:
                prev = brackets[i - 1]
                if prev.upper_bound is not None and bracket.lower_bound != prev.upper_bound:
                    errors.append(
                        f"bracket {i} starts at {bracket.lower_bound}, "
                        f"expected {prev.upper_bound} (gap or overlap)"
                    )
                if bracket.rate <= prev.rate:
                    errors.append(f"bracket {i} rate {bracket.rate} does not exceed {prev.rate}")

        if errors:
            raise ValueError("; ".join(errors))
        return self

    @model_validator(mode="after")
    def check_due_dates(self) -> "TaxYearRules":
        quarters = [d.quarter for d in self.due_dates]
        if quarters != [1, 2, 3, 4]:
            raise ValueError(f"due_dates must list quarters 1-4 in order, got {quarters}")
        dates = [d.due_date for d in self.due_dates]
        if dates != sorted(dates) or len(set(dates)) != 4:
            raise ValueError("due_dates must be strictly ascending")
        return self
