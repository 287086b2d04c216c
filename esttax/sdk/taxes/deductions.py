"""Deductions: half of SE tax, QBI, and the AGI / taxable income chain."""

from typing import Optional

from .rounding import round_to_dollar
from .rules import rules_or_default
from .schemas import TaxYearRules


def compute_se_tax_deduction(se_tax: float) -> int:
    """Deductible half of self-employment tax (Schedule 1 line 15)."""
    return round_to_dollar(se_tax * 0.5)


def compute_qbi_deduction(
    qualified_income: float,
    taxable_income_before_qbi: float,
    rules: Optional[TaxYearRules] = None,
) -> int:
    """Calculate the Qualified Business Income deduction with phase-out.

    The deduction is 20% of qualified business income, limited to 20% of
    taxable income before QBI. Above the phase-out start it shrinks
    linearly and reaches zero at the phase-out end.

    Args:
        qualified_income: Qualified business income
        taxable_income_before_qbi: Taxable income before the QBI deduction
        rules: Tax year rules (default: built-in current year)

    Returns:
        QBI deduction in whole dollars
    """
    if qualified_income <= 0 or taxable_income_before_qbi <= 0:
        return 0

    qbi = rules_or_default(rules).qbi

    deduction = qualified_income * qbi.rate
    taxable_income_limit = taxable_income_before_qbi * qbi.rate
    deduction = min(deduction, taxable_income_limit)

    if taxable_income_before_qbi > qbi.phase_out_start:
        if taxable_income_before_qbi >= qbi.phase_out_end:
            deduction = 0.0
        else:
            phase_out_range = qbi.phase_out_end - qbi.phase_out_start
            excess_income = taxable_income_before_qbi - qbi.phase_out_start
            deduction = deduction * (1 - excess_income / phase_out_range)

    return round_to_dollar(deduction)


def compute_agi(
    gross_income: float,
    se_tax_deduction: float,
    retirement_contributions: float = 0,
    other_deductions: float = 0,
) -> float:
    """Adjusted gross income, never negative."""
    return max(0, gross_income - se_tax_deduction - retirement_contributions - other_deductions)


def compute_taxable_income_before_qbi(agi: float, rules: Optional[TaxYearRules] = None) -> float:
    """AGI less the standard deduction, floored at zero."""
    return max(0, agi - rules_or_default(rules).standard_deduction)


def compute_taxable_income(
    agi: float,
    qbi_deduction: float = 0,
    rules: Optional[TaxYearRules] = None,
) -> float:
    """Taxable income: standard deduction, then QBI, each floored at zero."""
    return max(0, compute_taxable_income_before_qbi(agi, rules) - qbi_deduction)
