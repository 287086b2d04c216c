"""Single-year tax liability for a self-employed filer."""

import logging
from typing import Optional

from ..schemas import TaxBreakdown
from .deductions import (
    compute_agi,
    compute_qbi_deduction,
    compute_se_tax_deduction,
    compute_taxable_income,
    compute_taxable_income_before_qbi,
)
from .income_tax import compute_bracket_tax
from .schemas import TaxYearRules
from .self_employment import compute_self_employment_tax

logger = logging.getLogger(__name__)


def compute_total_tax(
    gross_income: float,
    include_qbi: bool = False,
    include_retirement: bool = False,
    retirement_amount: float = 0,
    rules: Optional[TaxYearRules] = None,
) -> TaxBreakdown:
    """Calculate income tax plus self-employment tax for the year.

    Steps:
    1. SE tax on gross income, and its deductible half
    2. AGI = gross - half SE tax - retirement contributions (if enabled)
    3. Taxable income before QBI = AGI - standard deduction
    4. QBI deduction (if enabled) from gross income and step 3
    5. Income tax on final taxable income

    Args:
        gross_income: Net self-employment income for the year
        include_qbi: Apply the QBI deduction
        include_retirement: Deduct retirement_amount from AGI
        retirement_amount: Deductible retirement contributions
        rules: Tax year rules (default: built-in current year)

    Returns:
        TaxBreakdown. qbi_deduction / retirement_contributions are set
        only when the matching option is enabled.
    """
    se_tax = compute_self_employment_tax(gross_income, rules)
    se_tax_deduction = compute_se_tax_deduction(se_tax)

    retirement_contributions = retirement_amount if include_retirement else 0

    agi = compute_agi(gross_income, se_tax_deduction, retirement_contributions)
    taxable_income_before_qbi = compute_taxable_income_before_qbi(agi, rules)

    qbi_deduction = compute_qbi_deduction(gross_income, taxable_income_before_qbi, rules) if include_qbi else 0

    taxable_income = compute_taxable_income(agi, qbi_deduction, rules)
    income_tax = compute_bracket_tax(taxable_income, rules)

    logger.debug(
        f"gross={gross_income} se_tax={se_tax} se_deduction={se_tax_deduction} "
        f"retirement={retirement_contributions} agi={agi} qbi={qbi_deduction} "
        f"taxable={taxable_income} income_tax={income_tax}"
    )

    return TaxBreakdown(
        income_tax=income_tax,
        se_tax=se_tax,
        total_tax=income_tax + se_tax,
        agi=agi,
        qbi_deduction=qbi_deduction if include_qbi else None,
        retirement_contributions=retirement_contributions if include_retirement else None,
    )
