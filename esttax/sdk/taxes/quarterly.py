"""Quarterly estimated payment planning (Form 1040-ES safe harbor).

Estimated payments avoid the underpayment penalty when they cover the
smaller of:
- 90% of the current year's tax, or
- 100% of the prior year's tax (110% when AGI is over $150,000).

No estimated payments are required when the current year's tax is under
$1,000. The required amount is split into four equal installments.
"""

import logging
from typing import Optional

from ..schemas import CalculationInput, PaymentPlan, QuarterlyInstallment
from .rounding import round_to_dollar
from .rules import rules_or_default
from .schemas import TaxYearRules
from .total import compute_total_tax

logger = logging.getLogger(__name__)


def compute_quarterly_plan(
    calc_input: CalculationInput,
    rules: Optional[TaxYearRules] = None,
) -> PaymentPlan:
    """Calculate the quarterly estimated payment schedule.

    Args:
        calc_input: Income, prior-year tax, payments made and deduction options
        rules: Tax year rules (default: built-in current year)

    Returns:
        PaymentPlan with four installments in quarter order
    """
    rules = rules_or_default(rules)
    harbor = rules.safe_harbor

    breakdown = compute_total_tax(
        calc_input.annual_income,
        include_qbi=calc_input.include_qbi,
        include_retirement=calc_input.include_retirement_contributions,
        retirement_amount=calc_input.retirement_contribution_amount,
        rules=rules,
    )
    current_year_tax = breakdown.total_tax

    if breakdown.agi > harbor.high_income_agi_threshold:
        prior_year_safe_harbor = calc_input.previous_year_tax * harbor.high_income_prior_year_rate
    else:
        prior_year_safe_harbor = calc_input.previous_year_tax * harbor.prior_year_rate

    current_year_safe_harbor = current_year_tax * harbor.current_year_rate
    required_annual_payment = min(current_year_safe_harbor, prior_year_safe_harbor)

    if current_year_tax < harbor.minimum_liability:
        logger.debug(f"tax {current_year_tax} under {harbor.minimum_liability}: no estimated payments required")
        return PaymentPlan(
            tax_year=rules.tax_year,
            total_annual_tax=current_year_tax,
            required_annual_payment=required_annual_payment,
            quarterly_installments=_installments(0, rules),
            total_due=0,
            remaining_balance=0,
            prior_year_safe_harbor=prior_year_safe_harbor,
            current_year_safe_harbor=current_year_safe_harbor,
            breakdown=breakdown,
        )

    # Round the installment first, then multiply; total_due may differ
    # from round(required) by up to $3.
    installment = round_to_dollar(required_annual_payment / 4)
    total_due = installment * 4
    remaining_balance = max(0, total_due - calc_input.current_year_payments_made)

    logger.debug(
        f"safe harbor: current={current_year_safe_harbor} prior={prior_year_safe_harbor} "
        f"required={required_annual_payment} installment={installment} remaining={remaining_balance}"
    )

    return PaymentPlan(
        tax_year=rules.tax_year,
        total_annual_tax=current_year_tax,
        required_annual_payment=required_annual_payment,
        quarterly_installments=_installments(installment, rules),
        total_due=total_due,
        remaining_balance=remaining_balance,
        prior_year_safe_harbor=prior_year_safe_harbor,
        current_year_safe_harbor=current_year_safe_harbor,
        breakdown=breakdown,
    )


def _installments(amount: int, rules: TaxYearRules) -> list[QuarterlyInstallment]:
    return [
        QuarterlyInstallment(quarter_number=d.quarter, amount_due=amount, due_date=d.due_date)
        for d in rules.due_dates
    ]
