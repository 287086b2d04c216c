"""Progressive federal income tax over the bracket table."""

import math
from typing import Optional

from .rounding import round_to_dollar
from .rules import rules_or_default
from .schemas import TaxYearRules


def compute_bracket_tax(taxable_income: float, rules: Optional[TaxYearRules] = None) -> int:
    """Calculate federal income tax on taxable income using the bracket table.

    Each bracket taxes the part of the remaining income that fits inside it.
    The sum is rounded to whole dollars once, at the end.

    Args:
        taxable_income: Taxable income (may be zero or negative)
        rules: Tax year rules (default: built-in current year)

    Returns:
        Income tax in whole dollars, 0 for non-positive or non-finite income
    """
    if taxable_income <= 0 or not math.isfinite(taxable_income):
        return 0

    rules = rules_or_default(rules)
    tax = 0.0
    remaining = taxable_income

    for bracket in rules.brackets:
        if remaining <= 0:
            break

        span = bracket.span
        taxable_at_bracket = remaining if span is None else min(remaining, span)

        tax += taxable_at_bracket * bracket.rate
        remaining -= taxable_at_bracket

    return round_to_dollar(tax)


def bracket_breakdown(taxable_income: float, rules: Optional[TaxYearRules] = None) -> list[dict]:
    """Per-bracket detail of the income tax calculation, for display.

    Amounts are unrounded; their sum rounds to compute_bracket_tax().
    """
    rules = rules_or_default(rules)
    rows = []
    remaining = max(0.0, taxable_income)

    for bracket in rules.brackets:
        span = bracket.span
        taxable_at_bracket = remaining if span is None else min(remaining, span)
        rows.append({
            "lower_bound": bracket.lower_bound,
            "upper_bound": bracket.upper_bound,
            "rate": bracket.rate,
            "income_in_bracket": taxable_at_bracket,
            "tax": taxable_at_bracket * bracket.rate,
        })
        remaining -= taxable_at_bracket

    return rows
