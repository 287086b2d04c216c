"""Self-employment tax (Schedule SE).

SE tax is the self-employed equivalent of FICA: both the employee and
employer halves of Social Security and Medicare, computed on 92.35% of net
earnings. Social Security stops at the wage base; Medicare is uncapped;
the 0.9% Additional Medicare Tax applies to earnings above the threshold.
"""

import math
from typing import Optional

from ..schemas import SelfEmploymentTaxParts
from .rounding import round_to_dollar
from .rules import rules_or_default
from .schemas import TaxYearRules


def self_employment_tax_parts(
    net_income: float,
    rules: Optional[TaxYearRules] = None,
) -> SelfEmploymentTaxParts:
    """Calculate the unrounded components of SE tax.

    Args:
        net_income: Net self-employment income (may be zero or negative)
        rules: Tax year rules (default: built-in current year)

    Returns:
        SelfEmploymentTaxParts; all zero for non-positive or non-finite income
    """
    if net_income <= 0 or not math.isfinite(net_income):
        return SelfEmploymentTaxParts()

    se = rules_or_default(rules).self_employment
    adjusted_income = net_income * se.earnings_factor

    social_security = min(adjusted_income, se.wage_base) * se.social_security_rate
    medicare = adjusted_income * se.medicare_rate
    # Strictly above the threshold
    additional_medicare = max(0.0, adjusted_income - se.additional_medicare_threshold) * se.additional_medicare_rate

    return SelfEmploymentTaxParts(
        adjusted_income=adjusted_income,
        social_security=social_security,
        medicare=medicare,
        additional_medicare=additional_medicare,
    )


def compute_self_employment_tax(net_income: float, rules: Optional[TaxYearRules] = None) -> int:
    """Calculate self-employment tax in whole dollars.

    Components are summed unrounded and the total is rounded once.
    """
    return round_to_dollar(self_employment_tax_parts(net_income, rules).total)
