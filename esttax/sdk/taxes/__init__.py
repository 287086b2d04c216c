"""taxes - Federal estimated tax calculation engine.

Scope:
- Progressive income tax over the bracket table
- Self-employment tax (SS wage base, Medicare, Additional Medicare)
- Half-SE-tax and QBI deductions, AGI and taxable income
- Total liability and the safe-harbor quarterly payment plan

Constraints:
- Pure calculation - no file, network or environment access
- Year-specific figures come from a TaxYearRules table; every function
  takes an optional rules argument and defaults to the built-in year
- Never raises for numeric input; non-positive amounts yield zero

Modules:
- schemas: TaxYearRules and its parts (pydantic)
- rules: built-in tables, YAML loading, year lookup
- rounding: whole-dollar rounding
- income_tax: bracket tax
- self_employment: SE tax and its components
- deductions: SE deduction, QBI, AGI, taxable income
- total: total tax aggregator
- quarterly: safe-harbor payment planner

Usage:
    from esttax.sdk.taxes import compute_quarterly_plan
    from esttax.sdk.schemas import CalculationInput

    plan = compute_quarterly_plan(CalculationInput(annual_income=75000, previous_year_tax=15000))
"""

from .schemas import (
    DueDate,
    QbiRules,
    RetirementLimits,
    SafeHarborRules,
    SelfEmploymentRules,
    TaxBracket,
    TaxYearRules,
)

from .rules import (
    BUILTIN_RULES,
    DEFAULT_TAX_YEAR,
    TAX_YEAR_2025,
    UnsupportedTaxYearError,
    available_tax_years,
    get_tax_rules,
    load_tax_rules,
    rules_or_default,
    rules_to_dict,
)

from .rounding import round_to_dollar
from .income_tax import bracket_breakdown, compute_bracket_tax
from .self_employment import compute_self_employment_tax, self_employment_tax_parts
from .deductions import (
    compute_agi,
    compute_qbi_deduction,
    compute_se_tax_deduction,
    compute_taxable_income,
    compute_taxable_income_before_qbi,
)
from .total import compute_total_tax
from .quarterly import compute_quarterly_plan

__all__ = [
    # Rules schemas
    "DueDate",
    "QbiRules",
    "RetirementLimits",
    "SafeHarborRules",
    "SelfEmploymentRules",
    "TaxBracket",
    "TaxYearRules",
    # Rules tables
    "BUILTIN_RULES",
    "DEFAULT_TAX_YEAR",
    "TAX_YEAR_2025",
    "UnsupportedTaxYearError",
    "available_tax_years",
    "get_tax_rules",
    "load_tax_rules",
    "rules_or_default",
    "rules_to_dict",
    # Calculations
    "round_to_dollar",
    "bracket_breakdown",
    "compute_bracket_tax",
    "compute_self_employment_tax",
    "self_employment_tax_parts",
    "compute_agi",
    "compute_qbi_deduction",
    "compute_se_tax_deduction",
    "compute_taxable_income",
    "compute_taxable_income_before_qbi",
    "compute_total_tax",
    "compute_quarterly_plan",
]
