"""Tax rules tables: built-in published figures and YAML rule files.

The built-in table is plain Python data so the engine never touches the
filesystem. YAML files (same shape as tax-rules/2025.yaml) can replace it
for another year or for corrected figures.
"""

import logging
from datetime import date
from pathlib import Path
from typing import Optional, Union

import yaml

from .schemas import (
    DueDate,
    QbiRules,
    RetirementLimits,
    SafeHarborRules,
    SelfEmploymentRules,
    TaxBracket,
    TaxYearRules,
)

logger = logging.getLogger(__name__)


class UnsupportedTaxYearError(KeyError):
    """Raised when no built-in rules exist for a requested year."""
    pass


# 2025 single filer
TAX_YEAR_2025 = TaxYearRules(
    tax_year=2025,
    standard_deduction=15000,
    brackets=[
        TaxBracket(lower_bound=0, upper_bound=11700, rate=0.10),
        TaxBracket(lower_bound=11700, upper_bound=47150, rate=0.12),
        TaxBracket(lower_bound=47150, upper_bound=100525, rate=0.22),
        TaxBracket(lower_bound=100525, upper_bound=191950, rate=0.24),
        TaxBracket(lower_bound=191950, upper_bound=243725, rate=0.32),
        TaxBracket(lower_bound=243725, upper_bound=609350, rate=0.35),
        TaxBracket(lower_bound=609350, upper_bound=None, rate=0.37),
    ],
    self_employment=SelfEmploymentRules(
        earnings_factor=0.9235,
        social_security_rate=0.124,
        wage_base=168600,
        medicare_rate=0.029,
        additional_medicare_rate=0.009,
        additional_medicare_threshold=200000,
    ),
    qbi=QbiRules(rate=0.20, phase_out_start=191950, phase_out_end=241950),
    safe_harbor=SafeHarborRules(
        minimum_liability=1000,
        current_year_rate=0.90,
        prior_year_rate=1.00,
        high_income_prior_year_rate=1.10,
        high_income_agi_threshold=150000,
    ),
    retirement=RetirementLimits(limit_401k=23500, limit_ira=7000),
    due_dates=[
        DueDate(quarter=1, due_date=date(2025, 4, 15)),
        DueDate(quarter=2, due_date=date(2025, 6, 16)),
        DueDate(quarter=3, due_date=date(2025, 9, 15)),
        DueDate(quarter=4, due_date=date(2026, 1, 15)),
    ],
)

DEFAULT_TAX_YEAR = 2025

BUILTIN_RULES = {
    2025: TAX_YEAR_2025,
}


def available_tax_years() -> list[int]:
    """Get sorted list of built-in tax years (descending)."""
    return sorted(BUILTIN_RULES, reverse=True)


def rules_or_default(rules: Optional[TaxYearRules]) -> TaxYearRules:
    """Return rules, or the default year's built-in table when None."""
    return rules if rules is not None else BUILTIN_RULES[DEFAULT_TAX_YEAR]


def get_tax_rules(year: Optional[Union[int, str]] = None) -> TaxYearRules:
    """Get the built-in rules for a tax year.

    Args:
        year: Tax year (int or 4-digit string). Defaults to DEFAULT_TAX_YEAR.

    Raises:
        UnsupportedTaxYearError: If no built-in table exists for the year
    """
    if year is None:
        return BUILTIN_RULES[DEFAULT_TAX_YEAR]

    try:
        target_year = int(year)
    except (TypeError, ValueError):
        raise UnsupportedTaxYearError(f"Invalid tax year: {year!r}")

    if target_year not in BUILTIN_RULES:
        years = ", ".join(str(y) for y in available_tax_years())
        raise UnsupportedTaxYearError(
            f"No built-in tax rules for {target_year} (available: {years}). "
            f"Supply a rules file with --rules."
        )
    return BUILTIN_RULES[target_year]


def load_tax_rules(path: Union[str, Path]) -> TaxYearRules:
    """Load and validate a tax rules YAML file.

    Raises:
        FileNotFoundError: If the file does not exist
        pydantic.ValidationError: If the file does not match TaxYearRules
    """
    config_file = Path(path).expanduser()
    if not config_file.exists():
        raise FileNotFoundError(f"Tax rules file not found: {config_file}")

    with open(config_file, "r") as f:
        data = yaml.safe_load(f) or {}

    rules = TaxYearRules.model_validate(data)
    logger.debug(f"loaded tax rules for {rules.tax_year} from {config_file}")
    return rules


def rules_to_dict(rules: TaxYearRules) -> dict:
    """Convert rules to a YAML/JSON friendly dict (dates as ISO strings)."""
    return rules.model_dump(mode="json")
