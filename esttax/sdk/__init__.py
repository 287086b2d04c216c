"""Est Tax SDK - Core functionality for estimated tax calculations."""

from .schemas import (
    CalculationInput,
    PaymentPlan,
    QuarterlyInstallment,
    SelfEmploymentTaxParts,
    TaxBreakdown,
)

from .taxes import (
    TaxBracket,
    TaxYearRules,
    TAX_YEAR_2025,
    DEFAULT_TAX_YEAR,
    UnsupportedTaxYearError,
    available_tax_years,
    get_tax_rules,
    load_tax_rules,
    rules_to_dict,
    compute_bracket_tax,
    compute_self_employment_tax,
    self_employment_tax_parts,
    compute_se_tax_deduction,
    compute_qbi_deduction,
    compute_agi,
    compute_taxable_income,
    compute_total_tax,
    compute_quarterly_plan,
)

from .config import (
    get_config_dir,
    get_settings_path,
    load_settings,
    save_settings,
    get_setting,
    set_setting,
    clear_setting,
    get_default_output_format,
    resolve_tax_rules,
)

from .validation import (
    EstimateRequest,
    retirement_limit_warnings,
    format_validation_errors,
)

__all__ = [
    # Schemas
    "CalculationInput",
    "PaymentPlan",
    "QuarterlyInstallment",
    "SelfEmploymentTaxParts",
    "TaxBreakdown",
    # Rules
    "TaxBracket",
    "TaxYearRules",
    "TAX_YEAR_2025",
    "DEFAULT_TAX_YEAR",
    "UnsupportedTaxYearError",
    "available_tax_years",
    "get_tax_rules",
    "load_tax_rules",
    "rules_to_dict",
    # Engine
    "compute_bracket_tax",
    "compute_self_employment_tax",
    "self_employment_tax_parts",
    "compute_se_tax_deduction",
    "compute_qbi_deduction",
    "compute_agi",
    "compute_taxable_income",
    "compute_total_tax",
    "compute_quarterly_plan",
    # Settings
    "get_config_dir",
    "get_settings_path",
    "load_settings",
    "save_settings",
    "get_setting",
    "set_setting",
    "clear_setting",
    "get_default_output_format",
    "resolve_tax_rules",
    # Validation
    "EstimateRequest",
    "retirement_limit_warnings",
    "format_validation_errors",
]
