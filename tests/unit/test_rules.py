"""Tests for tax rules tables: built-in lookup and YAML loading."""

from datetime import date
from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from esttax.sdk.taxes import (
    DEFAULT_TAX_YEAR,
    TAX_YEAR_2025,
    UnsupportedTaxYearError,
    available_tax_years,
    get_tax_rules,
    load_tax_rules,
    rules_to_dict,
)

SAMPLE_RULES = Path(__file__).resolve().parents[2] / "tax-rules" / "2025.yaml"


def write_rules(tmp_path, data, name="rules.yaml"):
    path = tmp_path / name
    path.write_text(yaml.safe_dump(data, sort_keys=False))
    return path


@pytest.fixture
def rules_data():
    """Editable copy of the 2025 table as plain data."""
    return rules_to_dict(TAX_YEAR_2025)


class TestBuiltinRules:
    """Built-in 2025 figures."""

    def test_default_year(self):
        assert get_tax_rules() is TAX_YEAR_2025
        assert DEFAULT_TAX_YEAR == 2025

    def test_lookup_by_int_and_string(self):
        assert get_tax_rules(2025) is TAX_YEAR_2025
        assert get_tax_rules("2025") is TAX_YEAR_2025

    def test_available_years(self):
        assert 2025 in available_tax_years()

    def test_published_figures(self):
        """Spot-check the 2025 constants."""
        rules = TAX_YEAR_2025
        assert rules.standard_deduction == 15000
        assert [b.rate for b in rules.brackets] == [0.10, 0.12, 0.22, 0.24, 0.32, 0.35, 0.37]
        assert rules.brackets[-1].upper_bound is None
        assert rules.self_employment.wage_base == 168600
        assert rules.qbi.phase_out_start == 191950
        assert rules.qbi.phase_out_end == 241950
        assert rules.safe_harbor.minimum_liability == 1000
        assert rules.retirement.limit_401k == 23500
        assert rules.retirement.limit_ira == 7000
        assert rules.due_dates[1].due_date == date(2025, 6, 16)

    def test_unsupported_year(self):
        with pytest.raises(UnsupportedTaxYearError) as exc_info:
            get_tax_rules(1999)
        assert "1999" in str(exc_info.value)

    def test_invalid_year(self):
        with pytest.raises(UnsupportedTaxYearError):
            get_tax_rules("next year")

    def test_rules_are_frozen(self):
        with pytest.raises(ValidationError):
            TAX_YEAR_2025.standard_deduction = 0


class TestLoadTaxRules:
    """YAML rules files."""

    def test_sample_file_matches_builtin(self):
        """The shipped tax-rules/2025.yaml is the built-in table."""
        assert load_tax_rules(SAMPLE_RULES) == TAX_YEAR_2025

    def test_round_trip_through_yaml(self, tmp_path, rules_data):
        path = write_rules(tmp_path, rules_data)
        assert load_tax_rules(path) == TAX_YEAR_2025

    def test_other_year(self, tmp_path, rules_data):
        rules_data["tax_year"] = 2026
        rules_data["standard_deduction"] = 15750
        rules = load_tax_rules(write_rules(tmp_path, rules_data))

        assert rules.tax_year == 2026
        assert rules.standard_deduction == 15750

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_tax_rules(tmp_path / "missing.yaml")

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        with pytest.raises(ValidationError):
            load_tax_rules(path)

    def test_unknown_key_rejected(self, tmp_path, rules_data):
        rules_data["filing_status"] = "married"
        with pytest.raises(ValidationError):
            load_tax_rules(write_rules(tmp_path, rules_data))


class TestBracketValidation:
    """Bracket tables must be contiguous from 0 with rising rates."""

    def test_gap_between_brackets(self, tmp_path, rules_data):
        rules_data["brackets"][1]["lower_bound"] = 12000
        with pytest.raises(ValidationError, match="gap or overlap"):
            load_tax_rules(write_rules(tmp_path, rules_data))

    def test_must_start_at_zero(self, tmp_path, rules_data):
        rules_data["brackets"][0]["lower_bound"] = 100
        with pytest.raises(ValidationError, match="start at 0"):
            load_tax_rules(write_rules(tmp_path, rules_data))

    def test_last_bracket_unbounded(self, tmp_path, rules_data):
        rules_data["brackets"][-1]["upper_bound"] = 1000000
        with pytest.raises(ValidationError, match="unbounded"):
            load_tax_rules(write_rules(tmp_path, rules_data))

    def test_rates_must_rise(self, tmp_path, rules_data):
        rules_data["brackets"][2]["rate"] = 0.12
        with pytest.raises(ValidationError, match="does not exceed"):
            load_tax_rules(write_rules(tmp_path, rules_data))

    def test_empty_brackets(self, tmp_path, rules_data):
        rules_data["brackets"] = []
        with pytest.raises(ValidationError, match="must not be empty"):
            load_tax_rules(write_rules(tmp_path, rules_data))

    def test_rate_above_one(self, tmp_path, rules_data):
        rules_data["brackets"][-1]["rate"] = 1.5
        with pytest.raises(ValidationError):
            load_tax_rules(write_rules(tmp_path, rules_data))


class TestOtherValidation:
    """Due dates and QBI range."""

    def test_due_dates_out_of_order(self, tmp_path, rules_data):
        rules_data["due_dates"][1]["due_date"] = "2025-03-01"
        with pytest.raises(ValidationError, match="ascending"):
            load_tax_rules(write_rules(tmp_path, rules_data))

    def test_missing_quarter(self, tmp_path, rules_data):
        rules_data["due_dates"] = rules_data["due_dates"][:3]
        with pytest.raises(ValidationError, match="quarters 1-4"):
            load_tax_rules(write_rules(tmp_path, rules_data))

    def test_qbi_range_inverted(self, tmp_path, rules_data):
        rules_data["qbi"]["phase_out_end"] = 100000
        with pytest.raises(ValidationError, match="phase_out_end"):
            load_tax_rules(write_rules(tmp_path, rules_data))

    def test_retirement_optional(self, tmp_path, rules_data):
        del rules_data["retirement"]
        assert load_tax_rules(write_rules(tmp_path, rules_data)).retirement is None

    def test_safe_harbor_defaults(self, tmp_path, rules_data):
        """safe_harbor may be omitted; the standard percentages apply."""
        del rules_data["safe_harbor"]
        rules = load_tax_rules(write_rules(tmp_path, rules_data))
        assert rules.safe_harbor == TAX_YEAR_2025.safe_harbor
