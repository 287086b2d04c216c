"""Tests for the total tax aggregator.

Worked example, $100,000 net income (2025 single):
  SE tax        92,350 adjusted x 15.3%      = 14,130
  Half SE tax                                 = 7,065
  AGI           100,000 - 7,065               = 92,935
  Taxable       92,935 - 15,000               = 77,935
  Income tax    1,170 + 4,254 + 6,772.70      = 12,197
  Total                                       = 26,327
"""

import pytest

from esttax.sdk.schemas import TaxBreakdown
from esttax.sdk.taxes import compute_total_tax


class TestBreakdown:
    """Core figures of the breakdown."""

    def test_worked_example(self):
        result = compute_total_tax(100000)

        assert result.se_tax == 14130
        assert result.agi == 92935
        assert result.income_tax == 12197
        assert result.total_tax == 26327

    def test_total_is_sum(self):
        """total_tax is exactly income_tax + se_tax."""
        for income in (1000, 25000, 75000, 200000, 1000000):
            result = compute_total_tax(income)
            assert result.total_tax == result.income_tax + result.se_tax

    def test_zero_income(self):
        result = compute_total_tax(0)

        assert result.income_tax == 0
        assert result.se_tax == 0
        assert result.total_tax == 0
        assert result.agi == 0

    def test_negative_income_does_not_raise(self):
        """A loss yields zero tax and zero AGI."""
        result = compute_total_tax(-25000)

        assert result.total_tax == 0
        assert result.agi == 0

    def test_inconsistent_total_rejected(self):
        """The schema refuses a breakdown whose total does not add up."""
        with pytest.raises(ValueError):
            TaxBreakdown(income_tax=100, se_tax=50, total_tax=151, agi=0)


class TestOptionalFields:
    """qbi_deduction / retirement_contributions present only when requested."""

    def test_absent_by_default(self):
        result = compute_total_tax(100000)

        assert result.qbi_deduction is None
        assert result.retirement_contributions is None
        assert "qbi_deduction" not in result.to_dict()
        assert "retirement_contributions" not in result.to_dict()

    def test_present_when_enabled(self):
        result = compute_total_tax(100000, include_qbi=True, include_retirement=True, retirement_amount=5000)
        data = result.to_dict()

        assert data["qbi_deduction"] > 0
        assert data["retirement_contributions"] == 5000

    def test_present_with_zero(self):
        """QBI fully phased out at $500,000 is reported as 0, not omitted."""
        result = compute_total_tax(500000, include_qbi=True)

        assert result.qbi_deduction == 0
        assert result.to_dict()["qbi_deduction"] == 0

    def test_retirement_amount_ignored_without_flag(self):
        """An amount without the flag changes nothing."""
        assert compute_total_tax(100000, retirement_amount=20000) == compute_total_tax(100000)


class TestQbi:
    """QBI deduction inside the aggregate."""

    def test_qbi_value(self):
        """$150,000: pre-QBI taxable 124,403, QBI = 20% of it."""
        result = compute_total_tax(150000, include_qbi=True)
        assert result.qbi_deduction == 24881

    def test_qbi_reduces_tax(self):
        without = compute_total_tax(150000)
        with_qbi = compute_total_tax(150000, include_qbi=True)

        assert with_qbi.total_tax < without.total_tax
        assert with_qbi.se_tax == without.se_tax
        assert with_qbi.agi == without.agi


class TestRetirement:
    """Retirement contributions reduce AGI."""

    def test_agi_reduced_by_contribution(self):
        without = compute_total_tax(100000, False, False)
        with_retirement = compute_total_tax(100000, False, True, 20000)

        assert with_retirement.agi == without.agi - 20000
        assert with_retirement.total_tax < without.total_tax
        assert with_retirement.retirement_contributions == 20000

    def test_se_tax_unchanged(self):
        """Contributions reduce income tax only, not SE tax."""
        without = compute_total_tax(100000)
        with_retirement = compute_total_tax(100000, include_retirement=True, retirement_amount=20000)
        assert with_retirement.se_tax == without.se_tax

    def test_both_deductions(self):
        """QBI and a max 401(k) together save over $5,000 at $150,000."""
        none = compute_total_tax(150000)
        both = compute_total_tax(150000, True, True, 23500)

        assert both.qbi_deduction > 0
        assert both.retirement_contributions == 23500
        assert none.total_tax - both.total_tax > 5000
