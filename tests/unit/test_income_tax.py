"""Tests for progressive bracket income tax.

Expected values use the built-in 2025 single-filer table:
10% to $11,700, 12% to $47,150, 22% to $100,525, 24% to $191,950, ...
"""

import math

import pytest

from esttax.sdk.taxes import TAX_YEAR_2025, bracket_breakdown, compute_bracket_tax, round_to_dollar


class TestNonPositiveIncome:
    """Zero and negative taxable income."""

    @pytest.mark.parametrize("income", [0, -1, -1000, -1e9])
    def test_returns_zero(self, income):
        """No tax on non-positive income."""
        assert compute_bracket_tax(income) == 0

    @pytest.mark.parametrize("income", [math.inf, -math.inf, math.nan])
    def test_non_finite_returns_zero(self, income):
        """inf/nan income does not raise."""
        assert compute_bracket_tax(income) == 0


class TestBracketMath:
    """Tax across one or more brackets."""

    def test_single_bracket(self):
        """$10,000 is all in the 10% bracket."""
        assert compute_bracket_tax(10000) == 1000

    def test_multiple_brackets(self):
        """$50,000: 1,170 + 4,254 + 627 = 6,051."""
        assert compute_bracket_tax(50000) == 6051

    def test_high_income(self):
        """$171,868 reaches the 24% bracket: 1,170 + 4,254 + 11,742.50 + 17,122.32."""
        assert compute_bracket_tax(171868) == 34289

    def test_top_bracket_unbounded(self):
        """Income above the last edge is taxed at 37% without limit."""
        at_edge = compute_bracket_tax(609350)
        above = compute_bracket_tax(709350)
        assert above - at_edge == 37000

    def test_explicit_rules_match_default(self):
        """Passing the built-in table explicitly gives the same answer."""
        assert compute_bracket_tax(50000, TAX_YEAR_2025) == compute_bracket_tax(50000)


class TestBracketContinuity:
    """No gap or double counting at bracket edges."""

    def test_first_edge(self):
        """At $11,700 exactly, only the 10% bracket applies."""
        assert compute_bracket_tax(11700) == 1170

    def test_second_edge(self):
        """At $47,150 exactly: full 10% span plus full 12% span."""
        assert compute_bracket_tax(47150) == 1170 + 4254

    def test_one_dollar_over_edge(self):
        """One dollar past an edge adds at most the next bracket's rate."""
        assert compute_bracket_tax(47151) - compute_bracket_tax(47150) in (0, 1)

    def test_monotonic(self):
        """Tax never decreases as income rises."""
        previous = 0
        for income in range(0, 800001, 2500):
            tax = compute_bracket_tax(income)
            assert tax >= previous, f"tax dropped at {income}"
            previous = tax


class TestRoundOnce:
    """Rounding happens after summing, not per bracket."""

    def test_breakdown_sums_to_tax(self):
        """Per-bracket amounts sum (unrounded) to the rounded total."""
        rows = bracket_breakdown(54701)
        assert round_to_dollar(sum(r["tax"] for r in rows)) == compute_bracket_tax(54701) == 7085

    def test_breakdown_covers_every_bracket(self):
        """One row per bracket; brackets above the income carry zero."""
        rows = bracket_breakdown(50000)
        assert len(rows) == len(TAX_YEAR_2025.brackets)
        assert rows[2]["income_in_bracket"] == pytest.approx(2850)
        assert all(r["tax"] == 0 for r in rows[3:])


class TestRoundToDollar:
    """Whole-dollar rounding."""

    @pytest.mark.parametrize("amount,expected", [
        (0, 0),
        (1172.5, 1173),
        (5298.5, 5299),
        (6051.2, 6051),
        (6051.7, 6052),
    ])
    def test_halves_round_up(self, amount, expected):
        """0.50 rounds up; otherwise nearest dollar."""
        assert round_to_dollar(amount) == expected

    @pytest.mark.parametrize("amount", [math.inf, -math.inf, math.nan])
    def test_non_finite_is_zero(self, amount):
        assert round_to_dollar(amount) == 0
