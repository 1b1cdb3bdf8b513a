"""
============================================================================
Property-Based Tests for Decimal Rounding
============================================================================

Properties tested with Hypothesis:
- Property 1: No-op when no digits are discarded
- Property 2: Rounding is idempotent
- Property 3: Every mode agrees with decimal.Decimal.quantize
- Property 4: HALF_EVEN is symmetric around zero
- Property 5: Result is within one unit in the last place
- Property 6: Canonical text survives parse/render unchanged
- Property 7: Exact addition matches integer arithmetic

============================================================================
"""

import os
import sys
from decimal import Decimal, localcontext

from hypothesis import given, settings, assume
from hypothesis import strategies as st

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..'))

from halfeven.decimal_value import DecimalValue
from halfeven.rounder import DecimalRounder
from halfeven.config import RoundingConfig
from halfeven.rounding_mode import RoundingMode


# =============================================================================
# HYPOTHESIS STRATEGIES
# =============================================================================

# Significands up to 30 digits, well inside the 100-digit test context
significand_strategy = st.integers(min_value=-10 ** 30, max_value=10 ** 30)

scale_strategy = st.integers(min_value=0, max_value=12)

mode_strategy = st.sampled_from(list(RoundingMode))

decimal_value_strategy = st.builds(
    DecimalValue,
    significand=significand_strategy,
    scale=scale_strategy,
)

# Values that end in an exact tie (...5 followed by zeros)
tie_strategy = st.builds(
    lambda kept, zeros, scale: DecimalValue((kept * 10 + 5) * 10 ** zeros, scale + zeros + 1),
    kept=st.integers(min_value=0, max_value=10 ** 12),
    zeros=st.integers(min_value=0, max_value=4),
    scale=st.integers(min_value=0, max_value=6),
)

canonical_text_strategy = st.from_regex(r"-?(0|[1-9][0-9]{0,20})(\.[0-9]{1,12})?", fullmatch=True)

rounder = DecimalRounder(RoundingConfig())


# =============================================================================
# PROPERTY 1: No-op when no digits are discarded
# =============================================================================

class TestNoDigitsDiscarded:

    @settings(max_examples=200)
    @given(value=decimal_value_strategy, extra=st.integers(min_value=0, max_value=10), mode=mode_strategy)
    def test_round_returns_value_unchanged(self, value, extra, mode) -> None:
        result = rounder.round(value, value.scale + extra, mode)

        assert result == value
        assert result.scale == value.scale


# =============================================================================
# PROPERTY 2: Idempotence
# =============================================================================

class TestIdempotence:

    @settings(max_examples=200)
    @given(value=decimal_value_strategy, target_scale=scale_strategy, mode=mode_strategy)
    def test_rounding_twice_equals_rounding_once(self, value, target_scale, mode) -> None:
        once = rounder.round(value, target_scale, mode)
        twice = rounder.round(once, target_scale, mode)

        assert twice == once
        assert twice.scale == once.scale


# =============================================================================
# PROPERTY 3: Agreement with the standard library
# =============================================================================

class TestAgreesWithDecimalQuantize:

    @settings(max_examples=500)
    @given(value=decimal_value_strategy, target_scale=scale_strategy, mode=mode_strategy)
    def test_quantize_matches_stdlib(self, value, target_scale, mode) -> None:
        with localcontext() as ctx:
            ctx.prec = 100
            expected = value.to_decimal().quantize(
                Decimal(1).scaleb(-target_scale), rounding=mode.decimal_constant
            )

        result = rounder.quantize(value, target_scale, mode)

        assert result.to_decimal() == expected
        assert result.scale == target_scale
        assert result.to_decimal().as_tuple().exponent == expected.as_tuple().exponent

    @settings(max_examples=300)
    @given(value=tie_strategy, mode=mode_strategy)
    def test_ties_match_stdlib(self, value, mode) -> None:
        target_scale = value.scale - 1 - _trailing_zeros(value)
        assume(target_scale >= 0)

        with localcontext() as ctx:
            ctx.prec = 100
            expected = value.to_decimal().quantize(
                Decimal(1).scaleb(-target_scale), rounding=mode.decimal_constant
            )

        assert rounder.round(value, target_scale, mode).to_decimal() == expected


# =============================================================================
# PROPERTY 4: HALF_EVEN symmetry
# =============================================================================

class TestHalfEvenSymmetry:

    @settings(max_examples=200)
    @given(value=decimal_value_strategy, target_scale=scale_strategy)
    def test_negation_commutes_with_rounding(self, value, target_scale) -> None:
        positive = rounder.round(value, target_scale, RoundingMode.HALF_EVEN)
        negative = rounder.round(-value, target_scale, RoundingMode.HALF_EVEN)

        assert negative == -positive

    @settings(max_examples=200)
    @given(value=tie_strategy)
    def test_ties_land_on_even_digit(self, value) -> None:
        target_scale = value.scale - 1 - _trailing_zeros(value)
        assume(target_scale >= 0)

        result = rounder.round(value, target_scale, RoundingMode.HALF_EVEN)

        assert result.significand % 2 == 0


# =============================================================================
# PROPERTY 5: Error bound
# =============================================================================

class TestErrorBound:

    @settings(max_examples=200)
    @given(value=decimal_value_strategy, target_scale=scale_strategy, mode=mode_strategy)
    def test_result_within_one_unit(self, value, target_scale, mode) -> None:
        result = rounder.round(value, target_scale, mode)
        unit = DecimalValue(1, target_scale)

        assert abs(result - value) < unit

    @settings(max_examples=200)
    @given(value=decimal_value_strategy, target_scale=scale_strategy)
    def test_half_modes_within_half_unit(self, value, target_scale) -> None:
        half_unit = DecimalValue(5, target_scale + 1)
        for mode in (RoundingMode.HALF_EVEN, RoundingMode.HALF_UP, RoundingMode.HALF_DOWN):
            result = rounder.round(value, target_scale, mode)
            assert abs(result - value) <= half_unit


# =============================================================================
# PROPERTY 6: Textual round trip
# =============================================================================

class TestTextRoundTrip:

    @settings(max_examples=300)
    @given(text=canonical_text_strategy)
    def test_parse_then_render_is_identity(self, text) -> None:
        value = DecimalValue.from_string(text)
        assume(value or not text.startswith("-"))

        assert value.to_string() == text

    @settings(max_examples=200)
    @given(value=decimal_value_strategy)
    def test_render_then_parse_is_identity(self, value) -> None:
        parsed = DecimalValue.from_string(value.to_string())

        assert parsed.significand == value.significand
        assert parsed.scale == value.scale

    @settings(max_examples=200)
    @given(value=decimal_value_strategy)
    def test_decimal_round_trip(self, value) -> None:
        assert DecimalValue.from_decimal(value.to_decimal()).to_string() == value.to_string()


# =============================================================================
# PROPERTY 7: Exact addition
# =============================================================================

class TestExactAddition:

    @settings(max_examples=200)
    @given(a=decimal_value_strategy, b=decimal_value_strategy)
    def test_sum_matches_decimal(self, a, b) -> None:
        with localcontext() as ctx:
            ctx.prec = 100
            expected = a.to_decimal() + b.to_decimal()

        total = a + b

        assert total.to_decimal() == expected
        assert total.scale == max(a.scale, b.scale)


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def _trailing_zeros(value: DecimalValue) -> int:
    """Count trailing zero digits in the fractional part."""
    count = 0
    significand = abs(value.significand)
    while count < value.scale and significand and significand % 10 == 0:
        significand //= 10
        count += 1
    return count
