"""
Unit Tests for RoundingMode parsing and stdlib interop.
"""

import decimal
import os
import sys

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..'))

from halfeven.errors import DecimalErrorCode, InvalidArgumentError
from halfeven.rounding_mode import RoundingMode


class TestParse:

    @pytest.mark.parametrize("text", [
        "half_even", "HALF_EVEN", "Half_Even", "ROUND_HALF_EVEN", " half_even ",
    ])
    def test_spellings(self, text) -> None:
        assert RoundingMode.parse(text) is RoundingMode.HALF_EVEN

    def test_member_passes_through(self) -> None:
        assert RoundingMode.parse(RoundingMode.FLOOR) is RoundingMode.FLOOR

    @pytest.mark.parametrize("value", ["", "half", "round_05up", 3, None])
    def test_unknown_rejected(self, value) -> None:
        with pytest.raises(InvalidArgumentError) as exc_info:
            RoundingMode.parse(value)
        assert exc_info.value.error_code == DecimalErrorCode.UNKNOWN_MODE


class TestDecimalConstants:

    def test_every_mode_maps_to_stdlib(self) -> None:
        for mode in RoundingMode:
            assert mode.decimal_constant == getattr(decimal, "ROUND_" + mode.name)

    def test_stdlib_constant_parses_back(self) -> None:
        for mode in RoundingMode:
            assert RoundingMode.parse(mode.decimal_constant) is mode

    def test_half_modes(self) -> None:
        halves = {m for m in RoundingMode if m.is_half}
        assert halves == {RoundingMode.HALF_EVEN, RoundingMode.HALF_UP, RoundingMode.HALF_DOWN}
