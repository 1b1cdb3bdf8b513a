"""
============================================================================
halfeven - Rounding Modes
============================================================================

Enumerated rounding policies. HALF_EVEN (bankers' rounding) is the
default everywhere in this package.

    HALF_EVEN  nearest, ties to the even neighbour
    HALF_UP    nearest, ties away from zero
    HALF_DOWN  nearest, ties toward zero
    UP         away from zero
    DOWN       toward zero (truncate)
    CEILING    toward positive infinity
    FLOOR      toward negative infinity

============================================================================
"""

import decimal
from enum import Enum
from typing import Union

from halfeven.errors import DecimalErrorCode, InvalidArgumentError


class RoundingMode(str, Enum):
    """Rounding policy applied when digits are discarded."""

    HALF_EVEN = "half_even"
    HALF_UP = "half_up"
    HALF_DOWN = "half_down"
    UP = "up"
    DOWN = "down"
    CEILING = "ceiling"
    FLOOR = "floor"

    @property
    def decimal_constant(self) -> str:
        """The matching ``decimal.ROUND_*`` constant."""
        return _DECIMAL_CONSTANTS[self]

    @property
    def is_half(self) -> bool:
        """True for round-to-nearest modes (those with a tie break)."""
        return self.value.startswith("half_")

    @classmethod
    def parse(cls, value: Union["RoundingMode", str]) -> "RoundingMode":
        """
        Resolve a rounding mode from a member, a name or a stdlib constant.

        Accepted spellings (case-insensitive): ``"half_even"``,
        ``"HALF_EVEN"``, ``"ROUND_HALF_EVEN"``.

        Raises:
            InvalidArgumentError: DEC-004 for anything else
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            raise InvalidArgumentError(
                f"Rounding mode must be a RoundingMode or string, "
                f"got {type(value).__name__}",
                DecimalErrorCode.UNKNOWN_MODE,
                {"value": repr(value)},
            )

        key = value.strip().lower()
        if key.startswith("round_"):
            key = key[len("round_"):]
        try:
            return cls(key)
        except ValueError:
            raise InvalidArgumentError(
                f"Unknown rounding mode '{value}'. "
                f"Expected one of: {', '.join(m.value for m in cls)}",
                DecimalErrorCode.UNKNOWN_MODE,
                {"value": value},
            ) from None


_DECIMAL_CONSTANTS = {
    RoundingMode.HALF_EVEN: decimal.ROUND_HALF_EVEN,
    RoundingMode.HALF_UP: decimal.ROUND_HALF_UP,
    RoundingMode.HALF_DOWN: decimal.ROUND_HALF_DOWN,
    RoundingMode.UP: decimal.ROUND_UP,
    RoundingMode.DOWN: decimal.ROUND_DOWN,
    RoundingMode.CEILING: decimal.ROUND_CEILING,
    RoundingMode.FLOOR: decimal.ROUND_FLOOR,
}


__all__ = ["RoundingMode"]
