"""
============================================================================
halfeven - Exact Decimal Value
============================================================================

Decimal Integrity: significand and scale are plain Python ints, no float
                   ever participates in construction, comparison or sums

A DecimalValue is ``significand * 10 ** -scale``:

    DecimalValue.from_string("2.535")  ->  significand=2535, scale=3
    DecimalValue.from_string("-0.05")  ->  significand=-5,   scale=2
    DecimalValue.from_string("1200")   ->  significand=1200, scale=0

CANONICAL TEXT:
    Optional "-", integer digits without superfluous leading zeros, then
    "." and exactly ``scale`` fractional digits when scale > 0. Zero is
    never written with a sign. Parsing canonical text and rendering it
    back reproduces the original string.

ERROR CODES:
    - DEC-001: Malformed decimal text or non-finite Decimal
    - DEC-002: Negative scale
    - DEC-003: Unsupported input type (float, bool, other)
    - DEC-005: Rescale would discard digits

============================================================================
"""

import re
from dataclasses import dataclass
from decimal import Decimal
from functools import total_ordering
from typing import Any, Optional, Tuple

from halfeven.errors import DecimalErrorCode, InvalidArgumentError


# =============================================================================
# Constants
# =============================================================================

# Sign, integer digits, optional fraction. No exponent, no whitespace.
_DECIMAL_TEXT = re.compile(r"([+-]?)([0-9]+)(?:\.([0-9]+))?", re.ASCII)


# int <-> digit text goes through Decimal, which is exact and not subject
# to the interpreter limit on int/str conversion length (sys.set_int_max_str_digits)
def _int_from_digits(digits: str) -> int:
    return int(Decimal(digits))


def _digits_of(magnitude: int) -> Tuple[int, ...]:
    return Decimal(magnitude).as_tuple().digits


# =============================================================================
# DecimalValue
# =============================================================================

@total_ordering
@dataclass(frozen=True, eq=False)
class DecimalValue:
    """
    Immutable exact decimal number.

    Equality and ordering are numeric, so ``DecimalValue("2.50")`` equals
    ``DecimalValue("2.5")`` while keeping its own scale. Compare
    ``.scale`` explicitly when the number of fractional digits matters.
    """

    significand: int
    scale: int = 0

    def __post_init__(self) -> None:
        if isinstance(self.significand, bool) or not isinstance(self.significand, int):
            raise InvalidArgumentError(
                f"Significand must be an int, got {type(self.significand).__name__}",
                DecimalErrorCode.UNSUPPORTED_TYPE,
                {"significand": repr(self.significand)},
            )
        if isinstance(self.scale, bool) or not isinstance(self.scale, int):
            raise InvalidArgumentError(
                f"Scale must be an int, got {type(self.scale).__name__}",
                DecimalErrorCode.INVALID_SCALE,
                {"scale": repr(self.scale)},
            )
        if self.scale < 0:
            raise InvalidArgumentError(
                f"Scale must be non-negative, got {self.scale}",
                DecimalErrorCode.INVALID_SCALE,
                {"scale": self.scale},
            )

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    @classmethod
    def from_string(cls, text: str) -> "DecimalValue":
        """
        Parse plain decimal text such as ``"2.535"`` or ``"-10"``.

        Args:
            text: ASCII digits with an optional sign and fractional part

        Returns:
            DecimalValue whose scale is the number of fractional digits given

        Raises:
            InvalidArgumentError: DEC-001 if the text is not a plain decimal
        """
        if not isinstance(text, str):
            raise InvalidArgumentError(
                f"Decimal text must be a string, got {type(text).__name__}",
                DecimalErrorCode.UNSUPPORTED_TYPE,
                {"value": repr(text)},
            )

        match = _DECIMAL_TEXT.fullmatch(text)
        if match is None:
            raise InvalidArgumentError(
                f"Cannot parse '{text}' as a decimal",
                DecimalErrorCode.MALFORMED_VALUE,
                {"value": text},
            )

        sign, integer_digits, fraction_digits = match.groups()
        fraction_digits = fraction_digits or ""
        significand = _int_from_digits(integer_digits + fraction_digits)
        if sign == "-":
            significand = -significand
        return cls(significand, len(fraction_digits))

    @classmethod
    def from_int(cls, value: int) -> "DecimalValue":
        """Wrap an integer with scale 0."""
        return cls(value, 0)

    @classmethod
    def from_decimal(cls, value: Decimal) -> "DecimalValue":
        """
        Convert a finite ``decimal.Decimal`` exactly.

        The digit tuple is read directly, so no context precision or
        rounding applies. A positive exponent is folded into the
        significand (``Decimal("1E+2")`` becomes 100 with scale 0).
        """
        if not value.is_finite():
            raise InvalidArgumentError(
                f"Cannot represent non-finite Decimal '{value}'",
                DecimalErrorCode.MALFORMED_VALUE,
                {"value": str(value)},
            )

        sign, digits, exponent = value.as_tuple()
        significand = int(Decimal((0, digits, 0))) if digits else 0
        if exponent >= 0:
            significand *= 10 ** exponent
            scale = 0
        else:
            scale = -exponent
        if sign:
            significand = -significand
        return cls(significand, scale)

    @classmethod
    def coerce(cls, value: Any) -> "DecimalValue":
        """
        Build a DecimalValue from any supported input.

        Accepts DecimalValue (returned as is), str, int and Decimal.
        Floats are refused: their binary representation has already lost
        the decimal digits the caller meant.

        Raises:
            InvalidArgumentError: DEC-001 for malformed text,
                DEC-003 for float, bool or any other type
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            return cls.from_string(value)
        if isinstance(value, bool):
            raise InvalidArgumentError(
                "Booleans are not decimal values",
                DecimalErrorCode.UNSUPPORTED_TYPE,
                {"value": repr(value)},
            )
        if isinstance(value, int):
            return cls.from_int(value)
        if isinstance(value, Decimal):
            return cls.from_decimal(value)
        if isinstance(value, float):
            raise InvalidArgumentError(
                f"Binary floating point value {value!r} rejected; "
                f"pass the decimal text instead (e.g. '{value!r}')",
                DecimalErrorCode.UNSUPPORTED_TYPE,
                {"value": repr(value)},
            )
        raise InvalidArgumentError(
            f"Unsupported type {type(value).__name__} for a decimal value",
            DecimalErrorCode.UNSUPPORTED_TYPE,
            {"value": repr(value)},
        )

    # -------------------------------------------------------------------------
    # Rendering
    # -------------------------------------------------------------------------

    def to_string(self) -> str:
        """Render canonical decimal text."""
        sign = "-" if self.significand < 0 else ""
        digits = "".join(str(d) for d in _digits_of(abs(self.significand)))
        if self.scale == 0:
            return sign + digits

        digits = digits.rjust(self.scale + 1, "0")
        return f"{sign}{digits[:-self.scale]}.{digits[-self.scale:]}"

    def to_decimal(self) -> Decimal:
        """Exact ``decimal.Decimal`` with exponent ``-scale``."""
        sign = 1 if self.significand < 0 else 0
        digits = _digits_of(abs(self.significand))
        return Decimal((sign, digits, -self.scale))

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"DecimalValue('{self.to_string()}')"

    # -------------------------------------------------------------------------
    # Scale adjustments
    # -------------------------------------------------------------------------

    def rescale(self, target_scale: int) -> "DecimalValue":
        """
        Pad with trailing zeros up to ``target_scale``.

        Only widening is exact; use DecimalRounder to drop digits.

        Raises:
            InvalidArgumentError: DEC-002 for a negative scale,
                DEC-005 if ``target_scale`` is below the current scale
        """
        if isinstance(target_scale, bool) or not isinstance(target_scale, int) or target_scale < 0:
            raise InvalidArgumentError(
                f"Target scale must be a non-negative int, got {target_scale!r}",
                DecimalErrorCode.INVALID_SCALE,
                {"target_scale": repr(target_scale)},
            )
        if target_scale < self.scale:
            raise InvalidArgumentError(
                f"Rescaling {self} to {target_scale} digits would discard digits",
                DecimalErrorCode.PRECISION_LOSS,
                {"value": self.to_string(), "target_scale": target_scale},
            )
        if target_scale == self.scale:
            return self
        return DecimalValue(self.significand * 10 ** (target_scale - self.scale), target_scale)

    def normalize(self) -> "DecimalValue":
        """Strip trailing fractional zeros (``2.500`` -> ``2.5``)."""
        significand, scale = self.significand, self.scale
        while scale > 0 and significand % 10 == 0:
            significand //= 10
            scale -= 1
        if scale == self.scale:
            return self
        return DecimalValue(significand, scale)

    @property
    def is_negative(self) -> bool:
        return self.significand < 0

    # -------------------------------------------------------------------------
    # Exact arithmetic (addition and subtraction only)
    # -------------------------------------------------------------------------

    @classmethod
    def _operand(cls, other: Any) -> Optional["DecimalValue"]:
        if isinstance(other, cls):
            return other
        if isinstance(other, int) and not isinstance(other, bool):
            return cls.from_int(other)
        if isinstance(other, Decimal) and other.is_finite():
            return cls.from_decimal(other)
        return None

    def _aligned(self, other: "DecimalValue") -> Tuple[int, int, int]:
        """Both significands expressed at the larger of the two scales."""
        scale = max(self.scale, other.scale)
        return (
            self.significand * 10 ** (scale - self.scale),
            other.significand * 10 ** (scale - other.scale),
            scale,
        )

    def __add__(self, other: Any) -> "DecimalValue":
        operand = self._operand(other)
        if operand is None:
            return NotImplemented
        left, right, scale = self._aligned(operand)
        return DecimalValue(left + right, scale)

    __radd__ = __add__

    def __sub__(self, other: Any) -> "DecimalValue":
        operand = self._operand(other)
        if operand is None:
            return NotImplemented
        left, right, scale = self._aligned(operand)
        return DecimalValue(left - right, scale)

    def __rsub__(self, other: Any) -> "DecimalValue":
        operand = self._operand(other)
        if operand is None:
            return NotImplemented
        return operand - self

    def __neg__(self) -> "DecimalValue":
        return DecimalValue(-self.significand, self.scale)

    def __abs__(self) -> "DecimalValue":
        return self if self.significand >= 0 else -self

    def __bool__(self) -> bool:
        return self.significand != 0

    # -------------------------------------------------------------------------
    # Comparison
    # -------------------------------------------------------------------------

    def __eq__(self, other: Any) -> bool:
        operand = self._operand(other)
        if operand is None:
            return NotImplemented
        left, right, _ = self._aligned(operand)
        return left == right

    def __lt__(self, other: Any) -> bool:
        operand = self._operand(other)
        if operand is None:
            return NotImplemented
        left, right, _ = self._aligned(operand)
        return left < right

    def __hash__(self) -> int:
        # Decimal hashes numerically, consistent with int and Decimal equality
        return hash(self.to_decimal())


__all__ = ["DecimalValue"]
