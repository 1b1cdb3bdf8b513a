"""
============================================================================
halfeven - Decimal Rounder
============================================================================

Decimal Integrity: Rounding works on the integer significand only; no
                   binary floating-point intermediate at any step

Purpose: Round an exact DecimalValue to a target number of fractional
digits under a RoundingMode (HALF_EVEN by default).

ALGORITHM:
    1. value.scale <= target_scale        -> value returned unchanged
    2. divmod(|significand|, 10 ** dropped) -> kept prefix, discarded suffix
    3. suffix compared with one half unit in the last kept place
       (below: truncate, above: increment, exactly half: tie break)
    4. sign reapplied to the rounded magnitude
    5. result carries scale == target_scale

Example Usage:
    rounder = DecimalRounder()

    rounder.round(DecimalValue.from_string("2.545"), 2, RoundingMode.HALF_EVEN)
    # DecimalValue('2.54')

    rounder.quantize("7.1", 2)
    # DecimalValue('7.10')

ERROR CODES:
    - DEC-002: Invalid target scale (negative or not an integer)
    - DEC-004: Unknown rounding mode
    - DEC-001 / DEC-003: Raised while coercing the input value

============================================================================
"""

from typing import Any, Optional, Union
import logging

from halfeven.config import RoundingConfig, get_rounding_config
from halfeven.decimal_value import DecimalValue
from halfeven.errors import DecimalErrorCode, InvalidArgumentError
from halfeven.rounding_mode import RoundingMode

logger = logging.getLogger(__name__)


ModeLike = Union[RoundingMode, str]


class DecimalRounder:
    """
    Correctly rounded decimal rounding.

    Stateless apart from its configuration, which only supplies defaults
    for omitted arguments. One instance may be shared across threads.

    Input Constraints: target_scale >= 0
    Side Effects: Logs rejected arguments
    """

    def __init__(self, config: Optional[RoundingConfig] = None):
        """
        Args:
            config: Defaults for omitted mode/scale. When None, the global
                configuration is loaded from the environment on first use.
        """
        self._config = config

    @property
    def config(self) -> RoundingConfig:
        if self._config is None:
            return get_rounding_config()
        return self._config

    def round(
        self,
        value: Any,
        target_scale: Optional[int] = None,
        mode: Optional[ModeLike] = None,
        correlation_id: Optional[str] = None
    ) -> DecimalValue:
        """
        Round ``value`` to ``target_scale`` fractional digits.

        Args:
            value: DecimalValue, or str/int/Decimal coerced exactly
            target_scale: Fractional digits to keep (default from config)
            mode: Rounding mode (default from config, HALF_EVEN)
            correlation_id: Audit trail identifier for failure logs

        Returns:
            New DecimalValue with scale == target_scale, or ``value``
            itself when it already has no more than target_scale digits

        Raises:
            InvalidArgumentError: DEC-002 for a bad scale, DEC-004 for an
                unknown mode, DEC-001/DEC-003 for an unusable value
            RoundingConfigurationError: CFG-001 when an omitted argument
                needs the global configuration and the environment is
                invalid. The whole configuration is validated on load, so a
                bad HALFEVEN_DEFAULT_SCALE also fails a call that passes
                target_scale but omits mode.
        """
        decimal_value, target_scale, mode = self._resolve(
            value, target_scale, mode, correlation_id
        )

        if decimal_value.scale <= target_scale:
            return decimal_value

        divisor = 10 ** (decimal_value.scale - target_scale)
        negative = decimal_value.significand < 0
        kept, discarded = divmod(abs(decimal_value.significand), divisor)

        if discarded and _should_increment(mode, kept, discarded, divisor, negative):
            kept += 1

        return DecimalValue(-kept if negative else kept, target_scale)

    def quantize(
        self,
        value: Any,
        target_scale: Optional[int] = None,
        mode: Optional[ModeLike] = None,
        correlation_id: Optional[str] = None
    ) -> DecimalValue:
        """
        Round, then pad with zeros so the result has exactly
        ``target_scale`` fractional digits (``7.1`` -> ``7.10``).

        Same arguments and errors as round().
        """
        decimal_value, target_scale, mode = self._resolve(
            value, target_scale, mode, correlation_id
        )
        return self.round(decimal_value, target_scale, mode).rescale(target_scale)

    def round_half_even(
        self,
        value: Any,
        target_scale: Optional[int] = None,
        correlation_id: Optional[str] = None
    ) -> DecimalValue:
        """Bankers' rounding regardless of the configured default mode."""
        return self.round(value, target_scale, RoundingMode.HALF_EVEN, correlation_id)

    # -------------------------------------------------------------------------
    # Argument handling
    # -------------------------------------------------------------------------

    def _resolve(
        self,
        value: Any,
        target_scale: Optional[int],
        mode: Optional[ModeLike],
        correlation_id: Optional[str]
    ):
        try:
            decimal_value = DecimalValue.coerce(value)
            if target_scale is None:
                target_scale = self.config.default_scale
            _check_scale(target_scale)
            mode = self.config.default_mode if mode is None else RoundingMode.parse(mode)
        except InvalidArgumentError as e:
            logger.error(
                f"[{e.error_code}] Rounding rejected | "
                f"value={value!r} | target_scale={target_scale!r} | mode={mode!r} | "
                f"correlation_id={correlation_id} | error={e.message}"
            )
            raise
        return decimal_value, target_scale, mode


def _check_scale(target_scale: Any) -> None:
    if isinstance(target_scale, bool) or not isinstance(target_scale, int):
        raise InvalidArgumentError(
            f"Target scale must be an int, got {type(target_scale).__name__}",
            DecimalErrorCode.INVALID_SCALE,
            {"target_scale": repr(target_scale)},
        )
    if target_scale < 0:
        raise InvalidArgumentError(
            f"Target scale must be non-negative, got {target_scale}",
            DecimalErrorCode.INVALID_SCALE,
            {"target_scale": target_scale},
        )


def _should_increment(
    mode: RoundingMode,
    kept: int,
    discarded: int,
    divisor: int,
    negative: bool
) -> bool:
    """
    Decide whether the kept magnitude moves one unit away from zero.

    ``discarded / divisor`` is the dropped fraction of one unit in the last
    kept place and is never zero here.
    """
    if not mode.is_half:
        if mode is RoundingMode.DOWN:
            return False
        if mode is RoundingMode.UP:
            return True
        if mode is RoundingMode.CEILING:
            return not negative
        return negative  # FLOOR

    # compare discarded fraction with exactly one half
    twice = discarded * 2
    if twice != divisor:
        return twice > divisor

    if mode is RoundingMode.HALF_UP:
        return True
    if mode is RoundingMode.HALF_DOWN:
        return False
    # HALF_EVEN: only an odd prefix moves, leaving an even last digit
    return kept % 2 == 1


# =============================================================================
# Module-level convenience functions
# =============================================================================

_rounder = DecimalRounder()


def round_decimal(
    value: Any,
    target_scale: Optional[int] = None,
    mode: Optional[ModeLike] = None,
    correlation_id: Optional[str] = None
) -> DecimalValue:
    """Module-level convenience function for DecimalRounder.round()."""
    return _rounder.round(value, target_scale, mode, correlation_id)


def quantize(
    value: Any,
    target_scale: Optional[int] = None,
    mode: Optional[ModeLike] = None,
    correlation_id: Optional[str] = None
) -> DecimalValue:
    """Module-level convenience function for DecimalRounder.quantize()."""
    return _rounder.quantize(value, target_scale, mode, correlation_id)


def round_half_even(
    value: Any,
    target_scale: Optional[int] = None,
    correlation_id: Optional[str] = None
) -> DecimalValue:
    """Module-level convenience function for bankers' rounding."""
    return _rounder.round_half_even(value, target_scale, correlation_id)


__all__ = [
    "DecimalRounder",
    "round_decimal",
    "quantize",
    "round_half_even",
]
