# ============================================================================
# halfeven v0.1.0
# Exact Decimal Rounding
# ============================================================================
#
# Decimal Integrity: values are integer significand + scale, never float
#
# Components:
#   - DecimalValue: Immutable exact decimal (significand * 10 ** -scale)
#   - RoundingMode: HALF_EVEN (default), HALF_UP, HALF_DOWN, UP, DOWN,
#     CEILING, FLOOR
#   - DecimalRounder: Correctly rounded rounding to a target scale
#   - RoundingConfig: Default mode/scale loaded from the environment
#
# ============================================================================

from halfeven.errors import (
    DecimalErrorCode,
    InvalidArgumentError,
    RoundingConfigurationError,
)
from halfeven.rounding_mode import RoundingMode
from halfeven.decimal_value import DecimalValue
from halfeven.config import (
    RoundingConfig,
    get_rounding_config,
    reset_rounding_config,
)
from halfeven.rounder import (
    DecimalRounder,
    round_decimal,
    quantize,
    round_half_even,
)

__all__ = [
    # Errors
    'DecimalErrorCode',
    'InvalidArgumentError',
    'RoundingConfigurationError',
    # Values
    'DecimalValue',
    'RoundingMode',
    # Configuration
    'RoundingConfig',
    'get_rounding_config',
    'reset_rounding_config',
    # Rounding
    'DecimalRounder',
    'round_decimal',
    'quantize',
    'round_half_even',
]

__version__ = '0.1.0'
