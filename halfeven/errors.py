"""
============================================================================
halfeven - Error Taxonomy
============================================================================

Decimal Integrity: Invalid input is rejected immediately, never coerced

Every rejection raised by this package is an InvalidArgumentError tagged
with one of the codes below. Configuration problems found while loading
settings raise RoundingConfigurationError instead.

ERROR CODES:
    - DEC-001: Malformed decimal text or non-finite Decimal
    - DEC-002: Invalid target scale (negative or not an integer)
    - DEC-003: Unsupported input type (float, bool, other)
    - DEC-004: Unknown rounding mode
    - DEC-005: Rescale would discard digits
    - CFG-001: Rounding configuration invalid

============================================================================
"""

from typing import Any, Dict, Optional


# =============================================================================
# Error Codes
# =============================================================================

class DecimalErrorCode:
    """Error codes for audit logging."""
    MALFORMED_VALUE = "DEC-001"
    INVALID_SCALE = "DEC-002"
    UNSUPPORTED_TYPE = "DEC-003"
    UNKNOWN_MODE = "DEC-004"
    PRECISION_LOSS = "DEC-005"
    CONFIG_INVALID = "CFG-001"


# =============================================================================
# Exceptions
# =============================================================================

class InvalidArgumentError(ValueError):
    """
    Raised when a decimal value, scale or rounding mode is rejected.

    Subclasses ValueError so callers that already guard numeric parsing
    with ``except ValueError`` keep working.

    Attributes:
        error_code: One of the DecimalErrorCode constants
        message: Human-readable description
        details: Optional structured context (offending input, etc.)
    """

    def __init__(
        self,
        message: str,
        error_code: str = DecimalErrorCode.MALFORMED_VALUE,
        details: Optional[Dict[str, Any]] = None
    ):
        self.error_code = error_code
        self.message = message
        self.details = details or {}
        super().__init__(f"[{error_code}] {message}")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for logging."""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class RoundingConfigurationError(Exception):
    """
    Raised when rounding configuration is invalid.

    Raised by RoundingConfig.validate(), so a bad environment fails at
    load time instead of on the first rounding call.
    """

    def __init__(self, message: str, error_code: str = DecimalErrorCode.CONFIG_INVALID):
        self.error_code = error_code
        self.message = message
        super().__init__(f"[{error_code}] {message}")


__all__ = [
    "DecimalErrorCode",
    "InvalidArgumentError",
    "RoundingConfigurationError",
]
