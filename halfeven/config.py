"""
============================================================================
halfeven - Configuration
============================================================================

Decimal Integrity: Default rounding is HALF_EVEN unless overridden

This module provides configuration management for DecimalRounder:
- Environment variable parsing with type safety
- Default values for optional configuration
- Validation that fails closed on a negative default scale (CFG-001)

ENVIRONMENT VARIABLES:
    - HALFEVEN_DEFAULT_MODE: Rounding mode name (default: half_even)
    - HALFEVEN_DEFAULT_SCALE: Fractional digits kept when no scale is
      passed (default: 2)

A ``.env`` file in the working directory is honoured via python-dotenv.

ERROR CODES:
    - CFG-001: Rounding configuration invalid

============================================================================
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional
import logging
import os

from dotenv import load_dotenv

from halfeven.errors import (
    DecimalErrorCode,
    InvalidArgumentError,
    RoundingConfigurationError,
)
from halfeven.rounding_mode import RoundingMode

# Load environment variables
load_dotenv()

# Configure module logger
logger = logging.getLogger(__name__)


# =============================================================================
# Default Values
# =============================================================================

ENV_DEFAULT_MODE = "HALFEVEN_DEFAULT_MODE"
ENV_DEFAULT_SCALE = "HALFEVEN_DEFAULT_SCALE"

# Bankers' rounding
DEFAULT_ROUNDING_MODE = RoundingMode.HALF_EVEN

# Two fractional digits (cents)
DEFAULT_SCALE = 2


# =============================================================================
# RoundingConfig Class
# =============================================================================

@dataclass
class RoundingConfig:
    """
    Defaults applied by DecimalRounder when a call omits them.

    Input Constraints: default_scale must be a non-negative int
    Side Effects: Logs configuration on load
    """

    default_mode: RoundingMode = DEFAULT_ROUNDING_MODE
    default_scale: int = DEFAULT_SCALE

    def __post_init__(self) -> None:
        # Accept mode names so RoundingConfig(default_mode="half_up") works
        self.default_mode = RoundingMode.parse(self.default_mode)

    def validate(self) -> None:
        """
        Validate configuration completeness.

        Raises:
            RoundingConfigurationError: If any value is out of range (CFG-001)
        """
        errors: List[str] = []

        if isinstance(self.default_scale, bool) or not isinstance(self.default_scale, int):
            errors.append(
                f"{ENV_DEFAULT_SCALE} must be an integer, got: {self.default_scale!r}"
            )
        elif self.default_scale < 0:
            errors.append(
                f"{ENV_DEFAULT_SCALE} must be non-negative, got: {self.default_scale}"
            )

        if errors:
            error_msg = "Rounding configuration validation failed: " + "; ".join(errors)
            logger.error(f"[{DecimalErrorCode.CONFIG_INVALID}] {error_msg}")
            raise RoundingConfigurationError(error_msg)

        logger.info(
            f"[HALFEVEN-CONFIG] Configuration validated | "
            f"default_mode={self.default_mode.value} | "
            f"default_scale={self.default_scale}"
        )

    @classmethod
    def from_environment(cls, validate: bool = True) -> "RoundingConfig":
        """
        Load configuration from environment variables.

        Unparseable values log a warning and fall back to the defaults. A
        negative scale parses fine and is then rejected by validate().

        Args:
            validate: Whether to validate configuration after loading

        Returns:
            RoundingConfig instance with values from environment

        Raises:
            RoundingConfigurationError: If validation fails (CFG-001)
        """
        mode_str = os.environ.get(ENV_DEFAULT_MODE, DEFAULT_ROUNDING_MODE.value)
        try:
            default_mode = RoundingMode.parse(mode_str)
        except InvalidArgumentError:
            logger.warning(
                f"[HALFEVEN-CONFIG] Invalid {ENV_DEFAULT_MODE} value: {mode_str}, "
                f"using default: {DEFAULT_ROUNDING_MODE.value}"
            )
            default_mode = DEFAULT_ROUNDING_MODE

        scale_str = os.environ.get(ENV_DEFAULT_SCALE, str(DEFAULT_SCALE))
        try:
            default_scale = int(scale_str.strip())
        except ValueError:
            logger.warning(
                f"[HALFEVEN-CONFIG] Invalid {ENV_DEFAULT_SCALE} value: {scale_str}, "
                f"using default: {DEFAULT_SCALE}"
            )
            default_scale = DEFAULT_SCALE

        logger.info(
            f"[HALFEVEN-CONFIG] Loading configuration from environment | "
            f"{ENV_DEFAULT_MODE}={default_mode.value} | "
            f"{ENV_DEFAULT_SCALE}={default_scale}"
        )

        config = cls(default_mode=default_mode, default_scale=default_scale)

        if validate:
            config.validate()

        return config

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary for serialization/logging."""
        return {
            "default_mode": self.default_mode.value,
            "default_scale": self.default_scale,
        }


# =============================================================================
# Module-Level Configuration Instance
# =============================================================================

_config_instance: Optional[RoundingConfig] = None


def get_rounding_config(validate: bool = True) -> RoundingConfig:
    """
    Get the global rounding configuration, loading it from the environment
    on first access.

    Raises:
        RoundingConfigurationError: If the environment is invalid (CFG-001)
    """
    global _config_instance

    if _config_instance is None:
        _config_instance = RoundingConfig.from_environment(validate=validate)

    return _config_instance


def reset_rounding_config() -> None:
    """Clear the global configuration instance (used by tests)."""
    global _config_instance
    _config_instance = None
    logger.debug("[HALFEVEN-CONFIG] Configuration instance reset")


__all__ = [
    "RoundingConfig",
    "DEFAULT_ROUNDING_MODE",
    "DEFAULT_SCALE",
    "ENV_DEFAULT_MODE",
    "ENV_DEFAULT_SCALE",
    "get_rounding_config",
    "reset_rounding_config",
]
