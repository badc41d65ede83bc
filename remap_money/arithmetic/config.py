"""
============================================================================
Remap Money v1.0.0
Decimal Arithmetic - Configuration
============================================================================

This module provides configuration for the decimal arithmetic adapter:
- Environment variable parsing with type safety
- Default values matching a 38-digit decimal mantissa
- Validation of the decimal context limits
- The exactness policy (DecimalBehaviors) handed to each operation

ENVIRONMENT VARIABLES:
    - MONEY_DECIMAL_PRECISION: Significant digits kept per result (default: 38)
    - MONEY_DECIMAL_EMAX: Largest adjusted exponent (default: 165)
    - MONEY_DECIMAL_EMIN: Smallest normal adjusted exponent (default: -128)
    - MONEY_RAISE_ON_EXACTNESS: Raise when a result is rounded (default: false)
    - MONEY_RAISE_ON_OVERFLOW: Raise on exponent overflow (default: false)
    - MONEY_RAISE_ON_UNDERFLOW: Raise on exponent underflow (default: false)

Division by zero always raises and cannot be configured.

ERROR CODES:
    - DEC-010: Arithmetic configuration invalid

============================================================================
"""

from dataclasses import dataclass
from decimal import (
    Context,
    DivisionByZero,
    Inexact,
    InvalidOperation,
    Overflow,
    Underflow,
)
from typing import List, Optional
import logging
import os

from dotenv import load_dotenv

from remap_money.arithmetic.errors import (
    ArithmeticConfigurationError,
    DecimalErrorCode,
)
from remap_money.arithmetic.rounding import RoundingMode

# Configure module logger
logger = logging.getLogger(__name__)


# =============================================================================
# Default Values
# =============================================================================

# 38 significant digits, the width of a 128-bit decimal mantissa
DEFAULT_DECIMAL_PRECISION = 38

# Mantissa exponent range -128..127, expressed as adjusted exponents
DEFAULT_DECIMAL_EMAX = 165
DEFAULT_DECIMAL_EMIN = -128

# Anomalies other than division by zero are tolerated by default
DEFAULT_RAISE_ON_EXACTNESS = False
DEFAULT_RAISE_ON_OVERFLOW = False
DEFAULT_RAISE_ON_UNDERFLOW = False

# Fractional digits kept by remainder()
REMAINDER_SCALE = 38

_TRUE_VALUES = ("true", "1", "yes", "on")
_FALSE_VALUES = ("false", "0", "no", "off", "")


# =============================================================================
# DecimalBehaviors
# =============================================================================

@dataclass(frozen=True)
class DecimalBehaviors:
    """
    Exactness policy for a single arithmetic operation.

    Bundles the rounding mode, optional fractional scale and which anomaly
    classes raise. Builds a fresh decimal.Context per call, so the
    thread-local default context is never read or mutated.
    """

    rounding: RoundingMode = RoundingMode.BANKERS
    scale: Optional[int] = None
    precision: int = DEFAULT_DECIMAL_PRECISION
    emax: int = DEFAULT_DECIMAL_EMAX
    emin: int = DEFAULT_DECIMAL_EMIN
    raise_on_exactness: bool = DEFAULT_RAISE_ON_EXACTNESS
    raise_on_overflow: bool = DEFAULT_RAISE_ON_OVERFLOW
    raise_on_underflow: bool = DEFAULT_RAISE_ON_UNDERFLOW

    def context(self) -> Context:
        """Build the decimal.Context enforcing this policy."""
        traps = [InvalidOperation, DivisionByZero]
        if self.raise_on_overflow:
            traps.append(Overflow)
        if self.raise_on_underflow:
            traps.append(Underflow)
        if self.raise_on_exactness:
            traps.append(Inexact)

        return Context(
            prec=self.precision,
            rounding=self.rounding.decimal_rounding,
            Emax=self.emax,
            Emin=self.emin,
            traps=traps,
        )


# =============================================================================
# ArithmeticConfig Class
# =============================================================================

@dataclass
class ArithmeticConfig:
    """
    Decimal arithmetic configuration.

    ============================================================================
    CONFIGURATION PARAMETERS:
    ============================================================================
    - precision: Significant digits kept per result (default: 38)
    - emax: Largest adjusted exponent before overflow (default: 165)
    - emin: Smallest normal adjusted exponent (default: -128)
    - raise_on_exactness: Raise InexactResultError on rounding (default: False)
    - raise_on_overflow: Raise DecimalOverflowError (default: False)
    - raise_on_underflow: Raise DecimalUnderflowError (default: False)
    ============================================================================
    """

    precision: int = DEFAULT_DECIMAL_PRECISION
    emax: int = DEFAULT_DECIMAL_EMAX
    emin: int = DEFAULT_DECIMAL_EMIN
    raise_on_exactness: bool = DEFAULT_RAISE_ON_EXACTNESS
    raise_on_overflow: bool = DEFAULT_RAISE_ON_OVERFLOW
    raise_on_underflow: bool = DEFAULT_RAISE_ON_UNDERFLOW

    def validate(self) -> None:
        """
        Validate the decimal context limits.

        Raises:
            ArithmeticConfigurationError: If any limit is out of range (DEC-010)
        """
        errors: List[str] = []

        if self.precision <= 0:
            errors.append(
                f"MONEY_DECIMAL_PRECISION must be positive, got: {self.precision}"
            )

        if self.emax <= 0:
            errors.append(f"MONEY_DECIMAL_EMAX must be positive, got: {self.emax}")

        if self.emin >= 0:
            errors.append(f"MONEY_DECIMAL_EMIN must be negative, got: {self.emin}")

        if errors:
            error_msg = "Arithmetic configuration validation failed: " + "; ".join(errors)
            logger.error(f"[{DecimalErrorCode.CONFIG_INVALID}] {error_msg}")
            raise ArithmeticConfigurationError(error_msg)

        logger.info(
            f"[DEC-CONFIG] Configuration validated | "
            f"precision={self.precision} | "
            f"emax={self.emax} | "
            f"emin={self.emin} | "
            f"raise_on_exactness={self.raise_on_exactness} | "
            f"raise_on_overflow={self.raise_on_overflow} | "
            f"raise_on_underflow={self.raise_on_underflow}"
        )

    def behaviors(
        self,
        rounding: RoundingMode,
        scale: Optional[int] = None,
    ) -> DecimalBehaviors:
        """Exactness policy for one operation under this configuration."""
        return DecimalBehaviors(
            rounding=rounding,
            scale=scale,
            precision=self.precision,
            emax=self.emax,
            emin=self.emin,
            raise_on_exactness=self.raise_on_exactness,
            raise_on_overflow=self.raise_on_overflow,
            raise_on_underflow=self.raise_on_underflow,
        )

    @classmethod
    def from_environment(cls, validate: bool = True) -> "ArithmeticConfig":
        """
        Load configuration from environment variables.

        Malformed integers fall back to their defaults with a warning;
        well-formed but out-of-range values are rejected by validate().

        Args:
            validate: Whether to validate configuration after loading (default: True)

        Returns:
            ArithmeticConfig instance with values from environment

        Raises:
            ArithmeticConfigurationError: If a limit is out of range (DEC-010)
        """
        config = cls(
            precision=_read_int("MONEY_DECIMAL_PRECISION", DEFAULT_DECIMAL_PRECISION),
            emax=_read_int("MONEY_DECIMAL_EMAX", DEFAULT_DECIMAL_EMAX),
            emin=_read_int("MONEY_DECIMAL_EMIN", DEFAULT_DECIMAL_EMIN),
            raise_on_exactness=_read_bool(
                "MONEY_RAISE_ON_EXACTNESS", DEFAULT_RAISE_ON_EXACTNESS
            ),
            raise_on_overflow=_read_bool(
                "MONEY_RAISE_ON_OVERFLOW", DEFAULT_RAISE_ON_OVERFLOW
            ),
            raise_on_underflow=_read_bool(
                "MONEY_RAISE_ON_UNDERFLOW", DEFAULT_RAISE_ON_UNDERFLOW
            ),
        )

        logger.info(
            f"[DEC-CONFIG] Loading configuration from environment | "
            f"MONEY_DECIMAL_PRECISION={config.precision} | "
            f"MONEY_DECIMAL_EMAX={config.emax} | "
            f"MONEY_DECIMAL_EMIN={config.emin}"
        )

        if validate:
            config.validate()

        return config

    def to_dict(self) -> dict:
        """Convert configuration to dictionary for serialization/logging."""
        return {
            "precision": self.precision,
            "emax": self.emax,
            "emin": self.emin,
            "raise_on_exactness": self.raise_on_exactness,
            "raise_on_overflow": self.raise_on_overflow,
            "raise_on_underflow": self.raise_on_underflow,
            "raise_on_divide_by_zero": True,
        }


def _read_int(name: str, default: int) -> int:
    raw = os.environ.get(name, str(default))
    try:
        return int(raw.strip())
    except ValueError:
        logger.warning(
            f"[DEC-CONFIG] Invalid {name} value: {raw}, using default: {default}"
        )
        return default


def _read_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    value = raw.lower().strip()
    if value in _TRUE_VALUES:
        return True
    if value not in _FALSE_VALUES:
        logger.warning(
            f"[DEC-CONFIG] Invalid {name} value: {raw}, using default: {default}"
        )
        return default
    return False


# =============================================================================
# Module-Level Configuration Instance
# =============================================================================

# Global configuration instance (lazy-loaded)
_config_instance: Optional[ArithmeticConfig] = None


def get_arithmetic_config(validate: bool = True) -> ArithmeticConfig:
    """
    Get the global arithmetic configuration instance.

    Loads a .env file (if present) and reads the environment on first access.

    Raises:
        ArithmeticConfigurationError: If a limit is out of range (DEC-010)
    """
    global _config_instance

    if _config_instance is None:
        load_dotenv()
        _config_instance = ArithmeticConfig.from_environment(validate=validate)

    return _config_instance


def reset_arithmetic_config() -> None:
    """
    Reset the global arithmetic configuration instance.

    Primarily for tests, so each case can load a fresh environment.
    """
    global _config_instance
    _config_instance = None
    logger.debug("[DEC-CONFIG] Configuration instance reset")
