"""
Unit Tests for Decimal Arithmetic Configuration Parsing

Tests the arithmetic configuration module:
- Default values for optional configuration
- Custom values from environment variables
- Out-of-range limits fail with DEC-010
- DecimalBehaviors builds a matching decimal.Context
"""

import pytest
import logging
import os
from unittest.mock import patch
from decimal import (
    ROUND_HALF_EVEN,
    ROUND_HALF_UP,
    DivisionByZero,
    Inexact,
    InvalidOperation,
    Overflow,
    Underflow,
)

import sys
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..'))

from remap_money.arithmetic.config import (
    ArithmeticConfig,
    DecimalBehaviors,
    DEFAULT_DECIMAL_PRECISION,
    DEFAULT_DECIMAL_EMAX,
    DEFAULT_DECIMAL_EMIN,
    DEFAULT_RAISE_ON_OVERFLOW,
    REMAINDER_SCALE,
    get_arithmetic_config,
    reset_arithmetic_config,
)
from remap_money.arithmetic.errors import (
    ArithmeticConfigurationError,
    DecimalErrorCode,
)
from remap_money.arithmetic.rounding import RoundingMode


ENV_VARS = [
    "MONEY_DECIMAL_PRECISION",
    "MONEY_DECIMAL_EMAX",
    "MONEY_DECIMAL_EMIN",
    "MONEY_RAISE_ON_EXACTNESS",
    "MONEY_RAISE_ON_OVERFLOW",
    "MONEY_RAISE_ON_UNDERFLOW",
]


# =============================================================================
# Test Fixtures
# =============================================================================

@pytest.fixture(autouse=True)
def clean_environment():
    """
    Clean environment variables before and after each test.
    """
    original_env = {}
    for var in ENV_VARS:
        original_env[var] = os.environ.get(var)
        if var in os.environ:
            del os.environ[var]

    reset_arithmetic_config()

    # A stray .env in the working directory must not leak into tests
    with patch("remap_money.arithmetic.config.load_dotenv"):
        yield

    for var, value in original_env.items():
        if value is not None:
            os.environ[var] = value
        elif var in os.environ:
            del os.environ[var]

    reset_arithmetic_config()


# =============================================================================
# Test Default Values
# =============================================================================

class TestDefaultValues:
    """Default configuration values."""

    def test_default_precision_is_38_digits(self) -> None:
        assert DEFAULT_DECIMAL_PRECISION == 38

    def test_default_exponent_range(self) -> None:
        assert DEFAULT_DECIMAL_EMAX == 165
        assert DEFAULT_DECIMAL_EMIN == -128

    def test_remainder_scale(self) -> None:
        assert REMAINDER_SCALE == 38

    def test_config_dataclass_defaults(self) -> None:
        config = ArithmeticConfig()

        assert config.precision == 38
        assert config.raise_on_exactness is False
        assert config.raise_on_overflow is False
        assert config.raise_on_underflow is False

    def test_from_environment_uses_defaults_when_not_set(self) -> None:
        config = ArithmeticConfig.from_environment(validate=True)

        assert config == ArithmeticConfig()


# =============================================================================
# Test Custom Values
# =============================================================================

class TestCustomValues:
    """Values read from environment variables."""

    def test_custom_limits(self) -> None:
        os.environ["MONEY_DECIMAL_PRECISION"] = "28"
        os.environ["MONEY_DECIMAL_EMAX"] = "999999"
        os.environ["MONEY_DECIMAL_EMIN"] = "-999999"

        config = ArithmeticConfig.from_environment()

        assert config.precision == 28
        assert config.emax == 999999
        assert config.emin == -999999

    @pytest.mark.parametrize("raw", ["true", "TRUE", "1", "yes", "on", " True "])
    def test_raise_flags_truthy(self, raw: str) -> None:
        os.environ["MONEY_RAISE_ON_EXACTNESS"] = raw
        os.environ["MONEY_RAISE_ON_OVERFLOW"] = raw
        os.environ["MONEY_RAISE_ON_UNDERFLOW"] = raw

        config = ArithmeticConfig.from_environment()

        assert config.raise_on_exactness is True
        assert config.raise_on_overflow is True
        assert config.raise_on_underflow is True

    @pytest.mark.parametrize("raw", ["false", "0", "no", "off", ""])
    def test_raise_flags_falsy(self, raw: str) -> None:
        os.environ["MONEY_RAISE_ON_OVERFLOW"] = raw

        config = ArithmeticConfig.from_environment()

        assert config.raise_on_overflow is False

    @pytest.mark.parametrize("raw", ["ture", "enabled", "2"])
    def test_unrecognised_flag_warns_and_uses_default(self, raw: str, caplog) -> None:
        os.environ["MONEY_RAISE_ON_OVERFLOW"] = raw

        with caplog.at_level(logging.WARNING, logger="remap_money.arithmetic.config"):
            config = ArithmeticConfig.from_environment()

        assert config.raise_on_overflow is DEFAULT_RAISE_ON_OVERFLOW
        assert "Invalid MONEY_RAISE_ON_OVERFLOW" in caplog.text

    def test_recognised_flag_does_not_warn(self, caplog) -> None:
        os.environ["MONEY_RAISE_ON_OVERFLOW"] = "off"

        with caplog.at_level(logging.WARNING, logger="remap_money.arithmetic.config"):
            ArithmeticConfig.from_environment()

        assert "Invalid MONEY_RAISE_ON_OVERFLOW" not in caplog.text

    def test_invalid_integer_falls_back_to_default(self) -> None:
        os.environ["MONEY_DECIMAL_PRECISION"] = "lots"

        config = ArithmeticConfig.from_environment()

        assert config.precision == DEFAULT_DECIMAL_PRECISION

    def test_global_instance_is_cached(self) -> None:
        os.environ["MONEY_DECIMAL_PRECISION"] = "20"

        first = get_arithmetic_config()
        os.environ["MONEY_DECIMAL_PRECISION"] = "30"
        second = get_arithmetic_config()

        assert first is second
        assert second.precision == 20

        reset_arithmetic_config()
        assert get_arithmetic_config().precision == 30

    def test_to_dict(self) -> None:
        data = ArithmeticConfig(precision=10).to_dict()

        assert data["precision"] == 10
        assert data["raise_on_divide_by_zero"] is True


# =============================================================================
# Test Validation
# =============================================================================

class TestValidation:
    """Out-of-range limits fail with DEC-010."""

    @pytest.mark.parametrize("kwargs", [
        {"precision": 0},
        {"precision": -5},
        {"emax": 0},
        {"emin": 0},
        {"emin": 10},
    ])
    def test_out_of_range_rejected(self, kwargs: dict) -> None:
        with pytest.raises(ArithmeticConfigurationError) as exc_info:
            ArithmeticConfig(**kwargs).validate()

        assert exc_info.value.error_code == DecimalErrorCode.CONFIG_INVALID
        assert "[DEC-010]" in str(exc_info.value)

    def test_from_environment_validates(self) -> None:
        os.environ["MONEY_DECIMAL_PRECISION"] = "0"

        with pytest.raises(ArithmeticConfigurationError):
            ArithmeticConfig.from_environment(validate=True)

    def test_from_environment_without_validation(self) -> None:
        os.environ["MONEY_DECIMAL_PRECISION"] = "0"

        config = ArithmeticConfig.from_environment(validate=False)

        assert config.precision == 0


# =============================================================================
# Test DecimalBehaviors
# =============================================================================

class TestDecimalBehaviors:
    """DecimalBehaviors.context() mirrors the policy."""

    def test_default_context(self) -> None:
        context = DecimalBehaviors(rounding=RoundingMode.PLAIN).context()

        assert context.prec == 38
        assert context.rounding == ROUND_HALF_UP
        assert context.Emax == 165
        assert context.Emin == -128
        assert context.traps[DivisionByZero]
        assert context.traps[InvalidOperation]
        assert not context.traps[Overflow]
        assert not context.traps[Underflow]
        assert not context.traps[Inexact]

    def test_strict_context(self) -> None:
        behaviors = DecimalBehaviors(
            raise_on_exactness=True,
            raise_on_overflow=True,
            raise_on_underflow=True,
        )
        context = behaviors.context()

        assert context.rounding == ROUND_HALF_EVEN
        assert context.traps[Overflow]
        assert context.traps[Underflow]
        assert context.traps[Inexact]

    def test_config_behaviors_carry_limits(self) -> None:
        config = ArithmeticConfig(precision=12, raise_on_overflow=True)

        behaviors = config.behaviors(RoundingMode.DOWN, scale=4)

        assert behaviors.precision == 12
        assert behaviors.scale == 4
        assert behaviors.rounding is RoundingMode.DOWN
        assert behaviors.raise_on_overflow is True

    def test_behaviors_are_immutable(self) -> None:
        behaviors = DecimalBehaviors()

        with pytest.raises(AttributeError):
            behaviors.precision = 10
