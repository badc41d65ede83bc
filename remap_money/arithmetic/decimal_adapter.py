# ============================================================================
# Remap Money v1.0.0
# Decimal Arithmetic Adapter
# ============================================================================
#
# Purpose: add/subtract/multiply/divide/negate/remainder over decimal.Decimal
#          with the rounding mode passed explicitly on every call.
#
# MANDATE:
#   - No float arithmetic; floats are converted via str() before use
#   - Every call builds its own decimal.Context (the thread-local default
#     context is never read or mutated)
#   - Division and remainder by zero always raise DivideByZeroError
#   - Overflow/underflow/inexact raise only when configured to; otherwise
#     they are logged and counted
#   - remainder() ignores caller rounding: half-even at 38 fractional digits
#
# Error Codes:
#   - DEC-001: Division or remainder by zero
#   - DEC-002: Overflow
#   - DEC-003: Underflow
#   - DEC-004: Inexact result
#   - DEC-005: Invalid operation
#   - DEC-006: Decimal conversion failed
#
# ============================================================================

from decimal import (
    Context,
    Decimal,
    DivisionByZero,
    DivisionUndefined,
    Inexact,
    InvalidOperation,
    Overflow,
    Underflow,
)
from typing import Callable, Optional, Type, Union
import logging

from remap_money.arithmetic.config import (
    REMAINDER_SCALE,
    ArithmeticConfig,
    DecimalBehaviors,
    get_arithmetic_config,
)
from remap_money.arithmetic.errors import (
    DecimalArithmeticError,
    DecimalConversionError,
    DecimalErrorCode,
    DecimalOverflowError,
    DecimalUnderflowError,
    DivideByZeroError,
    InexactResultError,
    InvalidDecimalOperationError,
)
from remap_money.arithmetic.rounding import REMAINDER_ROUNDING, RoundingMode
from remap_money.observability.metrics import (
    CONDITION_DIVIDE_BY_ZERO,
    CONDITION_INEXACT,
    CONDITION_INVALID,
    CONDITION_OVERFLOW,
    CONDITION_UNDERFLOW,
    record_anomaly,
    record_operation,
)

logger = logging.getLogger(__name__)

DecimalLike = Union[Decimal, str, int, float]
ModeLike = Union[RoundingMode, str]

ZERO = Decimal("0")
ONE = Decimal("1")


class DecimalArithmetic:
    """
    Decimal arithmetic with caller-controlled rounding.

    Every operation is a pure function of its operands, the rounding mode
    and the configured exactness policy. Results are rounded to the
    configured precision (38 significant digits by default).

    Example Usage:
        arithmetic = DecimalArithmetic()

        arithmetic.add(Decimal("1.5"), Decimal("2.25"), RoundingMode.PLAIN)
        # Decimal('3.75')

        arithmetic.divide("10", "3", RoundingMode.BANKERS)
        # Decimal('3.3333333333333333333333333333333333333')

        arithmetic.remainder(Decimal("-7"), Decimal("3"))
        # Decimal('-1')  (sign follows the dividend)
    """

    def __init__(self, config: Optional[ArithmeticConfig] = None):
        """
        Args:
            config: Fixed configuration; when omitted the global
                configuration is resolved on every call
        """
        self._config = config

    @property
    def config(self) -> ArithmeticConfig:
        if self._config is not None:
            return self._config
        return get_arithmetic_config()

    # ------------------------------------------------------------------------
    # Constants and queries
    # ------------------------------------------------------------------------

    @staticmethod
    def zero() -> Decimal:
        """Additive identity."""
        return ZERO

    @staticmethod
    def one() -> Decimal:
        """Multiplicative identity."""
        return ONE

    def is_negative(self, value: DecimalLike) -> bool:
        """True iff value is strictly below zero (-0 is not negative)."""
        return self.to_decimal(value) < ZERO

    def to_decimal(self, value: Union[DecimalLike, None]) -> Decimal:
        """
        Convert a numeric value to Decimal without float contamination.

        None is treated as zero. Floats are converted through str(), so
        0.1 becomes Decimal('0.1') rather than its binary expansion.

        Raises:
            DecimalConversionError: If the value is not numeric or is NaN (DEC-006)
        """
        if value is None:
            return ZERO

        if isinstance(value, Decimal):
            decimal_value = value
        else:
            try:
                decimal_value = Decimal(str(value).strip())
            except (InvalidOperation, ValueError, TypeError) as e:
                logger.error(
                    f"[{DecimalErrorCode.CONVERSION_FAILED}] Decimal conversion failed | "
                    f"value={value} | type={type(value).__name__} | error={e}"
                )
                raise DecimalConversionError(value) from e

        if decimal_value.is_nan():
            logger.error(
                f"[{DecimalErrorCode.CONVERSION_FAILED}] NaN rejected | "
                f"value={value} | type={type(value).__name__}"
            )
            raise DecimalConversionError(value, "NaN is not a number")

        return decimal_value

    # ------------------------------------------------------------------------
    # Arithmetic
    # ------------------------------------------------------------------------

    def add(
        self,
        lhs: DecimalLike,
        rhs: DecimalLike,
        mode: ModeLike,
        scale: Optional[int] = None,
    ) -> Decimal:
        """
        Add rhs to lhs.

        Args:
            lhs: Augend
            rhs: Addend
            mode: RoundingMode used when the sum exceeds the precision
            scale: Optional bound on fractional digits of the result

        Returns:
            lhs + rhs rounded per mode
        """
        a, b = self.to_decimal(lhs), self.to_decimal(rhs)
        rounding = RoundingMode.parse(mode)
        return self._run(
            "add",
            self.config.behaviors(rounding, scale),
            lambda context: context.add(a, b),
        )

    def subtract(
        self,
        lhs: DecimalLike,
        rhs: DecimalLike,
        mode: ModeLike,
        scale: Optional[int] = None,
    ) -> Decimal:
        """
        Subtract rhs from lhs.

        Returns:
            lhs - rhs rounded per mode
        """
        a, b = self.to_decimal(lhs), self.to_decimal(rhs)
        rounding = RoundingMode.parse(mode)
        return self._run(
            "subtract",
            self.config.behaviors(rounding, scale),
            lambda context: context.subtract(a, b),
        )

    def multiply(
        self,
        lhs: DecimalLike,
        rhs: DecimalLike,
        mode: ModeLike,
        scale: Optional[int] = None,
    ) -> Decimal:
        """
        Multiply lhs by rhs.

        Digit growth is bounded by the configured precision; surplus digits
        are rounded away per mode.

        Returns:
            lhs * rhs rounded per mode
        """
        a, b = self.to_decimal(lhs), self.to_decimal(rhs)
        rounding = RoundingMode.parse(mode)
        return self._run(
            "multiply",
            self.config.behaviors(rounding, scale),
            lambda context: context.multiply(a, b),
        )

    def divide(
        self,
        lhs: DecimalLike,
        rhs: DecimalLike,
        mode: ModeLike,
        scale: Optional[int] = None,
    ) -> Decimal:
        """
        Divide lhs by rhs.

        Returns:
            lhs / rhs rounded per mode

        Raises:
            DivideByZeroError: If rhs is zero, including 0 / 0 (DEC-001)
        """
        a, b = self.to_decimal(lhs), self.to_decimal(rhs)
        rounding = RoundingMode.parse(mode)
        self._check_divisor("divide", a, b)
        return self._run(
            "divide",
            self.config.behaviors(rounding, scale),
            lambda context: context.divide(a, b),
        )

    def negate(
        self,
        value: DecimalLike,
        mode: ModeLike,
        scale: Optional[int] = None,
    ) -> Decimal:
        """
        Negate value by multiplying with (0 - 1).

        Both steps use the caller's mode, so negation rounds exactly like
        multiplication would.
        """
        negative_one = self.subtract(ZERO, ONE, mode)
        return self.multiply(value, negative_one, mode, scale)

    def remainder(self, lhs: DecimalLike, rhs: DecimalLike) -> Decimal:
        """
        Remainder of dividing lhs by rhs.

        The quotient is truncated toward zero, so the remainder carries the
        sign of lhs: remainder(-7, 3) == -1. The product and difference are
        rounded half-even and the result is bounded to 38 fractional digits.
        No caller rounding mode is accepted, and the raise_on_exactness,
        raise_on_overflow and raise_on_underflow settings are ignored.

        Raises:
            DivideByZeroError: If rhs is zero (DEC-001)
            InvalidDecimalOperationError: If the integral quotient does not
                fit in the configured precision (DEC-005)
        """
        a, b = self.to_decimal(lhs), self.to_decimal(rhs)
        self._check_divisor("remainder", a, b)

        def compute(context: Context) -> Decimal:
            quotient = context.divide_int(a, b)
            product = context.multiply(quotient, b)
            return context.subtract(a, product)

        config = self.config
        # Fixed policy: only division by zero raises, whatever the config says
        behaviors = DecimalBehaviors(
            rounding=REMAINDER_ROUNDING,
            scale=REMAINDER_SCALE,
            precision=config.precision,
            emax=config.emax,
            emin=config.emin,
            raise_on_exactness=False,
            raise_on_overflow=False,
            raise_on_underflow=False,
        )
        return self._run(
            "remainder",
            behaviors,
            compute,
            fixed_policy=True,
        )

    def round_to_scale(
        self,
        value: DecimalLike,
        scale: int,
        mode: ModeLike,
    ) -> Decimal:
        """
        Bound value to at most `scale` fractional digits.

        Values already within the scale are returned unchanged (trailing
        zeros are not added). A negative scale rounds to tens, hundreds, ...
        """
        decimal_value = self.to_decimal(value)
        rounding = RoundingMode.parse(mode)
        return self._run(
            "round_to_scale",
            self.config.behaviors(rounding, scale),
            lambda context: decimal_value,
        )

    # ------------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------------

    def _check_divisor(self, operation: str, dividend: Decimal, divisor: Decimal) -> None:
        if divisor.is_zero():
            raise self._failure(
                DivideByZeroError,
                operation,
                CONDITION_DIVIDE_BY_ZERO,
                f"Cannot {operation} {dividend} by zero",
            )

    def _run(
        self,
        operation: str,
        behaviors: DecimalBehaviors,
        compute: Callable[[Context], Decimal],
        fixed_policy: bool = False,
    ) -> Decimal:
        rounding_label = None if fixed_policy else behaviors.rounding.name
        context = behaviors.context()

        try:
            result = compute(context)
            if behaviors.scale is not None:
                result = _quantize_to_scale(context, result, behaviors.scale)
        except (DivisionByZero, DivisionUndefined) as e:
            raise self._failure(
                DivideByZeroError, operation, CONDITION_DIVIDE_BY_ZERO,
                f"Division by zero during {operation}",
            ) from e
        except InvalidOperation as e:
            raise self._failure(
                InvalidDecimalOperationError, operation, CONDITION_INVALID,
                f"Invalid operation during {operation}: {e!r}",
            ) from e
        except Overflow as e:
            raise self._failure(
                DecimalOverflowError, operation, CONDITION_OVERFLOW,
                f"Result of {operation} exceeds Emax={behaviors.emax}",
            ) from e
        except Underflow as e:
            raise self._failure(
                DecimalUnderflowError, operation, CONDITION_UNDERFLOW,
                f"Result of {operation} below Emin={behaviors.emin}",
            ) from e
        except Inexact as e:
            raise self._failure(
                InexactResultError, operation, CONDITION_INEXACT,
                f"Result of {operation} is not exact under "
                f"precision={behaviors.precision}",
            ) from e

        self._report_tolerated(operation, context, result)
        record_operation(operation, rounding_label)

        logger.debug(
            f"[DEC-OP] {operation} | mode={rounding_label or 'fixed'} | result={result}"
        )
        return result

    def _report_tolerated(self, operation: str, context: Context, result: Decimal) -> None:
        overflowed = context.flags[Overflow]
        underflowed = context.flags[Underflow]

        if overflowed:
            logger.warning(
                f"[{DecimalErrorCode.OVERFLOW}] Overflow tolerated | "
                f"operation={operation} | result={result}"
            )
            record_anomaly(operation, CONDITION_OVERFLOW)

        if underflowed:
            logger.warning(
                f"[{DecimalErrorCode.UNDERFLOW}] Underflow tolerated | "
                f"operation={operation} | result={result}"
            )
            record_anomaly(operation, CONDITION_UNDERFLOW)

        if context.flags[Inexact] and not (overflowed or underflowed):
            record_anomaly(operation, CONDITION_INEXACT)

    @staticmethod
    def _failure(
        error_cls: Type[DecimalArithmeticError],
        operation: str,
        condition: str,
        message: str,
    ) -> DecimalArithmeticError:
        error = error_cls(message, operation=operation)
        logger.error(f"[{error.error_code}] {message} | operation={operation}")
        record_anomaly(operation, condition)
        return error


def _quantize_to_scale(context: Context, value: Decimal, scale: int) -> Decimal:
    if not value.is_finite() or value.as_tuple().exponent >= -scale:
        return value
    # Operands wider than the precision keep their integral digits; +1 for carry
    context.prec = max(context.prec, value.adjusted() + scale + 2)
    return context.quantize(value, ONE.scaleb(-scale))


# ============================================================================
# Module-level convenience functions
# ============================================================================

_arithmetic = DecimalArithmetic()


def zero() -> Decimal:
    """Additive identity."""
    return ZERO


def one() -> Decimal:
    """Multiplicative identity."""
    return ONE


def is_negative(value: DecimalLike) -> bool:
    """Module-level convenience function for DecimalArithmetic.is_negative."""
    return _arithmetic.is_negative(value)


def to_decimal(value: Union[DecimalLike, None]) -> Decimal:
    """Module-level convenience function for Decimal conversion."""
    return _arithmetic.to_decimal(value)


def add(lhs: DecimalLike, rhs: DecimalLike, mode: ModeLike) -> Decimal:
    return _arithmetic.add(lhs, rhs, mode)


def subtract(lhs: DecimalLike, rhs: DecimalLike, mode: ModeLike) -> Decimal:
    return _arithmetic.subtract(lhs, rhs, mode)


def multiply(lhs: DecimalLike, rhs: DecimalLike, mode: ModeLike) -> Decimal:
    return _arithmetic.multiply(lhs, rhs, mode)


def divide(lhs: DecimalLike, rhs: DecimalLike, mode: ModeLike) -> Decimal:
    return _arithmetic.divide(lhs, rhs, mode)


def negate(value: DecimalLike, mode: ModeLike) -> Decimal:
    return _arithmetic.negate(value, mode)


def remainder(lhs: DecimalLike, rhs: DecimalLike) -> Decimal:
    return _arithmetic.remainder(lhs, rhs)


def round_to_scale(value: DecimalLike, scale: int, mode: ModeLike) -> Decimal:
    return _arithmetic.round_to_scale(value, scale, mode)
