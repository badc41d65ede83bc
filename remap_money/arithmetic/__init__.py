# ============================================================================
# Remap Money v1.0.0
# Arithmetic Module - Decimal Arithmetic with Explicit Rounding
# ============================================================================
#
# Components:
#   - RoundingMode: UP / DOWN / PLAIN / BANKERS
#   - DecimalArithmetic: add, subtract, multiply, divide, negate, remainder
#   - ArithmeticConfig / DecimalBehaviors: precision, exponent limits and
#     which anomalies raise
#   - DEC-xxx exceptions
#
# ============================================================================

from remap_money.arithmetic.rounding import RoundingMode, REMAINDER_ROUNDING
from remap_money.arithmetic.errors import (
    DecimalErrorCode,
    DecimalArithmeticError,
    DivideByZeroError,
    DecimalOverflowError,
    DecimalUnderflowError,
    InexactResultError,
    InvalidDecimalOperationError,
    DecimalConversionError,
    ArithmeticConfigurationError,
)
from remap_money.arithmetic.config import (
    ArithmeticConfig,
    DecimalBehaviors,
    REMAINDER_SCALE,
    get_arithmetic_config,
    reset_arithmetic_config,
)
from remap_money.arithmetic.decimal_adapter import (
    DecimalArithmetic,
    ZERO,
    ONE,
    zero,
    one,
    is_negative,
    to_decimal,
    add,
    subtract,
    multiply,
    divide,
    negate,
    remainder,
    round_to_scale,
)

__all__ = [
    "RoundingMode",
    "REMAINDER_ROUNDING",
    "DecimalErrorCode",
    "DecimalArithmeticError",
    "DivideByZeroError",
    "DecimalOverflowError",
    "DecimalUnderflowError",
    "InexactResultError",
    "InvalidDecimalOperationError",
    "DecimalConversionError",
    "ArithmeticConfigurationError",
    "ArithmeticConfig",
    "DecimalBehaviors",
    "REMAINDER_SCALE",
    "get_arithmetic_config",
    "reset_arithmetic_config",
    "DecimalArithmetic",
    "ZERO",
    "ONE",
    "zero",
    "one",
    "is_negative",
    "to_decimal",
    "add",
    "subtract",
    "multiply",
    "divide",
    "negate",
    "remainder",
    "round_to_scale",
]
