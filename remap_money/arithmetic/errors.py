"""
============================================================================
Remap Money v1.0.0
Decimal Arithmetic - Error Codes and Exceptions
============================================================================

Every failure raised by the arithmetic adapter carries an error code so it
can be traced in logs. Messages are formatted as "[CODE] message".

ERROR CODES:
    - DEC-001: Division or remainder by zero
    - DEC-002: Result exponent overflow
    - DEC-003: Result exponent underflow
    - DEC-004: Inexact result (raised only when exactness is enforced)
    - DEC-005: Invalid decimal operation (Infinity - Infinity, quotient too large)
    - DEC-006: Value cannot be converted to Decimal
    - DEC-010: Arithmetic configuration invalid

============================================================================
"""


class DecimalErrorCode:
    """Decimal arithmetic error codes for audit logging."""
    DIVIDE_BY_ZERO = "DEC-001"
    OVERFLOW = "DEC-002"
    UNDERFLOW = "DEC-003"
    INEXACT = "DEC-004"
    INVALID_OPERATION = "DEC-005"
    CONVERSION_FAILED = "DEC-006"
    CONFIG_INVALID = "DEC-010"


class DecimalArithmeticError(ArithmeticError):
    """
    Base class for failures surfaced by the arithmetic adapter.

    Attributes:
        error_code: Error code (DEC-xxx)
        message: Human-readable error message
        operation: Name of the failing operation, if known
    """

    error_code = DecimalErrorCode.INVALID_OPERATION

    def __init__(self, message: str, operation: str = "", error_code: str = ""):
        if error_code:
            self.error_code = error_code
        self.message = message
        self.operation = operation
        super().__init__(f"[{self.error_code}] {message}")


class DivideByZeroError(DecimalArithmeticError, ZeroDivisionError):
    """Divisor of divide() or remainder() was zero."""

    error_code = DecimalErrorCode.DIVIDE_BY_ZERO


class DecimalOverflowError(DecimalArithmeticError):
    """Result exponent exceeded the configured Emax."""

    error_code = DecimalErrorCode.OVERFLOW


class DecimalUnderflowError(DecimalArithmeticError):
    """Result was subnormal and rounded (configured Emin exceeded)."""

    error_code = DecimalErrorCode.UNDERFLOW


class InexactResultError(DecimalArithmeticError):
    """Result had to be rounded while exactness is enforced."""

    error_code = DecimalErrorCode.INEXACT


class InvalidDecimalOperationError(DecimalArithmeticError):
    """Operation has no defined result (Infinity - Infinity, oversized quotient)."""

    error_code = DecimalErrorCode.INVALID_OPERATION


class DecimalConversionError(ValueError):
    """Raised when a value cannot be converted to Decimal (DEC-006)."""

    def __init__(self, value: object, reason: str = ""):
        self.error_code = DecimalErrorCode.CONVERSION_FAILED
        self.value = value
        message = f"Cannot convert '{value}' ({type(value).__name__}) to Decimal"
        if reason:
            message = f"{message}: {reason}"
        self.message = message
        super().__init__(f"[{self.error_code}] {message}")


class ArithmeticConfigurationError(Exception):
    """
    Raised when the arithmetic configuration is invalid.

    Raised from ArithmeticConfig.validate(), so a bad environment fails at
    first use instead of producing a context with nonsensical limits.
    """

    def __init__(self, message: str, error_code: str = DecimalErrorCode.CONFIG_INVALID):
        self.error_code = error_code
        self.message = message
        super().__init__(f"[{error_code}] {message}")
