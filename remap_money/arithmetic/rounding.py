# ============================================================================
# Remap Money v1.0.0
# Rounding Modes - Caller-Selected Rounding for Decimal Arithmetic
# ============================================================================
#
# Purpose: Fixed enumeration of rounding modes accepted by every arithmetic
#          operation, mapped onto the decimal module's rounding constants.
#
#   UP       -> ROUND_CEILING   (toward +infinity)
#   DOWN     -> ROUND_FLOOR     (toward -infinity)
#   PLAIN    -> ROUND_HALF_UP   (nearest, ties away from zero)
#   BANKERS  -> ROUND_HALF_EVEN (nearest, ties to even)
#
# ============================================================================

from decimal import ROUND_CEILING, ROUND_FLOOR, ROUND_HALF_EVEN, ROUND_HALF_UP
from enum import Enum
from typing import Union


class RoundingMode(str, Enum):
    """
    Rounding applied when a result exceeds the representable precision.

    Values are the decimal module rounding constants, so a mode can be
    handed straight to ``decimal.Context(rounding=...)``.
    """
    UP = ROUND_CEILING
    DOWN = ROUND_FLOOR
    PLAIN = ROUND_HALF_UP
    BANKERS = ROUND_HALF_EVEN

    @property
    def decimal_rounding(self) -> str:
        """decimal module rounding constant for this mode."""
        return self.value

    @classmethod
    def parse(cls, value: Union["RoundingMode", str]) -> "RoundingMode":
        """
        Resolve a mode from an enum member, member name or decimal constant.

        Raises:
            ValueError: If the value names no known rounding mode
        """
        if isinstance(value, cls):
            return value
        key = str(value).strip()
        if key.upper() in cls.__members__:
            return cls[key.upper()]
        return cls(key)


# Fixed policy for remainder(); it does not take a caller mode
REMAINDER_ROUNDING = RoundingMode.BANKERS
