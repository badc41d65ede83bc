"""
============================================================================
Remap Money v1.0.0
============================================================================

Decimal arithmetic over decimal.Decimal with the rounding mode chosen by
the caller on every operation.

    from remap_money.arithmetic import RoundingMode, add, divide

    add("1.5", "2.25", RoundingMode.PLAIN)      # Decimal('3.75')
    divide(10, 3, RoundingMode.BANKERS)

============================================================================
"""

__version__ = "1.0.0"
