"""
============================================================================
Remap Money v1.0.0
Prometheus Metrics - Decimal Arithmetic Observability
============================================================================

Input Constraints: Operation and condition names are short label strings
Side Effects: Updates Prometheus metrics registry

METRICS EXPOSED
---------------
- decimal_operations_total: Counter of arithmetic operations performed
- decimal_anomalies_total: Counter of arithmetic anomalies (raised or tolerated)

Recording a metric never raises; a broken registry is logged and the
arithmetic result is returned regardless.

============================================================================
"""

import logging
from typing import Optional

from prometheus_client import Counter

# Configure module logger
logger = logging.getLogger(__name__)


# ============================================================================
# PROMETHEUS METRICS DEFINITIONS
# ============================================================================

OPERATIONS_TOTAL = Counter(
    "decimal_operations_total",
    "Total number of decimal arithmetic operations performed",
    ["operation", "rounding_mode"]
)

ANOMALIES_TOTAL = Counter(
    "decimal_anomalies_total",
    "Total number of decimal arithmetic anomalies, raised or tolerated",
    ["operation", "condition"]
)


# ============================================================================
# ANOMALY CONDITIONS
# ============================================================================

CONDITION_DIVIDE_BY_ZERO = "divide_by_zero"
CONDITION_OVERFLOW = "overflow"
CONDITION_UNDERFLOW = "underflow"
CONDITION_INEXACT = "inexact"
CONDITION_INVALID = "invalid"


# ============================================================================
# METRIC UPDATE FUNCTIONS
# ============================================================================

def record_operation(
    operation: str,
    rounding_mode: Optional[str] = None
) -> None:
    """
    Record one arithmetic operation.

    Side Effects: Increments Prometheus counter

    Args:
        operation: Operation name (e.g., "add", "divide")
        rounding_mode: RoundingMode name, or None for fixed-policy operations
    """
    try:
        OPERATIONS_TOTAL.labels(
            operation=operation,
            rounding_mode=rounding_mode or "fixed"
        ).inc()
    except Exception as e:
        logger.error(
            "[OBS-001] Failed to record decimal_operations metric | error=%s",
            str(e)
        )


def record_anomaly(operation: str, condition: str) -> None:
    """
    Record an arithmetic anomaly.

    Side Effects: Increments Prometheus counter

    Args:
        operation: Operation name (e.g., "multiply")
        condition: One of the CONDITION_* constants
    """
    try:
        ANOMALIES_TOTAL.labels(operation=operation, condition=condition).inc()
        logger.debug(
            "Metric: decimal_anomaly | operation=%s | condition=%s",
            operation, condition
        )
    except Exception as e:
        logger.error(
            "[OBS-002] Failed to record decimal_anomalies metric | error=%s",
            str(e)
        )
