"""
============================================================================
Remap Money v1.0.0
Observability Module - Prometheus Metrics
============================================================================
"""

from remap_money.observability.metrics import (
    OPERATIONS_TOTAL,
    ANOMALIES_TOTAL,
    CONDITION_DIVIDE_BY_ZERO,
    CONDITION_OVERFLOW,
    CONDITION_UNDERFLOW,
    CONDITION_INEXACT,
    CONDITION_INVALID,
    record_operation,
    record_anomaly,
)

__all__ = [
    "OPERATIONS_TOTAL",
    "ANOMALIES_TOTAL",
    "CONDITION_DIVIDE_BY_ZERO",
    "CONDITION_OVERFLOW",
    "CONDITION_UNDERFLOW",
    "CONDITION_INEXACT",
    "CONDITION_INVALID",
    "record_operation",
    "record_anomaly",
]
