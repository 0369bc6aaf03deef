"""Delivery result types and status enums.

This module contains standardized result types for push provider
deliveries, including the status enum, the result dataclass, and
classifiers for provider results and exceptions.
"""

from infrastructure.operations.classifiers import (
    classify_apns_error,
    classify_apns_result,
    classify_fcm_error,
)
from infrastructure.operations.result import DeliveryResult
from infrastructure.operations.status import DeliveryStatus

__all__ = [
    "DeliveryResult",
    "DeliveryStatus",
    "classify_apns_result",
    "classify_apns_error",
    "classify_fcm_error",
]
