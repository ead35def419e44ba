"""Beanstream connector and its request/response translation."""

from .authorization import Authorization
from .codes import (
    AVS_CODES,
    CVD_CODES,
    PERIODS,
    PROFILE_OPERATIONS,
    TRANSACTIONS,
    RecurringOperation,
    TransactionKind,
)
from .connector import BeanstreamConnector

__all__ = [
    "Authorization",
    "AVS_CODES",
    "CVD_CODES",
    "PERIODS",
    "PROFILE_OPERATIONS",
    "TRANSACTIONS",
    "RecurringOperation",
    "TransactionKind",
    "BeanstreamConnector",
]
