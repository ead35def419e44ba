"""Payment provider connectors."""

from .base import (
    ConnectorBase,
    PaymentResponse,
    AVSResult,
    PaymentSource,
    Card,
    BankAccount,
    StoredProfileReference,
    Address,
    PaymentOptions,
    RecurringAccountOptions,
    ProfileOptions,
    RecurringBilling,
    RecurringInterval,
    RecurringDuration,
    IntervalUnit,
    ProfileOperation,
)
from .beanstream import BeanstreamConnector

__all__ = [
    # Base classes and models
    "ConnectorBase",
    "PaymentResponse",
    "AVSResult",
    # Payment sources
    "PaymentSource",
    "Card",
    "BankAccount",
    "StoredProfileReference",
    # Options
    "Address",
    "PaymentOptions",
    "RecurringAccountOptions",
    "ProfileOptions",
    "RecurringBilling",
    "RecurringInterval",
    "RecurringDuration",
    "IntervalUnit",
    "ProfileOperation",
    # Connectors
    "BeanstreamConnector",
]
