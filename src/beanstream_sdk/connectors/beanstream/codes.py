"""Beanstream wire codes and their generic counterparts."""

import enum
from types import MappingProxyType
from typing import Mapping, Optional

from ..base import IntervalUnit, ProfileOperation


class TransactionKind(str, enum.Enum):
    AUTHORIZATION = "authorization"
    PURCHASE = "purchase"
    CAPTURE = "capture"
    REFUND = "refund"
    VOID = "void"
    CHECK_PURCHASE = "check_purchase"
    CHECK_REFUND = "check_refund"
    VOID_PURCHASE = "void_purchase"
    VOID_REFUND = "void_refund"


class RecurringOperation(str, enum.Enum):
    UPDATE = "update"
    CANCEL = "cancel"


# VOID and VOID_PURCHASE share a wire code; they stay separate kinds so the
# direction of a void can be resolved from the original transaction.
TRANSACTIONS: Mapping[TransactionKind, str] = MappingProxyType({
    TransactionKind.AUTHORIZATION: "PA",
    TransactionKind.PURCHASE: "P",
    TransactionKind.CAPTURE: "PAC",
    TransactionKind.REFUND: "R",
    TransactionKind.VOID: "VP",
    TransactionKind.CHECK_PURCHASE: "D",
    TransactionKind.CHECK_REFUND: "C",
    TransactionKind.VOID_PURCHASE: "VP",
    TransactionKind.VOID_REFUND: "VR",
})

PROFILE_OPERATIONS: Mapping[ProfileOperation, str] = MappingProxyType({
    ProfileOperation.NEW: "N",
    ProfileOperation.MODIFY: "M",
})

RECURRING_OPERATIONS: Mapping[RecurringOperation, str] = MappingProxyType({
    RecurringOperation.UPDATE: "M",
    RecurringOperation.CANCEL: "C",
})

# cvdId -> canonical CVV result letter
CVD_CODES: Mapping[str, str] = MappingProxyType({
    "1": "M",  # match
    "2": "N",  # no match
    "3": "I",
    "4": "S",  # should have been present
    "5": "U",  # issuer unavailable
    "6": "P",  # not processed
})

# avsId -> canonical AVS result letter
AVS_CODES: Mapping[str, str] = MappingProxyType({
    "0": "R",
    "5": "I",
    "9": "I",
})

PERIODS: Mapping[IntervalUnit, str] = MappingProxyType({
    IntervalUnit.DAYS: "D",
    IntervalUnit.WEEKS: "W",
    IntervalUnit.MONTHS: "M",
    IntervalUnit.YEARS: "Y",
})


def cvv_result_code(cvd_id: Optional[str]) -> Optional[str]:
    """Unknown CVD ids have no canonical result."""
    if cvd_id is None:
        return None
    return CVD_CODES.get(cvd_id)


def avs_result_code(avs_id: Optional[str]) -> Optional[str]:
    """Unknown AVS ids are passed through as-is."""
    if avs_id is None:
        return None
    return AVS_CODES.get(avs_id, avs_id)
