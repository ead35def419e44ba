import enum
from abc import ABC, abstractmethod
from datetime import date
from typing import Annotated, Optional, Dict, Any, Union, Literal

from pydantic import AliasChoices, BaseModel, Field, field_validator

from ..money import Money, is_money


# Payment sources
class Card(BaseModel):
    kind: Literal["card"] = "card"
    name: Optional[str] = None
    number: str
    month: int = Field(..., ge=1, le=12)
    year: int = Field(..., ge=0)
    verification_value: Optional[str] = None


class BankAccount(BaseModel):
    kind: Literal["bank_account"] = "bank_account"
    institution_number: Optional[str] = None  # Canadian dollar EFT
    transit_number: Optional[str] = None  # Canadian dollar EFT
    routing_number: Optional[str] = None  # US dollar EFT
    account_number: str


class StoredProfileReference(BaseModel):
    """A processor-hosted payment profile, referenced by its customer code."""
    kind: Literal["profile"] = "profile"
    customer_code: Union[int, str]


PaymentSource = Annotated[
    Union[Card, BankAccount, StoredProfileReference],
    Field(discriminator="kind"),
]


def coerce_source(source: Union[Card, BankAccount, StoredProfileReference, str, int]):
    """Treat a bare customer code as a stored profile reference."""
    if isinstance(source, (str, int)) and not isinstance(source, bool):
        return StoredProfileReference(customer_code=source)
    return source


class Address(BaseModel):
    name: Optional[str] = None
    address1: Optional[str] = None
    address2: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip: Optional[str] = None
    country: Optional[str] = None  # ISO 3166-1 alpha-2
    phone: Optional[str] = None
    # shipping addresses only
    shipping_method: Optional[str] = None
    delivery_estimate: Optional[str] = None


# Recurring billing
class IntervalUnit(str, enum.Enum):
    DAYS = "days"
    WEEKS = "weeks"
    MONTHS = "months"
    YEARS = "years"


class RecurringInterval(BaseModel):
    unit: IntervalUnit
    length: int = Field(default=1, ge=1)


class RecurringDuration(BaseModel):
    start_date: date
    occurrences: Optional[int] = Field(default=None, ge=1)


class RecurringBilling(BaseModel):
    interval: RecurringInterval
    duration: RecurringDuration
    end_of_month: bool = False
    tax1: bool = False


class ProfileOperation(str, enum.Enum):
    NEW = "new"
    MODIFY = "modify"


# Operation options
class PaymentOptions(BaseModel):
    order_id: Optional[str] = None
    description: Optional[str] = None
    email: Optional[str] = None
    billing_address: Optional[Address] = Field(
        default=None, validation_alias=AliasChoices("billing_address", "address")
    )
    shipping_address: Optional[Address] = None
    subtotal: Optional[Money] = None
    shipping: Optional[Money] = None
    tax1: Optional[Money] = Field(default=None, validation_alias=AliasChoices("tax1", "tax"))
    tax2: Optional[Money] = None
    custom: Optional[str] = None
    recurring_billing: Optional[RecurringBilling] = None

    @field_validator("subtotal", "shipping", "tax1", "tax2", mode="before")
    @classmethod
    def _exact_amount(cls, value):
        # Integral floats and numeric strings would otherwise coerce to cents.
        if value is None or is_money(value):
            return value
        raise ValueError(
            f"amount must be an integer in cents or a Decimal, got {type(value).__name__}"
        )


class RecurringAccountOptions(PaymentOptions):
    """Options for changing or cancelling an existing recurring billing account."""
    account_id: Optional[str] = None
    apply_tax1: Optional[bool] = None


class ProfileOptions(PaymentOptions):
    """Options for secure payment profile operations."""
    customer_code: Optional[Union[int, str]] = Field(
        default=None, validation_alias=AliasChoices("customer_code", "billing_id", "vault_id")
    )
    operation: Optional[str] = None
    status: Optional[str] = None
    card_validation: bool = False


# Canonical result
class AVSResult(BaseModel):
    code: Optional[str] = None


class PaymentResponse(BaseModel):
    success: bool
    message: Optional[str] = None
    params: Dict[str, Optional[str]] = Field(default_factory=dict)
    test: bool = False
    authorization: Optional[str] = None
    cvv_result: Optional[str] = None
    avs_result: AVSResult = Field(default_factory=AVSResult)


class ConnectorBase(ABC):
    """
    Minimal connector interface. Implementations should be side-effect free
    until the method makes a network call to the processor.

    Amounts are integers in minor units or Decimals in major units. An
    authorization is the opaque string returned on a previous response.
    """

    @abstractmethod
    def authorize(self, money: Money, source: Any, options: Optional[PaymentOptions] = None) -> PaymentResponse:
        """
        Place a hold on the source for later capture.
        """
        raise NotImplementedError

    @abstractmethod
    def purchase(self, money: Money, source: Any, options: Optional[PaymentOptions] = None) -> PaymentResponse:
        raise NotImplementedError

    @abstractmethod
    def capture(self, money: Money, authorization: str, options: Optional[PaymentOptions] = None) -> PaymentResponse:
        raise NotImplementedError

    @abstractmethod
    def refund(self, money: Money, authorization: str, options: Optional[PaymentOptions] = None) -> PaymentResponse:
        raise NotImplementedError

    @abstractmethod
    def void(self, authorization: str, options: Optional[PaymentOptions] = None) -> PaymentResponse:
        raise NotImplementedError

    def health_check(self) -> Dict[str, Any]:
        return {"ok": True}
