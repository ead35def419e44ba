"""
Building Beanstream request parameters.

Each ``add_*`` helper writes its own group of wire fields into ``post``.
The ``build_*`` functions compose those groups into the parameter set for
one operation, and ``post_data`` adds the credentials for the chosen
endpoint and url-encodes the result.
"""

from typing import Any, Dict, Mapping, Optional, Type, TypeVar, Union
from urllib.parse import quote_plus

from dateutil.relativedelta import relativedelta

from ...config import BeanstreamSettings
from ...exceptions import MissingCredentialsError, MissingRequiredOptionError
from ...money import Money, format_amount
from ...transport import Endpoint
from ..base import (
    Address,
    BankAccount,
    Card,
    IntervalUnit,
    PaymentOptions,
    ProfileOperation,
    ProfileOptions,
    RecurringAccountOptions,
    RecurringBilling,
    RecurringInterval,
    StoredProfileReference,
    coerce_source,
)
from . import authorization
from .codes import PERIODS, RECURRING_OPERATIONS, TRANSACTIONS, RecurringOperation, TransactionKind
from .transaction_types import purchase_action, refund_action, secure_profile_action, void_action

Params = Dict[str, Any]
OptionsT = TypeVar("OptionsT", bound=PaymentOptions)

# Beanstream only validates state/province and postal code for these countries.
STATE_VALIDATED_COUNTRIES = frozenset({"US", "CA"})
PLACEHOLDER_STATE = "--"
PLACEHOLDER_ZIP = "000000"

DATE_FORMAT = "%m%d%Y"
RECURRING_SERVICE_VERSION = "1.0"
SECURE_PROFILE_SERVICE_VERSION = "1.1"
SECURE_PROFILE_RESPONSE_FORMAT = "QS"


def _options(options: Union[PaymentOptions, Mapping[str, Any], None], cls: Type[OptionsT]) -> OptionsT:
    if options is None:
        return cls()
    if isinstance(options, cls):
        return options
    if isinstance(options, PaymentOptions):
        return cls.model_validate(options.model_dump())
    return cls.model_validate(options)


def _flag(value: Optional[bool]) -> Optional[str]:
    if value is None:
        return None
    return "1" if value else "0"


# Field groups

def add_amount(post: Params, money: Optional[Money]) -> None:
    post["trnAmount"] = format_amount(money)


def add_original_amount(post: Params, amount: Optional[str]) -> None:
    post["trnAmount"] = amount


def add_reference(post: Params, reference: Optional[str]) -> None:
    post["adjId"] = reference


def add_transaction_type(post: Params, action: TransactionKind) -> None:
    post["trnType"] = TRANSACTIONS[action]


def prepare_address(address: Address) -> Address:
    """Fill the placeholders Beanstream requires outside the US and Canada."""
    if address.country in STATE_VALIDATED_COUNTRIES:
        return address
    return address.model_copy(
        update={"state": PLACEHOLDER_STATE, "zip": address.zip or PLACEHOLDER_ZIP}
    )


def add_address(post: Params, options: PaymentOptions) -> None:
    if options.billing_address:
        billing_address = prepare_address(options.billing_address)
        post["ordName"] = billing_address.name
        post["ordEmailAddress"] = options.email
        post["ordPhoneNumber"] = billing_address.phone
        post["ordAddress1"] = billing_address.address1
        post["ordAddress2"] = billing_address.address2
        post["ordCity"] = billing_address.city
        post["ordProvince"] = billing_address.state
        post["ordPostalCode"] = billing_address.zip
        post["ordCountry"] = billing_address.country
    if options.shipping_address:
        shipping_address = prepare_address(options.shipping_address)
        post["shipName"] = shipping_address.name
        post["shipEmailAddress"] = options.email
        post["shipPhoneNumber"] = shipping_address.phone
        post["shipAddress1"] = shipping_address.address1
        post["shipAddress2"] = shipping_address.address2
        post["shipCity"] = shipping_address.city
        post["shipProvince"] = shipping_address.state
        post["shipPostalCode"] = shipping_address.zip
        post["shipCountry"] = shipping_address.country
        post["shippingMethod"] = shipping_address.shipping_method
        post["deliveryEstimate"] = shipping_address.delivery_estimate


def add_invoice(post: Params, options: PaymentOptions) -> None:
    post["trnOrderNumber"] = options.order_id
    post["trnComments"] = options.description
    post["ordItemPrice"] = format_amount(options.subtotal)
    post["ordShippingPrice"] = format_amount(options.shipping)
    post["ordTax1Price"] = format_amount(options.tax1)
    post["ordTax2Price"] = format_amount(options.tax2)
    post["ref1"] = options.custom


def add_credit_card(post: Params, credit_card: Optional[Card]) -> None:
    if credit_card:
        post["trnCardOwner"] = credit_card.name
        post["trnCardNumber"] = credit_card.number
        post["trnExpMonth"] = f"{credit_card.month:02d}"
        post["trnExpYear"] = f"{credit_card.year % 100:02d}"
        post["trnCardCvd"] = credit_card.verification_value


def add_check(post: Params, check: BankAccount) -> None:
    post["institutionNumber"] = check.institution_number
    post["transitNumber"] = check.transit_number
    post["routingNumber"] = check.routing_number
    post["accountNumber"] = check.account_number


def add_source(post: Params, source) -> None:
    source = coerce_source(source)
    if isinstance(source, StoredProfileReference):
        post["customerCode"] = source.customer_code
    elif isinstance(source, BankAccount):
        add_check(post, source)
    elif isinstance(source, Card):
        add_credit_card(post, source)
    else:
        raise TypeError(f"Unsupported payment source: {type(source).__name__}")


def billing_periods(interval: RecurringInterval, count: int) -> relativedelta:
    """Calendar offset covering ``count`` billing periods of ``interval``."""
    length = interval.length * count
    if interval.unit is IntervalUnit.DAYS:
        return relativedelta(days=length)
    if interval.unit is IntervalUnit.WEEKS:
        return relativedelta(weeks=length)
    if interval.unit is IntervalUnit.MONTHS:
        return relativedelta(months=length)
    return relativedelta(years=length)


def add_recurring_type(post: Params, recurring: RecurringBilling) -> None:
    interval = recurring.interval
    start_date = recurring.duration.start_date
    occurrences = recurring.duration.occurrences

    post["trnRecurring"] = "1"
    post["rbBillingPeriod"] = PERIODS[interval.unit]
    post["rbBillingIncrement"] = str(interval.length)
    post["rbFirstBilling"] = start_date.strftime(DATE_FORMAT)
    if occurrences is not None:
        expiry = start_date + billing_periods(interval, occurrences)
        post["rbExpiry"] = expiry.strftime(DATE_FORMAT)
    if recurring.end_of_month:
        post["rbEndMonth"] = "1"
    if recurring.tax1:
        post["rbApplyTax1"] = "1"


def add_recurring_amount(post: Params, money: Optional[Money]) -> None:
    post["amount"] = format_amount(money)


def add_recurring_invoice(post: Params, options: RecurringAccountOptions) -> None:
    post["rbApplyTax1"] = _flag(options.apply_tax1)


def add_recurring_operation_type(post: Params, operation: RecurringOperation) -> None:
    post["operationType"] = RECURRING_OPERATIONS[operation]


def add_recurring_service(post: Params, options: RecurringAccountOptions, settings: BeanstreamSettings) -> None:
    if not options.account_id:
        raise MissingRequiredOptionError("account_id")
    if not settings.pass_code:
        raise MissingCredentialsError("Recurring billing requests need a pass_code")
    post["serviceVersion"] = RECURRING_SERVICE_VERSION
    post["merchantId"] = settings.login
    post["passCode"] = settings.pass_code
    post["rbAccountId"] = options.account_id


def add_secure_profile_variables(post: Params, options: ProfileOptions) -> None:
    post["serviceVersion"] = SECURE_PROFILE_SERVICE_VERSION
    post["responseFormat"] = SECURE_PROFILE_RESPONSE_FORMAT
    post["cardValidation"] = _flag(options.card_validation)
    post["operationType"] = secure_profile_action(options.operation)
    post["customerCode"] = options.customer_code
    post["status"] = options.status


# Operations

def build_authorize(money: Money, source, options=None) -> Params:
    options = _options(options, PaymentOptions)
    post: Params = {}
    add_amount(post, money)
    add_invoice(post, options)
    add_source(post, source)
    add_address(post, options)
    add_transaction_type(post, TransactionKind.AUTHORIZATION)
    return post


def build_purchase(money: Money, source, options=None) -> Params:
    options = _options(options, PaymentOptions)
    source = coerce_source(source)
    post: Params = {}
    add_amount(post, money)
    add_invoice(post, options)
    add_source(post, source)
    add_address(post, options)
    add_transaction_type(post, purchase_action(source))
    return post


def build_capture(money: Money, auth: str) -> Params:
    reference = authorization.decode(auth)
    post: Params = {}
    add_amount(post, money)
    add_reference(post, reference.transaction_id)
    add_transaction_type(post, TransactionKind.CAPTURE)
    return post


def build_refund(money: Money, auth: str) -> Params:
    reference = authorization.decode(auth)
    post: Params = {}
    add_reference(post, reference.transaction_id)
    add_transaction_type(post, refund_action(reference.transaction_type))
    add_amount(post, money)
    return post


def build_void(auth: str) -> Params:
    reference = authorization.decode(auth)
    post: Params = {}
    add_reference(post, reference.transaction_id)
    add_original_amount(post, reference.amount)
    add_transaction_type(post, void_action(reference.transaction_type))
    return post


def build_recurring(money: Money, source, options=None) -> Params:
    options = _options(options, PaymentOptions)
    if options.recurring_billing is None:
        raise MissingRequiredOptionError("recurring_billing")
    source = coerce_source(source)
    post: Params = {}
    add_amount(post, money)
    add_invoice(post, options)
    add_source(post, source)
    add_address(post, options)
    add_transaction_type(post, purchase_action(source))
    add_recurring_type(post, options.recurring_billing)
    return post


def build_update_recurring(money: Optional[Money], source, options, settings: BeanstreamSettings) -> Params:
    options = _options(options, RecurringAccountOptions)
    post: Params = {}
    add_recurring_amount(post, money)
    add_recurring_invoice(post, options)
    if source is not None:
        add_source(post, source)
    add_address(post, options)
    add_recurring_operation_type(post, RecurringOperation.UPDATE)
    add_recurring_service(post, options, settings)
    return post


def build_cancel_recurring(options, settings: BeanstreamSettings) -> Params:
    options = _options(options, RecurringAccountOptions)
    post: Params = {}
    add_recurring_operation_type(post, RecurringOperation.CANCEL)
    add_recurring_service(post, options, settings)
    return post


def build_store(source, options=None) -> Params:
    options = _options(options, ProfileOptions)
    post: Params = {}
    add_address(post, options)
    add_source(post, source)
    add_secure_profile_variables(post, options)
    return post


def build_update_profile(customer_code: Union[int, str], source, options=None) -> Params:
    options = _options(options, ProfileOptions).model_copy(
        update={"customer_code": customer_code, "operation": ProfileOperation.MODIFY}
    )
    post: Params = {}
    add_address(post, options)
    if source is not None:
        add_source(post, source)
    add_secure_profile_variables(post, options)
    return post


def build_unstore(customer_code: Union[int, str]) -> Params:
    # Beanstream has no delete; a profile is closed by setting its status.
    return build_update_profile(customer_code, None, ProfileOptions(status="C"))


# Serialization

def is_blank(value: Any) -> bool:
    if value is None or value is False:
        return True
    return isinstance(value, str) and not value.strip()


def post_data(params: Params, settings: BeanstreamSettings, endpoint: Endpoint) -> str:
    """Add request identification and credentials, drop blanks, url-encode."""
    if not settings.login:
        raise MissingCredentialsError("Beanstream requests need a merchant login")

    params = dict(params)
    params["requestType"] = "BACKEND"
    if endpoint is Endpoint.SECURE_PROFILE:
        if not settings.secure_profile_api_key:
            raise MissingCredentialsError("Secure profile requests need a secure_profile_api_key")
        params["merchantId"] = settings.login
        params["passCode"] = settings.secure_profile_api_key
    else:
        if settings.user:
            params["username"] = settings.user
        if settings.password:
            params["password"] = settings.password
        params["merchant_id"] = settings.login
    params["vbvEnabled"] = "0"
    params["scEnabled"] = "0"

    return "&".join(
        f"{key}={quote_plus(str(value))}"
        for key, value in params.items()
        if not is_blank(value)
    )
