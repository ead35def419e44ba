"""Shared test fixtures and configuration."""

import os
from datetime import date
from unittest.mock import MagicMock
from urllib.parse import parse_qsl

import pytest

# Set up test environment variables before importing modules
os.environ.setdefault("API_KEY", "test_api_key_12345")
os.environ.setdefault("BEANSTREAM_LOGIN", "300200578")

from beanstream_sdk.config import BeanstreamSettings
from beanstream_sdk.connectors.base import (
    Address,
    BankAccount,
    Card,
    IntervalUnit,
    RecurringBilling,
    RecurringDuration,
    RecurringInterval,
    StoredProfileReference,
)
from beanstream_sdk.connectors.beanstream import BeanstreamConnector


APPROVED_BODY = (
    "trnApproved=1&trnId=10000028&messageId=1&messageText=Approved&trnOrderNumber=order-1"
    "&authCode=TEST&errorType=N&errorFields=&responseType=T&trnAmount=15.00"
    "&trnDate=4%2F17%2F2008+12%3A03%3A25+PM&avsProcessed=0&avsId=0&avsResult=0"
    "&avsAddrMatch=0&avsPostalMatch=0&avsMessage=Address+Verification+not+performed"
    "&cvdId=1&cardType=VI&trnType=P&paymentMethod=CC&ref1=&ref2=&ref3=&ref4=&ref5="
)


@pytest.fixture
def settings() -> BeanstreamSettings:
    """Settings with every credential filled in."""
    return BeanstreamSettings(
        login="300200578",
        user="api_user",
        password="api_password",
        pass_code="recurring_pass",
        secure_profile_api_key="profile_key",
    )


@pytest.fixture
def login_only_settings() -> BeanstreamSettings:
    return BeanstreamSettings(login="300200578")


@pytest.fixture
def transport():
    """A transport double that answers every request with an approval."""
    mock = MagicMock()
    mock.post.return_value = APPROVED_BODY
    return mock


@pytest.fixture
def connector(settings, transport) -> BeanstreamConnector:
    return BeanstreamConnector(settings, transport=transport)


@pytest.fixture
def sent_params(transport):
    """Decode the form body handed to the transport double."""
    def _sent(call_index: int = -1):
        endpoint, data = transport.post.call_args_list[call_index].args
        return endpoint, dict(parse_qsl(data, keep_blank_values=True))
    return _sent


@pytest.fixture
def card() -> Card:
    return Card(
        name="Longbob Longsen",
        number="4030000010001234",
        month=4,
        year=2030,
        verification_value="123",
    )


@pytest.fixture
def bank_account() -> BankAccount:
    return BankAccount(
        institution_number="001",
        transit_number="26729",
        routing_number="011000015",
        account_number="4321",
    )


@pytest.fixture
def profile_reference() -> StoredProfileReference:
    return StoredProfileReference(customer_code="7C5DE9E1AB4a4CDa9ABcF6e8D6fD18B4")


@pytest.fixture
def canadian_address() -> Address:
    return Address(
        name="Xiaobo Zhang",
        address1="1234 Levesque St.",
        address2="Apt B",
        city="Montreal",
        state="QC",
        zip="H2C1X8",
        country="CA",
        phone="555-555-5555",
    )


@pytest.fixture
def french_address() -> Address:
    return Address(
        name="Jean Dupont",
        address1="12 Rue de Rivoli",
        city="Paris",
        state="IDF",
        country="FR",
    )


@pytest.fixture
def recurring_billing() -> RecurringBilling:
    return RecurringBilling(
        interval=RecurringInterval(unit=IntervalUnit.MONTHS, length=1),
        duration=RecurringDuration(start_date=date(2026, 1, 31), occurrences=3),
    )



@pytest.fixture
def declined_body() -> str:
    return (
        "trnApproved=0&trnId=10000029&messageId=7&messageText=DECLINE&trnOrderNumber=order-2"
        "&authCode=&errorType=N&errorFields=&responseType=T&trnAmount=15.00&avsId=5&cvdId=2"
        "&trnType=P&paymentMethod=CC"
    )


@pytest.fixture
def recurring_update_body() -> str:
    return (
        "<response><accountId>1234</accountId><code>1</code>"
        "<message>Request successful</message></response>"
    )
