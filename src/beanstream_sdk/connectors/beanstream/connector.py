import logging
from typing import Any, Dict, Optional, Union

from ...config import BeanstreamSettings
from ...exceptions import MissingCredentialsError
from ...money import Money
from ...transport import Endpoint, HttpTransport, Transport
from ..base import ConnectorBase, PaymentOptions, PaymentResponse, ProfileOptions, RecurringAccountOptions
from . import builders
from .builders import Params
from .responses import parse_flat, parse_tree
from .results import build_recurring_response, build_response

logger = logging.getLogger(__name__)


class BeanstreamConnector(ConnectorBase):
    """
    Beanstream connector over the form-encoded processing API.

    Card, bank account (EFT) and stored payment profile sources are accepted
    wherever a source is taken; a bare string or integer is read as a stored
    profile's customer code.

    Only ``settings.login`` is needed for authorize and purchase. Capture,
    refund and void need ``user`` and ``password`` when the merchant account
    has username/password validation enabled, recurring changes need
    ``pass_code``, and profile operations need ``secure_profile_api_key``.
    """

    default_currency = "CAD"
    supported_countries = ["CA"]
    supported_cardtypes = ["visa", "master", "american_express"]
    homepage_url = "http://www.beanstream.com/"
    display_name = "Beanstream.com"

    def __init__(self, settings: BeanstreamSettings, transport: Optional[Transport] = None):
        if not settings.login:
            raise MissingCredentialsError("BEANSTREAM_LOGIN (merchant ID) is required")
        self.settings = settings
        self.transport = transport or HttpTransport(timeout_seconds=settings.timeout_seconds)

    def authorize(self, money: Money, source, options: Optional[PaymentOptions] = None) -> PaymentResponse:
        return self._commit("authorize", builders.build_authorize(money, source, options))

    def purchase(self, money: Money, source, options: Optional[PaymentOptions] = None) -> PaymentResponse:
        return self._commit("purchase", builders.build_purchase(money, source, options))

    def capture(self, money: Money, authorization: str, options: Optional[PaymentOptions] = None) -> PaymentResponse:
        return self._commit("capture", builders.build_capture(money, authorization))

    def refund(self, money: Money, authorization: str, options: Optional[PaymentOptions] = None) -> PaymentResponse:
        return self._commit("refund", builders.build_refund(money, authorization))

    def void(self, authorization: str, options: Optional[PaymentOptions] = None) -> PaymentResponse:
        return self._commit("void", builders.build_void(authorization))

    def recurring(self, money: Money, source, options: Optional[PaymentOptions] = None) -> PaymentResponse:
        """Charge the source now and set up a recurring billing account for it."""
        return self._commit("recurring", builders.build_recurring(money, source, options))

    def update_recurring(
        self,
        money: Optional[Money],
        source=None,
        options: Optional[RecurringAccountOptions] = None,
    ) -> PaymentResponse:
        params = builders.build_update_recurring(money, source, options, self.settings)
        return self._recurring_commit("update_recurring", params)

    def cancel_recurring(self, options: Optional[RecurringAccountOptions] = None) -> PaymentResponse:
        params = builders.build_cancel_recurring(options, self.settings)
        return self._recurring_commit("cancel_recurring", params)

    def store(self, source, options: Optional[ProfileOptions] = None) -> PaymentResponse:
        """Create a secure payment profile; its customer code is in params["customer_vault_id"]."""
        return self._commit("store", builders.build_store(source, options), Endpoint.SECURE_PROFILE)

    def update(
        self,
        customer_code: Union[int, str],
        source=None,
        options: Optional[ProfileOptions] = None,
    ) -> PaymentResponse:
        params = builders.build_update_profile(customer_code, source, options)
        return self._commit("update", params, Endpoint.SECURE_PROFILE)

    def unstore(self, customer_code: Union[int, str]) -> PaymentResponse:
        return self._commit("unstore", builders.build_unstore(customer_code), Endpoint.SECURE_PROFILE)

    delete = unstore

    def _commit(self, operation: str, params: Params, endpoint: Endpoint = Endpoint.TRANSACTION) -> PaymentResponse:
        body = self.transport.post(endpoint, builders.post_data(params, self.settings, endpoint))
        parsed = parse_flat(body)
        logger.debug(f"Beanstream {operation} response fields: {sorted(parsed)}")

        response = build_response(parsed, test=self.settings.test)
        logger.info(
            f"Beanstream {operation} (trnType={params.get('trnType')}, endpoint={endpoint.value}) "
            f"success={response.success}"
        )
        return response

    def _recurring_commit(self, operation: str, params: Params) -> PaymentResponse:
        endpoint = Endpoint.RECURRING
        body = self.transport.post(endpoint, builders.post_data(params, self.settings, endpoint))
        parsed = parse_tree(body)
        logger.debug(f"Beanstream {operation} response fields: {sorted(parsed)}")

        response = build_recurring_response(parsed, test=self.settings.test)
        logger.info(
            f"Beanstream {operation} (operationType={params.get('operationType')}, "
            f"account={params.get('rbAccountId')}) success={response.success}"
        )
        return response

    def health_check(self) -> Dict[str, Any]:
        return {
            "ok": True,
            "provider": "beanstream",
            "test": self.settings.test,
            "default_currency": self.default_currency,
        }
