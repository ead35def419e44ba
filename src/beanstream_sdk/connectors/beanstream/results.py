"""Turning parsed Beanstream responses into PaymentResponse objects."""

from typing import Optional

from ..base import AVSResult, PaymentResponse
from . import authorization
from .codes import avs_result_code, cvv_result_code
from .responses import ParsedResponse

TEST_AUTH_CODE = "TEST"


def success(response: ParsedResponse) -> bool:
    # Different API generations signal approval differently; any one is enough.
    return (
        response.get("responseType") == "R"
        or response.get("trnApproved") == "1"
        or response.get("responseCode") == "1"
    )


def recurring_success(response: ParsedResponse) -> bool:
    return response.get("code") == "1"


def message_from(response: ParsedResponse) -> Optional[str]:
    return response.get("messageText") or response.get("responseMessage")


def recurring_message_from(response: ParsedResponse) -> Optional[str]:
    return response.get("message")


def authorization_from(response: ParsedResponse) -> str:
    return authorization.encode(
        response.get("trnId"),
        response.get("trnAmount"),
        response.get("trnType"),
    )


def recurring_authorization_from(response: ParsedResponse) -> Optional[str]:
    return response.get("account_id")


def build_response(response: ParsedResponse, test: bool = False) -> PaymentResponse:
    """Interpret a query-string response from the transaction or profile endpoint."""
    params = dict(response)
    if params.get("customerCode"):
        params["customer_vault_id"] = params["customerCode"]

    return PaymentResponse(
        success=success(params),
        message=message_from(params),
        params=params,
        test=test or params.get("authCode") == TEST_AUTH_CODE,
        authorization=authorization_from(params),
        cvv_result=cvv_result_code(params.get("cvdId")),
        avs_result=AVSResult(code=avs_result_code(params.get("avsId"))),
    )


def build_recurring_response(response: ParsedResponse, test: bool = False) -> PaymentResponse:
    """Interpret an XML response from the recurring billing endpoint."""
    return PaymentResponse(
        success=recurring_success(response),
        message=recurring_message_from(response),
        params=dict(response),
        test=test or response.get("auth_code") == TEST_AUTH_CODE,
        authorization=recurring_authorization_from(response),
        cvv_result=cvv_result_code(response.get("cvd_id")),
        avs_result=AVSResult(code=avs_result_code(response.get("avs_id"))),
    )
