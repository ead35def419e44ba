import logging
from functools import lru_cache
from typing import Literal, Optional

from fastapi import Depends, FastAPI, HTTPException
from pydantic import BaseModel, Field

from .auth import verify_api_key
from .config import BeanstreamSettings
from .connectors.base import PaymentOptions, PaymentResponse, PaymentSource
from .connectors.beanstream import BeanstreamConnector
from .exceptions import (
    BeanstreamError,
    MissingCredentialsError,
    MissingRequiredOptionError,
    ResponseParseError,
)

logger = logging.getLogger(__name__)

app = FastAPI(title="Beanstream Connector - Reference API")


class CreatePaymentBody(BaseModel):
    amount: int = Field(..., gt=0, strict=True, description="Amount in minor units")
    source: PaymentSource
    intent: Literal["authorize", "purchase"] = "authorize"
    options: Optional[PaymentOptions] = None


class AdjustmentBody(BaseModel):
    authorization: str = Field(..., min_length=1)
    amount: int = Field(..., gt=0, strict=True, description="Amount in minor units")


class VoidBody(BaseModel):
    authorization: str = Field(..., min_length=1)


def _to_http_error(e: BeanstreamError) -> HTTPException:
    if isinstance(e, MissingRequiredOptionError):
        return HTTPException(status_code=400, detail=str(e))
    if isinstance(e, ResponseParseError):
        return HTTPException(status_code=502, detail="Invalid response from processor")
    if isinstance(e, MissingCredentialsError):
        logger.error(f"Beanstream credentials missing: {e}")
        return HTTPException(status_code=500, detail="Server configuration error")
    return HTTPException(status_code=500, detail=str(e))


@lru_cache
def _build_connector() -> BeanstreamConnector:
    return BeanstreamConnector(BeanstreamSettings())


def get_connector() -> BeanstreamConnector:
    try:
        return _build_connector()
    except BeanstreamError as e:
        raise _to_http_error(e) from e


@app.post("/payments", response_model=PaymentResponse, dependencies=[Depends(verify_api_key)])
def create_payment(body: CreatePaymentBody, connector: BeanstreamConnector = Depends(get_connector)):
    try:
        if body.intent == "purchase":
            return connector.purchase(body.amount, body.source, body.options)
        return connector.authorize(body.amount, body.source, body.options)
    except BeanstreamError as e:
        raise _to_http_error(e) from e


@app.post("/payments/capture", response_model=PaymentResponse, dependencies=[Depends(verify_api_key)])
def capture_payment(body: AdjustmentBody, connector: BeanstreamConnector = Depends(get_connector)):
    try:
        return connector.capture(body.amount, body.authorization)
    except BeanstreamError as e:
        raise _to_http_error(e) from e


@app.post("/payments/refund", response_model=PaymentResponse, dependencies=[Depends(verify_api_key)])
def refund_payment(body: AdjustmentBody, connector: BeanstreamConnector = Depends(get_connector)):
    try:
        return connector.refund(body.amount, body.authorization)
    except BeanstreamError as e:
        raise _to_http_error(e) from e


@app.post("/payments/void", response_model=PaymentResponse, dependencies=[Depends(verify_api_key)])
def void_payment(body: VoidBody, connector: BeanstreamConnector = Depends(get_connector)):
    try:
        return connector.void(body.authorization)
    except BeanstreamError as e:
        raise _to_http_error(e) from e


@app.get("/health")
def health(connector: BeanstreamConnector = Depends(get_connector)):
    return connector.health_check()
