"""HTTP transport for posting form-encoded requests to Beanstream."""

import enum
import logging
from typing import Dict, Optional, Protocol

import httpx

logger = logging.getLogger(__name__)


class Endpoint(str, enum.Enum):
    """Logical Beanstream destinations. Host and path details stay in the transport."""
    TRANSACTION = "transaction"
    RECURRING = "recurring"
    SECURE_PROFILE = "secure_profile"


ENDPOINT_URLS: Dict[Endpoint, str] = {
    Endpoint.TRANSACTION: "https://www.beanstream.com/scripts/process_transaction.asp",
    Endpoint.RECURRING: "https://www.beanstream.com/scripts/recurring_billing.asp",
    Endpoint.SECURE_PROFILE: "https://www.beanstream.com/scripts/payment_profile.asp",
}


class Transport(Protocol):
    """Anything that can deliver a url-encoded body and hand back the raw reply."""

    def post(self, endpoint: Endpoint, data: str) -> Optional[str]:
        """Return the response body, or None when the request failed."""
        ...


class HttpTransport:
    """
    httpx-backed transport.

    Failures are logged and reported as a missing body; the connector turns
    that into an unsuccessful result rather than an exception.
    """

    def __init__(
        self,
        timeout_seconds: float = 30.0,
        urls: Optional[Dict[Endpoint, str]] = None,
        client: Optional[httpx.Client] = None,
    ):
        self.urls = dict(urls or ENDPOINT_URLS)
        self.http_client = client or httpx.Client(timeout=timeout_seconds)

    def post(self, endpoint: Endpoint, data: str) -> Optional[str]:
        url = self.urls[endpoint]
        try:
            response = self.http_client.post(
                url,
                content=data,
                headers={"Content-Type": "application/x-www-form-urlencoded"},
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.warning(
                f"Beanstream {endpoint.value} endpoint returned status {e.response.status_code}"
            )
            return None
        except httpx.HTTPError as e:
            logger.warning(f"Beanstream {endpoint.value} request failed: {type(e).__name__}: {e}")
            return None
        return response.text

    def close(self) -> None:
        """Close the underlying HTTP connection pool."""
        self.http_client.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
