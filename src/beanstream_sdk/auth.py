"""Bearer API key check for the reference API."""

import logging
import secrets

from fastapi import HTTPException, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .config import ApiSettings

logger = logging.getLogger(__name__)

bearer = HTTPBearer()


def verify_api_key(credentials: HTTPAuthorizationCredentials = Security(bearer)) -> str:
    """Reject requests whose bearer token does not match API_KEY.

    Raises:
        HTTPException: 500 when no key is configured, 401 when the key is wrong.
    """
    expected_key = ApiSettings().api_key
    if not expected_key:
        logger.error("API_KEY is not configured; refusing all requests")
        raise HTTPException(status_code=500, detail="Server configuration error")
    if not secrets.compare_digest(credentials.credentials.encode(), expected_key.encode()):
        raise HTTPException(status_code=401, detail="Invalid API key")
    return credentials.credentials
