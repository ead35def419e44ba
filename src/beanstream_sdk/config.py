"""Configuration management for the Beanstream connector."""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class BeanstreamSettings(BaseSettings):
    """
    Merchant credentials and connector options, loaded from BEANSTREAM_* env vars.

    Only ``login`` (the merchant ID) is needed for authorize and purchase.
    Capture, refund and void also need ``user`` and ``password`` when the
    merchant account has username/password validation enabled.
    """

    login: str = Field(default="", description="Beanstream merchant ID")
    user: Optional[str] = Field(default=None, description="API username for adjustments")
    password: Optional[str] = Field(default=None, description="API password for adjustments")
    pass_code: Optional[str] = Field(default=None, description="Recurring billing API pass code")
    secure_profile_api_key: Optional[str] = Field(
        default=None, description="Secure payment profile API pass code"
    )
    test: bool = Field(default=False, description="Mark every result as a test transaction")
    timeout_seconds: float = Field(default=30.0, description="HTTP request timeout")

    model_config = SettingsConfigDict(
        env_prefix="BEANSTREAM_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )


class ApiSettings(BaseSettings):
    """Settings for the reference HTTP API."""

    api_key: str = Field(default="", description="Bearer key clients must present")

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")
