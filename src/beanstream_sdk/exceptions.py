"""Exceptions raised by the Beanstream connector."""


class BeanstreamError(Exception):
    """Base exception for connector errors."""

    pass


class ResponseParseError(BeanstreamError):
    """
    Raised when a recurring-billing response body is not well-formed XML,
    or is not rooted at a <response> element.

    This is a TERMINAL error. There is no partial result to recover, so the
    request is not retried.
    """

    pass


class MissingCredentialsError(BeanstreamError):
    """
    Raised when a credential needed for the chosen endpoint is not configured.

    Examples:
    - no merchant login when the connector is created
    - no secure profile API key for store/update/unstore
    - no recurring pass code for update_recurring/cancel_recurring
    """

    pass


class MissingRequiredOptionError(BeanstreamError):
    """Raised when an operation is missing an option it cannot be built without."""

    def __init__(self, option: str):
        self.option = option
        super().__init__(f"Missing required option: {option}")
