# beanstream_sdk package
__version__ = "0.1.0"

from .config import BeanstreamSettings
from .exceptions import (
    BeanstreamError,
    ResponseParseError,
    MissingCredentialsError,
    MissingRequiredOptionError,
)
from .transport import Endpoint, HttpTransport
from .connectors import (
    BeanstreamConnector,
    PaymentResponse,
    Card,
    BankAccount,
    StoredProfileReference,
    PaymentOptions,
)
