from .envelope import Envelope
from .errors import (
    ConfigurationError,
    DecodeFailure,
    EncodeFailure,
    RequestFailure,
    TransportFailure,
)
from .http_method import HttpMethod
from .result import ResultDescriptor, ResultKind

__all__ = [
    "ConfigurationError",
    "DecodeFailure",
    "EncodeFailure",
    "Envelope",
    "HttpMethod",
    "RequestFailure",
    "ResultDescriptor",
    "ResultKind",
    "TransportFailure",
]
