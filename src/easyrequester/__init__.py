"""Typed, callback-driven HTTP requests.

```python
import easyrequester
from easyrequester import Envelope

easyrequester.get.do_request(
    Envelope[User],
    "https://api.example.com/users/1",
    on_success=lambda envelope: print(envelope.data.name),
)
```
"""

from ._builder import Executable, RequestBuilder
from ._codec import Codec, JsonCodec
from ._config import ClientConfig, configure, get_default_config, set_default_config
from ._decoder import ResponseDecoder
from ._dispatcher import Dispatcher
from ._handlers import HandlerSet
from ._negotiation import ContentEncoding, ContentNegotiator, NegotiatedContent, Payload
from ._requester import Requester, delete, get, post, put
from ._transport import HttpxTransport, Transport
from ._utils import RequestSpec, setup_logging
from .models import (
    ConfigurationError,
    DecodeFailure,
    EncodeFailure,
    Envelope,
    HttpMethod,
    RequestFailure,
    ResultDescriptor,
    ResultKind,
    TransportFailure,
)

__version__ = "0.1.0"

__all__ = [
    "ClientConfig",
    "Codec",
    "ConfigurationError",
    "ContentEncoding",
    "ContentNegotiator",
    "DecodeFailure",
    "Dispatcher",
    "EncodeFailure",
    "Envelope",
    "Executable",
    "HandlerSet",
    "HttpMethod",
    "HttpxTransport",
    "JsonCodec",
    "NegotiatedContent",
    "Payload",
    "RequestBuilder",
    "RequestFailure",
    "RequestSpec",
    "Requester",
    "ResponseDecoder",
    "ResultDescriptor",
    "ResultKind",
    "Transport",
    "TransportFailure",
    "configure",
    "delete",
    "get",
    "get_default_config",
    "post",
    "put",
    "set_default_config",
    "setup_logging",
]
