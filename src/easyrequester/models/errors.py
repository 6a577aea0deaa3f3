from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .._utils._request_spec import RequestSpec


class ConfigurationError(Exception):
    """Raised synchronously when a request cannot be built.

    Covers a missing url, a typed result without a codec, and reuse of a
    builder that already produced its executable.
    """

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class RequestFailure(Exception):
    """Base for failures routed to an ``on_exception`` handler.

    Carries the underlying ``cause`` and the ``spec`` of the request that
    failed, so handlers can log or branch on method and url.
    """

    kind = "request"

    def __init__(
        self,
        cause: BaseException,
        spec: "RequestSpec",
        message: Optional[str] = None,
    ):
        self.cause = cause
        self.spec = spec
        self.message = message or str(cause) or type(cause).__name__
        super().__init__(self.message)

    @property
    def method(self) -> str:
        return self.spec.method.value

    @property
    def url(self) -> str:
        return self.spec.url

    def __str__(self) -> str:
        return f"[{self.method}]{self.url}: {self.message}"


class TransportFailure(RequestFailure):
    """The request never produced a response (connection, DNS, timeout, bad url)."""

    kind = "transport"


class DecodeFailure(RequestFailure):
    """A response arrived but its body does not fit the requested result type."""

    kind = "decode"


class EncodeFailure(RequestFailure):
    """The request body could not be encoded for the requested content type."""

    kind = "encode"
