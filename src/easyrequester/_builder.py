import asyncio
from concurrent.futures import Future
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union

from ._codec import Codec
from ._config import ClientConfig, get_default_config
from ._dispatcher import Dispatcher
from ._handlers import (
    ExceptionHandler,
    HandlerSet,
    ResponseHandler,
    SuccessHandler,
    log_exception,
    log_success,
)
from ._transport import Transport
from ._utils._request_spec import RequestSpec
from .models.errors import ConfigurationError
from .models.http_method import HttpMethod
from .models.result import ResultDescriptor


def _drop_blank_keys(values: Mapping[str, Any]) -> dict[str, str]:
    return {
        key: str(value)
        for key, value in values.items()
        if key and key.strip() and value is not None
    }


def _drop_blank_entries(values: Mapping[str, Any]) -> dict[str, str]:
    return {
        key: value for key, value in _drop_blank_keys(values).items() if value.strip()
    }


@dataclass(frozen=True)
class Executable:
    """A fully resolved request, ready to run.

    Building one performs no I/O; nothing is sent until ``execute`` is called.
    """

    spec: RequestSpec
    handlers: HandlerSet
    transport: Transport
    codec: Optional[Codec]
    user_agent: Optional[str]
    dispatcher: Dispatcher

    def execute(self) -> "Future[Any]":
        """Send the request on a worker thread and return immediately.

        The returned future resolves once the handler has run. Failures are
        delivered to ``on_exception``, never raised from the future.
        """
        return self.dispatcher.dispatch(self)

    async def execute_async(self) -> Any:
        """Dispatch like ``execute`` and await the outcome from asyncio code."""
        return await asyncio.wrap_future(self.execute())


class RequestBuilder:
    """Assembles a single request.

    A builder is single-use: once ``build`` has returned, every further
    setter call or ``build`` raises ``ConfigurationError``. Builders are not
    thread-safe and should not be shared.

    Values set here win over the process ``ClientConfig``; a config passed to
    the constructor replaces the process default for this request.

    Examples:
        ```python
        from easyrequester import Envelope, HttpMethod, RequestBuilder

        (
            RequestBuilder(HttpMethod.GET, Envelope[User])
            .set_url("https://api.example.com/users/1")
            .set_headers({"Authorization": "Bearer token"})
            .on_success(lambda envelope: print(envelope.data.name))
            .build()
            .execute()
        )
        ```
    """

    def __init__(
        self,
        method: Union[HttpMethod, str] = HttpMethod.GET,
        result: Any = str,
        *,
        config: Optional[ClientConfig] = None,
    ) -> None:
        self._method = HttpMethod(method)
        self._result = ResultDescriptor.of(result)
        self._config = config

        self._url: Optional[str] = None
        self._params: dict[str, str] = {}
        self._headers: dict[str, str] = {}
        self._cookies: dict[str, str] = {}
        self._body: Any = None
        self._content_type: Optional[str] = None
        self._transport: Optional[Transport] = None
        self._codec: Optional[Codec] = None
        self._on_success: Optional[SuccessHandler] = None
        self._on_exception: Optional[ExceptionHandler] = None
        self._on_response: Optional[ResponseHandler] = None

        self._built = False

    def _ensure_open(self) -> None:
        if self._built:
            raise ConfigurationError(
                "This builder has already been built; create a new one per request"
            )

    @staticmethod
    def _require(value: Any, name: str) -> None:
        if value is None:
            raise ConfigurationError(f"{name} must not be None")

    def set_url(self, url: str) -> "RequestBuilder":
        self._ensure_open()
        self._require(url, "url")
        self._url = url
        return self

    def set_params(self, params: Optional[Mapping[str, str]]) -> "RequestBuilder":
        """Query parameters, appended to the url for GET and DELETE only."""
        self._ensure_open()
        self._params = dict(params or {})
        return self

    def set_headers(self, headers: Optional[Mapping[str, str]]) -> "RequestBuilder":
        self._ensure_open()
        self._headers = dict(headers or {})
        return self

    def set_cookies(self, cookies: Optional[Mapping[str, str]]) -> "RequestBuilder":
        """Cookies, sent together as a single ``Cookie`` header."""
        self._ensure_open()
        self._cookies = dict(cookies or {})
        return self

    def set_body(self, body: Any) -> "RequestBuilder":
        self._ensure_open()
        self._body = body
        return self

    def set_content_type(self, content_type: Optional[str]) -> "RequestBuilder":
        self._ensure_open()
        self._content_type = content_type
        return self

    def set_transport(self, transport: Transport) -> "RequestBuilder":
        self._ensure_open()
        self._require(transport, "transport")
        self._transport = transport
        return self

    def set_codec(self, codec: Codec) -> "RequestBuilder":
        self._ensure_open()
        self._require(codec, "codec")
        self._codec = codec
        return self

    def on_success(self, handler: SuccessHandler) -> "RequestBuilder":
        self._ensure_open()
        self._require(handler, "on_success handler")
        self._on_success = handler
        return self

    def on_exception(self, handler: ExceptionHandler) -> "RequestBuilder":
        self._ensure_open()
        self._require(handler, "on_exception handler")
        self._on_exception = handler
        return self

    def on_response(self, handler: ResponseHandler) -> "RequestBuilder":
        """Observe the raw response, any status, before it is decoded.

        Runs on the worker thread and does not replace ``on_success`` or
        ``on_exception``; an error raised here is logged and ignored.
        """
        self._ensure_open()
        self._require(handler, "on_response handler")
        self._on_response = handler
        return self

    def build(self) -> Executable:
        """Validate and freeze the request.

        Raises:
            ConfigurationError: If the url is missing, if a typed result is
                requested without any codec available, or if the builder was
                already built.
        """
        self._ensure_open()

        if not self._url or not self._url.strip():
            raise ConfigurationError("A url must be set before building a request")

        config = self._config or get_default_config()
        codec = self._codec if self._codec is not None else config.codec

        if self._result.requires_codec and codec is None:
            raise ConfigurationError(
                f"Decoding into {self._result} requires a codec, but none is configured"
            )

        spec = RequestSpec(
            method=self._method,
            url=self._url.strip(),
            result=self._result,
            params=_drop_blank_keys(self._params),
            headers=_drop_blank_entries(self._headers),
            cookies=_drop_blank_entries(self._cookies),
            body=self._body,
            content_type=self._content_type,
        )
        handlers = HandlerSet(
            on_success=self._on_success or log_success,
            on_exception=self._on_exception or log_exception,
            on_response=self._on_response,
        )

        executable = Executable(
            spec=spec,
            handlers=handlers,
            transport=self._transport or config.effective_transport,
            codec=codec,
            user_agent=config.user_agent,
            dispatcher=Dispatcher(config.executor),
        )
        self._built = True
        return executable
