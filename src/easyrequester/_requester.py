from concurrent.futures import Future
from typing import Any, Mapping, Optional, Union

from httpx import Response

from ._builder import RequestBuilder
from ._codec import Codec
from ._config import ClientConfig
from ._handlers import ExceptionHandler, ResponseHandler, SuccessHandler
from ._transport import Transport
from .models.http_method import HttpMethod


class Requester:
    """One-shot entry points for a single HTTP method.

    The module-level ``get``, ``post``, ``put`` and ``delete`` instances are
    the usual way in. Every call builds and executes one request and
    returns its future without waiting for it.
    """

    def __init__(
        self,
        method: Union[HttpMethod, str],
        *,
        config: Optional[ClientConfig] = None,
    ) -> None:
        self.method = HttpMethod(method)
        self._config = config

    def __repr__(self) -> str:
        return f"Requester({self.method.value})"

    def builder(self, result: Any = str) -> RequestBuilder:
        """Start a builder for this method decoding into ``result``."""
        return RequestBuilder(self.method, result, config=self._config)

    def do_request(
        self,
        result: Any,
        url: str,
        body: Any = None,
        content_type: Optional[str] = None,
        on_success: Optional[SuccessHandler] = None,
        on_exception: Optional[ExceptionHandler] = None,
        *,
        params: Optional[Mapping[str, str]] = None,
        headers: Optional[Mapping[str, str]] = None,
        cookies: Optional[Mapping[str, str]] = None,
        transport: Optional[Transport] = None,
        codec: Optional[Codec] = None,
        on_response: Optional[ResponseHandler] = None,
    ) -> "Future[Any]":
        """Send a request and decode the response into ``result``.

        Args:
            result: Target type, e.g. ``User`` or ``Envelope[User]``. ``str``
                yields the body text and ``httpx.Response`` the raw response.
            url: Absolute request url.
            body: Bytes, text, a structured value or a pre-built ``Payload``.
            content_type: Explicit content type; inferred from ``body`` if omitted.
            on_success: Called with the decoded value.
            on_exception: Called with ``(failure, spec)``; logs when omitted.
            params: Query parameters, used for GET and DELETE.
            headers: Extra request headers.
            cookies: Cookies merged into one ``Cookie`` header.
            transport: Overrides the configured transport for this call.
            codec: Overrides the configured codec for this call.
            on_response: Observes the raw response before it is decoded.

        Returns:
            Future[Any]: Resolves to the decoded value, or ``None`` on failure.

        Raises:
            ConfigurationError: If the request cannot be built.
        """
        builder = (
            self.builder(result)
            .set_url(url)
            .set_params(params)
            .set_headers(headers)
            .set_cookies(cookies)
            .set_body(body)
            .set_content_type(content_type)
        )
        if transport is not None:
            builder.set_transport(transport)
        if codec is not None:
            builder.set_codec(codec)
        if on_success is not None:
            builder.on_success(on_success)
        if on_exception is not None:
            builder.on_exception(on_exception)
        if on_response is not None:
            builder.on_response(on_response)

        return builder.build().execute()

    def do_request_default(
        self,
        url: str,
        body: Any = None,
        content_type: Optional[str] = None,
        on_success: Optional[SuccessHandler] = None,
        on_exception: Optional[ExceptionHandler] = None,
        **options: Any,
    ) -> "Future[Any]":
        """Send a request and hand the response body to ``on_success`` as text."""
        return self.do_request(
            str, url, body, content_type, on_success, on_exception, **options
        )

    def do_request_raw(
        self,
        url: str,
        body: Any = None,
        content_type: Optional[str] = None,
        on_success: Optional[SuccessHandler] = None,
        on_exception: Optional[ExceptionHandler] = None,
        **options: Any,
    ) -> "Future[Any]":
        """Send a request and hand the ``httpx.Response`` to ``on_success``, whatever its status."""
        return self.do_request(
            Response, url, body, content_type, on_success, on_exception, **options
        )


get = Requester(HttpMethod.GET)
post = Requester(HttpMethod.POST)
put = Requester(HttpMethod.PUT)
delete = Requester(HttpMethod.DELETE)
