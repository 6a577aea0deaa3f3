from concurrent.futures import Executor, Future
from logging import getLogger
from typing import TYPE_CHECKING, Any, Mapping, Optional

from httpx import URL, InvalidURL

from ._decoder import ResponseDecoder
from ._negotiation import ContentNegotiator
from ._utils.constants import HEADER_CONTENT_TYPE, HEADER_COOKIE, HEADER_USER_AGENT
from .models.errors import (
    DecodeFailure,
    EncodeFailure,
    RequestFailure,
    TransportFailure,
)

if TYPE_CHECKING:
    from ._builder import Executable
    from ._utils._request_spec import RequestSpec

logger = getLogger(__name__)


def _has_header(headers: Mapping[str, str], name: str) -> bool:
    return any(key.lower() == name.lower() for key in headers)


def prepare_url(spec: "RequestSpec") -> URL:
    """Parse the spec url and append params for GET and DELETE."""
    url = URL(spec.url)
    if not url.scheme or not url.host:
        raise InvalidURL(f"Request URL must be absolute: {spec.url!r}")

    if spec.method.carries_query_params:
        for key, value in spec.params.items():
            url = url.copy_add_param(key, value)
    return url


def prepare_headers(
    spec: "RequestSpec", content_type: Optional[str], user_agent: Optional[str]
) -> dict[str, str]:
    """Merge caller headers with the negotiated content type, user agent and cookies.

    Headers the caller set explicitly always win.
    """
    headers = dict(spec.headers)

    if content_type and not _has_header(headers, HEADER_CONTENT_TYPE):
        headers[HEADER_CONTENT_TYPE] = content_type

    if user_agent and not _has_header(headers, HEADER_USER_AGENT):
        headers[HEADER_USER_AGENT] = user_agent

    if spec.cookies:
        cookie = "; ".join(f"{key}={value}" for key, value in spec.cookies.items())
        existing = next(
            (key for key in headers if key.lower() == HEADER_COOKIE.lower()), None
        )
        if existing is not None:
            headers[existing] = f"{headers[existing]}; {cookie}"
        else:
            headers[HEADER_COOKIE] = cookie

    return headers


class Dispatcher:
    """Runs executables on a worker pool and routes each outcome to its handlers.

    ``dispatch`` returns immediately. For every executable exactly one of
    ``on_success``/``on_exception`` is called, once, on the worker thread.
    An optional ``on_response`` observer sees the raw response before
    decoding; its errors are logged and never change which handler runs.
    The returned future resolves after the handler has run: to the decoded
    value on success, to ``None`` when the exception path was taken. It
    never raises the request failure itself.
    """

    def __init__(self, executor: Executor) -> None:
        self._executor = executor

    def dispatch(self, executable: "Executable") -> "Future[Any]":
        return self._executor.submit(self.run, executable)

    def run(self, executable: "Executable") -> Any:
        """Execute synchronously on the current thread."""
        spec = executable.spec
        handlers = executable.handlers

        try:
            result = self._perform(executable)
        except RequestFailure as failure:
            try:
                handlers.on_exception(failure, spec)
            except Exception:
                logger.exception(
                    f"Exception handler failed for [{spec.method.value}]{spec.url}"
                )
            return None

        try:
            handlers.on_success(result)
        except Exception:
            logger.exception(
                f"Success handler failed for [{spec.method.value}]{spec.url}"
            )
        return result

    def _perform(self, executable: "Executable") -> Any:
        spec = executable.spec

        try:
            negotiated = ContentNegotiator(executable.codec).negotiate(
                spec.body, spec.content_type
            )
        except Exception as e:
            raise EncodeFailure(e, spec) from e

        try:
            url = prepare_url(spec)
            headers = prepare_headers(
                spec, negotiated.content_type, executable.user_agent
            )
            response = executable.transport.send(
                spec.method.value, url, headers, negotiated.content or None
            )
        except Exception as e:
            raise TransportFailure(e, spec) from e

        on_response = executable.handlers.on_response
        if on_response is not None:
            try:
                on_response(response)
            except Exception:
                logger.exception(
                    f"Response handler failed for [{spec.method.value}]{spec.url}"
                )

        try:
            return ResponseDecoder(executable.codec).decode(response, spec.result)
        except Exception as e:
            raise DecodeFailure(
                e,
                spec,
                f"Cannot decode {response.status_code} response as {spec.result}: {e}",
            ) from e
