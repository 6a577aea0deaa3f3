from logging import getLogger
from typing import Mapping, Optional, Protocol, Union, runtime_checkable

from httpx import URL, Client, Response, Timeout

from ._utils.constants import DEFAULT_TIMEOUT

logger = getLogger(__name__)


@runtime_checkable
class Transport(Protocol):
    """Executes one HTTP exchange and returns the raw response.

    Implementations raise on I/O failure and are shared between worker
    threads, so ``send`` must be safe to call concurrently.
    """

    def send(
        self,
        method: str,
        url: Union[URL, str],
        headers: Mapping[str, str],
        content: Optional[bytes],
    ) -> Response: ...


class HttpxTransport:
    """Transport backed by a single ``httpx.Client``.

    The body is read eagerly and the connection released before the
    response is returned, so callers can use ``content``/``text`` freely.
    """

    def __init__(
        self,
        client: Optional[Client] = None,
        *,
        timeout: Union[float, Timeout, None] = DEFAULT_TIMEOUT,
    ) -> None:
        self._owns_client = client is None
        self._client = client or Client(timeout=timeout)

    @property
    def client(self) -> Client:
        return self._client

    def send(
        self,
        method: str,
        url: Union[URL, str],
        headers: Mapping[str, str],
        content: Optional[bytes],
    ) -> Response:
        logger.debug(f"Request: {method} {url}")
        logger.debug(f"HEADERS: {dict(headers)}")

        response = self._client.request(
            method, url, headers=dict(headers), content=content
        )
        response.read()
        response.close()

        logger.debug(f"Response: {response.status_code} {method} {url}")
        return response

    def close(self) -> None:
        if self._owns_client:
            self._client.close()
