from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING, Any, Callable, Optional

from httpx import Response

if TYPE_CHECKING:
    from ._utils._request_spec import RequestSpec

logger = getLogger(__name__)

SuccessHandler = Callable[[Any], None]
ExceptionHandler = Callable[[BaseException, "RequestSpec"], None]
ResponseHandler = Callable[[Response], None]


def log_success(result: Any) -> None:
    logger.debug(f"SUCCESS: {result}")


def log_exception(error: BaseException, spec: "RequestSpec") -> None:
    message = getattr(error, "message", None) or str(error)
    logger.error(f"[{spec.method.value}]{spec.url}: {message}")


@dataclass(frozen=True)
class HandlerSet:
    """Callbacks bound to a single request.

    Exactly one of ``on_success``/``on_exception`` runs, once, on the worker
    thread that finished the request. Unset callbacks fall back to logging.
    ``on_response`` is an optional observer called with the raw response,
    whatever its status, before it is decoded.
    """

    on_success: SuccessHandler = log_success
    on_exception: ExceptionHandler = log_exception
    on_response: Optional[ResponseHandler] = None
