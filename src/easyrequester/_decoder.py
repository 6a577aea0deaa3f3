from typing import Any, Optional

from httpx import Response

from ._codec import Codec
from .models.result import ResultDescriptor, ResultKind


class ResponseDecoder:
    """Converts a raw response into the shape described by a ``ResultDescriptor``.

    The HTTP status code is never inspected: a 404 with a JSON error body is
    decoded like any other response. Codec errors propagate unchanged; the
    dispatcher classifies them.
    """

    def __init__(self, codec: Optional[Codec]) -> None:
        self._codec = codec

    def decode(self, response: Response, result: ResultDescriptor) -> Any:
        if result.kind is ResultKind.RAW_RESPONSE:
            return response

        if result.kind is ResultKind.RAW_STRING:
            return response.text

        if self._codec is None:
            raise LookupError(f"No codec configured to decode {result}")

        content = response.content
        if not content.strip():
            return None

        return self._codec.decode(content, result.type)
