from dataclasses import dataclass
from enum import Enum
from logging import getLogger
from typing import Any, Mapping, Optional, Sequence
from urllib.parse import urlencode

import httpx

from ._codec import Codec
from ._utils.constants import (
    CONTENT_TYPE_FORM,
    CONTENT_TYPE_JSON,
    CONTENT_TYPE_MULTIPART,
    CONTENT_TYPE_OCTET_STREAM,
    CONTENT_TYPE_TEXT,
    HEADER_CONTENT_TYPE,
)

logger = getLogger(__name__)


class ContentEncoding(str, Enum):
    JSON = "json"
    XML = "xml"
    FORM = "form"
    MULTIPART = "multipart"
    TEXT = "text"
    OPAQUE = "opaque"
    EMPTY = "empty"


@dataclass(frozen=True)
class Payload:
    """A body that is already encoded for the wire.

    The negotiator sends it as-is, with its own content type.
    """

    content: bytes
    content_type: str

    @classmethod
    def multipart(
        cls,
        data: Optional[Mapping[str, Any]] = None,
        files: Optional[Mapping[str, Any] | Sequence[tuple[str, Any]]] = None,
    ) -> "Payload":
        """Build a multipart/form-data body.

        ``data`` holds plain form fields and ``files`` follows httpx's
        ``files=`` conventions (``{"name": (filename, bytes, mime)}``).
        Fields-only payloads are still encoded as multipart.

        Raises:
            ValueError: If neither fields nor files are given.
        """
        if not data and not files:
            raise ValueError("A multipart body needs at least one field or file")

        if not files:
            # httpx url-encodes `data` unless files are present
            files = [
                (name, (None, str(item)))
                for name, value in (data or {}).items()
                for item in (value if isinstance(value, (list, tuple)) else [value])
            ]
            data = None

        request = httpx.Request(
            "POST", "http://multipart.invalid", data=data, files=files
        )
        content_type = request.headers[HEADER_CONTENT_TYPE]
        if not content_type.startswith(CONTENT_TYPE_MULTIPART):
            raise ValueError(f"Expected a multipart body, got '{content_type}'")
        return cls(request.read(), content_type)


@dataclass(frozen=True)
class NegotiatedContent:
    content: bytes
    content_type: Optional[str]
    encoding: ContentEncoding


class UnsupportedContentError(ValueError):
    pass


def _media_type(content_type: str) -> str:
    return content_type.split(";", 1)[0].strip().lower()


def _is_json(content_type: str) -> bool:
    media = _media_type(content_type)
    return media == CONTENT_TYPE_JSON or media.endswith("+json")


def _is_xml(content_type: str) -> bool:
    media = _media_type(content_type)
    return media.endswith("/xml") or media.endswith("+xml")


def _is_form(content_type: str) -> bool:
    return _media_type(content_type) == CONTENT_TYPE_FORM


def _encoding_for(content_type: str) -> ContentEncoding:
    if _is_json(content_type):
        return ContentEncoding.JSON
    if _is_xml(content_type):
        return ContentEncoding.XML
    if _is_form(content_type):
        return ContentEncoding.FORM
    if _media_type(content_type).startswith("multipart/"):
        return ContentEncoding.MULTIPART
    if _media_type(content_type).startswith("text/"):
        return ContentEncoding.TEXT
    return ContentEncoding.OPAQUE


class ContentNegotiator:
    """Turns a request body and an optional content type into wire bytes.

    Rules, first match wins:

    1. ``Payload``: sent unchanged with its own content type; a different
       explicit content type is logged and ignored.
    2. ``bytes``: sent unchanged as ``application/octet-stream`` unless a
       content type is given.
    3. ``None`` or ``""``: empty body.
    4. ``str`` with a content type: sent verbatim (XML, form data, JSON text).
    5. ``str`` without one: ``text/plain``.
    6. Anything else with no content type or a JSON one: encoded by the codec.
    7. A mapping with ``application/x-www-form-urlencoded``: url-encoded.
    """

    def __init__(self, codec: Optional[Codec]) -> None:
        self._codec = codec

    def negotiate(
        self, body: Any, content_type: Optional[str] = None
    ) -> NegotiatedContent:
        if isinstance(body, Payload):
            if content_type and _media_type(content_type) != _media_type(
                body.content_type
            ):
                logger.warning(
                    f"Ignoring content type '{content_type}': the pre-built payload "
                    f"declares '{body.content_type}'"
                )
            return NegotiatedContent(
                body.content, body.content_type, _encoding_for(body.content_type)
            )

        if isinstance(body, (bytes, bytearray, memoryview)):
            return NegotiatedContent(
                bytes(body),
                content_type or CONTENT_TYPE_OCTET_STREAM,
                ContentEncoding.OPAQUE,
            )

        if body is None or body == "":
            return NegotiatedContent(b"", content_type, ContentEncoding.EMPTY)

        if isinstance(body, str):
            if content_type:
                return NegotiatedContent(
                    body.encode("utf-8"), content_type, _encoding_for(content_type)
                )
            return NegotiatedContent(
                body.encode("utf-8"), CONTENT_TYPE_TEXT, ContentEncoding.TEXT
            )

        if content_type is None or _is_json(content_type):
            if self._codec is None:
                raise UnsupportedContentError(
                    f"No codec configured to encode {type(body).__name__} as JSON"
                )
            return NegotiatedContent(
                self._codec.encode(body),
                content_type or CONTENT_TYPE_JSON,
                ContentEncoding.JSON,
            )

        if _is_form(content_type) and isinstance(body, Mapping):
            return NegotiatedContent(
                urlencode(body, doseq=True).encode("ascii"),
                content_type,
                ContentEncoding.FORM,
            )

        raise UnsupportedContentError(
            f"Cannot encode {type(body).__name__} as '{content_type}'"
        )
