from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from httpx import Response


class ResultKind(str, Enum):
    RAW_STRING = "raw_string"
    RAW_RESPONSE = "raw_response"
    TYPED = "typed"


@dataclass(frozen=True)
class ResultDescriptor:
    """Describes the shape a response body is decoded into.

    ``type`` is only set for ``ResultKind.TYPED`` and may be any type the
    codec understands, including parameterized generics such as
    ``Envelope[User]`` or ``list[User]``.
    """

    kind: ResultKind
    type: Optional[Any] = None

    @classmethod
    def raw_string(cls) -> "ResultDescriptor":
        return cls(ResultKind.RAW_STRING)

    @classmethod
    def raw_response(cls) -> "ResultDescriptor":
        return cls(ResultKind.RAW_RESPONSE)

    @classmethod
    def typed(cls, target: Any) -> "ResultDescriptor":
        if target is None:
            raise ValueError("A typed result needs a target type")
        return cls(ResultKind.TYPED, target)

    @classmethod
    def of(cls, target: Any) -> "ResultDescriptor":
        """Coerce a type, or an existing descriptor, into a descriptor.

        ``str`` maps to the raw body text and ``httpx.Response`` to the raw
        response; every other type is decoded through the codec.
        """
        if isinstance(target, ResultDescriptor):
            return target
        if target is str:
            return cls.raw_string()
        if target is Response:
            return cls.raw_response()
        return cls.typed(target)

    @property
    def requires_codec(self) -> bool:
        return self.kind is ResultKind.TYPED

    def __str__(self) -> str:
        if self.kind is ResultKind.TYPED:
            return getattr(self.type, "__name__", None) or repr(self.type)
        return self.kind.value
