from functools import lru_cache
from typing import Any, Protocol, runtime_checkable

from pydantic import TypeAdapter


@runtime_checkable
class Codec(Protocol):
    """Serializes values to bytes and back.

    Implementations are shared between worker threads and must not keep
    per-request state.
    """

    def encode(self, value: Any) -> bytes: ...

    def decode(self, content: bytes, target: Any) -> Any: ...


@lru_cache(maxsize=256)
def _adapter(target: Any) -> TypeAdapter[Any]:
    return TypeAdapter(target)


def _adapter_for(target: Any) -> TypeAdapter[Any]:
    try:
        return _adapter(target)
    except TypeError:
        # unhashable annotations cannot be cached
        return TypeAdapter(target)


class JsonCodec:
    """JSON codec backed by pydantic.

    Any type pydantic can validate works as a decode target: models,
    dataclasses, TypedDicts, builtins and parameterized generics such as
    ``Envelope[User]`` or ``list[User]``.
    """

    def __init__(self, *, by_alias: bool = True, strict: bool = False) -> None:
        self._by_alias = by_alias
        self._strict = strict

    def encode(self, value: Any) -> bytes:
        return _adapter_for(type(value)).dump_json(value, by_alias=self._by_alias)

    def decode(self, content: bytes, target: Any) -> Any:
        return _adapter_for(target).validate_json(content, strict=self._strict)
