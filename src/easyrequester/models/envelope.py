from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class Envelope(BaseModel, Generic[T]):
    """Conventional wrapper used by APIs that nest their payload under ``data``.

    Decode into ``Envelope[User]`` to get the inner value typed as ``User``.
    """

    model_config = ConfigDict(
        validate_by_name=True,
        validate_by_alias=True,
        serialize_by_alias=True,
    )

    data: T
    status_code: int = Field(alias="statusCode")
    status_message: str = Field(alias="statusMessage")
