from enum import Enum


class HttpMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"

    @property
    def carries_query_params(self) -> bool:
        """Whether params are appended to the url for this method."""
        return self in (HttpMethod.GET, HttpMethod.DELETE)
