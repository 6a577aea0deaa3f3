from ._logs import setup_logging
from ._request_spec import RequestSpec

__all__ = [
    "RequestSpec",
    "setup_logging",
]
