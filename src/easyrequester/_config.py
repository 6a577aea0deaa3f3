import threading
from concurrent.futures import ThreadPoolExecutor
from os import environ as env
from typing import Any, Optional

from dotenv import load_dotenv
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PrivateAttr,
    ValidationError,
    field_validator,
)

from ._codec import Codec, JsonCodec
from ._transport import HttpxTransport, Transport
from ._utils.constants import (
    DEFAULT_MAX_WORKERS,
    DEFAULT_TIMEOUT,
    DEFAULT_USER_AGENT,
    ENV_MAX_WORKERS,
    ENV_TIMEOUT,
    ENV_USER_AGENT,
)
from .models.errors import ConfigurationError


class ClientConfig(BaseModel):
    """Process-wide defaults shared by every request.

    ``transport`` and ``codec`` are read concurrently by worker threads and
    are never mutated per request. When ``transport`` is left unset an
    ``HttpxTransport`` is built on first use. Setting ``codec`` to ``None``
    disables typed decoding unless a request supplies its own codec.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    transport: Optional[Any] = None
    codec: Optional[Any] = Field(default_factory=JsonCodec)
    user_agent: str = DEFAULT_USER_AGENT
    timeout: float = DEFAULT_TIMEOUT
    max_workers: int = Field(default=DEFAULT_MAX_WORKERS, gt=0)

    _lock: threading.Lock = PrivateAttr(default_factory=threading.Lock)
    _default_transport: Optional[HttpxTransport] = PrivateAttr(default=None)
    _executor: Optional[ThreadPoolExecutor] = PrivateAttr(default=None)

    @field_validator("transport")
    @classmethod
    def _check_transport(cls, value: Any) -> Any:
        if value is not None and not isinstance(value, Transport):
            raise ValueError(f"{type(value).__name__} does not implement send()")
        return value

    @field_validator("codec")
    @classmethod
    def _check_codec(cls, value: Any) -> Any:
        if value is not None and not isinstance(value, Codec):
            raise ValueError(f"{type(value).__name__} does not implement encode()/decode()")
        return value

    @classmethod
    def from_env(cls, **overrides: Any) -> "ClientConfig":
        """Build a config from ``EASYREQUESTER_*`` variables and a ``.env`` file.

        Keyword arguments win over the environment.

        Raises:
            ConfigurationError: If a variable or override holds an invalid value.
        """
        load_dotenv()

        values: dict[str, Any] = {}
        if env.get(ENV_TIMEOUT):
            values["timeout"] = env[ENV_TIMEOUT]
        if env.get(ENV_USER_AGENT):
            values["user_agent"] = env[ENV_USER_AGENT]
        if env.get(ENV_MAX_WORKERS):
            values["max_workers"] = env[ENV_MAX_WORKERS]
        values.update(overrides)

        try:
            return cls(**values)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid client configuration: {e}") from e

    @property
    def effective_transport(self) -> Transport:
        if self.transport is not None:
            return self.transport
        with self._lock:
            if self._default_transport is None:
                self._default_transport = HttpxTransport(timeout=self.timeout)
            return self._default_transport

    @property
    def executor(self) -> ThreadPoolExecutor:
        with self._lock:
            if self._executor is None:
                self._executor = ThreadPoolExecutor(
                    max_workers=self.max_workers,
                    thread_name_prefix="easyrequester",
                )
            return self._executor

    def close(self, wait: bool = True) -> None:
        """Shut down the worker pool and any transport this config created."""
        with self._lock:
            executor, self._executor = self._executor, None
            transport, self._default_transport = self._default_transport, None
        if executor is not None:
            executor.shutdown(wait=wait)
        if transport is not None:
            transport.close()


_default_config: Optional[ClientConfig] = None
_default_lock = threading.Lock()


def get_default_config() -> ClientConfig:
    """Return the process-wide config, creating it from the environment once."""
    global _default_config
    with _default_lock:
        if _default_config is None:
            _default_config = ClientConfig.from_env()
        return _default_config


def set_default_config(config: Optional[ClientConfig]) -> Optional[ClientConfig]:
    """Install ``config`` as the process default and return the previous one.

    Passing ``None`` clears the default; the next request rebuilds it from
    the environment. The previous config is not closed.
    """
    global _default_config
    with _default_lock:
        previous, _default_config = _default_config, config
    return previous


def configure(**overrides: Any) -> ClientConfig:
    """Build a config from the environment plus ``overrides`` and install it."""
    config = ClientConfig.from_env(**overrides)
    set_default_config(config)
    return config
