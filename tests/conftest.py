import sys
from pathlib import Path
from typing import Generator

import pytest
from click.testing import CliRunner

# Ensure local source package (src/easyrequester) is importable before tests collect
_PROJECT_ROOT: Path = Path(__file__).resolve().parents[1]
_SRC_PATH: Path = _PROJECT_ROOT / "src"
if _SRC_PATH.exists():
    sys.path.insert(0, str(_SRC_PATH))

from easyrequester import ClientConfig, set_default_config  # noqa: E402


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Clean environment variables before each test."""
    monkeypatch.delenv("EASYREQUESTER_TIMEOUT", raising=False)
    monkeypatch.delenv("EASYREQUESTER_USER_AGENT", raising=False)
    monkeypatch.delenv("EASYREQUESTER_MAX_WORKERS", raising=False)


@pytest.fixture(autouse=True)
def config() -> Generator[ClientConfig, None, None]:
    """Install a fresh process config for each test and tear it down after."""
    config = ClientConfig(timeout=5.0, max_workers=4)
    previous = set_default_config(config)
    yield config
    set_default_config(previous)
    config.close()


@pytest.fixture
def base_url() -> str:
    return "https://example.com"
