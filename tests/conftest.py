"""
Pytest configuration and fixtures for polymarket-mcp tests.
"""

import json
import tempfile
from collections.abc import Generator
from pathlib import Path
from typing import Any

import httpx
import pytest
from typer.testing import CliRunner

from polymarket_mcp.client import PolymarketClient
from polymarket_mcp.config import clear_config_cache


class FakeUpstream:
    """Canned upstream responses keyed by request path, with a request log.

    Paths are unique across the three services, so the path alone selects
    the response; the recorded request keeps the host for service checks.
    """

    def __init__(self) -> None:
        self.routes: dict[str, Any] = {}
        self.requests: list[httpx.Request] = []

    def add(
        self,
        path: str,
        payload: Any = None,
        status: int = 200,
        error: Exception | None = None,
    ) -> None:
        """Serve payload (or raise error) for every GET of path."""
        self.routes[path] = (payload, status, error)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.path not in self.routes:
            return httpx.Response(404, json={"error": f"no route for {request.url.path}"})
        payload, status, error = self.routes[request.url.path]
        if error is not None:
            raise error
        return httpx.Response(status, content=json.dumps(payload).encode())

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def calls_to(self, path: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.path == path]

    def params(self, path: str) -> dict[str, str]:
        """Query parameters of the last request to path."""
        return dict(self.calls_to(path)[-1].url.params)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Typer CLI test runner."""
    return CliRunner()


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Provide a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture(autouse=True)
def isolated_home(temp_dir: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[Path, None, None]:
    """Point the home directory at a temp dir and drop env overrides."""
    import os

    for key in list(os.environ):
        if key.startswith("POLYMARKET_MCP_"):
            monkeypatch.delenv(key)

    home = temp_dir / ".polymarket-mcp"
    home.mkdir()
    monkeypatch.setenv("POLYMARKET_MCP_HOME", str(home))
    clear_config_cache()

    yield home

    clear_config_cache()


@pytest.fixture
def upstream() -> FakeUpstream:
    """Provide a fake upstream with no routes."""
    return FakeUpstream()


@pytest.fixture
def client(upstream: FakeUpstream) -> PolymarketClient:
    """Provide a client wired to the fake upstream."""
    return PolymarketClient(transport=upstream.transport)


@pytest.fixture
def sample_config() -> dict:
    """Provide a sample configuration dictionary."""
    return {
        "api": {
            "gamma_url": "https://gamma.example.test",
            "timeout": 10,
        },
        "logging": {
            "level": "DEBUG",
        },
        "server": {
            "instructions": "Read-only Polymarket data.",
        },
    }
