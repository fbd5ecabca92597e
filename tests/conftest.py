# File: tests/conftest.py
import json
import logging
from collections.abc import AsyncIterator, Awaitable, Callable, Iterator
from pathlib import Path
from typing import Dict

import pytest
import pytest_asyncio
from aiohttp import web

from crawn.config import CrawlConfig
from crawn.crawler.models import FetchedPage

Handler = Callable[[web.Request], Awaitable[web.StreamResponse]]


def pytest_configure(config):
    """Register custom markers so that `--strict-markers` does not fail."""
    config.addinivalue_line(
        "markers",
        "slow: marks tests as slow (deselect with '-m \"not slow\"')",
    )


@pytest_asyncio.fixture
async def serve(unused_tcp_port_factory) -> AsyncIterator[Callable[[Dict[str, Handler]], Awaitable[str]]]:
    """
    Factory fixture: start a local aiohttp app for a {path: handler} mapping
    and return its base URL. Every started app is cleaned up afterwards.
    """
    runners: list[web.AppRunner] = []

    async def _serve(routes: Dict[str, Handler]) -> str:
        app = web.Application()
        for path, handler in routes.items():
            app.router.add_get(path, handler)
        runner = web.AppRunner(app)
        await runner.setup()
        runners.append(runner)
        port = unused_tcp_port_factory()
        await web.TCPSite(runner, "localhost", port).start()
        return f"http://localhost:{port}"

    try:
        yield _serve
    finally:
        for runner in runners:
            await runner.cleanup()


@pytest.fixture()
def output_path(tmp_path) -> Path:
    return tmp_path / "out" / "pages.ndjson"


@pytest.fixture()
def read_ndjson() -> Callable[[Path], list[dict]]:
    def _read(path: Path) -> list[dict]:
        return [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines()]

    return _read


@pytest.fixture()
def basic_config(output_path) -> CrawlConfig:
    """
    Return a basic valid CrawlConfig for crawler tests.
    """
    return CrawlConfig(
        seed_url="http://example.com",
        output=output_path,
        max_depth=1,
        timeout=2.0,
        user_agent="TestAgent/1.0",
        rate_interval=0.01,
    )


@pytest.fixture()
def mock_page() -> FetchedPage:
    """
    Provide a simple FetchedPage instance with HTML content.
    """
    html = (
        "<html><head><title>Home</title></head><body><p>Hello</p>"
        '<a href="/link1">L1</a><a href="http://external.com/x">X</a></body></html>'
    )
    return FetchedPage(
        url="http://example.com/",
        final_url="http://example.com/",
        status=200,
        content_type="text/html",
        html=html,
    )


@pytest.fixture()
def crawn_logs(caplog) -> Iterator[pytest.LogCaptureFixture]:
    """caplog wired to the non-propagating ``crawn`` logger."""
    lg = logging.getLogger("crawn")
    lg.addHandler(caplog.handler)
    caplog.set_level(logging.DEBUG, logger="crawn")
    yield caplog
    lg.removeHandler(caplog.handler)


@pytest.fixture()
def config_files(tmp_path) -> Dict[str, Path]:
    """YAML and JSON config files with the same settings."""
    output = tmp_path / "a.ndjson"
    yaml_file = tmp_path / "crawn.yaml"
    yaml_file.write_text(
        f"seed_url: https://example.com/docs\noutput: {output}\nmax_depth: 2\n",
        encoding="utf-8",
    )
    json_file = tmp_path / "crawn.json"
    json_file.write_text(
        json.dumps({"seed_url": "https://example.com/docs", "output": str(output), "max_depth": 2}),
        encoding="utf-8",
    )
    return {"yaml": yaml_file, "json": json_file}
