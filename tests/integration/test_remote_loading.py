"""Integration tests for loading configuration from a live HTTP server."""

import socket
import threading
import time
from collections.abc import Generator
from http.server import BaseHTTPRequestHandler, HTTPServer

import pytest
from pydantic import BaseModel

from src.features.config.errors import StatusError, TransportError
from src.features.config.loader import load_from_url, load_from_url_or_env
from src.features.fetch import client as client_module
from src.features.fetch.client import RemoteFetcher
from src.settings import AppSettings


PROXY_ENV_VARS = (
    "HTTP_PROXY",
    "HTTPS_PROXY",
    "ALL_PROXY",
    "http_proxy",
    "https_proxy",
    "all_proxy",
)

CONFIG_BODY = b"""[project]
name = "test-project"

[settings]
port = 8080
"""


class Project(BaseModel):
    """Project section."""

    name: str


class Settings(BaseModel):
    """Settings section."""

    port: int


class RemoteConfig(BaseModel):
    """Decode target for served documents."""

    project: Project
    settings: Settings


def get_server_url(server: HTTPServer, path: str) -> str:
    """Get the URL for a path on the test server.

    Args:
        server: The HTTP server instance.
        path: The URL path.

    Returns:
        Complete URL for the server.
    """
    host, port = server.server_address[0], server.server_address[1]
    if isinstance(host, bytes):
        host = host.decode("utf-8")
    return f"http://{host}:{port}{path}"


class ConfigHTTPHandler(BaseHTTPRequestHandler):
    """HTTP handler serving a config document and an error route."""

    def log_message(self, format: str, *args: object) -> None:  # noqa: A002
        """Suppress log messages during tests."""

    def do_GET(self) -> None:  # noqa: N802
        """Serve /project.toml, fail /broken.toml, 404 everything else."""
        if self.path == "/project.toml":
            self.send_response(200)
            self.send_header("Content-Type", "application/toml")
            self.send_header("Content-Length", str(len(CONFIG_BODY)))
            self.end_headers()
            self.wfile.write(CONFIG_BODY)
            return

        status = 500 if self.path == "/broken.toml" else 404
        self.send_response(status)
        self.send_header("Content-Type", "text/plain")
        self.end_headers()
        self.wfile.write(b"error")


class SlowHTTPHandler(BaseHTTPRequestHandler):
    """HTTP handler that stalls before the headers and again mid-body."""

    stall_seconds: float = 0.7

    def log_message(self, format: str, *args: object) -> None:  # noqa: A002
        """Suppress log messages during tests."""

    def do_GET(self) -> None:  # noqa: N802
        """Send the document slowly enough to overrun a short deadline."""
        try:
            time.sleep(self.stall_seconds)
            self.send_response(200)
            self.send_header("Content-Length", str(len(CONFIG_BODY)))
            self.end_headers()
            self.wfile.write(CONFIG_BODY[:1])
            self.wfile.flush()
            time.sleep(self.stall_seconds)
            self.wfile.write(CONFIG_BODY[1:])
        except (BrokenPipeError, ConnectionResetError):
            pass


@pytest.fixture(autouse=True)
def no_proxy(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep local requests away from any configured proxy."""
    for name in PROXY_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.delenv("PROJECT_TOML", raising=False)


@pytest.fixture
def config_server() -> Generator[HTTPServer]:
    """Start a local HTTP server serving configuration documents."""
    server = HTTPServer(("127.0.0.1", 0), ConfigHTTPHandler)
    thread = threading.Thread(target=server.serve_forever)
    thread.daemon = True
    thread.start()
    yield server
    server.shutdown()
    server.server_close()


@pytest.fixture
def slow_server() -> Generator[HTTPServer]:
    """Start a local HTTP server that answers slowly."""
    server = HTTPServer(("127.0.0.1", 0), SlowHTTPHandler)
    thread = threading.Thread(target=server.serve_forever)
    thread.daemon = True
    thread.start()
    yield server
    server.shutdown()
    server.server_close()


@pytest.fixture
def closed_port_url() -> str:
    """URL on a local port with nothing listening."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        port = sock.getsockname()[1]
    return f"http://127.0.0.1:{port}/project.toml"


class TestRemoteLoading:
    """Integration tests against a local HTTP server."""

    @pytest.mark.integration
    def test_fetch_and_decode(self, config_server: HTTPServer) -> None:
        """A 200 response is decoded into the target type."""
        url = get_server_url(config_server, "/project.toml")

        cfg = load_from_url(url, RemoteConfig)

        assert cfg.project.name == "test-project"
        assert cfg.settings.port == 8080

    @pytest.mark.integration
    def test_server_error(self, config_server: HTTPServer) -> None:
        """A 500 response is a StatusError."""
        with pytest.raises(StatusError) as exc_info:
            load_from_url(get_server_url(config_server, "/broken.toml"), RemoteConfig)

        assert exc_info.value.status_code == 500

    @pytest.mark.integration
    def test_not_found(self, config_server: HTTPServer) -> None:
        """A 404 response is a StatusError."""
        with pytest.raises(StatusError) as exc_info:
            load_from_url(get_server_url(config_server, "/missing.toml"), RemoteConfig)

        assert exc_info.value.status_code == 404

    @pytest.mark.integration
    def test_from_settings(self, config_server: HTTPServer) -> None:
        """The URL can come from injected settings."""
        settings = AppSettings(
            project_toml=get_server_url(config_server, "/project.toml")
        )

        cfg = load_from_url_or_env(RemoteConfig, settings=settings)

        assert cfg.project.name == "test-project"

    @pytest.mark.integration
    def test_unreachable_host(self, closed_port_url: str) -> None:
        """Connection failures surface as TransportError within the deadline."""
        started = time.monotonic()

        with pytest.raises(TransportError):
            load_from_url(closed_port_url, RemoteConfig)

        assert time.monotonic() - started < 11


class TestFetchDeadline:
    """Integration tests for the overall fetch deadline."""

    @pytest.fixture
    def short_deadline(self, monkeypatch: pytest.MonkeyPatch) -> float:
        """Shrink the fetch deadline so slow responses overrun it quickly."""
        monkeypatch.setattr(client_module, "DEFAULT_URL_TIMEOUT_SECONDS", 1.0)
        return 1.0

    @pytest.mark.integration
    def test_slow_server_returns_at_deadline(
        self, slow_server: HTTPServer, short_deadline: float
    ) -> None:
        """Control returns once the total budget is spent.

        Each stall is shorter than the budget, so per-phase socket timeouts
        never fire; only the overall deadline can stop the fetch.
        """
        started = time.monotonic()

        with pytest.raises(TransportError) as exc_info:
            RemoteFetcher().fetch(get_server_url(slow_server, "/project.toml"))

        elapsed = time.monotonic() - started
        assert "deadline" in str(exc_info.value)
        assert elapsed < short_deadline + 0.3

    @pytest.mark.integration
    def test_fast_server_within_deadline(
        self, config_server: HTTPServer, short_deadline: float
    ) -> None:
        """Responses that finish in time are returned unchanged."""
        body = RemoteFetcher().fetch(get_server_url(config_server, "/project.toml"))

        assert body == CONFIG_BODY
