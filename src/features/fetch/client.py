"""HTTP client for fetching remote configuration payloads."""

import threading
import time
from concurrent.futures import ThreadPoolExecutor
from io import BytesIO

import httpx
import structlog

from src.features.config.constants import OP_FETCH
from src.features.config.errors import RequestError, StatusError, TransportError
from src.features.fetch.constants import (
    COMPONENT_FETCH,
    DEFAULT_CHUNK_SIZE,
    DEFAULT_URL_TIMEOUT_SECONDS,
    DEFAULT_USER_AGENT,
    HTTP_STATUS_OK,
    VALID_URL_SCHEMES,
)
from src.features.fetch.redact import redact_url


logger = structlog.get_logger()


class RemoteFetcher:
    """Fetches a configuration payload with a single bounded GET.

    Each fetch:
    - Issues exactly one GET request, following redirects
    - Gives up after a fixed deadline of DEFAULT_URL_TIMEOUT_SECONDS
    - Accepts only status 200
    - Closes the response on every exit path
    """

    def __init__(self, transport: httpx.BaseTransport | None = None) -> None:
        """Initialize the fetcher.

        Args:
            transport: Optional httpx transport, e.g. httpx.MockTransport in
                tests. Defaults to the real network transport.
        """
        self._transport = transport
        self._log = logger.bind(component=COMPONENT_FETCH)

    @property
    def timeout_seconds(self) -> float:
        """Get the fixed fetch deadline in seconds."""
        return DEFAULT_URL_TIMEOUT_SECONDS

    def fetch(self, url: str) -> bytes:
        """Fetch the raw payload at ``url``.

        The request runs on a worker thread so that control returns to the
        caller once the deadline passes, even while a slow server is still
        connecting, sending headers or trickling the body.

        Args:
            url: HTTP or HTTPS URL of the configuration document.

        Returns:
            Response body bytes.

        Raises:
            RequestError: If the URL cannot be turned into a request.
            TransportError: If the request cannot complete in time.
            StatusError: If the response status is not 200.
        """
        safe_url = redact_url(url)
        log = self._log.bind(url=safe_url)
        request_url = self._build_url(url, safe_url)

        timeout_seconds = DEFAULT_URL_TIMEOUT_SECONDS
        start_time_ns = time.perf_counter_ns()
        deadline = time.monotonic() + timeout_seconds
        abandoned = threading.Event()
        log.debug("fetch_start", timeout_seconds=timeout_seconds)

        executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="config-fetch")
        future = executor.submit(
            self._fetch_once, request_url, safe_url, deadline, abandoned
        )
        try:
            body = future.result(timeout=timeout_seconds)
        except TimeoutError as e:
            abandoned.set()
            log.debug("fetch_deadline_exceeded", timeout_seconds=timeout_seconds)
            msg = f"deadline of {timeout_seconds}s exceeded"
            raise TransportError(msg, OP_FETCH) from e
        finally:
            # The worker exits on its own once its socket times out
            executor.shutdown(wait=False)

        duration_ms = (time.perf_counter_ns() - start_time_ns) / 1_000_000
        log.debug(
            "fetch_complete",
            status_code=HTTP_STATUS_OK,
            bytes=len(body),
            duration_ms=round(duration_ms, 2),
        )
        return body

    def _fetch_once(
        self,
        request_url: httpx.URL,
        safe_url: str,
        deadline: float,
        abandoned: threading.Event,
    ) -> bytes:
        """Issue the GET and read the body, mapping httpx failures.

        Args:
            request_url: Validated request URL.
            safe_url: Redacted form for error messages.
            deadline: Monotonic clock value after which reading stops.
            abandoned: Set once the caller has stopped waiting.

        Returns:
            Response body bytes.
        """
        timeout_seconds = DEFAULT_URL_TIMEOUT_SECONDS

        try:
            with httpx.Client(
                timeout=timeout_seconds,
                follow_redirects=True,
                transport=self._transport,
                headers={"User-Agent": DEFAULT_USER_AGENT},
            ) as client:
                with client.stream("GET", request_url) as response:
                    if response.status_code != HTTP_STATUS_OK:
                        self._log.debug(
                            "fetch_rejected",
                            url=safe_url,
                            status_code=response.status_code,
                        )
                        raise StatusError(response.status_code, safe_url, OP_FETCH)

                    return self._read_body(response, deadline, abandoned)

        except httpx.UnsupportedProtocol as e:
            raise RequestError(f"create http request: {e}", OP_FETCH) from e

        except httpx.InvalidURL as e:
            raise RequestError(f"create http request: {e}", OP_FETCH) from e

        except httpx.TimeoutException as e:
            msg = f"request timed out after {timeout_seconds}s: {e}"
            raise TransportError(msg, OP_FETCH) from e

        except httpx.RequestError as e:
            msg = f"{type(e).__name__}: {e}"
            raise TransportError(msg, OP_FETCH) from e

    def _build_url(self, url: str, safe_url: str) -> httpx.URL:
        """Validate a URL before any connection is attempted.

        Args:
            url: URL as supplied by the caller.
            safe_url: Redacted form for error messages.

        Returns:
            Parsed httpx URL.

        Raises:
            RequestError: If the URL is malformed, lacks a host, or uses an
                unsupported scheme.
        """
        try:
            parsed = httpx.URL(url)
        except (httpx.InvalidURL, TypeError) as e:
            msg = f"create http request: invalid URL {safe_url!r}: {e}"
            raise RequestError(msg, OP_FETCH) from e

        if parsed.scheme not in VALID_URL_SCHEMES:
            msg = f"create http request: unsupported scheme in {safe_url!r}"
            raise RequestError(msg, OP_FETCH)

        if not parsed.host:
            msg = f"create http request: missing host in {safe_url!r}"
            raise RequestError(msg, OP_FETCH)

        return parsed

    def _read_body(
        self,
        response: httpx.Response,
        deadline: float,
        abandoned: threading.Event,
    ) -> bytes:
        """Read the response body, giving up once the deadline passes.

        Args:
            response: Streaming HTTP response.
            deadline: Monotonic clock value after which reading stops.
            abandoned: Set once the caller has stopped waiting.

        Returns:
            Response body bytes.

        Raises:
            TransportError: If the deadline passes before the body is read.
        """
        buffer = BytesIO()

        for chunk in response.iter_bytes(chunk_size=DEFAULT_CHUNK_SIZE):
            if abandoned.is_set() or time.monotonic() > deadline:
                msg = (
                    f"read response body: deadline of "
                    f"{DEFAULT_URL_TIMEOUT_SECONDS}s exceeded"
                )
                raise TransportError(msg, OP_FETCH)
            buffer.write(chunk)

        return buffer.getvalue()


def fetch(url: str) -> bytes:
    """Fetch a configuration payload with a default RemoteFetcher.

    Args:
        url: HTTP or HTTPS URL of the configuration document.

    Returns:
        Response body bytes.
    """
    return RemoteFetcher().fetch(url)
