"""HTTP fetch layer for remote configuration documents.

Provides a single bounded GET with:
- A fixed deadline
- Strict 200-only status handling
- URL credential redaction for logs
"""

from src.features.fetch.client import RemoteFetcher, fetch
from src.features.fetch.constants import (
    DEFAULT_URL_TIMEOUT_SECONDS,
    HTTP_STATUS_OK,
)
from src.features.fetch.redact import redact_url, redact_url_credentials


__all__ = [
    "DEFAULT_URL_TIMEOUT_SECONDS",
    "HTTP_STATUS_OK",
    "RemoteFetcher",
    "fetch",
    "redact_url",
    "redact_url_credentials",
]
