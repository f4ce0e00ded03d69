"""HTTP constants for the remote configuration fetcher."""

# The only status code accepted as success
HTTP_STATUS_OK = 200

# Fixed deadline for a remote fetch, in seconds
DEFAULT_URL_TIMEOUT_SECONDS = 10.0

# Chunk size for streaming reads
DEFAULT_CHUNK_SIZE = 8192

# User agent sent with every request
DEFAULT_USER_AGENT = "configurator/1.0"

# Supported URL schemes
VALID_URL_SCHEMES = ("http", "https")

# Log component name
COMPONENT_FETCH = "fetch"
