"""Constants for the configuration module."""

# Marker file whose presence identifies a project root
PROJECT_CONFIG_FILE = "project.toml"

# Environment variable holding the remote configuration URL
PROJECT_TOML_ENV = "PROJECT_TOML"

# Encoding of configuration payloads
PAYLOAD_ENCODING = "utf-8"

# Log component names
COMPONENT_CONFIG = "config"
COMPONENT_CLI = "cli"

# Source kinds recorded on a resolved source
SOURCE_KIND_FILE = "file"
SOURCE_KIND_URL = "url"

# Operation names attached to errors
OP_RESOLVE_PATH = "resolve path"
OP_READ_FILE = "read config file"
OP_DECODE = "parse toml"
OP_FIND_ROOT = "find project root"
OP_LOAD_CONFIG = "load config"
OP_FETCH = "fetch toml from url"
OP_RESOLVE_URL = "resolve config url"
