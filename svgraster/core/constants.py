"""Constants and default configuration values for svgraster."""

# Batch Processing Limits
DEFAULT_CONCURRENCY_LIMIT = 20  # Pages open in the renderer at once
MIN_CONCURRENCY_LIMIT = 1

# Sizing
DEFAULT_PROBE_HEIGHT = 64  # px, nominal height used to discover native geometry

# File handling
DEFAULT_SOURCE_EXTENSION = ".svg"
DEFAULT_OUTPUT_EXTENSION = ".png"
SVG_DATA_URI_PREFIX = "data:image/svg+xml;base64,"

# Renderer
SUPPORTED_BROWSERS = ("chromium", "firefox", "webkit")
DEFAULT_BROWSER = "chromium"
DEFAULT_NAVIGATION_TIMEOUT_MS = 30000
LOAD_STATUS_SUCCESS = "success"
LOAD_STATUS_FAIL = "fail"

# Reporting
ERROR_MESSAGE_MAX_LENGTH = 200
REPORT_FORMATS = ("json", "csv")
