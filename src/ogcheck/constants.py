# src/ogcheck/constants.py
"""Centralized constants for og-check.

Values that users may want to tune live in config.py (ValidationThresholds).
"""

__version__ = "1.0.0"

PROGRAM_NAME = "og-check"

# =============================================================================
# Fetcher Constants
# =============================================================================

# Redirect hops followed before giving up
MAX_REDIRECTS = 5

# Whole-fetch timeout, including every redirect hop (milliseconds)
DEFAULT_TIMEOUT_MS = 10000

DEFAULT_USER_AGENT = f"{PROGRAM_NAME}/{__version__} (Open Graph Validator)"

DEFAULT_ACCEPT = "text/html,application/xhtml+xml"
DEFAULT_ACCEPT_LANGUAGE = "en-US,en;q=0.9"

# Shown after a DNS resolution failure
HOST_NOT_FOUND_HINT = "Could not resolve hostname. Check the URL and try again."

# Substrings of resolver errors across platforms
DNS_ERROR_MARKERS = (
    "name or service not known",
    "nodename nor servname",
    "getaddrinfo failed",
    "temporary failure in name resolution",
    "no address associated with hostname",
    "name does not resolve",
)

# =============================================================================
# Validation Constants
# =============================================================================

# Defaults for ValidationThresholds
OG_TITLE_MAX_LENGTH = 95
OG_DESCRIPTION_MAX_LENGTH = 300
OG_IMAGE_MIN_DIMENSION = 200

# Placeholders used in fix snippets when no fallback value exists
PLACEHOLDER_TITLE = "Your Page Title"
PLACEHOLDER_DESCRIPTION = "A brief description of your page"

# =============================================================================
# Reporter Constants
# =============================================================================

# Inner width of the Twitter/Facebook/LinkedIn preview boxes
PREVIEW_BOX_WIDTH = 50
PREVIEW_TEXT_LIMIT = 48
PREVIEW_IMAGE_LIMIT = 44

SLACK_TEXT_LIMIT = 45
SLACK_IMAGE_LIMIT = 38

TAG_KEY_WIDTH = 25
TAG_VALUE_LIMIT = 60

JSON_INDENT = 2
