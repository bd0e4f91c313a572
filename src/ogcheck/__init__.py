"""Open Graph and Twitter Card validator with social preview rendering."""

from ogcheck.constants import __version__

from ogcheck.checker import check_url, normalize_url
from ogcheck.config import Config, ValidationThresholds
from ogcheck.exceptions import (
    OgCheckError,
    UsageError,
    FetchError,
    FetchTimeoutError,
    TooManyRedirectsError,
    HostNotFoundError,
)
from ogcheck.extractor import extract_tags, decode_html_entities
from ogcheck.fetcher import Fetcher
from ogcheck.models import Severity, Issue, FetchResponse, CheckResult
from ogcheck.validator import TagValidator, validate_tags

__all__ = [
    "__version__",
    # Pipeline
    "check_url",
    "normalize_url",
    "Fetcher",
    "extract_tags",
    "decode_html_entities",
    "TagValidator",
    "validate_tags",
    # Models
    "Severity",
    "Issue",
    "FetchResponse",
    "CheckResult",
    # Config
    "Config",
    "ValidationThresholds",
    # Errors
    "OgCheckError",
    "UsageError",
    "FetchError",
    "FetchTimeoutError",
    "TooManyRedirectsError",
    "HostNotFoundError",
]
