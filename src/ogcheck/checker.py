"""Check pipeline: fetch a page, extract its tags, validate them."""

import logging
from typing import Optional
from urllib.parse import urlsplit, urlunsplit

from ogcheck.config import ValidationThresholds
from ogcheck.constants import DEFAULT_TIMEOUT_MS
from ogcheck.exceptions import UsageError
from ogcheck.extractor import extract_tags
from ogcheck.fetcher import Fetcher
from ogcheck.models import CheckResult
from ogcheck.validator import TagValidator

logger = logging.getLogger(__name__)


def normalize_url(raw: str) -> str:
    """Turn command-line input into an absolute http(s) URL.

    "example.com" becomes "https://example.com/".

    Raises:
        UsageError: The input cannot be turned into a usable URL
    """
    candidate = raw.strip() if raw else ""
    if not candidate:
        raise UsageError("URL is required.")

    if not candidate.startswith("http"):
        candidate = f"https://{candidate}"

    try:
        parts = urlsplit(candidate)
        parts.port  # raises on a malformed port
    except ValueError:
        raise UsageError(f"Invalid URL: {raw}")

    if (
        parts.scheme.lower() not in ("http", "https")
        or not parts.hostname
        or any(ch.isspace() for ch in candidate)
    ):
        raise UsageError(f"Invalid URL: {raw}")

    # Host names are case-insensitive; user info is not.
    userinfo, at, hostport = parts.netloc.rpartition("@")

    return urlunsplit((
        parts.scheme.lower(),
        f"{userinfo}{at}{hostport.lower()}",
        parts.path or "/",
        parts.query,
        parts.fragment,
    ))


async def check_url(
    url: str,
    timeout_ms: int = DEFAULT_TIMEOUT_MS,
    fetcher: Optional[Fetcher] = None,
    thresholds: Optional[ValidationThresholds] = None,
) -> CheckResult:
    """Run the full check for one URL.

    Args:
        url: Normalized absolute URL
        timeout_ms: Whole-fetch timeout, used when no fetcher is given
        fetcher: Optional preconfigured Fetcher
        thresholds: Optional validation thresholds

    Returns:
        CheckResult built against the final URL after redirects

    Raises:
        FetchError: The page could not be fetched
    """
    fetcher = fetcher or Fetcher(timeout_ms=timeout_ms)
    response = await fetcher.fetch(url)

    if response.redirect_count:
        logger.info(f"Followed {response.redirect_count} redirect(s) to {response.final_url}")

    tags = extract_tags(response.body)
    issues = TagValidator(thresholds=thresholds).validate(tags, response.final_url)

    return CheckResult(final_url=response.final_url, tags=tags, issues=issues)
