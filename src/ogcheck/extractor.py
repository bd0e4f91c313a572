# src/ogcheck/extractor.py
"""Extract social sharing metadata from raw HTML.

This is a best-effort text scan, not a DOM parse. Malformed markup never
raises; a tag that cannot be matched is simply missing from the result.
"""

import logging
import re
from typing import Dict, Optional

logger = logging.getLogger(__name__)

# Applied in order, one pass each. "&amp;amp;" therefore decodes to "&amp;".
HTML_ENTITIES = (
    ("&amp;", "&"),
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&quot;", '"'),
    ("&#39;", "'"),
    ("&#x27;", "'"),
    ("&#x2F;", "/"),
    ("&nbsp;", " "),
)

TITLE_RE = re.compile(r"<title[^>]*>([^<]*)</title>", re.IGNORECASE)
META_RE = re.compile(r"<meta\s+([^>]+?)/?>", re.IGNORECASE)
META_KEY_RE = re.compile(r"""(?:property|name)\s*=\s*["']([^"']+)["']""", re.IGNORECASE)
META_CONTENT_RE = re.compile(r"""content\s*=\s*["']([^"']*)["']""", re.IGNORECASE)

DESCRIPTION_PATTERNS = (
    re.compile(
        r"""<meta\s+[^>]*name\s*=\s*["']description["'][^>]*content\s*=\s*["']([^"']*)["'][^>]*/?>""",
        re.IGNORECASE,
    ),
    re.compile(
        r"""<meta\s+[^>]*content\s*=\s*["']([^"']*)["'][^>]*name\s*=\s*["']description["'][^>]*/?>""",
        re.IGNORECASE,
    ),
)

CANONICAL_PATTERNS = (
    re.compile(
        r"""<link\s+[^>]*rel\s*=\s*["']canonical["'][^>]*href\s*=\s*["']([^"']*)["'][^>]*/?>""",
        re.IGNORECASE,
    ),
    re.compile(
        r"""<link\s+[^>]*href\s*=\s*["']([^"']*)["'][^>]*rel\s*=\s*["']canonical["'][^>]*/?>""",
        re.IGNORECASE,
    ),
)

FAVICON_RE = re.compile(
    r"""<link\s+[^>]*rel\s*=\s*["'](?:icon|shortcut icon)["'][^>]*href\s*=\s*["']([^"']*)["'][^>]*/?>""",
    re.IGNORECASE,
)


def decode_html_entities(text: str) -> str:
    """Decode the handful of entities common in meta content.

    Each entity is replaced across the whole string before the next one is
    considered. No other entities are touched.
    """
    for entity, char in HTML_ENTITIES:
        text = text.replace(entity, char)
    return text


def _first_match(patterns, html: str) -> Optional[str]:
    for pattern in patterns:
        match = pattern.search(html)
        if match:
            return match.group(1)
    return None


def extract_tags(html: str) -> Dict[str, str]:
    """Extract title, meta, canonical and favicon values from HTML.

    Args:
        html: Raw HTML text

    Returns:
        Mapping of lower-cased tag key to value. When a key repeats, the
        last occurrence in the document wins.
    """
    tags: Dict[str, str] = {}

    title_match = TITLE_RE.search(html)
    if title_match:
        tags["title"] = decode_html_entities(title_match.group(1).strip())

    for meta in META_RE.finditer(html):
        attrs = meta.group(1)

        key_match = META_KEY_RE.search(attrs)
        if not key_match:
            continue

        content_match = META_CONTENT_RE.search(attrs)
        if not content_match:
            continue

        tags[key_match.group(1).lower()] = decode_html_entities(content_match.group(1))

    # Second pass so name/content order does not matter.
    description = _first_match(DESCRIPTION_PATTERNS, html)
    if description is not None:
        tags["description"] = decode_html_entities(description)

    canonical = _first_match(CANONICAL_PATTERNS, html)
    if canonical is not None:
        tags["canonical"] = canonical

    favicon_match = FAVICON_RE.search(html)
    if favicon_match:
        tags["favicon"] = favicon_match.group(1)

    logger.debug(f"Extracted {len(tags)} tags")
    return tags
