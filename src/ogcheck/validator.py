"""Rule-based validator for Open Graph, Twitter Card and standard meta tags."""

import logging
import re
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional
from urllib.parse import urljoin

from ogcheck.config import ValidationThresholds, default_thresholds
from ogcheck.constants import PLACEHOLDER_DESCRIPTION, PLACEHOLDER_TITLE
from ogcheck.models import Issue, Severity

logger = logging.getLogger(__name__)

_LEADING_INT_RE = re.compile(r"^\s*([+-]?[0-9]+)")


def parse_dimension(value: str) -> Optional[int]:
    """Parse the leading decimal integer of a dimension value.

    "1200px" parses as 1200; a value without leading digits returns None.
    """
    match = _LEADING_INT_RE.match(value)
    if not match:
        return None
    return int(match.group(1))


def _absolute_url(base: str, value: str) -> str:
    try:
        return urljoin(base, value)
    except ValueError:
        # Malformed page content, e.g. an unterminated IPv6 host.
        logger.debug(f"Could not resolve {value!r} against {base}")
        return value


def _format_dimension(value: Optional[int]) -> str:
    return "NaN" if value is None else str(value)


def _below(value: Optional[int], minimum: int) -> bool:
    # Unparseable dimensions count as too small.
    return value is None or value < minimum


@dataclass(frozen=True)
class RuleContext:
    """Inputs shared by every rule."""

    tags: Dict[str, str]
    url: str
    thresholds: ValidationThresholds

    def get(self, key: str) -> str:
        return self.tags.get(key) or ""

    def has(self, key: str) -> bool:
        return bool(self.tags.get(key))


@dataclass(frozen=True)
class Rule:
    """One entry of the rule table.

    `applies` decides whether the rule fires; `problem` and `fix` build the
    issue text and are only called when it does.
    """

    tag: str
    severity: Severity
    applies: Callable[[RuleContext], bool]
    problem: Callable[[RuleContext], str]
    fix: Callable[[RuleContext], str]

    def evaluate(self, ctx: RuleContext) -> Optional[Issue]:
        if not self.applies(ctx):
            return None
        return Issue(
            tag=self.tag,
            problem=self.problem(ctx),
            fix=self.fix(ctx),
            severity=self.severity,
        )


def _image_dimensions(ctx: RuleContext):
    return (
        parse_dimension(ctx.get("og:image:width")),
        parse_dimension(ctx.get("og:image:height")),
    )


def _image_too_small(ctx: RuleContext) -> bool:
    if not ctx.has("og:image"):
        return False
    if not (ctx.has("og:image:width") and ctx.has("og:image:height")):
        return False
    width, height = _image_dimensions(ctx)
    minimum = ctx.thresholds.og_image_min_dimension
    return _below(width, minimum) or _below(height, minimum)


def _image_too_small_problem(ctx: RuleContext) -> str:
    width, height = _image_dimensions(ctx)
    minimum = ctx.thresholds.og_image_min_dimension
    return (
        f"Image is {_format_dimension(width)}x{_format_dimension(height)}px. "
        f"Most platforms need at least {minimum}x{minimum}px. Facebook recommends 1200x630px."
    )


# Evaluated top to bottom; every rule runs regardless of earlier results.
RULES: List[Rule] = [
    Rule(
        tag="og:title",
        severity=Severity.ERROR,
        applies=lambda ctx: not ctx.has("og:title"),
        problem=lambda ctx: "Missing og:title. Social platforms won't show a proper title for your link.",
        fix=lambda ctx: f'<meta property="og:title" content="{ctx.get("title") or PLACEHOLDER_TITLE}" />',
    ),
    Rule(
        tag="og:title",
        severity=Severity.WARNING,
        applies=lambda ctx: (
            ctx.has("og:title")
            and len(ctx.get("og:title")) > ctx.thresholds.og_title_max_length
        ),
        problem=lambda ctx: (
            f"og:title is {len(ctx.get('og:title'))} chars. "
            "It'll get truncated on most platforms (keep under 60-95 chars)."
        ),
        fix=lambda ctx: "Shorten your og:title to under 60 characters for best display.",
    ),
    Rule(
        tag="og:description",
        severity=Severity.ERROR,
        applies=lambda ctx: not ctx.has("og:description"),
        problem=lambda ctx: "Missing og:description. Your link preview won't have a description snippet.",
        fix=lambda ctx: (
            f'<meta property="og:description" '
            f'content="{ctx.get("description") or PLACEHOLDER_DESCRIPTION}" />'
        ),
    ),
    Rule(
        tag="og:description",
        severity=Severity.WARNING,
        applies=lambda ctx: (
            ctx.has("og:description")
            and len(ctx.get("og:description")) > ctx.thresholds.og_description_max_length
        ),
        problem=lambda ctx: (
            f"og:description is {len(ctx.get('og:description'))} chars. "
            "Keep it under 200 for best display."
        ),
        fix=lambda ctx: "Shorten your og:description to under 200 characters.",
    ),
    Rule(
        tag="og:image",
        severity=Severity.ERROR,
        applies=lambda ctx: not ctx.has("og:image"),
        problem=lambda ctx: "Missing og:image. Your link will have no preview image on any platform.",
        fix=lambda ctx: '<meta property="og:image" content="https://yoursite.com/og-image.png" />',
    ),
    Rule(
        tag="og:image",
        severity=Severity.ERROR,
        applies=lambda ctx: ctx.has("og:image") and not ctx.get("og:image").startswith("http"),
        problem=lambda ctx: (
            "og:image should be an absolute URL (starting with https://). "
            "Relative URLs won't work."
        ),
        fix=lambda ctx: (
            f'<meta property="og:image" content="{_absolute_url(ctx.url, ctx.get("og:image"))}" />'
        ),
    ),
    Rule(
        tag="og:image:width/height",
        severity=Severity.WARNING,
        applies=lambda ctx: (
            ctx.has("og:image")
            and not (ctx.has("og:image:width") and ctx.has("og:image:height"))
        ),
        problem=lambda ctx: (
            "Missing og:image:width and og:image:height. "
            "Some platforms won't show the image without dimensions."
        ),
        fix=lambda ctx: (
            '<meta property="og:image:width" content="1200" />\n'
            '<meta property="og:image:height" content="630" />'
        ),
    ),
    Rule(
        tag="og:image",
        severity=Severity.WARNING,
        applies=_image_too_small,
        problem=_image_too_small_problem,
        fix=lambda ctx: "Use an image that's at least 1200x630px for best results.",
    ),
    Rule(
        tag="og:image:alt",
        severity=Severity.INFO,
        applies=lambda ctx: ctx.has("og:image") and not ctx.has("og:image:alt"),
        problem=lambda ctx: "Missing og:image:alt. Add alt text for accessibility.",
        fix=lambda ctx: '<meta property="og:image:alt" content="Description of the image" />',
    ),
    Rule(
        tag="og:url",
        severity=Severity.WARNING,
        applies=lambda ctx: not ctx.has("og:url"),
        problem=lambda ctx: "Missing og:url. Platforms won't know the canonical URL for your page.",
        fix=lambda ctx: f'<meta property="og:url" content="{ctx.url}" />',
    ),
    Rule(
        tag="og:type",
        severity=Severity.INFO,
        applies=lambda ctx: not ctx.has("og:type"),
        problem=lambda ctx: 'Missing og:type. Defaults to "website" but it\'s better to be explicit.',
        fix=lambda ctx: '<meta property="og:type" content="website" />',
    ),
    Rule(
        tag="twitter:card",
        severity=Severity.WARNING,
        applies=lambda ctx: not ctx.has("twitter:card"),
        problem=lambda ctx: "Missing twitter:card. Twitter won't show a rich preview without it.",
        fix=lambda ctx: '<meta name="twitter:card" content="summary_large_image" />',
    ),
    Rule(
        tag="twitter:title",
        severity=Severity.ERROR,
        applies=lambda ctx: not ctx.has("twitter:title") and not ctx.has("og:title"),
        problem=lambda ctx: "No twitter:title or og:title. Twitter won't display a title.",
        fix=lambda ctx: '<meta name="twitter:title" content="Your Page Title" />',
    ),
    Rule(
        tag="twitter:image",
        severity=Severity.WARNING,
        applies=lambda ctx: not ctx.has("twitter:image") and not ctx.has("og:image"),
        problem=lambda ctx: "No twitter:image or og:image. Twitter preview will have no image.",
        fix=lambda ctx: '<meta name="twitter:image" content="https://yoursite.com/twitter-image.png" />',
    ),
    Rule(
        tag="title",
        severity=Severity.WARNING,
        applies=lambda ctx: not ctx.has("title"),
        problem=lambda ctx: "Missing <title> tag. This affects SEO and browser tab display.",
        fix=lambda ctx: "<title>Your Page Title</title>",
    ),
    Rule(
        tag="description",
        severity=Severity.INFO,
        applies=lambda ctx: not ctx.has("description"),
        problem=lambda ctx: "Missing meta description. Search engines use this for search result snippets.",
        fix=lambda ctx: '<meta name="description" content="A brief description" />',
    ),
    Rule(
        tag="canonical",
        severity=Severity.INFO,
        applies=lambda ctx: not ctx.has("canonical"),
        problem=lambda ctx: "Missing canonical URL. This helps prevent duplicate content issues.",
        fix=lambda ctx: f'<link rel="canonical" href="{ctx.url}" />',
    ),
]


class TagValidator:
    """Runs the rule table against extracted tags."""

    def __init__(
        self,
        thresholds: Optional[ValidationThresholds] = None,
        rules: Optional[List[Rule]] = None,
    ):
        """Initialize validator with configurable settings.

        Args:
            thresholds: Validation thresholds configuration
            rules: Rule table to evaluate, in order
        """
        self.thresholds = thresholds or default_thresholds
        self.rules = rules if rules is not None else RULES

    def validate(self, tags: Dict[str, str], url: str) -> List[Issue]:
        """Validate extracted tags for a page.

        Args:
            tags: Extracted metadata map
            url: Resolved page URL, used in fix snippets

        Returns:
            Issues in rule order
        """
        ctx = RuleContext(tags=tags, url=url, thresholds=self.thresholds)
        issues = []
        for rule in self.rules:
            issue = rule.evaluate(ctx)
            if issue is not None:
                issues.append(issue)

        logger.debug(f"{len(issues)} issues for {url}")
        return issues


def validate_tags(
    tags: Dict[str, str],
    url: str,
    thresholds: Optional[ValidationThresholds] = None,
) -> List[Issue]:
    """Validate tags with the default rule table."""
    return TagValidator(thresholds=thresholds).validate(tags, url)

