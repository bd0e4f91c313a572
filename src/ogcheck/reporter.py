"""Report rendering: JSON documents and the terminal report."""

import json
import os
import sys
from typing import Dict, List, Optional, TextIO
from urllib.parse import urlparse

from ogcheck.constants import (
    JSON_INDENT,
    PREVIEW_BOX_WIDTH,
    PREVIEW_IMAGE_LIMIT,
    PREVIEW_TEXT_LIMIT,
    PROGRAM_NAME,
    SLACK_IMAGE_LIMIT,
    SLACK_TEXT_LIMIT,
    TAG_KEY_WIDTH,
    TAG_VALUE_LIMIT,
    __version__,
)
from ogcheck.models import CheckResult, Issue, Severity


def truncate(text: Optional[str], limit: int) -> str:
    """Cut text to `limit` characters, ending in "..." when shortened."""
    if not text:
        return ""
    return text[:limit - 3] + "..." if len(text) > limit else text


# =============================================================================
# JSON
# =============================================================================

def build_json_report(result: CheckResult) -> Dict:
    return result.to_dict()


def build_error_report(message: str) -> Dict:
    return {"error": message}


def render_json(documents: List[Dict]) -> str:
    """Render one document as-is, several as a JSON array."""
    payload = documents[0] if len(documents) == 1 else documents
    return json.dumps(payload, indent=JSON_INDENT, ensure_ascii=False)


# =============================================================================
# Terminal
# =============================================================================

class Palette:
    """ANSI styling; every method is the identity when disabled."""

    CODES = {
        "red": "\x1b[31m",
        "green": "\x1b[32m",
        "yellow": "\x1b[33m",
        "blue": "\x1b[34m",
        "cyan": "\x1b[36m",
        "dim": "\x1b[2m",
        "bold": "\x1b[1m",
        "bg_green": "\x1b[42m\x1b[37m",
    }
    RESET = "\x1b[0m"

    def __init__(self, enabled: bool = True):
        self.enabled = enabled

    def style(self, name: str, text: str) -> str:
        if not self.enabled:
            return text
        return f"{self.CODES[name]}{text}{self.RESET}"

    def __getattr__(self, name: str):
        if name in Palette.CODES:
            return lambda text: self.style(name, text)
        raise AttributeError(name)


def color_enabled(stream: TextIO) -> bool:
    """Colors only on a TTY, and never when NO_COLOR is set."""
    if os.environ.get("NO_COLOR") is not None:
        return False
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


SEVERITY_ICONS = {
    Severity.ERROR: ("x", "red"),
    Severity.WARNING: ("!", "yellow"),
    Severity.INFO: ("i", "cyan"),
}


class TerminalReporter:
    """Renders a CheckResult as a human-oriented terminal report."""

    def __init__(
        self,
        stream: Optional[TextIO] = None,
        err_stream: Optional[TextIO] = None,
        use_color: Optional[bool] = None,
    ):
        self.stream = stream or sys.stdout
        self.err_stream = err_stream or sys.stderr
        if use_color is None:
            use_color = color_enabled(self.stream)
        self.c = Palette(use_color)

    def _out(self, line: str = "") -> None:
        print(line, file=self.stream)

    def _err(self, line: str = "") -> None:
        print(line, file=self.err_stream)

    def render_header(self, url: str) -> None:
        c = self.c
        self._out()
        self._out(c.bold(c.cyan(f"  {PROGRAM_NAME}")) + c.dim(f" v{__version__}"))
        self._out(c.dim(f"  Fetching {url}..."))
        self._out()

    def render(self, result: CheckResult) -> None:
        self.render_tag_table(result.tags)
        self.render_previews(result.tags, result.final_url)
        self.render_issues(result.issues)

    def render_tag_table(self, tags: Dict[str, str]) -> None:
        c = self.c
        self._out(c.bold("  All Meta Tags Found"))
        self._out()

        groups = [
            ("Open Graph", [(k, v) for k, v in tags.items() if k.startswith("og:")]),
            ("Twitter Card", [(k, v) for k, v in tags.items() if k.startswith("twitter:")]),
            ("Standard HTML", [
                (k, v) for k, v in tags.items()
                if not k.startswith("og:") and not k.startswith("twitter:")
            ]),
        ]

        for heading, entries in groups:
            if not entries:
                continue
            self._out(c.cyan(f"  {heading}"))
            for key, value in entries:
                self._out(f"    {c.dim(key.ljust(TAG_KEY_WIDTH))} {truncate(value, TAG_VALUE_LIMIT)}")
            self._out()

    def _box_line(self, text: str, style: Optional[str] = None) -> str:
        padded = text.ljust(PREVIEW_BOX_WIDTH)
        if style:
            padded = self.c.style(style, padded)
        return self.c.dim("  |") + padded + self.c.dim("|")

    def _box_edge(self) -> str:
        return self.c.dim("  +" + "-" * PREVIEW_BOX_WIDTH + "+")

    def render_previews(self, tags: Dict[str, str], url: str) -> None:
        """Print approximate Twitter/X, Facebook, LinkedIn and Slack cards."""
        c = self.c
        title = tags.get("og:title") or tags.get("twitter:title") or tags.get("title") or "No title"
        desc = (
            tags.get("og:description")
            or tags.get("twitter:description")
            or tags.get("description")
            or "No description"
        )
        image = tags.get("og:image") or tags.get("twitter:image") or None
        site_name = tags.get("og:site_name") or urlparse(url).hostname or url

        image_line = f" [Image: {truncate(image, PREVIEW_IMAGE_LIMIT)}]" if image else ""
        title_line = f" {truncate(title, PREVIEW_TEXT_LIMIT)}"
        desc_line = f" {truncate(desc, PREVIEW_TEXT_LIMIT)}"

        self._out(c.bold("  Twitter/X Preview"))
        self._out(self._box_edge())
        if image:
            self._out(self._box_line(image_line, "cyan"))
        self._out(self._box_line(title_line, "bold"))
        self._out(self._box_line(desc_line))
        self._out(self._box_line(f" {truncate(site_name, PREVIEW_TEXT_LIMIT)}", "dim"))
        self._out(self._box_edge())
        self._out()

        self._out(c.bold("  Facebook Preview"))
        self._out(self._box_edge())
        if image:
            self._out(self._box_line(image_line, "blue"))
        self._out(self._box_line(f" {site_name}", "dim"))
        self._out(self._box_line(title_line, "bold"))
        self._out(self._box_line(desc_line))
        self._out(self._box_edge())
        self._out()

        self._out(c.bold("  LinkedIn Preview"))
        self._out(self._box_edge())
        if image:
            self._out(self._box_line(image_line, "blue"))
        self._out(self._box_line(title_line, "bold"))
        self._out(self._box_line(f" {site_name}", "dim"))
        self._out(self._box_edge())
        self._out()

        bar = c.dim("  |") + c.green(" |")
        self._out(c.bold("  Slack Preview"))
        self._out(bar + c.bold(f" {truncate(title, SLACK_TEXT_LIMIT)}"))
        self._out(bar + f" {truncate(desc, SLACK_TEXT_LIMIT)}")
        if image:
            self._out(bar + c.cyan(f" [Image: {truncate(image, SLACK_IMAGE_LIMIT)}]"))
        self._out()

    def render_issues(self, issues: List[Issue]) -> None:
        c = self.c
        if not issues:
            self._out(c.bg_green(" ALL GOOD ") + " Your OG tags look great!")
            self._out()
            return

        self._out(c.bold("  Issues"))
        for issue in issues:
            icon, color = SEVERITY_ICONS[issue.severity]
            self._out(f"  {c.style(color, icon)} {c.bold(issue.tag)}: {issue.problem}")
            self._out(c.dim(f"    Fix: {issue.fix}"))
            self._out()

        errors = sum(1 for i in issues if i.severity == Severity.ERROR)
        warnings = sum(1 for i in issues if i.severity == Severity.WARNING)
        infos = sum(1 for i in issues if i.severity == Severity.INFO)
        self._out(
            f"  {c.red(f'{errors} errors')}  {c.yellow(f'{warnings} warnings')}"
            f"  {c.cyan(f'{infos} suggestions')}"
        )
        self._out()

    def render_error(self, error: Exception) -> None:
        c = self.c
        self._err()
        self._err(c.red(f"  Error: {error}"))
        hint = getattr(error, "hint", None)
        if hint:
            self._err(c.dim(f"  {hint}"))
        self._err()
