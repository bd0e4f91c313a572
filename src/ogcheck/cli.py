"""Command-line interface for og-check."""

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from ogcheck.checker import check_url, normalize_url
from ogcheck.config import Config, ValidationThresholds
from ogcheck.exceptions import FetchError, UsageError
from ogcheck.fetcher import Fetcher
from ogcheck.logging_config import setup_logging
from ogcheck.reporter import (
    Palette,
    TerminalReporter,
    build_error_report,
    build_json_report,
    color_enabled,
    render_json,
)

logger = logging.getLogger(__name__)

KNOWN_OPTIONS = {
    "--json", "--ci", "--timeout", "--help", "-h", "--log-level", "--log-file", "--config",
}
HELP_OPTIONS = ("--help", "-h")


class _Parser(argparse.ArgumentParser):
    """ArgumentParser that reports bad input as UsageError instead of exiting 2."""

    def error(self, message):
        raise UsageError(message)


def build_parser(config: Config) -> argparse.ArgumentParser:
    parser = _Parser(prog="og-check", add_help=False)
    parser.add_argument("urls", nargs="*", help="URLs to check")
    parser.add_argument("--json", action="store_true", help="Output results as JSON")
    parser.add_argument(
        "--ci",
        action="store_true",
        help="Exit with code 1 when any error-severity issue is found",
    )
    parser.add_argument(
        "--timeout",
        type=int,
        default=config.timeout_ms,
        help=f"Request timeout in ms (default: {config.timeout_ms})",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
        default=config.log_level.upper(),
        help="Set logging verbosity (default: WARNING)",
    )
    parser.add_argument(
        "--log-file",
        default=config.log_file,
        help="Write logs to file in addition to stderr",
    )
    parser.add_argument(
        "--config",
        metavar="PATH",
        help="JSON file with validation thresholds (overrides OG_CHECK_THRESHOLD_* variables)",
    )
    return parser


def split_unknown_options(argv: List[str]) -> Tuple[List[str], Dict[str, Union[str, bool]]]:
    """Separate unrecognized --key options from the arguments argparse handles.

    Unknown options are kept permissively: `--key=value` and `--key value`
    become strings, a bare `--key` becomes True.

    Returns:
        Tuple of (arguments for argparse, unknown options)
    """
    known: List[str] = []
    extra: Dict[str, Union[str, bool]] = {}
    i = 0
    while i < len(argv):
        arg = argv[i]
        name = arg.split("=", 1)[0]
        if not arg.startswith("--") or name in KNOWN_OPTIONS:
            known.append(arg)
        elif "=" in arg:
            extra[name[2:]] = arg.split("=", 1)[1]
        elif i + 1 < len(argv) and not argv[i + 1].startswith("-"):
            extra[name[2:]] = argv[i + 1]
            i += 1
        else:
            extra[name[2:]] = True
        i += 1
    return known, extra


def print_help(stream=None) -> None:
    """Print usage information."""
    stream = stream or sys.stdout
    c = Palette(color_enabled(stream))
    print(f"""
{c.bold(c.cyan('og-check'))} - Validate Open Graph tags and preview social sharing

{c.bold('USAGE')}
  {c.green('og-check')} <url> [options]

{c.bold('EXAMPLES')}
  {c.dim('# Check a URL')}
  {c.green('og-check https://example.com')}

  {c.dim('# JSON output for CI')}
  {c.green('og-check https://example.com --json')}

  {c.dim('# Check multiple URLs')}
  {c.green('og-check https://example.com https://another.com')}

{c.bold('OPTIONS')}
  {c.yellow('--json')}            Output results as JSON
  {c.yellow('--ci')}              Exit with code 1 on missing required tags
  {c.yellow('--timeout')}         Request timeout in ms (default: 10000)
  {c.yellow('--log-level')}       Logging verbosity: DEBUG, INFO, WARNING, ERROR
  {c.yellow('--log-file')}        Also write logs to this file
  {c.yellow('--config')}          JSON file with validation thresholds
  {c.yellow('--help')}            Show this help message

{c.bold('CHECKED TAGS')}
  {c.cyan('og:title')}          Page title for social sharing
  {c.cyan('og:description')}    Page description snippet
  {c.cyan('og:image')}          Preview image URL
  {c.cyan('og:url')}            Canonical URL
  {c.cyan('og:type')}           Content type (website, article, etc.)
  {c.cyan('twitter:card')}      Twitter card type
  {c.cyan('twitter:title')}     Twitter-specific title
  {c.cyan('twitter:image')}     Twitter-specific image

{c.bold('PREVIEWS')}
  Shows how your link will look when shared on:
  - Twitter/X
  - Facebook
  - LinkedIn
  - Slack
""", file=stream)


def load_thresholds(path: Optional[str] = None) -> ValidationThresholds:
    """Thresholds from a JSON file when given, else from the environment."""
    if path:
        if not Path(path).is_file():
            raise FileNotFoundError(f"No such file: {path}")
        return ValidationThresholds.from_file(path)
    return ValidationThresholds.from_env()


def print_usage_error(error: UsageError, show_usage: bool = False) -> None:
    c = Palette(color_enabled(sys.stderr))
    print(c.red(f"Error: {error}"), file=sys.stderr)
    if show_usage:
        print(c.dim("Usage: og-check <url> [options]"), file=sys.stderr)
        print(c.dim("Run og-check --help for more info."), file=sys.stderr)


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point.

    Returns:
        Process exit code
    """
    if argv is None:
        argv = sys.argv[1:]

    config = Config.from_env()
    known, extra_options = split_unknown_options(argv)

    # Help wins over any other argument, valid or not.
    if any(arg in HELP_OPTIONS for arg in known):
        print_help()
        return 0

    try:
        args = build_parser(config).parse_args(known)
    except UsageError as e:
        print_usage_error(e, show_usage=True)
        return 1

    setup_logging(level=args.log_level, log_file=args.log_file)

    if extra_options:
        logger.debug(f"Ignoring unrecognized options: {extra_options}")

    if not args.urls:
        print_usage_error(UsageError("URL is required."), show_usage=True)
        return 1

    if args.timeout <= 0:
        print_usage_error(UsageError(f"Invalid timeout: {args.timeout}"))
        return 1

    try:
        urls = [normalize_url(url) for url in args.urls]
    except UsageError as e:
        print_usage_error(e)
        return 1

    try:
        thresholds = load_thresholds(args.config)
    except (OSError, TypeError, ValueError) as e:
        print_usage_error(UsageError(f"Invalid config file: {e}"))
        return 1
    logger.debug(f"Validation thresholds: {thresholds.to_dict()}")

    reporter = TerminalReporter()
    documents = []
    ci_failed = False

    for url in urls:
        if not args.json:
            reporter.render_header(url)

        fetcher = Fetcher(timeout_ms=args.timeout, user_agent=config.user_agent)
        try:
            result = asyncio.run(check_url(url, fetcher=fetcher, thresholds=thresholds))
        except FetchError as e:
            logger.error(f"Check failed for {url}: {e}")
            if args.json:
                documents.append(build_error_report(str(e)))
                print(render_json(documents))
            else:
                reporter.render_error(e)
            return 1

        if args.json:
            documents.append(build_json_report(result))
        else:
            reporter.render(result)

        if not result.valid:
            ci_failed = True

    if args.json:
        print(render_json(documents))

    if args.ci and ci_failed:
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
