#!/usr/bin/env python3
"""issue-hierarchy CLI entrypoint."""

import argparse
import logging
import os
import re
import sys
from pathlib import Path

from issue_hierarchy.commands import validate as cmd_validate_module
from issue_hierarchy.lib.config import ConfigError, load_config
from issue_hierarchy.lib.github import check_gh_available

logger = logging.getLogger(__name__)

USAGE_EXAMPLE = "Example: issue-hierarchy 123 456 789"

# ASCII digits only, optional leading #
ISSUE_ARG_PATTERN = re.compile(r"^#?([0-9]+)\Z")


def parse_issue_numbers(values: list[str]) -> list[int]:
    """Keep positive integer arguments, in order; drop everything else."""
    numbers = []
    for value in values:
        match = ISSUE_ARG_PATTERN.match(value)
        if match is None:
            logger.warning(f"Ignoring non-numeric argument '{value}'")
            continue
        number = int(match.group(1))
        if number <= 0:
            logger.warning(f"Ignoring non-positive issue number {number}")
            continue
        numbers.append(number)
    return numbers


def setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='issue-hierarchy',
        description='Validate Theme → User Story → Task → Sub-Task issue hierarchy',
        epilog=USAGE_EXAMPLE,
    )
    parser.add_argument('issues', nargs='*', metavar='ISSUE', help='Issue numbers to validate')
    parser.add_argument('--repo', '-R', help='Repository as OWNER/REPO (default: $GITHUB_REPOSITORY)')
    parser.add_argument('--env-file', type=Path, help='Load GITHUB_TOKEN etc. from a KEY=value file')
    parser.add_argument('--timeout', help='Per-request timeout in seconds (default: 30)')
    parser.add_argument('--json', action='store_true', help='Print a JSON report instead of text')
    parser.add_argument('--verbose', '-v', action='store_true', help='Debug logging on stderr')
    return parser


def main(argv: list[str] | None = None, environ=None) -> int:
    parser = build_parser()
    # Unknown option-like tokens are treated as ids and filtered out below
    args, extra = parser.parse_known_args(argv)
    setup_logging(args.verbose)
    args.issues = list(args.issues or []) + extra

    if not args.issues:
        print(f"Usage: {parser.prog} <issue-numbers>", file=sys.stderr)
        print(USAGE_EXAMPLE, file=sys.stderr)
        return 1

    args.numbers = parse_issue_numbers(args.issues)
    if not args.numbers:
        print("Error: No valid issue numbers provided", file=sys.stderr)
        return 1

    try:
        config = load_config(
            os.environ if environ is None else environ,
            env_file=args.env_file,
            repository=args.repo,
            timeout=args.timeout,
        )
    except ConfigError as e:
        print(f"❌ Error: {e}", file=sys.stderr)
        return 1
    logger.debug(f"Using {config!r}")

    ok, message = check_gh_available()
    if not ok:
        print(f"❌ Error: {message}", file=sys.stderr)
        return 1

    try:
        return cmd_validate_module.cmd_validate(args, config)
    except Exception as e:
        logger.debug("Unexpected error", exc_info=True)
        print(f"\n❌ Unexpected error: {e}", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
