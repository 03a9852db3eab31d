"""
issue-hierarchy - Validate the parent chain of the given issues.
"""

from rich.console import Console

from issue_hierarchy.lib.config import Config
from issue_hierarchy.lib.github import GitHubIssueClient
from issue_hierarchy.report import print_report, render_json
from issue_hierarchy.runner import IssueClient, run_validation


def cmd_validate(args, config: Config, client: IssueClient = None, console: Console = None) -> int:
    """Validate args.numbers and print the report. Returns the exit code."""
    if client is None:
        client = GitHubIssueClient(config)
    if console is None:
        console = Console(highlight=False)

    if args.json:
        batch = run_validation(args.numbers, client)
        print(render_json(batch, config.repository))
        return 0 if batch.all_valid else 1

    with console.status(f"Validating {len(args.numbers)} issues in {config.repository}..."):
        batch = run_validation(args.numbers, client)
    print_report(console, batch, config.repository)

    return 0 if batch.all_valid else 1
