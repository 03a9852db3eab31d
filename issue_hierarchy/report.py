"""Console and JSON rendering of a validation run."""

import json

from rich.console import Console
from rich.markup import escape
from rich.rule import Rule

from issue_hierarchy.hierarchy import HIERARCHY_DIAGRAM, REMEDIATION_STEPS
from issue_hierarchy.lib.types import BatchResult, IssueResult


def print_header(console: Console, repository: str, numbers: list[int]) -> None:
    console.print("🔍 Validating issue hierarchy...")
    console.print()
    console.print(f"Repository: {escape(repository)}")
    console.print(f"Issues to validate: {', '.join(str(n) for n in numbers)}")
    console.print()


def print_result(console: Console, result: IssueResult) -> None:
    """Print one issue's outcome with its errors and warnings."""
    title = f" {escape(result.issue.title)}" if result.issue is not None else ""
    if result.valid:
        console.print(f"[green]✅ #{result.number}[/green]{title}: Valid")
    else:
        console.print(f"[red]❌ #{result.number}[/red]{title}: FAILED")
        for error in result.errors:
            for line in error.splitlines():
                console.print(f"     {escape(line)}")

    for warning in result.warnings:
        console.print(f"  [yellow]⚠️  {escape(warning)}[/yellow]")
    console.print()


def print_summary(console: Console, batch: BatchResult) -> None:
    """Print counts and, on failure, the hierarchy diagram and fix steps."""
    console.print(Rule("Summary", style="dim"))
    console.print(f"✅ Valid issues: {batch.valid_count}")
    console.print(f"❌ Invalid issues: {batch.invalid_count}")
    console.print()

    if batch.all_valid:
        console.print("[bold green]✅ All issues follow proper hierarchy![/bold green]")
        return

    console.print("[bold red]❌ Validation failed! Issues do not follow proper hierarchy.[/bold red]")
    console.print()
    console.print("Required hierarchy:")
    for line in HIERARCHY_DIAGRAM.splitlines():
        console.print(f"  {line}", highlight=False)
    console.print()
    console.print("How to fix:")
    for i, step in enumerate(REMEDIATION_STEPS, 1):
        console.print(f"  {i}. {escape(step)}", highlight=False)


def print_report(console: Console, batch: BatchResult, repository: str) -> None:
    print_header(console, repository, [r.number for r in batch.results])
    for result in batch.results:
        print_result(console, result)
    print_summary(console, batch)


def render_json(batch: BatchResult, repository: str) -> str:
    data = {"repository": repository, **batch.to_dict()}
    return json.dumps(data, indent=2, ensure_ascii=False)
