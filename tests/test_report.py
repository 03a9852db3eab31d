"""Tests for issue_hierarchy.report module."""

import io
import json

import pytest
from rich.console import Console

from issue_hierarchy.lib.types import BatchResult, Issue, IssueResult, IssueState, Verdict
from issue_hierarchy.report import print_report, print_result, print_summary, render_json


@pytest.fixture
def console():
    return Console(file=io.StringIO(), width=120, force_terminal=False, highlight=False)


def output(console):
    return console.file.getvalue()


def passing(number, warnings=()):
    issue = Issue(number, f"Story {number}", ("user-story",), IssueState.OPEN, parent=1)
    return IssueResult(number=number, issue=issue, verdict=Verdict(warnings=list(warnings)))


def failing(number, message):
    return IssueResult(number=number, verdict=Verdict().fail(message))


class TestPrintResult:
    """Test per-issue rendering."""

    def test_valid_issue(self, console):
        print_result(console, passing(30))
        text = output(console)
        assert "✅ #30 Story 30: Valid" in text

    def test_failed_issue_lists_each_error_line(self, console):
        print_result(console, failing(10, "first line\n  → second line"))
        text = output(console)
        assert "❌ #10: FAILED" in text
        assert "     first line" in text
        assert "       → second line" in text

    def test_warnings(self, console):
        print_result(console, passing(20, ["Issue is closed"]))
        assert "⚠️  Issue is closed" in output(console)

    def test_markup_in_titles_is_escaped(self, console):
        issue = Issue(5, "[bold]not markup[/bold]", (), IssueState.OPEN)
        print_result(console, IssueResult(5, Verdict(), issue))
        assert "[bold]not markup[/bold]" in output(console)


class TestPrintSummary:
    """Test summary rendering."""

    def test_all_valid(self, console):
        print_summary(console, BatchResult([passing(1), passing(2)]))
        text = output(console)
        assert "✅ Valid issues: 2" in text
        assert "❌ Invalid issues: 0" in text
        assert "All issues follow proper hierarchy!" in text
        assert "Required hierarchy" not in text

    def test_failure_shows_diagram_and_steps(self, console):
        print_summary(console, BatchResult([passing(1), failing(2, "bad")]))
        text = output(console)
        assert "✅ Valid issues: 1" in text
        assert "❌ Invalid issues: 1" in text
        assert "Validation failed!" in text
        assert "└── User Story (sub-issue of Theme)" in text
        assert '2. Click "Create sub-issue" at the bottom' in text


class TestPrintReport:
    """Test full report rendering."""

    def test_header_and_order(self, console):
        print_report(console, BatchResult([failing(9, "x"), passing(3)]), "acme/widgets")
        text = output(console)
        assert "Repository: acme/widgets" in text
        assert "Issues to validate: 9, 3" in text
        assert text.index("❌ #9") < text.index("✅ #3")


class TestRenderJson:
    """Test JSON rendering."""

    def test_structure(self):
        data = json.loads(render_json(BatchResult([passing(1), failing(2, "bad")]), "acme/widgets"))
        assert data["repository"] == "acme/widgets"
        assert data["all_valid"] is False
        assert data["valid_count"] == 1
        assert data["invalid_count"] == 1
        assert [r["number"] for r in data["results"]] == [1, 2]
        assert data["results"][1]["errors"] == ["bad"]
