"""Tests for the issue-hierarchy CLI entrypoint."""

import json
from unittest.mock import patch

import pytest

from issue_hierarchy.cli import main, parse_issue_numbers
from issue_hierarchy.lib.types import Issue, IssueState

ENV = {"GITHUB_TOKEN": "t0k", "GITHUB_REPOSITORY": "acme/widgets"}


class FakeClient:
    def __init__(self, issues):
        self.issues = {i.number: i for i in issues}
        self.calls = []

    def fetch(self, number, resolve_parent=True):
        self.calls.append(number)
        return self.issues[number]

    def resolve_parent(self, number):
        return self.issues[number].parent


@pytest.fixture
def gh_available():
    with patch("issue_hierarchy.cli.check_gh_available", return_value=(True, "")) as mock:
        yield mock


def run_cli(argv, issues, environ=ENV):
    client = FakeClient(issues)
    with patch("issue_hierarchy.commands.validate.GitHubIssueClient", return_value=client):
        code = main(argv, environ=environ)
    return code, client


class TestParseIssueNumbers:
    """Test argument filtering."""

    def test_keeps_integers_in_order(self):
        assert parse_issue_numbers(["3", "1", "2"]) == [3, 1, 2]

    def test_drops_non_numeric(self):
        assert parse_issue_numbers(["12", "abc", "4.5", "7"]) == [12, 7]

    def test_drops_non_positive(self):
        assert parse_issue_numbers(["0", "-4", "5"]) == [5]

    def test_accepts_hash_prefix(self):
        assert parse_issue_numbers(["#42"]) == [42]

    @pytest.mark.parametrize("value", ["1_000", " 7 ", "7\n", "٣", "+5", "##5", "5#"])
    def test_strict_ascii_digits(self, value):
        assert parse_issue_numbers([value]) == []


class TestUsageErrors:
    """Errors that stop before any lookup."""

    def test_no_arguments(self, capsys):
        assert main([], environ=ENV) == 1
        assert "Usage:" in capsys.readouterr().err

    def test_no_valid_numbers(self, capsys):
        assert main(["abc", "def"], environ=ENV) == 1
        assert "No valid issue numbers provided" in capsys.readouterr().err

    def test_missing_token(self, capsys, gh_available):
        with patch("issue_hierarchy.commands.validate.GitHubIssueClient") as mock_client:
            assert main(["1"], environ={}) == 1
        mock_client.assert_not_called()
        assert "GITHUB_TOKEN environment variable is required" in capsys.readouterr().err

    def test_gh_not_installed(self, capsys):
        with patch("issue_hierarchy.cli.check_gh_available", return_value=(False, "GitHub CLI (gh) not found")):
            assert main(["1"], environ=ENV) == 1
        assert "gh) not found" in capsys.readouterr().err

    def test_bad_repository(self, capsys, gh_available):
        assert main(["1", "--repo", "nope"], environ=ENV) == 1
        assert "OWNER/REPO" in capsys.readouterr().err


class TestUnknownOptions:
    """Option-like arguments argparse doesn't know are dropped, not fatal."""

    def test_unknown_option_is_ignored(self, capsys, gh_available, caplog):
        issues = [Issue(12, "Payments", ("theme",), IssueState.OPEN)]
        code, client = run_cli(["12", "-x"], issues)

        assert code == 0
        assert client.calls == [12]
        assert "Ignoring non-numeric argument '-x'" in caplog.text

    def test_only_unknown_options(self, capsys):
        assert main(["--frobnicate"], environ=ENV) == 1
        assert "No valid issue numbers provided" in capsys.readouterr().err


class TestEndToEnd:
    """Full runs against a fake client."""

    def test_missing_parent_and_closed_issue(self, capsys, gh_available):
        issues = [
            Issue(10, "Write parser", ("sub-task",), IssueState.OPEN),
            Issue(20, "Old work", ("task",), IssueState.CLOSED, parent=99),
        ]
        code, client = run_cli(["10", "20"], issues)

        assert code == 1
        assert client.calls == [10, 20]
        out = capsys.readouterr().out
        assert "must be a sub-issue of a task issue" in out
        assert "Issue is closed" in out
        assert "â Valid issues: 1" in out
        assert "â Invalid issues: 1" in out
        assert "Required hierarchy:" in out

    def test_story_under_theme(self, capsys, gh_available):
        issues = [
            Issue(30, "Checkout", ("user-story",), IssueState.OPEN, parent=31),
            Issue(31, "Payments", ("theme",), IssueState.OPEN),
        ]
        code, _ = run_cli(["30"], issues)

        assert code == 0
        out = capsys.readouterr().out
        assert "Repository: acme/widgets" in out
        assert "All issues follow proper hierarchy!" in out
        assert "â ï¸" not in out

    def test_json_output(self, capsys, gh_available):
        issues = [Issue(10, "Write parser", ("sub-task",), IssueState.OPEN)]
        code, _ = run_cli(["10", "--json"], issues)

        assert code == 1
        data = json.loads(capsys.readouterr().out)
        assert data["repository"] == "acme/widgets"
        assert data["all_valid"] is False
        assert data["results"][0]["number"] == 10

    def test_unexpected_error_exits_1(self, capsys, gh_available):
        with patch("issue_hierarchy.commands.validate.run_validation", side_effect=RuntimeError("kaboom")):
            code, _ = run_cli(["1"], [])
        assert code == 1
        assert "Unexpected error: kaboom" in capsys.readouterr().err
