"""
GitHub issue lookups for hierarchy validation.

Reads issues and their timelines through the gh CLI's REST passthrough
(`gh api`). The token from Config is handed to gh as GH_TOKEN so the
user's stored gh login is never consulted.
"""

import json
import logging
import os
import shutil
import subprocess
from typing import Iterable, Optional

from issue_hierarchy.lib import validate
from issue_hierarchy.lib.config import DEFAULT_HOST, Config
from issue_hierarchy.lib.types import Issue, IssueState

logger = logging.getLogger(__name__)


# Timeline events marking this issue as a sub-issue of another
PARENT_LINK_EVENT = "connected"
PARENT_LINK_SUBJECT = "issue"

ACCEPT_HEADER = "Accept: application/vnd.github+json"


class GitHubError(Exception):
    """A lookup against GitHub failed."""


class IssueNotFoundError(GitHubError):
    """GitHub answered 404 for the issue."""


class TransportError(GitHubError):
    """gh failed, timed out, or returned something unusable."""


def check_gh_available() -> tuple[bool, str]:
    """Check gh CLI is installed.

    Authentication is not checked: the configured token is passed per call.

    Returns: (ok, error_message)
    """
    if shutil.which("gh") is None:
        return False, "GitHub CLI (gh) not found\n  Install: https://cli.github.com/"
    return True, ""


def find_parent_number(events: Iterable[dict]) -> Optional[int]:
    """Return the parent issue number from a timeline, or None.

    The first "connected" event whose subject is an issue wins; any later
    link is ignored.
    """
    for event in events:
        if event.get("event") != PARENT_LINK_EVENT:
            continue
        source_issue = (event.get("source") or {}).get("issue") or {}
        if not source_issue.get("number"):
            continue
        if (event.get("subject") or {}).get("type") == PARENT_LINK_SUBJECT:
            return source_issue["number"]
    return None


class GitHubIssueClient:
    """Fetches issue snapshots for one repository."""

    def __init__(self, config: Config):
        self.config = config

    def fetch(self, number: int, resolve_parent: bool = True) -> Issue:
        """
        Fetch an issue and, optionally, resolve its parent from the timeline.

        Raises:
            IssueNotFoundError: if the issue does not exist
            TransportError: on any other lookup failure
        """
        try:
            data = self._get_json(self._issue_path(number))
            try:
                validate.validate(data, "issue")
            except validate.SchemaValidationError as e:
                raise TransportError(f"Unexpected issue payload: {e}") from None
        except GitHubError as e:
            raise type(e)(f"Failed to fetch issue #{number}: {e}") from None

        parent = self.resolve_parent(number) if resolve_parent else None

        issue = Issue(
            number=data["number"],
            title=data["title"],
            labels=tuple(label["name"] for label in data["labels"]),
            state=IssueState(data["state"]),
            parent=parent,
        )
        logger.debug(
            f"Fetched #{issue.number} state={issue.state.value} "
            f"labels={list(issue.labels)} parent={issue.parent}"
        )
        return issue

    def resolve_parent(self, number: int) -> Optional[int]:
        """
        Parent issue number from the timeline, or None if the issue has no link.

        Raises:
            IssueNotFoundError: if the issue does not exist
            TransportError: on any other lookup failure
        """
        try:
            return find_parent_number(self._timeline(number))
        except GitHubError as e:
            raise type(e)(f"Failed to fetch issue #{number}: {e}") from None

    def _issue_path(self, number: int) -> str:
        return f"repos/{self.config.owner}/{self.config.repo}/issues/{number}"

    def _timeline(self, number: int) -> list[dict]:
        """Fetch every timeline page, one event per output line."""
        stdout = self._gh_api(
            f"{self._issue_path(number)}/timeline", "--paginate", "--jq", ".[]"
        )
        events = []
        for lineno, line in enumerate(stdout.splitlines(), 1):
            if not line.strip():
                continue
            try:
                event = json.loads(line)
            except json.JSONDecodeError:
                raise TransportError(f"Invalid JSON in timeline line {lineno}") from None
            try:
                validate.validate(event, "timeline_event")
            except validate.SchemaValidationError as e:
                logger.warning(f"Skipping timeline event {lineno} of #{number}: {e}")
                continue
            events.append(event)
        logger.debug(f"Timeline of #{number}: {len(events)} events")
        return events

    def _get_json(self, path: str) -> dict:
        stdout = self._gh_api(path)
        try:
            return json.loads(stdout or "{}")
        except json.JSONDecodeError:
            raise TransportError("Invalid JSON from gh") from None

    def _gh_api(self, path: str, *extra: str) -> str:
        """Run `gh api` against path and return stdout."""
        cmd = ["gh", "api", "-H", ACCEPT_HEADER]
        if self.config.host != DEFAULT_HOST:
            cmd += ["--hostname", self.config.host]
        cmd += [path, *extra]

        env = dict(os.environ)
        env["GH_TOKEN"] = self.config.token
        if self.config.host != DEFAULT_HOST:
            env["GH_ENTERPRISE_TOKEN"] = self.config.token

        logger.debug(f"gh api {path}")
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                env=env,
                timeout=self.config.timeout,
            )
        except subprocess.TimeoutExpired:
            raise TransportError(f"GitHub API timeout after {self.config.timeout:g}s") from None
        except OSError as e:
            raise TransportError(f"Failed to run gh: {e}") from None

        if result.returncode != 0:
            message = result.stderr.strip() or f"gh exited with {result.returncode}"
            if "HTTP 404" in message:
                raise IssueNotFoundError(f"GitHub API error: {message}")
            raise TransportError(f"GitHub API error: {message}")

        return result.stdout
