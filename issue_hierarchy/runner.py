"""
Batch validation across a list of issue numbers.

Issues are processed one at a time, in input order. A failed lookup marks
that issue invalid and the batch moves on.
"""

import logging
from dataclasses import replace
from typing import Iterable, Optional, Protocol

from issue_hierarchy.lib.github import GitHubError
from issue_hierarchy.lib.types import BatchResult, Issue, IssueResult, Verdict
from issue_hierarchy.validator import validate_issue_hierarchy

logger = logging.getLogger(__name__)

CLOSED_WARNING = "Issue is closed"


class IssueClient(Protocol):
    def fetch(self, number: int, resolve_parent: bool = True) -> Issue: ...

    def resolve_parent(self, number: int) -> Optional[int]: ...


def validate_one(number: int, client: IssueClient) -> IssueResult:
    """Fetch, resolve parent and validate a single issue."""
    try:
        issue = client.fetch(number, resolve_parent=False)
    except GitHubError as e:
        logger.warning(f"#{number}: {e}")
        return IssueResult(number=number, verdict=Verdict().fail(str(e)))

    # Closed issues never reach the timeline lookup
    if issue.is_closed:
        logger.info(f"#{number} is closed, skipping hierarchy check")
        return IssueResult(number=number, issue=issue, verdict=Verdict().warn(CLOSED_WARNING))

    try:
        issue = replace(issue, parent=client.resolve_parent(number))
    except GitHubError as e:
        logger.warning(f"#{number}: {e}")
        return IssueResult(number=number, issue=issue, verdict=Verdict().fail(str(e)))

    parent: Optional[Issue] = None
    if issue.parent is not None:
        try:
            parent = client.fetch(issue.parent, resolve_parent=False)
        except GitHubError as e:
            logger.warning(f"#{number}: parent lookup failed: {e}")
            return IssueResult(number=number, issue=issue, verdict=Verdict().fail(str(e)))

    verdict = validate_issue_hierarchy(issue, parent)
    logger.info(f"#{number}: {'valid' if verdict.valid else 'invalid'}")
    return IssueResult(number=number, issue=issue, verdict=verdict)


def run_validation(numbers: Iterable[int], client: IssueClient) -> BatchResult:
    """
    Validate every issue number in order.

    Returns:
        BatchResult with one IssueResult per input number, same order
    """
    batch = BatchResult()
    for number in numbers:
        logger.info(f"Checking issue #{number}...")
        batch.results.append(validate_one(number, client))

    logger.info(f"Validated {len(batch.results)} issues: {batch.invalid_count} invalid")
    return batch
