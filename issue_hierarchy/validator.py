"""
Per-issue hierarchy check.

Pure function of an issue snapshot and, when it has one, its parent's
snapshot. All network access happens in the runner.
"""

from typing import Optional

from issue_hierarchy.hierarchy import (
    HIERARCHY_LABEL_NAMES,
    find_hierarchy_level,
    has_standalone_label,
    required_parent,
)
from issue_hierarchy.lib.types import Issue, Verdict


def validate_issue_hierarchy(issue: Issue, parent: Optional[Issue] = None) -> Verdict:
    """
    Check that an issue sits under a correctly labelled parent.

    Args:
        issue: The issue being validated
        parent: Snapshot of issue.parent, or None if it wasn't fetched

    Returns:
        Verdict. Missing or mislabelled parents are errors; a missing
        hierarchy label or a theme with a parent are warnings only.
    """
    verdict = Verdict()

    level = find_hierarchy_level(issue.labels)
    if level is None:
        # Bugs, defects etc. live outside the hierarchy
        if not has_standalone_label(issue.labels):
            verdict.warn(
                f"Issue #{issue.number} has no hierarchy label ({HIERARCHY_LABEL_NAMES})"
            )
        return verdict

    required = required_parent(level)

    if required is None:
        if issue.parent is not None:
            verdict.warn(
                f"Issue #{issue.number} ({level.value}) should be standalone "
                f"but has parent #{issue.parent}"
            )
        return verdict

    if issue.parent is None:
        return verdict.fail(
            f"Issue #{issue.number} ({level.value}) must be a sub-issue of a "
            f"{required.value} issue.\n"
            f'  → Create this issue using "Create sub-issue" from the parent {required.value}.'
        )

    # Without a parent snapshot the label can't be checked
    if parent is not None and required.value not in parent.labels:
        return verdict.fail(
            f"Issue #{issue.number} ({level.value}) has parent #{parent.number}, "
            f'but parent must have label "{required.value}". '
            f"Parent has labels: {', '.join(parent.labels)}"
        )

    return verdict
