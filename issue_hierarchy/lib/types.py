"""
Shared data types for the hierarchy validator.

Kept in one module so the client, validator, runner and report can share
them without circular imports.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class IssueState(Enum):
    OPEN = "open"
    CLOSED = "closed"


@dataclass(frozen=True)
class Issue:
    """Read-only snapshot of a GitHub issue."""
    number: int
    title: str
    labels: tuple[str, ...]
    state: IssueState
    parent: Optional[int] = None  # Issue number from the first "connected" timeline event

    @property
    def is_closed(self) -> bool:
        return self.state is IssueState.CLOSED


@dataclass
class Verdict:
    """Outcome of validating a single issue.

    Any error makes the verdict invalid. Warnings never do.
    """
    valid: bool = True
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def fail(self, message: str) -> "Verdict":
        self.errors.append(message)
        self.valid = False
        return self

    def warn(self, message: str) -> "Verdict":
        self.warnings.append(message)
        return self


@dataclass
class IssueResult:
    """Verdict for one requested issue number, with the snapshot if it was fetched."""
    number: int
    verdict: Verdict
    issue: Optional[Issue] = None

    @property
    def valid(self) -> bool:
        return self.verdict.valid

    @property
    def errors(self) -> list[str]:
        return self.verdict.errors

    @property
    def warnings(self) -> list[str]:
        return self.verdict.warnings

    def to_dict(self) -> dict:
        data = {
            "number": self.number,
            "valid": self.valid,
            "errors": list(self.errors),
            "warnings": list(self.warnings),
        }
        if self.issue is not None:
            data["title"] = self.issue.title
            data["labels"] = list(self.issue.labels)
            data["state"] = self.issue.state.value
            data["parent"] = self.issue.parent
        return data


@dataclass
class BatchResult:
    """Aggregate of every issue validated in one run, in input order."""
    results: list[IssueResult] = field(default_factory=list)

    @property
    def all_valid(self) -> bool:
        return all(r.valid for r in self.results)

    @property
    def valid_count(self) -> int:
        return sum(1 for r in self.results if r.valid)

    @property
    def invalid_count(self) -> int:
        return sum(1 for r in self.results if not r.valid)

    def to_dict(self) -> dict:
        return {
            "all_valid": self.all_valid,
            "valid_count": self.valid_count,
            "invalid_count": self.invalid_count,
            "results": [r.to_dict() for r in self.results],
        }
