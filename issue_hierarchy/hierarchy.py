"""
Issue hierarchy rules.

Theme (standalone) -> User Story -> Task -> Sub-Task. Each level names the
label its parent issue must carry. Labels outside the four levels are not
hierarchy labels; the standalone set exempts an issue from needing one.
"""

from enum import Enum
from typing import Iterable, Optional


class Level(Enum):
    """Hierarchy levels, valued by their GitHub label."""

    THEME = "theme"
    USER_STORY = "user-story"
    TASK = "task"
    SUB_TASK = "sub-task"

    @classmethod
    def from_label(cls, label: str) -> Optional["Level"]:
        """Return the level for a label name, or None if it isn't one."""
        try:
            return cls(label)
        except ValueError:
            return None


REQUIRED_PARENT: dict[Level, Optional[Level]] = {
    Level.THEME: None,
    Level.USER_STORY: Level.THEME,
    Level.TASK: Level.USER_STORY,
    Level.SUB_TASK: Level.TASK,
}

assert set(REQUIRED_PARENT) == set(Level), "every level needs a parent rule"

# Labels that don't require parent validation
STANDALONE_LABELS = frozenset({"bug", "defect", "security-issue", "feature-request", "theme"})

HIERARCHY_LABEL_NAMES = ", ".join(level.value for level in Level)

HIERARCHY_DIAGRAM = """\
Theme (standalone)
└── User Story (sub-issue of Theme)
    └── Task (sub-issue of User Story)
        └── Sub-Task (sub-issue of Task)"""

REMEDIATION_STEPS = (
    "Navigate to the parent issue",
    'Click "Create sub-issue" at the bottom',
    'Or click dropdown → "Add existing issue"',
)


def required_parent(level: Level) -> Optional[Level]:
    """Label level the parent must carry, or None for the root level."""
    return REQUIRED_PARENT[level]


def find_hierarchy_level(labels: Iterable[str]) -> Optional[Level]:
    """First label that names a hierarchy level, in label order."""
    for label in labels:
        level = Level.from_label(label)
        if level is not None:
            return level
    return None


def has_standalone_label(labels: Iterable[str]) -> bool:
    return any(label in STANDALONE_LABELS for label in labels)
