"""Data type definitions for the reviewer lottery."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

# Mapping of group key ("backend", "*", "!a,b") to the number of reviewers
# wanted from it.
FromClause = Dict[str, int]


class LotteryError(Exception):
    """Base error for the reviewer lottery plumbing."""


class ConfigError(LotteryError):
    """Raised when the configuration file cannot be read."""


class GitHubServiceError(LotteryError):
    """Raised when a GitHub API call fails."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


@dataclass
class Group:
    """
    A named group of usernames eligible to review.

    Attributes:
        name: Group name, referenced by selection rules
        usernames: Ordered list of usernames in the group
    """

    name: str
    usernames: List[str] = field(default_factory=list)


@dataclass
class AuthorGroupRule:
    """Rule applied when the pull request author belongs to `group`."""

    group: str
    from_clause: FromClause = field(default_factory=dict)


@dataclass
class SelectionRules:
    """
    Rule set of a configuration.

    Attributes:
        default: Clause used when nothing more specific matches
        by_author_group: Ordered per-group rules, first match wins
        non_group_members: Clause for authors outside every group
    """

    default: Optional[FromClause] = None
    by_author_group: List[AuthorGroupRule] = field(default_factory=list)
    non_group_members: Optional[FromClause] = None


@dataclass
class Config:
    groups: List[Group] = field(default_factory=list)
    selection_rules: Optional[SelectionRules] = None


class RuleType(str, Enum):
    """Which branch of the rule set fired"""

    BY_AUTHOR_GROUP = "by_author_group"
    NON_GROUP_MEMBERS = "non_group_members"
    DEFAULT = "default"
    NONE = "none"


@dataclass(frozen=True)
class AppliedRule:
    """
    The rule branch selected for an author.

    Attributes:
        type: Branch of the rule set that fired
        rule: The clause to execute (empty for RuleType.NONE)
        index: Position in by_author_group, only for that branch
    """

    type: RuleType
    rule: FromClause = field(default_factory=dict)
    index: Optional[int] = None

    @classmethod
    def no_rule(cls) -> "AppliedRule":
        return cls(type=RuleType.NONE)

    @property
    def is_none(self) -> bool:
        return self.type is RuleType.NONE


@dataclass
class SelectionStep:
    """One processed clause key, recorded for the audit trail."""

    step: int
    description: str
    group_key: str
    candidates: List[str]
    required: int
    selected: List[str]


@dataclass
class ReviewerSelectionResult:
    selected_reviewers: List[str] = field(default_factory=list)
    applied_rule: Optional[AppliedRule] = None
    process: List[SelectionStep] = field(default_factory=list)


@dataclass
class Pull:
    """Pull request identity handed to the lottery."""

    number: int
    author: Optional[str] = None
    head_ref: Optional[str] = None


@dataclass
class LotteryEnv:
    repository: str
    ref: str = ""
