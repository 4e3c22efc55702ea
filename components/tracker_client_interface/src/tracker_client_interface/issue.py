"""Issue contract - Core issue representation."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from tracker_client_interface.pagination import Pagination


@dataclass
class User:
    self_link: str = ""
    name: str = ""
    key: str = ""
    email_address: str = ""
    display_name: str = ""
    active: bool = False
    time_zone: str = ""
    avatar_urls: dict[str, str] = field(default_factory=dict)


@dataclass
class IssueType:
    self_link: str = ""
    id: str = ""
    description: str = ""
    icon_url: str = ""
    name: str = ""
    subtask: bool = False


@dataclass
class IssueStatus:
    description: str = ""
    name: str = ""


@dataclass
class Comment:
    author: User | None = None
    body: str = ""
    created: str = ""


@dataclass
class IssueComment:
    comments: list[Comment] = field(default_factory=list)


@dataclass
class Component:
    name: str = ""


@dataclass
class Project:
    self_link: str = ""
    id: str = ""
    key: str = ""
    name: str = ""
    avatar_urls: dict[str, str] = field(default_factory=dict)


@dataclass
class IssueLink:
    """A link between two issues. Only one side is populated by the tracker."""

    self_link: str = ""
    type: IssueType | None = None
    inward_issue: Issue | None = None
    outward_issue: Issue | None = None


@dataclass
class IssueFields:
    """The ``fields`` block of an issue.

    ``created`` keeps the raw text the tracker sent; the parsed value lives on
    ``Issue.created_at``.
    """

    issue_type: IssueType | None = None
    summary: str = ""
    description: str = ""
    status: IssueStatus | None = None
    comment: IssueComment | None = None
    reporter: User | None = None
    assignee: User | None = None
    sponsor: User | None = None
    code_reviewer: User | None = None
    primary_developer: User | None = None
    qa_reviewer: User | None = None
    release_manager: User | None = None
    components: list[Component] = field(default_factory=list)
    issue_links: list[IssueLink] = field(default_factory=list)
    project: Project | None = None
    created: str = ""


@dataclass
class Issue:
    """A single tracker issue."""

    id: str = ""
    key: str = ""
    self_link: str = ""
    expand: str = ""
    fields: IssueFields | None = None
    #None until filled from fields.created
    created_at: datetime | None = None

    def __repr__(self) -> str:
        summary = self.fields.summary if self.fields else ""
        return f"<Issue key={self.key!r} summary={summary!r}>"


@dataclass
class IssueList:
    """One page of search results plus the raw paging counters."""

    expand: str = ""
    start_at: int = 0
    max_results: int = 0
    total: int = 0
    issues: list[Issue] = field(default_factory=list)
    pagination: Pagination | None = None
