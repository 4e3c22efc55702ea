"""Tracker-neutral data model and client contract."""

from tracker_client_interface.activity import ActivityFeed, ActivityItem, Category, Link, Person, Text
from tracker_client_interface.client import IssueNotFoundError, IssueTrackerClient
from tracker_client_interface.issue import (
    Comment,
    Component,
    Issue,
    IssueComment,
    IssueFields,
    IssueLink,
    IssueList,
    IssueStatus,
    IssueType,
    Project,
    User,
)
from tracker_client_interface.pagination import Pagination

__all__ = [
    "ActivityFeed",
    "ActivityItem",
    "Category",
    "Comment",
    "Component",
    "Issue",
    "IssueComment",
    "IssueFields",
    "IssueLink",
    "IssueList",
    "IssueNotFoundError",
    "IssueStatus",
    "IssueTrackerClient",
    "IssueType",
    "Link",
    "Pagination",
    "Person",
    "Project",
    "Text",
    "User",
]
