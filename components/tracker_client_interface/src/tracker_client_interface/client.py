"""Core client contract definitions."""

from abc import ABC, abstractmethod
from collections.abc import Mapping

from tracker_client_interface.activity import ActivityFeed
from tracker_client_interface.issue import Issue, IssueList

__all__ = ["IssueTrackerClient", "IssueNotFoundError"]


class IssueTrackerClient(ABC):
    """Read-only access to a tracker's activity stream and issues."""

    @abstractmethod
    def user_activity(self, user: str) -> ActivityFeed:
        """Return the activity stream of a single user.

        Args:
            user: The tracker username whose activity is requested

        Returns:
            The decoded ActivityFeed
        """
        raise NotImplementedError

    @abstractmethod
    def issues_assigned_to(self, user: str, max_results: int, start_at: int) -> IssueList:
        """Return one page of issues assigned to a user.

        Args:
            user:        Username of the assignee
            max_results: Page size requested from the tracker, must be positive
            start_at:    Zero-based offset of the first issue of the page

        Notes on usage:
            The returned IssueList carries a computed Pagination built from the
            counters the tracker reports, which may differ from the requested ones.
        """
        raise NotImplementedError

    @abstractmethod
    def get_issue(self, issue_id: str, params: Mapping[str, str] | None = None) -> Issue:
        """Get an issue.

        Args:
            issue_id: The id or key of the issue
            params:   Optional extra query parameters (e.g. {"expand": "changelog"})

        Raises:
            IssueNotFoundError: If no issue with that ID exists
        """
        raise NotImplementedError


class IssueNotFoundError(Exception):
    """Base exception raised when an issue cannot be found by the client."""
