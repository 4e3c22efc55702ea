"""Jira implementation of the tracker client: activity stream, assignee search and issue lookup."""

from jira_activity_client.jira_impl import (
    Auth,
    ErrorResponse,
    IssueNotFoundError,
    JiraClient,
    JiraConfig,
    JiraError,
    JiraResponseError,
    Params,
    RequestBuildError,
    get_client,
)

__all__ = [
    "Auth",
    "ErrorResponse",
    "IssueNotFoundError",
    "JiraClient",
    "JiraConfig",
    "JiraError",
    "JiraResponseError",
    "Params",
    "RequestBuildError",
    "get_client",
]
