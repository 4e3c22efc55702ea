"""
Authentication
--------------
Every request carries HTTP Basic credentials (login and password).

The client can be built two ways:

1. Explicitly, from a JiraConfig:
        JiraClient(JiraConfig("https://jira.example.com", auth=Auth("me", "secret")))
2. From the environment with get_client():
        JIRA_BASE_URL       https://jira.example.com
        JIRA_LOGIN          me
        JIRA_PASSWORD       <password>
        JIRA_API_PATH       optional, defaults to /rest/api/2
        JIRA_ACTIVITY_PATH  optional, defaults to /activity
   With get_client(interactive=True) the user is prompted for any missing value.

Dependencies:
    uv add requests

"""
#to avoid having to consider forward declarations, the below line must be first line in the file
from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from getpass import getpass
from urllib.parse import quote_plus

import requests
from requests.auth import HTTPBasicAuth

from jira_activity_client.jira_activity import parse_activity_feed
from jira_activity_client.jira_issue import build_issue, build_issue_list, fill_created_at
from tracker_client_interface.activity import ActivityFeed
from tracker_client_interface.client import IssueNotFoundError as BaseIssueNotFoundError
from tracker_client_interface.client import IssueTrackerClient
from tracker_client_interface.issue import Issue, IssueList
from tracker_client_interface.pagination import Pagination

logger = logging.getLogger(__name__)

DEFAULT_API_PATH = "/rest/api/2"
DEFAULT_ACTIVITY_PATH = "/activity"

# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class JiraError(Exception):
    """Raised when the Jira API returns an unexpected response."""


class RequestBuildError(JiraError):
    """Raised when a request cannot be built or sent."""


@dataclass
class ErrorResponse:
    """Error body Jira sends with non-2xx responses, plus the status it came with."""

    messages: list[str] = field(default_factory=list)
    errors: dict[str, str] = field(default_factory=dict)
    status: str = ""
    status_code: int = 0

    @classmethod
    def from_dict(cls, raw: dict) -> ErrorResponse:
        if not isinstance(raw, dict):
            return cls()
        return cls(
            messages=list(raw.get("errorMessages") or []),
            errors=dict(raw.get("errors") or {}),
        )

    def __str__(self) -> str:
        if self.messages:
            return f"{self.status}: {self.messages[0]}"
        return self.status


class JiraResponseError(JiraError):
    """Raised for any response outside the 2xx range."""

    def __init__(self, error_response: ErrorResponse) -> None:
        super().__init__(str(error_response))
        self.error_response = error_response

    @property
    def status_code(self) -> int:
        return self.error_response.status_code


class IssueNotFoundError(JiraResponseError, BaseIssueNotFoundError):
    """Raised when a requested Jira resource does not exist."""


# ---------------------------------------------------------------------------
# Configuration and query parameters
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Auth:
    login: str
    password: str = field(repr=False)


@dataclass(frozen=True)
class JiraConfig:
    """
    Args:
        base_url:      Jira instance root URL (e.g. 'https://jira.example.com')
        api_path:      Prefix of the issue REST API
        activity_path: Path of the activity stream feed
        auth:          Basic-auth credentials
    """

    base_url: str
    auth: Auth
    api_path: str = DEFAULT_API_PATH
    activity_path: str = DEFAULT_ACTIVITY_PATH


class Params(dict[str, str]):
    """Query parameters for a single request."""

    def query(self) -> str:
        """Return ``key=value`` pairs joined by ``&`` with values URL-encoded."""
        return "&".join(f"{key}={quote_plus(value)}" for key, value in self.items())


def _ok_status(code: int) -> bool:
    return 200 <= code < 300


# ---------------------------------------------------------------------------
# Client implementation
# ---------------------------------------------------------------------------

class JiraClient(IssueTrackerClient):
    """
    Args:
        config:  Immutable connection settings
        session: HTTP transport, a new requests.Session when omitted. Credentials
                 travel with each request and the session itself is left untouched.
    """

    def __init__(self, config: JiraConfig, session: requests.Session | None = None) -> None:
        self._config = config
        self._base_url = config.base_url.rstrip("/")
        self._session = session if session is not None else requests.Session()
        self._auth = HTTPBasicAuth(config.auth.login, config.auth.password)

    @property
    def config(self) -> JiraConfig:
        return self._config

    # ------------------------------------------------------------------
    # Internal HTTP helpers
    # ------------------------------------------------------------------

    def _api_url(self, path: str) -> str:
        return f"{self._base_url}{self._config.api_path}{path}"

    def _get(self, url: str) -> bytes:
        """Execute a GET on an absolute URL and return the raw body.

        Raises:
            RequestBuildError: If the request could not be built or sent.
            JiraResponseError: If the status is outside 200-299.
            json.JSONDecodeError: If an error response carries an undecodable body.
        """
        logger.debug("GET %s", url)
        try:
            response = self._session.get(url, auth=self._auth)
        except requests.RequestException as exc:
            raise RequestBuildError("Error while building jira request") from exc

        #the body is read in full and the connection released on every path
        try:
            contents = response.content
            logger.debug("GET %s -> %s", url, response.status_code)
            if not _ok_status(response.status_code):
                self._raise_for_status(response, contents)
            return contents
        finally:
            response.close()

    @staticmethod
    def _raise_for_status(response: requests.Response, contents: bytes) -> None:
        error_response = ErrorResponse.from_dict(json.loads(contents))
        error_response.status = f"{response.status_code} {response.reason}"
        error_response.status_code = response.status_code
        if response.status_code == 404:
            raise IssueNotFoundError(error_response)
        raise JiraResponseError(error_response)

    # ------------------------------------------------------------------
    # IssueTrackerClient contract
    # ------------------------------------------------------------------

    def user_activity(self, user: str) -> ActivityFeed:
        """Fetch the activity stream of a single user."""
        url = f"{self._base_url}{self._config.activity_path}?streams={quote_plus('user IS ' + user)}"
        return self.activity(url)

    def activity(self, url: str) -> ActivityFeed:
        """Fetch and decode any absolute activity stream URL."""
        contents = self._get(url)
        return parse_activity_feed(contents)

    def issues_assigned_to(self, user: str, max_results: int, start_at: int) -> IssueList:
        """Search the issues assigned to a user, one page at a time.

        Notes on usage:
            Each issue gets ``created_at`` parsed from ``fields.created``; values
            that do not parse are logged and left as None.
            Pagination is computed from the counters Jira reports, so a server
            that caps maxResults yields pages of the capped size.
        """
        url = (
            self._api_url("/search")
            + f'?jql=assignee="{quote_plus(user)}"&startAt={start_at}&maxResults={max_results}'
        )
        contents = self._get(url)
        issues = build_issue_list(json.loads(contents))

        for issue in issues.issues:
            fill_created_at(issue)

        pagination = Pagination(
            total=issues.total,
            start_at=issues.start_at,
            max_results=issues.max_results,
        )
        pagination.compute()
        issues.pagination = pagination

        return issues

    def get_issue(self, issue_id: str, params: Mapping[str, str] | None = None) -> Issue:
        """Fetch a single Jira issue by id or key."""
        url = self._api_url(f"/issue/{issue_id}")
        if params is not None:
            url += "?" + Params(params).query()

        contents = self._get(url)
        return build_issue(json.loads(contents))


# ---------------------------------------------------------------------------
# Get client
# ---------------------------------------------------------------------------

#required variable -> prompt used in interactive mode
_REQUIRED_ENV: dict[str, str] = {
    "JIRA_BASE_URL": "Jira base URL (e.g. https://jira.example.com): ",
    "JIRA_LOGIN": "Jira login: ",
    "JIRA_PASSWORD": "Jira password: ",
}


def get_client(*, interactive: bool = False) -> JiraClient:
    """Return a configured JiraClient.

    Reads settings from environment variables. If "interactive = True" and
    any required variable is missing, the user will be prompted.

    Environment variables:
        JIRA_BASE_URL:       Base URL of the Jira instance.
        JIRA_LOGIN:          Login used for basic authentication.
        JIRA_PASSWORD:       Password used for basic authentication.
        JIRA_API_PATH:       Issue REST API prefix (default /rest/api/2).
        JIRA_ACTIVITY_PATH:  Activity stream path (default /activity).
    """
    settings = {name: os.environ.get(name, "") for name in _REQUIRED_ENV}
    missing = [name for name, value in settings.items() if not value]

    if missing and not interactive:
        raise EnvironmentError(
            f"Missing required environment variables: {', '.join(missing)}. "
            "Set them or call get_client(interactive=True)."
        )
    for name in missing:
        prompt = _REQUIRED_ENV[name]
        settings[name] = getpass(prompt) if name == "JIRA_PASSWORD" else input(prompt).strip()

    config = JiraConfig(
        base_url=settings["JIRA_BASE_URL"],
        auth=Auth(settings["JIRA_LOGIN"], settings["JIRA_PASSWORD"]),
        api_path=os.environ.get("JIRA_API_PATH", DEFAULT_API_PATH),
        activity_path=os.environ.get("JIRA_ACTIVITY_PATH", DEFAULT_ACTIVITY_PATH),
    )
    return JiraClient(config)
