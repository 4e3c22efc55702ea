"""Build issue dataclasses from Jira REST API JSON."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

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

logger = logging.getLogger(__name__)

#layout of fields.created, e.g. 2023-05-01T10:00:00.000-0700
CREATED_LAYOUT = "%Y-%m-%dT%H:%M:%S.%f%z"

# ---------------------------------------------------------------------------
# Mapping tables: Jira JSON names  →  dataclass attributes
# ---------------------------------------------------------------------------

#role users configured as custom fields on the tracker
_CUSTOM_USER_FIELDS: dict[str, str] = {
    "customfield_10300": "sponsor",
    "customfield_10202": "code_reviewer",
    "customfield_10203": "primary_developer",
    "customfield_12200": "qa_reviewer",
    "customfield_12300": "release_manager",
}


def parse_created(value: str | None) -> datetime | None:
    """Parse a Jira creation timestamp, returning None when it cannot be parsed."""
    if not value:
        return None
    try:
        return datetime.strptime(value, CREATED_LAYOUT)
    except ValueError:
        logger.warning("Ignoring unparseable issue creation timestamp %r", value)
        return None


def _dict(raw: Any) -> dict:
    return raw if isinstance(raw, dict) else {}


def _object(raw: Any, what: str) -> dict:
    """Return raw when it is a JSON object, for payloads that must be one."""
    if not isinstance(raw, dict):
        raise ValueError(f"expected a JSON object for {what}, got {type(raw).__name__}")
    return raw


def _text(raw: Any) -> str:
    """Jira Cloud sends rich text as ADF, Jira Server as a plain string."""
    if raw is None:
        return ""
    if isinstance(raw, str):
        return raw
    return _extract_adf_text(raw)


def build_user(raw: Any) -> User | None:
    if not isinstance(raw, dict):
        return None
    return User(
        self_link=raw.get("self") or "",
        name=raw.get("name") or "",
        key=raw.get("key") or "",
        email_address=raw.get("emailAddress") or "",
        display_name=raw.get("displayName") or "",
        active=bool(raw.get("active")),
        time_zone=raw.get("timeZone") or "",
        avatar_urls=dict(_dict(raw.get("avatarUrls"))),
    )


def _build_issue_type(raw: Any) -> IssueType | None:
    if not isinstance(raw, dict):
        return None
    return IssueType(
        self_link=raw.get("self") or "",
        id=raw.get("id") or "",
        description=raw.get("description") or "",
        icon_url=raw.get("iconUrl") or "",
        name=raw.get("name") or "",
        subtask=bool(raw.get("subtask")),
    )


def _build_status(raw: Any) -> IssueStatus | None:
    if not isinstance(raw, dict):
        return None
    return IssueStatus(description=raw.get("description") or "", name=raw.get("name") or "")


def _build_comment(raw: Any) -> IssueComment | None:
    if not isinstance(raw, dict):
        return None
    comments = [
        Comment(
            author=build_user(c.get("author")),
            body=_text(c.get("body")),
            created=c.get("created") or "",
        )
        for c in raw.get("comments") or []
        if isinstance(c, dict)
    ]
    return IssueComment(comments=comments)


def _build_project(raw: Any) -> Project | None:
    if not isinstance(raw, dict):
        return None
    return Project(
        self_link=raw.get("self") or "",
        id=raw.get("id") or "",
        key=raw.get("key") or "",
        name=raw.get("name") or "",
        avatar_urls=dict(_dict(raw.get("avatarUrls"))),
    )


def _build_issue_link(raw: dict) -> IssueLink:
    #linked issues are partial issue payloads and decode the same way
    inward = raw.get("inwardIssue")
    outward = raw.get("outwardIssue")
    return IssueLink(
        self_link=raw.get("self") or "",
        type=_build_issue_type(raw.get("type")),
        inward_issue=build_issue(inward) if isinstance(inward, dict) else None,
        outward_issue=build_issue(outward) if isinstance(outward, dict) else None,
    )


def build_fields(raw: Any) -> IssueFields | None:
    """Return IssueFields from the ``fields`` block of an issue payload."""
    if not isinstance(raw, dict):
        return None
    fields = IssueFields(
        issue_type=_build_issue_type(raw.get("issuetype")),
        summary=raw.get("summary") or "",
        description=_text(raw.get("description")),
        status=_build_status(raw.get("status")),
        comment=_build_comment(raw.get("comment")),
        reporter=build_user(raw.get("reporter")),
        assignee=build_user(raw.get("assignee")),
        components=[
            Component(name=c.get("name") or "")
            for c in raw.get("components") or []
            if isinstance(c, dict)
        ],
        issue_links=[
            _build_issue_link(link)
            for link in raw.get("issuelinks") or []
            if isinstance(link, dict)
        ],
        project=_build_project(raw.get("project")),
        created=raw.get("created") or "",
    )
    for field_id, attribute in _CUSTOM_USER_FIELDS.items():
        setattr(fields, attribute, build_user(raw.get(field_id)))
    return fields


def build_issue(raw: dict) -> Issue:
    """Return an Issue from a Jira REST API issue payload.

    Args:
        raw: The decoded issue object, i.e. ``{id, key, self, expand, fields}``.

    Returns:
        An Issue whose ``created_at`` is left unset; see ``fill_created_at``.
    """
    raw = _object(raw, "issue")
    return Issue(
        id=str(raw.get("id") or ""),
        key=raw.get("key") or "",
        self_link=raw.get("self") or "",
        expand=raw.get("expand") or "",
        fields=build_fields(raw.get("fields")),
    )


def fill_created_at(issue: Issue) -> None:
    """Set ``issue.created_at`` from ``fields.created``; unparseable values leave it None."""
    if issue.fields is None:
        return
    issue.created_at = parse_created(issue.fields.created)


def build_issue_list(raw: dict) -> IssueList:
    """Return an IssueList from a Jira ``/search`` response body."""
    raw = _object(raw, "search result")
    return IssueList(
        expand=raw.get("expand") or "",
        start_at=int(raw.get("startAt") or 0),
        max_results=int(raw.get("maxResults") or 0),
        total=int(raw.get("total") or 0),
        issues=[build_issue(i) for i in raw.get("issues") or [] if isinstance(i, dict)],
    )


# ---------------------------------------------------------------------------
# Extract data from ADF format which Jira Cloud stores rich text in
# ---------------------------------------------------------------------------

def _extract_adf_text(node: dict) -> str:
    """Recursively extract plain text from an ADF document node."""
    if not isinstance(node, dict):
        return ""
    if node.get("type") == "text":
        return node.get("text", "")
    parts = [_extract_adf_text(child) for child in node.get("content") or []]
    return "\n".join(filter(None, parts))
