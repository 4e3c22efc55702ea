"""End-to-end tests running the real requests stack against a local fake Jira."""

import base64
import json

import pytest
import requests

from jira_activity_client.jira_impl import Auth, IssueNotFoundError, JiraClient, JiraConfig, RequestBuildError


@pytest.fixture
def client(fake_jira):
    session = requests.Session()
    # keep proxy settings from the environment away from the local server
    session.trust_env = False
    return JiraClient(JiraConfig(fake_jira.base_url, auth=Auth("bob", "secret")), session=session)


def test_issues_assigned_to_against_server(fake_jira, client):
    fake_jira.add_route("/rest/api/2/search", 200, json.dumps({
        "expand": "names",
        "startAt": 0,
        "maxResults": 10,
        "total": 25,
        "issues": [
            {"id": "1", "key": "OPS-1", "fields": {"summary": "First", "created": "2023-05-01T10:00:00.000-0700"}},
        ],
    }).encode())

    issues = client.issues_assigned_to("bob", 10, 0)

    assert issues.pagination.page_count == 3
    assert issues.pagination.page == 0
    assert issues.pagination.pages == [0, 1, 2]
    assert issues.issues[0].created_at is not None
    assert "startAt=0&maxResults=10" in fake_jira.requests[0]["path"]


def test_requests_carry_basic_auth(fake_jira, client):
    fake_jira.add_route("/rest/api/2/issue/OPS-1", 200, b'{"id":"1","key":"OPS-1"}')

    client.get_issue("OPS-1")

    expected = "Basic " + base64.b64encode(b"bob:secret").decode()
    assert fake_jira.requests[0]["authorization"] == expected


def test_user_activity_against_server(fake_jira, client):
    fake_jira.add_route(
        "/activity",
        200,
        b'<feed xmlns="http://www.w3.org/2005/Atom"><title>Stream</title>'
        b"<entry><title>bob created OPS-2</title></entry></feed>",
        content_type="application/atom+xml",
    )

    feed = client.user_activity("bob")

    assert feed.title == "Stream"
    assert feed.entries[0].title == "bob created OPS-2"
    assert fake_jira.requests[0]["path"] == "/activity?streams=user+IS+bob"


def test_missing_issue_against_server(fake_jira, client):
    fake_jira.add_route(
        "/rest/api/2/issue/BAD-1", 404, b'{"errorMessages":["Issue Does Not Exist"],"errors":{}}'
    )

    with pytest.raises(IssueNotFoundError) as exc_info:
        client.get_issue("BAD-1")

    assert str(exc_info.value) == "404 Not Found: Issue Does Not Exist"


def test_unreachable_server():
    session = requests.Session()
    session.trust_env = False
    # port 9 (discard) on localhost is not expected to accept HTTP connections
    client = JiraClient(JiraConfig("http://127.0.0.1:9", auth=Auth("bob", "secret")), session=session)

    with pytest.raises(RequestBuildError):
        client.get_issue("OPS-1")


def test_invalid_base_url():
    client = JiraClient(JiraConfig("not-a-url", auth=Auth("bob", "secret")))

    with pytest.raises(RequestBuildError):
        client.get_issue("OPS-1")
