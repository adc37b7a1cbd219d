"""Shared fixtures: sample payloads and a client wired to `httpx.MockTransport`."""
from typing import Any, Callable

import httpx
import pytest

from adapters.backlog_client import BacklogClient

BASE_URL = "https://example.backlog.com/api/v2"
API_KEY = "test-key"

SPACE = {
    "spaceKey": "EXAMPLE",
    "name": "Example Inc.",
    "ownerId": 1,
    "lang": "ja",
    "timezone": "Asia/Tokyo",
    "reportSendTime": "08:00:00",
    "textFormattingRule": "markdown",
    "created": "2008-07-06T15:00:00Z",
    "updated": "2013-06-18T07:55:37Z",
}

PROJECT = {
    "id": 1,
    "projectKey": "TEST",
    "name": "test",
    "chartEnabled": False,
    "useResolvedForChart": False,
    "projectLeaderCanEditProjectLeader": False,
    "useWiki": True,
    "useFileSharing": True,
    "useWikiTreeView": True,
    "useOriginalImageSizeAtWiki": False,
    "useSubversion": False,
    "useGit": True,
    "textFormattingRule": "markdown",
    "archived": False,
    "displayOrder": 2147483646,
    "useDevAttributes": True,
}

ISSUE_TYPE = {
    "id": 2,
    "projectId": 1,
    "name": "Bug",
    "color": "#990000",
    "displayOrder": 0,
    "templateSummary": None,
    "templateDescription": None,
}

PRIORITY = {"id": 3, "name": "Normal"}

STATUS = {"id": 1, "projectId": 1, "name": "Open", "color": "#ed8077", "displayOrder": 1000}

ISSUE = {
    "id": 1,
    "projectId": 1,
    "issueKey": "TEST-1",
    "keyId": 1,
    "issueType": ISSUE_TYPE,
    "summary": "first issue",
    "description": "",
    "priority": PRIORITY,
    "status": STATUS,
    "assignee": None,
}

COMMENT = {
    "id": 6586,
    "content": "test",
    "changeLog": None,
    "created": "2013-08-05T06:15:06Z",
    "updated": "2013-08-05T06:15:06Z",
}


class Recorder:
    """Collects the requests seen by the mock transport."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def recorder() -> Recorder:
    return Recorder()


@pytest.fixture
def make_client(recorder: Recorder) -> Callable[..., BacklogClient]:
    """Factory: `make_client(status, json_body=..., text=...)`."""

    def factory(status: int = 200, json_body: Any = None, text: str = "") -> BacklogClient:
        def handler(request: httpx.Request) -> httpx.Response:
            request.read()
            recorder.requests.append(request)
            if json_body is not None:
                return httpx.Response(status, json=json_body)
            return httpx.Response(status, text=text)

        http = httpx.Client(transport=httpx.MockTransport(handler))
        return BacklogClient(API_KEY, BASE_URL, http_client=http)

    return factory
