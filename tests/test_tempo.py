"""Tests for the Tempo server and Tempo Cloud providers."""

import base64
import json
from datetime import datetime, timedelta

import httpx
import pytest

from worklog_sync.client import FetchError, FetchOptions, UploadError, UploadOptions, collect_results
from worklog_sync.tempo import TempoClient
from worklog_sync.tempo.client import PATH_WORKLOG_CREATE, PATH_WORKLOG_SEARCH
from worklog_sync.tempocloud import TempoCloudClient

from conftest import make_entry


def _basic_auth(username: str, password: str) -> str:
    return "Basic " + base64.b64encode(f"{username}:{password}".encode()).decode()


def _worklog(worklog_id: int, billable: int, spent: int, comment: str) -> dict:
    return {
        "tempoWorklogId": worklog_id,
        "started": "2021-10-02T00:00:00.000",
        "billableSeconds": billable,
        "timeSpentSeconds": spent,
        "comment": comment,
        "worker": "steve-rogers",
        "issue": {
            "id": 789,
            "key": "CPT-2014",
            "accountKey": "My Awesome Company",
            "projectId": 456,
            "projectKey": "MARVEL",
            "summary": "Meet with The Winter Soldier",
        },
    }


class TestTempoClient:
    """Test TempoClient."""

    def test_fetch_entries(self) -> None:
        """Test searching worklogs of a worker."""
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(
                200,
                json=[
                    _worklog(123, 3600, 3600, "I met with The Winter Soldier"),
                    _worklog(456, 1800, 3600, "I met with him again"),
                    _worklog(789, 0, 3600, "I helped him to get back on track"),
                ],
            )

        client = TempoClient(
            base_url="https://jira.example.com",
            username="Thor",
            password="The strongest Avenger",
            transport=httpx.MockTransport(handler),
        )

        entries = client.fetch_entries(
            FetchOptions(
                user="steve-rogers",
                start=datetime(2021, 10, 2),
                end=datetime(2021, 10, 2, 23, 59, 59),
            )
        )

        request = requests[0]
        assert request.method == "POST"
        assert request.url.path == PATH_WORKLOG_SEARCH
        assert request.headers["Authorization"] == _basic_auth("Thor", "The strongest Avenger")
        assert json.loads(request.content) == {
            "from": "2021-10-02",
            "to": "2021-10-02",
            "worker": "steve-rogers",
        }

        assert len(entries) == 3
        assert entries[0].client.name == "My Awesome Company"
        assert entries[0].project.id == "456"
        assert entries[0].project.name == "MARVEL"
        assert entries[0].task.id == "789"
        assert entries[0].task.name == "CPT-2014"
        assert entries[0].notes == "I met with The Winter Soldier"
        assert entries[1].billable_duration == timedelta(seconds=1800)
        assert entries[1].unbillable_duration == timedelta(seconds=1800)
        assert entries[2].billable_duration == timedelta(0)
        assert entries[2].unbillable_duration == timedelta(seconds=3600)

    def test_fetch_entries_error(self) -> None:
        """Test a failing search raises a fetch error."""
        client = TempoClient(
            base_url="https://jira.example.com",
            username="Thor",
            password="wrong",
            transport=httpx.MockTransport(lambda request: httpx.Response(401)),
        )

        with pytest.raises(FetchError):
            client.fetch_entries(
                FetchOptions(user="steve-rogers", start=datetime(2021, 10, 2), end=datetime(2021, 10, 2))
            )

    def test_upload_entries(self, start) -> None:
        """Test every entry is posted as a worklog."""
        payloads: list[dict] = []

        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == PATH_WORKLOG_CREATE
            payloads.append(json.loads(request.content))
            return httpx.Response(200, json={})

        client = TempoClient(
            base_url="https://jira.example.com",
            username="Thor",
            password="The strongest Avenger",
            transport=httpx.MockTransport(handler),
        )
        entries = [
            make_entry("CPT-2014", start, billable=0, unbillable=3600, notes="first"),
            make_entry("CPT-2014", start, billable=3600, notes="second"),
        ]
        opts = UploadOptions(user="steve-rogers", treat_duration_as_billed=True)

        results = collect_results(client.upload_entries(entries, opts), 2, timeout=5)

        assert results == [None, None]
        assert payloads == [
            {
                "comment": "first",
                "includeNonWorkingDays": True,
                "originTaskId": "CPT-2014",
                "started": "2021-10-02",
                "billableSeconds": 3600,
                "timeSpentSeconds": 3600,
                "worker": "steve-rogers",
            },
            {
                "comment": "second",
                "includeNonWorkingDays": True,
                "originTaskId": "CPT-2014",
                "started": "2021-10-02",
                "billableSeconds": 3600,
                "timeSpentSeconds": 3600,
                "worker": "steve-rogers",
            },
        ]

    def test_upload_entries_rejected(self, sample_entries) -> None:
        """Test rejected worklogs are reported per entry."""

        def handler(request: httpx.Request) -> httpx.Response:
            body = json.loads(request.content)
            status = 400 if body["originTaskId"] == "CPT-2015" else 200
            return httpx.Response(status, json={})

        client = TempoClient(
            base_url="https://jira.example.com",
            username="Thor",
            password="The strongest Avenger",
            transport=httpx.MockTransport(handler),
        )

        results = collect_results(
            client.upload_entries(sample_entries, UploadOptions(user="steve-rogers")), 3, timeout=5
        )

        errors = [r for r in results if r is not None]
        assert len(errors) == 1
        assert isinstance(errors[0], UploadError)
        assert errors[0].entry.task.name == "CPT-2015"


class TestTempoCloudClient:
    """Test TempoCloudClient."""

    def _client(self, handler) -> TempoCloudClient:
        return TempoCloudClient(
            tempo_token="tempo-token",
            jira_url="https://example.atlassian.net",
            jira_username="steve@example.com",
            jira_api_token="jira-token",
            transport=httpx.MockTransport(handler),
        )

    def test_upload_entries(self, sample_entry) -> None:
        """Test the issue is resolved before the worklog is posted."""
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            if request.url.host == "example.atlassian.net":
                return httpx.Response(200, json={"id": "10001", "key": "CPT-2014"})
            return httpx.Response(200, json={})

        client = self._client(handler)
        opts = UploadOptions(user="account-1", round_to_closest_minute=True)
        entry = sample_entry.model_copy(update={"billable_duration": timedelta(seconds=3629)})

        results = collect_results(client.upload_entries([entry], opts), 1, timeout=5)

        assert results == [None]
        issue_request, worklog_request = requests
        assert issue_request.url.path == "/rest/api/3/issue/CPT-2014"
        assert issue_request.headers["Authorization"] == _basic_auth("steve@example.com", "jira-token")
        assert worklog_request.url.path == "/4/worklogs"
        assert worklog_request.headers["Authorization"] == "Bearer tempo-token"

        start = entry.start.astimezone()
        assert json.loads(worklog_request.content) == {
            "description": "Meet with The Winter Soldier",
            "issueId": 10001,
            "startDate": start.strftime("%Y-%m-%d"),
            "startTime": start.strftime("%H:%M:%S"),
            "billableSeconds": 3600,
            "timeSpentSeconds": 3600,
            "authorAccountId": "account-1",
        }

    def test_unknown_issue(self, sample_entry) -> None:
        """Test a missing issue fails the entry without posting a worklog."""
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(404, json={"errorMessages": ["Issue does not exist"]})

        client = self._client(handler)

        results = collect_results(
            client.upload_entries([sample_entry], UploadOptions(user="account-1")), 1, timeout=5
        )

        assert isinstance(results[0], UploadError)
        assert len(requests) == 1
