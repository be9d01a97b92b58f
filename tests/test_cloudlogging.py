import json

import httpx

from run_tui.models.logs import Order
from run_tui.services.cloudlogging import CloudLoggingSource, job_filter, service_filter
from run_tui.services.http import ApiClient


def source_with(pages):
    bodies = []

    def handler(request):
        assert request.url.path == "/v2/entries:list"
        bodies.append(json.loads(request.content))
        return httpx.Response(200, json=pages[len(bodies) - 1])

    api = ApiClient("https://logging.test", "tok", transport=httpx.MockTransport(handler))
    return CloudLoggingSource(api, "p"), bodies


def item(ts, text):
    return {"timestamp": ts, "textPayload": text, "severity": "INFO"}


def test_request_body_and_bound():
    source, bodies = source_with([
        {"entries": [item("2024-05-01T10:00:03Z", "c"), item("2024-05-01T10:00:02Z", "b")],
         "nextPageToken": "t"},
        {"entries": [item("2024-05-01T10:00:01Z", "a")]},
    ])
    entries = list(source.entries("f", Order.NEWEST_FIRST, limit=2))

    assert [e.payload for e in entries] == ["c", "b"]
    assert bodies == [{"resourceNames": ["projects/p"], "filter": "f", "orderBy": "timestamp desc", "pageSize": 2}]


def test_unbounded_follows_pages():
    source, bodies = source_with([
        {"entries": [item("2024-05-01T10:00:01Z", "a")], "nextPageToken": "t"},
        {"entries": [item("2024-05-01T10:00:02Z", "b")]},
    ])
    entries = list(source.entries("f", Order.OLDEST_FIRST))

    assert [e.payload for e in entries] == ["a", "b"]
    assert bodies[0]["orderBy"] == "timestamp asc"
    assert bodies[0]["pageSize"] == 1000
    assert bodies[1]["pageToken"] == "t"


def test_filters():
    assert service_filter("api", "us-east1") == (
        'resource.type="cloud_run_revision" AND resource.labels.service_name="api" '
        'AND resource.labels.location="us-east1"')
    assert 'resource.labels.job_name="nightly"' in job_filter("nightly", "us-east1")
