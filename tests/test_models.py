from datetime import datetime, timezone

import pytest

from run_tui.models.domainmappings import DomainMapping
from run_tui.models.jobs import Execution
from run_tui.models.logs import LogEntry, format_timestamp
from run_tui.models.services import Service
from run_tui.models.workerpools import WorkerPool


def test_service_from_api():
    service = Service.model_validate({
        "name": "projects/my-proj/locations/europe-west1/services/frontend",
        "uri": "https://frontend-abc.a.run.app",
        "creator": "alice@example.com",
        "lastModifier": "bob@example.com",
        "updateTime": "2024-05-01T10:00:00.123456789Z",
        "latestReadyRevision": "projects/my-proj/locations/europe-west1/services/frontend/revisions/frontend-00002",
        "trafficStatuses": [{"type": "TRAFFIC_TARGET_ALLOCATION_TYPE_LATEST", "percent": 100}],
        "scaling": {"minInstanceCount": 1, "maxInstanceCount": 5, "scalingMode": "AUTOMATIC"},
        "template": {"containers": [{"image": "gcr.io/x/y"}]},
    })

    assert service.short_name == "frontend"
    assert service.region == "europe-west1"
    assert service.project == "my-proj"
    assert service.modified_by == "bob@example.com"
    assert service.latest_revision == "frontend-00002"
    assert service.scaling.describe() == "auto (1-5)"
    assert service.traffic_statuses[0].percent == 100


def test_modified_by_falls_back_to_creator():
    service = Service(name="projects/p/locations/r/services/s", creator="alice@example.com")
    assert service.modified_by == "alice@example.com"


@pytest.mark.parametrize("conditions, ready", [
    ([], None),
    ([{"type": "Ready", "state": "CONDITION_SUCCEEDED"}], True),
    ([{"type": "Ready", "state": "CONDITION_FAILED"}], False),
])
def test_ready_condition(conditions, ready):
    pool = WorkerPool.model_validate({"name": "projects/p/locations/r/workerPools/w", "conditions": conditions})
    assert pool.ready is ready


def test_workerpool_instance_count():
    pool = WorkerPool.model_validate({"name": "projects/p/locations/r/workerPools/w",
                                      "scaling": {"manualInstanceCount": 4}})
    assert pool.instance_count == 4
    assert WorkerPool(name="projects/p/locations/r/workerPools/w").instance_count == 0


@pytest.mark.parametrize("completion, failed, status", [
    (None, 0, "Running"),
    ("2024-05-01T10:00:00Z", 0, "Succeeded"),
    ("2024-05-01T10:00:00Z", 2, "Failed"),
])
def test_execution_status(completion, failed, status):
    execution = Execution.model_validate({"name": "projects/p/locations/r/jobs/j/executions/j-1",
                                          "completionTime": completion, "failedCount": failed})
    assert execution.status == status


def test_domain_mapping_from_v1():
    mapping = DomainMapping.from_api({
        "metadata": {
            "name": "www.example.com",
            "namespace": "123456",
            "creationTimestamp": "2024-01-01T00:00:00Z",
            "labels": {"cloud.googleapis.com/location": "europe-west1"},
        },
        "spec": {"routeName": "frontend"},
        "status": {
            "conditions": [{"type": "Ready", "status": "True"}],
            "resourceRecords": [{"type": "CNAME", "rrdata": "ghs.googlehosted.com."}],
        },
    }, "us-central1")

    assert mapping.short_name == "www.example.com"
    assert mapping.region == "europe-west1"
    assert mapping.route_name == "frontend"
    assert mapping.ready is True
    assert mapping.records[0].rrdata == "ghs.googlehosted.com."


def test_log_entry_keeps_nanosecond_text():
    text = "2024-05-01T10:00:01.123456789Z"
    entry = LogEntry.from_api({"timestamp": text, "textPayload": "hello", "severity": "INFO"})

    assert entry.timestamp == datetime(2024, 5, 1, 10, 0, 1, 123456, tzinfo=timezone.utc)
    assert entry.filter_timestamp == text
    assert entry.format_line() == "[10:00:01] hello"


@pytest.mark.parametrize("item, payload", [
    ({"textPayload": "plain"}, "plain"),
    ({"jsonPayload": {"message": "structured", "level": 3}}, "structured"),
    ({"jsonPayload": {"level": 3}}, "{'level': 3}"),
    ({}, ""),
])
def test_log_entry_payload(item, payload):
    item["timestamp"] = "2024-05-01T10:00:01Z"
    assert LogEntry.from_api(item).payload == payload


def test_format_timestamp_is_utc():
    ts = datetime(2024, 5, 1, 10, 0, 1, tzinfo=timezone.utc)
    assert format_timestamp(ts) == "2024-05-01T10:00:01.000000Z"
