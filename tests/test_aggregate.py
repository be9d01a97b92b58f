import threading
from types import SimpleNamespace

import pytest

from run_tui import regions
from run_tui.core.aggregate import fetch_all, fetch_partitioned
from run_tui.errors import ApiError


def records(region, count):
    return [SimpleNamespace(name=f"{region}-{i}", region=region) for i in range(count)]


def fetcher(sizes, failing=()):
    def fetch_one(partition):
        if partition in failing:
            raise ApiError(503, f"{partition} unavailable")
        return records(partition, sizes.get(partition, 0))
    return fetch_one


partition_sizes = [
    ({"us": 2}),
    ({"us": 2, "eu": 3}),
    ({"us": 1, "eu": 0, "asia": 5, "au": 4}),
]


@pytest.mark.parametrize("sizes", partition_sizes)
def test_fetch_all_returns_every_record(sizes):
    merged = fetch_all(sizes, fetcher(sizes))

    assert len(merged) == sum(sizes.values())
    assert {r.region for r in merged} <= set(sizes)


@pytest.mark.parametrize("sizes", partition_sizes)
def test_fetch_all_drops_one_failing_partition(sizes):
    failing = next(iter(sizes))
    merged = fetch_all(sizes, fetcher(sizes, failing={failing}))

    assert len(merged) == sum(n for p, n in sizes.items() if p != failing)
    assert failing not in {r.region for r in merged}


def test_two_regions_one_down():
    merged = fetch_all(["us", "eu"], fetcher({"us": 2, "eu": 7}, failing={"eu"}))

    assert sorted(r.name for r in merged) == ["us-0", "us-1"]


def test_fetch_all_keeps_order_within_partition():
    merged = fetch_all(["us", "eu"], fetcher({"us": 5, "eu": 5}))

    us = [r.name for r in merged if r.region == "us"]
    assert us == [f"us-{i}" for i in range(5)]


def test_fetch_all_empty():
    assert fetch_all([], fetcher({})) == []


def test_fetch_all_runs_partitions_concurrently():
    # a sequential fan-out would break the barrier and drop both partitions
    barrier = threading.Barrier(2, timeout=2)

    def fetch_one(partition):
        barrier.wait()
        return records(partition, 1)

    assert len(fetch_all(["us", "eu"], fetch_one)) == 2


def test_fetch_partitioned_all_covers_catalog():
    seen = []
    lock = threading.Lock()

    def fetch_one(partition):
        with lock:
            seen.append(partition)
        return records(partition, 1)

    merged = fetch_partitioned(regions.ALL, fetch_one)

    assert sorted(seen) == sorted(regions.REGIONS)
    assert len(merged) == len(regions.REGIONS)


def test_fetch_partitioned_single_region_is_direct():
    calls = []

    def fetch_one(partition):
        calls.append((partition, threading.current_thread()))
        return records(partition, 2)

    merged = fetch_partitioned("europe-west1", fetch_one)

    assert len(merged) == 2
    assert calls == [("europe-west1", threading.current_thread())]


def test_fetch_partitioned_single_region_error_propagates():
    with pytest.raises(ApiError) as err:
        fetch_partitioned("us-central1", fetcher({}, failing={"us-central1"}))
    assert err.value.status_code == 503


@pytest.mark.parametrize("selection, expected", [
    (regions.ALL, list(regions.REGIONS)),
    ("europe-west1", ["europe-west1"]),
])
def test_expand_region_selection(selection, expected):
    assert regions.expand(selection) == expected
