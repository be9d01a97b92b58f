"""Static catalog of Cloud Run regions (the partitions listings fan out over)."""

from __future__ import annotations

ALL = "all"

REGIONS: tuple[str, ...] = (
    "asia-east1", "asia-northeast1", "asia-northeast2", "asia-northeast3",
    "asia-south1", "asia-southeast1", "asia-southeast2", "australia-southeast1",
    "europe-central2", "europe-north1", "europe-west1", "europe-west2",
    "europe-west3", "europe-west4", "europe-west6", "northamerica-northeast1",
    "southamerica-east1", "us-central1", "us-east1", "us-east4",
    "us-west1", "us-west2", "us-west3", "us-west4",
)


def is_valid(region: str) -> bool:
    return region == ALL or region in REGIONS


def expand(region: str) -> list[str]:
    """Return the partitions a region selection covers."""
    if region == ALL:
        return list(REGIONS)
    return [region]
