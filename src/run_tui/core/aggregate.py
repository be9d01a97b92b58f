"""Fan one listing out over many partitions and merge what comes back."""

from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor, wait
from typing import Callable, Iterable, Optional, Sequence, TypeVar

from .. import regions

log = logging.getLogger(__name__)

R = TypeVar("R")
FetchOne = Callable[[str], Sequence[R]]


def fetch_all(partitions: Iterable[str], fetch_one: FetchOne, max_workers: Optional[int] = None) -> list[R]:
    """Call ``fetch_one`` for every partition concurrently and return the union.

    Best effort: a partition whose fetch raises contributes nothing and does
    not disturb the others. Blocks until every partition has finished. Order
    within a partition is kept; order across partitions follows completion.
    """
    partitions = list(partitions)
    if not partitions:
        return []

    merged: list[R] = []
    lock = threading.Lock()

    def fetch_into(partition: str) -> None:
        try:
            records = fetch_one(partition)
        except Exception as e:
            log.debug("dropping partition %s: %s", partition, e)
            return
        with lock:
            merged.extend(records)

    workers = max_workers or len(partitions)
    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="partition") as executor:
        futures = [executor.submit(fetch_into, p) for p in partitions]
        wait(futures)
    return merged


def fetch_partitioned(partition: str, fetch_one: FetchOne) -> list[R]:
    """``regions.ALL`` fans out over the catalog; a single region is fetched directly.

    Only the fan-out is best effort: a direct single-region fetch lets its
    error propagate to the caller.
    """
    if partition != regions.ALL:
        return list(fetch_one(partition))
    return fetch_all(regions.expand(partition), fetch_one)
