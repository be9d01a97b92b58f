import threading

from run_tui.core.runner import TaskRunner
from run_tui.errors import ApiError

from .conftest import settle


def test_result_delivered_once_through_dispatcher(queue_dispatcher):
    runner = TaskRunner(queue_dispatcher)
    worker_threads = []
    delivered = []

    def work(ctx):
        worker_threads.append(threading.current_thread())
        return 42

    runner.run(work, lambda result, error: delivered.append((result, error)))
    assert delivered == []

    assert settle(queue_dispatcher) == 1
    assert delivered == [(42, None)]
    assert worker_threads[0] is not threading.current_thread()


def test_error_is_delivered_as_value(queue_dispatcher):
    runner = TaskRunner(queue_dispatcher)
    delivered = []
    boom = ApiError(500, "boom")

    def work(ctx):
        raise boom

    runner.run(work, lambda result, error: delivered.append((result, error)))
    settle(queue_dispatcher)

    assert delivered == [(None, boom)]


def test_stale_completion_in_slot_is_discarded(queue_dispatcher):
    runner = TaskRunner(queue_dispatcher)
    release = threading.Event()
    delivered = []

    def slow(ctx):
        release.wait(2)
        return "old"

    old = runner.run(slow, lambda r, e: delivered.append(r), slot="view")
    new = runner.run(lambda ctx: "new", lambda r, e: delivered.append(r), slot="view")
    settle(queue_dispatcher)
    release.set()
    settle(queue_dispatcher)

    assert delivered == ["new"]
    assert new.generation == old.generation + 1
    assert not runner.is_current(old)
    assert runner.is_current(new)


def test_slots_are_independent(queue_dispatcher):
    runner = TaskRunner(queue_dispatcher)
    delivered = []

    runner.run(lambda ctx: "a", lambda r, e: delivered.append(r), slot="services-list")
    runner.run(lambda ctx: "b", lambda r, e: delivered.append(r), slot="jobs-list")
    runner.run(lambda ctx: "c", lambda r, e: delivered.append(r))
    settle(queue_dispatcher, 3)

    assert sorted(delivered) == ["a", "b", "c"]


def test_timeout_bounds_context(queue_dispatcher):
    runner = TaskRunner(queue_dispatcher)
    seen = []

    def work(ctx):
        seen.append(ctx.remaining())
        return None

    handle = runner.run(work, lambda r, e: None, timeout=120)
    settle(queue_dispatcher)

    assert 0 < seen[0] <= 120
    assert handle.context.deadline is not None


def test_cancel_is_visible_to_work(queue_dispatcher):
    runner = TaskRunner(queue_dispatcher)
    started = threading.Event()
    delivered = []

    def work(ctx):
        started.set()
        while not ctx.wait(0.01):
            pass
        ctx.raise_if_cancelled()

    handle = runner.run(work, lambda r, e: delivered.append(type(e).__name__))
    assert started.wait(2)
    handle.cancel()
    settle(queue_dispatcher)

    assert delivered == ["Cancelled"]
