import pytest

from run_tui.core.context import Context, timeout_for
from run_tui.errors import Cancelled, DeadlineExceeded


def test_cancel():
    ctx = Context()
    assert not ctx.cancelled
    ctx.cancel()

    assert ctx.cancelled
    assert ctx.wait(5)
    with pytest.raises(Cancelled):
        ctx.raise_if_cancelled()


def test_deadline():
    ctx = Context(timeout=0)

    assert ctx.cancelled
    with pytest.raises(DeadlineExceeded):
        ctx.raise_if_cancelled()


@pytest.mark.parametrize("ctx, expected", [(None, 30.0), (Context(), 30.0)])
def test_timeout_for_unbounded(ctx, expected):
    assert timeout_for(ctx, 30.0) == expected


def test_timeout_for_respects_deadline():
    assert timeout_for(Context(timeout=5), 30.0) <= 5


def test_timeout_for_cancelled_context():
    ctx = Context()
    ctx.cancel()
    with pytest.raises(Cancelled):
        timeout_for(ctx, 30.0)
