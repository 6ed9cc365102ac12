import pytest

from app.core.deadline import Deadline
from app.core.errors import OperationTimeoutError


class FakeClock:
    def __init__(self):
        self.now = 100.0

    def __call__(self):
        return self.now


def test_rejects_non_positive_budget():
    with pytest.raises(ValueError):
        Deadline(0, "reset-all")


def test_tracks_elapsed_and_remaining():
    clock = FakeClock()
    deadline = Deadline(10, "reset-all", clock=clock)
    clock.now += 4

    assert deadline.elapsed == pytest.approx(4)
    assert deadline.remaining() == pytest.approx(6)
    assert not deadline.expired


def test_check_raises_once_spent():
    clock = FakeClock()
    deadline = Deadline(2, "seed", clock=clock)
    clock.now += 3

    assert deadline.remaining() == 0
    with pytest.raises(OperationTimeoutError) as exc_info:
        deadline.check("insert:patients#0")
    assert exc_info.value.step == "insert:patients#0"
    assert "seed" in exc_info.value.details


def test_guard_is_a_plain_check_off_postgres(db):
    clock = FakeClock()
    deadline = Deadline(5, "reset-all", clock=clock)

    deadline.guard(db, "count:staff")

    clock.now += 10
    with pytest.raises(OperationTimeoutError):
        deadline.guard(db, "count:staff")
