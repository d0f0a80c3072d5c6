import datetime

import pytest
from sqlalchemy.exc import OperationalError
from sqlmodel import select

from routine_tracker.models import DayRecord, Task
from routine_tracker.services import (
    EngineContext,
    PersistenceError,
    get_active_routine,
    get_all_routines,
    perform_midnight_check,
    toggle,
)
from routine_tracker.services.settings_service import get_last_midnight_check


def _fail_next_commit(monkeypatch, db):
    original_commit = db.commit
    calls = {"count": 0}

    def _commit():
        calls["count"] += 1
        if calls["count"] == 1:
            raise OperationalError("COMMIT", {}, Exception("disk I/O error"))
        return original_commit()

    monkeypatch.setattr(db, "commit", _commit)


def test_failed_midnight_check_is_reported_and_retryable(ctx, db, clock, monkeypatch, running_routine):
    tasks = sorted(running_routine.tasks, key=lambda task: task.order_index)
    toggle(ctx, tasks[0], ctx.today())
    toggle(ctx, tasks[1], ctx.today())
    clock.advance(days=1)

    _fail_next_commit(monkeypatch, db)
    with pytest.raises(PersistenceError) as excinfo:
        perform_midnight_check(ctx)
    assert "midnight check" in str(excinfo.value)
    assert get_last_midnight_check(db) is None

    assert perform_midnight_check(ctx) is True
    record = db.exec(select(DayRecord).where(DayRecord.date == datetime.date(2026, 10, 20))).one()
    assert record.is_finalized
    assert record.completed_count == 2


def test_operations_without_store_are_no_ops(clock, notifier):
    ctx = EngineContext(db=None, clock=clock, notifier=notifier)
    task = Task(title="Wake", time="06:00")

    assert get_active_routine(ctx) is None
    assert get_all_routines(ctx) == []
    assert perform_midnight_check(ctx) is False
    assert toggle(ctx, task, clock.now()) is None


def test_toggle_for_orphan_task_is_a_no_op(ctx):
    task = Task(title="Wake", time="06:00")
    assert toggle(ctx, task, ctx.today()) is None
