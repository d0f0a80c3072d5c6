import datetime

import pytest
from sqlmodel import Session, SQLModel, create_engine
from sqlmodel.pool import StaticPool

from routine_tracker import models as _models  # noqa: F401
from routine_tracker.services import (
    EngineContext,
    FixedClock,
    LoggingNotificationScheduler,
    create_custom_routine,
)

# 2026-10-19 is a Monday; its Sunday-aligned week is Oct 18-24.
START_OF_TEST = datetime.datetime(2026, 10, 19, 9, 0)

DEFAULT_TASKS = [
    {"title": "Wake up", "time": "06:00"},
    {"title": "Meditate", "time": "06:15"},
    {"title": "Tea", "time": "06:45"},
    {"title": "Journal", "time": "07:00"},
    {"title": "Exercise", "time": "07:30"},
]


@pytest.fixture()
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def db(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture()
def clock():
    return FixedClock(START_OF_TEST)


@pytest.fixture()
def notifier():
    return LoggingNotificationScheduler()


@pytest.fixture()
def ctx(db, clock, notifier):
    return EngineContext(db=db, clock=clock, notifier=notifier)


@pytest.fixture()
def make_routine(ctx):
    def _make(title="Morning", tasks=None):
        return create_custom_routine(ctx, title, tasks or DEFAULT_TASKS)

    return _make


@pytest.fixture()
def running_routine(ctx, clock, make_routine):
    """Routine activated yesterday, so it is running today (2026-10-20)."""
    routine = make_routine()
    clock.advance(days=1)
    return routine
