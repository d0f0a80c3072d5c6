import datetime

from routine_tracker.services import (
    WeekDirection,
    finalize_day,
    navigate_week,
    perform_midnight_check,
    toggle,
    week_data,
)
from routine_tracker.services.week_service import format_date_range


def test_format_date_range_same_and_crossing_months():
    assert format_date_range(datetime.date(2026, 10, 18), datetime.date(2026, 10, 24)) == "Oct 18-24"
    assert format_date_range(datetime.date(2026, 11, 29), datetime.date(2026, 12, 5)) == "Nov 29-Dec 5"


def test_current_week_of_new_routine(ctx, make_routine):
    routine = make_routine()

    data = week_data(ctx, routine, 0)

    assert data.date_range == "Oct 18-24"
    assert data.week_start == datetime.date(2026, 10, 18)
    assert data.week_end == datetime.date(2026, 10, 24)
    assert data.data_points == [0] * 7
    assert data.can_navigate_back is False
    assert data.can_navigate_forward is False


def test_previous_week_containing_start_date(ctx, clock, make_routine):
    clock.set(datetime.datetime(2026, 10, 12, 20, 0))
    routine = make_routine()
    assert routine.start_date == datetime.date(2026, 10, 13)
    clock.set(datetime.datetime(2026, 10, 19, 9, 0))

    last_week = week_data(ctx, routine, -1)
    this_week = week_data(ctx, routine, 0)

    assert last_week.date_range == "Oct 11-17"
    assert last_week.can_navigate_back is False
    assert last_week.can_navigate_forward is True
    assert this_week.can_navigate_back is True
    assert this_week.can_navigate_forward is False


def test_data_points_follow_day_records(ctx, clock, running_routine):
    tasks = sorted(running_routine.tasks, key=lambda task: task.order_index)
    perform_midnight_check(ctx)
    toggle(ctx, tasks[0], ctx.today())
    toggle(ctx, tasks[1], ctx.today())
    clock.advance(days=1)
    perform_midnight_check(ctx)
    toggle(ctx, tasks[2], ctx.today())

    data = week_data(ctx, running_routine, 0)

    # Tue 10-20 finalized with two, Wed 10-21 live with one.
    assert data.data_points == [0, 0, 2, 1, 0, 0, 0]


def test_positive_offset_is_clamped_to_current_week(ctx, running_routine):
    data = week_data(ctx, running_routine, 3)

    assert data.week_offset == 0
    assert data.week_start == datetime.date(2026, 10, 18)
    assert data.can_navigate_forward is False


def test_week_crossing_months(ctx, clock, make_routine):
    clock.set(datetime.datetime(2026, 11, 20, 9, 0))
    routine = make_routine()
    clock.set(datetime.datetime(2026, 12, 2, 9, 0))
    finalize_day(ctx, routine, datetime.date(2026, 11, 30))

    data = week_data(ctx, routine, 0)

    assert data.date_range == "Nov 29-Dec 5"
    assert data.data_points[1] == 0
    assert data.can_navigate_back is True


def test_navigate_week_stops_at_start_week_and_current_week(ctx, clock, make_routine):
    clock.set(datetime.datetime(2026, 10, 5, 9, 0))
    routine = make_routine()
    clock.set(datetime.datetime(2026, 10, 19, 9, 0))

    offset = navigate_week(ctx, routine, 0, WeekDirection.PREVIOUS)
    assert offset == -1
    offset = navigate_week(ctx, routine, offset, WeekDirection.PREVIOUS)
    assert offset == -2
    # Start week (Oct 4-10) reached; no history before it.
    assert navigate_week(ctx, routine, offset, WeekDirection.PREVIOUS) == -2

    assert navigate_week(ctx, routine, -2, WeekDirection.NEXT) == -1
    assert navigate_week(ctx, routine, 0, WeekDirection.NEXT) == 0
