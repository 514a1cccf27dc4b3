from datetime import datetime

import pytest

from core.workout_stats import (
    weekly_distance_totals, pace_progression, workout_frequency, personal_records,
    filter_by_period, week_start, month_start
)
from models import TimePeriod, Workout, WorkoutType


def make_workout(date, workout_type=WorkoutType.INTERVALS, reps=((1000, 300),), title="Run"):
    return Workout.from_manual_entry(date=date, workout_type=workout_type, title=title, reps=list(reps))


@pytest.fixture()
def workouts():
    return [
        make_workout(datetime(2026, 3, 10, 18, 0), reps=[(400, 70), (400, 68)]),
        make_workout(datetime(2026, 3, 2, 7, 30), WorkoutType.LONG_DISTANCE, [(10000, 3000)]),
        make_workout(datetime(2026, 3, 16, 12, 0), WorkoutType.SPRINT, [(200, 30)]),
        make_workout(datetime(2026, 3, 15, 9, 0), WorkoutType.RECOVERY, [(5000, 1800)]),
        make_workout(datetime(2026, 2, 27, 9, 0), WorkoutType.SPRINT, [(0, 20)]),
    ]


def test_week_and_month_start():
    assert week_start(datetime(2026, 3, 15, 23, 59)) == datetime(2026, 3, 9)
    assert week_start(datetime(2026, 3, 9, 0, 0)) == datetime(2026, 3, 9)
    assert month_start(datetime(2026, 3, 15, 23, 59)) == datetime(2026, 3, 1)


def test_weekly_distance_totals(workouts):
    totals = weekly_distance_totals(workouts)

    assert [(t.week_start_date, t.total_distance) for t in totals] == [
        (datetime(2026, 2, 23), 0),
        (datetime(2026, 3, 2), 10000),
        (datetime(2026, 3, 9), 5800),
        (datetime(2026, 3, 16), 200),
    ]


def test_weekly_distance_totals_is_idempotent_and_keeps_grand_total(workouts):
    first = weekly_distance_totals(workouts)
    second = weekly_distance_totals(workouts)

    assert first == second
    assert sum(t.total_distance for t in first) == sum(w.total_distance for w in workouts)


def test_weekly_distance_totals_treats_missing_total_as_zero():
    workout = Workout.model_construct(
        date=datetime(2026, 3, 10), workout_type=WorkoutType.TEMPO, title="Legacy", total_distance=None
    )

    totals = weekly_distance_totals([workout])

    assert totals[0].total_distance == 0


def test_pace_progression_skips_undefined_pace_and_sorts_by_date(workouts):
    points = pace_progression(workouts)

    assert [p.date for p in points] == sorted(p.date for p in points)
    assert len(points) == 4
    assert points[0].workout_type == WorkoutType.LONG_DISTANCE
    assert points[0].average_pace == pytest.approx(300)


def test_workout_frequency_by_week_and_month(workouts):
    weekly = workout_frequency(workouts, TimePeriod.WEEK)
    monthly = workout_frequency(workouts, TimePeriod.MONTH)

    assert [(f.period_start, f.workout_count) for f in weekly] == [
        (datetime(2026, 2, 23), 1),
        (datetime(2026, 3, 2), 1),
        (datetime(2026, 3, 9), 2),
        (datetime(2026, 3, 16), 1),
    ]
    assert [(f.period_start, f.workout_count) for f in monthly] == [
        (datetime(2026, 2, 1), 1),
        (datetime(2026, 3, 1), 4),
    ]


def test_personal_records_keep_lowest_pace_per_type():
    slower = make_workout(datetime(2026, 3, 1), WorkoutType.SPRINT, [(1000, 300)])
    faster = make_workout(datetime(2026, 3, 8), WorkoutType.SPRINT, [(1000, 280)])
    tempo = make_workout(datetime(2026, 3, 3), WorkoutType.TEMPO, [(5000, 1500)])

    records = personal_records([slower, tempo, faster])

    assert [r.workout_type for r in records] == [WorkoutType.SPRINT, WorkoutType.TEMPO]
    assert records[0].best_pace == pytest.approx(280)
    assert records[0].achieved_date == datetime(2026, 3, 8)
    assert records[0].distance == 1000


def test_personal_records_tie_keeps_first_encountered():
    first = make_workout(datetime(2026, 3, 5), WorkoutType.TEMPO, [(1000, 250)])
    second = make_workout(datetime(2026, 3, 1), WorkoutType.TEMPO, [(2000, 500)])

    records = personal_records([first, second])

    assert records[0].achieved_date == datetime(2026, 3, 5)


def test_personal_records_ignore_zero_distance(workouts):
    records = personal_records(workouts)

    sprint = next(r for r in records if r.workout_type == WorkoutType.SPRINT)
    assert sprint.distance == 200
    assert [r.workout_type.value for r in records] == sorted(r.workout_type.value for r in records)


def test_statistics_on_empty_input():
    assert weekly_distance_totals([]) == []
    assert pace_progression([]) == []
    assert workout_frequency([], TimePeriod.MONTH) == []
    assert personal_records([]) == []


def test_filter_by_period(workouts):
    now = datetime(2026, 3, 17, 12, 0)

    last_week = filter_by_period(workouts, TimePeriod.WEEK, now=now)

    assert {w.date for w in last_week} == {
        datetime(2026, 3, 10, 18, 0), datetime(2026, 3, 16, 12, 0), datetime(2026, 3, 15, 9, 0)
    }
    assert len(filter_by_period(workouts, TimePeriod.YEAR, now=now)) == len(workouts)
