import json
from datetime import datetime

import pytest
from pydantic import ValidationError

from models import Repetition, Workout, WorkoutType, describe, display_name
from utils.pace_calculator import (
    calculate_pace, format_distance, format_duration, format_pace, format_timer,
    seconds_to_pace
)


def test_repetition_pace():
    assert Repetition(rep_number=1, distance=400, duration=70).pace == pytest.approx(175)
    assert Repetition(rep_number=1, distance=0, duration=70).pace == 0


def test_repetition_is_immutable():
    rep = Repetition(rep_number=1, distance=400, duration=70)
    with pytest.raises(ValidationError):
        rep.distance = 800


@pytest.mark.parametrize("fields", [
    {'rep_number': 0, 'distance': 400, 'duration': 70},
    {'rep_number': 1, 'distance': -1, 'duration': 70},
    {'rep_number': 1, 'distance': 400, 'duration': -5},
    {'rep_number': 1, 'distance': 400, 'duration': 70, 'rest_time': -1},
])
def test_repetition_rejects_invalid_values(fields):
    with pytest.raises(ValidationError):
        Repetition(**fields)


def test_workout_totals_include_rest_time():
    workout = Workout(
        date=datetime(2026, 3, 10, 18, 0),
        workout_type=WorkoutType.INTERVALS,
        title="400s",
        repetitions=[
            Repetition(rep_number=2, distance=400, duration=68),
            Repetition(rep_number=1, distance=400, duration=70, rest_time=90),
        ]
    )

    assert [rep.rep_number for rep in workout.repetitions] == [1, 2]
    assert workout.total_distance == 800
    assert workout.total_duration == 228
    assert workout.average_pace == pytest.approx(285)


def test_workout_without_distance_has_no_average_pace():
    workout = Workout(date=datetime(2026, 3, 10), workout_type=WorkoutType.RECOVERY, title="Walk")

    assert workout.total_distance == 0
    assert workout.total_duration == 0
    assert workout.average_pace is None


def test_workout_requires_title():
    with pytest.raises(ValidationError):
        Workout(date=datetime(2026, 3, 10), workout_type=WorkoutType.TEMPO, title="")


def test_workout_requires_contiguous_rep_numbers():
    with pytest.raises(ValidationError):
        Workout(
            date=datetime(2026, 3, 10),
            workout_type=WorkoutType.TEMPO,
            title="Gap",
            repetitions=[
                Repetition(rep_number=1, distance=400, duration=70),
                Repetition(rep_number=3, distance=400, duration=70),
            ]
        )


def test_workout_title_is_stripped():
    workout = Workout(date=datetime(2026, 3, 10), workout_type=WorkoutType.TEMPO, title="  Tempo  ")
    assert workout.title == "Tempo"

    with pytest.raises(ValidationError):
        Workout(date=datetime(2026, 3, 10), workout_type=WorkoutType.TEMPO, title="   ")
    with pytest.raises(ValidationError):
        workout.title = " "
    assert workout.title == "Tempo"


def test_assigning_repetitions_sorts_and_recomputes():
    workout = Workout.from_manual_entry(datetime(2026, 3, 10), WorkoutType.SPRINT, "Sprints", [(400, 70)])

    workout.repetitions = [
        Repetition(rep_number=2, distance=200, duration=30),
        Repetition(rep_number=1, distance=400, duration=70),
    ]

    assert [rep.rep_number for rep in workout.repetitions] == [1, 2]
    assert workout.total_distance == 600
    assert workout.total_duration == 100


def test_assigning_invalid_repetitions_keeps_previous_list():
    workout = Workout.from_manual_entry(datetime(2026, 3, 10), WorkoutType.SPRINT, "Sprints", [(400, 70)])

    with pytest.raises(ValidationError):
        workout.repetitions = [Repetition(rep_number=3, distance=200, duration=30)]

    assert [rep.distance for rep in workout.repetitions] == [400]
    assert workout.total_distance == 400


def test_add_repetition_recomputes_totals():
    workout = Workout(date=datetime(2026, 3, 10), workout_type=WorkoutType.TEMPO, title="Tempo")
    before = workout.updated_at

    rep = workout.add_repetition(1000, 240, rest_time=60)
    workout.add_repetition(1000, 250)

    assert rep.rep_number == 1
    assert workout.total_distance == 2000
    assert workout.total_duration == 550
    assert workout.average_pace == pytest.approx(275)
    assert workout.updated_at >= before


def test_set_repetitions_replaces_list():
    workout = Workout.from_manual_entry(datetime(2026, 3, 10), WorkoutType.SPRINT, "Sprints", [(100, 12)])

    workout.set_repetitions([
        Repetition(rep_number=2, distance=200, duration=25),
        Repetition(rep_number=1, distance=200, duration=24),
    ])

    assert [rep.duration for rep in workout.repetitions] == [24, 25]
    assert workout.total_distance == 400

    with pytest.raises(ValueError):
        workout.set_repetitions([Repetition(rep_number=2, distance=200, duration=25)])


def test_manual_entry():
    workout = Workout.from_manual_entry(
        date=datetime(2026, 3, 10, 7, 0),
        workout_type=WorkoutType.MIDDLE_DISTANCE,
        title="800s",
        reps=[(800, 150), (800, 152)],
        notes="   "
    )

    assert [rep.rep_number for rep in workout.repetitions] == [1, 2]
    assert workout.notes is None
    assert not workout.is_live_tracked
    assert workout.total_duration == 302


def test_from_dict_recomputes_stale_totals():
    workout = Workout.from_manual_entry(datetime(2026, 3, 10), WorkoutType.TEMPO, "Tempo", [(1000, 250)])
    data = workout.to_dict()
    data['total_distance'] = 99999
    data['average_pace'] = 1

    loaded = Workout.from_dict(json.loads(json.dumps(data)))

    assert loaded.total_distance == 1000
    assert loaded.average_pace == pytest.approx(250)
    assert loaded.id == workout.id
    assert loaded.updated_at == workout.updated_at


def test_workout_type_metadata():
    assert display_name(WorkoutType.MIDDLE_DISTANCE) == "Middle Distance"
    assert describe(WorkoutType.SPRINT) == "100m, 200m, 400m runs"
    assert all(describe(t) for t in WorkoutType)


def test_pace_and_duration_formatting():
    assert calculate_pace(800, 138) == pytest.approx(172.5)
    assert calculate_pace(0, 138) == 0
    assert seconds_to_pace(172.5) == "2:52"
    assert format_pace(172.5) == "2:52/km"
    assert format_pace(None) == "N/A"
    assert format_distance(800) == "0.80 km"
    assert format_distance(None) == "N/A"
    assert format_duration(138) == "2:18"
    assert format_duration(3725) == "1:02:05"
    assert format_timer(65.37) == "1:05.3"
