from datetime import datetime

from models import Workout, WorkoutType


def make_workout(date, title="Run"):
    return Workout.from_manual_entry(date, WorkoutType.TEMPO, title, [(1000, 250)])


def test_query_all_sorted_by_date_desc(workout_store):
    older = make_workout(datetime(2026, 3, 1), "Older")
    newer = make_workout(datetime(2026, 3, 8), "Newer")
    workout_store.insert(older)
    workout_store.insert(newer)

    assert [w.title for w in workout_store.query_all()] == ["Newer", "Older"]


def test_insert_replaces_same_id(workout_store):
    workout = make_workout(datetime(2026, 3, 1))
    workout_store.insert(workout)
    workout.notes = "Updated"
    workout_store.insert(workout)

    stored = workout_store.query_all()
    assert len(stored) == 1
    assert stored[0].notes == "Updated"


def test_get_and_delete(workout_store):
    workout = make_workout(datetime(2026, 3, 1))
    workout_store.insert(workout)

    assert workout_store.get(workout.id) == workout
    workout_store.delete(workout)
    assert workout_store.get(workout.id) is None
    workout_store.delete(workout)
    assert workout_store.query_all() == []


def test_corrupt_document_is_skipped(workout_store):
    workout_store.insert(make_workout(datetime(2026, 3, 1)))
    (workout_store.directory / "broken.json").write_text("{not json", encoding='utf-8')

    assert len(workout_store.query_all()) == 1
