"""
Statistiques de progression calculées à partir des séances terminées

Fonctions pures : aucune ne modifie les séances reçues.
"""
from datetime import datetime, timedelta
from typing import Iterable, Optional

from models.stats import TimePeriod, WeeklyDistance, PaceDataPoint, FrequencyData, PersonalRecord
from models.workout import Workout
from models.workout_type import WorkoutType


def week_start(moment: datetime) -> datetime:
    """Début de la semaine calendaire (lundi 00:00)"""
    day_start = moment.replace(hour=0, minute=0, second=0, microsecond=0)
    return day_start - timedelta(days=day_start.weekday())


def month_start(moment: datetime) -> datetime:
    """Début du mois calendaire (1er à 00:00)"""
    return moment.replace(day=1, hour=0, minute=0, second=0, microsecond=0)


def weekly_distance_totals(workouts: Iterable[Workout]) -> list[WeeklyDistance]:
    """
    Distance totale par semaine calendaire

    Args:
        workouts: Séances terminées

    Returns:
        Totaux triés par début de semaine croissant
    """
    totals: dict[datetime, float] = {}
    for workout in workouts:
        start = week_start(workout.date)
        totals[start] = totals.get(start, 0.0) + (workout.total_distance or 0.0)

    return [
        WeeklyDistance(week_start_date=start, total_distance=total)
        for start, total in sorted(totals.items())
    ]


def pace_progression(workouts: Iterable[Workout]) -> list[PaceDataPoint]:
    """Allure moyenne de chaque séance (allure définie et positive), par date croissante"""
    points = [
        PaceDataPoint(
            date=workout.date,
            average_pace=workout.average_pace,
            workout_type=workout.workout_type
        )
        for workout in workouts
        if workout.average_pace is not None and workout.average_pace > 0
    ]
    return sorted(points, key=lambda point: point.date)


def workout_frequency(workouts: Iterable[Workout],
                      group_by: TimePeriod = TimePeriod.WEEK) -> list[FrequencyData]:
    """
    Nombre de séances par semaine ou par mois

    Args:
        workouts: Séances terminées
        group_by: TimePeriod.WEEK regroupe par semaine, sinon par mois

    Returns:
        Comptages triés par début de période croissant
    """
    period_start = week_start if group_by == TimePeriod.WEEK else month_start

    counts: dict[datetime, int] = {}
    for workout in workouts:
        start = period_start(workout.date)
        counts[start] = counts.get(start, 0) + 1

    return [
        FrequencyData(period_start=start, workout_count=count)
        for start, count in sorted(counts.items())
    ]


def personal_records(workouts: Iterable[Workout]) -> list[PersonalRecord]:
    """
    Meilleure allure (la plus basse) par catégorie

    Seules les séances avec distance et allure positives comptent.
    En cas d'égalité, la première séance rencontrée est conservée.

    Returns:
        Un record par catégorie, trié par nom de catégorie
    """
    records: dict[WorkoutType, PersonalRecord] = {}
    for workout in workouts:
        pace = workout.average_pace
        distance = workout.total_distance
        if not pace or pace <= 0 or not distance or distance <= 0:
            continue

        existing = records.get(workout.workout_type)
        if existing is None or pace < existing.best_pace:
            records[workout.workout_type] = PersonalRecord(
                workout_type=workout.workout_type,
                distance=distance,
                best_pace=pace,
                achieved_date=workout.date
            )

    return sorted(records.values(), key=lambda record: record.workout_type.value)


def filter_by_period(workouts: Iterable[Workout], period: TimePeriod,
                     now: Optional[datetime] = None) -> list[Workout]:
    """Séances des `period.days_back` derniers jours"""
    cutoff = (now or datetime.now()) - timedelta(days=period.days_back)
    return [workout for workout in workouts if workout.date >= cutoff]
