"""
Models package for the track workout logger
"""
from .workout_type import WorkoutType, WORKOUT_TYPE_DESCRIPTIONS, display_name, describe, default_title
from .workout import Workout, Repetition
from .live_session import LiveSession, CompletedRep, TimerState, TimerSnapshot
from .stats import TimePeriod, WeeklyDistance, PaceDataPoint, FrequencyData, PersonalRecord

__all__ = [
    # Workout type
    'WorkoutType',
    'WORKOUT_TYPE_DESCRIPTIONS',
    'display_name',
    'describe',
    'default_title',

    # Workout
    'Workout',
    'Repetition',

    # Live session
    'LiveSession',
    'CompletedRep',
    'TimerState',
    'TimerSnapshot',

    # Stats
    'TimePeriod',
    'WeeklyDistance',
    'PaceDataPoint',
    'FrequencyData',
    'PersonalRecord',
]
