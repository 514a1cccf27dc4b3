"""
Types de séances (catégories) et leurs métadonnées d'affichage
"""
from enum import Enum


class WorkoutType(str, Enum):
    """Catégorie d'une séance de course"""
    SPRINT = "Sprint"
    MIDDLE_DISTANCE = "Middle Distance"
    LONG_DISTANCE = "Long Distance"
    INTERVALS = "Intervals"
    TEMPO = "Tempo"
    RECOVERY = "Recovery"


# Descriptions affichées dans l'interface (hors du modèle de données)
WORKOUT_TYPE_DESCRIPTIONS = {
    WorkoutType.SPRINT: "100m, 200m, 400m runs",
    WorkoutType.MIDDLE_DISTANCE: "800m, 1500m runs",
    WorkoutType.LONG_DISTANCE: "5K, 10K, and longer runs",
    WorkoutType.INTERVALS: "Interval training sessions",
    WorkoutType.TEMPO: "Sustained tempo runs",
    WorkoutType.RECOVERY: "Easy recovery runs",
}


def display_name(workout_type: WorkoutType) -> str:
    """Nom affiché d'une catégorie"""
    return workout_type.value


def describe(workout_type: WorkoutType) -> str:
    """
    Retourne la description d'une catégorie

    Args:
        workout_type: Catégorie de séance

    Returns:
        Description courte (ex: "800m, 1500m runs")
    """
    return WORKOUT_TYPE_DESCRIPTIONS.get(workout_type, "")


def default_title(workout_type: WorkoutType) -> str:
    """Titre par défaut d'une séance chronométrée sans titre"""
    return f"{display_name(workout_type)} Workout"
