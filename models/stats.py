"""
Modèles de sortie des statistiques (graphiques de progression)
"""
from pydantic import BaseModel, Field
from datetime import datetime
from enum import Enum

from .workout_type import WorkoutType


class TimePeriod(str, Enum):
    """Période de filtrage / regroupement"""
    WEEK = "Week"
    MONTH = "Month"
    THREE_MONTHS = "3 Months"
    YEAR = "Year"

    @property
    def days_back(self) -> int:
        return {
            TimePeriod.WEEK: 7,
            TimePeriod.MONTH: 30,
            TimePeriod.THREE_MONTHS: 90,
            TimePeriod.YEAR: 365,
        }[self]


class WeeklyDistance(BaseModel):
    """Distance totale d'une semaine calendaire"""
    week_start_date: datetime
    total_distance: float = Field(..., description="Distance en mètres")


class PaceDataPoint(BaseModel):
    """Point de la courbe d'allure"""
    date: datetime
    average_pace: float = Field(..., description="Allure moyenne (s/km)")
    workout_type: WorkoutType


class FrequencyData(BaseModel):
    """Nombre de séances sur une période"""
    period_start: datetime
    workout_count: int


class PersonalRecord(BaseModel):
    """Meilleure allure pour une catégorie"""
    workout_type: WorkoutType
    distance: float = Field(..., description="Distance de la séance record (m)")
    best_pace: float = Field(..., description="Allure record (s/km)")
    achieved_date: datetime
