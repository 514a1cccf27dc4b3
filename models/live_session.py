"""
Modèle de données pour la séance en cours (chronomètre en direct)
"""
from pydantic import BaseModel, Field
from dataclasses import dataclass
from enum import Enum
from datetime import datetime
from typing import Optional

from .workout import Repetition, Workout
from .workout_type import WorkoutType, default_title


class TimerState(str, Enum):
    """Cycle de vie du chronomètre"""
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    COMPLETED = "completed"


class CompletedRep(BaseModel):
    """Répétition terminée pendant la séance en cours"""
    rep_number: int = Field(..., ge=1)
    distance: float = Field(..., ge=0, description="Distance en mètres")
    duration: float = Field(..., ge=0, description="Durée en secondes")
    rest_start_time: Optional[datetime] = Field(None, description="Début de la récupération")


class LiveSession(BaseModel):
    """État complet d'une séance chronométrée"""
    state: TimerState = TimerState.IDLE
    workout_type: WorkoutType = WorkoutType.INTERVALS
    workout_title: str = ""
    completed_reps: list[CompletedRep] = Field(default_factory=list)

    workout_start_time: Optional[datetime] = None
    current_rep_start_time: Optional[datetime] = None
    current_rest_start_time: Optional[datetime] = None
    total_paused_duration: float = 0.0
    paused_time: Optional[datetime] = Field(None, description="Début de la pause en cours")
    completed_at: Optional[datetime] = None

    @property
    def total_distance(self) -> float:
        return sum(rep.distance for rep in self.completed_reps)

    @property
    def total_duration(self) -> float:
        return sum(rep.duration for rep in self.completed_reps)

    @property
    def average_pace(self) -> Optional[float]:
        """Allure moyenne des répétitions terminées (None si distance nulle)"""
        if self.total_distance <= 0:
            return None
        return self.total_duration / (self.total_distance / 1000)

    def to_workout(self, notes: Optional[str] = None,
                   completed_at: Optional[datetime] = None) -> Workout:
        """
        Convertit la séance en cours en séance terminée

        Args:
            notes: Notes saisies dans le récapitulatif
            completed_at: Fin de séance (défaut: completed_at de la séance, sinon maintenant)

        Returns:
            Workout marqué comme chronométré en direct
        """
        repetitions = [
            Repetition(rep_number=rep.rep_number, distance=rep.distance, duration=rep.duration)
            for rep in self.completed_reps
        ]
        start = self.workout_start_time or datetime.now()
        return Workout(
            date=start,
            workout_type=self.workout_type,
            title=self.workout_title.strip() or default_title(self.workout_type),
            notes=notes.strip() if notes and notes.strip() else None,
            repetitions=repetitions,
            is_live_tracked=True,
            started_at=start,
            completed_at=completed_at or self.completed_at or datetime.now()
        )


@dataclass(frozen=True)
class TimerSnapshot:
    """Vue figée du chronomètre transmise à l'interface"""
    state: TimerState
    workout_type: WorkoutType
    workout_title: str
    completed_reps: tuple
    total_elapsed_time: float
    current_rep_elapsed_time: float
    current_rest_elapsed_time: float
    workout_start_time: Optional[datetime] = None
    paused_time: Optional[datetime] = None

    @property
    def is_active(self) -> bool:
        return self.state in (TimerState.RUNNING, TimerState.PAUSED)

    @property
    def rep_count(self) -> int:
        return len(self.completed_reps)
