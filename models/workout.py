"""
Modèle de données pour une séance terminée et ses répétitions
"""
from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator, model_validator
from datetime import datetime
from typing import Optional
from uuid import uuid4

from .workout_type import WorkoutType
from utils.pace_calculator import calculate_pace


class Repetition(BaseModel):
    """Une répétition d'une séance (immuable une fois enregistrée)"""
    model_config = ConfigDict(frozen=True)

    rep_number: int = Field(..., ge=1, description="Numéro de la répétition (commence à 1)")
    distance: float = Field(..., ge=0, description="Distance en mètres")
    duration: float = Field(..., ge=0, description="Durée en secondes")
    rest_time: float = Field(0.0, ge=0, description="Récupération après la répétition (s)")

    @computed_field
    @property
    def pace(self) -> float:
        """Allure en secondes par km (0 si distance nulle)"""
        return calculate_pace(self.distance, self.duration)


class Workout(BaseModel):
    """
    Séance terminée, telle que stockée

    Les totaux sont recalculés à chaque affectation d'un champ. Ajouter une
    répétition passe par `add_repetition` : un `repetitions.append` direct
    n'est pas revalidé.
    """
    model_config = ConfigDict(validate_assignment=True)

    id: str = Field(default_factory=lambda: str(uuid4()), description="ID unique de la séance")
    date: datetime
    workout_type: WorkoutType
    title: str = Field(..., min_length=1, description="Titre de la séance")
    notes: Optional[str] = Field(None, description="Notes libres")

    repetitions: list[Repetition] = Field(default_factory=list)

    # Totaux dérivés des répétitions (toujours recalculés)
    total_distance: Optional[float] = Field(None, description="Distance totale en mètres")
    total_duration: float = Field(0.0, description="Durée totale en secondes (récup incluse)")
    average_pace: Optional[float] = Field(None, description="Allure moyenne (s/km)")

    # GPS
    has_gps_data: bool = False

    # Modèle de séance
    is_from_template: bool = False
    template_id: Optional[str] = None

    # Chronomètre en direct
    is_live_tracked: bool = False
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None

    # Métadonnées
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    @field_validator('title')
    @classmethod
    def _strip_title(cls, title: str) -> str:
        title = title.strip()
        if not title:
            raise ValueError("Le titre ne peut pas être vide")
        return title

    @field_validator('repetitions')
    @classmethod
    def _order_repetitions(cls, repetitions: list[Repetition]) -> list[Repetition]:
        """Trie les répétitions et vérifie la numérotation 1..n"""
        ordered = sorted(repetitions, key=lambda rep: rep.rep_number)
        numbers = [rep.rep_number for rep in ordered]
        if numbers != list(range(1, len(numbers) + 1)):
            raise ValueError(f"Numéros de répétition non contigus: {numbers}")
        return ordered

    @model_validator(mode='after')
    def _sync_totals(self):
        self._compute_totals()
        return self

    def _compute_totals(self):
        # Écriture directe dans __dict__ : pas de revalidation en boucle
        total_distance = sum(rep.distance for rep in self.repetitions)
        total_duration = sum(rep.duration + rep.rest_time for rep in self.repetitions)
        self.__dict__['total_distance'] = total_distance
        self.__dict__['total_duration'] = total_duration
        self.__dict__['average_pace'] = (
            total_duration / (total_distance / 1000) if total_distance > 0 else None
        )

    def update_calculations(self):
        """Recalcule tous les champs dérivés"""
        self._compute_totals()
        self.updated_at = datetime.now()

    def add_repetition(self, distance: float, duration: float, rest_time: float = 0.0) -> Repetition:
        """Ajoute une répétition avec le numéro suivant"""
        rep = Repetition(
            rep_number=len(self.repetitions) + 1,
            distance=distance,
            duration=duration,
            rest_time=rest_time
        )
        self.repetitions.append(rep)
        self.update_calculations()
        return rep

    def set_repetitions(self, repetitions: list[Repetition]):
        """Remplace la liste des répétitions (triée et revalidée)"""
        self.repetitions = repetitions
        self.update_calculations()

    @classmethod
    def from_manual_entry(cls, date: datetime, workout_type: WorkoutType, title: str,
                          reps: list[tuple[float, float]],
                          notes: Optional[str] = None) -> "Workout":
        """
        Construit une séance saisie à la main

        Args:
            date: Date de la séance
            workout_type: Catégorie
            title: Titre
            reps: Liste de (distance m, durée s), dans l'ordre
            notes: Notes (une chaîne vide devient None)

        Returns:
            Workout avec les totaux calculés
        """
        repetitions = [
            Repetition(rep_number=i + 1, distance=distance, duration=duration)
            for i, (distance, duration) in enumerate(reps)
        ]
        return cls(
            date=date,
            workout_type=workout_type,
            title=title,
            notes=notes.strip() if notes and notes.strip() else None,
            repetitions=repetitions
        )

    def to_dict(self) -> dict:
        """Sérialise la séance en dict JSON"""
        return self.model_dump(mode='json')

    @classmethod
    def from_dict(cls, data: dict) -> "Workout":
        """Reconstruit une séance depuis un dict JSON"""
        return cls.model_validate(data)
