"""Stockage des séances terminées (un document JSON par séance)."""

import json
import logging
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from config.settings import WORKOUTS_DIR
from models.workout import Workout


logger = logging.getLogger(__name__)


class JsonWorkoutStore:
    """Stockage des séances indexé par ID"""

    def __init__(self, directory: Optional[Path] = None):
        self.directory = Path(directory) if directory else WORKOUTS_DIR
        self.directory.mkdir(parents=True, exist_ok=True)

    def _path(self, workout_id: str) -> Path:
        return self.directory / f"{workout_id}.json"

    def insert(self, workout: Workout) -> None:
        """
        Enregistre une séance (remplace celle de même ID)

        Args:
            workout: Séance à enregistrer
        """
        with open(self._path(workout.id), 'w', encoding='utf-8') as f:
            json.dump(workout.to_dict(), f, indent=2, ensure_ascii=False)
        logger.info("Séance enregistrée : %s (%s)", workout.title, workout.id)

    def delete(self, workout: Workout) -> None:
        """Supprime une séance (sans effet si inconnue)"""
        self._path(workout.id).unlink(missing_ok=True)

    def get(self, workout_id: str) -> Optional[Workout]:
        path = self._path(workout_id)
        if not path.exists():
            return None
        return self._load(path)

    def _load(self, path: Path) -> Optional[Workout]:
        try:
            with open(path, 'r', encoding='utf-8') as f:
                return Workout.from_dict(json.load(f))
        except (OSError, ValueError, ValidationError) as e:
            logger.warning("Séance illisible ignorée %s : %s", path.name, e)
            return None

    def query_all(self) -> list[Workout]:
        """
        Charge toutes les séances

        Returns:
            Séances triées par date décroissante
        """
        workouts = []
        for path in self.directory.glob('*.json'):
            workout = self._load(path)
            if workout:
                workouts.append(workout)
        return sorted(workouts, key=lambda w: w.date, reverse=True)
