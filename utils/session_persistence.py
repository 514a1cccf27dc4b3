"""Sauvegarde de la séance en cours pour la reprise après un crash."""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

from config.settings import RECOVERY_DIR
from models.live_session import LiveSession, CompletedRep, TimerState
from models.workout_type import WorkoutType


logger = logging.getLogger(__name__)


def _isoformat(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def _parse_datetime(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    parsed = datetime.fromisoformat(value)
    # Toutes les heures sont locales et naïves
    if parsed.tzinfo is not None:
        raise ValueError(f"Horodatage avec fuseau non supporté : {value}")
    return parsed


def session_to_dict(session: LiveSession) -> dict:
    """
    Convertit la séance en cours en dict sérialisable.

    Args:
        session: Séance à sauvegarder

    Returns:
        Dict prêt pour json.dumps
    """
    completed_reps = []
    for rep in session.completed_reps:
        completed_reps.append({
            'rep_number': rep.rep_number,
            'distance': rep.distance,
            'duration': rep.duration,
            'rest_start_time': _isoformat(rep.rest_start_time)
        })

    return {
        'workout_type': session.workout_type.value,
        'workout_title': session.workout_title,
        'completed_reps': completed_reps,
        'state': session.state.value,
        'workout_start_time': _isoformat(session.workout_start_time),
        'current_rep_start_time': _isoformat(session.current_rep_start_time),
        'current_rest_start_time': _isoformat(session.current_rest_start_time),
        'total_paused_duration': session.total_paused_duration,
        'paused_time': _isoformat(session.paused_time),
        'completed_at': _isoformat(session.completed_at)
    }


def session_from_dict(data: dict) -> LiveSession:
    """
    Reconstruit la séance en cours depuis un dict.

    Raises:
        KeyError, ValueError, TypeError si les données sont invalides
    """
    completed_reps = []
    for rep_dict in data.get('completed_reps', []):
        completed_reps.append(CompletedRep(
            rep_number=rep_dict['rep_number'],
            distance=rep_dict['distance'],
            duration=rep_dict['duration'],
            rest_start_time=_parse_datetime(rep_dict.get('rest_start_time'))
        ))

    return LiveSession(
        state=TimerState(data.get('state', 'paused')),
        workout_type=WorkoutType(data['workout_type']),
        workout_title=data.get('workout_title') or "",
        completed_reps=completed_reps,
        workout_start_time=_parse_datetime(data.get('workout_start_time')),
        current_rep_start_time=_parse_datetime(data.get('current_rep_start_time')),
        current_rest_start_time=_parse_datetime(data.get('current_rest_start_time')),
        total_paused_duration=float(data.get('total_paused_duration', 0.0)),
        paused_time=_parse_datetime(data.get('paused_time')),
        completed_at=_parse_datetime(data.get('completed_at'))
    )


def encode_session(session: LiveSession) -> str:
    """Sérialise la séance en cours en JSON"""
    return json.dumps(session_to_dict(session), ensure_ascii=False)


def decode_session(payload: str) -> LiveSession:
    """Désérialise une séance en cours depuis du JSON"""
    data = json.loads(payload)
    if not isinstance(data, dict):
        raise ValueError("Séance sauvegardée invalide : objet JSON attendu")
    return session_from_dict(data)


class JsonBlobStore:
    """Stockage clé → (contenu, horodatage) dans un fichier JSON par clé"""

    def __init__(self, directory: Optional[Path] = None):
        self.directory = Path(directory) if directory else RECOVERY_DIR

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def save_blob(self, key: str, payload: str, timestamp: datetime) -> None:
        path = self._path(key)
        path.parent.mkdir(parents=True, exist_ok=True)

        # Écriture atomique : fichier temporaire puis remplacement
        tmp_path = path.with_suffix('.tmp')
        with open(tmp_path, 'w', encoding='utf-8') as f:
            json.dump({'saved_at': timestamp.isoformat(), 'payload': payload}, f, ensure_ascii=False)
        tmp_path.replace(path)

    def load_blob(self, key: str) -> Optional[tuple[str, Optional[datetime]]]:
        """
        Charge un contenu sauvegardé.

        Returns:
            (contenu, horodatage) ou None si absent ou illisible
        """
        path = self._path(key)
        if not path.exists():
            return None

        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            return data['payload'], _parse_datetime(data.get('saved_at'))
        except (OSError, ValueError, KeyError, TypeError) as e:
            logger.warning("Sauvegarde illisible %s : %s", path, e)
            return None

    def clear_blob(self, key: str) -> None:
        self._path(key).unlink(missing_ok=True)


class MemoryBlobStore:
    """Stockage en mémoire (tests, interface sans disque)"""

    def __init__(self):
        self.blobs: dict[str, tuple[str, datetime]] = {}

    def save_blob(self, key: str, payload: str, timestamp: datetime) -> None:
        self.blobs[key] = (payload, timestamp)

    def load_blob(self, key: str) -> Optional[tuple[str, Optional[datetime]]]:
        return self.blobs.get(key)

    def clear_blob(self, key: str) -> None:
        self.blobs.pop(key, None)
