"""
Chronomètre de séance en direct

Machine à états d'une séance en cours :

    idle → running ⇄ paused → completed → idle

Chaque commande qui modifie l'état sauvegarde la séance pour permettre
une reprise après un crash. Au démarrage, une séance sauvegardée depuis
moins de 24h est restaurée en pause.
"""
import logging
import threading
from datetime import datetime, timedelta
from typing import Callable, Optional

from config.settings import IN_PROGRESS_WORKOUT_KEY, RECOVERY_WINDOW_HOURS, TIMER_TICK_SECONDS
from models.live_session import LiveSession, CompletedRep, TimerState, TimerSnapshot
from models.workout import Workout
from models.workout_type import WorkoutType, default_title
from services.device_service import DeviceService
from utils.session_persistence import JsonBlobStore, encode_session, decode_session


logger = logging.getLogger(__name__)

Listener = Callable[[TimerSnapshot], None]


class Ticker:
    """Appelle une fonction à intervalle régulier dans un thread démon"""

    def __init__(self, interval: float, callback: Callable[[], None]):
        self.interval = interval
        self.callback = callback
        self._stop_event: Optional[threading.Event] = None
        self._thread: Optional[threading.Thread] = None

    @property
    def is_running(self) -> bool:
        return self._stop_event is not None and not self._stop_event.is_set()

    def start(self):
        if self.is_running:
            return
        stop_event = threading.Event()
        self._stop_event = stop_event
        self._thread = threading.Thread(
            target=self._run, args=(stop_event,), name="workout-timer-tick", daemon=True
        )
        self._thread.start()

    def cancel(self, timeout: float = 1.0):
        """Arrête le thread et attend sa fin (sauf depuis le thread lui-même)"""
        thread = self._thread
        if self._stop_event is not None:
            self._stop_event.set()
        self._stop_event = None
        self._thread = None
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)

    def _run(self, stop_event: threading.Event):
        while not stop_event.wait(self.interval):
            self.callback()


class WorkoutTimer:
    """Chronomètre d'une séance en cours (une seule à la fois)"""

    def __init__(self, blob_store=None, device: Optional[DeviceService] = None,
                 clock: Optional[Callable[[], datetime]] = None,
                 auto_tick: bool = True,
                 tick_seconds: float = TIMER_TICK_SECONDS,
                 recovery_window_hours: float = RECOVERY_WINDOW_HOURS,
                 storage_key: str = IN_PROGRESS_WORKOUT_KEY,
                 restore: bool = True):
        """
        Initialise le chronomètre

        Args:
            blob_store: Stockage de la séance en cours (défaut: fichier JSON)
            device: Service appareil (veille écran, haptique)
            clock: Horloge injectable (défaut: datetime.now)
            auto_tick: Lance le thread de rafraîchissement pendant la course
            tick_seconds: Résolution du rafraîchissement
            recovery_window_hours: Ancienneté max d'une séance à restaurer
            storage_key: Clé de sauvegarde de la séance en cours
            restore: Tente la reprise d'une séance sauvegardée
        """
        self.blob_store = blob_store if blob_store is not None else JsonBlobStore()
        self.device = device or DeviceService()
        self.clock = clock or datetime.now
        self.recovery_window = timedelta(hours=recovery_window_hours)
        self.storage_key = storage_key

        self.session = LiveSession()

        # Affichages en direct (figés hors course)
        self.total_elapsed_time = 0.0
        self.current_rep_elapsed_time = 0.0
        self.current_rest_elapsed_time = 0.0

        self._lock = threading.RLock()
        self._listeners: list[Listener] = []
        self._ticker = Ticker(tick_seconds, self._background_tick) if auto_tick else None
        self._restore_attempted = False

        if restore:
            self.restore()

    # ===== LECTURE =====

    @property
    def state(self) -> TimerState:
        return self.session.state

    @property
    def completed_reps(self) -> list[CompletedRep]:
        return list(self.session.completed_reps)

    @property
    def is_ticking(self) -> bool:
        return self._ticker is not None and self._ticker.is_running

    def snapshot(self) -> TimerSnapshot:
        """Retourne une vue figée de l'état courant"""
        with self._lock:
            session = self.session
            return TimerSnapshot(
                state=session.state,
                workout_type=session.workout_type,
                workout_title=session.workout_title,
                completed_reps=tuple(rep.model_copy() for rep in session.completed_reps),
                total_elapsed_time=self.total_elapsed_time,
                current_rep_elapsed_time=self.current_rep_elapsed_time,
                current_rest_elapsed_time=self.current_rest_elapsed_time,
                workout_start_time=session.workout_start_time,
                paused_time=session.paused_time
            )

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Abonne une fonction aux changements d'état et aux ticks

        Returns:
            Fonction de désabonnement
        """
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe():
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def total_duration(self) -> float:
        """Durée totale de la séance hors pauses (en secondes)"""
        with self._lock:
            session = self.session
            if session.state == TimerState.COMPLETED:
                return self.total_elapsed_time
            if session.workout_start_time is None:
                return 0.0

            now = self.clock()
            elapsed = _seconds(now - session.workout_start_time) - session.total_paused_duration
            if session.paused_time is not None:
                elapsed -= _seconds(now - session.paused_time)
            return elapsed

    # ===== COMMANDES =====

    def start(self, workout_type: WorkoutType, title: str = "") -> bool:
        """
        Démarre une nouvelle séance

        Returns:
            False si une séance existe déjà (terminer ou abandonner d'abord)
        """
        with self._lock:
            if self.session.state != TimerState.IDLE:
                logger.debug("start ignoré : séance déjà en cours (%s)", self.session.state.value)
                return False

            now = self.clock()
            self.session = LiveSession(
                state=TimerState.RUNNING,
                workout_type=workout_type,
                workout_title=(title or "").strip() or default_title(workout_type),
                workout_start_time=now,
                current_rep_start_time=now
            )
            self._reset_readouts()

            self._start_ticker()
            self._device_call(self.device.prevent_idle_sleep, True)
            self._save_state(now)
            logger.info("Séance démarrée : %s (%s)", self.session.workout_title, workout_type.value)
            self._notify()
            return True

    def pause(self) -> bool:
        """Met la séance en pause (sans effet hors course)"""
        with self._lock:
            if self.session.state != TimerState.RUNNING:
                return False

            now = self.clock()
            self._refresh_readouts(now)
            self.session.state = TimerState.PAUSED
            self.session.paused_time = now
            self._stop_ticker()
            self._save_state(now)
            logger.debug("Séance en pause")
            self._notify()
            return True

    def resume(self) -> bool:
        """Reprend une séance en pause (sans effet sinon)"""
        with self._lock:
            session = self.session
            if session.state != TimerState.PAUSED or session.paused_time is None:
                return False

            now = self.clock()
            session.total_paused_duration += _seconds(now - session.paused_time)
            session.paused_time = None
            session.state = TimerState.RUNNING
            self._refresh_readouts(now)
            self._start_ticker()
            self._save_state(now)
            logger.debug("Séance reprise")
            self._notify()
            return True

    def complete_lap(self) -> float:
        """
        Termine le tour en cours

        N'ajoute pas de répétition : la durée retournée est associée à la
        distance saisie par l'utilisateur via record_rep().

        Returns:
            Durée du tour en secondes (0 sans répétition active)
        """
        with self._lock:
            session = self.session
            if session.state not in (TimerState.RUNNING, TimerState.PAUSED):
                return 0.0
            if session.current_rep_start_time is None:
                return 0.0

            now = self.clock()
            duration = _seconds(now - session.current_rep_start_time)
            if session.paused_time is not None:
                duration -= _seconds(now - session.paused_time)

            self._device_call(self.device.haptic_pulse)
            return max(duration, 0.0)

    def record_rep(self, distance: float, duration: float) -> Optional[CompletedRep]:
        """
        Enregistre une répétition terminée (distance 0 = tour passé)

        Args:
            distance: Distance en mètres
            duration: Durée en secondes (retournée par complete_lap)

        Returns:
            La répétition enregistrée, ou None hors séance active

        Raises:
            ValueError si la distance ou la durée est négative
        """
        with self._lock:
            session = self.session
            if session.state not in (TimerState.RUNNING, TimerState.PAUSED):
                return None

            now = self.clock()
            rep = CompletedRep(
                rep_number=len(session.completed_reps) + 1,
                distance=distance,
                duration=duration,
                rest_start_time=now
            )
            session.completed_reps.append(rep)

            # Le tour suivant et la récupération démarrent maintenant
            session.current_rep_start_time = now
            session.current_rest_start_time = now
            self.current_rep_elapsed_time = 0.0
            self.current_rest_elapsed_time = 0.0
            if session.state == TimerState.RUNNING:
                self._refresh_readouts(now)

            self._save_state(now)
            logger.debug("Répétition %d : %.0f m en %.1f s", rep.rep_number, distance, duration)
            self._notify()
            return rep

    def stop(self) -> bool:
        """Termine la séance et la fige pour le récapitulatif"""
        with self._lock:
            session = self.session
            if session.state not in (TimerState.RUNNING, TimerState.PAUSED):
                return False

            now = self.clock()
            if session.paused_time is not None:
                # Affichages déjà figés au début de la pause
                session.total_paused_duration += _seconds(now - session.paused_time)
                session.paused_time = None
            else:
                self._refresh_readouts(now)

            session.state = TimerState.COMPLETED
            session.completed_at = now
            self._stop_ticker()
            self._device_call(self.device.prevent_idle_sleep, False)
            self._save_state(now)
            logger.info("Séance terminée : %d répétition(s)", len(session.completed_reps))
            self._notify()
            return True

    def discard(self):
        """Abandonne la séance et efface la sauvegarde"""
        with self._lock:
            self._reset()
            self._save_state(self.clock())
            logger.info("Séance abandonnée")
            self._notify()

    def to_workout(self, notes: Optional[str] = None) -> Optional[Workout]:
        """Convertit la séance terminée en Workout (None si non terminée)"""
        with self._lock:
            if self.session.state != TimerState.COMPLETED:
                return None
            return self.session.to_workout(notes=notes, completed_at=self.session.completed_at)

    def save_workout(self, store, notes: Optional[str] = None) -> Optional[Workout]:
        """
        Enregistre la séance terminée et remet le chronomètre à zéro

        Args:
            store: Stockage des séances (méthode insert)
            notes: Notes du récapitulatif

        Returns:
            La séance enregistrée, ou None si aucune séance terminée
        """
        with self._lock:
            workout = self.to_workout(notes)
            if workout is None:
                return None

            store.insert(workout)
            self._reset()
            self._save_state(self.clock())
            self._notify()
            return workout

    def tick(self):
        """Rafraîchit les affichages (uniquement pendant la course)"""
        with self._lock:
            if self.session.state != TimerState.RUNNING:
                return
            self._refresh_readouts(self.clock())
            self._notify()

    def _background_tick(self):
        # Un tick est sauté si une commande tient le verrou
        if not self._lock.acquire(blocking=False):
            return
        try:
            self.tick()
        finally:
            self._lock.release()

    # ===== CYCLE DE VIE DE L'APPLICATION =====

    def on_suspend(self):
        """Passage en arrière-plan : pause forcée avant toute perte du timer"""
        with self._lock:
            if self.session.state == TimerState.RUNNING:
                self.pause()
            else:
                self._save_state(self.clock())

    def on_resume(self):
        """Retour au premier plan : la séance reste en pause"""
        logger.debug("Retour au premier plan (état %s)", self.session.state.value)

    # ===== REPRISE APRÈS CRASH =====

    def restore(self) -> bool:
        """
        Restaure une séance sauvegardée (une seule tentative)

        La séance restaurée est toujours en pause : l'utilisateur doit
        reprendre manuellement.

        Returns:
            True si une séance a été restaurée
        """
        with self._lock:
            if self._restore_attempted:
                return False
            self._restore_attempted = True

            now = self.clock()
            try:
                saved = self.blob_store.load_blob(self.storage_key)
            except Exception as e:
                logger.warning("Lecture de la séance sauvegardée impossible : %s", e)
                saved = None

            if saved is None:
                self._clear_saved_state()
                return False

            payload, saved_at = saved
            if (saved_at is None or saved_at.tzinfo is not None
                    or now - saved_at >= self.recovery_window):
                logger.info("Séance sauvegardée trop ancienne ou sans date, ignorée")
                self._clear_saved_state()
                return False

            try:
                session = decode_session(payload)
            except (ValueError, KeyError, TypeError) as e:
                logger.warning("Séance sauvegardée illisible, ignorée : %s", e)
                self._clear_saved_state()
                return False

            if session.state == TimerState.IDLE or session.workout_start_time is None:
                self._clear_saved_state()
                return False

            # Le temps écoulé depuis la dernière sauvegarde compte comme pause
            if session.paused_time is None:
                session.paused_time = session.completed_at or saved_at
            session.completed_at = None
            session.state = TimerState.PAUSED

            self.session = session
            self._reset_readouts()
            self._refresh_readouts(session.paused_time)
            logger.info("Séance restaurée en pause : %s", session.workout_title)
            self._notify()
            return True

    # ===== INTERNE =====

    def _reset(self):
        self.session = LiveSession()
        self._reset_readouts()
        self._stop_ticker()
        self._device_call(self.device.prevent_idle_sleep, False)

    def _reset_readouts(self):
        self.total_elapsed_time = 0.0
        self.current_rep_elapsed_time = 0.0
        self.current_rest_elapsed_time = 0.0

    def _refresh_readouts(self, now: datetime):
        session = self.session
        if session.workout_start_time is not None:
            self.total_elapsed_time = (
                _seconds(now - session.workout_start_time) - session.total_paused_duration
            )
        if session.current_rep_start_time is not None:
            self.current_rep_elapsed_time = max(_seconds(now - session.current_rep_start_time), 0.0)
        if session.current_rest_start_time is not None:
            self.current_rest_elapsed_time = max(_seconds(now - session.current_rest_start_time), 0.0)

    def _start_ticker(self):
        if self._ticker is not None:
            self._ticker.start()

    def _stop_ticker(self):
        if self._ticker is not None:
            self._ticker.cancel()

    def _save_state(self, now: datetime):
        """Sauvegarde la séance (ou l'efface si idle) ; les erreurs n'interrompent rien"""
        if self.session.state == TimerState.IDLE:
            self._clear_saved_state()
            return
        try:
            self.blob_store.save_blob(self.storage_key, encode_session(self.session), now)
        except Exception as e:
            logger.warning("Sauvegarde de la séance en cours impossible : %s", e)

    def _clear_saved_state(self):
        try:
            self.blob_store.clear_blob(self.storage_key)
        except Exception as e:
            logger.warning("Suppression de la séance sauvegardée impossible : %s", e)

    def _device_call(self, func, *args):
        try:
            func(*args)
        except Exception as e:
            logger.warning("Service appareil en échec (%s) : %s", getattr(func, '__name__', func), e)

    def _notify(self):
        snapshot = self.snapshot()
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                logger.warning("Abonné du chronomètre en échec", exc_info=True)


def _seconds(delta: timedelta) -> float:
    return delta.total_seconds()
