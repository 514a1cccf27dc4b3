"""Utilitaires communs pour l'interface"""

from models.live_session import TimerState

# Libellés des états du chronomètre
TIMER_STATE_LABELS = {
    TimerState.IDLE: "Prêt",
    TimerState.RUNNING: "En cours",
    TimerState.PAUSED: "En pause",
    TimerState.COMPLETED: "Terminée"
}

def get_state_label(state: TimerState) -> str:
    """
    Retourne le libellé d'un état du chronomètre

    Args:
        state: État du chronomètre

    Returns:
        Libellé en français
    """
    return TIMER_STATE_LABELS.get(state, state.value)
