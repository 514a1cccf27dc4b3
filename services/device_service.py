"""
Service appareil
Mise en veille de l'écran et retour haptique pendant une séance chronométrée
"""
import logging


logger = logging.getLogger(__name__)


class DeviceService:
    """
    Services de l'appareil (sans valeur de retour)

    L'implémentation par défaut se contente de journaliser les appels ;
    une interface mobile la remplace par les appels natifs.
    """

    def __init__(self):
        self.idle_sleep_prevented = False

    def prevent_idle_sleep(self, enable: bool) -> None:
        """Empêche (ou réautorise) la mise en veille de l'écran"""
        self.idle_sleep_prevented = enable
        logger.debug("Mise en veille %s", "bloquée" if enable else "autorisée")

    def haptic_pulse(self) -> None:
        """Vibration courte (fin de tour)"""
        logger.debug("Retour haptique")
