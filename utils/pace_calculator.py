"""
Calculs et formatage d'allures, distances et durées
"""
from typing import Optional


def calculate_pace(distance_m: float, duration_s: float) -> float:
    """
    Calcule une allure en secondes par km

    Args:
        distance_m: Distance en mètres
        duration_s: Durée en secondes

    Returns:
        Allure en s/km (0 si la distance est nulle)
    """
    if distance_m <= 0:
        return 0.0
    return duration_s / (distance_m / 1000)


def seconds_to_pace(seconds: float) -> str:
    """
    Convertit des secondes en allure "M:SS"

    Args:
        seconds: Secondes par km

    Returns:
        Allure au format "4:30"
    """
    total = int(seconds)
    return f"{total // 60}:{total % 60:02d}"


def format_distance(meters: Optional[float]) -> str:
    """Distance en km avec 2 décimales (ex: "0.80 km")"""
    if meters is None:
        return "N/A"
    return f"{meters / 1000:.2f} km"


def format_duration(seconds: float) -> str:
    """Durée au format H:MM:SS, ou M:SS sous l'heure"""
    total = int(seconds)
    hours = total // 3600
    minutes = (total % 3600) // 60
    secs = total % 60
    if hours > 0:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"


def format_pace(seconds_per_km: Optional[float]) -> str:
    """Allure au format "M:SS/km" ("N/A" si absente)"""
    if seconds_per_km is None:
        return "N/A"
    return f"{seconds_to_pace(seconds_per_km)}/km"


def format_timer(seconds: float) -> str:
    """Affichage chronomètre M:SS.d (dixièmes)"""
    seconds = max(seconds, 0.0)
    total = int(seconds)
    tenths = int((seconds - total) * 10)
    return f"{total // 60}:{total % 60:02d}.{tenths}"
