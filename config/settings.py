"""
Configuration settings for the track workout logger
"""
import logging
import os
from dotenv import load_dotenv
from pathlib import Path

# Load environment variables
load_dotenv()

# Base paths
BASE_DIR = Path(__file__).resolve().parent.parent
data_dir = os.getenv('TRACKWORKOUT_DATA_DIR', 'data')
DATA_DIR = BASE_DIR / data_dir if not os.path.isabs(data_dir) else Path(data_dir)
WORKOUTS_DIR = DATA_DIR / "workouts"
RECOVERY_DIR = DATA_DIR / "recovery"

# Create directories if they don't exist
for directory in [DATA_DIR, WORKOUTS_DIR, RECOVERY_DIR]:
    directory.mkdir(parents=True, exist_ok=True)

# Application Settings
APP_NAME = "Track Workout"
APP_VERSION = "1.0.0"

# Séance en cours (reprise après crash)
IN_PROGRESS_WORKOUT_KEY = "in_progress_workout"
RECOVERY_WINDOW_HOURS = float(os.getenv('RECOVERY_WINDOW_HOURS', '24'))

# Chronomètre : résolution du tick en secondes
TIMER_TICK_SECONDS = float(os.getenv('TIMER_TICK_SECONDS', '0.1'))

# Logging
LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# Streamlit config
STREAMLIT_CONFIG = {
    'page_title': APP_NAME,
    'page_icon': '🏃',
    'layout': 'wide',
    'initial_sidebar_state': 'expanded'
}


def configure_logging(level: str = None) -> None:
    """Configure le logging racine à partir de LOG_LEVEL"""
    level_name = (level or LOG_LEVEL).upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format=LOG_FORMAT,
    )
