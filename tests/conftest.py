import sys
from datetime import datetime, timedelta
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from core.workout_timer import WorkoutTimer
from services.device_service import DeviceService
from utils.session_persistence import MemoryBlobStore, JsonBlobStore
from utils.workout_store import JsonWorkoutStore


class FakeClock:
    """Horloge manuelle pour les tests"""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float):
        self.now += timedelta(seconds=seconds)


class RecordingDevice(DeviceService):
    def __init__(self):
        super().__init__()
        self.calls = []

    def prevent_idle_sleep(self, enable: bool) -> None:
        super().prevent_idle_sleep(enable)
        self.calls.append(('prevent_idle_sleep', enable))

    def haptic_pulse(self) -> None:
        self.calls.append(('haptic_pulse',))


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock(datetime(2026, 3, 10, 18, 0, 0))


@pytest.fixture()
def blob_store() -> MemoryBlobStore:
    return MemoryBlobStore()


@pytest.fixture()
def device() -> RecordingDevice:
    return RecordingDevice()


@pytest.fixture()
def make_timer(clock, blob_store, device):
    def _make(**kwargs) -> WorkoutTimer:
        kwargs.setdefault('blob_store', blob_store)
        kwargs.setdefault('device', device)
        kwargs.setdefault('clock', clock)
        kwargs.setdefault('auto_tick', False)
        return WorkoutTimer(**kwargs)

    return _make


@pytest.fixture()
def timer(make_timer) -> WorkoutTimer:
    return make_timer()


@pytest.fixture()
def workout_store(tmp_path) -> JsonWorkoutStore:
    return JsonWorkoutStore(tmp_path / "workouts")


@pytest.fixture()
def json_blob_store(tmp_path) -> JsonBlobStore:
    return JsonBlobStore(tmp_path / "recovery")
