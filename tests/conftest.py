from datetime import datetime, timedelta
from itertools import count

import pytest

from gesture_session import GestureSession
from preset_store import PresetStore


class FakeClock:
    """Returns a strictly increasing time on every call."""

    def __init__(self, start=datetime(2024, 1, 1, 9, 0, 0), step=timedelta(seconds=1)):
        self.now = start
        self.step = step

    def __call__(self):
        current = self.now
        self.now += self.step
        return current


class FakeSpeaker:
    def __init__(self, fail_with=None):
        self.spoken = []
        self.fail_with = fail_with

    def speak(self, text):
        if self.fail_with is not None:
            raise self.fail_with
        self.spoken.append(text)

    def speak_if_new(self, text):
        if self.spoken and self.spoken[-1] == text:
            return False
        self.speak(text)
        return True


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store(clock):
    ids = count(1)
    return PresetStore(clock=clock, id_factory=lambda: f"p{next(ids)}")


@pytest.fixture
def speaker():
    return FakeSpeaker()


@pytest.fixture
def session(store, speaker):
    return GestureSession(store=store, speaker=speaker, save_delay=0, sleep=lambda seconds: None)
